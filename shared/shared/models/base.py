from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

# Wire format is camelCase; Python code keeps snake_case field names.
api_model_config = ConfigDict(
    alias_generator=to_camel,
    populate_by_name=True,
    from_attributes=True,
)


class ApiModel(BaseModel):
    model_config = api_model_config


class ApiRequest(BaseModel):
    """Request bodies: camelCase in, whitespace stripped, unknown keys ignored."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        str_strip_whitespace=True,
        extra="ignore",
    )


class SuccessResponse(ApiModel):
    success: bool = True
    message: str | None = None

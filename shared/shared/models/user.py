from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field

from shared.constants import Role


class CurrentUser(BaseModel):
    """Caller identity resolved from the bearer token."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    id: UUID
    email: str
    roles: list[Role] = Field(default_factory=list)

    @property
    def is_admin(self) -> bool:
        return Role.ADMIN in self.roles

from shared.models.base import ApiModel, ApiRequest, SuccessResponse
from shared.models.user import CurrentUser

__all__ = ["ApiModel", "ApiRequest", "CurrentUser", "SuccessResponse"]

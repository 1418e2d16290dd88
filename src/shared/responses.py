"""Success envelopes shared by every router."""

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Response model serialized with camelCase keys (``accessToken``)."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, from_attributes=True)


class SuccessResponse[T](BaseModel):
    """``{"success": true, "data": ...}``"""

    success: bool = True
    data: T


class MessageResponse(BaseModel):
    """``{"success": true, "message": ...}``"""

    success: bool = True
    message: str

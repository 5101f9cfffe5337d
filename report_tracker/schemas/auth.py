"""Authentication schemas."""

from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class LoginRequest(BaseModel):
    """Email + password login."""

    email: str = Field(..., min_length=3, max_length=255, pattern=r"^[^@\s]+@[^@\s]+$")
    password: str = Field(..., min_length=1)


class LoginResponse(BaseModel):
    """Issued access token and the user it belongs to."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    token: str
    type: str = "Bearer"
    expires_in: int = Field(..., description="Token lifetime in seconds")
    user_id: UUID
    email: str

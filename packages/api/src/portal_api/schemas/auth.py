# This project was developed with assistance from AI tools.
"""Authentication and identity schemas."""

from portal_db.enums import UserRole
from pydantic import BaseModel, ConfigDict, Field


class TokenSubject(BaseModel):
    """The identity fields a token is issued for."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    id: int
    username: str
    role: UserRole
    societa_id: int | None = Field(default=None, alias="societaId")


class TokenPayload(TokenSubject):
    """Decoded token claims."""

    iat: int
    exp: int


class UserContext(TokenSubject):
    """Injected by the auth dependencies into authenticated requests."""


class UserPublic(BaseModel):
    """User as shown to the client (never includes the password hash)."""

    model_config = ConfigDict(populate_by_name=True)

    id: int
    username: str
    role: UserRole
    societa_id: int | None = Field(default=None, alias="societaId")


class LoginResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    token: str
    user: UserPublic
    expires_in: str = Field(alias="expiresIn")
    token_type: str = Field(default="Bearer", alias="tokenType")


class MeResponse(BaseModel):
    user: UserPublic


class RefreshResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    token: str
    expires_in: str = Field(alias="expiresIn")


class LogoutResponse(BaseModel):
    success: bool = True
    message: str

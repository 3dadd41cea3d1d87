"""Authentication related schemas."""

from pydantic import BaseModel, Field


class Token(BaseModel):
    access_token: str
    token_type: str
    role: str
    shop_id: int
    session_id: int | None = Field(
        None, description="Login session opened for this token, when it could be recorded"
    )


class LogoutRequest(BaseModel):
    session_id: int | None = Field(
        None, description="Session to close; defaults to the latest open session"
    )


class LogoutResponse(BaseModel):
    closed: bool

from pydantic import BaseModel, Field


class LoginRequest(BaseModel):
    username: str
    password: str


class SessionUser(BaseModel):
    username: str
    mandal: str
    role: str


class LoginResult(BaseModel):
    success: bool
    user: SessionUser | None = None
    message: str | None = None


class CreateCredentialRequest(BaseModel):
    username: str = Field(..., min_length=1)
    password: str = Field(..., min_length=1)
    mandal: str = ""
    role: str = Field("user", pattern="^(admin|user)$")

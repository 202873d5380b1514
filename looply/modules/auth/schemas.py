from pydantic import BaseModel, EmailStr, Field, model_validator
from typing import Optional, List, Literal, Dict, Any


class LoginRequest(BaseModel):
    email: EmailStr
    password: str = Field(..., min_length=6)


class RegisterRequest(BaseModel):
    name: str = Field(..., min_length=2)
    email: EmailStr
    password: str = Field(..., min_length=6)
    confirm_password: str
    role: Literal["user", "ngo"] = "user"
    location: str = Field(..., min_length=3)

    @model_validator(mode="after")
    def passwords_match(self):
        if self.password != self.confirm_password:
            raise ValueError("Passwords don't match")
        return self


class TokenResponse(BaseModel):
    access_token: str
    token_type: str = "bearer"
    user_id: str
    email: str
    profile: Dict[str, Any]


class RegisterResponse(BaseModel):
    user_id: str
    email: str
    role: str
    access_token: Optional[str] = None
    message: str


class SessionResponse(BaseModel):
    user: Optional[Dict[str, Any]] = None
    is_authenticated: bool = False


class MeResponse(BaseModel):
    id: str
    email: Optional[str] = None
    user_metadata: Dict[str, Any] = {}
    profile: Optional[Dict[str, Any]] = None
    capabilities: List[str] = []

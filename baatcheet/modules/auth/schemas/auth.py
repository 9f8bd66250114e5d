from pydantic import BaseModel, EmailStr, field_validator

from baatcheet.modules.user_management.schemas.user import User


class LoginRequest(BaseModel):
    email: EmailStr
    password: str

    @field_validator("email")
    @classmethod
    def normalize_email(cls, v: str) -> str:
        return v.lower()


class LoginResponse(BaseModel):
    token: str
    token_type: str = "bearer"
    user: User

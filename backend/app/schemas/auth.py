from pydantic import BaseModel, EmailStr, Field, AliasChoices, ConfigDict, field_validator, model_validator
from typing import Optional
from datetime import datetime

from app.core.config import settings
from app.models.user import UserRole


class UserRegister(BaseModel):
    username: Optional[str] = Field(None, max_length=100)
    email: EmailStr
    password: str
    confirm_password: str

    @field_validator('username')
    @classmethod
    def blank_username_is_none(cls, value: Optional[str]) -> Optional[str]:
        if value is None:
            return None
        value = value.strip()
        return value or None

    @model_validator(mode='after')
    def validate_passwords(self):
        """Password length and confirmation"""
        if not self.password.strip() or not self.confirm_password.strip():
            raise ValueError("Please fill in all fields")
        if len(self.password) < settings.MIN_PASSWORD_LENGTH:
            raise ValueError(
                f"Password must be at least {settings.MIN_PASSWORD_LENGTH} characters long"
            )
        if self.password != self.confirm_password:
            raise ValueError("Passwords do not match")
        return self


class UserLogin(BaseModel):
    # The login form has a single "username or email" box
    identifier: str = Field(..., validation_alias=AliasChoices('identifier', 'username', 'email'))
    password: str


class Token(BaseModel):
    access_token: str
    refresh_token: str
    token_type: str = "bearer"


class RefreshTokenRequest(BaseModel):
    refresh_token: str


class UserResponse(BaseModel):
    id: str
    email: str
    username: Optional[str] = None
    role: UserRole
    is_active: bool
    created_at: datetime
    last_login: Optional[datetime] = None

    model_config = ConfigDict(from_attributes=True)


class LoginResponse(BaseModel):
    access_token: str
    refresh_token: str
    token_type: str = "bearer"
    user: UserResponse


# ============================================
# Password Reset
# ============================================

class ForgotPasswordRequest(BaseModel):
    email: EmailStr


class ResetPasswordRequest(BaseModel):
    token: str
    new_password: str = Field(..., min_length=1)

    @field_validator('new_password')
    @classmethod
    def validate_length(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("Password cannot be blank")
        if len(value) < settings.MIN_PASSWORD_LENGTH:
            raise ValueError(
                f"Password must be at least {settings.MIN_PASSWORD_LENGTH} characters long"
            )
        return value


class PasswordResetResponse(BaseModel):
    message: str
    success: bool
    # Only populated in development mode
    reset_token: Optional[str] = None


class MessageResponse(BaseModel):
    message: str
    success: bool = True

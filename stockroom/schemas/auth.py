"""Authentication schemas."""

from pydantic import BaseModel, ConfigDict, EmailStr, Field, ValidationInfo, field_validator


class UserSignup(BaseModel):
    """User signup request."""

    name: str = Field(..., min_length=2, max_length=255)
    email: EmailStr = Field(..., max_length=255)
    password: str = Field(..., min_length=8, max_length=128)
    confirm_password: str = Field(..., min_length=8, max_length=128)

    @field_validator("name")
    @classmethod
    def strip_name(cls, value: str) -> str:
        value = value.strip()
        if len(value) < 2:
            raise ValueError("Name is too short")
        return value

    @field_validator("confirm_password")
    @classmethod
    def passwords_match(cls, value: str, info: ValidationInfo) -> str:
        if "password" in info.data and value != info.data["password"]:
            raise ValueError("Passwords do not match")
        return value


class UserLogin(BaseModel):
    """User login request."""

    email: EmailStr = Field(..., max_length=255)
    password: str = Field(..., min_length=8, max_length=128)


class SendOtpRequest(BaseModel):
    """Request a verification code for an email address."""

    email: EmailStr = Field(..., max_length=255)


class VerifyOtpRequest(BaseModel):
    """Submit a verification code."""

    email: EmailStr = Field(..., max_length=255)
    otp: str = Field(..., min_length=6, max_length=6, pattern=r"^[0-9]{6}$")


class ForgotPasswordRequest(BaseModel):
    """Request a password reset link."""

    email: EmailStr = Field(..., max_length=255)


class ResetPasswordRequest(BaseModel):
    """Set a new password with a reset token."""

    token: str = Field(..., min_length=10)
    password: str = Field(..., min_length=8, max_length=128)


class MessageResponse(BaseModel):
    """Plain acknowledgement."""

    message: str


class UserResponse(BaseModel):
    """User information response."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    email: str
    name: str | None
    role: str


class AuthResponse(BaseModel):
    """Authentication response with token and user info."""

    access_token: str
    token_type: str = "bearer"  # noqa: S105
    user: UserResponse

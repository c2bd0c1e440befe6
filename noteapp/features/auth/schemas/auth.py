from datetime import date
from typing import Optional

from pydantic import BaseModel, EmailStr, Field, field_validator


class EmailPayload(BaseModel):
    email: EmailStr

    @field_validator("email")
    @classmethod
    def normalize_email(cls, v: str) -> str:
        """Emails key pending codes and accounts, so compare them case-insensitively."""
        return v.strip().lower()


class OtpPayload(EmailPayload):
    otp: str = Field(..., min_length=1, max_length=12)

    @field_validator("otp")
    @classmethod
    def strip_otp(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("OTP is required")
        return v


class SendOtpRequest(EmailPayload):
    """OTP request for login, or the first step of signup (profile optional)."""

    name: Optional[str] = Field(None, max_length=100)
    dob: Optional[date] = None

    @field_validator("name")
    @classmethod
    def strip_name(cls, v: Optional[str]) -> Optional[str]:
        if v is None:
            return v
        return v.strip() or None

    class Config:
        json_schema_extra = {
            "example": {"email": "user@example.com"}
        }


class VerifyOtpRequest(OtpPayload):
    """Completes signup: the passcode plus the profile of the new account."""

    name: Optional[str] = Field(None, max_length=100)
    dob: Optional[date] = None

    @field_validator("name")
    @classmethod
    def strip_name(cls, v: Optional[str]) -> Optional[str]:
        if v is None:
            return v
        return v.strip() or None

    class Config:
        json_schema_extra = {
            "example": {
                "name": "Jane Doe",
                "dob": "1995-04-12",
                "email": "user@example.com",
                "otp": "482913",
            }
        }


class LoginRequest(OtpPayload):
    class Config:
        json_schema_extra = {
            "example": {"email": "user@example.com", "otp": "482913"}
        }


class UserResponse(BaseModel):
    name: str
    email: str

    class Config:
        from_attributes = True

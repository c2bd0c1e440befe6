from noteapp.features.auth.schemas.auth import (
    LoginRequest,
    SendOtpRequest,
    UserResponse,
    VerifyOtpRequest,
)

__all__ = [
    "LoginRequest",
    "SendOtpRequest",
    "UserResponse",
    "VerifyOtpRequest",
]

from noteapp.features.auth.utils.security import (
    create_access_token,
    decode_access_token,
    generate_otp,
)

__all__ = [
    "create_access_token",
    "decode_access_token",
    "generate_otp",
]

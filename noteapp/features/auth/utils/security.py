import secrets
from datetime import datetime, timedelta, timezone
from typing import Optional

import jwt

from noteapp.platform.config import settings
from noteapp.platform.exceptions import InvalidToken, TokenExpired


def create_access_token(data: dict, expires_delta: Optional[timedelta] = None) -> str:
    """Create a JWT access token"""
    to_encode = data.copy()
    now = datetime.now(timezone.utc)
    if expires_delta is not None:
        expire = now + expires_delta
    else:
        expire = now + timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES)
    to_encode.update({"exp": expire, "iat": now})
    encoded_jwt = jwt.encode(to_encode, settings.JWT_SECRET_KEY, algorithm=settings.ALGORITHM)
    return encoded_jwt


def decode_access_token(token: str) -> dict:
    """Decode and verify a JWT access token"""
    try:
        payload = jwt.decode(
            token,
            settings.JWT_SECRET_KEY,
            algorithms=[settings.ALGORITHM],
            options={"require": ["exp", "sub"]},
        )
    except jwt.ExpiredSignatureError:
        raise TokenExpired()
    except jwt.PyJWTError:
        raise InvalidToken()
    return payload


def generate_otp(length: Optional[int] = None) -> str:
    """Generate a numeric OTP for email verification"""
    length = length or settings.OTP_LENGTH
    return ''.join([str(secrets.randbelow(10)) for _ in range(length)])

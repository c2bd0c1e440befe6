from noteapp.features.auth.services.auth_service import AuthService
from noteapp.features.auth.services.email_service import OtpMailer, get_mailer
from noteapp.features.auth.services.otp_store import OtpStore

__all__ = [
    "AuthService",
    "OtpMailer",
    "OtpStore",
    "get_mailer",
]

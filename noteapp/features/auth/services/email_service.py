from datetime import datetime

from noteapp.platform.config import settings
from noteapp.platform.logger import get_logger
from noteapp.platform.services.email import EmailDeliveryError, env, send_email

logger = get_logger(__name__)


def render_otp_email(otp: str) -> str:
    template = env.get_template("otp_code.html")
    return template.render(
        otp_code=otp,
        app_name=settings.APP_NAME,
        expiration_minutes=settings.OTP_EXPIRE_MINUTES,
        year=datetime.now().year,
    )


class OtpMailer:
    """Delivers one-time passcodes. ``send`` reports success instead of raising."""

    subject = f"Your OTP Code - {settings.APP_NAME}"

    def send(self, email: str, code: str) -> bool:
        try:
            send_email(email, self.subject, render_otp_email(code))
        except EmailDeliveryError as e:
            logger.error(f"Failed to send OTP email to {email}: {e}")
            return False
        logger.info(f"OTP email sent to {email}")
        return True


def get_mailer() -> OtpMailer:
    return OtpMailer()

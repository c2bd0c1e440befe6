from sqlalchemy import Column, Date, DateTime, String

from noteapp.features.auth.utils.verify import utcnow
from noteapp.platform.db.base import Base


class PendingVerification(Base):
    """The currently valid passcode for an email. One row per email; resend overwrites it."""

    __tablename__ = "pending_verifications"

    email = Column(String(255), primary_key=True, index=True)
    code = Column(String(12), nullable=False)
    expires_at = Column(DateTime, nullable=False)
    # profile supplied with a signup OTP request, if any
    name = Column(String(100), nullable=True)
    date_of_birth = Column(Date, nullable=True)
    created_at = Column(DateTime, default=utcnow, nullable=False)

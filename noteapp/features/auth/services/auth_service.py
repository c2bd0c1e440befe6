import secrets
from datetime import date, timedelta
from typing import Optional, Tuple

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession
from starlette.concurrency import run_in_threadpool

from noteapp.features.auth.models.pending_verification import PendingVerification
from noteapp.features.auth.models.user import User
from noteapp.features.auth.services.email_service import OtpMailer
from noteapp.features.auth.services.otp_store import OtpStore
from noteapp.features.auth.utils.security import create_access_token, generate_otp
from noteapp.features.auth.utils.verify import is_expired, normalize_email, utcnow
from noteapp.platform.config import settings
from noteapp.platform.exceptions import (
    DeliveryFailure,
    EmailAlreadyRegistered,
    OtpExpired,
    OtpMismatch,
    OtpNotFound,
    UnknownUser,
    ValidationFailed,
)
from noteapp.platform.logger import get_logger

logger = get_logger(__name__)


class AuthService:
    def __init__(self, db: AsyncSession, mailer: Optional[OtpMailer] = None):
        self.db = db
        self.mailer = mailer or OtpMailer()
        self.otp_store = OtpStore(db)

    async def request_otp(
        self,
        email: str,
        name: Optional[str] = None,
        date_of_birth: Optional[date] = None,
    ) -> None:
        """Store a fresh passcode for ``email`` and mail it.

        Any earlier code for the email stops working. If delivery fails the
        pending record is kept so a resend can replace it.
        """
        email = normalize_email(email)
        code = generate_otp()
        expires_at = utcnow() + timedelta(minutes=settings.OTP_EXPIRE_MINUTES)
        await self.otp_store.upsert(
            email, code, expires_at, name=name, date_of_birth=date_of_birth
        )
        logger.info(f"OTP issued - email: {email}, expires_at: {expires_at.isoformat()}")

        delivered = await run_in_threadpool(self.mailer.send, email, code)
        if not delivered:
            logger.error(f"OTP delivery failed - email: {email}")
            raise DeliveryFailure()

    async def verify_signup(
        self,
        email: str,
        code: str,
        name: Optional[str] = None,
        date_of_birth: Optional[date] = None,
    ) -> Tuple[User, str]:
        email = normalize_email(email)
        pending = await self._check_code(email, code)

        name = name or pending.name
        date_of_birth = date_of_birth or pending.date_of_birth
        if not name or not date_of_birth:
            raise ValidationFailed("Name and date of birth are required to sign up")

        if await self.get_user_by_email(email):
            logger.warning(f"Signup rejected - email already registered: {email}")
            raise EmailAlreadyRegistered()

        new_user = User(email=email, name=name, date_of_birth=date_of_birth)
        self.db.add(new_user)
        await self.otp_store.delete(email)
        try:
            await self.db.commit()
        except IntegrityError:
            await self.db.rollback()
            raise EmailAlreadyRegistered()
        await self.db.refresh(new_user)

        logger.info(f"User created - user: {new_user.id}, email: {email}")
        return new_user, self.issue_token(new_user)

    async def login(self, email: str, code: str) -> Tuple[User, str]:
        email = normalize_email(email)
        await self._check_code(email, code)

        user = await self.get_user_by_email(email)
        if not user:
            logger.warning(f"Login rejected - no account for email: {email}")
            raise UnknownUser("No account found for this email. Please sign up first.")

        await self.otp_store.delete(email)
        await self.db.commit()

        logger.info(f"Login successful - user: {user.id}")
        return user, self.issue_token(user)

    async def get_user_by_email(self, email: str) -> Optional[User]:
        result = await self.db.execute(select(User).where(User.email == normalize_email(email)))
        return result.scalar_one_or_none()

    @staticmethod
    def issue_token(user: User) -> str:
        return create_access_token(data={"sub": str(user.id), "email": user.email})

    async def _check_code(self, email: str, code: str) -> PendingVerification:
        """Validate a submitted code without consuming it.

        Order matters: an expired code reports expiry even when it also
        mismatches.
        """
        pending = await self.otp_store.get(email)
        if pending is None:
            logger.warning(f"OTP verification failed - no pending code for email: {email}")
            raise OtpNotFound()

        if is_expired(pending.expires_at, utcnow()):
            logger.warning(f"OTP verification failed - expired code for email: {email}")
            raise OtpExpired()

        if not secrets.compare_digest(pending.code.encode(), code.encode()):
            logger.warning(f"OTP verification failed - wrong code for email: {email}")
            raise OtpMismatch()

        return pending

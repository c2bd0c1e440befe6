from datetime import date, datetime
from typing import Optional

from sqlalchemy import delete, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from noteapp.features.auth.models.pending_verification import PendingVerification


class OtpStore:
    """Pending one-time passcodes keyed by normalized email.

    Writes are last-write-wins: a resend replaces the code, expiry and any
    profile fields supplied with it. Expired rows are only removed by
    ``purge_expired``; verification rejects them lazily.
    """

    def __init__(self, db: AsyncSession):
        self.db = db

    async def get(self, email: str) -> Optional[PendingVerification]:
        result = await self.db.execute(
            select(PendingVerification).where(PendingVerification.email == email)
        )
        return result.scalar_one_or_none()

    async def upsert(
        self,
        email: str,
        code: str,
        expires_at: datetime,
        name: Optional[str] = None,
        date_of_birth: Optional[date] = None,
    ) -> PendingVerification:
        pending = await self.get(email)
        if pending is None:
            pending = PendingVerification(email=email)
            self.db.add(pending)
        self._overwrite(pending, code, expires_at, name, date_of_birth)

        try:
            await self.db.commit()
        except IntegrityError:
            # a concurrent first request inserted the row; overwrite theirs
            await self.db.rollback()
            pending = await self.get(email)
            if pending is None:
                # and it was consumed before we could read it back
                pending = PendingVerification(email=email)
                self.db.add(pending)
            self._overwrite(pending, code, expires_at, name, date_of_birth)
            await self.db.commit()

        return pending

    async def delete(self, email: str) -> None:
        """Stage removal of the pending row. The caller commits."""
        await self.db.execute(
            delete(PendingVerification).where(PendingVerification.email == email)
        )

    async def purge_expired(self, now: datetime) -> int:
        result = await self.db.execute(
            delete(PendingVerification).where(PendingVerification.expires_at <= now)
        )
        await self.db.commit()
        return result.rowcount or 0

    @staticmethod
    def _overwrite(
        pending: PendingVerification,
        code: str,
        expires_at: datetime,
        name: Optional[str],
        date_of_birth: Optional[date],
    ) -> None:
        pending.code = code
        pending.expires_at = expires_at
        if name is not None:
            pending.name = name
        if date_of_birth is not None:
            pending.date_of_birth = date_of_birth

import asyncio

from noteapp.features.auth.services.otp_store import OtpStore
from noteapp.features.auth.utils.verify import utcnow
from noteapp.platform.db.session import SessionLocal


async def purge_expired_otps():
    async with SessionLocal() as db:
        removed = await OtpStore(db).purge_expired(utcnow())
        print(f"Removed {removed} expired pending verification(s)")


if __name__ == "__main__":
    asyncio.run(purge_expired_otps())

from noteapp.features.auth.models.pending_verification import PendingVerification
from noteapp.features.auth.models.token import TokenData
from noteapp.features.auth.models.user import User

__all__ = ["User",
           "PendingVerification",
           "TokenData",
        ]

"""
Password hashing and session token utilities.
"""

from typing import Optional
from uuid import UUID

import bcrypt
from itsdangerous import BadSignature, SignatureExpired, URLSafeTimedSerializer

from hiring_dashboard.core.config import settings


def hash_password(password: str) -> str:
    """
    Hash a plain password using bcrypt.

    Args:
        password: Plain text password

    Returns:
        Bcrypt hashed password as string
    """
    # bcrypt only looks at the first 72 bytes
    password_bytes = password.encode("utf-8")[:72]
    salt = bcrypt.gensalt()
    hashed = bcrypt.hashpw(password_bytes, salt)
    return hashed.decode("utf-8")


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """
    Verify a plain password against a hashed password.

    Returns:
        True if password matches, False otherwise
    """
    password_bytes = plain_password.encode("utf-8")[:72]
    hashed_bytes = hashed_password.encode("utf-8")
    return bcrypt.checkpw(password_bytes, hashed_bytes)


class SessionManager:
    """Issues and verifies signed, time-limited session tokens."""

    def __init__(self, secret_key: str, max_age: int):
        self.serializer = URLSafeTimedSerializer(secret_key, salt="hiring-dashboard-session")
        self.max_age = max_age

    def create_session_token(self, user_id: UUID, email: str) -> str:
        """Create a signed session token for a user."""
        return self.serializer.dumps({"user_id": str(user_id), "email": email})

    def verify_session_token(self, token: str) -> Optional[dict]:
        """
        Verify and decode a session token.

        Returns:
            Dict with user_id and email if valid, None otherwise
        """
        try:
            return self.serializer.loads(token, max_age=self.max_age)
        except (BadSignature, SignatureExpired):
            return None


# Global session manager instance
session_manager = SessionManager(settings.SECRET_KEY, settings.SESSION_MAX_AGE_SECONDS)

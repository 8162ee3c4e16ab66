"""Password hashing for employee credentials.

Only the one-way transform lives here. Verifying a sign-in is the identity
service's job; it reads the stored hash through the internal lookup.
"""

import bcrypt

from directory_api.config import get_settings


class PasswordService:
    """Service for password hashing."""

    DEFAULT_BCRYPT_ROUNDS = 12

    def __init__(self, rounds: int | None = None) -> None:
        """Initialize with a bcrypt work factor.

        Args:
            rounds: bcrypt cost; defaults to the configured value
        """
        self.rounds = rounds or get_settings().bcrypt_rounds or self.DEFAULT_BCRYPT_ROUNDS

    def hash_password(self, password: str) -> str:
        """Hash a password using bcrypt.

        Args:
            password: Plain text password

        Returns:
            Hashed password string
        """
        salt = bcrypt.gensalt(rounds=self.rounds)
        hashed = bcrypt.hashpw(password.encode("utf-8"), salt)
        return hashed.decode("utf-8")


# Singleton instance
_password_service: PasswordService | None = None


def get_password_service() -> PasswordService:
    """Get the password service singleton.

    Returns:
        PasswordService instance
    """
    global _password_service
    if _password_service is None:
        _password_service = PasswordService()
    return _password_service

"""Password hashing utilities using bcrypt."""
from __future__ import annotations

import bcrypt

# bcrypt only looks at (and newer releases reject) input beyond this length
MAX_PASSWORD_BYTES = 72


class PasswordValidationError(ValueError):
    """Raised when a password fails strength validation."""


def validate_password_strength(password: str) -> None:
    """Validate password complexity requirements.

    The policy requires:
    - Minimum length of 8 characters
    - At least one letter
    - At least one digit
    - At most 72 bytes once UTF-8 encoded

    Raises:
        PasswordValidationError: If any requirement is not met.
    """

    if len(password) < 8:
        raise PasswordValidationError("Password must be at least 8 characters long.")

    if len(password.encode("utf-8")) > MAX_PASSWORD_BYTES:
        raise PasswordValidationError(f"Password must be at most {MAX_PASSWORD_BYTES} bytes long.")

    if not any(char.isalpha() for char in password):
        raise PasswordValidationError("Password must include at least one letter.")

    if not any(char.isdigit() for char in password):
        raise PasswordValidationError("Password must include at least one number.")


def hash_password(password: str) -> str:
    """Hash a password using bcrypt."""
    hashed = bcrypt.hashpw(password.encode('utf-8'), bcrypt.gensalt())
    return hashed.decode('utf-8')


def verify_password(password: str, password_hash: str) -> bool:
    """Verify a password against a stored hash."""
    try:
        return bcrypt.checkpw(password.encode('utf-8'), password_hash.encode('utf-8'))
    except (ValueError, TypeError, AttributeError):
        return False

"""
Security Utilities

Password hashing, random secrets and JWT token management.

Password Hashing:
=================
Uses passlib's bcrypt scheme with automatic salt generation. The same
hashing protects user passwords and password reset tokens.

JWT Tokens:
===========
Uses PyJWT for JSON Web Token creation and validation.

Usage:
======
    from esoteric_planner.shared.utils.security import SecurityUtils

    password = SecurityUtils.generate_password()       # "aZ3k9QxLm2Pw"
    hashed = SecurityUtils.hash_password(password)
    SecurityUtils.verify_password(password, hashed)    # True

    token = SecurityUtils.create_access_token(
        data={"user_id": "123"},
        secret_key="secret",
        expires_delta=timedelta(days=7)
    )
    payload = SecurityUtils.decode_access_token(token, "secret")
"""

from datetime import datetime, timedelta, timezone
import secrets
import string
from typing import Optional

import jwt
from passlib.context import CryptContext


# Password hashing configuration
pwd_context = CryptContext(
    schemes=["bcrypt"],
    deprecated="auto",
)

PASSWORD_ALPHABET = string.ascii_letters + string.digits


class SecurityUtils:
    """
    Security utilities for authentication.

    Provides:
    - Password hashing with bcrypt
    - Random password and reset token generation
    - JWT token creation and validation
    """

    # ═══════════════════════════════════════════════════════════════════════════
    # PASSWORD HASHING
    # ═══════════════════════════════════════════════════════════════════════════

    @staticmethod
    def hash_password(password: str) -> str:
        """
        Hash password using bcrypt.

        Args:
            password: Plain text password (or reset token)

        Returns:
            Bcrypt hash string (includes salt)
        """
        return pwd_context.hash(password)

    @staticmethod
    def verify_password(plain_password: str, hashed_password: Optional[str]) -> bool:
        """
        Verify password against bcrypt hash.

        Returns:
            True if password matches, False otherwise (including no hash)
        """
        if not hashed_password:
            return False
        return pwd_context.verify(plain_password, hashed_password)

    # ═══════════════════════════════════════════════════════════════════════════
    # RANDOM SECRETS
    # ═══════════════════════════════════════════════════════════════════════════

    @staticmethod
    def generate_password(length: int = 12) -> str:
        """
        Generate a random alphanumeric password.

        Used at registration: the password is emailed to the user.
        """
        return "".join(secrets.choice(PASSWORD_ALPHABET) for _ in range(length))

    @staticmethod
    def generate_reset_token() -> str:
        """
        Generate a password reset token (32 random bytes, hex encoded).
        """
        return secrets.token_hex(32)

    # ═══════════════════════════════════════════════════════════════════════════
    # JWT TOKENS
    # ═══════════════════════════════════════════════════════════════════════════

    @staticmethod
    def create_access_token(
        data: dict,
        secret_key: str,
        expires_delta: Optional[timedelta] = None,
        algorithm: str = "HS256",
    ) -> str:
        """
        Create JWT access token.

        Args:
            data: Payload data to encode (e.g., user_id)
            secret_key: Secret key for signing
            expires_delta: Token expiration time (default: 7 days)
            algorithm: JWT algorithm (default: HS256)

        Returns:
            Encoded JWT token string
        """
        to_encode = data.copy()

        if expires_delta:
            expire = datetime.now(timezone.utc) + expires_delta
        else:
            expire = datetime.now(timezone.utc) + timedelta(days=7)

        to_encode.update({
            "exp": expire,
            "iat": datetime.now(timezone.utc),
        })

        return jwt.encode(to_encode, secret_key, algorithm=algorithm)

    @staticmethod
    def decode_access_token(
        token: str,
        secret_key: str,
        algorithm: str = "HS256",
    ) -> dict:
        """
        Decode and verify JWT token.

        Returns:
            Decoded token payload

        Raises:
            ValueError: If token is expired or invalid
        """
        try:
            return jwt.decode(
                token,
                secret_key,
                algorithms=[algorithm],
            )
        except jwt.ExpiredSignatureError:
            raise ValueError("Token has expired")
        except jwt.InvalidTokenError as e:
            raise ValueError(f"Invalid token: {str(e)}")

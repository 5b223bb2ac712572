"""
Security utilities for the book inventory service.

Passwords are hashed with bcrypt through passlib. Bearer credentials are
stateless: a base64url JSON payload (subject id, role, expiry) followed by an
HMAC-SHA256 signature made with SECRET_KEY. A credential is valid while
now < expiry; once expired the caller must log in again. Logout only
discards the credential on the client.

Functions:
    verify_password(plain_password: str, hashed_password: str) -> bool
    get_password_hash(password: str) -> str
    create_access_token(subject: str, role: str) -> IssuedToken
    decode_access_token(token: str) -> TokenPayload
"""

import base64
import hashlib
import hmac
import json
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Optional

from passlib.context import CryptContext

from bookinventory.core.config import settings
from bookinventory.core.errors import UnauthenticatedError

pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")

def verify_password(plain_password: str, hashed_password: str) -> bool:
    """
    Checks a plain text password against its hash.

    Args:
        plain_password (str): Password to check.
        hashed_password (str): Stored hash.

    Returns:
        bool: True if the password matches the hash.
    """
    return pwd_context.verify(plain_password, hashed_password)

def get_password_hash(password: str) -> str:
    """
    Generates a salted hash for a password.

    Args:
        password (str): Plain text password.

    Returns:
        str: Hashed password.
    """
    return pwd_context.hash(password)


@dataclass(frozen=True)
class TokenPayload:
    sub: str
    role: str
    exp: int


@dataclass(frozen=True)
class IssuedToken:
    token: str
    expires_at: datetime


def _b64encode(raw: bytes) -> str:
    return base64.urlsafe_b64encode(raw).rstrip(b"=").decode("ascii")


def _b64decode(data: str) -> bytes:
    return base64.urlsafe_b64decode(data + "=" * (-len(data) % 4))


def _sign(body: str, secret: str) -> str:
    return _b64encode(hmac.new(secret.encode(), body.encode("ascii"), hashlib.sha256).digest())


def create_access_token(
    subject: str,
    role: str,
    expires_delta: Optional[timedelta] = None,
    secret: Optional[str] = None,
    now: Optional[datetime] = None,
) -> IssuedToken:
    """
    Issues a signed bearer credential.

    Args:
        subject (str): User id the credential is issued for.
        role (str): Role of the user at issue time.
        expires_delta (Optional[timedelta]): Lifetime, TOKEN_EXPIRE_HOURS by default.
        secret (Optional[str]): Signing key, SECRET_KEY by default.
        now (Optional[datetime]): Issue time, current UTC time by default.

    Returns:
        IssuedToken: The encoded credential and its expiry.
    """
    now = now or datetime.now(timezone.utc)
    expires_at = now + (expires_delta or timedelta(hours=settings.TOKEN_EXPIRE_HOURS))
    payload = {"sub": subject, "role": role, "exp": int(expires_at.timestamp())}
    body = _b64encode(json.dumps(payload, separators=(",", ":"), sort_keys=True).encode())
    signature = _sign(body, secret or settings.SECRET_KEY)
    return IssuedToken(token=f"{body}.{signature}", expires_at=datetime.fromtimestamp(payload["exp"], tz=timezone.utc))


def decode_access_token(token: str, secret: Optional[str] = None, now: Optional[datetime] = None) -> TokenPayload:
    """
    Validates a bearer credential and returns its payload.

    Raises:
        UnauthenticatedError: If the credential is malformed, its signature does
            not match or it has expired.
    """
    try:
        body, signature = token.split(".")
        expected = _sign(body, secret or settings.SECRET_KEY)
        valid = hmac.compare_digest(expected.encode(), signature.encode())
    except ValueError:
        raise UnauthenticatedError("Invalid token")
    if not valid:
        raise UnauthenticatedError("Invalid token")

    try:
        data = json.loads(_b64decode(body))
        payload = TokenPayload(sub=str(data["sub"]), role=str(data["role"]), exp=int(data["exp"]))
    except (ValueError, KeyError, TypeError):
        raise UnauthenticatedError("Invalid token")

    now = now or datetime.now(timezone.utc)
    if now.timestamp() >= payload.exp:
        raise UnauthenticatedError("Token expired, please log in again")
    return payload

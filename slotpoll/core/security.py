"""Security and authentication utilities."""
from datetime import datetime, timedelta, timezone
from typing import Optional
import argon2
import jwt
from fastapi import Request

from slotpoll.core import config
from slotpoll.core.exceptions import AuthenticationRequired
from slotpoll.engine.session import VoterContext

ACCESS_TOKEN_COOKIE = "access_token"

# Argon2 hasher for user passwords
ph = argon2.PasswordHasher(
    time_cost=2,
    memory_cost=65536,
    parallelism=1,
    hash_len=32,
    salt_len=16
)


def get_password_hash(password: str) -> str:
    """Hash a password using Argon2."""
    return ph.hash(password)


def verify_password(password: str, password_hash: str) -> bool:
    """Verify a password against its Argon2 hash."""
    try:
        ph.verify(password_hash, password)
        return True
    except argon2.exceptions.VerifyMismatchError:
        return False
    except argon2.exceptions.InvalidHashError:
        return False


def create_access_token(data: dict, expires_delta: Optional[timedelta] = None) -> str:
    """Create a JWT access token."""
    to_encode = data.copy()
    if expires_delta:
        expire = datetime.now(timezone.utc) + expires_delta
    else:
        expire = datetime.now(timezone.utc) + timedelta(minutes=config.settings.ACCESS_TOKEN_EXPIRE_MINUTES)

    to_encode.update({"exp": expire})
    encoded_jwt = jwt.encode(to_encode, config.settings.SECRET_KEY, algorithm=config.settings.ALGORITHM)
    return encoded_jwt


def create_user_token(user_id: str, email: str) -> str:
    return create_access_token({"sub": user_id, "email": email})


def _token_from_request(request: Request) -> Optional[str]:
    """Read the token from the auth cookie, falling back to a Bearer header."""
    token = request.cookies.get(ACCESS_TOKEN_COOKIE)
    if token:
        return token

    authorization = request.headers.get("Authorization", "")
    scheme, _, credentials = authorization.partition(" ")
    if scheme.lower() == "bearer" and credentials:
        return credentials.strip()
    return None


def decode_voter(token: str) -> VoterContext:
    """
    Decode a JWT into the acting voter.

    Raises:
        AuthenticationRequired: If the token is expired, invalid, or has no subject
    """
    try:
        payload = jwt.decode(token, config.settings.SECRET_KEY, algorithms=[config.settings.ALGORITHM])
    except jwt.ExpiredSignatureError:
        raise AuthenticationRequired("Session expired. Please sign in again.")
    except jwt.PyJWTError:
        raise AuthenticationRequired("Invalid session. Please sign in again.")

    user_id = payload.get("sub")
    if not user_id:
        raise AuthenticationRequired("Invalid session. Please sign in again.")
    return VoterContext(user_id=user_id, email=payload.get("email"))


def get_optional_voter(request: Request) -> Optional[VoterContext]:
    """Dependency: the signed-in voter, or None for anonymous requests."""
    token = _token_from_request(request)
    if not token:
        return None
    return decode_voter(token)


def get_current_voter(request: Request) -> VoterContext:
    """Dependency: the signed-in voter; 401 if there is none."""
    voter = get_optional_voter(request)
    if voter is None:
        raise AuthenticationRequired("Please sign in to access polls")
    return voter

"""User profile business logic."""
from typing import Dict, Iterable, List

import structlog

from slotpoll.core.constants import SUGGESTION_LIMIT, SUGGESTION_MIN_CHARS, USER_PROFILES
from slotpoll.core.exceptions import AuthenticationRequired
from slotpoll.core.sanitization import normalize_email
from slotpoll.core.security import get_password_hash, verify_password
from slotpoll.engine.session import VoterContext
from slotpoll.store.base import RecordStore

logger = structlog.get_logger(__name__)

MIN_PASSWORD_LENGTH = 6


async def register_user(store: RecordStore, email: str, password: str) -> VoterContext:
    """
    Create a user profile.

    Raises:
        ValueError: If the e-mail is invalid or taken, or the password is too short
    """
    email = normalize_email(email)
    if len(password) < MIN_PASSWORD_LENGTH:
        raise ValueError(f"Password must be at least {MIN_PASSWORD_LENGTH} characters long")

    if await store.get(USER_PROFILES, {"email": email}) is not None:
        raise ValueError("An account with this email already exists")

    user = await store.insert(
        USER_PROFILES,
        {"email": email, "password_hash": get_password_hash(password)},
    )
    logger.info("user_registered", user_id=user["id"])
    return VoterContext(user_id=user["id"], email=user["email"])


async def authenticate_user(store: RecordStore, email: str, password: str) -> VoterContext:
    """
    Check credentials.

    Raises:
        AuthenticationRequired: If the e-mail is unknown or the password is wrong
    """
    try:
        email = normalize_email(email)
    except ValueError:
        raise AuthenticationRequired("Invalid email or password")

    user = await store.get(USER_PROFILES, {"email": email})
    if user is None or not verify_password(password, user["password_hash"]):
        logger.info("login_failed", email=email)
        raise AuthenticationRequired("Invalid email or password")

    return VoterContext(user_id=user["id"], email=user["email"])


async def get_user_by_email(store: RecordStore, email: str) -> Dict:
    """
    Look up a user by e-mail.

    Raises:
        ValueError: If no user has this address
    """
    user = await store.get(USER_PROFILES, {"email": normalize_email(email)})
    if user is None:
        raise ValueError("No user with this email")
    return user


async def suggest_emails(store: RecordStore, prefix: str) -> List[str]:
    """E-mails starting with ``prefix``; empty until the prefix is long enough."""
    prefix = prefix.strip().lower()
    if len(prefix) < SUGGESTION_MIN_CHARS:
        return []
    users = await store.search_prefix(USER_PROFILES, "email", prefix, SUGGESTION_LIMIT)
    return [user["email"] for user in users]


async def emails_for(store: RecordStore, user_ids: Iterable[str]) -> Dict[str, str]:
    """Map user id -> e-mail for the given ids."""
    ids = sorted(set(user_ids))
    if not ids:
        return {}
    users = await store.query(USER_PROFILES, {"id": ids})
    return {user["id"]: user["email"] for user in users}

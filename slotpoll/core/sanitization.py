"""Input sanitization utilities."""
import re
from typing import Optional


# Maximum length constraints
MAX_POLL_NAME_LENGTH = 200
MAX_DESCRIPTION_LENGTH = 2000
MAX_EMAIL_LENGTH = 254

EMAIL_PATTERN = re.compile(r'^[^@\s]+@[^@\s]+\.[^@\s]+$')


def sanitize_text(text: str, max_length: Optional[int] = None, strip_html: bool = True) -> str:
    """
    Sanitize text input to prevent XSS attacks.

    Strips HTML tags and normalizes whitespace. HTML entities are left alone;
    escaping is the renderer's job.

    Args:
        text: The input text to sanitize
        max_length: Optional maximum length to enforce
        strip_html: Whether to strip HTML tags (default True)

    Returns:
        Sanitized text with HTML tags removed and whitespace normalized

    Raises:
        ValueError: If text exceeds max_length or contains dangerous patterns
    """
    if not isinstance(text, str):
        raise ValueError("Input must be a string")

    sanitized = text.strip()

    # Enforce maximum length before processing to prevent length-based attacks
    if max_length and len(sanitized) > max_length:
        raise ValueError(f"Input exceeds maximum length of {max_length} characters")

    if strip_html:
        sanitized = re.sub(r'<[^>]*>', '', sanitized)

    # Reject inputs that still contain HTML-like patterns after stripping
    if '<' in sanitized or '>' in sanitized:
        raise ValueError("Input contains invalid HTML-like patterns")

    sanitized = re.sub(r'\s+', ' ', sanitized)

    return sanitized


def sanitize_poll_name(poll_name: str) -> str:
    """
    Sanitize poll name input.

    Raises:
        ValueError: If poll name is empty, invalid or too long
    """
    sanitized = sanitize_text(poll_name, max_length=MAX_POLL_NAME_LENGTH)

    if not sanitized:
        raise ValueError("Please enter a poll name")

    return sanitized


def sanitize_description(description: Optional[str]) -> Optional[str]:
    """Sanitize an optional poll description; blank becomes None."""
    if description is None:
        return None

    sanitized = sanitize_text(description, max_length=MAX_DESCRIPTION_LENGTH)
    return sanitized or None


def normalize_email(email: str) -> str:
    """
    Trim and lowercase an e-mail address and check its shape.

    Raises:
        ValueError: If the address is empty, too long or malformed
    """
    if not isinstance(email, str):
        raise ValueError("Email must be a string")

    normalized = email.strip().lower()

    if not normalized:
        raise ValueError("Email cannot be empty")

    if len(normalized) > MAX_EMAIL_LENGTH:
        raise ValueError(f"Email exceeds maximum length of {MAX_EMAIL_LENGTH} characters")

    if not EMAIL_PATTERN.match(normalized):
        raise ValueError("Email address is invalid")

    return normalized

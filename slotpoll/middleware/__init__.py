"""ASGI middleware."""
from slotpoll.middleware.logging import LoggingMiddleware

__all__ = ["LoggingMiddleware"]

from .member import add_member, list_members, remove_member
from .poll import (
    create_calendar_poll,
    create_schedule_poll,
    delete_poll,
    ensure_can_view,
    ensure_owner,
    get_poll,
    list_polls,
    update_poll_status,
)
from .user import authenticate_user, emails_for, register_user, suggest_emails

__all__ = [
    # members
    "add_member",
    "list_members",
    "remove_member",
    # polls
    "create_calendar_poll",
    "create_schedule_poll",
    "delete_poll",
    "ensure_can_view",
    "ensure_owner",
    "get_poll",
    "list_polls",
    "update_poll_status",
    # users
    "authenticate_user",
    "emails_for",
    "register_user",
    "suggest_emails",
]

"""User module - users and identity-provider sessions."""

from gatekeeper.modules.users.models import User, UserSession


__all__ = [
    "User",
    "UserSession",
]

"""AWS integration library for the IAM manager."""

from .sessions import assume_role, get_session

__all__ = [
    "assume_role",
    "get_session",
]

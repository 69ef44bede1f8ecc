"""Authenticated user context."""

from dataclasses import dataclass


@dataclass(frozen=True)
class UserSession:
    """The signed-in user, passed explicitly to every component that reads or writes data."""

    user_id: str

"""
UserContext -- session-bound defaults passed explicitly.

The invoking session supplies a default company and the user id that is
stamped on changed records.  Services receive it at construction time
instead of reading ambient global state.
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class UserContext:
    """Company and user of the invoking session."""

    company: int
    user: str

    def __post_init__(self) -> None:
        if not self.user or not self.user.strip():
            raise ValueError("UserContext requires a user id")

"""Exceptions and result types shared across the gateway."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Generic, TypeVar, Union

T = TypeVar("T")
E = TypeVar("E")

DISCORD_AUTH_FAILED = "discord_auth_failed"
ACCOUNT_SETUP_FAILED = "account_setup_failed"


class ProviderAuthFailure(Exception):
    """Discord rejected the login or the user denied consent."""


class ProvisioningError(Exception):
    """The panel API call failed in a way reconciliation cannot recover from."""


class PanelConflict(Exception):
    """The panel already holds an account for the requested email."""

    def __init__(self, user_id: str) -> None:
        super().__init__(f"Panel account already exists: {user_id}")
        self.user_id = user_id


@dataclass(frozen=True)
class MissingEmail:
    """Discord returned a profile without an email address."""

    external_id: str


@dataclass(frozen=True)
class Ok(Generic[T]):
    value: T


@dataclass(frozen=True)
class Err(Generic[E]):
    error: E


Result = Union[Ok[T], Err[E]]


__all__ = [
    "ACCOUNT_SETUP_FAILED",
    "DISCORD_AUTH_FAILED",
    "Err",
    "MissingEmail",
    "Ok",
    "PanelConflict",
    "ProviderAuthFailure",
    "ProvisioningError",
    "Result",
]

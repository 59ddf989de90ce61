"""Service layer helpers."""

from .accounts import AccountReconciler, generate_password, normalize_email
from .discord import DiscordProvider
from .gateway import AuthGateway, IdentityProvider
from .panel import PanelClient
from .store import KeyValueStore, SQLModelStore, email_key, user_key

__all__ = [
    "AccountReconciler",
    "AuthGateway",
    "DiscordProvider",
    "IdentityProvider",
    "KeyValueStore",
    "PanelClient",
    "SQLModelStore",
    "email_key",
    "generate_password",
    "normalize_email",
    "user_key",
]

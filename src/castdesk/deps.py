"""Dependency injection singletons for castdesk."""

from castdesk.common.config import get_settings
from castdesk.common.database import DatabaseManager
from castdesk.accounts.service import AccountService
from castdesk.casting.service import CastingService
from castdesk.messaging.service import MessagingService

_db: DatabaseManager | None = None
_accounts: AccountService | None = None
_casting: CastingService | None = None
_messaging: MessagingService | None = None


def get_db() -> DatabaseManager:
    global _db
    if _db is None:
        _db = DatabaseManager(get_settings())
    return _db


def get_account_service() -> AccountService:
    global _accounts
    if _accounts is None:
        _accounts = AccountService()
    return _accounts


def get_casting_service() -> CastingService:
    global _casting
    if _casting is None:
        _casting = CastingService()
    return _casting


def get_messaging_service() -> MessagingService:
    global _messaging
    if _messaging is None:
        _messaging = MessagingService(get_casting_service())
    return _messaging


def reset_singletons() -> None:
    """Reset all singletons (for testing)."""
    global _db, _accounts, _casting, _messaging
    _db = None
    _accounts = None
    _casting = None
    _messaging = None

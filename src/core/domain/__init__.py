"""
Domain models and value objects.

Contains the multisig domain entities: Transaction, MultisigConfig and notifications.
"""

from src.core.domain.config import (
    MAX_OWNERS_DEFAULT,
    MAX_RETURN_SIZE_DEFAULT,
    MultisigConfig,
)
from src.core.domain.notifications import (
    Confirmed,
    Deposit,
    Executed,
    Notification,
    NotificationKind,
    Revoked,
    Submitted,
)
from src.core.domain.transaction import (
    MAX_PAYLOAD_SIZE_DEFAULT,
    MAX_SELECTOR_LENGTH_DEFAULT,
    Transaction,
)

__all__ = [
    # Transaction model
    "Transaction",
    "MAX_PAYLOAD_SIZE_DEFAULT",
    "MAX_SELECTOR_LENGTH_DEFAULT",
    # Config
    "MultisigConfig",
    "MAX_OWNERS_DEFAULT",
    "MAX_RETURN_SIZE_DEFAULT",
    # Notifications
    "Notification",
    "NotificationKind",
    "Deposit",
    "Submitted",
    "Confirmed",
    "Revoked",
    "Executed",
]

"""Multisig — multi-owner transaction authorization engine.

- OwnerRegistry: фиксированный набор owners
- ConfirmationTracker: флаги подтверждений (index, owner)
- TransactionStore: append-only хранилище транзакций
- AuthorizationEngine: propose → confirm/revoke → execute
"""

from .confirmation_tracker import ConfirmationTracker
from .encoding import CallEncoder, RawCallEncoder, SelectorCallEncoder, derive_selector
from .engine import AuthorizationEngine
from .events import InMemoryNotificationSink, NotificationSink, NullNotificationSink
from .invoker import CallInvoker, CallResult
from .owner_registry import OwnerRegistry
from .transaction_store import TransactionStore

__all__ = [
    "AuthorizationEngine",
    "OwnerRegistry",
    "ConfirmationTracker",
    "TransactionStore",
    "CallEncoder",
    "SelectorCallEncoder",
    "RawCallEncoder",
    "derive_selector",
    "CallInvoker",
    "CallResult",
    "NotificationSink",
    "NullNotificationSink",
    "InMemoryNotificationSink",
]

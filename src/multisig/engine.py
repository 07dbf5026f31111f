"""AuthorizationEngine — state machine транзакций multisig.

Lifecycle транзакции: Open (default) → Executed (terminal).
- submit: любой owner создаёт Open транзакцию с num_confirmations = 0
- confirm/revoke: только в Open, одно подтверждение на owner
- execute: только в Open и при num_confirmations >= threshold, ровно один раз

Атомарность:
- Все операции сериализованы одним engine lock
- execute помечает транзакцию executed и списывает value ДО внешнего вызова;
  при неудаче вызова транзакция, подтверждения и баланс пула восстанавливаются
  из snapshot, а уведомления, накопленные во время вызова, отбрасываются
- Изменяющие вызовы изнутри внешнего вызова (reentry) отклоняются ReentrantCall;
  queries и deposit разрешены
- Уведомления публикуются после фиксации состояния; ошибка sink логируется
  и не отменяет операцию
"""

import logging
import threading
from dataclasses import dataclass
from typing import Any, Dict, List, Optional

from src.core.contracts import validate_transaction_view
from src.core.domain.config import MultisigConfig
from src.core.domain.notifications import (
    Confirmed,
    Deposit,
    Executed,
    Notification,
    Revoked,
    Submitted,
)
from src.core.domain.transaction import Transaction
from src.core.errors import (
    AlreadyConfirmed,
    AlreadyExecuted,
    ExecutionFailed,
    InsufficientConfirmations,
    InvalidConfig,
    NotConfirmed,
    NotOwner,
    ReentrantCall,
)
from src.multisig.confirmation_tracker import ConfirmationTracker
from src.multisig.encoding import CallEncoder, SelectorCallEncoder
from src.multisig.events import NotificationSink, NullNotificationSink
from src.multisig.invoker import CallInvoker
from src.multisig.owner_registry import OwnerRegistry
from src.multisig.transaction_store import TransactionStore

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class _ExecutionSnapshot:
    """Состояние до execute, восстанавливаемое при неудаче вызова."""

    index: int
    transaction: Transaction
    confirmations: Dict[str, bool]
    balance: int


class AuthorizationEngine:
    """Multi-owner authorization engine.

    Args:
        config: owners, threshold и лимиты
        invoker: capability внешнего вызова
        encoder: стратегия кодирования вызова (default: SelectorCallEncoder)
        sink: consumer уведомлений (default: уведомления отбрасываются)
        initial_balance: начальный баланс пула
    """

    def __init__(
        self,
        config: MultisigConfig,
        invoker: CallInvoker,
        encoder: Optional[CallEncoder] = None,
        sink: Optional[NotificationSink] = None,
        initial_balance: int = 0,
    ):
        if initial_balance < 0:
            raise InvalidConfig(f"initial_balance must be non-negative, got {initial_balance}")

        self.config = config
        self._registry = OwnerRegistry.initialize(config.owners)
        self._store = TransactionStore(capacity=config.capacity)
        self._tracker = ConfirmationTracker()
        self._invoker = invoker
        self._encoder = encoder or SelectorCallEncoder()
        self._sink = sink or NullNotificationSink()
        self._balance = initial_balance

        self._lock = threading.RLock()
        self._in_call = False
        self._pending: Optional[List[Notification]] = None

        logger.info(
            "multisig engine initialized: %d owners, threshold=%d",
            len(self._registry),
            config.threshold,
        )

    @classmethod
    def from_owners(
        cls,
        owners: List[str],
        threshold: int,
        invoker: CallInvoker,
        **kwargs: Any,
    ) -> "AuthorizationEngine":
        """Создание engine из owners и threshold (лимиты — по умолчанию).

        Raises:
            InvalidConfig: при невалидных owners или threshold
        """
        return cls(MultisigConfig.create(owners, threshold), invoker, **kwargs)

    @property
    def threshold(self) -> int:
        return self.config.threshold

    # =========================================================================
    # STATE TRANSITIONS
    # =========================================================================

    def submit_transaction(
        self,
        caller: str,
        target: str,
        value: int,
        payload: bytes = b"",
        function_selector: str = "",
    ) -> int:
        """Предложение новой транзакции.

        Args:
            caller: identity вызывающего (должен быть owner)
            target: получатель внешнего вызова
            value: сумма из пула
            payload: opaque data для target
            function_selector: имя целевой функции

        Returns:
            Index новой транзакции

        Raises:
            NotOwner: caller не owner
            CapacityExceeded: хранилище заполнено
            pydantic.ValidationError: невалидные поля транзакции
        """
        with self._lock:
            self._guard_reentry("submit_transaction")
            self._require_owner(caller)

            tx = Transaction.model_validate(
                {
                    "target": target,
                    "value": value,
                    "payload": payload,
                    "function_selector": function_selector,
                },
                context=self.config.validation_context,
            )
            index = self._store.append(tx)

            logger.info("tx %d submitted by %s: target=%s value=%d", index, caller, target, value)
            self._emit(
                Submitted(owner=caller, index=index, target=target, value=value, payload=payload)
            )
            return index

    def confirm_transaction(self, caller: str, index: int) -> None:
        """Подтверждение транзакции owner-ом.

        Повторное подтверждение тем же owner отклоняется.

        Raises:
            NotOwner, NotFound, AlreadyExecuted, AlreadyConfirmed
        """
        with self._lock:
            self._guard_reentry("confirm_transaction")
            self._require_owner(caller)
            tx = self._require_open(index)

            if self._tracker.has_confirmed(index, caller):
                logger.warning("tx %d: %s already confirmed", index, caller)
                raise AlreadyConfirmed(index, caller)

            delta = self._tracker.set_confirmed(index, caller, True)
            tx = self._store.set_confirmation_count(index, tx.num_confirmations + delta)

            logger.info(
                "tx %d confirmed by %s (%d/%d)",
                index,
                caller,
                tx.num_confirmations,
                self.threshold,
            )
            self._emit(Confirmed(owner=caller, index=index))

    def revoke_confirmation(self, caller: str, index: int) -> None:
        """Отзыв подтверждения.

        Требует ранее сделанного подтверждения — счётчик не может уйти ниже 0.

        Raises:
            NotOwner, NotFound, AlreadyExecuted, NotConfirmed
        """
        with self._lock:
            self._guard_reentry("revoke_confirmation")
            self._require_owner(caller)
            tx = self._require_open(index)

            if not self._tracker.has_confirmed(index, caller):
                logger.warning("tx %d: %s has no confirmation to revoke", index, caller)
                raise NotConfirmed(index, caller)

            delta = self._tracker.set_confirmed(index, caller, False)
            tx = self._store.set_confirmation_count(index, tx.num_confirmations + delta)

            logger.info(
                "tx %d confirmation revoked by %s (%d/%d)",
                index,
                caller,
                tx.num_confirmations,
                self.threshold,
            )
            self._emit(Revoked(owner=caller, index=index))

    def execute_transaction(self, caller: str, index: int) -> bytes:
        """Исполнение транзакции.

        Порядок:
        1. Проверки: owner, index, Open, num_confirmations >= threshold, баланс пула
        2. executed = True и списание value (до вызова — защита от double execution)
        3. Внешний вызов invoke(target, value, encode(payload, function_selector))
        4. Неудача → rollback snapshot и ExecutionFailed

        Returns:
            Return data вызова, усечённые до max_return_size

        Raises:
            NotOwner, NotFound, AlreadyExecuted, InsufficientConfirmations, ExecutionFailed
        """
        with self._lock:
            self._guard_reentry("execute_transaction")
            self._require_owner(caller)
            tx = self._require_open(index)

            if tx.num_confirmations < self.threshold:
                logger.warning(
                    "tx %d: execution refused, %d/%d confirmations",
                    index,
                    tx.num_confirmations,
                    self.threshold,
                )
                raise InsufficientConfirmations(index, self.threshold, tx.num_confirmations)

            if tx.value > self._balance:
                logger.warning(
                    "tx %d: execution refused, value %d exceeds pool balance %d",
                    index,
                    tx.value,
                    self._balance,
                )
                raise ExecutionFailed(
                    index, f"value {tx.value} exceeds pool balance {self._balance}"
                )

            snapshot = _ExecutionSnapshot(
                index=index,
                transaction=tx,
                confirmations=self._tracker.snapshot(index),
                balance=self._balance,
            )
            data = self._encoder.encode(tx.payload, tx.function_selector)

            self._store.mark_executed(index)
            self._balance -= tx.value
            self._in_call = True
            self._pending = []

            try:
                try:
                    result = self._invoker.invoke(tx.target, tx.value, data)
                except Exception as e:
                    raise ExecutionFailed(
                        index, f"external call raised {type(e).__name__}: {e}"
                    ) from e

                if not result.success:
                    raise ExecutionFailed(
                        index,
                        "external call reported failure",
                        result.return_data[: self.config.max_return_size],
                    )
            except BaseException:
                self._rollback(snapshot)
                raise
            finally:
                self._in_call = False

            pending, self._pending = self._pending, None
            for notification in pending:
                self._publish(notification)

            logger.info("tx %d executed by %s: target=%s value=%d", index, caller, tx.target, tx.value)
            self._emit(Executed(owner=caller, index=index))
            return result.return_data[: self.config.max_return_size]

    def deposit(self, sender: str, amount: int) -> int:
        """Безусловный приём value в пул.

        Returns:
            Новый баланс пула

        Raises:
            pydantic.ValidationError: отрицательная сумма
        """
        with self._lock:
            notification = Deposit(sender=sender, amount=amount, new_balance=self._balance + amount)
            self._balance = notification.new_balance

            logger.info("deposit from %s: amount=%d balance=%d", sender, amount, self._balance)
            self._emit(notification)
            return self._balance

    # =========================================================================
    # QUERIES
    # =========================================================================

    def get_owners(self) -> List[str]:
        return self._registry.list_owners()

    def is_owner(self, identity: str) -> bool:
        return self._registry.is_owner(identity)

    def get_transaction_count(self) -> int:
        with self._lock:
            return self._store.count()

    def get_transaction(self, index: int) -> Transaction:
        """Снапшот транзакции.

        Raises:
            NotFound: index вне диапазона
        """
        with self._lock:
            return self._store.get(index)

    def get_transaction_view(self, index: int) -> Dict[str, Any]:
        """Транзакция во внешнем представлении (контракт transaction_view)."""
        view = self.get_transaction(index).to_view()
        validate_transaction_view(view)
        return view

    def is_confirmed(self, index: int, owner: str) -> bool:
        """Raises NotFound, если транзакции нет."""
        with self._lock:
            self._store.get(index)
            return self._tracker.has_confirmed(index, owner)

    def get_confirmations(self, index: int) -> List[str]:
        """Owners, подтвердившие транзакцию, в порядке подтверждения."""
        with self._lock:
            self._store.get(index)
            return self._tracker.confirmed_by(index)

    def get_balance(self) -> int:
        with self._lock:
            return self._balance

    # =========================================================================
    # INTERNALS
    # =========================================================================

    def _guard_reentry(self, operation: str) -> None:
        if self._in_call:
            logger.warning("%s rejected: external call in progress", operation)
            raise ReentrantCall(operation)

    def _require_owner(self, caller: str) -> None:
        if not self._registry.is_owner(caller):
            logger.warning("rejected call from non-owner %r", caller)
            raise NotOwner(caller)

    def _require_open(self, index: int) -> Transaction:
        tx = self._store.get(index)
        if tx.executed:
            raise AlreadyExecuted(index)
        return tx

    def _rollback(self, snapshot: _ExecutionSnapshot) -> None:
        self._store.restore(snapshot.index, snapshot.transaction)
        self._tracker.restore(snapshot.index, snapshot.confirmations)
        self._balance = snapshot.balance
        self._pending = None
        logger.warning("tx %d: external call failed, state rolled back", snapshot.index)

    def _emit(self, notification: Notification) -> None:
        # Во время внешнего вызова уведомления копятся до commit
        if self._pending is not None:
            self._pending.append(notification)
        else:
            self._publish(notification)

    def _publish(self, notification: Notification) -> None:
        # Состояние уже зафиксировано: ошибка доставки не отменяет операцию
        try:
            self._sink.publish(notification)
        except Exception:
            logger.exception("failed to publish %s notification", notification.kind.value)

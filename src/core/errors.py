"""
Errors — Таксономия ошибок multisig engine

Каждая ошибка синхронно отклоняет операцию целиком: частичных изменений
состояния нет, внутренних retry нет, уровня "warning" нет.

- InvalidConfig: ошибка конфигурации (construction-time, fatal)
- NotOwner / NotFound: caller или index не прошли проверку
- AlreadyExecuted / AlreadyConfirmed / NotConfirmed: нарушение lifecycle
- InsufficientConfirmations: threshold не достигнут
- CapacityExceeded: backing store заполнен
- ExecutionFailed: внешний вызов завершился неудачей (состояние откачено)
- ReentrantCall: изменяющий вызов изнутри выполняющегося внешнего вызова
"""

from typing import Optional


class MultisigError(Exception):
    """Базовая ошибка multisig engine."""

    pass


class InvalidConfig(MultisigError):
    """Невалидная конфигурация: пустой список owners, пустая identity, дубликат, threshold вне диапазона."""

    pass


class NotOwner(MultisigError):
    """Caller не является зарегистрированным owner."""

    def __init__(self, caller: object):
        self.caller = caller
        super().__init__(f"caller {caller!r} is not an owner")


class NotFound(MultisigError):
    """Транзакция с указанным index не существует."""

    def __init__(self, index: int, count: int):
        self.index = index
        self.count = count
        super().__init__(f"transaction {index} does not exist (count={count})")


class AlreadyExecuted(MultisigError):
    """Транзакция уже исполнена (terminal state)."""

    def __init__(self, index: int):
        self.index = index
        super().__init__(f"transaction {index} already executed")


class AlreadyConfirmed(MultisigError):
    """Owner уже подтвердил транзакцию."""

    def __init__(self, index: int, owner: str):
        self.index = index
        self.owner = owner
        super().__init__(f"transaction {index} already confirmed by {owner!r}")


class NotConfirmed(MultisigError):
    """Owner не подтверждал транзакцию — revoke невозможен."""

    def __init__(self, index: int, owner: str):
        self.index = index
        self.owner = owner
        super().__init__(f"transaction {index} not confirmed by {owner!r}")


class InsufficientConfirmations(MultisigError):
    """Число подтверждений ниже threshold."""

    def __init__(self, index: int, required: int, actual: int):
        self.index = index
        self.required = required
        self.actual = actual
        super().__init__(
            f"transaction {index} has {actual} confirmations, {required} required"
        )


class CapacityExceeded(MultisigError):
    """Хранилище транзакций заполнено."""

    def __init__(self, capacity: int):
        self.capacity = capacity
        super().__init__(f"transaction store is full (capacity={capacity})")


class ExecutionFailed(MultisigError):
    """
    Внешний вызов завершился неудачей.

    На момент raise состояние уже восстановлено: транзакция снова Open,
    подтверждения и баланс пула не изменены.
    """

    def __init__(self, index: int, reason: str, return_data: Optional[bytes] = None):
        self.index = index
        self.reason = reason
        self.return_data = return_data
        super().__init__(f"execution of transaction {index} failed: {reason}")


class ReentrantCall(MultisigError):
    """Изменяющая операция вызвана во время выполнения внешнего вызова."""

    def __init__(self, operation: str):
        self.operation = operation
        super().__init__(f"{operation} is not allowed while an external call is in progress")

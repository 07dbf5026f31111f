"""
Notifications — Уведомления multisig engine

Immutable Pydantic модели событий. Публикуются только после успешного
завершения операции; доставка и retry — забота внешнего consumer.
"""

from enum import Enum
from typing import Union

from pydantic import BaseModel, Field


class NotificationKind(str, Enum):
    """Тип уведомления"""

    DEPOSIT = "Deposit"
    SUBMITTED = "Submitted"
    CONFIRMED = "Confirmed"
    REVOKED = "Revoked"
    EXECUTED = "Executed"


class Deposit(BaseModel):
    """Входящий перевод в пул без вызова операции."""

    kind: NotificationKind = NotificationKind.DEPOSIT
    sender: str = Field(..., description="Отправитель")
    amount: int = Field(..., ge=0, description="Сумма перевода")
    new_balance: int = Field(..., ge=0, description="Баланс пула после перевода")

    model_config = {"frozen": True}


class Submitted(BaseModel):
    """Owner предложил транзакцию."""

    kind: NotificationKind = NotificationKind.SUBMITTED
    owner: str
    index: int = Field(..., ge=0)
    target: str
    value: int = Field(..., ge=0)
    payload: bytes

    model_config = {"frozen": True}


class Confirmed(BaseModel):
    """Owner подтвердил транзакцию."""

    kind: NotificationKind = NotificationKind.CONFIRMED
    owner: str
    index: int = Field(..., ge=0)

    model_config = {"frozen": True}


class Revoked(BaseModel):
    """Owner отозвал подтверждение."""

    kind: NotificationKind = NotificationKind.REVOKED
    owner: str
    index: int = Field(..., ge=0)

    model_config = {"frozen": True}


class Executed(BaseModel):
    """Транзакция исполнена."""

    kind: NotificationKind = NotificationKind.EXECUTED
    owner: str
    index: int = Field(..., ge=0)

    model_config = {"frozen": True}


Notification = Union[Deposit, Submitted, Confirmed, Revoked, Executed]

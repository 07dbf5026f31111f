"""Notification sinks.

Engine публикует уведомления после успешной операции. Доставка, хранение
и retry — ответственность sink; ошибки sink пробрасываются caller.
"""

from typing import List, Protocol, Type

from src.core.domain.notifications import Notification


class NotificationSink(Protocol):
    """Consumer уведомлений engine."""

    def publish(self, notification: Notification) -> None:
        ...


class NullNotificationSink:
    """Sink, отбрасывающий уведомления."""

    def publish(self, notification: Notification) -> None:
        pass


class InMemoryNotificationSink:
    """Sink, сохраняющий уведомления в порядке публикации."""

    def __init__(self):
        self.notifications: List[Notification] = []

    def publish(self, notification: Notification) -> None:
        self.notifications.append(notification)

    def of_type(self, notification_type: Type) -> List[Notification]:
        """Уведомления заданного типа (например, Deposit)."""
        return [n for n in self.notifications if isinstance(n, notification_type)]

    def clear(self) -> None:
        self.notifications.clear()

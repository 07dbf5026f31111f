"""ConfirmationTracker — флаги подтверждений (index, owner) → bool.

По умолчанию флаг False. set_confirmed возвращает signed delta (+1/-1/0),
которую engine применяет к num_confirmations транзакции в той же операции.
"""

import logging
from typing import Dict, List

logger = logging.getLogger(__name__)


class ConfirmationTracker:
    """Подтверждения по транзакциям.

    Для каждого index хранится dict owner → True в порядке подтверждения;
    отсутствие ключа означает False.
    """

    def __init__(self):
        self._rows: Dict[int, Dict[str, bool]] = {}

    def has_confirmed(self, index: int, owner: str) -> bool:
        return self._rows.get(index, {}).get(owner, False)

    def set_confirmed(self, index: int, owner: str, value: bool) -> int:
        """Установка флага подтверждения.

        Args:
            index: index транзакции
            owner: owner identity
            value: новое значение флага

        Returns:
            Delta для num_confirmations: +1 (False → True), -1 (True → False), 0 (без изменений)
        """
        previous = self.has_confirmed(index, owner)
        if previous == value:
            return 0

        row = self._rows.setdefault(index, {})
        if value:
            row[owner] = True
        else:
            del row[owner]
            if not row:
                del self._rows[index]

        delta = 1 if value else -1
        logger.debug("confirmation flag tx=%d owner=%s -> %s (delta=%+d)", index, owner, value, delta)
        return delta

    def confirmed_by(self, index: int) -> List[str]:
        """Owners с флагом True для транзакции, в порядке подтверждения."""
        return list(self._rows.get(index, {}))

    def count(self, index: int) -> int:
        return len(self._rows.get(index, {}))

    def snapshot(self, index: int) -> Dict[str, bool]:
        """Копия строки флагов для rollback."""
        return dict(self._rows.get(index, {}))

    def restore(self, index: int, row: Dict[str, bool]) -> None:
        """Восстановление строки флагов из snapshot."""
        if row:
            self._rows[index] = dict(row)
        else:
            self._rows.pop(index, None)

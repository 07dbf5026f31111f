"""TransactionStore — append-only индексированное хранилище транзакций.

Индексы плотные (0..count-1), стабильные и никогда не переиспользуются.
Транзакции хранятся как immutable снапшоты; мутаторы заменяют снапшот.
"""

import logging
from typing import List, Optional

from src.core.domain.transaction import Transaction
from src.core.errors import CapacityExceeded, NotFound

logger = logging.getLogger(__name__)


class TransactionStore:
    """Хранилище транзакций.

    Args:
        capacity: максимум транзакций; None — без ограничения
    """

    def __init__(self, capacity: Optional[int] = None):
        self._capacity = capacity
        self._items: List[Transaction] = []

    @property
    def capacity(self) -> Optional[int]:
        return self._capacity

    def append(self, tx: Transaction) -> int:
        """Добавление транзакции.

        Returns:
            Назначенный index

        Raises:
            CapacityExceeded: если хранилище заполнено
        """
        if self._capacity is not None and len(self._items) >= self._capacity:
            raise CapacityExceeded(self._capacity)
        self._items.append(tx)
        index = len(self._items) - 1
        logger.debug("stored transaction %d -> %s", index, tx.target)
        return index

    def get(self, index: int) -> Transaction:
        """Транзакция по index.

        Raises:
            NotFound: если index < 0 или index >= count
        """
        if index < 0 or index >= len(self._items):
            raise NotFound(index, len(self._items))
        return self._items[index]

    def count(self) -> int:
        return len(self._items)

    # -------------------------------------------------------------------------
    # Internal mutators (только для AuthorizationEngine)
    # -------------------------------------------------------------------------

    def mark_executed(self, index: int, executed: bool = True) -> Transaction:
        tx = self.get(index).model_copy(update={"executed": executed})
        self._items[index] = tx
        return tx

    def set_confirmation_count(self, index: int, n: int) -> Transaction:
        if n < 0:
            raise ValueError(f"confirmation count must be non-negative, got {n}")
        tx = self.get(index).model_copy(update={"num_confirmations": n})
        self._items[index] = tx
        return tx

    def restore(self, index: int, tx: Transaction) -> None:
        """Замена снапшота (rollback после неудачного execute)."""
        self.get(index)
        self._items[index] = tx

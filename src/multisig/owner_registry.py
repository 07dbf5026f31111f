"""OwnerRegistry — фиксированный набор owner identities.

Набор задаётся при инициализации и далее не меняется: ни добавления,
ни удаления owners нет.
"""

from typing import Iterable, List, Tuple

from src.core.errors import InvalidConfig


class OwnerRegistry:
    """Упорядоченный набор owners без дубликатов."""

    def __init__(self, owners: Tuple[str, ...]):
        self._owners = owners
        self._members = frozenset(owners)

    @classmethod
    def initialize(cls, owners: Iterable[str]) -> "OwnerRegistry":
        """Создание registry из последовательности identities.

        Args:
            owners: owners в порядке регистрации

        Raises:
            InvalidConfig: строка вместо последовательности, пустая последовательность,
                пустая/None identity или дубликат
        """
        if isinstance(owners, str):
            raise InvalidConfig("owners must be a sequence of identities, not a string")

        ordered: List[str] = []
        seen = set()
        for owner in owners:
            if owner is None or owner == "":
                raise InvalidConfig("owner identity must not be empty")
            if owner in seen:
                raise InvalidConfig(f"duplicate owner {owner!r}")
            seen.add(owner)
            ordered.append(owner)

        if not ordered:
            raise InvalidConfig("owners must not be empty")

        return cls(tuple(ordered))

    def is_owner(self, identity: object) -> bool:
        return identity in self._members

    def list_owners(self) -> List[str]:
        """Owners в порядке регистрации (копия)."""
        return list(self._owners)

    def __contains__(self, identity: object) -> bool:
        return self.is_owner(identity)

    def __len__(self) -> int:
        return len(self._owners)

"""External call capability.

Механизм внешнего вызова с передачей value — внешний collaborator:
invoke(target, value, data) -> CallResult(success, return_data).
"""

from dataclasses import dataclass
from typing import Protocol


@dataclass(frozen=True)
class CallResult:
    """Результат внешнего вызова."""

    success: bool
    return_data: bytes = b""


class CallInvoker(Protocol):
    """Opaque capability внешнего вызова.

    Может как вернуть CallResult(success=False, ...), так и бросить исключение;
    engine трактует оба случая как ExecutionFailed.
    """

    def invoke(self, target: str, value: int, data: bytes) -> CallResult:
        ...

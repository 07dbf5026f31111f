"""
Transaction — Модель предложенной транзакции multisig

Immutable Pydantic модель (frozen=True). Store хранит снапшоты: любое изменение
(confirm/revoke/execute) создаёт новый экземпляр через model_copy(update=...).
Identity транзакции — позиционный index в TransactionStore, в модели не хранится.

Инварианты:
1. executed монотонен: False → True, обратный переход только через rollback engine
2. num_confirmations >= 0 и равен числу owners с confirmation flag = True
"""

from typing import Any, Dict, Final, Optional

from pydantic import BaseModel, Field, ValidationInfo, field_validator


# =============================================================================
# ОГРАНИЧЕНИЯ ПО УМОЛЧАНИЮ
# =============================================================================

# Максимальная длина function selector (human-readable имя функции)
MAX_SELECTOR_LENGTH_DEFAULT: Final[int] = 100

# Максимальный размер payload (bytes)
MAX_PAYLOAD_SIZE_DEFAULT: Final[int] = 1024


# =============================================================================
# TRANSACTION MODEL
# =============================================================================


class Transaction(BaseModel):
    """
    Предложенное внешнее действие: (target, value, payload, function_selector).

    Лимиты длины берутся из validation context (ключи max_payload_size,
    max_selector_length), иначе используются значения по умолчанию.
    """

    target: str = Field(..., min_length=1, description="Identity получателя внешнего вызова")
    value: int = Field(..., ge=0, description="Сумма из пула, передаваемая вместе с вызовом")
    payload: bytes = Field(default=b"", description="Opaque data blob для target")
    function_selector: str = Field(
        default="", description="Human-readable имя целевой функции"
    )
    executed: bool = Field(default=False, description="Terminal flag, False → True")
    num_confirmations: int = Field(
        default=0, ge=0, description="Денормализованный счётчик подтверждений"
    )

    model_config = {"frozen": True, "strict": True}

    @field_validator("payload")
    @classmethod
    def validate_payload_size(cls, v: bytes, info: ValidationInfo) -> bytes:
        """Проверка размера payload против лимита из context."""
        limit = _context_limit(info, "max_payload_size", MAX_PAYLOAD_SIZE_DEFAULT)
        if len(v) > limit:
            raise ValueError(f"payload size {len(v)} exceeds limit {limit}")
        return v

    @field_validator("function_selector")
    @classmethod
    def validate_selector_length(cls, v: str, info: ValidationInfo) -> str:
        """Проверка длины function selector против лимита из context."""
        limit = _context_limit(info, "max_selector_length", MAX_SELECTOR_LENGTH_DEFAULT)
        if len(v) > limit:
            raise ValueError(f"function_selector length {len(v)} exceeds limit {limit}")
        return v

    @property
    def is_open(self) -> bool:
        """True пока транзакция не исполнена."""
        return not self.executed

    def to_view(self) -> Dict[str, Any]:
        """
        Внешнее представление транзакции (getTransaction).

        Payload кодируется hex-строкой для JSON-совместимости.

        Returns:
            dict, соответствующий контракту transaction_view
        """
        return {
            "target": self.target,
            "value": self.value,
            "payload": self.payload.hex(),
            "function_selector": self.function_selector,
            "executed": self.executed,
            "num_confirmations": self.num_confirmations,
        }


def _context_limit(info: ValidationInfo, key: str, default: int) -> int:
    context: Optional[Dict[str, Any]] = info.context
    if context and context.get(key) is not None:
        return int(context[key])
    return default

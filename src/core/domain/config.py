"""
MultisigConfig — Конфигурация multisig engine

Immutable Pydantic модель: owners, threshold и лимиты engine.

Инварианты (проверяются при создании):
1. owners непуст, без пустых identity и без дубликатов, не больше max_owners
2. 1 <= threshold <= len(owners)

Загрузка из dict/JSON сначала проходит JSON Schema контракт multisig_config,
затем валидацию модели. Любое нарушение → InvalidConfig.
"""

import json
from pathlib import Path
from typing import Any, Dict, Final, List, Optional, Union

from jsonschema import ValidationError as SchemaValidationError
from pydantic import BaseModel, Field, ValidationError, model_validator

from src.core.contracts import validate_multisig_config
from src.core.domain.transaction import MAX_PAYLOAD_SIZE_DEFAULT, MAX_SELECTOR_LENGTH_DEFAULT
from src.core.errors import InvalidConfig


# =============================================================================
# ЛИМИТЫ ПО УМОЛЧАНИЮ
# =============================================================================

MAX_OWNERS_DEFAULT: Final[int] = 10

# Размер bounded return buffer внешнего вызова (bytes)
MAX_RETURN_SIZE_DEFAULT: Final[int] = 32


# =============================================================================
# CONFIG MODEL
# =============================================================================


class MultisigConfig(BaseModel):
    """
    Конфигурация engine.

    capacity=None означает неограниченное хранилище транзакций.
    """

    owners: List[str] = Field(..., description="Owners в порядке регистрации")
    threshold: int = Field(..., ge=1, strict=True, description="Минимум подтверждений для execute")
    max_owners: int = Field(default=MAX_OWNERS_DEFAULT, ge=1, strict=True)
    max_selector_length: int = Field(default=MAX_SELECTOR_LENGTH_DEFAULT, ge=0, strict=True)
    max_payload_size: int = Field(default=MAX_PAYLOAD_SIZE_DEFAULT, ge=0, strict=True)
    max_return_size: int = Field(default=MAX_RETURN_SIZE_DEFAULT, ge=0, strict=True)
    capacity: Optional[int] = Field(default=None, ge=0, strict=True)

    model_config = {"frozen": True}

    @model_validator(mode="after")
    def validate_owners_and_threshold(self) -> "MultisigConfig":
        """Проверка owners (непуст, уникален, без пустых) и диапазона threshold."""
        if not self.owners:
            raise ValueError("owners must not be empty")
        if len(self.owners) > self.max_owners:
            raise ValueError(
                f"{len(self.owners)} owners exceed max_owners={self.max_owners}"
            )

        seen = set()
        for owner in self.owners:
            if not owner:
                raise ValueError("owner identity must not be empty")
            if owner in seen:
                raise ValueError(f"duplicate owner {owner!r}")
            seen.add(owner)

        if self.threshold > len(self.owners):
            raise ValueError(
                f"threshold {self.threshold} exceeds number of owners {len(self.owners)}"
            )
        return self

    @property
    def validation_context(self) -> Dict[str, int]:
        """Context для валидации Transaction (лимиты payload/selector)."""
        return {
            "max_payload_size": self.max_payload_size,
            "max_selector_length": self.max_selector_length,
        }

    # -------------------------------------------------------------------------
    # Загрузка
    # -------------------------------------------------------------------------

    @classmethod
    def create(cls, owners: List[str], threshold: int, **limits: Any) -> "MultisigConfig":
        """
        Создание конфигурации с конверсией ошибок валидации в InvalidConfig.

        Raises:
            InvalidConfig: при нарушении любого инварианта
        """
        if isinstance(owners, str):
            raise InvalidConfig("owners must be a sequence of identities, not a string")
        try:
            return cls(owners=list(owners), threshold=threshold, **limits)
        except ValidationError as e:
            raise InvalidConfig(str(e)) from e

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "MultisigConfig":
        """
        Загрузка из dict через контракт multisig_config.

        Args:
            data: raw конфигурация (например, из JSON)

        Raises:
            InvalidConfig: если нарушен контракт или инварианты модели
        """
        try:
            validate_multisig_config(data)
        except SchemaValidationError as e:
            raise InvalidConfig(f"multisig_config contract violation: {e.message}") from e

        try:
            return cls.model_validate(data)
        except ValidationError as e:
            raise InvalidConfig(str(e)) from e

    @classmethod
    def from_json_file(cls, path: Union[str, Path]) -> "MultisigConfig":
        """
        Загрузка из JSON файла.

        Raises:
            InvalidConfig: если файл не читается, не является валидным JSON
                или нарушен контракт
        """
        try:
            with open(path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except json.JSONDecodeError as e:
            raise InvalidConfig(f"invalid JSON in {path}: {e}") from e
        except OSError as e:
            raise InvalidConfig(f"cannot read config {path}: {e}") from e

        if not isinstance(data, dict):
            raise InvalidConfig(f"config root in {path} must be an object")
        return cls.from_dict(data)

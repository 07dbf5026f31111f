"""Call encoding — сборка data для внешнего вызова из payload и function selector.

SelectorCallEncoder (по умолчанию): 4-byte selector, полученный хешированием
human-readable имени функции (sha3_256), затем raw payload.
RawCallEncoder: payload без изменений.

Внимание: hashlib.sha3_256 — это FIPS-202 SHA3, а не keccak256 из EVM.
Derived selector НЕ совпадает с EVM ABI selector (keccak256(signature)[:4]);
для wire-совместимости с EVM нужен собственный CallEncoder на keccak256.
"""

import hashlib
from typing import Final, Protocol

# Длина derived selector (bytes)
SELECTOR_SIZE: Final[int] = 4


class CallEncoder(Protocol):
    """Стратегия кодирования вызова."""

    def encode(self, payload: bytes, function_selector: str) -> bytes:
        ...


def derive_selector(function_selector: str) -> bytes:
    """Первые SELECTOR_SIZE bytes sha3_256 от UTF-8 имени функции.

    Examples:
        >>> len(derive_selector("transfer(address,uint256)"))
        4
    """
    return hashlib.sha3_256(function_selector.encode("utf-8")).digest()[:SELECTOR_SIZE]


class SelectorCallEncoder:
    """selector(function_selector) + payload; пустой selector → raw payload."""

    def encode(self, payload: bytes, function_selector: str) -> bytes:
        if not function_selector:
            return bytes(payload)
        return derive_selector(function_selector) + bytes(payload)


class RawCallEncoder:
    """Payload передаётся target как есть, selector игнорируется."""

    def encode(self, payload: bytes, function_selector: str) -> bytes:
        return bytes(payload)

"""Тесты для call encoding."""

import hashlib

from src.multisig.encoding import (
    SELECTOR_SIZE,
    RawCallEncoder,
    SelectorCallEncoder,
    derive_selector,
)


def test_derive_selector_is_hash_prefix():
    expected = hashlib.sha3_256(b"transfer(address,uint256)").digest()[:4]

    assert derive_selector("transfer(address,uint256)") == expected
    assert len(derive_selector("x")) == SELECTOR_SIZE


def test_derive_selector_is_not_evm_keccak():
    """sha3_256 != keccak256: EVM selector transfer(address,uint256) = a9059cbb"""
    assert derive_selector("transfer(address,uint256)") != bytes.fromhex("a9059cbb")


def test_derive_selector_distinguishes_names():
    assert derive_selector("approve(address,uint256)") != derive_selector("transfer(address,uint256)")


def test_selector_encoder_prefixes_payload():
    data = SelectorCallEncoder().encode(b"\xaa\xbb", "ping()")

    assert data[:SELECTOR_SIZE] == derive_selector("ping()")
    assert data[SELECTOR_SIZE:] == b"\xaa\xbb"


def test_selector_encoder_empty_selector_passes_payload():
    assert SelectorCallEncoder().encode(b"\x01", "") == b"\x01"


def test_raw_encoder_ignores_selector():
    assert RawCallEncoder().encode(b"\x01\x02", "ping()") == b"\x01\x02"

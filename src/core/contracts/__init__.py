"""
Contract Validation Module

Модуль для валидации JSON контрактов multisig engine.
"""

from .validators import (
    ContractValidator,
    MultisigConfigValidator,
    SchemaLoader,
    TransactionViewValidator,
    validate_multisig_config,
    validate_transaction_view,
)

__all__ = [
    # Classes
    "SchemaLoader",
    "ContractValidator",
    "MultisigConfigValidator",
    "TransactionViewValidator",
    # Functions
    "validate_multisig_config",
    "validate_transaction_view",
]

"""
Tests for JSON Schema Contract Validators

Комплексное тестирование JSON Schema валидаторов:
- Валидность самих схем
- Валидация правильных данных
- Детекция нарушений required полей
- Детекция нарушений типов и constraints
- Интеграция с Pydantic моделями
"""

import pytest
from jsonschema import Draft202012Validator, ValidationError

from src.core.contracts import (
    MultisigConfigValidator,
    SchemaLoader,
    TransactionViewValidator,
    validate_multisig_config,
    validate_transaction_view,
)
from src.core.domain import Transaction


# =============================================================================
# FIXTURES - VALID DATA SAMPLES
# =============================================================================


@pytest.fixture
def valid_config():
    """Валидный multisig_config."""
    return {
        "owners": ["0xA", "0xB", "0xC"],
        "threshold": 2,
        "max_owners": 10,
        "max_selector_length": 100,
        "max_payload_size": 1024,
        "max_return_size": 32,
        "capacity": None,
    }


@pytest.fixture
def valid_view():
    """Валидный transaction_view."""
    return {
        "target": "0xT",
        "value": 5,
        "payload": "deadbeef",
        "function_selector": "transfer(address,uint256)",
        "executed": False,
        "num_confirmations": 1,
    }


# =============================================================================
# SCHEMA LOADER
# =============================================================================


class TestSchemaLoader:
    """Загрузка и meta-validation схем"""

    @pytest.mark.parametrize("schema_name", ["multisig_config", "transaction_view"])
    def test_schemas_are_valid_draft_2020_12(self, schema_name):
        schema = SchemaLoader().load_schema(schema_name)
        Draft202012Validator.check_schema(schema)

    def test_schema_cached(self):
        loader = SchemaLoader()
        assert loader.load_schema("multisig_config") is loader.load_schema("multisig_config")

    def test_missing_schema(self):
        with pytest.raises(FileNotFoundError):
            SchemaLoader().load_schema("does_not_exist")

    def test_missing_schema_dir(self, tmp_path):
        with pytest.raises(RuntimeError):
            SchemaLoader(tmp_path / "nope")

    def test_invalid_schema_rejected(self, tmp_path):
        (tmp_path / "broken.json").write_text('{"type": 42}', encoding="utf-8")

        with pytest.raises(ValueError, match="Invalid JSON Schema"):
            SchemaLoader(tmp_path).load_schema("broken")


# =============================================================================
# MULTISIG CONFIG CONTRACT
# =============================================================================


class TestMultisigConfigContract:
    def test_valid(self, valid_config):
        validate_multisig_config(valid_config)

    def test_minimal(self):
        validate_multisig_config({"owners": ["A"], "threshold": 1})

    @pytest.mark.parametrize("field", ["owners", "threshold"])
    def test_missing_required(self, valid_config, field):
        del valid_config[field]
        with pytest.raises(ValidationError):
            validate_multisig_config(valid_config)

    def test_empty_owners(self, valid_config):
        valid_config["owners"] = []
        assert not MultisigConfigValidator().is_valid(valid_config)

    def test_duplicate_owners(self, valid_config):
        valid_config["owners"] = ["A", "A"]
        assert not MultisigConfigValidator().is_valid(valid_config)

    def test_empty_owner_identity(self, valid_config):
        valid_config["owners"] = ["A", ""]
        assert not MultisigConfigValidator().is_valid(valid_config)

    def test_threshold_type(self, valid_config):
        valid_config["threshold"] = "2"
        assert not MultisigConfigValidator().is_valid(valid_config)

    def test_collects_all_errors(self, valid_config):
        valid_config["owners"] = []
        valid_config["threshold"] = 0
        errors = list(MultisigConfigValidator().iter_errors(valid_config))
        assert len(errors) == 2


# =============================================================================
# TRANSACTION VIEW CONTRACT
# =============================================================================


class TestTransactionViewContract:
    def test_valid(self, valid_view):
        validate_transaction_view(valid_view)

    def test_odd_hex_payload(self, valid_view):
        valid_view["payload"] = "abc"
        assert not TransactionViewValidator().is_valid(valid_view)

    def test_negative_confirmations(self, valid_view):
        valid_view["num_confirmations"] = -1
        with pytest.raises(ValidationError):
            validate_transaction_view(valid_view)

    def test_pydantic_model_view_complies(self):
        """Transaction.to_view() соответствует контракту"""
        tx = Transaction(target="0xT", value=0, payload=b"\xde\xad", executed=True, num_confirmations=2)
        validate_transaction_view(tx.to_view())

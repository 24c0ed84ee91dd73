"""
Tests for JSON Schema Contract Validators

Комплексное тестирование JSON Schema валидаторов:
- Валидность самих схем
- Валидация правильных данных
- Детекция нарушений required полей
- Детекция нарушений constraints (pattern/minLength/minItems/uniqueItems)
"""

from importlib import resources

import pytest
from jsonschema import ValidationError

from src.core.contracts import (
    GroupParametersValidator,
    NetworkConfigValidator,
    SchemaLoader,
    validate_group_parameters,
    validate_network_config,
)


# =============================================================================
# FIXTURES - VALID DATA SAMPLES
# =============================================================================


@pytest.fixture
def valid_group_parameters():
    """Валидные group parameters одного notary service."""
    return [
        {"key": "service.0.name", "value": "CN=Notary, O=R3, L=London, C=GB"},
        {"key": "service.0.keys.0", "value": "-----BEGIN PUBLIC KEY-----\n...\n-----END PUBLIC KEY-----\n"},
        {"key": "service.0.flow.protocol.name", "value": "com.r3.corda.notary.plugin.nonvalidating"},
        {"key": "service.0.flow.protocol.version.0", "value": "1"},
        {"key": "service.0.flow.protocol.version.1", "value": "2"},
    ]


@pytest.fixture
def valid_network_config():
    """Валидная конфигурация сети."""
    return {
        "members": ["O=Alice, L=London, C=GB"],
        "notaries": [{"name": "CN=Notary, O=R3, L=London, C=GB", "protocol_versions": [1]}],
        "scheme_name": "CORDA.ECDSA.SECP256R1",
    }


# =============================================================================
# SCHEMA LOADING
# =============================================================================


class TestSchemaLoader:
    """Загрузка и meta-валидация схем"""

    @pytest.mark.parametrize("schema_name", ["group_parameters", "network_config"])
    def test_load_schema(self, schema_name):
        schema = SchemaLoader().load_schema(schema_name)
        assert schema["title"] == schema_name

    def test_schema_cached(self):
        loader = SchemaLoader()
        assert loader.load_schema("group_parameters") is loader.load_schema("group_parameters")

    def test_missing_schema(self):
        with pytest.raises(FileNotFoundError):
            SchemaLoader().load_schema("does_not_exist")

    @pytest.mark.parametrize("schema_name", ["group_parameters", "network_config"])
    def test_schemas_are_package_resources(self, schema_name):
        """Схемы входят в пакет src.core.contracts, а не лежат в корне checkout"""
        resource = resources.files("src.core.contracts") / "schema" / f"{schema_name}.json"
        assert resource.is_file()

    def test_package_without_schemas(self):
        with pytest.raises(FileNotFoundError):
            SchemaLoader("src.core.domain").load_schema("group_parameters")


# =============================================================================
# GROUP PARAMETERS CONTRACT
# =============================================================================


class TestGroupParametersContract:
    """Контракт group_parameters"""

    def test_valid(self, valid_group_parameters):
        validate_group_parameters(valid_group_parameters)
        assert GroupParametersValidator().is_valid(valid_group_parameters)

    def test_empty_is_valid(self):
        validate_group_parameters([])

    def test_multi_digit_index(self, valid_group_parameters):
        valid_group_parameters.append({"key": "service.12.flow.protocol.version.10", "value": "3"})
        validate_group_parameters(valid_group_parameters)

    @pytest.mark.parametrize(
        "key",
        [
            "corda.notary.service.0.name",
            "service.0.keys.1",
            "service.01.name",
            "service.0.flow.protocol.validating",
            "service.x.name",
        ],
    )
    def test_bad_key(self, valid_group_parameters, key):
        valid_group_parameters[0]["key"] = key
        with pytest.raises(ValidationError):
            validate_group_parameters(valid_group_parameters)

    def test_empty_value(self, valid_group_parameters):
        valid_group_parameters[0]["value"] = ""
        with pytest.raises(ValidationError):
            validate_group_parameters(valid_group_parameters)

    def test_missing_value(self, valid_group_parameters):
        del valid_group_parameters[3]["value"]
        with pytest.raises(ValidationError):
            validate_group_parameters(valid_group_parameters)

    def test_duplicate_entry(self, valid_group_parameters):
        valid_group_parameters.append(dict(valid_group_parameters[0]))
        with pytest.raises(ValidationError):
            validate_group_parameters(valid_group_parameters)

    def test_iter_errors_reports_all(self, valid_group_parameters):
        valid_group_parameters[0]["key"] = "bad"
        valid_group_parameters[1]["value"] = ""
        errors = list(GroupParametersValidator().iter_errors(valid_group_parameters))
        assert len(errors) == 2


# =============================================================================
# NETWORK CONFIG CONTRACT
# =============================================================================


class TestNetworkConfigContract:
    """Контракт network_config"""

    def test_valid(self, valid_network_config):
        validate_network_config(valid_network_config)

    def test_all_fields_optional(self):
        validate_network_config({})

    def test_empty_versions(self, valid_network_config):
        valid_network_config["notaries"][0]["protocol_versions"] = []
        assert not NetworkConfigValidator().is_valid(valid_network_config)

    def test_zero_version(self, valid_network_config):
        valid_network_config["notaries"][0]["protocol_versions"] = [0]
        with pytest.raises(ValidationError):
            validate_network_config(valid_network_config)

    def test_empty_scheme_name(self, valid_network_config):
        valid_network_config["scheme_name"] = ""
        with pytest.raises(ValidationError):
            validate_network_config(valid_network_config)

    def test_member_not_string(self, valid_network_config):
        valid_network_config["members"] = [{"O": "Alice"}]
        with pytest.raises(ValidationError):
            validate_network_config(valid_network_config)

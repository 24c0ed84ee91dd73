"""
JSON Schema Contract Validators

Модуль для валидации JSON данных согласно формальным JSON Schema контрактам.
Использует библиотеку jsonschema для проверки соответствия данных схемам.

Схемы:
- group_parameters.json (упорядоченные entries notary services)
- network_config.json (участники, notary declarations, схема ключей)
"""

import json
from importlib import resources
from typing import Any, Dict, Iterator

from jsonschema import Draft202012Validator, SchemaError, ValidationError


# =============================================================================
# SCHEMA LOADER
# =============================================================================


class SchemaLoader:
    """
    Загрузчик JSON Schema контрактов.

    Схемы лежат внутри пакета (schema/*.json рядом с этим модулем) и
    читаются через importlib.resources.
    """

    def __init__(self, package: str = __package__):
        self._schema_root = resources.files(package) / "schema"

        # Кэш загруженных схем
        self._schemas: Dict[str, Dict[str, Any]] = {}

    def load_schema(self, schema_name: str) -> Dict[str, Any]:
        """
        Загрузка и meta-валидация схемы.

        Args:
            schema_name: Имя схемы без расширения (например, 'group_parameters')

        Raises:
            FileNotFoundError: Если схема не входит в пакет
            ValueError: Если файл не является валидной JSON Schema
        """
        cached = self._schemas.get(schema_name)
        if cached is not None:
            return cached

        resource = self._schema_root / f"{schema_name}.json"
        if not resource.is_file():
            raise FileNotFoundError(f"Schema not found in {self._schema_root}: {schema_name}.json")
        schema = json.loads(resource.read_text(encoding="utf-8"))

        try:
            Draft202012Validator.check_schema(schema)
        except SchemaError as e:
            raise ValueError(f"Invalid JSON Schema in {schema_name}.json: {e}") from e

        self._schemas[schema_name] = schema
        return schema


# Глобальный экземпляр загрузчика
_SCHEMA_LOADER = SchemaLoader()


# =============================================================================
# CONTRACT VALIDATORS
# =============================================================================


class ContractValidator:
    """
    Базовый класс для валидаторов контрактов.

    Инкапсулирует логику валидации данных против JSON Schema.
    """

    def __init__(self, schema_name: str):
        self.schema_name = schema_name
        self.schema = _SCHEMA_LOADER.load_schema(schema_name)
        self.validator = Draft202012Validator(self.schema)

    def validate(self, data: Any) -> None:
        """
        Валидация данных против схемы.

        Raises:
            ValidationError: Если данные не соответствуют схеме
        """
        self.validator.validate(data)

    def is_valid(self, data: Any) -> bool:
        """Проверка валидности данных без exception."""
        return self.validator.is_valid(data)

    def iter_errors(self, data: Any) -> Iterator[ValidationError]:
        """Итератор по всем ошибкам валидации."""
        return self.validator.iter_errors(data)


class GroupParametersValidator(ContractValidator):
    """Валидатор для group_parameters контракта."""

    def __init__(self):
        super().__init__("group_parameters")


class NetworkConfigValidator(ContractValidator):
    """Валидатор для network_config контракта."""

    def __init__(self):
        super().__init__("network_config")


# =============================================================================
# CONVENIENCE FUNCTIONS
# =============================================================================


def validate_group_parameters(data: Any) -> None:
    """
    Валидация group parameters (список {"key": ..., "value": ...}).

    Raises:
        ValidationError: Если данные не соответствуют схеме
    """
    GroupParametersValidator().validate(data)


def validate_network_config(data: Any) -> None:
    """
    Валидация конфигурации сети.

    Raises:
        ValidationError: Если данные не соответствуют схеме
    """
    NetworkConfigValidator().validate(data)

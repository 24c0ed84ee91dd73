"""
Contract Validation Module

Модуль для валидации JSON контрактов: group parameters и конфигурация сети.
"""

from .validators import (
    ContractValidator,
    GroupParametersValidator,
    NetworkConfigValidator,
    SchemaLoader,
    validate_group_parameters,
    validate_network_config,
)

__all__ = [
    # Classes
    "SchemaLoader",
    "ContractValidator",
    "GroupParametersValidator",
    "NetworkConfigValidator",
    # Functions
    "validate_group_parameters",
    "validate_network_config",
]

"""Topology — построение тестовой сети с notary services.

Компоненты (в порядке зависимостей):
- IdentityValidator: запрет маркера notary worker в common name
- KeyMaterialProvisioner: схема ключей → ключевые пары
- NotaryTopologyResolver: notary service → worker identity
- GroupParameterEncoder: notary topology → group parameters
- NetworkBuilder: оркестрация шагов и сборка immutable Network
"""

from .builder import NetworkBuilder, build_network
from .config import NetworkConfig, load_network_config
from .group_parameters import NON_VALIDATING_NOTARY_PROTOCOL, GroupParameterEncoder
from .identity_validator import NOTARY_WORKER_TAG, IdentityValidator
from .key_provisioner import KeyMaterialProvisioner
from .notary_resolver import NotaryTopologyResolver, to_notary_worker_name

__all__ = [
    "IdentityValidator",
    "NOTARY_WORKER_TAG",
    "KeyMaterialProvisioner",
    "NotaryTopologyResolver",
    "to_notary_worker_name",
    "GroupParameterEncoder",
    "NON_VALIDATING_NOTARY_PROTOCOL",
    "NetworkConfig",
    "load_network_config",
    "NetworkBuilder",
    "build_network",
]

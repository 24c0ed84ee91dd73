"""
Network — immutable дескриптор тестовой сети

Результат NetworkBuilder.build(): ключи участников, ключи notary workers,
отображение service → worker и упорядоченные group parameters.

Создаётся один раз и потребляется только на чтение (per-suite или per-test
драйвером). Отображения обёрнуты в MappingProxyType, entries — tuple.
"""

from dataclasses import dataclass
from types import MappingProxyType
from typing import Any, Dict, Mapping, Tuple

from src.core.domain.group_parameters import GroupParameterEntry
from src.core.domain.identity import Identity
from src.core.domain.keys import KeyPair


def _freeze(mapping: Mapping) -> Mapping:
    return MappingProxyType(dict(mapping))


@dataclass(frozen=True)
class Network:
    """
    Immutable агрегат сети.

    Attributes:
        members: member Identity → KeyPair (порядок участников)
        notaries: worker Identity → KeyPair (порядок объявления notary)
        notary_workers: service Identity → worker Identity
        group_parameters: упорядоченные entries
        scheme_name: схема, по которой сгенерированы все ключи
    """

    members: Mapping[Identity, KeyPair]
    notaries: Mapping[Identity, KeyPair]
    notary_workers: Mapping[Identity, Identity]
    group_parameters: Tuple[GroupParameterEntry, ...]
    scheme_name: str

    def __post_init__(self) -> None:
        object.__setattr__(self, "members", _freeze(self.members))
        object.__setattr__(self, "notaries", _freeze(self.notaries))
        object.__setattr__(self, "notary_workers", _freeze(self.notary_workers))
        object.__setattr__(self, "group_parameters", tuple(self.group_parameters))

    @property
    def notary_services(self) -> Tuple[Identity, ...]:
        """Notary services в порядке объявления."""
        return tuple(self.notary_workers)

    def worker_for(self, service: Identity) -> Identity:
        """
        Worker identity для notary service.

        Raises:
            KeyError: Если service не объявлен в сети
        """
        try:
            return self.notary_workers[service]
        except KeyError:
            raise KeyError(f"{service} is not a notary service of this network") from None

    def notary_public_key(self, service: Identity) -> Any:
        """Публичный ключ worker'а, стоящего за notary service."""
        return self.notaries[self.worker_for(service)].public_key

    def group_parameters_as_dict(self) -> Dict[str, str]:
        """Group parameters как dict (порядок entries сохраняется)."""
        return {entry.key: entry.value for entry in self.group_parameters}

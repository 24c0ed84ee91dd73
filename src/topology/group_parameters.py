"""
GroupParameterEncoder — кодирование notary topology в group parameters

Для каждого notary service (в порядке объявления, индекс i с нуля) entries
выдаются подряд и в фиксированном порядке:

    service.<i>.name                     = <identity сервиса>
    service.<i>.keys.0                   = <публичный ключ worker'а>
    service.<i>.flow.protocol.name       = com.r3.corda.notary.plugin.nonvalidating
    service.<i>.flow.protocol.version.<j> = <версия>   (j с нуля, порядок объявления)

Поддерживаются только non-validating notaries.
"""

import logging
from typing import Final, List, Mapping, Sequence, Tuple

from src.core.contracts import validate_group_parameters
from src.core.crypto.schemes import SchemeRegistry
from src.core.domain.group_parameters import GroupParameterEntry
from src.core.domain.identity import Identity
from src.core.domain.keys import KeyPair
from src.core.domain.notary import NotaryDeclaration


logger = logging.getLogger(__name__)


NON_VALIDATING_NOTARY_PROTOCOL: Final[str] = "com.r3.corda.notary.plugin.nonvalidating"

SERVICE_KEY_PREFIX: Final[str] = "service"


class GroupParameterEncoder:
    """Кодировщик group parameters (non-validating notaries)."""

    def __init__(self, registry: SchemeRegistry):
        # Реестр нужен только как канонический кодировщик публичных ключей
        self.registry = registry

    def encode(
        self,
        declarations: Sequence[NotaryDeclaration],
        workers: Mapping[Identity, Identity],
        worker_keys: Mapping[Identity, KeyPair],
    ) -> Tuple[GroupParameterEntry, ...]:
        """
        Упорядоченные entries для всех notary services.

        Args:
            declarations: notary declarations в порядке объявления
            workers: service → worker
            worker_keys: worker → KeyPair

        Returns:
            tuple entries (пустой, если declarations пуст)

        Raises:
            KeyError: Если для service нет worker или для worker нет ключа
            jsonschema.ValidationError: Если результат нарушает контракт group_parameters
        """
        entries: List[GroupParameterEntry] = []
        for notary_index, declaration in enumerate(declarations):
            service = declaration.service
            key_pair = worker_keys[workers[service]]
            entries.append(self._service_name(notary_index, service))
            entries.append(self._service_key(notary_index, key_pair))
            entries.extend(self._service_protocol(notary_index, declaration.protocol_versions))

        validate_group_parameters([entry.model_dump() for entry in entries])
        logger.debug(
            "Encoded %d group parameter entries for %d notary service(s)",
            len(entries),
            len(declarations),
        )
        return tuple(entries)

    def _service_name(self, notary_index: int, service: Identity) -> GroupParameterEntry:
        return GroupParameterEntry(key=f"{SERVICE_KEY_PREFIX}.{notary_index}.name", value=str(service))

    def _service_key(self, notary_index: int, key_pair: KeyPair) -> GroupParameterEntry:
        return GroupParameterEntry(
            key=f"{SERVICE_KEY_PREFIX}.{notary_index}.keys.0",
            value=self.registry.encode_public_key(key_pair.public_key),
        )

    def _service_protocol(
        self, notary_index: int, protocol_versions: Sequence[int]
    ) -> List[GroupParameterEntry]:
        result = [
            GroupParameterEntry(
                key=f"{SERVICE_KEY_PREFIX}.{notary_index}.flow.protocol.name",
                value=NON_VALIDATING_NOTARY_PROTOCOL,
            )
        ]
        for version_index, version in enumerate(protocol_versions):
            result.append(
                GroupParameterEntry(
                    key=f"{SERVICE_KEY_PREFIX}.{notary_index}.flow.protocol.version.{version_index}",
                    value=str(version),
                )
            )
        return result

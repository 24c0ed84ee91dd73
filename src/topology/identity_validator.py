"""
IdentityValidator — проверка имён участников и notary services

Common name участника или notary service не может содержать маркер
NOTARY_WORKER_TAG: этим маркером помечаются производные worker identities,
и совпадение сделало бы worker неотличимым от обычного участника.

Для notary service дополнительно проверяется, что "<CN> NotaryWorker"
укладывается в ограничение длины CN.
"""

import logging
from typing import Final, Iterable

from src.core.domain.identity import COMMON_NAME_MAX_LENGTH, Identity
from src.core.errors import InvalidIdentity


logger = logging.getLogger(__name__)


NOTARY_WORKER_TAG: Final[str] = "NotaryWorker"


class IdentityValidator:
    """Проверка common name против зарезервированного маркера."""

    def __init__(self, marker: str = NOTARY_WORKER_TAG):
        self.marker = marker

    def validate(self, identity: Identity) -> None:
        """
        Raises:
            InvalidIdentity: Если common name содержит маркер
        """
        common_name = identity.common_name
        if common_name is not None and self.marker in common_name:
            raise InvalidIdentity(common_name, self.marker)

    def validate_all(self, identities: Iterable[Identity]) -> None:
        count = 0
        for identity in identities:
            self.validate(identity)
            count += 1
        logger.debug("Validated %d identities", count)

    def validate_notary_service(self, service: Identity) -> None:
        """
        Проверка notary service перед выводом имени worker по умолчанию.

        Raises:
            InvalidIdentity: Если common name содержит маркер или
                "<CN> <marker>" длиннее COMMON_NAME_MAX_LENGTH
        """
        self.validate(service)
        common_name = service.common_name
        if common_name is None:
            return
        max_length = COMMON_NAME_MAX_LENGTH - len(self.marker) - 1
        if len(common_name) > max_length:
            raise InvalidIdentity(
                common_name,
                self.marker,
                f"Common name '{common_name}' is too long to derive a {self.marker} name "
                f"(max {max_length} characters)",
            )

    def validate_notary_services(self, services: Iterable[Identity]) -> None:
        count = 0
        for service in services:
            self.validate_notary_service(service)
            count += 1
        logger.debug("Validated %d notary service(s)", count)

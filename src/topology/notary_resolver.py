"""
NotaryTopologyResolver — notary service → worker identity

Каждый notary service обслуживается ровно одним worker. Worker identity
детерминированно выводится из identity сервиса функцией именования
(по умолчанию to_notary_worker_name).

Проверки (только если объявлен хотя бы один notary):
- ни service, ни его worker не совпадают с участником сети
- разные services не выводят один и тот же worker
"""

import logging
from typing import Callable, Dict, Iterable, List, Optional, Sequence

from pydantic import ValidationError

from src.core.domain.identity import Identity
from src.core.domain.notary import NotaryDeclaration
from src.core.errors import InvalidIdentity, MemberNotaryOverlap
from src.topology.identity_validator import NOTARY_WORKER_TAG


logger = logging.getLogger(__name__)


WorkerNaming = Callable[[Identity], Identity]


def to_notary_worker_name(service: Identity) -> Identity:
    """
    Worker identity по умолчанию: те же атрибуты, CN = "<CN> NotaryWorker".

    Для сервиса без CN используется просто "NotaryWorker".
    """
    if service.common_name is None:
        common_name = NOTARY_WORKER_TAG
    else:
        common_name = f"{service.common_name} {NOTARY_WORKER_TAG}"
    return Identity(**{**service.model_dump(), "common_name": common_name})


class NotaryTopologyResolver:
    """Разрешение топологии notary services."""

    def __init__(self, worker_naming: Optional[WorkerNaming] = None):
        self.worker_naming: WorkerNaming = worker_naming or to_notary_worker_name

    def resolve(
        self,
        members: Iterable[Identity],
        declarations: Sequence[NotaryDeclaration],
    ) -> Dict[Identity, Identity]:
        """
        Отображение service → worker в порядке объявления.

        Args:
            members: участники сети
            declarations: notary declarations

        Returns:
            dict service → worker (пустой, если notary не объявлены)

        Raises:
            InvalidIdentity: Если из имени service нельзя вывести валидное имя worker
            MemberNotaryOverlap: При пересечении с участниками или совпадении workers
        """
        if not declarations:
            return {}

        workers: Dict[Identity, Identity] = {}
        for declaration in declarations:
            service = declaration.service
            try:
                workers[service] = self.worker_naming(service)
            except ValidationError as e:
                raise InvalidIdentity(
                    service.common_name or "",
                    NOTARY_WORKER_TAG,
                    f"Cannot derive a {NOTARY_WORKER_TAG} name from {service}: {e}",
                ) from e

        member_set = set(members)
        overlap: List[Identity] = []
        for service, worker in workers.items():
            for candidate in (service, worker):
                if candidate in member_set and candidate not in overlap:
                    overlap.append(candidate)
        if overlap:
            raise MemberNotaryOverlap(overlap)

        seen: Dict[Identity, Identity] = {}
        for service, worker in workers.items():
            if worker in seen:
                raise MemberNotaryOverlap(
                    [seen[worker], service],
                    f"Notary services {seen[worker]} and {service} derive the same worker {worker}",
                )
            seen[worker] = service

        logger.debug("Resolved %d notary service(s)", len(workers))
        return workers

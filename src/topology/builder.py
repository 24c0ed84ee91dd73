"""
NetworkBuilder — построение immutable Network

Порядок шагов build():
1. Проверка всех идентичностей (участники и notary services)
2. Разрешение схемы ключей
3. Разрешение notary topology (только если объявлены notaries)
4. Ключи участников
5. Ключи notary workers (пусто, если notaries нет)
6. Group parameters (пусто, если notaries нет)
7. Сборка Network

Любая ошибка прерывает build() целиком: частичный Network не возвращается,
а проверки 1-3 выполняются до того, как потреблена хоть какая-то энтропия.
"""

import logging
from typing import Optional

from src.core.crypto.randomness import RandomnessSource, SystemRandomness
from src.core.crypto.schemes import SchemeRegistry, default_scheme_registry
from src.core.domain.network import Network
from src.topology.config import NetworkConfig
from src.topology.group_parameters import GroupParameterEncoder
from src.topology.identity_validator import IdentityValidator
from src.topology.key_provisioner import KeyMaterialProvisioner
from src.topology.notary_resolver import NotaryTopologyResolver, WorkerNaming


logger = logging.getLogger(__name__)


class NetworkBuilder:
    """
    Оркестратор построения сети.

    Реестр схем и источник энтропии создаются один раз и передаются по
    ссылке; сам builder не хранит состояния между вызовами build().
    """

    def __init__(
        self,
        registry: Optional[SchemeRegistry] = None,
        randomness: Optional[RandomnessSource] = None,
        worker_naming: Optional[WorkerNaming] = None,
    ):
        self.registry = registry if registry is not None else default_scheme_registry()
        self.randomness: RandomnessSource = randomness if randomness is not None else SystemRandomness()
        self.identity_validator = IdentityValidator()
        self.resolver = NotaryTopologyResolver(worker_naming)
        self._default_worker_naming = worker_naming is None
        self.provisioner = KeyMaterialProvisioner(self.registry, self.randomness)
        self.encoder = GroupParameterEncoder(self.registry)

    def build(self, config: NetworkConfig) -> Network:
        """
        Построить Network по конфигурации.

        Raises:
            InvalidIdentity: common name содержит маркер notary worker или
                слишком длинный для имени worker
            UnknownScheme: схема не зарегистрирована
            MemberNotaryOverlap: участник совпадает с notary service или его worker
            KeyGenerationFailure: провайдер не смог сгенерировать ключ
        """
        # 1. Fail fast до любых побочных эффектов
        self.identity_validator.validate_all(config.members)
        if self._default_worker_naming:
            self.identity_validator.validate_notary_services(config.notary_services)
        else:
            self.identity_validator.validate_all(config.notary_services)

        # 2. Схема
        scheme = self.provisioner.resolve_scheme(config.scheme_name)

        # 3. Topology
        workers = self.resolver.resolve(config.members, config.notaries)

        # 4-5. Ключевой материал
        member_keys = self.provisioner.generate_key_pairs(scheme, config.members)
        worker_keys = self.provisioner.generate_key_pairs(scheme, workers.values()) if workers else {}

        # 6. Group parameters
        group_parameters = (
            self.encoder.encode(config.notaries, workers, worker_keys) if workers else ()
        )

        network = Network(
            members=member_keys,
            notaries=worker_keys,
            notary_workers=workers,
            group_parameters=group_parameters,
            scheme_name=scheme.code_name,
        )
        logger.info(
            "Built network: %d member(s), %d notary service(s), %d group parameter(s), scheme=%s",
            len(network.members),
            len(network.notaries),
            len(network.group_parameters),
            network.scheme_name,
        )
        return network


def build_network(
    config: NetworkConfig,
    registry: Optional[SchemeRegistry] = None,
    randomness: Optional[RandomnessSource] = None,
    worker_naming: Optional[WorkerNaming] = None,
) -> Network:
    """Построить Network одним вызовом (см. NetworkBuilder.build)."""
    return NetworkBuilder(registry, randomness, worker_naming).build(config)

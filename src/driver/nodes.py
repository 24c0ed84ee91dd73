"""
Embedded network — передача Network во внешнюю фабрику узлов

Фабрика embedded test nodes — внешний коллаборатор: она получает ключи
участников, ключи notary workers и group parameters и возвращает handle
запущенного набора узлов. Здесь нет доменной логики — только scope
поверх результата NetworkBuilder.
"""

import logging
from dataclasses import dataclass
from typing import Callable, Mapping, Optional, Protocol, Tuple, TypeVar, Union

import pytest

from src.core.crypto.randomness import SeededRandomness
from src.core.domain.group_parameters import GroupParameterEntry
from src.core.domain.identity import Identity
from src.core.domain.keys import KeyPair
from src.core.domain.network import Network
from src.driver.scope import NetworkScope
from src.topology.builder import NetworkBuilder
from src.topology.config import NetworkConfig


logger = logging.getLogger(__name__)


T = TypeVar("T", covariant=True)


class NodeFactory(Protocol[T]):
    """Фабрика embedded test nodes."""

    def __call__(
        self,
        members: Mapping[Identity, KeyPair],
        notaries: Mapping[Identity, KeyPair],
        group_parameters: Tuple[GroupParameterEntry, ...],
    ) -> T:
        ...


@dataclass(frozen=True)
class EmbeddedNetwork:
    """Network + scope, в котором она была построена."""

    network: Network
    scope: NetworkScope

    def start(self, factory: NodeFactory[T]) -> T:
        """Передать ключевой материал и group parameters фабрике узлов."""
        logger.debug(
            "Starting %d member node(s) and %d notary worker(s) (%s)",
            len(self.network.members),
            len(self.network.notaries),
            self.scope.value,
        )
        return factory(self.network.members, self.network.notaries, self.network.group_parameters)

    def worker_for(self, service: Identity) -> Identity:
        return self.network.worker_for(service)


def network_fixture(
    config: NetworkConfig,
    scope: NetworkScope = NetworkScope.PER_SUITE,
    builder: Optional[NetworkBuilder] = None,
    name: Optional[str] = None,
    seed: Optional[Union[bytes, str, int]] = None,
) -> Callable[..., EmbeddedNetwork]:
    """
    pytest fixture, строящая EmbeddedNetwork.

    Каждая инстанциация fixture строит новую Network; переиспользование
    определяется только scope (PER_SUITE → module, PER_TEST → function).

    seed: каждая инстанциация получает собственный NetworkBuilder с новым
    SeededRandomness(seed), поэтому все PER_TEST сети с одним seed совпадают.
    Переданный builder, наоборот, общий для всех инстанциаций вместе с его
    источником энтропии.

    Пример:
        network = network_fixture(CONFIG, NetworkScope.PER_TEST, seed="alice")
    """
    if builder is not None and seed is not None:
        raise ValueError("network_fixture accepts either builder or seed, not both")

    def _embedded_network() -> EmbeddedNetwork:
        if seed is not None:
            network_builder = NetworkBuilder(randomness=SeededRandomness(seed))
        else:
            network_builder = builder or NetworkBuilder()
        return EmbeddedNetwork(network=network_builder.build(config), scope=scope)

    return pytest.fixture(scope=scope.pytest_scope, name=name)(_embedded_network)

"""
Driver — lifecycle scopes для Network в тестах.
"""

from .nodes import EmbeddedNetwork, NodeFactory, network_fixture
from .scope import NetworkScope

__all__ = [
    "NetworkScope",
    "EmbeddedNetwork",
    "NodeFactory",
    "network_fixture",
]

"""
Domain models and value objects.

Contains fundamental domain entities like Identity, NotaryDeclaration,
KeyPair, GroupParameterEntry, Network.
"""

from src.core.domain.group_parameters import GroupParameterEntry
from src.core.domain.identity import Identity
from src.core.domain.keys import KeyPair
from src.core.domain.network import Network
from src.core.domain.notary import NotaryDeclaration

__all__ = [
    # Identity model
    "Identity",
    # Notary declaration
    "NotaryDeclaration",
    # Key material
    "KeyPair",
    # Group parameters
    "GroupParameterEntry",
    # Network descriptor
    "Network",
]

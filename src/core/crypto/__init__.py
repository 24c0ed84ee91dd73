"""
Cryptographic schemes and randomness sources.
"""

from .randomness import RandomnessSource, SeededRandomness, SystemRandomness
from .schemes import (
    DEFAULT_SCHEME_NAME,
    ECDSA_SECP256K1_CODE_NAME,
    ECDSA_SECP256R1_CODE_NAME,
    EDDSA_ED25519_CODE_NAME,
    RSA_CODE_NAME,
    X25519_CODE_NAME,
    KeyAlgorithm,
    KeyScheme,
    SchemeRegistry,
    default_scheme_registry,
)

__all__ = [
    # Randomness
    "RandomnessSource",
    "SystemRandomness",
    "SeededRandomness",
    # Schemes
    "DEFAULT_SCHEME_NAME",
    "RSA_CODE_NAME",
    "ECDSA_SECP256K1_CODE_NAME",
    "ECDSA_SECP256R1_CODE_NAME",
    "EDDSA_ED25519_CODE_NAME",
    "X25519_CODE_NAME",
    "KeyAlgorithm",
    "KeyScheme",
    "SchemeRegistry",
    "default_scheme_registry",
]

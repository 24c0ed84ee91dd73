"""
KeyMaterialProvisioner — генерация ключевых пар по схеме

Разрешает схему по кодовому имени через SchemeRegistry и генерирует ключевые
пары для коллекции идентичностей. Энтропия берётся из переданного
RandomnessSource, поэтому тесты могут подставить детерминированный источник.

Генерация по семействам алгоритмов:
- EC      — скаляр из RandomnessSource, приведённый в [1, n-1] по порядку кривой
- EdDSA   — 32 байта из RandomnessSource (Ed25519 private bytes)
- X25519  — 32 байта из RandomnessSource
- RSA     — энтропия OpenSSL (cryptography не принимает внешний источник)
"""

import logging
from typing import Callable, Dict, Final, Iterable, Optional, Tuple, Type

from cryptography.exceptions import UnsupportedAlgorithm
from cryptography.hazmat.primitives.asymmetric import ec, ed25519, rsa, x25519

from src.core.crypto.randomness import RandomnessSource, SystemRandomness
from src.core.crypto.schemes import KeyAlgorithm, KeyScheme, SchemeRegistry
from src.core.domain.identity import Identity
from src.core.domain.keys import KeyPair
from src.core.errors import KeyGenerationFailure


logger = logging.getLogger(__name__)


# =============================================================================
# CONSTANTS
# =============================================================================


# Кривая → (класс кривой, порядок группы n)
_CURVES: Final[Dict[str, Tuple[Type[ec.EllipticCurve], int]]] = {
    "secp256r1": (
        ec.SECP256R1,
        0xFFFFFFFF00000000FFFFFFFFFFFFFFFFBCE6FAADA7179E84F3B9CAC2FC632551,
    ),
    "secp256k1": (
        ec.SECP256K1,
        0xFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFEBAAEDCE6AF48A03BBFD25E8CD0364141,
    ),
}

# Дополнительные байты при выборе скаляра EC (снижение modulo bias)
EC_SCALAR_EXTRA_BYTES: Final[int] = 8

RSA_PUBLIC_EXPONENT: Final[int] = 65537

RAW_PRIVATE_KEY_BYTES: Final[int] = 32


# =============================================================================
# PROVISIONER
# =============================================================================


class KeyMaterialProvisioner:
    """
    Генерация ключевого материала.

    Один экземпляр на build(): реестр схем и источник энтропии передаются
    снаружи и не являются глобальным состоянием.
    """

    def __init__(
        self,
        registry: SchemeRegistry,
        randomness: Optional[RandomnessSource] = None,
    ):
        self.registry = registry
        self.randomness: RandomnessSource = randomness if randomness is not None else SystemRandomness()
        self._generators: Dict[str, Callable[[KeyScheme], Tuple[object, object]]] = {
            KeyAlgorithm.EC.value: self._generate_ec,
            KeyAlgorithm.EDDSA.value: self._generate_ed25519,
            KeyAlgorithm.X25519.value: self._generate_x25519,
            KeyAlgorithm.RSA.value: self._generate_rsa,
        }

    def resolve_scheme(self, name: str) -> KeyScheme:
        """
        Raises:
            UnknownScheme: Если схема не зарегистрирована
        """
        scheme = self.registry.find_scheme(name)
        logger.debug("Resolved key scheme %s (%s)", scheme.code_name, scheme.algorithm)
        return scheme

    def generate_key_pair(self, scheme: KeyScheme) -> KeyPair:
        """
        Генерация одной ключевой пары.

        Raises:
            KeyGenerationFailure: Если провайдер не может сгенерировать ключ
        """
        generator = self._generators.get(scheme.algorithm)
        if generator is None:
            raise KeyGenerationFailure(
                scheme.code_name, f"no key pair generator for algorithm {scheme.algorithm!r}"
            )
        try:
            private_key, public_key = generator(scheme)
        except (ValueError, TypeError, UnsupportedAlgorithm) as e:
            raise KeyGenerationFailure(scheme.code_name, str(e)) from e
        return KeyPair(private_key=private_key, public_key=public_key, scheme_name=scheme.code_name)

    def generate_key_pairs(
        self, scheme: KeyScheme, identities: Iterable[Identity]
    ) -> Dict[Identity, KeyPair]:
        """
        Ключевая пара для каждой идентичности; порядок вставки сохраняется.

        Пустая коллекция → пустой dict.
        """
        result: Dict[Identity, KeyPair] = {}
        for identity in identities:
            result[identity] = self.generate_key_pair(scheme)
        logger.debug("Generated %d key pair(s) with %s", len(result), scheme.code_name)
        return result

    # -------------------------------------------------------------------------
    # Generators
    # -------------------------------------------------------------------------

    def _generate_ec(self, scheme: KeyScheme) -> Tuple[object, object]:
        curve_entry = _CURVES.get(scheme.curve or "")
        if curve_entry is None:
            raise ValueError(f"unsupported curve {scheme.curve!r}")
        curve_cls, order = curve_entry

        length = (order.bit_length() + 7) // 8 + EC_SCALAR_EXTRA_BYTES
        scalar = int.from_bytes(self.randomness.random_bytes(length), "big") % (order - 1) + 1
        private_key = ec.derive_private_key(scalar, curve_cls())
        return private_key, private_key.public_key()

    def _generate_ed25519(self, scheme: KeyScheme) -> Tuple[object, object]:
        private_key = ed25519.Ed25519PrivateKey.from_private_bytes(
            self.randomness.random_bytes(RAW_PRIVATE_KEY_BYTES)
        )
        return private_key, private_key.public_key()

    def _generate_x25519(self, scheme: KeyScheme) -> Tuple[object, object]:
        private_key = x25519.X25519PrivateKey.from_private_bytes(
            self.randomness.random_bytes(RAW_PRIVATE_KEY_BYTES)
        )
        return private_key, private_key.public_key()

    def _generate_rsa(self, scheme: KeyScheme) -> Tuple[object, object]:
        if scheme.key_size is None:
            raise ValueError("RSA scheme requires key_size")
        private_key = rsa.generate_private_key(
            public_exponent=RSA_PUBLIC_EXPONENT, key_size=scheme.key_size
        )
        return private_key, private_key.public_key()

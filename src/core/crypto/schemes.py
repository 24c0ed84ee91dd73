"""
Key schemes — реестр криптографических схем

Схема — именованная конфигурация алгоритма (кривая/размер ключа), по которой
генерируются ключевые пары. Реестр создаётся один раз при старте процесса и
передаётся в builder по ссылке.

Кодовые имена совпадают с кодами платформы:
- CORDA.RSA               — RSA 3072
- CORDA.ECDSA.SECP256K1   — ECDSA, кривая secp256k1
- CORDA.ECDSA.SECP256R1   — ECDSA, кривая secp256r1 (схема по умолчанию)
- CORDA.EDDSA.ED25519     — EdDSA, Ed25519
- CORDA.X25519            — X25519
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Final, Iterable, Optional, Tuple

from cryptography.hazmat.primitives import serialization

from src.core.errors import UnknownScheme


# =============================================================================
# CODE NAMES
# =============================================================================


RSA_CODE_NAME: Final[str] = "CORDA.RSA"
ECDSA_SECP256K1_CODE_NAME: Final[str] = "CORDA.ECDSA.SECP256K1"
ECDSA_SECP256R1_CODE_NAME: Final[str] = "CORDA.ECDSA.SECP256R1"
EDDSA_ED25519_CODE_NAME: Final[str] = "CORDA.EDDSA.ED25519"
X25519_CODE_NAME: Final[str] = "CORDA.X25519"

DEFAULT_SCHEME_NAME: Final[str] = ECDSA_SECP256R1_CODE_NAME


# =============================================================================
# KEY SCHEME
# =============================================================================


class KeyAlgorithm(str, Enum):
    """Семейство алгоритмов генерации ключей"""

    EC = "EC"
    EDDSA = "EdDSA"
    X25519 = "X25519"
    RSA = "RSA"


@dataclass(frozen=True)
class KeyScheme:
    """
    Описание схемы.

    algorithm хранится строкой: реестр может содержать схемы, для которых у
    провайдера нет генератора (тогда генерация завершится KeyGenerationFailure).
    """

    code_name: str
    algorithm: str
    curve: Optional[str] = None  # Имя кривой для EC
    key_size: Optional[int] = None  # Размер ключа для RSA


RSA: Final = KeyScheme(code_name=RSA_CODE_NAME, algorithm=KeyAlgorithm.RSA.value, key_size=3072)
ECDSA_SECP256K1: Final = KeyScheme(
    code_name=ECDSA_SECP256K1_CODE_NAME, algorithm=KeyAlgorithm.EC.value, curve="secp256k1"
)
ECDSA_SECP256R1: Final = KeyScheme(
    code_name=ECDSA_SECP256R1_CODE_NAME, algorithm=KeyAlgorithm.EC.value, curve="secp256r1"
)
EDDSA_ED25519: Final = KeyScheme(code_name=EDDSA_ED25519_CODE_NAME, algorithm=KeyAlgorithm.EDDSA.value)
X25519: Final = KeyScheme(code_name=X25519_CODE_NAME, algorithm=KeyAlgorithm.X25519.value)


# =============================================================================
# SCHEME REGISTRY
# =============================================================================


class SchemeRegistry:
    """
    Реестр схем по кодовому имени + канонический кодировщик публичных ключей.
    """

    def __init__(self, schemes: Iterable[KeyScheme] = ()):
        self._schemes: Dict[str, KeyScheme] = {}
        for scheme in schemes:
            self.register(scheme)

    def register(self, scheme: KeyScheme) -> None:
        """
        Регистрация схемы.

        Raises:
            ValueError: Если схема с таким code_name уже зарегистрирована
        """
        if scheme.code_name in self._schemes:
            raise ValueError(f"Key scheme already registered: {scheme.code_name}")
        self._schemes[scheme.code_name] = scheme

    def find_scheme(self, code_name: str) -> KeyScheme:
        """
        Поиск схемы по кодовому имени.

        Raises:
            UnknownScheme: Если схема не зарегистрирована
        """
        try:
            return self._schemes[code_name]
        except KeyError:
            raise UnknownScheme(code_name, self.code_names()) from None

    def code_names(self) -> Tuple[str, ...]:
        return tuple(self._schemes)

    def __contains__(self, code_name: object) -> bool:
        return code_name in self._schemes

    def encode_public_key(self, public_key: Any) -> str:
        """
        Каноническая строковая форма публичного ключа: PEM SubjectPublicKeyInfo.

        Детерминированная функция ключа — одинаковый ключ всегда даёт
        одинаковую строку.
        """
        return public_key.public_bytes(
            encoding=serialization.Encoding.PEM,
            format=serialization.PublicFormat.SubjectPublicKeyInfo,
        ).decode("ascii")

    def decode_public_key(self, encoded: str) -> Any:
        """Обратная операция к encode_public_key."""
        return serialization.load_pem_public_key(encoded.encode("ascii"))


def default_scheme_registry() -> SchemeRegistry:
    """Реестр со всеми схемами платформы."""
    return SchemeRegistry([RSA, ECDSA_SECP256K1, ECDSA_SECP256R1, EDDSA_ED25519, X25519])

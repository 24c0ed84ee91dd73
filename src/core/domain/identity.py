"""
Identity — X.500 имя участника тестовой сети

Immutable Pydantic модель distinguished name. Используется как ключ во всех
отображениях сети (member → KeyPair, service → worker), поэтому модель
frozen и hashable; равенство определяется атрибутами, а не порядком в строке.

Поддерживаемые атрибуты (в каноническом порядке):
- CN — common name (опционально, ≤ 64)
- OU — organization unit (опционально, ≤ 64)
- O  — organization (обязательно, ≤ 128)
- L  — locality (обязательно, ≤ 64)
- ST — state (опционально, ≤ 64)
- C  — country (обязательно, ISO 3166 alpha-2)
"""

import re
from typing import Dict, Final, Optional

from cryptography import x509
from cryptography.x509.oid import NameOID
from pydantic import BaseModel, Field


# =============================================================================
# CONSTANTS
# =============================================================================


# OID → поле модели; порядок словаря задаёт канонический порядок в str()
_ATTRIBUTE_FIELDS: Final[Dict[x509.ObjectIdentifier, str]] = {
    NameOID.COMMON_NAME: "common_name",
    NameOID.ORGANIZATIONAL_UNIT_NAME: "organization_unit",
    NameOID.ORGANIZATION_NAME: "organization",
    NameOID.LOCALITY_NAME: "locality",
    NameOID.STATE_OR_PROVINCE_NAME: "state",
    NameOID.COUNTRY_NAME: "country",
}

# Максимальная длина CN (ограничение X.520 ub-common-name)
COMMON_NAME_MAX_LENGTH: Final[int] = 64

# Запятая-разделитель RDN с пробелами после неё: перед ней чётное число
# обратных слэшей, т.е. сама запятая не экранирована
_SEPARATOR_RE: Final = re.compile(r"(?<!\\)((?:\\\\)*),\s+")


# =============================================================================
# IDENTITY MODEL
# =============================================================================


class Identity(BaseModel):
    """
    X.500 имя участника, notary service или notary worker.

    Immutable модель (frozen=True): идентичность создаётся вызывающим кодом
    и никогда не меняется.
    """

    common_name: Optional[str] = Field(
        default=None, min_length=1, max_length=COMMON_NAME_MAX_LENGTH, description="CN"
    )
    organization_unit: Optional[str] = Field(
        default=None, min_length=1, max_length=64, description="OU"
    )
    organization: str = Field(..., min_length=1, max_length=128, description="O")
    locality: str = Field(..., min_length=1, max_length=64, description="L")
    state: Optional[str] = Field(default=None, min_length=1, max_length=64, description="ST")
    country: str = Field(..., pattern=r"^[A-Z]{2}$", description="C (ISO 3166 alpha-2)")

    model_config = {"frozen": True}  # Immutable

    @classmethod
    def parse(cls, text: str) -> "Identity":
        """
        Разбор RFC 4514 строки вида "CN=Notary, O=R3, L=London, C=GB".

        Пробелы после разделяющих запятых допускаются.

        Args:
            text: Distinguished name

        Returns:
            Identity

        Raises:
            ValueError: Если строка не является корректным DN или содержит
                неподдерживаемые/повторяющиеся атрибуты
            ValidationError: Если атрибуты нарушают ограничения модели
        """
        normalized = _SEPARATOR_RE.sub(r"\1,", text.strip())
        try:
            name = x509.Name.from_rfc4514_string(normalized)
        except ValueError as e:
            raise ValueError(f"Malformed X.500 name {text!r}: {e}") from e

        values: Dict[str, str] = {}
        for attribute in name:
            field = _ATTRIBUTE_FIELDS.get(attribute.oid)
            if field is None:
                raise ValueError(
                    f"Unsupported attribute {attribute.rfc4514_attribute_name} in {text!r}"
                )
            if field in values:
                raise ValueError(
                    f"Duplicate attribute {attribute.rfc4514_attribute_name} in {text!r}"
                )
            values[field] = attribute.value
        return cls(**values)

    def attributes(self) -> Dict[x509.ObjectIdentifier, str]:
        """Заданные атрибуты в каноническом порядке (OID → значение)."""
        result: Dict[x509.ObjectIdentifier, str] = {}
        for oid, field in _ATTRIBUTE_FIELDS.items():
            value = getattr(self, field)
            if value is not None:
                result[oid] = value
        return result

    def __str__(self) -> str:
        return ", ".join(
            x509.NameAttribute(oid, value).rfc4514_string()
            for oid, value in self.attributes().items()
        )

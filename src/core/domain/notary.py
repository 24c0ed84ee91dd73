"""
NotaryDeclaration — объявление notary service

Immutable Pydantic модель: notary service identity и непустой набор
поддерживаемых версий протокола. Дубликаты версий схлопываются, порядок
первого появления сохраняется (он определяет порядок в group parameters).
"""

from typing import Any, Tuple

from pydantic import BaseModel, Field, field_validator

from src.core.domain.identity import Identity


class NotaryDeclaration(BaseModel):
    """Notary service и версии его протокола."""

    service: Identity = Field(..., description="Identity notary service")
    protocol_versions: Tuple[int, ...] = Field(
        ..., min_length=1, description="Версии протокола в порядке объявления"
    )

    model_config = {"frozen": True}  # Immutable

    @field_validator("service", mode="before")
    @classmethod
    def parse_service(cls, v: Any) -> Any:
        """Допускаем DN-строку вместо Identity."""
        if isinstance(v, str):
            return Identity.parse(v)
        return v

    @field_validator("protocol_versions")
    @classmethod
    def validate_versions(cls, v: Tuple[int, ...]) -> Tuple[int, ...]:
        """
        Версии протокола ≥ 1, без дубликатов (порядок первого появления).
        """
        for version in v:
            if version < 1:
                raise ValueError(f"protocol version {version} must be >= 1")
        return tuple(dict.fromkeys(v))

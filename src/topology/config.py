"""
NetworkConfig — конфигурация тестовой сети

Immutable Pydantic модель вместо изменяемого fluent builder: вызывающий код
собирает конфигурацию целиком и передаёт её в NetworkBuilder.build().
Fluent-методы (with_*) возвращают новый экземпляр.

Источники конфигурации:
- напрямую в коде (Identity или DN-строки)
- dict / JSON файл, проверяемый контрактом network_config.json
"""

import json
from pathlib import Path
from typing import Any, Dict, List, Tuple, Union

from pydantic import BaseModel, Field, field_validator

from src.core.contracts import validate_network_config
from src.core.crypto.schemes import DEFAULT_SCHEME_NAME
from src.core.domain.identity import Identity
from src.core.domain.notary import NotaryDeclaration


IdentityLike = Union[Identity, str]


def _as_identity(value: IdentityLike) -> Identity:
    if isinstance(value, str):
        return Identity.parse(value)
    return value


class NetworkConfig(BaseModel):
    """
    Участники, notary declarations и схема ключей.

    Инварианты:
    - участники уникальны (дубликаты схлопываются, порядок первого появления)
    - notary services уникальны
    """

    members: Tuple[Identity, ...] = Field(default=(), description="Участники сети")
    notaries: Tuple[NotaryDeclaration, ...] = Field(
        default=(), description="Notary declarations в порядке объявления"
    )
    scheme_name: str = Field(
        default=DEFAULT_SCHEME_NAME, min_length=1, description="Кодовое имя схемы ключей"
    )

    model_config = {"frozen": True}  # Immutable

    @field_validator("members", mode="before")
    @classmethod
    def parse_members(cls, v: Any) -> Any:
        """Допускаем DN-строки вместо Identity."""
        if isinstance(v, (list, tuple, set, frozenset)):
            return [_as_identity(member) for member in v]
        return v

    @field_validator("members")
    @classmethod
    def collapse_duplicate_members(cls, v: Tuple[Identity, ...]) -> Tuple[Identity, ...]:
        return tuple(dict.fromkeys(v))

    @field_validator("notaries")
    @classmethod
    def validate_unique_services(
        cls, v: Tuple[NotaryDeclaration, ...]
    ) -> Tuple[NotaryDeclaration, ...]:
        seen = set()
        for declaration in v:
            if declaration.service in seen:
                raise ValueError(f"notary service {declaration.service} declared more than once")
            seen.add(declaration.service)
        return v

    # -------------------------------------------------------------------------
    # Fluent copy-on-write
    # -------------------------------------------------------------------------

    def with_scheme_name(self, scheme_name: str) -> "NetworkConfig":
        return NetworkConfig(members=self.members, notaries=self.notaries, scheme_name=scheme_name)

    def with_members(self, *members: IdentityLike) -> "NetworkConfig":
        """Добавить участников (дубликаты схлопываются)."""
        return NetworkConfig(
            members=self.members + tuple(_as_identity(member) for member in members),
            notaries=self.notaries,
            scheme_name=self.scheme_name,
        )

    def with_notary(
        self, service: IdentityLike, protocol_version: int, *other_versions: int
    ) -> "NetworkConfig":
        """
        Объявить non-validating notary service.

        Повторное объявление того же service заменяет его версии, сохраняя
        исходную позицию в порядке объявления.
        """
        declaration = NotaryDeclaration(
            service=_as_identity(service),
            protocol_versions=(protocol_version,) + other_versions,
        )
        notaries: List[NotaryDeclaration] = []
        replaced = False
        for existing in self.notaries:
            if existing.service == declaration.service:
                notaries.append(declaration)
                replaced = True
            else:
                notaries.append(existing)
        if not replaced:
            notaries.append(declaration)
        return NetworkConfig(members=self.members, notaries=tuple(notaries), scheme_name=self.scheme_name)

    @property
    def notary_services(self) -> Tuple[Identity, ...]:
        return tuple(declaration.service for declaration in self.notaries)

    # -------------------------------------------------------------------------
    # Loading
    # -------------------------------------------------------------------------

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "NetworkConfig":
        """
        Конфигурация из dict формата network_config.json.

        Raises:
            jsonschema.ValidationError: Если данные нарушают контракт
            pydantic.ValidationError: Если нарушены ограничения модели
        """
        validate_network_config(data)
        return cls(
            members=data.get("members", []),
            notaries=[
                {"service": notary["name"], "protocol_versions": notary["protocol_versions"]}
                for notary in data.get("notaries", [])
            ],
            scheme_name=data.get("scheme_name", DEFAULT_SCHEME_NAME),
        )


def load_network_config(path: Union[str, Path]) -> NetworkConfig:
    """Загрузка конфигурации из JSON файла."""
    with open(path, "r", encoding="utf-8") as f:
        data = json.load(f)
    return NetworkConfig.from_dict(data)

"""
KeyPair — ключевая пара участника сети

Пара принадлежит ровно одной идентичности, для которой была сгенерирована.
Ключи — объекты `cryptography`, поэтому модель — frozen dataclass, а не Pydantic.
"""

from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True)
class KeyPair:
    """Ключевая пара, сгенерированная по схеме scheme_name."""

    private_key: Any
    public_key: Any
    scheme_name: str

    def __repr__(self) -> str:
        # Приватный ключ в repr не выводим
        return f"KeyPair(scheme_name={self.scheme_name!r}, public_key={self.public_key!r})"

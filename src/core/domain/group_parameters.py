"""
GroupParameterEntry — элемент group parameters

Group parameters — упорядоченная коллекция строковых пар (key, value),
которую загружают embedded test nodes, чтобы договориться о notary services.
"""

from pydantic import BaseModel, Field


class GroupParameterEntry(BaseModel):
    """Одна пара key=value group parameters."""

    key: str = Field(..., min_length=1, description="Ключ (например, 'service.0.name')")
    value: str = Field(..., description="Значение")

    model_config = {"frozen": True}  # Immutable

    def __str__(self) -> str:
        return f"{self.key}={self.value}"

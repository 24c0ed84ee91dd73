"""
RandomnessSource — источник энтропии для генерации ключей

Источник передаётся в KeyMaterialProvisioner явно, а не берётся из
глобального состояния процесса:
- SystemRandomness — криптографически стойкий источник ОС (по умолчанию)
- SeededRandomness — детерминированный поток для воспроизводимых fixtures
"""

import hashlib
import secrets
from typing import Protocol, Union, runtime_checkable


@runtime_checkable
class RandomnessSource(Protocol):
    """Источник случайных байт."""

    def random_bytes(self, length: int) -> bytes:
        """Вернуть length случайных байт."""
        ...


class SystemRandomness:
    """Энтропия ОС через модуль secrets."""

    def random_bytes(self, length: int) -> bytes:
        if length < 0:
            raise ValueError(f"length must be >= 0, got {length}")
        return secrets.token_bytes(length)


class SeededRandomness:
    """
    Детерминированный поток байт: SHA-256(seed || counter) блоками по 32 байта.

    НЕ криптографически стойкий источник — только для тестовых fixtures,
    где нужны одинаковые ключи между запусками. Состояние — per-instance.
    """

    def __init__(self, seed: Union[bytes, str, int]):
        if isinstance(seed, int):
            seed = seed.to_bytes((seed.bit_length() + 8) // 8, "big", signed=True)
        elif isinstance(seed, str):
            seed = seed.encode("utf-8")
        self._seed: bytes = bytes(seed)
        self._counter = 0
        self._buffer = b""
        self.bytes_drawn = 0

    def random_bytes(self, length: int) -> bytes:
        if length < 0:
            raise ValueError(f"length must be >= 0, got {length}")
        while len(self._buffer) < length:
            block = hashlib.sha256(self._seed + self._counter.to_bytes(8, "big")).digest()
            self._counter += 1
            self._buffer += block
        result, self._buffer = self._buffer[:length], self._buffer[length:]
        self.bytes_drawn += length
        return result

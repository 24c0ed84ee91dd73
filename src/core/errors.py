"""
Ошибки построения тестовой сети.

Все ошибки поднимаются синхронно во время build() и не восстанавливаются
внутри builder: любая из них означает сбой подготовки теста.
"""

from typing import Iterable, Optional, Tuple


class NetworkBuildError(Exception):
    """Базовый класс для всех ошибок построения сети."""


class InvalidIdentity(NetworkBuildError, ValueError):
    """
    Common name идентичности недопустим.

    Содержит маркер notary worker либо слишком длинный для имени worker.
    """

    def __init__(self, common_name: str, marker: str, message: Optional[str] = None):
        self.common_name = common_name
        self.marker = marker
        if message is None:
            message = f"Common name '{common_name}' should not contain {marker}"
        super().__init__(message)


class UnknownScheme(NetworkBuildError, LookupError):
    """Криптографическая схема не зарегистрирована в реестре."""

    def __init__(self, scheme_name: str, known: Iterable[str] = ()):
        self.scheme_name = scheme_name
        self.known: Tuple[str, ...] = tuple(known)
        message = f"Unknown key scheme: {scheme_name!r}"
        if self.known:
            message += f" (known: {', '.join(self.known)})"
        super().__init__(message)


class MemberNotaryOverlap(NetworkBuildError, ValueError):
    """Идентичность одновременно является участником и notary service (или его worker)."""

    def __init__(self, overlap: Iterable[object], message: Optional[str] = None):
        self.overlap: Tuple[object, ...] = tuple(overlap)
        if message is None:
            names = ", ".join(str(name) for name in self.overlap)
            message = f"Member(s) [{names}] cannot also be a Notary"
        super().__init__(message)


class KeyGenerationFailure(NetworkBuildError, RuntimeError):
    """Криптопровайдер не смог сгенерировать ключевую пару для схемы."""

    def __init__(self, scheme_name: str, detail: str):
        self.scheme_name = scheme_name
        super().__init__(f"Key generation failed for scheme {scheme_name!r}: {detail}")

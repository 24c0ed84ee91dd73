"""
NetworkScope — время жизни Network в тестовом прогоне

- PER_SUITE: одна сеть на весь suite (test module), используется только на чтение
- PER_TEST: новая сеть (и новый ключевой материал) для каждого теста
"""

from enum import Enum


class NetworkScope(str, Enum):
    """Scope сети"""

    PER_SUITE = "per_suite"
    PER_TEST = "per_test"

    @property
    def pytest_scope(self) -> str:
        """Соответствующий scope pytest fixture."""
        if self is NetworkScope.PER_SUITE:
            return "module"
        return "function"

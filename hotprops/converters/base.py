"""
Converter base: parse a raw string (with an optional pattern) into a value or NO_MATCH.

Converters are stateless and never raise on bad input; a value that does not
parse yields NO_MATCH so the caller's default applies.
"""

from abc import ABC, abstractmethod
from typing import Any, Callable


class _NoMatch:
    """Sentinel type for "value did not parse"."""

    _instance: "_NoMatch | None" = None

    def __new__(cls) -> "_NoMatch":
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __bool__(self) -> bool:
        return False

    def __repr__(self) -> str:
        return "NO_MATCH"

    def __reduce__(self) -> str:
        return "NO_MATCH"


NO_MATCH: Any = _NoMatch()


class Converter(ABC):
    """Parse one semantic type from its string form."""

    @abstractmethod
    def parse(self, raw: str, pattern: str | None = None) -> Any:
        """
        Parse raw into the converter's type.

        Args:
            raw: Raw string from the source (untrimmed).
            pattern: Optional format pattern; ignored by non-temporal converters.

        Returns:
            The parsed value, or NO_MATCH.
        """
        ...

    def __repr__(self) -> str:
        return f"{type(self).__name__}()"


class FunctionConverter(Converter):
    """Adapt a plain callable ``fn(raw, pattern)`` into a Converter.

    ``ValueError`` and ``TypeError`` raised by the callable count as NO_MATCH.
    """

    def __init__(self, fn: Callable[[str, str | None], Any]):
        self.fn = fn

    def parse(self, raw: str, pattern: str | None = None) -> Any:
        try:
            return self.fn(raw, pattern)
        except (ValueError, TypeError):
            return NO_MATCH

    def __repr__(self) -> str:
        return f"FunctionConverter({getattr(self.fn, '__name__', self.fn)!r})"

"""Formatter protocol and the name -> formatter registry.

Formatter modules register themselves on import:

    @registry.register("csv")
    class CSVFormatter: ...
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, TypeVar, runtime_checkable

if TYPE_CHECKING:
    from collections.abc import Callable, Iterator

    from pcp_tool.core.models import ResultTable


@runtime_checkable
class Formatter(Protocol):
    def format(self, result: ResultTable) -> Iterator[str]:
        """Yield output lines (without trailing newlines) for result."""
        ...


F = TypeVar("F", bound=type)


class FormatterRegistry:
    def __init__(self) -> None:
        self._formatters: dict[str, type[Formatter]] = {}

    def register(self, name: str) -> Callable[[F], F]:
        def decorator(formatter_class: F) -> F:
            self._formatters[name] = formatter_class
            return formatter_class

        return decorator

    def get(self, name: str, **kwargs: object) -> Formatter:
        """Instantiate the formatter registered under name.

        Raises KeyError naming the available formats when name is unknown.
        """
        try:
            formatter_class = self._formatters[name]
        except KeyError:
            msg = f"Unknown format {name!r}. Available: {', '.join(self.available)}"
            raise KeyError(msg) from None
        return formatter_class(**kwargs)

    @property
    def available(self) -> list[str]:
        return sorted(self._formatters)


registry = FormatterRegistry()

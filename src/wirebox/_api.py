"""Module-level shortcuts bound to the process-wide registry and a default injector."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from ._injector import Injector
from ._registry import Registry


if TYPE_CHECKING:
    from collections.abc import Callable

    from ._loader import StrPath


_default_injector = Injector()


def get_injector() -> Injector:
    return _default_injector


def configure(*, quiet: bool | None = None) -> Injector:
    """Adjust the default injector. `quiet` silences warnings and errors on the log."""
    if quiet is not None:
        _default_injector.quiet = quiet
    return _default_injector


def add(value: Any, name: str | None = None) -> Any:
    return Registry.instance().add(value, name)


def require_and_add(
    locator: StrPath,
    name: str | Callable[[Any], Any] | None = None,
    transform: Callable[[Any], Any] | None = None,
) -> Any:
    return Registry.instance().require_and_add(locator, name, transform)


def inject(target: Any) -> Any:
    return _default_injector.inject(target)


async def inject_async(target: Any) -> Any:
    return await _default_injector.inject_async(target)

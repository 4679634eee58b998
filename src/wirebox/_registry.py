from __future__ import annotations

import logging
import threading
from typing import TYPE_CHECKING, Any, ClassVar, TypeVar

from ._errors import ConstructionError
from ._loader import ModuleLoader, locator_basename


logger = logging.getLogger(__name__)

if TYPE_CHECKING:
    from collections.abc import Callable, Iterator

    from ._loader import Loader, StrPath

    T = TypeVar("T")


class Registry:
    """Process-wide table of injectables, keyed by name.

    There is exactly one registry per process, reached through
    `Registry.instance()`. Direct construction raises `ConstructionError`.
    `Registry.reset_instance()` drops it so tests can start from a clean table.
    """

    _instance: ClassVar[Registry | None] = None
    _instance_lock: ClassVar[threading.Lock] = threading.Lock()

    def __init__(self, *, _from_instance: bool = False) -> None:
        if not _from_instance:
            msg = "Cannot construct singleton; use Registry.instance()"
            raise ConstructionError(msg)
        self._entries: dict[str, Any] = {}
        self._lock = threading.RLock()
        self.loader: Loader = ModuleLoader()

    @classmethod
    def instance(cls) -> Registry:
        """Return the process-wide registry, creating it on first access."""
        if cls._instance is None:
            with cls._instance_lock:
                if cls._instance is None:
                    cls._instance = cls(_from_instance=True)
        return cls._instance

    @classmethod
    def reset_instance(cls) -> None:
        with cls._instance_lock:
            cls._instance = None

    def add(self, value: T, name: str | None = None) -> T:
        """Register `value` under `name`, replacing any previous entry.

        Without a name, the name of the value's type is used.
        """
        name = name or type(value).__name__
        with self._lock:
            if name in self._entries:
                logger.debug("Replacing injectable '%s'", name)
            self._entries[name] = value
        logger.debug("Registered injectable '%s'", name)
        return value

    def get(self, name: str, default: Any = None) -> Any:
        return self._entries.get(name, default)

    def names(self) -> list[str]:
        return list(self._entries)

    def require_and_add(
        self,
        locator: StrPath,
        name: str | Callable[[Any], Any] | None = None,
        transform: Callable[[Any], Any] | None = None,
    ) -> Any:
        """Load `locator` through the loader and register the result.

        Example:
          registry.require_and_add("services/mailer.py")
          registry.require_and_add("services/factory.py", "named", lambda make: make("config"))
          registry.require_and_add("services/factory.py", lambda make: make("config"))

        A callable `name` is taken as the transform; the name then comes from
        the locator's base name, as it does when no name is given.
        """
        if callable(name):
            name, transform = None, name

        value = self.loader.require(locator)
        if transform is not None:
            value = transform(value)

        return self.add(value, name or locator_basename(locator))

    def __contains__(self, name: object) -> bool:
        return name in self._entries

    def __iter__(self) -> Iterator[str]:
        return iter(list(self._entries))

    def __len__(self) -> int:
        return len(self._entries)

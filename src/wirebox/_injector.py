from __future__ import annotations

import asyncio
import inspect
import logging
import os
from collections.abc import MutableMapping
from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING, Any

from ._descriptor import normalize_dependencies
from ._diagnostics import Diagnostics
from ._errors import InjectionError, PathNotFound, UnsupportedTargetKind
from ._registry import Registry


logger = logging.getLogger(__name__)

if TYPE_CHECKING:
    from collections.abc import Awaitable, Generator, Sequence

    from ._loader import Loader, StrPath


class TargetKind(Enum):
    SEQUENCE = "sequence"
    PATH = "path"
    OBJECT = "object"


# Values that cannot carry properties.
_SCALARS = (type(None), bool, int, float, complex, bytes, bytearray)

# Directory entries that are not injected (sub-directories).
_SKIPPED = object()


def classify_target(target: Any) -> TargetKind:
    """Pick the injection strategy for `target`.

    Precedence:
    1. list / tuple -> each element injected independently
    2. str / path-like -> file or directory on disk
    3. anything able to carry properties (object, class, function, module, mapping).
    """
    if isinstance(target, (list, tuple)):
        return TargetKind.SEQUENCE
    if isinstance(target, (str, os.PathLike)):
        return TargetKind.PATH
    if isinstance(target, _SCALARS):
        msg = f"Injector type '{type(target).__name__}' not defined"
        raise UnsupportedTargetKind(msg)
    return TargetKind.OBJECT


@dataclass
class InjectionResult:
    """Outcome of injecting one in-memory target.

    `injected` maps each registry key that was assigned to the property it
    landed on; `missing` lists the declared keys the registry did not know.
    Hard failures raise instead of producing a result.
    """

    target: Any
    injected: dict[str, str] = field(default_factory=dict)
    missing: list[str] = field(default_factory=list)
    diagnostics: list[str] = field(default_factory=list)
    succeeded: bool = True


class PendingInjection:
    """Awaitable outcome of a batch (sequence or directory) injection.

    Children are dispatched when the batch is created: in-memory targets are
    already injected, failures already captured, and path targets are
    awaitables. Awaiting the batch runs the awaitables together and returns
    the child results in order. If any child failed, the first failure in
    element order is raised once every child has finished; siblings that
    succeeded keep their assignments.
    """

    def __init__(self, children: Sequence[Any]) -> None:
        self._children = list(children)
        self._outcome: asyncio.Future[list[Any]] | None = None

    def __await__(self) -> Generator[Any, None, list[Any]]:
        if self._outcome is None:
            self._outcome = asyncio.ensure_future(self._settle())
        return self._outcome.__await__()

    async def _settle(self) -> list[Any]:
        pending = [i for i, child in enumerate(self._children) if inspect.isawaitable(child)]
        settled = await asyncio.gather(*(self._children[i] for i in pending), return_exceptions=True)

        results = list(self._children)
        for i, outcome in zip(pending, settled):
            results[i] = outcome

        for outcome in results:
            if isinstance(outcome, BaseException):
                raise outcome
        return results


class Injector:
    """Assigns registered values onto targets according to their `dependencies`.

    - objects, classes, functions and modules get attributes
    - mutable mappings get items
    - lists / tuples are injected element by element
    - strings and path-like values are loaded from disk first.

    Assigning onto a class sets a class attribute shared by every instance;
    assigning onto an instance only affects that instance.
    """

    def __init__(
        self,
        registry: Registry | None = None,
        loader: Loader | None = None,
        *,
        quiet: bool = False,
    ) -> None:
        self._registry = registry
        self._loader = loader
        self.quiet = quiet

    @property
    def registry(self) -> Registry:
        return self._registry if self._registry is not None else Registry.instance()

    @property
    def loader(self) -> Loader:
        return self._loader if self._loader is not None else self.registry.loader

    def inject(self, target: Any) -> InjectionResult | PendingInjection | Awaitable[Any]:
        """Inject dependencies into whatever arrives.

        In-memory targets are injected synchronously and return an
        `InjectionResult`. Sequences return a `PendingInjection` and paths a
        coroutine; both must be awaited to complete.
        """
        kind = classify_target(target)
        if kind is TargetKind.SEQUENCE:
            return self._inject_sequence(target)
        if kind is TargetKind.PATH:
            return self._inject_path(target)
        return self._inject_object(target)

    async def inject_async(self, target: Any) -> Any:
        """Inject into `target` and wait for any pending work."""
        outcome = self.inject(target)
        if inspect.isawaitable(outcome):
            return await outcome
        return outcome

    def _inject_sequence(self, targets: Sequence[Any]) -> PendingInjection:
        children: list[Any] = []
        for target in targets:
            try:
                children.append(self.inject(target))
            except Exception as exc:  # noqa: BLE001
                # Deferred: raised when the batch is awaited.
                children.append(exc)
        return PendingInjection(children)

    def _inject_object(self, target: Any) -> InjectionResult:
        diagnostics = Diagnostics(quiet=self.quiet)
        dependencies = normalize_dependencies(target, diagnostics)
        result = InjectionResult(target=target, diagnostics=diagnostics.messages)

        registry = self.registry
        for key, prop in dependencies.items():
            if key not in registry:
                diagnostics.warning(f"Injectable '{key}' is not defined")
                result.missing.append(key)
                continue

            _assign(target, prop, registry.get(key))
            result.injected[key] = prop

        logger.debug("Injected %s into %r", sorted(result.injected), target)
        return result

    async def _inject_path(self, path: StrPath) -> Any:
        loader = self.loader
        try:
            if not await loader.path_exists(path):
                msg = f"Path '{os.fspath(path)}' does not exist"
                raise PathNotFound(msg)
            info = await loader.stat_path(path)
        except InjectionError as exc:
            self._report(exc)
            raise

        if info.is_directory:
            return await self._inject_directory(path)
        return await self._inject_file(path)

    async def _inject_directory(self, directory: StrPath) -> list[Any]:
        try:
            names = await self.loader.list_directory(directory)
        except InjectionError as exc:
            self._report(exc)
            raise

        entries = [os.path.join(os.fspath(directory), name) for name in names]
        results = await PendingInjection([self._inject_entry(entry) for entry in entries])
        return [result for result in results if result is not _SKIPPED]

    async def _inject_entry(self, entry: str) -> Any:
        try:
            info = await self.loader.stat_path(entry)
        except InjectionError as exc:
            self._report(exc)
            raise

        if info.is_directory:
            logger.debug("Skipping sub-directory %s", entry)
            return _SKIPPED
        return await self._inject_file(entry)

    async def _inject_file(self, path: StrPath) -> Any:
        try:
            value = await self.loader.load_module(path)
        except InjectionError as exc:
            self._report(exc)
            raise
        return await self.inject_async(value)

    def _report(self, exc: Exception) -> None:
        Diagnostics(quiet=self.quiet).error(str(exc))


def _assign(target: Any, prop: str, value: Any) -> None:
    if isinstance(target, MutableMapping):
        target[prop] = value
    else:
        setattr(target, prop, value)

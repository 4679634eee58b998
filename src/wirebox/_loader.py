from __future__ import annotations

import importlib
import importlib.util
import logging
import os
import re
import stat
import sys
from dataclasses import dataclass
from pathlib import Path
from typing import TYPE_CHECKING, Protocol

import aiofiles.os

from ._errors import DirectoryListError, ModuleLoadError, PathAccessError


logger = logging.getLogger(__name__)

if TYPE_CHECKING:
    from types import ModuleType

    StrPath = str | os.PathLike[str]


EXPORT_ATTRIBUTE = "__export__"


@dataclass(frozen=True)
class PathInfo:
    is_directory: bool


class Loader(Protocol):
    """Filesystem and module loading used by the injector and the registry."""

    async def path_exists(self, path: StrPath) -> bool: ...

    async def stat_path(self, path: StrPath) -> PathInfo: ...

    async def list_directory(self, path: StrPath) -> list[str]: ...

    async def load_module(self, path: StrPath) -> object: ...

    def require(self, locator: StrPath) -> object: ...


class ModuleLoader:
    """Default `Loader`: `aiofiles.os` for the filesystem, `importlib` for modules.

    Files are imported once per absolute path and kept in `sys.modules`, so
    loading the same path again hands back the same module (and whatever was
    injected into it).

    Only the filesystem calls are non-blocking. `load_module` executes the
    module synchronously on the running event loop, as a plain import would.
    """

    async def path_exists(self, path: StrPath) -> bool:
        return await aiofiles.os.path.exists(path)

    async def stat_path(self, path: StrPath) -> PathInfo:
        try:
            stats = await aiofiles.os.stat(path)
        except OSError as exc:
            msg = f"Cannot access path '{os.fspath(path)}': {exc}"
            raise PathAccessError(msg) from exc
        return PathInfo(is_directory=stat.S_ISDIR(stats.st_mode))

    async def list_directory(self, path: StrPath) -> list[str]:
        try:
            return sorted(await aiofiles.os.listdir(path))
        except OSError as exc:
            msg = f"Error listing files on '{os.fspath(path)}': {exc}"
            raise DirectoryListError(msg) from exc

    async def load_module(self, path: StrPath) -> object:
        return self.require(Path(path))

    def require(self, locator: StrPath) -> object:
        """Load `locator` and return its exported value.

        `locator` is either a filesystem path or a dotted module name. The
        exported value is the module's `__export__` attribute when it defines
        one, the module itself otherwise.
        """
        if is_file_locator(locator):
            module = self._load_file(Path(locator))
        else:
            module = self._import(str(locator))
        return getattr(module, EXPORT_ATTRIBUTE, module)

    def _import(self, name: str) -> ModuleType:
        try:
            return importlib.import_module(name)
        except Exception as exc:  # noqa: BLE001
            msg = f"Cannot load module '{name}': {exc}"
            raise ModuleLoadError(msg) from exc

    def _load_file(self, path: Path) -> ModuleType:
        path = path.resolve()
        module_name = module_name_for(path)

        cached = sys.modules.get(module_name)
        if cached is not None:
            return cached

        spec = importlib.util.spec_from_file_location(module_name, path)
        if spec is None or spec.loader is None:
            msg = f"Cannot load module from '{path}': not an importable file"
            raise ModuleLoadError(msg)

        module = importlib.util.module_from_spec(spec)
        sys.modules[module_name] = module
        try:
            spec.loader.exec_module(module)
        except Exception as exc:  # noqa: BLE001
            del sys.modules[module_name]
            msg = f"Cannot load module from '{path}': {exc}"
            raise ModuleLoadError(msg) from exc

        logger.debug("Loaded module %s from %s", module_name, path)
        return module


def is_file_locator(locator: StrPath) -> bool:
    if isinstance(locator, os.PathLike):
        return True
    return os.sep in locator or "/" in locator or Path(locator).suffix == ".py"


def locator_basename(locator: StrPath) -> str:
    """Name derived from a locator: file stem for paths, last dotted segment otherwise."""
    if is_file_locator(locator):
        return Path(locator).stem
    return str(locator).rsplit(".", 1)[-1]


def module_name_for(path: Path) -> str:
    return "_wirebox_" + re.sub(r"\W", "_", str(path))

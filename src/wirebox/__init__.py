"""Minimal dependency injection container.

Values are registered by name in a process-wide `Registry`; targets declare
what they need through a `dependencies` attribute (a name, a list of names or
a `{name: property}` mapping) and the `Injector` assigns the registered values
onto them.

Exports:
- `Registry`: the process-wide name -> value table (`Registry.instance()`).
- `Injector`: resolves a target's dependencies against a registry. Accepts
  objects, classes, functions, modules, mappings, lists of targets, and file
  or directory paths.
- `ModuleLoader`: default loader turning paths into loaded modules.
- `add`, `require_and_add`, `inject`, `inject_async`, `configure`: shortcuts
  on the process-wide registry and the default injector.
"""

from ._api import add, configure, get_injector, inject, inject_async, require_and_add
from ._descriptor import normalize_dependencies
from ._errors import (
    ConstructionError,
    DirectoryListError,
    InjectionError,
    ModuleLoadError,
    PathAccessError,
    PathNotFound,
    UnsupportedDescriptorKind,
    UnsupportedTargetKind,
)
from ._injector import InjectionResult, Injector, PendingInjection, TargetKind, classify_target
from ._loader import Loader, ModuleLoader, PathInfo
from ._registry import Registry


__all__ = [
    "ConstructionError",
    "DirectoryListError",
    "InjectionError",
    "InjectionResult",
    "Injector",
    "Loader",
    "ModuleLoadError",
    "ModuleLoader",
    "PathAccessError",
    "PathInfo",
    "PathNotFound",
    "PendingInjection",
    "Registry",
    "TargetKind",
    "UnsupportedDescriptorKind",
    "UnsupportedTargetKind",
    "add",
    "classify_target",
    "configure",
    "get_injector",
    "inject",
    "inject_async",
    "normalize_dependencies",
    "require_and_add",
]

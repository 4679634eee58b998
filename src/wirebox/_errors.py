from __future__ import annotations


class InjectionError(RuntimeError):
    pass


class ConstructionError(InjectionError):
    pass


class UnsupportedDescriptorKind(InjectionError, TypeError):
    pass


class UnsupportedTargetKind(InjectionError, TypeError):
    pass


class PathNotFound(InjectionError, FileNotFoundError):
    pass


class PathAccessError(InjectionError, OSError):
    pass


class DirectoryListError(InjectionError, OSError):
    pass


class ModuleLoadError(InjectionError, ImportError):
    pass

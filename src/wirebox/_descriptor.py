from __future__ import annotations

from collections.abc import Mapping
from typing import TYPE_CHECKING, Any

from ._errors import UnsupportedDescriptorKind


if TYPE_CHECKING:
    from ._diagnostics import Diagnostics


DEPENDENCIES = "dependencies"

_ABSENT = object()


def read_descriptor(target: Any) -> Any:
    """Read the raw `dependencies` declaration of a target.

    Mappings declare it as a key, everything else as an attribute.
    """
    if isinstance(target, Mapping):
        return target.get(DEPENDENCIES, _ABSENT)
    return getattr(target, DEPENDENCIES, _ABSENT)


def normalize_dependencies(target: Any, diagnostics: Diagnostics | None = None) -> dict[str, str]:
    """Turn the target's dependency declaration into a `{registry key: property}` mapping.

    Accepted declarations:
    - a mapping of registry key to property name (returned as a copy)
    - a single string, used as both key and property
    - a list or tuple of strings, each used as both key and property
    - nothing at all (warns and returns an empty mapping).
    """
    declared = read_descriptor(target)

    if declared is _ABSENT or declared is None:
        if diagnostics is not None:
            diagnostics.warning("No dependencies found, ignoring")
        return {}

    if isinstance(declared, Mapping):
        not_names = {
            key: prop for key, prop in declared.items() if not (isinstance(key, str) and isinstance(prop, str))
        }
        if not_names:
            msg = f"Dependency names and properties must be strings, got {not_names!r}"
            raise UnsupportedDescriptorKind(msg)
        return dict(declared)

    if isinstance(declared, str):
        return {declared: declared}

    if isinstance(declared, (list, tuple)):
        not_names = [item for item in declared if not isinstance(item, str)]
        if not_names:
            msg = f"Dependency names must be strings, got {not_names!r}"
            raise UnsupportedDescriptorKind(msg)
        return {name: name for name in declared}

    msg = f"Treatment for dependencies '{type(declared).__name__}' not defined"
    raise UnsupportedDescriptorKind(msg)

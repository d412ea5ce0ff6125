"""
sopt utilities shared by the records, the registry and the renderers.

Overview
- Unset: the value of an option the parser has not observed yet. Readers
  fall back to the registered default when they see it, so a parsed False,
  0 or "" still wins over a truthy default.
- coalesce(value, default): Unset -> default, anything else unchanged.
- mirror("attr"): read-only property over self._attr. Option values, slice
  defaults, aliases and command lists are handed out as fresh lists, so a
  caller appending to what it read cannot reach into the registry.
- program_name(): the name shown in usage lines and fault headers.
"""
import os.path
import sys
from typing import final


@final
class UnsetType:
    """
    Type of the Unset sentinel (one instance per process, falsy, final).

    Copying or unpickling an Option keeps its value identical to Unset, so
    `option.value is Unset` stays the only check readers need.
    """
    _instance = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __ror__(self, other, /):
        # `str | Unset` in isinstance() checks and annotations
        return other | type(self)

    def __bool__(self):
        return False

    def __repr__(self):
        return "Unset"

    def __copy__(self):
        return self

    def __deepcopy__(self, memo, /):
        return self

    def __reduce__(self):
        return "Unset"

    def __init_subclass__(cls, **options):
        raise TypeError("type 'UnsetType' is not an acceptable base type")


Unset = UnsetType()


def coalesce(value, default=None, /):
    """
    Return value unless it is Unset, then default.

    - coalesce(Unset, 3000) -> 3000
    - coalesce(False, True) -> False
    """
    return default if value is Unset else value


def _detach(value):
    """Copy the list/tuple-of-strings values an option or command stores."""
    if isinstance(value, list | tuple):
        return list(value)
    return value


def mirror(name, /):
    """
    Read-only property reading self._<name>, lists and tuples copied out.

        class Command:
            aliases = mirror("aliases")
    """
    if not isinstance(name, str):
        raise TypeError("mirror() argument must be a string")

    def getter(self):
        return _detach(getattr(self, "_" + name))

    getter.__name__ = getter.__qualname__ = name
    return property(getter)


def program_name():
    """__main__.__prog__ when the host sets it, else the basename of argv[0]."""
    return getattr(__import__("__main__"), "__prog__", os.path.basename(sys.argv[0]) or "sopt")


__all__ = (
    # Functions
    "coalesce",
    "mirror",
    "program_name",

    # Types
    "UnsetType",

    # Constants
    "Unset",
)

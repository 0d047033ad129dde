"""
Argosy utilities (internal helpers)

Scope
- Small building blocks shared by the declaration, spec and report layers.

Overview
- UnsetType / Unset
  • Singleton sentinel for “not provided” where None is a meaningful value
    (an argument default of None would otherwise be indistinguishable from
    an argument without a default).
  • Falsey, printable as "Unset", and non-subclassable.

- coalesce(value, default=None)
  • Replace Unset with a concrete default, preserving None/""/() as given.

- mirror("attr")
  • Read-only property factory exposing a private backing field (self._attr).
    Containers are handed out as immutable copies (tuple / MappingProxyType /
    frozenset) so parse state cannot be changed through the public API.

Quick examples
    >>> coalesce(Unset, "fallback")
    'fallback'
    >>> coalesce(None, "fallback") is None
    True
"""
import functools
from collections.abc import Mapping, Sequence, Set
from types import MappingProxyType
from typing import final


@final
class UnsetType:
    """
    Sentinel type representing a value that was not provided.

    Characteristics
    - Boolean-false, distinct from None.
    - repr(Unset) -> "Unset".
    - UnsetType() always yields the same instance.
    """

    def __or__(self, other, /):
        """
        Support PEP 604 unions in isinstance checks (e.g., str | Unset).
        """
        try:
            return other | type(self)
        except TypeError:
            return NotImplemented

    def __ror__(self, other, /):
        try:
            return other | type(self)
        except TypeError:
            return NotImplemented

    @functools.cache
    def __new__(cls):
        return super().__new__(cls)

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


def coalesce(object, default=None, /):
    """
    Resolve the Unset sentinel to a concrete default.

    Returns object unless it is Unset, in which case default is returned.
    Falsey values such as None, 0, "" or () are kept as they are.
    """
    return object if object is not Unset else default


def _freeze(object):
    """
    Recursively copy containers into their immutable counterparts.

    - Sequence (non-string) → tuple
    - Mapping → MappingProxyType over a fresh dict
    - Set → frozenset
    - Unset → None
    """
    if isinstance(object, Sequence) and not isinstance(object, str):
        return tuple(map(_freeze, object))
    elif isinstance(object, Mapping):
        return MappingProxyType(dict(zip(object.keys(), map(_freeze, object.values()))))
    elif isinstance(object, Set):
        return frozenset(map(_freeze, object))
    else:
        return coalesce(object)


def mirror(name, /):
    """
    Define a read-only property that mirrors the private attribute "_{name}".

    Example
    - Given self._names, declare names = mirror("names") to expose a tuple
      snapshot of it.
    """
    if not isinstance(name, str):
        raise TypeError("mirror() argument must be a string")

    def getter(self):
        return _freeze(getattr(self, "_" + name))

    getter.__name__ = getter.__qualname__ = name
    return property(getter)


Unset = UnsetType()
"""
Sentinel for “not provided”.

Use Unset as a parameter default when None is a valid value, and materialize
it with coalesce(value, default) where a concrete value is needed.
"""


__all__ = (
    # Functions
    "coalesce",
    "mirror",

    # Types
    "UnsetType",

    # Constants
    "Unset",
)

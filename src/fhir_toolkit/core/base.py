# src/fhir_toolkit/core/base.py
"""
Layered construction and ordered serialization shared by every FHIR model.

A model class is a chain of levels (Element -> Extension, Resource ->
DomainResource -> Observation, ...). Each level that owns properties
declares them in its own class body as ``_fields = fields(...)``.

Construction copies, level by level and base-first, exactly the properties
each level declares and that are present in the input (``name in data``).
Serialization is the composition of one pure step per level,
``append_own_fields(target, instance, level_fields)``, applied base-first,
so no level can emit a property before its ancestors have emitted theirs.
"""

from __future__ import annotations

import copy
from collections.abc import Mapping
from typing import Any, Callable, ClassVar, Dict, List, Optional, Tuple, TypeVar

from ..exceptions import ChoiceTypeError
from .fields import ChoiceValue, FieldSet
from .version import FhirVersion

__all__ = ["FhirBase", "append_own_fields", "to_plain", "with_url"]

T = TypeVar("T", bound="FhirBase")


def to_plain(value: Any) -> Any:
    """
    Convert a stored property value into plain JSON-like data.

    Nested models are serialized with their own ordering; lists and
    mappings are rebuilt so the result shares no containers with the model.
    """
    if isinstance(value, FhirBase):
        return value.to_json()
    if isinstance(value, (list, tuple)):
        return [to_plain(v) for v in value]
    if isinstance(value, Mapping):
        return {k: to_plain(v) for k, v in value.items()}
    return value


def append_own_fields(
    target: Dict[str, Any], instance: "FhirBase", level: FieldSet
) -> Dict[str, Any]:
    """
    Append the properties one level owns to ``target``, in declared order.

    Properties that were never set, or were set to None, are not emitted.
    Returns ``target`` so steps can be chained.
    """
    own = vars(instance)
    for name in level:
        value = own.get(name)
        if value is not None:
            target[name] = to_plain(value)
    return target


def with_url(items: Any, url: str) -> List[Any]:
    """Return the extensions in ``items`` whose ``url`` equals ``url``."""
    out = []
    for item in items or ():
        item_url = item.get("url") if isinstance(item, Mapping) else getattr(
            item, "url", None
        )
        if item_url == url:
            out.append(item)
    return out


class FhirBase:
    """
    Base of every model class.

    Instances are immutable once constructed: new values are produced with
    ``with_changes``, ``apply_transform`` or a builder.
    """

    fhir_version: ClassVar[Optional[FhirVersion]] = None

    def __init__(self, data: Optional[Any] = None) -> None:
        if isinstance(data, FhirBase):
            data = vars(data)
        if data:
            for level in type(self)._levels():
                self._assign_props(data, level)

    # --------------------------------------------------------------------------
    # level bookkeeping
    # --------------------------------------------------------------------------

    @classmethod
    def _levels(cls) -> Tuple[FieldSet, ...]:
        """Field sets of every level in the class chain, base-first."""
        cached = cls.__dict__.get("_levels_cache")
        if cached is None:
            cached = tuple(
                c.__dict__["_fields"]
                for c in reversed(cls.__mro__)
                if "_fields" in c.__dict__
            )
            cls._levels_cache = cached
        return cached

    @classmethod
    def known_fields(cls) -> FieldSet:
        """Flat view of every property the class knows about."""
        cached = cls.__dict__.get("_known_cache")
        if cached is None:
            cached = FieldSet()
            for level in cls._levels():
                cached = cached.merged(level)
            cls._known_cache = cached
        return cached

    def _assign_props(self, data: Mapping[str, Any], level: FieldSet) -> None:
        for name in level:
            if name in data:
                object.__setattr__(self, name, data[name])

    # --------------------------------------------------------------------------
    # serialization
    # --------------------------------------------------------------------------

    def serialize_to(self, target: Dict[str, Any]) -> Dict[str, Any]:
        """Append every level's properties to ``target``, base-first."""
        for level in type(self)._levels():
            append_own_fields(target, self, level)
        return target

    def to_json(self) -> Dict[str, Any]:
        """Return plain JSON-like data in FHIR property order."""
        return self.serialize_to({})

    @classmethod
    def from_json(cls: type[T], obj: Mapping[str, Any]) -> T:
        return cls(obj)

    # --------------------------------------------------------------------------
    # functional updates
    # --------------------------------------------------------------------------

    def clone(self: T) -> T:
        """Return a deep copy sharing no nested data with this instance."""
        return type(self)(copy.deepcopy(self.to_json()))

    def with_changes(
        self: T, changes: Optional[Mapping[str, Any]] = None, **kwargs: Any
    ) -> T:
        """
        Return a new instance with ``changes`` applied.

        A change whose value is None drops the property from the result.
        """
        merged = {**self.to_json(), **(changes or {}), **kwargs}
        return type(self)(merged)

    def apply_transform(
        self: T, fn: Callable[[Dict[str, Any]], Mapping[str, Any]]
    ) -> T:
        """Return a new instance updated with ``fn(self.to_json())``."""
        current = self.to_json()
        return type(self)({**current, **fn(current)})

    # --------------------------------------------------------------------------
    # choice groups
    # --------------------------------------------------------------------------

    def get_choice(self, group: str) -> Optional[ChoiceValue]:
        """
        Return the populated variant of choice group ``group``, or None.

        Raises
        ------
        ChoiceTypeError
            If the model declares no such choice group.
        """
        g = type(self).known_fields().choices.get(group)
        if g is None:
            raise ChoiceTypeError(
                f"{type(self).__name__} has no choice group {group!r}"
            )
        return g.variant_of(vars(self))

    # --------------------------------------------------------------------------
    # object protocol
    # --------------------------------------------------------------------------

    def __getattr__(self, name: str) -> Any:
        # only reached for names not materialized on the instance
        if not name.startswith("__") and name in type(self).known_fields():
            return None
        raise AttributeError(
            f"{type(self).__name__!r} object has no attribute {name!r}"
        )

    def __setattr__(self, name: str, value: Any) -> None:
        raise AttributeError(
            f"{type(self).__name__} instances are immutable; "
            f"use with_changes() or a builder"
        )

    def __delattr__(self, name: str) -> None:
        raise AttributeError(
            f"{type(self).__name__} instances are immutable; "
            f"use with_changes() or a builder"
        )

    def __eq__(self, other: object) -> bool:
        if type(other) is not type(self):
            return NotImplemented
        return self.to_json() == other.to_json()  # type: ignore[attr-defined]

    __hash__ = None  # type: ignore[assignment]

    def __str__(self) -> str:
        parts = [type(self).__name__]
        ident = vars(self).get("id")
        if ident:
            parts.append(f"id={ident}")
        return ", ".join(parts)

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.to_json()!r})"

# src/fhir_toolkit/core/fields.py
"""
Field-set declarations for FHIR model levels.

Every level of the element/resource hierarchy (Element, Resource,
DomainResource, a concrete resource, ...) declares the properties it owns
as a ``FieldSet``. Declaration order is FHIR order and is the order used
on serialization.

Entries
-------
- ``"status"``       a singular property.
- ``"identifier[]"`` a repeating property (JSON array).
- ``choice("value", "Quantity", "String")`` a choice group ``value[x]``,
  expanded in place to ``valueQuantity, valueString, _valueString``.
  Primitive variants are followed by their ``_<key>`` companion.
"""

from __future__ import annotations

from typing import Any, Dict, FrozenSet, Iterator, List, Mapping, NamedTuple
from typing import Optional, Tuple, Union

__all__ = [
    "PRIMITIVE_TYPES",
    "ChoiceGroup",
    "ChoiceValue",
    "FieldSet",
    "choice",
    "fields",
    "to_camel",
]

# FHIR primitive datatypes (capitalized as they appear in choice keys).
PRIMITIVE_TYPES: FrozenSet[str] = frozenset(
    {
        "Base64Binary",
        "Boolean",
        "Canonical",
        "Code",
        "Date",
        "DateTime",
        "Decimal",
        "Id",
        "Instant",
        "Integer",
        "Integer64",
        "Markdown",
        "Oid",
        "PositiveInt",
        "String",
        "Time",
        "UnsignedInt",
        "Uri",
        "Url",
        "Uuid",
    }
)

_REPEATING_SUFFIX = "[]"


def to_camel(snake: str) -> str:
    """
    Convert a snake_case attribute name to a FHIR camelCase property name.

    ``"effective_date_time"`` -> ``"effectiveDateTime"``. A leading
    underscore (primitive companion) is preserved: ``"_birth_date"`` ->
    ``"_birthDate"``.
    """
    prefix = "_" if snake.startswith("_") else ""
    head, *rest = snake.lstrip("_").split("_")
    return prefix + head + "".join(p[:1].upper() + p[1:] for p in rest)


class ChoiceValue(NamedTuple):
    """The populated variant of a choice group, e.g. ``("Quantity", {...})``."""

    type: str
    value: Any


class ChoiceGroup:
    """
    A FHIR choice element ``<name>[x]`` with a closed set of variant types.

    Parameters
    ----------
    name : str
        Base name of the choice element (e.g. "value", "effective").
    types : tuple of str
        Variant type names in FHIR declaration order (e.g. "Quantity").
    """

    __slots__ = ("name", "types", "_keys")

    def __init__(self, name: str, types: Tuple[str, ...]) -> None:
        if not types:
            raise ValueError(f"choice group {name!r} needs at least one type")
        self.name = name
        self.types = tuple(types)
        keys: List[str] = []
        for t in self.types:
            keys.append(name + t)
            if t in PRIMITIVE_TYPES:
                keys.append("_" + name + t)
        self._keys = tuple(keys)

    def __repr__(self) -> str:
        return f"ChoiceGroup({self.name!r}, {self.types!r})"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ChoiceGroup):
            return NotImplemented
        return (self.name, self.types) == (other.name, other.types)

    def __hash__(self) -> int:
        return hash((self.name, self.types))

    def key(self, type_name: str) -> str:
        """Return the property name for a variant, e.g. "valueQuantity"."""
        return self.name + type_name

    def keys(self) -> Tuple[str, ...]:
        """All expanded property names, companions included, in order."""
        return self._keys

    def value_keys(self) -> Tuple[str, ...]:
        """Variant property names without primitive companions."""
        return tuple(self.name + t for t in self.types)

    def type_of(self, key: str) -> Optional[str]:
        """Return the variant type a key (or its companion) belongs to."""
        bare = key[1:] if key.startswith("_") else key
        if not bare.startswith(self.name):
            return None
        t = bare[len(self.name) :]
        return t if t in self.types else None

    def sibling_keys(self, key: str) -> Tuple[str, ...]:
        """
        Keys that must be cleared when ``key`` is written.

        Every key of the group except ``key`` itself and the main/companion
        pair of the same variant.
        """
        t = self.type_of(key)
        keep = {self.name + t, "_" + self.name + t} if t else {key}
        return tuple(k for k in self._keys if k not in keep)

    def variant_of(self, source: Mapping[str, Any]) -> Optional[ChoiceValue]:
        """Return the first populated variant in ``source``, if any."""
        for t in self.types:
            k = self.name + t
            if source.get(k) is not None:
                return ChoiceValue(t, source[k])
        return None


def choice(name: str, *types: str) -> ChoiceGroup:
    """Declare a choice group ``<name>[x]`` for use inside ``fields(...)``."""
    return ChoiceGroup(name, types)


Entry = Union[str, ChoiceGroup]


class FieldSet:
    """
    Ordered, immutable set of property names owned by one model level.

    Attributes
    ----------
    names : tuple of str
        Expanded property names in serialization order.
    repeating : frozenset of str
        Names declared as arrays.
    choices : dict
        Choice groups keyed by base name.
    """

    __slots__ = ("names", "repeating", "choices", "_by_key", "_index")

    def __init__(self, *entries: Entry) -> None:
        names: List[str] = []
        repeating = set()
        choices: Dict[str, ChoiceGroup] = {}
        by_key: Dict[str, ChoiceGroup] = {}

        for entry in entries:
            if isinstance(entry, ChoiceGroup):
                if entry.name in choices:
                    raise ValueError(f"duplicate choice group {entry.name!r}")
                choices[entry.name] = entry
                for k in entry.keys():
                    by_key[k] = entry
                names.extend(entry.keys())
            elif isinstance(entry, str):
                if entry.endswith(_REPEATING_SUFFIX):
                    entry = entry[: -len(_REPEATING_SUFFIX)]
                    repeating.add(entry)
                names.append(entry)
            else:
                raise TypeError(
                    f"field entries must be str or ChoiceGroup, "
                    f"got {type(entry).__name__}"
                )

        if len(set(names)) != len(names):
            dupes = sorted({n for n in names if names.count(n) > 1})
            raise ValueError(f"duplicate field names: {dupes}")

        self.names: Tuple[str, ...] = tuple(names)
        self.repeating: FrozenSet[str] = frozenset(repeating)
        self.choices: Dict[str, ChoiceGroup] = choices
        self._by_key = by_key
        self._index = frozenset(names)

    def __iter__(self) -> Iterator[str]:
        return iter(self.names)

    def __len__(self) -> int:
        return len(self.names)

    def __contains__(self, name: object) -> bool:
        return name in self._index

    def __repr__(self) -> str:
        return f"FieldSet{self.names!r}"

    def choice_for(self, key: str) -> Optional[ChoiceGroup]:
        """Return the choice group a property belongs to, or None."""
        return self._by_key.get(key)

    def merged(self, other: "FieldSet") -> "FieldSet":
        """
        Return the union of two field sets (``self`` first).

        Used to build the flat view of every property a class knows about
        across all of its levels.
        """
        out = FieldSet()
        out.names = self.names + tuple(n for n in other.names if n not in self)
        out.repeating = self.repeating | other.repeating
        out.choices = {**self.choices, **other.choices}
        out._by_key = {**self._by_key, **other._by_key}
        out._index = frozenset(out.names)
        return out


def fields(*entries: Entry) -> FieldSet:
    """Declare the properties owned by one model level."""
    return FieldSet(*entries)

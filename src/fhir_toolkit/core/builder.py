# src/fhir_toolkit/core/builder.py
"""
Fluent builders that stage property values and produce model instances.

A builder accumulates values in a private staging mapping (``data``) and
materializes the target model with ``build()``. Besides the named setters
of the base levels, a builder answers to:

- ``set_<field>(value)``           for any property of its model,
- ``add_<field>(value)``           for any repeating property,
- ``set_<group>(type_name, value)`` for any choice group ``<group>[x]``.

Every write to a member of a choice group clears the group's other members,
so a staged object never holds two variants of the same ``<group>[x]``.
"""

from __future__ import annotations

import functools
import logging
from typing import Any, ClassVar, Dict, Generic, Iterable, Optional, Type, TypeVar

from ..exceptions import ChoiceTypeError, VersionMismatchError
from .base import FhirBase
from .fields import FieldSet, to_camel
from .version import FhirVersion

__all__ = [
    "BackboneElementBuilder",
    "BaseBuilder",
    "DomainResourceBuilder",
    "ElementBuilder",
    "ResourceBuilder",
]

LOG = logging.getLogger(__name__)

M = TypeVar("M", bound=FhirBase)
B = TypeVar("B", bound="BaseBuilder")

_MISSING = object()
_EMPTY = FieldSet()


class BaseBuilder(Generic[M]):
    """
    Generic accumulator behind every builder.

    Subclasses bind ``model`` (the class ``build()`` produces) and
    ``fhir_version`` (the release whose models they accept).
    """

    model: ClassVar[Optional[Type[Any]]] = None
    fhir_version: ClassVar[Optional[FhirVersion]] = None

    def __init__(self, data: Optional[Dict[str, Any]] = None) -> None:
        self.data: Dict[str, Any] = dict(data) if data else {}

    @classmethod
    def from_model(cls: Type[B], model: FhirBase) -> B:
        """Return a builder staged with the properties of ``model``."""
        cls._check_version(model)
        data = model.to_json()
        if getattr(cls.model, "resource_type", None) is not None:
            data.pop("resourceType", None)
        return cls(data)

    # --------------------------------------------------------------------------
    # staging primitives
    # --------------------------------------------------------------------------

    @classmethod
    def _known(cls) -> FieldSet:
        return cls.model.known_fields() if cls.model is not None else _EMPTY

    @classmethod
    def _check_version(cls, value: Any) -> None:
        if cls.fhir_version is None:
            return
        items = value if isinstance(value, (list, tuple)) else (value,)
        for item in items:
            if (
                isinstance(item, FhirBase)
                and item.fhir_version is not None
                and item.fhir_version != cls.fhir_version
            ):
                raise VersionMismatchError(
                    f"{cls.__name__} builds FHIR {cls.fhir_version.name} models, "
                    f"got a FHIR {item.fhir_version.name} {type(item).__name__}"
                )

    def set(self: B, key: str, value: Any) -> B:
        """Stage ``value`` under ``key``; choice members clear their siblings."""
        if self._known().choice_for(key) is not None:
            return self.set_choice_type(key, value)
        self._check_version(value)
        self.data[key] = value
        return self

    def add_to_array(self: B, key: str, value: Any) -> B:
        """Append ``value`` to the repeating property ``key``."""
        self._check_version(value)
        self.data.setdefault(key, []).append(value)
        return self

    def set_choice_type(
        self: B, key: str, value: Any, other_keys: Optional[Iterable[str]] = None
    ) -> B:
        """
        Stage one variant of a choice group.

        Deletes every key in ``other_keys`` and every sibling of ``key``
        declared by the model's choice group, then writes ``value``.
        """
        self._check_version(value)
        doomed = list(other_keys or ())
        group = self._known().choice_for(key)
        if group is not None:
            doomed.extend(k for k in group.sibling_keys(key) if k not in doomed)
        cleared = [k for k in doomed if self.data.pop(k, _MISSING) is not _MISSING]
        if cleared:
            LOG.debug("%s: %s replaces %s", type(self).__name__, key, cleared)
        self.data[key] = value
        return self

    def set_choice(self: B, group: str, type_name: str, value: Any) -> B:
        """
        Stage ``value`` as the ``type_name`` variant of ``<group>[x]``.

        Raises
        ------
        ChoiceTypeError
            If the model declares no such group or the group has no such type.
        """
        g = self._known().choices.get(group)
        if g is None:
            raise ChoiceTypeError(f"{self._model_name()} has no choice group {group!r}")
        if type_name not in g.types:
            raise ChoiceTypeError(
                f"{type_name!r} is not a type of {self._model_name()}.{group}[x] "
                f"(expected one of {', '.join(g.types)})"
            )
        return self.set_choice_type(g.key(type_name), value)

    # --------------------------------------------------------------------------
    # build
    # --------------------------------------------------------------------------

    def build(self) -> M:
        """
        Construct the model from the staged data.

        Staged lists are copied so later ``add_*`` calls on this builder do
        not reach instances that were already built.
        """
        if self.model is None:
            raise NotImplementedError(f"{type(self).__name__} does not declare a model")
        staged = {k: list(v) if isinstance(v, list) else v for k, v in self.data.items()}
        return self.model(staged)

    # --------------------------------------------------------------------------
    # fluent setters resolved from the model's fields
    # --------------------------------------------------------------------------

    def _model_name(self) -> str:
        return self.model.__name__ if self.model is not None else type(self).__name__

    def __getattr__(self, name: str) -> Any:
        if not name.startswith("_"):
            known = self._known()
            if name.startswith("set_"):
                field = to_camel(name[4:])
                if field in known.choices:
                    return functools.partial(self.set_choice, field)
                if field in known:
                    return functools.partial(self.set, field)
            elif name.startswith("add_"):
                field = to_camel(name[4:])
                if field in known.repeating:
                    return functools.partial(self.add_to_array, field)
        raise AttributeError(f"{type(self).__name__!r} object has no attribute {name!r}")

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.data!r})"


class ElementBuilder(BaseBuilder[M]):
    """Builder base for datatypes: ``set_id``, ``add_extension``."""

    def set_id(self: B, id: str) -> B:
        return self.set("id", id)

    def add_extension(self: B, extension: Any) -> B:
        return self.add_to_array("extension", extension)


class BackboneElementBuilder(ElementBuilder[M]):
    """Builder base for backbone elements."""

    def add_modifier_extension(self: B, extension: Any) -> B:
        return self.add_to_array("modifierExtension", extension)


class ResourceBuilder(BaseBuilder[M]):
    """Builder base for resources: identity and metadata."""

    def set_id(self: B, id: str) -> B:
        return self.set("id", id)

    def set_meta(self: B, meta: Any) -> B:
        return self.set("meta", meta)

    def set_implicit_rules(self: B, implicit_rules: str) -> B:
        return self.set("implicitRules", implicit_rules)

    def set_language(self: B, language: str) -> B:
        return self.set("language", language)


class DomainResourceBuilder(ResourceBuilder[M]):
    """Builder base for domain resources."""

    def set_text(self: B, text: Any) -> B:
        return self.set("text", text)

    def add_contained(self: B, resource: Any) -> B:
        return self.add_to_array("contained", resource)

    def add_extension(self: B, extension: Any) -> B:
        return self.add_to_array("extension", extension)

    def add_modifier_extension(self: B, extension: Any) -> B:
        return self.add_to_array("modifierExtension", extension)

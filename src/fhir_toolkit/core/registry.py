# src/fhir_toolkit/core/registry.py
"""
Registry of concrete resource classes for one FHIR release.

Provides:
- a ``@registry.register`` decorator binding a ``resourceType`` to a class,
- lookup by ``resourceType`` and dispatching construction from raw JSON,
- listing of registered resource types,
- release-independent type guards over raw mappings and models.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any, Dict, List, Optional, Type

from .resource import Resource
from .version import FhirVersion

__all__ = [
    "ResourceRegistry",
    "get_resource_type",
    "is_fhir_resource",
    "is_resource_type",
]

LOG = logging.getLogger(__name__)


class ResourceRegistry:
    """
    Map of ``resourceType`` -> model class for one FHIR release.

    Parameters
    ----------
    version : FhirVersion
        Release whose classes may be registered.
    fallback : type, optional
        Class used by ``from_json`` for unregistered resource types. It keeps
        the payload's ``resourceType``. Usually the release's DomainResource.
    """

    def __init__(
        self, version: FhirVersion, fallback: Optional[Type[Resource]] = None
    ) -> None:
        self.version = version
        self.fallback = fallback
        self._classes: Dict[str, Type[Resource]] = {}

    def __contains__(self, resource_type: object) -> bool:
        return resource_type in self._classes

    def __len__(self) -> int:
        return len(self._classes)

    def register(self, cls: Type[Resource]) -> Type[Resource]:
        """
        Class decorator registering a concrete resource class.

        Raises
        ------
        TypeError
            If ``cls`` is not a Resource class of this release or declares no
            ``resource_type``.
        ValueError
            If the resource type is already registered.
        """
        if not isinstance(cls, type) or not issubclass(cls, Resource):
            raise TypeError(f"Only Resource classes can be registered, got {cls!r}")
        if cls.fhir_version != self.version:
            raise TypeError(
                f"{cls.__name__} belongs to FHIR {cls.fhir_version}, "
                f"not {self.version}"
            )
        rtype = cls.resource_type
        if not rtype:
            raise TypeError(f"Class {cls.__name__} does not declare resource_type")
        if rtype in self._classes:
            raise ValueError(f"Resource class already registered for {rtype!r}")

        self._classes[rtype] = cls
        LOG.debug("Registered FHIR %s resource %s", self.version.name, rtype)
        return cls

    def available_resource_types(self) -> List[str]:
        """Sorted list of registered resource types."""
        return sorted(self._classes)

    def get_model_class(self, resource_type: str) -> Optional[Type[Resource]]:
        """Return the class registered for ``resource_type``, or None."""
        return self._classes.get(resource_type)

    def from_json(self, obj: Mapping[str, Any]) -> Resource:
        """
        Construct a model from raw JSON, dispatching on ``resourceType``.

        Unregistered resource types are built with the fallback class.

        Raises
        ------
        TypeError
            If ``obj`` is not a mapping, or the type is unregistered and the
            registry has no fallback.
        """
        if not isinstance(obj, Mapping):
            raise TypeError(f"obj must be a mapping, got {type(obj).__name__}")
        rtype = obj.get("resourceType")
        cls = self._classes.get(rtype) if isinstance(rtype, str) else None
        if cls is None:
            if self.fallback is None:
                raise TypeError(f"No resource class registered for {rtype!r}")
            LOG.debug(
                "No FHIR %s class for %r; using %s",
                self.version.name,
                rtype,
                self.fallback.__name__,
            )
            cls = self.fallback
        return cls(obj)


def is_fhir_resource(obj: Any) -> bool:
    """True for a Resource model or a mapping with a string ``resourceType``."""
    if isinstance(obj, Resource):
        return isinstance(vars(obj).get("resourceType"), str)
    return isinstance(obj, Mapping) and isinstance(obj.get("resourceType"), str)


def get_resource_type(obj: Any) -> Optional[str]:
    """Return the ``resourceType`` of a model or raw mapping, or None."""
    if not is_fhir_resource(obj):
        return None
    if isinstance(obj, Resource):
        return vars(obj)["resourceType"]
    return obj["resourceType"]


def is_resource_type(obj: Any, resource_type: str) -> bool:
    """True if ``obj`` is a resource of the given type (model or mapping)."""
    return get_resource_type(obj) == resource_type

# src/fhir_toolkit/core/resource.py
"""
Version-agnostic Resource roles.

``resourceType`` is the discriminant of the FHIR JSON tagged union. A
concrete resource class fixes it through ``resource_type``; the tag in the
input is ignored for such classes. The release's generic DomainResource
has no fixed tag and keeps whatever tag the input carries, which is how
unknown resource kinds pass through the registry untouched.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any, ClassVar, List, Optional

from .base import FhirBase, with_url

__all__ = ["DomainResource", "Resource"]


class Resource(FhirBase):
    """Root of anything independently referenceable."""

    resource_type: ClassVar[Optional[str]] = None

    def __init__(self, data: Optional[Any] = None) -> None:
        super().__init__(data)
        if self.resource_type is not None:
            object.__setattr__(self, "resourceType", self.resource_type)


class DomainResource(Resource):
    """Resource with narrative, contained resources and extensions."""

    def get_extensions(self, url: str) -> List[Any]:
        return with_url(vars(self).get("extension"), url)

    def get_modifier_extensions(self, url: str) -> List[Any]:
        return with_url(vars(self).get("modifierExtension"), url)

    def get_contained(self, ref: str) -> Optional[Any]:
        """
        Resolve a local reference against ``contained``.

        Parameters
        ----------
        ref : str
            "#id" as written in a Reference, or the bare id.

        Returns
        -------
        The contained resource (model or raw mapping) or None.
        """
        wanted = ref[1:] if ref.startswith("#") else ref
        for item in vars(self).get("contained") or ():
            ident = item.get("id") if isinstance(item, Mapping) else getattr(
                item, "id", None
            )
            if ident == wanted:
                return item
        return None

# src/fhir_toolkit/interop.py
"""
Bridge between fhir_toolkit models and ``fhir.resources`` pydantic models.

The toolkit's models never validate; ``fhir.resources`` does. Converting a
model with ``to_fhir_resources`` runs the full pydantic validation of the
matching release, and ``from_fhir_resources`` brings a validated resource
back into ordered, immutable toolkit form.

Release mapping
---------------
R5   -> ``fhir.resources``      (the package's default release)
R4B  -> ``fhir.resources.R4B``
R4   -> not available in current ``fhir.resources`` releases

``from_fhir_resources`` reads the release off the pydantic model's module,
so an R4B model always becomes an R4B toolkit model.
"""

from __future__ import annotations

import importlib
import json
import logging
from typing import Any, Dict, Optional, Union

from pydantic import ValidationError

from .core.base import FhirBase
from .core.resource import Resource
from .core.version import R4B, R5, FhirVersion, load_version, resolve_version
from .exceptions import InteropError, VersionMismatchError

__all__ = ["to_fhir_resources", "from_fhir_resources"]

LOG = logging.getLogger(__name__)

_PACKAGES: Dict[str, str] = {
    "R4B": "fhir.resources.R4B",
    "R5": "fhir.resources",
}

# fhir.resources subpackages of releases without toolkit models.
_UNSUPPORTED_PACKAGES = frozenset({"STU3", "DSTU2"})


def _fhir_resources_package(version: FhirVersion):
    name = _PACKAGES.get(version.name)
    if name is None:
        raise InteropError(
            f"fhir.resources has no models for FHIR {version.name}; "
            f"supported: {', '.join(_PACKAGES)}"
        )
    return importlib.import_module(name)


def _dump(resource: Any) -> Dict[str, Any]:
    """
    Dump a pydantic FHIR resource to plain JSON data.

    Preference order
    ----------------
    1) Pydantic v2: model_dump_json(by_alias=True, exclude_none=True)
    2) fhir.resources: json()
    3) Pydantic v1: dict(by_alias=True)
    """
    mdj = getattr(resource, "model_dump_json", None)
    if callable(mdj):
        return json.loads(mdj(by_alias=True, exclude_none=True))
    js = getattr(resource, "json", None)
    if callable(js):
        return json.loads(js())
    dmethod = getattr(resource, "dict", None)
    if callable(dmethod):
        return dmethod(by_alias=True)
    raise InteropError(
        f"Object is not a fhir.resources model: {type(resource).__name__}"
    )


def to_fhir_resources(model: Resource) -> Any:
    """
    Validate a toolkit resource into the matching ``fhir.resources`` model.

    Parameters
    ----------
    model : Resource
        Toolkit resource of release R4B or R5.

    Returns
    -------
    fhir.resources resource
        Validated pydantic instance of the same resource type.

    Raises
    ------
    InteropError
        If the model is not a versioned resource, the release has no
        ``fhir.resources`` package, the resource type is unknown there, or
        pydantic validation fails.
    """
    if not isinstance(model, FhirBase) or model.fhir_version is None:
        raise InteropError(
            f"Expected a versioned fhir_toolkit model, got {type(model).__name__}"
        )
    data = model.to_json()
    rtype = data.get("resourceType")
    if not isinstance(rtype, str):
        raise InteropError(f"{type(model).__name__} has no resourceType")

    package = _fhir_resources_package(model.fhir_version)
    try:
        cls = package.get_fhir_model_class(rtype)
    except (ImportError, KeyError, ValueError) as e:
        raise InteropError(f"fhir.resources has no model for {rtype!r}: {e}") from e

    try:
        validate = getattr(cls, "model_validate", None)
        if callable(validate):
            res = validate(data)
        else:
            res = cls.parse_obj(data)
    except ValidationError as e:
        raise InteropError(f"FHIR {model.fhir_version.name} validation error: {e}") from e

    LOG.debug("Validated %s with %s.%s", model, cls.__module__, cls.__name__)
    return res


def _release_of(resource: Any) -> FhirVersion:
    """
    Release of a ``fhir.resources`` model, read from its module path.

    ``fhir.resources.R4B.patient`` is R4B; a module directly under
    ``fhir.resources`` is R5. Other subpackages (STU3, DSTU2) are releases
    the toolkit does not model.
    """
    module = type(resource).__module__ or ""
    prefix = "fhir.resources."
    if not module.startswith(prefix):
        raise InteropError(
            f"Object is not a fhir.resources model: {type(resource).__name__}"
        )
    head = module[len(prefix) :].split(".", 1)[0]
    if head == "R4B":
        return R4B
    if head in _UNSUPPORTED_PACKAGES:
        raise InteropError(
            f"fhir.resources {head} models are not supported; "
            f"supported: {', '.join(_PACKAGES)}"
        )
    return R5


def from_fhir_resources(
    resource: Any, version: Optional[Union[str, FhirVersion]] = None
) -> Resource:
    """
    Convert a ``fhir.resources`` model into a toolkit model.

    The release is the one the ``fhir.resources`` model belongs to; models
    never cross release boundaries.

    Parameters
    ----------
    resource : pydantic model
        A ``fhir.resources`` R5 or R4B resource instance.
    version : str or FhirVersion, optional
        Expected release. When given it must match the model's release.

    Returns
    -------
    Resource
        Ordered toolkit model (registered class or generic DomainResource).

    Raises
    ------
    InteropError
        If ``resource`` is not a ``fhir.resources`` model of a supported
        release or cannot be dumped to JSON.
    VersionMismatchError
        If ``version`` names another release than the model's.
    UnknownVersionError
        If ``version`` names no supported release.
    """
    expected = resolve_version(version) if version is not None else None
    v = _release_of(resource)
    if expected is not None and expected != v:
        raise VersionMismatchError(
            f"Expected a FHIR {expected.name} resource, got a FHIR {v.name} "
            f"{type(resource).__name__} from {type(resource).__module__}"
        )

    data = _dump(resource)
    if not isinstance(data, dict):
        raise InteropError("fhir.resources model did not dump to a JSON object")
    data.setdefault("resourceType", type(resource).__name__)
    return load_version(v).registry.from_json(data)

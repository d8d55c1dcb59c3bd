# src/fhir_toolkit/parser.py
"""
FHIR parsing utilities.

Provides loaders for FHIR JSON and XML files that return models of a chosen
FHIR release. Like the models themselves, loading is permissive: properties
a model does not declare are dropped, unknown resource types fall back to
the release's generic DomainResource, and nothing is validated.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import AbstractSet, Any, Callable, Dict, List, Optional, Tuple, Union

from lxml import etree

from .core.resource import Resource
from .core.version import FhirVersion, load_version
from .exceptions import ParseError
from .shapes import is_primitive, property_type

__all__ = ["load_fhir_json", "load_fhir_xml", "parse_fhir_obj"]

LOG = logging.getLogger(__name__)

XHTML_NS = "http://www.w3.org/1999/xhtml"

VersionLike = Union[str, FhirVersion]


def _xml_bool(text: str) -> bool:
    if text not in ("true", "false"):
        raise ValueError(f"invalid boolean: {text!r}")
    return text == "true"


# Primitive types whose XML value attribute maps to a JSON number or boolean.
# integer64 stays a string in FHIR JSON.
_CONVERTERS: Dict[str, Callable[[str], Any]] = {
    "boolean": _xml_bool,
    "integer": int,
    "positiveInt": int,
    "unsignedInt": int,
    "decimal": float,
}


# ------------------------------------------------------------------------------
# helpers
# ------------------------------------------------------------------------------


def _ensure_file(path: Path) -> None:
    """Validate that a path exists and is a file; raise ParseError if not."""
    if not isinstance(path, Path):
        raise ParseError(f"path must be pathlib.Path, got {type(path).__name__}")
    if not path.exists():
        raise ParseError(f"file does not exist: {path}")
    if not path.is_file():
        raise ParseError(f"not a file: {path}")


def _local(tag: str) -> str:
    """Return the local (namespace-stripped) tag name."""
    return tag.split("}", 1)[1] if "}" in tag else tag


def _children(elem) -> List[Any]:
    # comments and processing instructions have non-str tags
    return [c for c in elem if isinstance(c.tag, str)]


def _scalar(type_name: Optional[str], text: str) -> Any:
    """Convert a primitive's value attribute by its FHIR type; bad input stays text."""
    conv = _CONVERTERS.get(type_name or "")
    if conv is None:
        return text
    try:
        return conv(text)
    except ValueError:
        return text


def _primitive_parts(
    elem, type_name: Optional[str], registry
) -> Tuple[Any, Optional[Dict[str, Any]]]:
    """
    Split a primitive element into its JSON value and ``_<name>`` companion.

    ``<birthDate id="bd" value="2000-01-01"/>`` gives
    ``("2000-01-01", {"id": "bd"})``. The companion is None when the element
    carries neither an ``id`` nor extensions.
    """
    val = elem.get("value")
    value = None if val is None else _scalar(type_name, val)

    extra: Dict[str, Any] = {}
    if elem.get("id") is not None:
        extra["id"] = elem.get("id")
    exts = [
        _complex_to_obj(c, "Extension", registry)
        for c in _children(elem)
        if _local(c.tag) == "extension"
    ]
    if exts:
        extra["extension"] = exts
    return value, extra or None


def _add_primitive(
    out: Dict[str, Any], name: str, parts: List[Tuple[Any, Any]], as_list: bool
) -> None:
    if not as_list:
        value, extra = parts[0]
        if value is not None:
            out[name] = value
        if extra is not None:
            out["_" + name] = extra
        return

    # arrays stay index-aligned; missing entries are null
    values = [v for v, _ in parts]
    extras = [x for _, x in parts]
    if any(v is not None for v in values):
        out[name] = values
    if any(x is not None for x in extras):
        out["_" + name] = extras


def _complex_to_obj(
    elem,
    owner: Optional[str],
    registry,
    resource: bool = False,
    repeating: AbstractSet[str] = frozenset(),
) -> Dict[str, Any]:
    """
    Convert a complex FHIR XML element into a JSON object.

    Rules
    -----
    - ``id`` and ``url`` attributes become properties.
    - Child elements are grouped by local name (namespaces are stripped).
      A property is a list when its type repeats, when it is in
      ``repeating``, or when the XML repeats it.
    - Primitive children give a JSON scalar converted by their FHIR type,
      plus a ``_<name>`` companion for an ``id`` or extensions.
    - A narrative ``div`` (XHTML) is kept as serialized markup.
    - ``contained`` wraps one resource, converted with its tag as
      ``resourceType``.
    - Children of unknown type are primitives when they carry a ``value``
      attribute and objects otherwise.
    """
    out: Dict[str, Any] = {}
    for attr in ("id", "url"):
        if elem.get(attr) is not None:
            out[attr] = elem.get(attr)

    groups: Dict[str, List[Any]] = {}
    for child in _children(elem):
        groups.setdefault(_local(child.tag), []).append(child)

    release = registry.version.name
    for name, elems in groups.items():
        ptype = property_type(owner, name, release, resource)
        t = ptype.type
        as_list = ptype.repeating or name in repeating or len(elems) > 1

        if t == "xhtml" or (t is None and elems[0].tag == f"{{{XHTML_NS}}}div"):
            values = [etree.tostring(e, encoding="unicode", with_tail=False) for e in elems]
        elif t == "Resource":
            values = [_contained_to_obj(e, registry) for e in elems]
        elif is_primitive(t) or (t is None and elems[0].get("value") is not None):
            _add_primitive(out, name, [_primitive_parts(e, t, registry) for e in elems], as_list)
            continue
        else:
            values = [_complex_to_obj(e, t, registry) for e in elems]
        out[name] = values if as_list else values[0]
    return out


def _contained_to_obj(wrapper, registry) -> Dict[str, Any]:
    # <contained><Patient>...</Patient></contained>
    children = _children(wrapper)
    if len(children) != 1:
        raise ParseError(
            f"contained must hold exactly one resource, got {len(children)} elements"
        )
    return _resource_to_obj(children[0], registry)


def _resource_to_obj(elem, registry) -> Dict[str, Any]:
    """
    Convert a resource element; its local tag name is the ``resourceType``.

    Properties the release's model class declares as repeating are lists
    even when the XML holds a single element.
    """
    rtype = _local(elem.tag)
    cls = registry.get_model_class(rtype) or registry.fallback
    repeating = cls.known_fields().repeating if cls is not None else frozenset()
    data: Dict[str, Any] = {"resourceType": rtype}
    data.update(_complex_to_obj(elem, rtype, registry, resource=True, repeating=repeating))
    return data


def _registry_for(version: VersionLike):
    return load_version(version).registry


# ------------------------------------------------------------------------------
# public API
# ------------------------------------------------------------------------------


def parse_fhir_obj(obj: Any, version: VersionLike = "R4") -> Resource:
    """
    Build a model of the given release from parsed JSON.

    Parameters
    ----------
    obj : Any
        Parsed JSON; must be an object with a ``resourceType``.
    version : str or FhirVersion, default "R4"
        FHIR release whose models are used.

    Returns
    -------
    Resource
        Instance of the registered class for ``resourceType``, or the
        release's generic DomainResource for unregistered types.

    Raises
    ------
    ParseError
        If ``obj`` is not a JSON object or carries no string ``resourceType``.
    UnknownVersionError
        If ``version`` names no supported release.
    """
    if not isinstance(obj, dict):
        raise ParseError("FHIR JSON must be an object at the top level")
    if not isinstance(obj.get("resourceType"), str):
        raise ParseError("FHIR JSON object has no resourceType")
    return _registry_for(version).from_json(obj)


def load_fhir_json(path: Path, version: VersionLike = "R4") -> Resource:
    """
    Load a FHIR resource from a JSON file.

    Raises
    ------
    ParseError
        If the path is invalid, the file cannot be read, the JSON is not
        valid, or the document is not a resource object.
    """
    _ensure_file(path)

    try:
        text = path.read_text(encoding="utf-8")
    except OSError as e:
        raise ParseError(f"failed to read JSON: {e}") from e

    try:
        obj: Any = json.loads(text)
    except json.JSONDecodeError as e:
        raise ParseError(f"invalid JSON: {e}") from e

    res = parse_fhir_obj(obj, version)
    LOG.debug("Loaded %s from %s", res, path)
    return res


def load_fhir_xml(path: Path, version: VersionLike = "R4") -> Resource:
    """
    Load a FHIR resource from an XML file.

    The root element's local name is the ``resourceType``. The tree is
    converted to FHIR JSON using the property types of the release's
    elements: primitives become typed JSON scalars with ``_<name>``
    companions for ids and extensions, and repeating properties are lists at
    every depth, even when the XML holds a single element.

    Raises
    ------
    ParseError
        If the path is invalid, the XML cannot be parsed, or a ``contained``
        element does not hold exactly one resource.
    """
    _ensure_file(path)

    try:
        # lxml handles encoding detection.
        root = etree.parse(str(path)).getroot()
    except (etree.XMLSyntaxError, OSError) as e:
        raise ParseError(f"invalid XML: {e}") from e

    registry = _registry_for(version)
    data = _resource_to_obj(root, registry)

    res = registry.from_json(data)
    LOG.debug("Loaded %s from %s", res, path)
    return res

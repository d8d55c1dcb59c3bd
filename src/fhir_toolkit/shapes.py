# src/fhir_toolkit/shapes.py
"""
Property types of the FHIR elements the toolkit models.

FHIR XML carries no JSON typing: every primitive is a ``value`` attribute
and a single repeating element looks exactly like a singular one. The XML
loader needs to know, per property, the FHIR type and whether it repeats.
This module answers that for the resources, backbones and datatypes the
models reference.

Type specs are written like model field entries: ``"string[]"`` is a
repeating string, ``"HumanName"`` a singular complex value. Owners are
resource names (``"Patient"``), backbone paths (``"Patient.contact"``) or
datatype names (``"HumanName"``). Choice variants (``valueQuantity``) need
no entry; their type is read from the property name suffix.
"""

from __future__ import annotations

from typing import Dict, FrozenSet, Mapping, NamedTuple, Optional

__all__ = [
    "PRIMITIVES",
    "PropertyType",
    "is_primitive",
    "property_type",
]

PRIMITIVES: FrozenSet[str] = frozenset(
    {
        "base64Binary",
        "boolean",
        "canonical",
        "code",
        "date",
        "dateTime",
        "decimal",
        "id",
        "instant",
        "integer",
        "integer64",
        "markdown",
        "oid",
        "positiveInt",
        "string",
        "time",
        "unsignedInt",
        "uri",
        "url",
        "uuid",
        "xhtml",
    }
)


class PropertyType(NamedTuple):
    """FHIR type of one property and whether it is a JSON array."""

    type: Optional[str]
    repeating: bool


UNKNOWN = PropertyType(None, False)

# ------------------------------------------------------------------------------
# owner shapes
# ------------------------------------------------------------------------------

_ELEMENT: Dict[str, str] = {
    "extension": "Extension[]",
    "modifierExtension": "Extension[]",
}

_RESOURCE: Dict[str, str] = {
    "id": "id",
    "meta": "Meta",
    "implicitRules": "uri",
    "language": "code",
    "text": "Narrative",
    "contained": "Resource[]",
    "extension": "Extension[]",
    "modifierExtension": "Extension[]",
}

_QUANTITY = {
    "value": "decimal",
    "comparator": "code",
    "unit": "string",
    "system": "uri",
    "code": "code",
}

_DATATYPES: Dict[str, Dict[str, str]] = {
    "Extension": {"url": "uri"},
    "Narrative": {"status": "code", "div": "xhtml"},
    "Meta": {
        "versionId": "id",
        "lastUpdated": "instant",
        "source": "uri",
        "profile": "canonical[]",
        "security": "Coding[]",
        "tag": "Coding[]",
    },
    "Coding": {
        "system": "uri",
        "version": "string",
        "code": "code",
        "display": "string",
        "userSelected": "boolean",
    },
    "CodeableConcept": {"coding": "Coding[]", "text": "string"},
    "CodeableReference": {"concept": "CodeableConcept", "reference": "Reference"},
    "Identifier": {
        "use": "code",
        "type": "CodeableConcept",
        "system": "uri",
        "value": "string",
        "period": "Period",
        "assigner": "Reference",
    },
    "Reference": {
        "reference": "string",
        "type": "uri",
        "identifier": "Identifier",
        "display": "string",
    },
    "Period": {"start": "dateTime", "end": "dateTime"},
    "Quantity": _QUANTITY,
    "Age": _QUANTITY,
    "Count": _QUANTITY,
    "Distance": _QUANTITY,
    "Duration": _QUANTITY,
    "Range": {"low": "Quantity", "high": "Quantity"},
    "Ratio": {"numerator": "Quantity", "denominator": "Quantity"},
    "RatioRange": {
        "lowNumerator": "Quantity",
        "highNumerator": "Quantity",
        "denominator": "Quantity",
    },
    "Money": {"value": "decimal", "currency": "code"},
    "SampledData": {
        "origin": "Quantity",
        "period": "decimal",
        "interval": "decimal",
        "intervalUnit": "code",
        "factor": "decimal",
        "lowerLimit": "decimal",
        "upperLimit": "decimal",
        "dimensions": "positiveInt",
        "codeMap": "canonical",
        "offsets": "string",
        "data": "string",
    },
    "HumanName": {
        "use": "code",
        "text": "string",
        "family": "string",
        "given": "string[]",
        "prefix": "string[]",
        "suffix": "string[]",
        "period": "Period",
    },
    "ContactPoint": {
        "system": "code",
        "value": "string",
        "use": "code",
        "rank": "positiveInt",
        "period": "Period",
    },
    "Address": {
        "use": "code",
        "type": "code",
        "text": "string",
        "line": "string[]",
        "city": "string",
        "district": "string",
        "state": "string",
        "postalCode": "string",
        "country": "string",
        "period": "Period",
    },
    "Attachment": {
        "contentType": "code",
        "language": "code",
        "data": "base64Binary",
        "url": "url",
        "size": "unsignedInt",
        "hash": "base64Binary",
        "title": "string",
        "creation": "dateTime",
        "height": "positiveInt",
        "width": "positiveInt",
        "frames": "positiveInt",
        "duration": "decimal",
        "pages": "positiveInt",
    },
    "Annotation": {"time": "dateTime", "text": "markdown"},
    "Timing": {"event": "dateTime[]", "repeat": "Timing.repeat", "code": "CodeableConcept"},
    "Timing.repeat": {
        "count": "positiveInt",
        "countMax": "positiveInt",
        "duration": "decimal",
        "durationMax": "decimal",
        "durationUnit": "code",
        "frequency": "positiveInt",
        "frequencyMax": "positiveInt",
        "period": "decimal",
        "periodMax": "decimal",
        "periodUnit": "code",
        "dayOfWeek": "code[]",
        "timeOfDay": "time[]",
        "when": "code[]",
        "offset": "unsignedInt",
    },
}

_BACKBONES: Dict[str, Dict[str, str]] = {
    "Patient.contact": {
        "relationship": "CodeableConcept[]",
        "name": "HumanName",
        "telecom": "ContactPoint[]",
        "address": "Address",
        "gender": "code",
        "organization": "Reference",
        "period": "Period",
    },
    "Patient.communication": {"language": "CodeableConcept", "preferred": "boolean"},
    "Patient.link": {"other": "Reference", "type": "code"},
    "Observation.triggeredBy": {
        "observation": "Reference",
        "type": "code",
        "reason": "string",
    },
    "Observation.referenceRange": {
        "low": "Quantity",
        "high": "Quantity",
        "normalValue": "CodeableConcept",
        "type": "CodeableConcept",
        "appliesTo": "CodeableConcept[]",
        "age": "Range",
        "text": "string",
    },
    "Observation.component": {
        "code": "CodeableConcept",
        "dataAbsentReason": "CodeableConcept",
        "interpretation": "CodeableConcept[]",
        "referenceRange": "Observation.referenceRange[]",
    },
}

_RESOURCES: Dict[str, Dict[str, str]] = {
    "Basic": {
        "identifier": "Identifier[]",
        "code": "CodeableConcept",
        "subject": "Reference",
        "created": "dateTime",
        "author": "Reference",
    },
    "Patient": {
        "identifier": "Identifier[]",
        "active": "boolean",
        "name": "HumanName[]",
        "telecom": "ContactPoint[]",
        "gender": "code",
        "birthDate": "date",
        "address": "Address[]",
        "maritalStatus": "CodeableConcept",
        "photo": "Attachment[]",
        "contact": "Patient.contact[]",
        "communication": "Patient.communication[]",
        "generalPractitioner": "Reference[]",
        "managingOrganization": "Reference",
        "link": "Patient.link[]",
    },
    "Observation": {
        "identifier": "Identifier[]",
        "basedOn": "Reference[]",
        "triggeredBy": "Observation.triggeredBy[]",
        "partOf": "Reference[]",
        "status": "code",
        "category": "CodeableConcept[]",
        "code": "CodeableConcept",
        "subject": "Reference",
        "focus": "Reference[]",
        "encounter": "Reference",
        "issued": "instant",
        "performer": "Reference[]",
        "dataAbsentReason": "CodeableConcept",
        "interpretation": "CodeableConcept[]",
        "note": "Annotation[]",
        "bodySite": "CodeableConcept",
        "bodyStructure": "Reference",
        "method": "CodeableConcept",
        "specimen": "Reference",
        "device": "Reference",
        "referenceRange": "Observation.referenceRange[]",
        "hasMember": "Reference[]",
        "derivedFrom": "Reference[]",
        "component": "Observation.component[]",
    },
}

# Per-release differences on top of the tables above.
_RELEASE_OVERRIDES: Dict[str, Dict[str, Dict[str, str]]] = {
    "R5": {"Attachment": {"size": "integer64"}},
}

# Capitalized type names a choice key can end with (valueDateTime -> dateTime).
_CHOICE_SUFFIXES: Dict[str, str] = {
    **{t[:1].upper() + t[1:]: t for t in PRIMITIVES if t != "xhtml"},
    **{t: t for t in list(_DATATYPES) if "." not in t},
    **{
        t: t
        for t in (
            "Signature",
            "ContactDetail",
            "Contributor",
            "DataRequirement",
            "Expression",
            "ParameterDefinition",
            "RelatedArtifact",
            "TriggerDefinition",
            "UsageContext",
            "Availability",
            "ExtendedContactDetail",
            "Dosage",
        )
    },
}


# ------------------------------------------------------------------------------
# lookup
# ------------------------------------------------------------------------------


def _parse(spec: str) -> PropertyType:
    if spec.endswith("[]"):
        return PropertyType(spec[:-2], True)
    return PropertyType(spec, False)


def _choice_type(name: str) -> Optional[str]:
    """Type of a choice key from its suffix, longest match first."""
    for i in range(1, len(name)):
        if name[i].isupper():
            t = _CHOICE_SUFFIXES.get(name[i:])
            if t is not None:
                return t
    return None


def _owner_props(owner: str, resource: bool, release: str) -> Mapping[str, str]:
    base = _RESOURCE if resource else _ELEMENT
    own = (_RESOURCES if resource else {**_DATATYPES, **_BACKBONES}).get(owner, {})
    override = _RELEASE_OVERRIDES.get(release, {}).get(owner, {})
    return {**base, **own, **override}


def is_primitive(type_name: Optional[str]) -> bool:
    """True for FHIR primitive type names (``"boolean"``, ``"dateTime"``, ...)."""
    return type_name in PRIMITIVES


def property_type(
    owner: Optional[str], name: str, release: str = "R4", resource: bool = False
) -> PropertyType:
    """
    Return the FHIR type of property ``name`` of ``owner``.

    Parameters
    ----------
    owner : str or None
        Resource name, backbone path or datatype name. ``None`` means the
        owner is not known; only choice suffixes are resolved then.
    name : str
        Property (XML element) name.
    release : str, default "R4"
        FHIR release name; selects per-release differences.
    resource : bool, default False
        Whether ``owner`` is a resource. Unknown resources still get the
        Resource and DomainResource properties.

    Returns
    -------
    PropertyType
        ``PropertyType(None, False)`` when the property is not known.
    """
    if owner is not None or resource:
        spec = _owner_props(owner or "", resource, release).get(name)
        if spec is not None:
            return _parse(spec)
    t = _choice_type(name)
    return PropertyType(t, False) if t is not None else UNKNOWN

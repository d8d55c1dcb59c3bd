# src/fhir_toolkit/r4b/_fields.py
"""
Property declarations for FHIR R4B (4.3.0), one field set per model level.

Order follows the R4B StructureDefinitions.
"""

from __future__ import annotations

from ..core.fields import choice, fields

# ------------------------------------------------------------------------------
# base levels
# ------------------------------------------------------------------------------

ELEMENT = fields("id", "extension[]")

BACKBONE_ELEMENT = fields("modifierExtension[]")

RESOURCE = fields(
    "resourceType",
    "id",
    "meta",
    "implicitRules",
    "_implicitRules",
    "language",
    "_language",
)

DOMAIN_RESOURCE = fields("text", "contained[]", "extension[]", "modifierExtension[]")

# ------------------------------------------------------------------------------
# datatypes
# ------------------------------------------------------------------------------

# Extension.value[x] in R4B (open type list of 4.3.0).
EXTENSION_VALUE_TYPES = (
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
    "Markdown",
    "Oid",
    "PositiveInt",
    "String",
    "Time",
    "UnsignedInt",
    "Uri",
    "Url",
    "Uuid",
    "Address",
    "Age",
    "Annotation",
    "Attachment",
    "CodeableConcept",
    "CodeableReference",
    "Coding",
    "ContactPoint",
    "Count",
    "Distance",
    "Duration",
    "HumanName",
    "Identifier",
    "Money",
    "Period",
    "Quantity",
    "Range",
    "Ratio",
    "RatioRange",
    "Reference",
    "SampledData",
    "Signature",
    "Timing",
    "ContactDetail",
    "Contributor",
    "DataRequirement",
    "Expression",
    "ParameterDefinition",
    "RelatedArtifact",
    "TriggerDefinition",
    "UsageContext",
    "Dosage",
)

EXTENSION = fields("url", choice("value", *EXTENSION_VALUE_TYPES))

# ------------------------------------------------------------------------------
# backbones
# ------------------------------------------------------------------------------

PATIENT_CONTACT = fields(
    "relationship[]",
    "name",
    "telecom[]",
    "address",
    "gender",
    "_gender",
    "organization",
    "period",
)

OBSERVATION_COMPONENT = fields(
    "code",
    choice(
        "value",
        "Quantity",
        "CodeableConcept",
        "String",
        "Boolean",
        "Integer",
        "Range",
        "Ratio",
        "SampledData",
        "Time",
        "DateTime",
        "Period",
    ),
    "dataAbsentReason",
    "interpretation[]",
    "referenceRange[]",
)

# ------------------------------------------------------------------------------
# resources
# ------------------------------------------------------------------------------

BASIC = fields("identifier[]", "code", "subject", "created", "_created", "author")

PATIENT = fields(
    "identifier[]",
    "active",
    "_active",
    "name[]",
    "telecom[]",
    "gender",
    "_gender",
    "birthDate",
    "_birthDate",
    choice("deceased", "Boolean", "DateTime"),
    "address[]",
    "maritalStatus",
    choice("multipleBirth", "Boolean", "Integer"),
    "photo[]",
    "contact[]",
    "communication[]",
    "generalPractitioner[]",
    "managingOrganization",
    "link[]",
)

OBSERVATION = fields(
    "identifier[]",
    "basedOn[]",
    "partOf[]",
    "status",
    "_status",
    "category[]",
    "code",
    "subject",
    "focus[]",
    "encounter",
    choice("effective", "DateTime", "Period", "Timing", "Instant"),
    "issued",
    "_issued",
    "performer[]",
    choice(
        "value",
        "Quantity",
        "CodeableConcept",
        "String",
        "Boolean",
        "Integer",
        "Range",
        "Ratio",
        "SampledData",
        "Time",
        "DateTime",
        "Period",
    ),
    "dataAbsentReason",
    "interpretation[]",
    "note[]",
    "bodySite",
    "method",
    "specimen",
    "device",
    "referenceRange[]",
    "hasMember[]",
    "derivedFrom[]",
    "component[]",
)

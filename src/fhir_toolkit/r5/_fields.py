# src/fhir_toolkit/r5/_fields.py
"""
Property declarations for FHIR R5 (5.0.0), one field set per model level.

Order follows the R5 StructureDefinitions. DataType owns no properties and
has no field set; BackboneType adds modifierExtension on top of it.
"""

from __future__ import annotations

from ..core.fields import choice, fields

# ------------------------------------------------------------------------------
# base levels
# ------------------------------------------------------------------------------

ELEMENT = fields("id", "extension[]")

BACKBONE_ELEMENT = fields("modifierExtension[]")

BACKBONE_TYPE = fields("modifierExtension[]")

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

# Extension.value[x] in R5: adds integer64, Availability, ExtendedContactDetail;
# Contributor is gone.
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
    "DataRequirement",
    "Expression",
    "ParameterDefinition",
    "RelatedArtifact",
    "TriggerDefinition",
    "UsageContext",
    "Availability",
    "ExtendedContactDetail",
    "Dosage",
    "Meta",
)

EXTENSION = fields("url", choice("value", *EXTENSION_VALUE_TYPES))

TIMING = fields("event[]", "_event[]", "repeat", "code")

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

OBSERVATION_TRIGGERED_BY = fields("observation", "type", "_type", "reason", "_reason")

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
        "Attachment",
        "Reference",
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
    choice("instantiates", "Canonical", "Reference"),
    "basedOn[]",
    "triggeredBy[]",
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
        "Attachment",
        "Reference",
    ),
    "dataAbsentReason",
    "interpretation[]",
    "note[]",
    "bodySite",
    "bodyStructure",
    "method",
    "specimen",
    "device",
    "referenceRange[]",
    "hasMember[]",
    "derivedFrom[]",
    "component[]",
)

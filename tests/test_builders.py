# tests/test_builders.py
"""
Tests for fhir_toolkit.core.builder through the R4 builders.
"""

import logging

import pytest

from fhir_toolkit.core.builder import BaseBuilder
from fhir_toolkit.exceptions import ChoiceTypeError, VersionMismatchError
from fhir_toolkit.r4 import (
    BasicBuilder,
    Extension,
    ExtensionBuilder,
    Observation,
    ObservationBuilder,
    ObservationComponentBuilder,
    Patient,
    PatientBuilder,
    PatientContactBuilder,
)
from fhir_toolkit import r5

QTY = {"value": 5.4, "unit": "mmol/L"}

# ------------------------------------------------------------------------------
# choice-type exclusivity
# ------------------------------------------------------------------------------


def test_string_then_quantity_keeps_quantity():
    obs = ObservationBuilder().set_value_string("x").set_value_quantity(QTY).build()
    assert obs.valueString is None
    assert "valueString" not in obs.to_json()
    assert obs.valueQuantity == QTY


def test_quantity_then_string_keeps_string():
    obs = ObservationBuilder().set_value_quantity(QTY).set_value_string("x").build()
    assert obs.valueQuantity is None
    assert obs.valueString == "x"


def test_set_choice_clears_companion_of_other_variant():
    b = ObservationBuilder().set("_valueString", {"id": "c"}).set_value_string("x")
    assert b.data == {"_valueString": {"id": "c"}, "valueString": "x"}
    b.set_value("Boolean", True)
    assert b.data == {"valueBoolean": True}


def test_set_choice_by_group_and_type():
    ext = ExtensionBuilder().set_url("http://e").set_value("Boolean", True).build()
    assert ext.to_json() == {"url": "http://e", "valueBoolean": True}
    assert ext.get_choice("value") == ("Boolean", True)


def test_set_choice_unknown_type_raises():
    with pytest.raises(ChoiceTypeError, match=r"^'Integer64' is not a type of Extension\.value\[x\]"):
        ExtensionBuilder().set_choice("value", "Integer64", 1)


def test_set_choice_unknown_group_raises():
    with pytest.raises(ChoiceTypeError, match=r"^Patient has no choice group 'value'"):
        PatientBuilder().set_choice("value", "String", "x")


def test_set_choice_type_with_incomplete_sibling_list_still_exclusive():
    b = ObservationBuilder().set_value_string("x").set_value_integer(3)
    b.set_choice_type("valueQuantity", QTY, other_keys=["valueString"])
    assert b.data == {"valueQuantity": QTY}


def test_set_choice_type_honours_explicit_other_keys():
    b = BasicBuilder().set_id("b1")
    b.data["scratch"] = 1
    b.set_choice_type("code", {"text": "c"}, other_keys=["scratch", "absent"])
    assert b.data == {"id": "b1", "code": {"text": "c"}}


def test_set_choice_type_logs_cleared_keys(caplog):
    caplog.set_level(logging.DEBUG, logger="fhir_toolkit.core.builder")
    ObservationBuilder().set_value_string("x").set_value_quantity(QTY)
    assert "valueQuantity replaces ['valueString']" in caplog.text


def test_groups_are_independent():
    obs = (
        ObservationBuilder()
        .set_effective("DateTime", "2024-01-01")
        .set_value("String", "x")
        .set_effective("Period", {"start": "2024"})
        .build()
    )
    assert obs.to_json() == {
        "resourceType": "Observation",
        "effectivePeriod": {"start": "2024"},
        "valueString": "x",
    }


def test_writing_staging_data_directly_bypasses_exclusivity():
    b = ObservationBuilder().set_value_string("x")
    b.data["valueBoolean"] = True
    assert set(b.build().to_json()) == {"resourceType", "valueString", "valueBoolean"}


# ------------------------------------------------------------------------------
# array accumulation
# ------------------------------------------------------------------------------


def test_array_accumulation_order():
    e1 = {"url": "e1"}
    e2 = {"url": "e2"}
    m1 = {"url": "m1"}
    res = (
        BasicBuilder()
        .add_extension(e1)
        .set_id("b")
        .add_modifier_extension(m1)
        .set_code({"text": "c"})
        .add_extension(e2)
        .build()
    )
    assert res.extension == [e1, e2]
    assert res.modifierExtension == [m1]


def test_dynamic_add_for_repeating_fields():
    pat = PatientBuilder().add_identifier({"value": "1"}).add_identifier({"value": "2"}).build()
    assert [i["value"] for i in pat.identifier] == ["1", "2"]


def test_add_for_non_repeating_field_is_unknown():
    with pytest.raises(AttributeError, match=r"^'PatientBuilder' object has no attribute 'add_gender'"):
        PatientBuilder().add_gender


def test_unknown_setter_raises():
    with pytest.raises(AttributeError, match=r"^'PatientBuilder' object has no attribute 'set_bogus'"):
        PatientBuilder().set_bogus


def test_backbone_builders():
    contact = (
        PatientContactBuilder()
        .set_id("c1")
        .add_modifier_extension({"url": "m"})
        .set_gender("female")
        .add_telecom({"system": "phone"})
        .build()
    )
    pat = PatientBuilder().add_contact(contact).build()
    assert pat.to_json()["contact"] == [
        {
            "id": "c1",
            "modifierExtension": [{"url": "m"}],
            "telecom": [{"system": "phone"}],
            "gender": "female",
        }
    ]


def test_component_builder_value_group():
    comp = (
        ObservationComponentBuilder()
        .set_code({"text": "systolic"})
        .set_value_integer(120)
        .set_value("Quantity", QTY)
        .build()
    )
    assert comp.to_json() == {"code": {"text": "systolic"}, "valueQuantity": QTY}


def test_resource_level_setters():
    pat = (
        PatientBuilder()
        .set_id("p")
        .set_meta({"versionId": "1"})
        .set_implicit_rules("http://rules")
        .set_language("en")
        .set_text({"status": "generated", "div": "<div/>"})
        .add_contained({"resourceType": "Basic", "id": "b"})
        .build()
    )
    assert list(pat.to_json()) == [
        "resourceType",
        "id",
        "meta",
        "implicitRules",
        "language",
        "text",
        "contained",
    ]


# ------------------------------------------------------------------------------
# build
# ------------------------------------------------------------------------------


def test_build_is_idempotent():
    b = PatientBuilder().set_id("p").add_name({"family": "Doe"})
    first = b.build()
    second = b.build()
    assert first == second
    assert first is not second


def test_build_isolates_previous_instances():
    b = PatientBuilder().add_name({"family": "Doe"})
    first = b.build()
    b.add_name({"family": "Roe"})
    assert len(first.name) == 1
    assert len(b.build().name) == 2


def test_build_without_model_raises():
    with pytest.raises(NotImplementedError, match=r"^BaseBuilder does not declare a model"):
        BaseBuilder().build()


def test_builder_accepts_initial_data():
    b = BasicBuilder({"id": "b"})
    assert b.build().id == "b"
    assert repr(b) == "BasicBuilder({'id': 'b'})"


def test_from_model_round_trips():
    obs = Observation({"id": "o", "status": "final", "valueString": "x"})
    b = ObservationBuilder.from_model(obs)
    assert "resourceType" not in b.data
    changed = b.set_status("amended").build()
    assert obs.status == "final"
    assert changed.to_json() == {
        "resourceType": "Observation",
        "id": "o",
        "status": "amended",
        "valueString": "x",
    }


# ------------------------------------------------------------------------------
# version isolation
# ------------------------------------------------------------------------------


def test_builder_rejects_other_version_models():
    ext5 = r5.Extension({"url": "u"})
    with pytest.raises(VersionMismatchError, match=r"^PatientBuilder builds FHIR R4 models"):
        PatientBuilder().add_extension(ext5)


def test_builder_rejects_other_version_in_lists_and_choices():
    with pytest.raises(VersionMismatchError):
        PatientBuilder().set_contact([r5.PatientContact({"id": "c"})])
    with pytest.raises(VersionMismatchError):
        ExtensionBuilder().set_value("Timing", r5.Timing({"code": {"text": "BID"}}))


def test_from_model_rejects_other_version():
    with pytest.raises(VersionMismatchError):
        PatientBuilder.from_model(r5.Patient({"id": "p"}))


def test_builder_accepts_same_version_models():
    ext = Extension({"url": "u", "valueString": "v"})
    pat = PatientBuilder().add_extension(ext).build()
    assert pat.extension[0] is ext
    assert isinstance(pat, Patient)

# tests/test_parser.py
"""
Tests for fhir_toolkit/parser.
"""

import json
from pathlib import Path

import pytest
from lxml import etree

from fhir_toolkit import r4, r4b, r5
from fhir_toolkit.exceptions import ParseError, UnknownVersionError
from fhir_toolkit.parser import (
    _complex_to_obj,
    _resource_to_obj,
    load_fhir_json,
    load_fhir_xml,
    parse_fhir_obj,
)

# ------------------------------------------------------------------------------
# helpers
# ------------------------------------------------------------------------------

PATIENT_XML = """<?xml version="1.0" encoding="UTF-8"?>
<Patient xmlns="http://hl7.org/fhir">
  <!-- comments are skipped -->
  <id value="p1"/>
  <text>
    <status value="generated"/>
    <div xmlns="http://www.w3.org/1999/xhtml"><p>Jane Doe</p></div>
  </text>
  <extension url="http://example.org/eye-colour">
    <valueString value="brown"/>
  </extension>
  <name>
    <family value="Doe"/>
    <given value="Jane"/>
  </name>
  <gender value="female"/>
  <deceasedBoolean value="false"/>
  <multipleBirthInteger value="2"/>
</Patient>
"""


def write(tmp_path: Path, name: str, text: str) -> Path:
    p = tmp_path / name
    p.write_text(text, encoding="utf-8")
    return p


def xml(text: str):
    return etree.fromstring(text)


# ------------------------------------------------------------------------------
# _complex_to_obj / _resource_to_obj
# ------------------------------------------------------------------------------


def test_complex_to_obj_promotes_repeats_to_list():
    elem = xml("<name><given value='A'/><given value='B'/><given value='C'/></name>")
    assert _complex_to_obj(elem, "HumanName", r4.registry) == {"given": ["A", "B", "C"]}


def test_complex_to_obj_single_repeating_primitive_is_list():
    elem = xml("<name><family value='Doe'/><given value='Jane'/></name>")
    assert _complex_to_obj(elem, "HumanName", r4.registry) == {
        "family": "Doe",
        "given": ["Jane"],
    }


def test_complex_to_obj_keeps_id_and_url_attributes():
    elem = xml("<extension id='x1' url='http://e'><valueCode value='c'/></extension>")
    assert _complex_to_obj(elem, "Extension", r4.registry) == {
        "id": "x1",
        "url": "http://e",
        "valueCode": "c",
    }


def test_complex_to_obj_nested_extensions_are_lists():
    elem = xml(
        "<extension url='http://outer'>"
        "<extension url='http://inner'><valueBoolean value='true'/></extension>"
        "</extension>"
    )
    assert _complex_to_obj(elem, "Extension", r4.registry) == {
        "url": "http://outer",
        "extension": [{"url": "http://inner", "valueBoolean": True}],
    }


def test_primitive_id_goes_to_companion():
    elem = xml("<Patient><birthDate id='bd' value='2000-01-01'/></Patient>")
    assert _resource_to_obj(elem, r4.registry) == {
        "resourceType": "Patient",
        "birthDate": "2000-01-01",
        "_birthDate": {"id": "bd"},
    }


def test_primitive_with_only_extension_has_no_value():
    elem = xml(
        "<Patient><gender><extension url='http://e'>"
        "<valueString value='x'/></extension></gender></Patient>"
    )
    assert _resource_to_obj(elem, r4.registry) == {
        "resourceType": "Patient",
        "_gender": {"extension": [{"url": "http://e", "valueString": "x"}]},
    }


def test_repeating_primitive_companions_stay_aligned():
    elem = xml("<name><given value='A'/><given id='g2' value='B'/></name>")
    assert _complex_to_obj(elem, "HumanName", r4.registry) == {
        "given": ["A", "B"],
        "_given": [None, {"id": "g2"}],
    }


def test_declared_primitives_are_typed():
    elem = xml(
        "<Patient><active value='true'/>"
        "<telecom><system value='phone'/><rank value='2'/></telecom>"
        "<communication><preferred value='false'/></communication></Patient>"
    )
    assert _resource_to_obj(elem, r4.registry) == {
        "resourceType": "Patient",
        "active": True,
        "telecom": [{"system": "phone", "rank": 2}],
        "communication": [{"preferred": False}],
    }


def test_choice_values_typed_by_suffix():
    elem = xml(
        "<r><valueBoolean value='true'/><valueInteger value='7'/>"
        "<valueDecimal value='1.5'/><valueInteger64 value='9'/><status value='true'/></r>"
    )
    assert _complex_to_obj(elem, None, r5.registry) == {
        "valueBoolean": True,
        "valueInteger": 7,
        "valueDecimal": 1.5,
        "valueInteger64": "9",
        "status": "true",
    }


def test_bad_number_stays_text():
    elem = xml("<r><valueInteger value='seven'/><valueBoolean value='yes'/></r>")
    assert _complex_to_obj(elem, None, r4.registry) == {
        "valueInteger": "seven",
        "valueBoolean": "yes",
    }


def test_attachment_size_differs_per_release():
    elem = xml("<photo><size value='10'/></photo>")
    assert _complex_to_obj(elem, "Attachment", r4.registry) == {"size": 10}
    assert _complex_to_obj(elem, "Attachment", r5.registry) == {"size": "10"}


def test_backbone_repeating_fields_are_lists():
    elem = xml(
        "<Patient><contact>"
        "<relationship><coding><code value='N'/></coding></relationship>"
        "<telecom><system value='phone'/></telecom>"
        "<name><given value='Ann'/></name>"
        "</contact></Patient>"
    )
    assert _resource_to_obj(elem, r4b.registry) == {
        "resourceType": "Patient",
        "contact": [
            {
                "relationship": [{"coding": [{"code": "N"}]}],
                "telecom": [{"system": "phone"}],
                "name": {"given": ["Ann"]},
            }
        ],
    }


def test_observation_component_reference_range_is_list():
    elem = xml(
        "<Observation><component>"
        "<valueQuantity><value value='120'/><unit value='mmHg'/></valueQuantity>"
        "<referenceRange><low><value value='90'/></low></referenceRange>"
        "</component></Observation>"
    )
    assert _resource_to_obj(elem, r4.registry) == {
        "resourceType": "Observation",
        "component": [
            {
                "valueQuantity": {"value": 120.0, "unit": "mmHg"},
                "referenceRange": [{"low": {"value": 90.0}}],
            }
        ],
    }


def test_contained_resource_fields_use_its_own_shape():
    elem = xml(
        "<Observation><contained><Patient><id value='p'/><active value='true'/>"
        "<name><given value='J'/></name></Patient></contained>"
        "<status value='final'/></Observation>"
    )
    assert _resource_to_obj(elem, r4.registry) == {
        "resourceType": "Observation",
        "contained": [
            {"resourceType": "Patient", "id": "p", "active": True, "name": [{"given": ["J"]}]}
        ],
        "status": "final",
    }


def test_contained_must_hold_one_resource():
    elem = xml("<Basic><contained><Patient/><Patient/></contained></Basic>")
    with pytest.raises(ParseError, match=r"^contained must hold exactly one resource, got 2"):
        _resource_to_obj(elem, r4.registry)


# ------------------------------------------------------------------------------
# parse_fhir_obj
# ------------------------------------------------------------------------------


def test_parse_fhir_obj_dispatches_per_version():
    raw = {"resourceType": "Patient", "id": "p"}
    assert isinstance(parse_fhir_obj(raw), r4.Patient)
    assert isinstance(parse_fhir_obj(raw, "R4B"), r4b.Patient)
    assert isinstance(parse_fhir_obj(raw, "5.0.0"), r5.Patient)


def test_parse_fhir_obj_rejects_non_object():
    with pytest.raises(ParseError, match=r"^FHIR JSON must be an object at the top level"):
        parse_fhir_obj([1, 2])


def test_parse_fhir_obj_requires_resource_type():
    with pytest.raises(ParseError, match=r"^FHIR JSON object has no resourceType"):
        parse_fhir_obj({"id": "x"})


def test_parse_fhir_obj_unknown_version():
    with pytest.raises(UnknownVersionError):
        parse_fhir_obj({"resourceType": "Patient"}, "R2")


# ------------------------------------------------------------------------------
# load_fhir_json
# ------------------------------------------------------------------------------


def test_load_fhir_json_raises_on_missing_file(tmp_path):
    with pytest.raises(ParseError, match=r"^file does not exist"):
        load_fhir_json(tmp_path / "missing.json")


def test_load_fhir_json_raises_on_directory(tmp_path):
    with pytest.raises(ParseError, match=r"^not a file"):
        load_fhir_json(tmp_path)


def test_load_fhir_json_raises_on_str_path(tmp_path):
    with pytest.raises(ParseError, match=r"^path must be pathlib.Path, got str"):
        load_fhir_json(str(tmp_path / "x.json"))


def test_load_fhir_json_raises_on_invalid_json(tmp_path):
    p = write(tmp_path, "bad.json", "{not json")
    with pytest.raises(ParseError, match=r"^invalid JSON"):
        load_fhir_json(p)


def test_load_fhir_json_raises_on_non_object_top_level(tmp_path):
    p = write(tmp_path, "list.json", "[]")
    with pytest.raises(ParseError, match=r"^FHIR JSON must be an object"):
        load_fhir_json(p)


def test_load_fhir_json_oserror_is_wrapped(tmp_path, monkeypatch):
    p = write(tmp_path, "p.json", "{}")

    def boom(self, *a, **k):
        raise OSError("disk gone")

    monkeypatch.setattr(Path, "read_text", boom)
    with pytest.raises(ParseError, match=r"^failed to read JSON: disk gone"):
        load_fhir_json(p)


def test_load_fhir_json_observation_keeps_order(tmp_path, observation_raw):
    p = write(tmp_path, "obs.json", json.dumps(observation_raw))
    res = load_fhir_json(p, "R4")
    assert isinstance(res, r4.Observation)
    assert list(res.to_json())[:4] == ["resourceType", "id", "meta", "contained"]


def test_load_fhir_json_unknown_type_is_generic(tmp_path):
    p = write(
        tmp_path,
        "enc.json",
        json.dumps({"resourceType": "Encounter", "id": "e", "text": {"status": "empty"}}),
    )
    res = load_fhir_json(p, "R5")
    assert type(res) is r5.DomainResource
    assert res.to_json() == {"resourceType": "Encounter", "id": "e", "text": {"status": "empty"}}


# ------------------------------------------------------------------------------
# load_fhir_xml
# ------------------------------------------------------------------------------


def test_load_fhir_xml_raises_on_missing_file(tmp_path):
    with pytest.raises(ParseError, match=r"^file does not exist"):
        load_fhir_xml(tmp_path / "missing.xml")


def test_load_fhir_xml_raises_on_invalid_xml(tmp_path):
    p = write(tmp_path, "bad.xml", "<Patient><id value='x'></Patient>")
    with pytest.raises(ParseError, match=r"^invalid XML"):
        load_fhir_xml(p)


def test_load_fhir_xml_patient(tmp_path):
    p = write(tmp_path, "patient.xml", PATIENT_XML)
    res = load_fhir_xml(p)
    assert isinstance(res, r4.Patient)
    out = res.to_json()
    assert list(out) == [
        "resourceType",
        "id",
        "text",
        "extension",
        "name",
        "gender",
        "deceasedBoolean",
        "multipleBirthInteger",
    ]
    assert out["extension"] == [
        {"url": "http://example.org/eye-colour", "valueString": "brown"}
    ]
    assert out["name"] == [{"family": "Doe", "given": ["Jane"]}]
    assert out["deceasedBoolean"] is False
    assert out["multipleBirthInteger"] == 2
    assert res.get_choice("multipleBirth") == ("Integer", 2)


def test_load_fhir_xml_keeps_narrative_markup(tmp_path):
    p = write(tmp_path, "patient.xml", PATIENT_XML)
    div = load_fhir_xml(p).text["div"]
    assert div.startswith("<div")
    assert "http://www.w3.org/1999/xhtml" in div
    assert "<p>Jane Doe</p>" in div


def test_load_fhir_xml_repeated_root_children(tmp_path):
    xml = (
        "<Observation xmlns='http://hl7.org/fhir'>"
        "<category><text value='a'/></category>"
        "<category><text value='b'/></category>"
        "<status value='final'/>"
        "</Observation>"
    )
    res = load_fhir_xml(write(tmp_path, "obs.xml", xml), "R4B")
    assert isinstance(res, r4b.Observation)
    assert res.category == [{"text": "a"}, {"text": "b"}]
    assert res.status == "final"


def test_load_fhir_xml_unknown_type_uses_fallback_fields(tmp_path):
    xml = (
        "<Encounter xmlns='http://hl7.org/fhir'><id value='e'/>"
        "<contained><Basic><id value='b'/></Basic></contained>"
        "<status value='planned'/></Encounter>"
    )
    res = load_fhir_xml(write(tmp_path, "enc.xml", xml), "R5")
    assert type(res) is r5.DomainResource
    assert res.to_json() == {
        "resourceType": "Encounter",
        "id": "e",
        "contained": [{"resourceType": "Basic", "id": "b"}],
    }


def test_load_fhir_xml_produces_fhir_json(tmp_path):
    xml_text = (
        "<Patient xmlns='http://hl7.org/fhir'>"
        "<active value='true'/>"
        "<name><family value='Doe'/><given value='Jane'/></name>"
        "<birthDate id='bd' value='2000-01-01'/>"
        "<contact><telecom><system value='phone'/></telecom></contact>"
        "</Patient>"
    )
    out = load_fhir_xml(write(tmp_path, "patient.xml", xml_text), "R4").to_json()
    assert out == {
        "resourceType": "Patient",
        "active": True,
        "name": [{"family": "Doe", "given": ["Jane"]}],
        "birthDate": "2000-01-01",
        "_birthDate": {"id": "bd"},
        "contact": [{"telecom": [{"system": "phone"}]}],
    }
    assert out["active"] is True


def test_load_fhir_xml_contained_patient_keeps_lists(tmp_path):
    xml_text = (
        "<Observation xmlns='http://hl7.org/fhir'>"
        "<contained><Patient><id value='p'/>"
        "<telecom><value value='555'/></telecom></Patient></contained>"
        "<status value='final'/>"
        "<subject><reference value='#p'/></subject>"
        "</Observation>"
    )
    res = load_fhir_xml(write(tmp_path, "obs.xml", xml_text), "R5")
    assert isinstance(res, r5.Observation)
    assert res.get_contained("#p")["telecom"] == [{"value": "555"}]

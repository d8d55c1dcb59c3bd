# tests/conftest.py
# Shared fixtures: raw FHIR payloads and a logging reset between tests.
import logging

import pytest


@pytest.fixture(autouse=True)
def _restore_root_logging():
    """configure_logging() rewires the root logger; undo it after each test."""
    root = logging.getLogger()
    handlers = list(root.handlers)
    level = root.level
    toolkit_level = logging.getLogger("fhir_toolkit").level
    yield
    root.handlers = handlers
    root.setLevel(level)
    logging.getLogger("fhir_toolkit").setLevel(toolkit_level)


@pytest.fixture
def basic_raw():
    return {
        "resourceType": "Basic",
        "code": {"text": "demo"},
        "extension": [{"url": "http://e", "valueBoolean": True}],
    }


@pytest.fixture
def observation_raw():
    return {
        "resourceType": "Observation",
        "id": "obs-1",
        "status": "final",
        "code": {"coding": [{"system": "http://loinc.org", "code": "8867-4"}]},
        "subject": {"reference": "#pat"},
        "contained": [
            {
                "resourceType": "Patient",
                "id": "pat",
                "name": [{"family": "Doe", "given": ["Jane"]}],
            }
        ],
        "valueQuantity": {"value": 72, "unit": "beats/minute"},
        "meta": {"versionId": "1"},
    }

# src/fhir_toolkit/__init__.py
"""
fhir_toolkit: typed, ordered FHIR object models for R4, R4B and R5.

Release packages
----------------
- ``fhir_toolkit.r4``  FHIR R4 (4.0.1)
- ``fhir_toolkit.r4b`` FHIR R4B (4.3.0)
- ``fhir_toolkit.r5``  FHIR R5 (5.0.0)

Each package has its own models, builders and resource registry. Models of
one release are never accepted by another release's builders.
"""

__version__ = "0.1.0"

__all__ = ["__version__"]

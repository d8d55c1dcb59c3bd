# src/fhir_toolkit/exceptions.py
"""
Custom exceptions for fhir_toolkit.

All exceptions inherit from FHIRToolkitError so that callers can catch
toolkit-specific errors without grabbing unrelated built-in exceptions.
The model construction and serialization path raises none of these; they
belong to the loading, interop and builder-misuse edges.
"""


class FHIRToolkitError(Exception):
    """Base class for all fhir_toolkit exceptions."""

    pass


class ParseError(FHIRToolkitError):
    """Raised when a FHIR JSON or XML document cannot be parsed correctly."""

    pass


class InteropError(FHIRToolkitError):
    """Raised when converting to or from fhir.resources models fails."""

    pass


class UnknownVersionError(FHIRToolkitError, ValueError):
    """Raised when a FHIR release name or version string is not supported."""

    pass


class VersionMismatchError(FHIRToolkitError, TypeError):
    """Raised when a model of one FHIR release is handed to another release."""

    pass


class ChoiceTypeError(FHIRToolkitError, ValueError):
    """Raised when a choice group or variant type name is not declared."""

    pass

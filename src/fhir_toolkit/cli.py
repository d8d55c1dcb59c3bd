# src/fhir_toolkit/cli.py
"""
Command-line interface for fhir_toolkit.

Subcommands
-----------
parse
    Load a FHIR resource from a JSON or XML file into the models of one FHIR
    release and print it as JSON in canonical property order.

types
    List the resource types with a dedicated model class in a release.

Exit codes
----------
0  success
1  handled, expected error (FHIRToolkitError or KeyboardInterrupt)
2  CLI usage error (argparse or validation failure)
"""

from __future__ import annotations

import argparse
import json
import logging
import os
from pathlib import Path
from typing import Optional

import yaml

from . import __version__
from .config import AppConfig, load_config
from .core.version import available_versions, load_version, resolve_version
from .exceptions import FHIRToolkitError
from .logging_utils import configure_logging
from .parser import load_fhir_json, load_fhir_xml

# ------------------------------------------------------------------------------
# globals
# ------------------------------------------------------------------------------

LOG = logging.getLogger("fhir_toolkit")

EXIT_OK = 0
EXIT_ERR = 1
EXIT_CLI = 2

# ------------------------------------------------------------------------------
# Parser construction
# ------------------------------------------------------------------------------


def _build_parser() -> argparse.ArgumentParser:
    """
    Build and return the top-level argparse parser and subcommands.

    Returns
    -------
    argparse.ArgumentParser
        Configured parser with subcommands: parse, types.
    """
    parser = argparse.ArgumentParser(
        prog="fhir-toolkit",
        description="Load FHIR resources into ordered, versioned models.",
    )
    parser.add_argument(
        "--config",
        type=Path,
        default=None,
        help="Path to YAML config file (overrides defaults).",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="count",
        default=0,
        help="Increase verbosity (-v, -vv).",
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"fhir-toolkit {__version__}",
    )

    sub = parser.add_subparsers(dest="cmd", required=True)

    # parse
    s1 = sub.add_parser("parse", help="Parse a FHIR JSON or XML file.")
    s1.add_argument(
        "path",
        type=Path,
        help="Path to FHIR resource file (.json or .xml).",
    )
    s1.add_argument(
        "--fhir-version",
        default=None,
        choices=available_versions(),
        help="FHIR release of the models (defaults to config.default_version).",
    )
    s1.add_argument(
        "--compact",
        action="store_true",
        help="Print single-line JSON instead of indented output.",
    )

    # types
    s2 = sub.add_parser("types", help="List resource types with a model class.")
    s2.add_argument(
        "--fhir-version",
        default=None,
        choices=available_versions(),
        help="FHIR release to list (defaults to config.default_version).",
    )

    return parser


# ------------------------------------------------------------------------------
# Validation helpers
# ------------------------------------------------------------------------------


def _validate_existing_file(path: Path) -> None:
    """
    Validate that a path exists, is a file and is readable.

    Raises
    ------
    FHIRToolkitError
        If the path does not exist, is not a file, or is not readable.
    """
    if not path.exists():
        raise FHIRToolkitError(f"File not found: {path}")
    if not path.is_file():
        raise FHIRToolkitError(f"Not a file: {path}")
    if not os.access(path, os.R_OK):
        raise FHIRToolkitError(f"File is not readable: {path}")


def _validate_fhir_suffix(path: Path) -> str:
    """
    Validate FHIR file suffix and return normalized format string.

    Returns
    -------
    str
        "json" or "xml".

    Raises
    ------
    FHIRToolkitError
        If suffix is not .json or .xml.
    """
    suffix = path.suffix.lower()
    if suffix == ".json":
        return "json"
    if suffix == ".xml":
        return "xml"
    raise FHIRToolkitError(
        f"Unsupported FHIR file type: {path.name} (expected .json or .xml)"
    )


def _load_config_for_cli(path: Optional[Path]) -> AppConfig:
    """
    Load the config file named on the command line.

    Config problems (missing file, bad YAML, bad values) are reported as
    FHIRToolkitError so they map to EXIT_ERR like other handled errors.
    """
    if path is not None:
        _validate_existing_file(path)
    try:
        return load_config(path)
    except FHIRToolkitError:
        raise
    except (TypeError, ValueError, OSError, yaml.YAMLError) as e:
        raise FHIRToolkitError(f"Invalid config {path}: {e}") from e


# ------------------------------------------------------------------------------
# Command handlers
# ------------------------------------------------------------------------------


def _cmd_parse(path: Path, version: str, indent: Optional[int]) -> int:
    """
    Parse: load a FHIR resource file and print ordered JSON.

    Parameters
    ----------
    path : Path
        Path to a .json or .xml file.
    version : str
        FHIR release of the models.
    indent : int or None
        JSON indentation; None prints compact JSON.

    Returns
    -------
    int
        EXIT_OK on success.

    Raises
    ------
    FHIRToolkitError
        If the file is missing, unreadable, unsupported, or cannot be parsed.
    """
    _validate_existing_file(path)
    fmt = _validate_fhir_suffix(path)
    if fmt == "json":
        res = load_fhir_json(path, version)
    else:
        res = load_fhir_xml(path, version)

    if indent is None:
        print(json.dumps(res.to_json(), separators=(",", ":"), ensure_ascii=False))
    else:
        print(json.dumps(res.to_json(), indent=indent, ensure_ascii=False))
    LOG.info("Parsed %s as FHIR %s", res, version)
    return EXIT_OK


def _cmd_types(version: str) -> int:
    """Types: print the registered resource types of a release, one per line."""
    package = load_version(version)
    print(f"FHIR {package.FHIR_VERSION} ({package.FHIR_VERSION_STRING}) resource types:")
    for rtype in package.registry.available_resource_types():
        print(f"    {rtype}")
    return EXIT_OK


# ------------------------------------------------------------------------------
# Entrypoint
# ------------------------------------------------------------------------------


def main(argv: Optional[list[str]] = None) -> int:
    """
    CLI entrypoint.

    Parameters
    ----------
    argv : list[str] or None, default None
        Argument list for testing; None uses sys.argv[1:].

    Returns
    -------
    int
        Process exit code (EXIT_OK, EXIT_ERR, or EXIT_CLI).
    """
    parser = _build_parser()
    args = parser.parse_args(argv)

    configure_logging(args.verbose)

    try:
        cfg = _load_config_for_cli(args.config)
        version = resolve_version(args.fhir_version or cfg.default_version).name

        if args.cmd == "parse":
            indent = None if args.compact else cfg.indent
            return _cmd_parse(args.path, version, indent)
        if args.cmd == "types":
            return _cmd_types(version)
        parser.error("Unknown command")
        return EXIT_CLI

    except FHIRToolkitError as e:
        LOG.error("%s", e)
        return EXIT_ERR
    except KeyboardInterrupt:
        LOG.error("Interrupted")
        return EXIT_ERR


if __name__ == "__main__":
    raise SystemExit(main())

"""Sluice CLI entry points.
This module runs the CSV processor over a local file for inspection.
It maps argparse commands onto processor calls and prints JSON.
"""

from __future__ import annotations

import argparse
import json
import math
from pathlib import Path
from typing import Any, Mapping, Sequence

from core.config import ProcessorConfig
from core.constants import CSV_PROCESSOR_NAME, TIME_FORMAT_PARAM
from core.errors import SluiceDependencyError, SluiceError
from core.types import Observation, ObservationExtraction, RowDiagnostic, StateExtraction
from ingest.processor_registry import create_data_processor, supported_data_processors


def build_parser() -> argparse.ArgumentParser:
    """Build the top-level CLI parser.

    Returns:
        Configured argument parser.
    """
    parser = argparse.ArgumentParser(prog="sluice", description="Sluice CSV processor CLI")
    parser.add_argument(
        "--processor",
        default=CSV_PROCESSOR_NAME,
        choices=supported_data_processors(),
        help="Data processor name",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)
    _add_observations_command(subparsers)
    _add_state_command(subparsers)
    return parser


def main(argv: Sequence[str] | None = None) -> int:
    """Run the Sluice CLI.

    Args:
        argv: Optional argument vector.

    Returns:
        Process exit code.
    """
    parser = build_parser()
    args = parser.parse_args(argv)
    try:
        params = _build_params(args)
        processor = create_data_processor(args.processor, params)
        processor.on_data(_read_payload(args.source))
        if args.command == "observations":
            document = _observations_document(processor.get_observations())
        else:
            document = _state_document(processor.get_state(args.valid_fields))
    except SluiceError as error:
        print(f"error={error}")
        return 1
    print(json.dumps(document, indent=2, sort_keys=True, allow_nan=False))
    return 0


def _build_params(args: argparse.Namespace) -> dict[str, object]:
    """Merge environment defaults, params file options, and command-line overrides."""
    params: dict[str, object] = {}
    env_time_format = ProcessorConfig.from_env().time_format
    if env_time_format:
        params[TIME_FORMAT_PARAM] = env_time_format
    if args.params_file:
        params.update(_load_params_file(args.params_file))
    if args.time_format:
        params[TIME_FORMAT_PARAM] = args.time_format
    return params


def _load_params_file(params_path: str) -> Mapping[str, object]:
    """Load processor options from a YAML mapping file.

    Raises:
        SluiceDependencyError: If PyYAML is unavailable.
        SluiceError: If the file is missing or not a mapping.
    """
    try:
        import yaml  # type: ignore[import-untyped]
    except ImportError as error:  # pragma: no cover - dependency failure
        raise SluiceDependencyError(
            "Params files require PyYAML. Install with 'pip install pyyaml'."
        ) from error
    params_file = Path(params_path).expanduser().resolve()
    try:
        payload = yaml.safe_load(params_file.read_text(encoding="utf-8"))
    except OSError as error:
        raise SluiceError(
            f"Failed to read params file at {params_file}: {error}. Check the path and retry."
        ) from error
    except yaml.YAMLError as error:
        raise SluiceError(
            f"Failed to parse params file at {params_file}: {error}. Fix YAML syntax and retry."
        ) from error
    if payload is None:
        return {}
    if not isinstance(payload, Mapping):
        raise SluiceError(
            f"Params file at {params_file} must contain a mapping of option names to values."
        )
    return {str(key): value for key, value in payload.items()}


def _read_payload(source: str) -> bytes:
    source_path = Path(source).expanduser()
    try:
        return source_path.read_bytes()
    except OSError as error:
        raise SluiceError(
            f"Failed to read CSV at {source_path}: {error}. Provide an existing file."
        ) from error


def _observations_document(result: ObservationExtraction | None) -> dict[str, Any]:
    if result is None:
        return {"observations": [], "diagnostics": []}
    return {
        "observations": [_observation_payload(item) for item in result.observations],
        "diagnostics": [_diagnostic_payload(item) for item in result.diagnostics],
    }


def _state_document(result: StateExtraction | None) -> dict[str, Any]:
    if result is None:
        return {"states": [], "diagnostics": []}
    states = sorted(result.states, key=lambda state: state.path)
    return {
        "states": [
            {
                "path": state.path,
                "field_names": list(state.field_names),
                "tags": list(state.tags),
                "observations": [_observation_payload(item) for item in state.observations],
            }
            for state in states
        ],
        "diagnostics": [_diagnostic_payload(item) for item in result.diagnostics],
    }


def _observation_payload(observation: Observation) -> dict[str, Any]:
    return {
        "time": observation.timestamp,
        "data": {name: _json_number(value) for name, value in observation.fields.items()},
        "tags": list(observation.tags),
    }


def _json_number(value: float) -> float | None:
    """Map non-finite values to null so output stays strict JSON."""
    return value if math.isfinite(value) else None


def _diagnostic_payload(diagnostic: RowDiagnostic) -> dict[str, Any]:
    return {
        "kind": diagnostic.kind,
        "row": diagnostic.row_number,
        "column": diagnostic.column,
        "value": diagnostic.raw_value,
        "message": diagnostic.message,
    }


def _add_source_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("source", help="Local CSV file path")
    parser.add_argument("--time-format", help="strptime format for the time column")
    parser.add_argument("--params-file", help="YAML file with processor options")


def _add_observations_command(subparsers: Any) -> None:
    """Register observations subcommand."""
    parser = subparsers.add_parser("observations", help="Print a flat observation stream")
    _add_source_arguments(parser)


def _add_state_command(subparsers: Any) -> None:
    """Register state subcommand."""
    parser = subparsers.add_parser("state", help="Print per-path states")
    _add_source_arguments(parser)
    parser.add_argument(
        "--valid-field",
        dest="valid_fields",
        action="append",
        help="Allowed header name; repeat to allow several",
    )

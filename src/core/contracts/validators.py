"""
JSON Schema Contract Validators

Validates raw payloads crossing the engine boundary against JSON Schema
contracts shipped with the package (src/core/contracts/schema/):
- profile_submission.json: birth date + life expectancy from the form layer
- marker_submission.json: marker fields from the form layer
- render_payload.json: render-ready grid handed to the presentation layer

Uses the jsonschema library (Draft 2020-12). Contracts only check shape and
types; calendar rules (date parsing, range order, "not in the future") live
in the domain validators.
"""

import json
from pathlib import Path
from typing import Any, Dict, List, Optional

import jsonschema
from jsonschema import Draft202012Validator


# =============================================================================
# SCHEMA LOADER
# =============================================================================


class SchemaLoader:
    """
    Loader for the JSON Schema files next to this module.

    Schemas are meta-validated on first load and cached.
    """

    def __init__(self, schema_dir: Optional[Path] = None):
        self._schema_dir = schema_dir or Path(__file__).parent / "schema"
        if not self._schema_dir.exists():
            raise RuntimeError(f"Schema directory not found: {self._schema_dir}")

        self._schemas: Dict[str, Dict[str, Any]] = {}

    def load_schema(self, schema_name: str) -> Dict[str, Any]:
        """
        Load a JSON Schema file.

        Args:
            schema_name: Schema name without extension (e.g. 'marker_submission')

        Returns:
            The schema as a dict

        Raises:
            FileNotFoundError: if the schema file does not exist
            ValueError: if the file is not a valid JSON Schema
        """
        if schema_name in self._schemas:
            return self._schemas[schema_name]

        schema_path = self._schema_dir / f"{schema_name}.json"
        if not schema_path.exists():
            raise FileNotFoundError(f"Schema not found: {schema_path}")

        with open(schema_path, "r", encoding="utf-8") as f:
            schema = json.load(f)

        try:
            Draft202012Validator.check_schema(schema)
        except jsonschema.SchemaError as e:
            raise ValueError(f"Invalid JSON Schema in {schema_name}.json: {e}")

        self._schemas[schema_name] = schema
        return schema


_SCHEMA_LOADER = SchemaLoader()


# =============================================================================
# CONTRACT VALIDATORS
# =============================================================================


class ContractValidator:
    """Base validator: one JSON Schema contract."""

    def __init__(self, schema_name: str):
        self.schema_name = schema_name
        self.schema = _SCHEMA_LOADER.load_schema(schema_name)
        self.validator = Draft202012Validator(self.schema)

    def validate(self, data: Dict[str, Any]) -> None:
        """
        Raises:
            ValidationError: if data does not match the contract
        """
        self.validator.validate(data)

    def is_valid(self, data: Dict[str, Any]) -> bool:
        return self.validator.is_valid(data)

    def iter_errors(self, data: Dict[str, Any]):
        return self.validator.iter_errors(data)

    def error_messages(self, data: Dict[str, Any]) -> List[str]:
        """
        Human-readable violations, sorted by path for stable output.

        Returns:
            "<json path>: <message>" strings, empty when data is valid
        """
        errors = sorted(self.iter_errors(data), key=lambda e: list(map(str, e.absolute_path)))
        return [f"{e.json_path}: {e.message}" for e in errors]


class ProfileSubmissionValidator(ContractValidator):
    def __init__(self):
        super().__init__("profile_submission")


class MarkerSubmissionValidator(ContractValidator):
    def __init__(self):
        super().__init__("marker_submission")


class RenderPayloadValidator(ContractValidator):
    def __init__(self):
        super().__init__("render_payload")


# =============================================================================
# CONVENIENCE FUNCTIONS
# =============================================================================


def validate_profile_submission(data: Dict[str, Any]) -> None:
    """
    Raises:
        ValidationError: if data does not match profile_submission
    """
    ProfileSubmissionValidator().validate(data)


def validate_marker_submission(data: Dict[str, Any]) -> None:
    """
    Raises:
        ValidationError: if data does not match marker_submission
    """
    MarkerSubmissionValidator().validate(data)


def validate_render_payload(data: Dict[str, Any]) -> None:
    """
    Raises:
        ValidationError: if data does not match render_payload
    """
    RenderPayloadValidator().validate(data)

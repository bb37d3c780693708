"""
Contract Validation Module

JSON Schema validation of the payloads entering and leaving the engine.
"""

from .validators import (
    ContractValidator,
    MarkerSubmissionValidator,
    ProfileSubmissionValidator,
    RenderPayloadValidator,
    SchemaLoader,
    validate_marker_submission,
    validate_profile_submission,
    validate_render_payload,
)

__all__ = [
    # Classes
    "SchemaLoader",
    "ContractValidator",
    "ProfileSubmissionValidator",
    "MarkerSubmissionValidator",
    "RenderPayloadValidator",
    # Functions
    "validate_profile_submission",
    "validate_marker_submission",
    "validate_render_payload",
]

"""Shared failure code constants for mapping validation and import error handling."""

SHAPE_ERROR = "shape_error"
UNKNOWN_TARGET_REPOSITORY = "unknown_target_repository"
MISSING_REQUIRED_FIELD = "missing_required_field"
UNSUPPORTED_SOURCE_TYPE = "unsupported_source_type"
MALFORMED_SOURCE = "malformed_source"
TRANSFORM_ERROR = "transform_error"
MISSING_IDENTIFIER = "missing_identifier"

# Abort the whole import; returned as a structured error list with valid=false.
CONFIGURATION_FAILURES = [
    SHAPE_ERROR,
    UNKNOWN_TARGET_REPOSITORY,
    MISSING_REQUIRED_FIELD,
    UNSUPPORTED_SOURCE_TYPE,
    MALFORMED_SOURCE,
]

# Attached to one standardized record; never abort the batch.
RECORD_FAILURES = [
    TRANSFORM_ERROR,
    MISSING_IDENTIFIER,
]

"""
app/validators package marker.
"""

from app.validators.mapping_validator import (
    ConfigErrorDetail,
    MappingConfigValidator,
    ValidationResult,
)

__all__ = [
    "ConfigErrorDetail",
    "MappingConfigValidator",
    "ValidationResult",
]

"""
app/services package marker.
"""

from app.services.config_generation_service import (
    ConfigGenerationService,
    get_config_generation_service,
)
from app.services.mapping_service import (
    ExecutionOutcome,
    MappingService,
    get_mapping_service,
    get_target_schema_registry,
)
from app.services.record_importer import RecordImporter

__all__ = [
    "ConfigGenerationService",
    "get_config_generation_service",
    "ExecutionOutcome",
    "MappingService",
    "get_mapping_service",
    "get_target_schema_registry",
    "RecordImporter",
]

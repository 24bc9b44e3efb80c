"""
app/api/routers package marker.
"""

from app.api.routers.mapping_config import router as mapping_config_router
from app.api.routers.target_schemas import router as target_schemas_router

__all__ = [
    "mapping_config_router",
    "target_schemas_router",
]

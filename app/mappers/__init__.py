"""
app/mappers package marker.
"""

from app.mappers.transform_engine import TransformError, apply_transform, to_text

__all__ = [
    "TransformError",
    "apply_transform",
    "to_text",
]

from .transform import GeometryTransformApplier
from .grid import (
    GridCharacteristics,
    create_grid_feature,
    destination_point,
)

__all__ = [
    "GeometryTransformApplier",
    "GridCharacteristics",
    "create_grid_feature",
    "destination_point",
]

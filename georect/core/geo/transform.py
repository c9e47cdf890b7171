import logging
from typing import Iterable, Optional, Tuple, TypeVar, Union
from ..latlng import LatLng, is_coordinate
from ..matrix import AffineMatrix
from ..projection import CoordinateProjector, SphericalMercator
from ..shapes import LayerGroup, PointTarget, RingTarget

logger = logging.getLogger(__name__)

Target = Union[PointTarget, RingTarget, LayerGroup]
T_Target = TypeVar("T_Target", PointTarget, RingTarget, LayerGroup)


class GeometryTransformApplier:
    """
    Applies affine matrices to geographic geometry.

    Every coordinate is projected into flat space, transformed there, and
    unprojected again; geographic space itself is not Euclidean, so the
    matrix must never touch degrees directly.
    """

    def __init__(self, projector: Optional[CoordinateProjector] = None):
        self.projector: CoordinateProjector = (
            projector if projector is not None else SphericalMercator()
        )

    def apply_to_point(
        self, lat_lng: LatLng, matrix: AffineMatrix
    ) -> LatLng:
        """Returns the transformed coordinate; the input is untouched."""
        point = matrix.transform(self.projector.project(lat_lng))
        return self.projector.unproject(point)

    def apply_to_ring(self, lat_lngs: Iterable, matrix: AffineMatrix) -> list:
        """
        Returns a transformed copy of a coordinate list, recursing into
        nested rings.
        """
        result = []
        for item in lat_lngs:
            if is_coordinate(item):
                result.append(self.apply_to_point(LatLng(*item), matrix))
            else:
                result.append(self.apply_to_ring(item, matrix))
        return result

    def apply(self, target: T_Target, matrix: AffineMatrix) -> T_Target:
        """
        Transforms a target in place through its own accessor/mutator
        pair, so that observers of the target see the same object.
        Groups are transformed layer by layer.
        """
        if isinstance(target, LayerGroup):
            for layer in target:
                self.apply(layer, matrix)  # type: ignore[arg-type]
        elif isinstance(target, RingTarget):
            target.set_lat_lngs(
                self.apply_to_ring(target.get_lat_lngs(), matrix)
            )
        elif isinstance(target, PointTarget):
            target.set_lat_lng(
                self.apply_to_point(target.get_lat_lng(), matrix)
            )
        else:
            raise TypeError(f"Cannot transform {type(target).__name__}")
        return target

    def rotation_matrix(self, angle: float, origin: LatLng) -> AffineMatrix:
        """
        Builds the matrix rotating counter-clockwise by `angle` radians
        about the projection of `origin`.
        """
        return (
            AffineMatrix.identity()
            .rotate(angle, self.projector.project(origin))
            .flip()
        )

    def rotate(
        self, target: T_Target, angle: float, origin: LatLng
    ) -> T_Target:
        return self.apply(target, self.rotation_matrix(angle, origin))

    def rotate_point(
        self, lat_lng: LatLng, angle: float, origin: LatLng
    ) -> LatLng:
        return self.apply_to_point(
            lat_lng, self.rotation_matrix(angle, origin)
        )

    def translation_matrix(self, offset: Tuple[float, float]) -> AffineMatrix:
        return AffineMatrix.identity().translate(offset)  # type: ignore

    def translate(
        self, target: T_Target, offset: Tuple[float, float]
    ) -> T_Target:
        """Moves a target by a projected-space offset."""
        return self.apply(target, self.translation_matrix(offset))

    def translate_point(
        self, lat_lng: LatLng, offset: Tuple[float, float]
    ) -> LatLng:
        return self.apply_to_point(lat_lng, self.translation_matrix(offset))

import logging
from typing import Any, Dict, List, Mapping, Optional, Sequence

from coords import GeoJSON, coord_all
from geometry import Point, hull_indices

logger = logging.getLogger(__name__)

Ring = List[List[float]]
Feature = Dict[str, Any]


def close_ring(hull: Sequence[Point]) -> Ring:
    """Hull vertices as a closed ring, the first vertex repeated as the last."""
    ring = [[p[0], p[1]] for p in hull]
    if ring:
        ring.append(list(ring[0]))
    return ring


def polygon(rings: Sequence[Ring], properties: Optional[Mapping[str, Any]] = None) -> Feature:
    """Wrap linear rings in a GeoJSON Feature with a Polygon geometry."""
    for ring in rings:
        if len(ring) < 4:
            raise ValueError("each LinearRing of a Polygon must have 4 or more positions")
        if list(ring[0]) != list(ring[-1]):
            raise ValueError("first and last position of a LinearRing are not equivalent")
    return {
        "type": "Feature",
        "properties": dict(properties or {}),
        "geometry": {"type": "Polygon", "coordinates": [list(ring) for ring in rings]},
    }


def convex(geojson: GeoJSON) -> Optional[Feature]:
    """Convex hull of every position in ``geojson`` as a Polygon Feature.

    Any elevation is ignored. Returns None when the positions do not span a
    polygon: fewer than 3 distinct points, or all of them collinear.
    Malformed input raises ``coords.InvalidGeometry``.
    """
    points = coord_all(geojson)
    indices = hull_indices(points)
    if indices is None:
        logger.debug("degenerate hull for %d points", len(points))
        return None
    logger.debug("hull of %d points has %d vertices", len(points), len(indices))
    return polygon([close_ring([points[i] for i in indices])])

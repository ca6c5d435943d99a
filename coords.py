"""Position extraction from GeoJSON objects.

Walks any GeoJSON geometry, Feature, FeatureCollection or GeometryCollection
and yields its positions in document order. Every geometry kind is handled by
an entry in a table keyed on the object's ``"type"`` member.
"""

import math
from numbers import Real
from typing import Any, Callable, Dict, Iterator, List, Mapping

from geometry import Point

GeoJSON = Mapping[str, Any]


class InvalidGeometry(ValueError):
    """Raised when a GeoJSON object or one of its positions is malformed."""


def _position(coord: Any) -> Any:
    if not isinstance(coord, (list, tuple)) or len(coord) < 2:
        raise InvalidGeometry(f"position needs at least x and y: {coord!r}")
    for value in coord[:2]:
        if isinstance(value, bool) or not isinstance(value, Real):
            raise InvalidGeometry(f"non-numeric coordinate in position {coord!r}")
        if not math.isfinite(value):
            raise InvalidGeometry(f"non-finite coordinate in position {coord!r}")
    return coord


def _nested(obj: GeoJSON, depth: int) -> Iterator[Any]:
    coords = obj.get("coordinates")
    if not isinstance(coords, (list, tuple)):
        raise InvalidGeometry(f"{obj.get('type')} has no coordinates array")
    if depth == 0:
        yield _position(coords)
        return
    for part in coords:
        yield from _nested({"type": obj["type"], "coordinates": part}, depth - 1)


def _members(obj: GeoJSON, key: str) -> List[GeoJSON]:
    members = obj.get(key)
    if not isinstance(members, (list, tuple)):
        raise InvalidGeometry(f"{obj.get('type')} has no {key} array")
    return list(members)


def _geometry_collection(obj: GeoJSON) -> Iterator[Any]:
    for geometry in _members(obj, "geometries"):
        yield from positions(geometry)


def _feature(obj: GeoJSON) -> Iterator[Any]:
    if "geometry" not in obj:
        raise InvalidGeometry("Feature has no geometry member")
    geometry = obj.get("geometry")
    if geometry is None:
        return
    yield from positions(geometry)


def _feature_collection(obj: GeoJSON) -> Iterator[Any]:
    for feature in _members(obj, "features"):
        yield from positions(feature)


_VISITORS: Dict[str, Callable[[GeoJSON], Iterator[Any]]] = {
    "Point": lambda obj: _nested(obj, 0),
    "MultiPoint": lambda obj: _nested(obj, 1),
    "LineString": lambda obj: _nested(obj, 1),
    "MultiLineString": lambda obj: _nested(obj, 2),
    "Polygon": lambda obj: _nested(obj, 2),
    "MultiPolygon": lambda obj: _nested(obj, 3),
    "GeometryCollection": _geometry_collection,
    "Feature": _feature,
    "FeatureCollection": _feature_collection,
}


def positions(geojson: GeoJSON) -> Iterator[Any]:
    """Yield every position of ``geojson`` as it appears in the document."""
    if not isinstance(geojson, Mapping):
        raise InvalidGeometry(f"expected a GeoJSON object, got {type(geojson).__name__}")
    visit = _VISITORS.get(geojson.get("type"))
    if visit is None:
        raise InvalidGeometry(f"unknown GeoJSON type: {geojson.get('type')!r}")
    return visit(geojson)


def coord_each(geojson: GeoJSON, callback: Callable[[Any, int], None]) -> None:
    """Call ``callback(position, index)`` for every position in ``geojson``."""
    for index, coord in enumerate(positions(geojson)):
        callback(coord, index)


def coord_all(geojson: GeoJSON) -> List[Point]:
    """Flat list of (x, y) pairs. Elevation and further dimensions are dropped."""
    points: List[Point] = []
    coord_each(geojson, lambda coord, _: points.append((coord[0], coord[1])))
    return points

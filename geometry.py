from typing import List, Optional, Sequence, Tuple

Point = Tuple[float, float]
Edge = Tuple[int, int]


def cross(o: Point, a: Point, b: Point) -> float:
    """Z component of (a - o) x (b - o). Positive for a counter-clockwise turn."""
    return (a[0] - o[0]) * (b[1] - o[1]) - (a[1] - o[1]) * (b[0] - o[0])


def _chain(points: Sequence[Point], order: Sequence[int]) -> List[int]:
    stack: List[int] = []
    for i in order:
        while len(stack) >= 2 and cross(points[stack[-2]], points[stack[-1]], points[i]) <= 0:
            stack.pop()
        stack.append(i)
    return stack


def hull_indices(points: Sequence[Point]) -> Optional[List[int]]:
    """Monotone chain hull as CCW vertex indices, None if fewer than 3 vertices."""
    def key(i):
        return points[i][0], points[i][1]

    order = sorted(range(len(points)), key=lambda i: (key(i), i))
    # equal points keep only their smallest index
    order = [i for k, i in enumerate(order) if k == 0 or key(i) != key(order[k - 1])]
    if len(order) < 3:
        return None
    lower = _chain(points, order)
    upper = _chain(points, order[::-1])
    hull = lower[:-1] + upper[:-1]
    if len(hull) < 3:
        return None
    return hull


def convex_hull(points: Sequence[Point]) -> Optional[List[Point]]:
    indices = hull_indices(points)
    if indices is None:
        return None
    return [points[i] for i in indices]


def hull_edges(indices: Sequence[int]) -> List[Edge]:
    """Closed cycle of (from, to) index pairs along the hull boundary."""
    if len(indices) < 3:
        return []
    return [(indices[i], indices[(i + 1) % len(indices)]) for i in range(len(indices))]


def signed_area(ring: Sequence[Point]) -> float:
    """Shoelace area, positive for counter-clockwise rings, open or closed."""
    total = 0.0
    n = len(ring)
    for i in range(n):
        x1, y1 = ring[i][0], ring[i][1]
        x2, y2 = ring[(i + 1) % n][0], ring[(i + 1) % n][1]
        total += x1 * y2 - x2 * y1
    return total / 2.0


def _on_segment(a: Point, b: Point, p: Point, eps: float) -> bool:
    dx, dy = b[0] - a[0], b[1] - a[1]
    seg_len2 = dx * dx + dy * dy
    if seg_len2 == 0:
        return (p[0] - a[0]) ** 2 + (p[1] - a[1]) ** 2 <= eps * eps
    t = ((p[0] - a[0]) * dx + (p[1] - a[1]) * dy) / seg_len2
    t = max(0.0, min(1.0, t))
    qx, qy = a[0] + t * dx, a[1] + t * dy
    return (p[0] - qx) ** 2 + (p[1] - qy) ** 2 <= eps * eps


def point_in_hull(p: Point, hull: Sequence[Point], eps: float = 1e-9) -> str:
    """Classify ``p`` against a counter-clockwise hull.

    Returns "inside", "on boundary" or "outside".
    """
    n = len(hull)
    if n == 0:
        return "outside"
    if n == 1:
        return "on boundary" if _on_segment(hull[0], hull[0], p, eps) else "outside"
    if n == 2:
        return "on boundary" if _on_segment(hull[0], hull[1], p, eps) else "outside"

    for i in range(n):
        a = hull[i]
        b = hull[(i + 1) % n]
        if _on_segment(a, b, p, eps):
            return "on boundary"
        if cross(a, b, p) < 0:
            return "outside"
    return "inside"

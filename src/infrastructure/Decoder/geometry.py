# src/infrastructure/Decoder/geometry.py
from typing import Iterable, Sequence, Tuple

Point = Sequence[float]


def bounds_from_points(points: Iterable[Point]) -> Tuple[int, int, int, int]:
    """
    Convierte las esquinas de un código (en cualquier orden) a (x, y, w, h).
    Devuelve (0, 0, 0, 0) si no hay puntos.
    """
    xs, ys = [], []
    for p in points:
        xs.append(float(p[0]))
        ys.append(float(p[1]))

    if not xs:
        return (0, 0, 0, 0)

    x1, y1 = int(min(xs)), int(min(ys))
    x2, y2 = int(max(xs)), int(max(ys))
    return (x1, y1, x2 - x1, y2 - y1)

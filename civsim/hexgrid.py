# civsim/hexgrid.py
from __future__ import annotations

import math
from dataclasses import dataclass
from enum import IntEnum
from typing import List, Tuple

SQRT3 = math.sqrt(3)

# Screen alignment of the flat-top layout. Only pixel mapping uses it.
HEX_ROTATION_DEGREES = 30.0


class Direction(IntEnum):
    """Axial neighbor directions. Direction i is also hex edge i.

    Vectors (dq, dr):
      E : ( 1,  0)
      NE: ( 1, -1)
      NW: ( 0, -1)
      W : (-1,  0)
      SW: (-1,  1)
      SE: ( 0,  1)
    """

    E = 0
    NE = 1
    NW = 2
    W = 3
    SW = 4
    SE = 5

    @property
    def vector(self) -> Tuple[int, int]:
        return DIRECTIONS[int(self)]

    def opposite(self) -> "Direction":
        return Direction((int(self) + 3) % 6)


DIRECTIONS: List[Tuple[int, int]] = [
    (1, 0), (1, -1), (0, -1),
    (-1, 0), (-1, 1), (0, 1),
]


@dataclass(frozen=True)
class Hex:
    q: int
    r: int

    def __repr__(self):
        return f"({self.q},{self.r})"

    @property
    def s(self) -> int:
        return -self.q - self.r

    @property
    def key(self) -> str:
        return f"{self.q},{self.r}"

    @classmethod
    def from_key(cls, key: str) -> "Hex":
        q_s, r_s = key.split(",", 1)
        return cls(int(q_s), int(r_s))

    def neighbor(self, direction: int) -> "Hex":
        dq, dr = DIRECTIONS[int(direction) % 6]
        return Hex(self.q + dq, self.r + dr)

    def neighbors(self) -> List["Hex"]:
        return [Hex(self.q + dq, self.r + dr) for dq, dr in DIRECTIONS]


def adjacent_hexes(q: int, r: int) -> List[Hex]:
    return Hex(q, r).neighbors()


def are_adjacent(a: Hex, b: Hex) -> bool:
    return b in a.neighbors()


def hex_distance(a: Hex, b: Hex) -> int:
    # cube (true hex) distance
    return max(abs(a.q - b.q), abs(a.r - b.r), abs(a.s - b.s))


def axial_distance(a: Hex, b: Hex) -> int:
    """|dq| + |dr|. Overestimates true hex distance along the NE/SW axis;
    city spacing and AI site scoring are defined in these units."""
    return abs(a.q - b.q) + abs(a.r - b.r)


def axial_round(q: float, r: float) -> Hex:
    """
    Round fractional axial coordinates to the containing hex.
    Rounds q, r, s independently, then rebuilds the component with the
    largest rounding error from the other two so q + r + s == 0.
    """
    s = -q - r
    rq = round(q)
    rr = round(r)
    rs = round(s)

    q_diff = abs(rq - q)
    r_diff = abs(rr - r)
    s_diff = abs(rs - s)

    if q_diff > r_diff and q_diff > s_diff:
        rq = -rr - rs
    elif r_diff > s_diff:
        rr = -rq - rs

    return Hex(int(rq), int(rr))


def _rotate(x: float, y: float, degrees: float) -> Tuple[float, float]:
    rad = math.radians(degrees)
    cos_a, sin_a = math.cos(rad), math.sin(rad)
    return x * cos_a - y * sin_a, x * sin_a + y * cos_a


def hex_to_pixel(q: int, r: int, size: float,
                 rotation: float = HEX_ROTATION_DEGREES) -> Tuple[float, float]:
    x = size * 1.5 * q
    y = size * SQRT3 * (r + q * 0.5)
    return _rotate(x, y, rotation)


def pixel_to_hex(px: float, py: float, size: float,
                 rotation: float = HEX_ROTATION_DEGREES) -> Hex:
    x, y = _rotate(px, py, -rotation)
    q = (2.0 / 3.0 * x) / size
    r = (-1.0 / 3.0 * x + SQRT3 / 3.0 * y) / size
    return axial_round(q, r)


def hex_corners(x: float, y: float, size: float,
                rotation: float = HEX_ROTATION_DEGREES) -> List[Tuple[float, float]]:
    corners = []
    for i in range(6):
        rad = math.radians(60 * i + rotation)
        corners.append((x + size * math.cos(rad), y + size * math.sin(rad)))
    return corners

"""Linked-chain polygons with hole bridging, ear-clipping and insetting.

The first chain of a polygon is its exterior and runs clockwise; further
chains are holes and run counter-clockwise.
"""

from __future__ import annotations

import math
from collections.abc import Iterable, Iterator, Sequence
from dataclasses import dataclass, field, replace

from .geometry import distance, normalize, pt_inside_tri

Point = tuple[float, float]

_FAR = 999999999.0
_BRIDGE_OFFSET = -0.001


def _point(pt: Sequence[float]) -> Point:
    return (float(pt[0]), float(pt[1]))


def _sub(a: Point, b: Point) -> Point:
    return (a[0] - b[0], a[1] - b[1])


def _dot(a: Sequence[float], b: Sequence[float]) -> float:
    return a[0] * b[0] + a[1] * b[1]


def _div(num: float, den: float) -> float:
    if den != 0:
        return num / den
    if num == 0 or math.isnan(num):
        return math.nan
    return math.copysign(math.inf, num)


@dataclass
class Vert:
    """A polygon vertex linked to its neighbours within its chain."""

    pt: Point
    prev: int = -1
    next: int = -1
    chain: int = 0


@dataclass
class Polygon:
    """A set of closed vertex chains stored in one vertex list."""

    verts: list[Vert] = field(default_factory=list)
    chains: list[int] = field(default_factory=list)
    chain_len: list[int] = field(default_factory=list)

    def add_chain(self, pt: Sequence[float]) -> int:
        """Start a new chain at ``pt`` and return the new vertex index."""
        self.verts.append(Vert(_point(pt), -1, -1, len(self.chains)))
        idx = len(self.verts) - 1
        self.chains.append(idx)
        self.chain_len.append(1)
        return idx

    def add_point(self, pt: Sequence[float], prev: int) -> int:
        """Append ``pt`` after vertex ``prev`` in its chain; return its index."""
        chain = self.verts[prev].chain
        self.verts.append(Vert(_point(pt), prev, -1, chain))
        idx = len(self.verts) - 1
        self.verts[prev].next = idx
        self.chain_len[chain] += 1
        return idx

    def close_chain(self, first: int, last: int) -> None:
        """Link ``last`` back to ``first``."""
        self.verts[first].prev = last
        self.verts[last].next = first

    def copy(self) -> Polygon:
        """Return an independent copy of this polygon."""
        return Polygon(
            [replace(v) for v in self.verts],
            list(self.chains),
            list(self.chain_len),
        )

    def chain_indices(self, chain: int) -> Iterator[int]:
        """Yield the vertex indices of ``chain`` in link order."""
        start = self.chains[chain]
        curr = start
        while True:
            yield curr
            curr = self.verts[curr].next
            if curr == -1:
                raise ValueError(f"chain {chain} is not closed")
            if curr == start:
                return

    def is_ear(self, i1: int) -> bool:
        """Return True if vertex ``i1`` is convex and its triangle holds no other vertex."""
        vert = self.verts[i1]
        i0, i2 = vert.prev, vert.next
        p0, p1, p2 = self.verts[i0].pt, vert.pt, self.verts[i2].pt

        e0 = _sub(p1, p0)
        e1 = _sub(p2, p1)
        cross = e0[0] * e1[1] - e1[0] * e0[1]
        if cross > 0.0:
            return False

        curr = self.verts[i2].next
        while curr != i0:
            pt = self.verts[curr].pt
            if pt_inside_tri(pt, p0, p1, p2) and pt not in (p0, p1, p2):
                return False
            curr = self.verts[curr].next
        return True

    def clip(self, i1: int) -> None:
        """Unlink vertex ``i1`` from its chain."""
        vert = self.verts[i1]
        self.chain_len[vert.chain] -= 1
        i0, i2 = vert.prev, vert.next
        self.verts[i0].next = i2
        self.verts[i2].prev = i0
        if i1 == self.chains[vert.chain]:
            self.chains[vert.chain] = i0


def polygon_from_points(points: Iterable[Sequence[float]]) -> Polygon:
    """Build a single closed chain from ``points`` in the given order."""
    pts = list(points)
    if not pts:
        raise ValueError("a polygon needs at least one point")
    poly = Polygon()
    start = poly.add_chain(pts[0])
    last = start
    for pt in pts[1:]:
        last = poly.add_point(pt, last)
    poly.close_chain(start, last)
    return poly


def simplify_chain(poly: Polygon, chain: int, new_to_old: list[int]) -> None:
    """Bridge hole ``chain`` into the exterior chain.

    Two bridge vertices are appended; ``new_to_old`` is extended so it keeps
    mapping every vertex index to the original vertex it stands for.
    """
    verts = poly.verts

    m = poly.chains[chain]
    for curr in poly.chain_indices(chain):
        if verts[curr].pt[0] > verts[m].pt[0]:
            m = curr
    mpt = verts[m].pt

    hit: Point = (_FAR, _FAR)
    hit_vertex: Point = (0.0, 0.0)
    found = False
    for curr in poly.chain_indices(0):
        p0 = verts[curr].pt
        p1 = verts[verts[curr].next].pt
        top = max(p0[1], p1[1])
        bottom = min(p0[1], p1[1])
        if top != bottom and bottom <= mpt[1] <= top:
            t = (mpt[1] - p0[1]) / (p1[1] - p0[1])
            x = (1 - t) * p0[0] + t * p1[0]
            if x > mpt[0]:
                candidate = (x, mpt[1])
                if distance(mpt, candidate) < distance(mpt, hit):
                    hit = candidate
                    hit_vertex = p0 if p0[0] > p1[0] else p1
                    found = True

    # Only invalid polygons lack a crossing.
    if not found:
        return

    bridge = -1
    min_dist = 99999999.9
    for curr in poly.chain_indices(0):
        pt = verts[curr].pt
        if pt_inside_tri(pt, mpt, hit, hit_vertex):
            dist = distance(mpt, pt)
            if dist < min_dist:
                bridge = curr
                min_dist = dist
    if bridge == -1:
        return

    m_pt = verts[m].pt
    m_copy = poly.add_point((m_pt[0] + _BRIDGE_OFFSET, m_pt[1]), verts[m].prev)
    new_to_old.append(new_to_old[m])
    poly.chain_len[0] += poly.chain_len[chain]
    poly.chain_len[chain] = 0
    verts[m_copy].chain = 0

    b_pt = verts[bridge].pt
    b_copy = poly.add_point((b_pt[0] + _BRIDGE_OFFSET, b_pt[1]), m_copy)
    new_to_old.append(new_to_old[bridge])

    after = verts[bridge].next
    verts[bridge].next = m
    verts[m].prev = bridge
    verts[b_copy].next = after
    verts[after].prev = b_copy

    for curr in poly.chain_indices(0):
        verts[curr].chain = 0


def simplify(poly: Polygon, new_to_old: list[int]) -> None:
    """Merge every hole into the exterior chain, rightmost holes first."""
    if len(poly.chains) == 1:
        return

    holes = []
    for chain in range(1, len(poly.chains)):
        right = max(
            [-999999.0] + [poly.verts[i].pt[0] for i in poly.chain_indices(chain)]
        )
        holes.append((right, chain))
    holes.sort(key=lambda hole: hole[0], reverse=True)

    for _, chain in holes:
        simplify_chain(poly, chain, new_to_old)


def triangulate(poly: Polygon) -> list[int]:
    """Return a flat list of vertex indices, three per triangle."""
    if not poly.chains:
        raise ValueError("polygon has no chains")

    work = poly.copy()
    new_to_old = list(range(len(work.verts)))
    simplify(work, new_to_old)

    tris: list[int] = []
    while work.chain_len[0] > 3:
        ear = next((i for i in work.chain_indices(0) if work.is_ear(i)), None)
        # Only invalid polygons run out of ears.
        if ear is None:
            return tris
        vert = work.verts[ear]
        tris.extend((new_to_old[vert.prev], new_to_old[ear], new_to_old[vert.next]))
        work.clip(ear)

    head = work.chains[0]
    vert = work.verts[head]
    tris.extend((new_to_old[vert.prev], new_to_old[head], new_to_old[vert.next]))
    return tris


def _bisector(poly: Polygon, vert: Vert) -> Point:
    p0 = poly.verts[vert.prev].pt
    p1 = vert.pt
    p2 = poly.verts[vert.next].pt

    to_prev = normalize(_sub(p0, p1))
    to_next = normalize(_sub(p2, p1))
    direction = normalize((to_prev[0] + to_next[0], to_prev[1] + to_next[1]))

    cos_angle = _dot(to_prev, to_next)
    if cos_angle > 1.0:
        cos_angle = 1.0
    elif cos_angle < -1.0:
        cos_angle = -1.0
    scale = _div(1.0, math.sin(math.acos(cos_angle) / 2))

    if to_prev[0] * to_next[1] - to_prev[1] * to_next[0] < 0:
        scale = -scale
    return (direction[0] * scale, direction[1] * scale)


def inset(poly: Polygon, amount: float) -> None:
    """Move every vertex inward by ``amount``, limited so no edge inverts."""
    verts = poly.verts
    bisectors = [_bisector(poly, v) for v in verts]
    limits = [float(amount)] * len(verts)

    for i1, vert in enumerate(verts):
        i2 = vert.next
        p1, p2 = vert.pt, verts[i2].pt
        edge = normalize(_sub(p2, p1))
        edge_len = distance(p1, p2)
        shrink_speed = _dot(bisectors[i1], edge) - _dot(bisectors[i2], edge)
        disappear_time = _div(edge_len, shrink_speed)
        if disappear_time >= 0:
            limits[i1] = min(limits[i1], disappear_time)
            limits[i2] = min(limits[i2], disappear_time)

    for vert, bisector, limit in zip(verts, bisectors, limits):
        vert.pt = (vert.pt[0] + bisector[0] * limit, vert.pt[1] + bisector[1] * limit)
from __future__ import annotations

from collections import deque
from dataclasses import dataclass, field
from typing import Dict, Iterator, List, Optional, Set, Tuple

from core.molview import MolView


@dataclass(frozen=True)
class Ring:
    """A perceived ring: atom ids in cyclic order."""
    atoms: Tuple[int, ...]
    members: frozenset[int] = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "members", frozenset(self.atoms))

    def __contains__(self, atom_id: object) -> bool:
        return atom_id in self.members

    def __iter__(self) -> Iterator[int]:
        return iter(self.atoms)

    def __len__(self) -> int:
        return len(self.atoms)

    def contains_bond(self, atom_id_1: int, atom_id_2: int) -> bool:
        return atom_id_1 in self.members and atom_id_2 in self.members


@dataclass(frozen=True)
class RingContext:
    rings: List[Ring]
    atom_rings: Dict[int, List[Ring]]

    def rings_of(self, atom_id: int) -> List[Ring]:
        return self.atom_rings.get(atom_id, [])

    def is_in_ring(self, atom_id: int) -> bool:
        return atom_id in self.atom_rings


def find_rings_simple(view: MolView) -> List[Ring]:
    """Find an independent set of small rings.

    For every bond the shortest cycle through it is a candidate. Candidates
    are taken smallest first and kept only while their bond sets stay
    independent, up to the cycle rank (bonds - atoms + fragments). Cages
    such as adamantane or cubane get one ring per bond to break.
    """
    adjacency = _build_adjacency(view)
    edges: List[Tuple[int, int]] = []
    for a, nbrs in adjacency.items():
        for b in nbrs:
            if a < b:
                edges.append((a, b))

    rank = len(edges) - len(adjacency) + _count_fragments(adjacency)
    if rank <= 0:
        return []

    candidates: Dict[frozenset[int], List[int]] = {}
    for a, b in edges:
        path = _shortest_path_excluding_edge(adjacency, a, b, blocked_edge=(a, b))
        if not path:
            continue
        ring_nodes = frozenset(path)
        if len(ring_nodes) < 3:
            continue
        if ring_nodes not in candidates:
            candidates[ring_nodes] = path

    edge_bits = {frozenset(edge): 1 << index for index, edge in enumerate(edges)}
    basis: Dict[int, int] = {}
    rings: List[Ring] = []
    for key in _sorted_rings(candidates.keys()):
        path = candidates[key]
        vector = _ring_vector(path, edge_bits)
        # Eliminación sobre GF(2): un vector reducido a 0 es combinación
        # de anillos ya aceptados.
        while vector:
            pivot = vector.bit_length() - 1
            if pivot not in basis:
                break
            vector ^= basis[pivot]
        if not vector:
            continue
        basis[vector.bit_length() - 1] = vector
        rings.append(Ring(tuple(path)))
        if len(rings) == rank:
            break
    return rings


def build_ring_context(view: MolView) -> RingContext:
    rings = find_rings_simple(view)
    atom_rings: Dict[int, List[Ring]] = {}
    for ring in rings:
        for atom_id in ring:
            atom_rings.setdefault(atom_id, []).append(ring)
    return RingContext(rings=rings, atom_rings=atom_rings)


def _build_adjacency(view: MolView) -> Dict[int, List[int]]:
    adjacency: Dict[int, List[int]] = {}
    for atom_id in view.atoms():
        adjacency[atom_id] = list(view.neighbors(atom_id))
    return adjacency


def _shortest_path_excluding_edge(
    adjacency: Dict[int, List[int]],
    start: int,
    goal: int,
    blocked_edge: Tuple[int, int],
) -> List[int]:
    blocked = {blocked_edge, (blocked_edge[1], blocked_edge[0])}
    queue: deque[int] = deque([start])
    parent: Dict[int, Optional[int]] = {start: None}
    while queue:
        node = queue.popleft()
        if node == goal:
            break
        for nbr in adjacency.get(node, []):
            if (node, nbr) in blocked:
                continue
            if nbr in parent:
                continue
            parent[nbr] = node
            queue.append(nbr)

    if goal not in parent:
        return []
    path: List[int] = []
    current: Optional[int] = goal
    while current is not None:
        path.append(current)
        current = parent.get(current)
    path.reverse()
    return path


def _count_fragments(adjacency: Dict[int, List[int]]) -> int:
    seen: Set[int] = set()
    fragments = 0
    for start in adjacency:
        if start in seen:
            continue
        fragments += 1
        seen.add(start)
        stack = [start]
        while stack:
            node = stack.pop()
            for nbr in adjacency[node]:
                if nbr not in seen:
                    seen.add(nbr)
                    stack.append(nbr)
    return fragments


def _ring_vector(path: List[int], edge_bits: Dict[frozenset[int], int]) -> int:
    """Bond set of a cyclic path as a bit vector."""
    vector = 0
    for i, atom_id in enumerate(path):
        vector ^= edge_bits[frozenset((atom_id, path[(i + 1) % len(path)]))]
    return vector


def _sorted_rings(rings) -> List[frozenset[int]]:
    return sorted(rings, key=lambda ring: (len(ring), tuple(sorted(ring))))

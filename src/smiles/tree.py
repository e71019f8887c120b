"""Árbol de expansión con cierres de anillo para la escritura SMILES.

El grafo molecular (posiblemente cíclico) se recorre en anchura desde el
primer átomo pesado no visitado de cada fragmento. Cada anillo se rompe en
un único enlace, que pasa a ser un cierre de anillo numerado; el resto de
enlaces forman un bosque que `render.write_node` puede escribir como texto
sin volver a mirar el grafo.
"""

from __future__ import annotations

import logging
from collections import deque
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Set, Tuple

from core.molview import MolView

from .classifiers import is_implicit_hydrogen
from .rings import Ring, RingContext

logger = logging.getLogger(__name__)


@dataclass(eq=False)
class SmilesNode:
    """Nodo del árbol: un átomo pesado y la información para escribirlo."""
    atom_id: int
    parent: Optional["SmilesNode"] = field(default=None, repr=False)
    # Orden del enlace con el padre (0 para las raíces).
    bond_order: int = 0
    children: List["SmilesNode"] = field(default_factory=list, repr=False)
    hydrogen_count: int = 0
    # Pares (número de cierre, orden de enlace) en orden de asignación.
    ring_closures: List[Tuple[int, int]] = field(default_factory=list)

    def attach(self, parent: "SmilesNode", bond_order: int) -> None:
        """Cuelga el nodo de `parent` con el orden de enlace indicado."""
        self.parent = parent
        self.bond_order = bond_order
        parent.children.append(self)

    def add_ring(self, ring_number: int, bond_order: int) -> None:
        self.ring_closures.append((ring_number, bond_order))

    @property
    def is_root(self) -> bool:
        return self.parent is None


@dataclass
class SmilesTree:
    """Bosque de árboles SMILES, una raíz por fragmento conectado."""
    roots: List[SmilesNode] = field(default_factory=list)
    nodes: Dict[int, SmilesNode] = field(default_factory=dict)

    def __len__(self) -> int:
        return len(self.roots)


def build_smiles_tree(view: MolView, ring_ctx: RingContext) -> SmilesTree:
    """Construye el bosque de expansión con anotaciones de cierre de anillo.

    Args:
        view: Vista del grafo molecular.
        ring_ctx: Anillos percibidos del grafo.

    Returns:
        `SmilesTree` con las raíces en el orden estable de los átomos.

    Side Effects:
        No modifica el grafo; todo el estado es local a la llamada.
    """
    atoms = view.atoms()
    implicit = {atom_id for atom_id in atoms if is_implicit_hydrogen(view, atom_id)}

    # Vecinos sin contar H implícitos; se decrementa con cada cierre de anillo.
    neighbor_counts: Dict[int, int] = {
        atom_id: sum(1 for nbr in view.neighbors(atom_id) if nbr not in implicit)
        for atom_id in atoms
    }

    tree = SmilesTree()
    visited_atoms: Set[int] = set()
    visited_rings: Set[Ring] = set()
    ring_bonds: Set[frozenset[int]] = set()
    pending: Dict[int, List[int]] = {}

    for root_atom in atoms:
        if root_atom in visited_atoms or root_atom in implicit:
            continue

        root = SmilesNode(root_atom)
        tree.roots.append(root)
        tree.nodes[root_atom] = root
        visited_atoms.add(root_atom)
        for number in pending.pop(root_atom, []):
            root.add_ring(number, 0)
        logger.debug("Fragment %d rooted at atom %s", len(tree.roots), root_atom)

        ring_number = 1
        queue: deque[SmilesNode] = deque([root])
        while queue:
            parent_node = queue.popleft()
            atom_id = parent_node.atom_id
            tree_parent = parent_node.parent.atom_id if parent_node.parent else None

            for ring in ring_ctx.rings_of(atom_id):
                if ring in visited_rings:
                    continue
                if neighbor_counts[atom_id] <= 1:
                    break

                # Gana el último vecino que cumple; se recorre desde el final.
                partner: Optional[int] = None
                for nbr in reversed(view.neighbors(atom_id)):
                    if nbr not in ring or nbr == tree_parent:
                        continue
                    if frozenset((atom_id, nbr)) in ring_bonds:
                        continue
                    if neighbor_counts[nbr] <= 1:
                        continue
                    if not _still_connected(view, ring_bonds, atom_id, nbr):
                        continue
                    partner = nbr
                    break
                if partner is None:
                    continue

                order = view.bond_order_between(atom_id, partner)
                ring_bonds.add(frozenset((atom_id, partner)))
                parent_node.add_ring(ring_number, order)
                _register_partner(tree, pending, partner, ring_number)
                neighbor_counts[atom_id] -= 1
                neighbor_counts[partner] -= 1
                visited_rings.add(ring)
                logger.debug("Ring closure %d between atoms %s and %s", ring_number, atom_id, partner)
                ring_number += 1

            hydrogen_count = 0
            for nbr in view.neighbors(atom_id):
                bond_key = frozenset((atom_id, nbr))
                if nbr in visited_atoms:
                    if nbr in implicit or nbr == tree_parent or bond_key in ring_bonds:
                        continue
                    # Ciclo que la percepción de anillos no rompió.
                    ring_bonds.add(bond_key)
                    parent_node.add_ring(ring_number, view.bond_order_between(atom_id, nbr))
                    tree.nodes[nbr].add_ring(ring_number, 0)
                    logger.debug(
                        "Unbroken cycle closed with ring %d between atoms %s and %s",
                        ring_number,
                        atom_id,
                        nbr,
                    )
                    ring_number += 1
                    continue
                if nbr in implicit:
                    hydrogen_count += 1
                    visited_atoms.add(nbr)
                    continue
                if bond_key in ring_bonds:
                    continue

                node = SmilesNode(nbr)
                node.attach(parent_node, view.bond_order_between(atom_id, nbr))
                tree.nodes[nbr] = node
                visited_atoms.add(nbr)
                for number in pending.pop(nbr, []):
                    node.add_ring(number, 0)
                queue.append(node)

            parent_node.hydrogen_count = hydrogen_count

    return tree


def _still_connected(
    view: MolView,
    ring_bonds: Set[frozenset[int]],
    atom_id: int,
    partner: int,
) -> bool:
    """Indica si `partner` sigue alcanzable tras romper el enlace con `atom_id`.

    Busca un camino entre ambos átomos que no use ese enlace ni los enlaces
    ya convertidos en cierres de anillo.
    """
    broken = frozenset((atom_id, partner))
    seen = {atom_id}
    queue: deque[int] = deque([atom_id])
    while queue:
        current = queue.popleft()
        for nbr in view.neighbors(current):
            if nbr in seen:
                continue
            bond_key = frozenset((current, nbr))
            if bond_key == broken or bond_key in ring_bonds:
                continue
            if nbr == partner:
                return True
            seen.add(nbr)
            queue.append(nbr)
    return False


def _register_partner(
    tree: SmilesTree,
    pending: Dict[int, List[int]],
    partner: int,
    ring_number: int,
) -> None:
    """Anota el número de cierre en el átomo pareja del anillo.

    Si la pareja ya tiene nodo se le añade directamente; si no, queda
    pendiente hasta que se cree su nodo.
    """
    node = tree.nodes.get(partner)
    if node is not None:
        node.add_ring(ring_number, 0)
    else:
        pending.setdefault(partner, []).append(ring_number)

"""Predicados químicos usados por el escritor SMILES.

Todas las funciones son puras: reciben la vista del grafo (y, cuando hace
falta, el contexto de anillos) y no modifican nada.
"""

from __future__ import annotations

from typing import Set

from core.elements import default_mass_number
from core.molview import MolView

from .rings import Ring, RingContext

# Elementos que pueden escribirse sin corchetes.
ORGANIC_ELEMENTS = frozenset({"B", "C", "N", "O", "P", "S", "Cl", "Br", "I"})

# Elementos que admiten la forma aromática en minúscula.
AROMATIC_ELEMENTS = frozenset({"B", "C", "N", "O", "P", "S", "As", "Se"})

# Número de vecinos exigido para considerar plano un átomo del anillo.
PLANAR_NEIGHBOR_COUNT = {"C": 3, "O": 2, "S": 2}


def is_implicit_hydrogen(view: MolView, atom_id: int) -> bool:
    """Indica si el átomo es un H que puede plegarse en su átomo pesado.

    Debe ser hidrógeno terminal (un único vecino), con el isótopo por
    defecto y sin enlace a otro hidrógeno.
    """
    if view.element(atom_id) != "H":
        return False
    if view.isotope(atom_id) not in (None, 1):
        return False
    if view.neighbor_count(atom_id) != 1:
        return False
    return not view.is_bonded_to(atom_id, "H")


def is_organic_atom(view: MolView, atom_id: int) -> bool:
    return view.element(atom_id) in ORGANIC_ELEMENTS and view.atom_charge(atom_id) == 0


def is_isotope(view: MolView, atom_id: int) -> bool:
    """Indica si el número másico difiere del valor por defecto del elemento."""
    mass = view.isotope(atom_id)
    if mass is None:
        return False
    return mass != default_mass_number(view.element(atom_id))


def is_aromatic_element(view: MolView, atom_id: int) -> bool:
    return view.element(atom_id) in AROMATIC_ELEMENTS


def is_planar_atom(view: MolView, atom_id: int) -> bool:
    expected = PLANAR_NEIGHBOR_COUNT.get(view.element(atom_id))
    if expected is None:
        return True
    return view.neighbor_count(atom_id) == expected


def is_aromatic_ring(view: MolView, ring_ctx: RingContext, ring: Ring) -> bool:
    """Heurística de aromaticidad por anillo.

    Todos los miembros deben ser elementos aromáticos y planos, y ningún
    doble enlace exocíclico puede terminar en un átomo fuera de anillos.

    Args:
        view: Vista del grafo molecular.
        ring_ctx: Anillos percibidos del grafo.
        ring: Anillo a evaluar.

    Returns:
        `True` si el anillo se considera aromático.
    """
    for atom_id in ring:
        if not is_aromatic_element(view, atom_id):
            return False
        if not is_planar_atom(view, atom_id):
            return False
        for nbr in view.neighbors(atom_id):
            if ring.contains_bond(atom_id, nbr):
                continue
            if view.bond_order_between(atom_id, nbr) == 2 and not ring_ctx.is_in_ring(nbr):
                return False
    return True


def is_aromatic_atom(view: MolView, ring_ctx: RingContext, atom_id: int) -> bool:
    if not is_aromatic_element(view, atom_id):
        return False
    return any(is_aromatic_ring(view, ring_ctx, ring) for ring in ring_ctx.rings_of(atom_id))


def aromatic_atoms(view: MolView, ring_ctx: RingContext) -> Set[int]:
    """Precalcula el conjunto de átomos aromáticos del grafo.

    Cada anillo se evalúa una sola vez. Un anillo aromático solo contiene
    elementos aromáticos, por lo que basta con unir sus miembros.
    """
    aromatic: Set[int] = set()
    for ring in ring_ctx.rings:
        if is_aromatic_ring(view, ring_ctx, ring):
            aromatic.update(ring)
    return aromatic

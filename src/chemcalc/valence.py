"""Cálculo de hidrógenos implícitos según valencias típicas."""

from __future__ import annotations

from typing import Dict

from core.model import MolGraph
from core.molview import MolView

# Valencias típicas usadas para inferir H implícitos en cálculos sencillos.
TYPICAL_VALENCE: Dict[str, int] = {
    "H": 1,
    "B": 3,
    "C": 4,
    "N": 3,
    "O": 2,
    "F": 1,
    "Cl": 1,
    "Br": 1,
    "I": 1,
    "S": 2,
    "P": 3,
}

# Elementos con pares libres: una carga positiva les permite un enlace más.
_LONE_PAIR_ELEMENTS = {"N", "O", "S", "P"}


def implicit_h_count(view: MolView, atom_id: int) -> int:
    """Calcula los hidrógenos implícitos para un átomo.

    Los enlaces marcados como aromáticos cuentan como 1.5. La carga formal
    suma valencia en N, O, S y P (amonio, oxonio) y la resta en el resto
    (carbocationes, carbaniones).

    Args:
        view: Vista del grafo molecular con operaciones de consulta.
        atom_id: Identificador del átomo a evaluar.

    Returns:
        Número de H implícitos estimados (>= 0).
    """
    element = view.element(atom_id)
    typical = TYPICAL_VALENCE.get(element)
    if typical is None:
        return 0

    bond_order_sum = 0.0
    for nbr in view.neighbors(atom_id):
        if view.bond_is_aromatic(atom_id, nbr):
            bond_order_sum += 1.5
        else:
            bond_order_sum += view.bond_order_between(atom_id, nbr)

    charge = view.atom_charge(atom_id)
    if element in _LONE_PAIR_ELEMENTS:
        valence = typical + charge
    else:
        valence = typical - abs(charge)
    implicit = int(valence - bond_order_sum)
    if implicit < 0:
        return 0
    return implicit


def add_implicit_hydrogens(graph) -> MolGraph:
    """Devuelve una copia del grafo con los H implícitos como átomos.

    Los átomos y enlaces originales conservan sus IDs y su orden; los
    hidrógenos nuevos se añaden al final, enlazados a su átomo pesado.

    Args:
        graph: Grafo molecular compatible con `MolView`.

    Returns:
        Nuevo `MolGraph`; el grafo de entrada no se modifica.
    """
    view = MolView(graph)
    result = MolGraph()
    for atom_id in view.atoms():
        result.add_atom(
            view.element(atom_id),
            atom_id=atom_id,
            charge=view.atom_charge(atom_id),
            isotope=view.isotope(atom_id),
        )
    for a1, a2, order in view.bonds():
        result.add_bond(a1, a2, order, is_aromatic=view.bond_is_aromatic(a1, a2))

    for atom_id in view.atoms():
        if view.element(atom_id) == "H":
            continue
        for _ in range(implicit_h_count(view, atom_id)):
            hydrogen = result.add_atom("H")
            result.add_bond(atom_id, hydrogen.id)
    return result

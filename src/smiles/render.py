"""Renderizado de nodos y árboles SMILES a texto."""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Set

from core.molview import MolView

from .classifiers import is_isotope, is_organic_atom
from .tree import SmilesNode

# Símbolos de enlace escritos delante del átomo hijo.
BOND_SYMBOLS = {
    2: "=",
    3: "#",
    4: "$",
}

# Símbolos admitidos como prefijo de un cierre de anillo.
RING_BOND_SYMBOLS = {
    2: "=",
    3: "#",
}


@dataclass(frozen=True)
class RenderContext:
    """Hechos precalculados que necesita el renderizado de cada nodo."""
    view: MolView
    aromatic: Set[int]
    kekulize: bool = False

    def is_aromatic(self, atom_id: int) -> bool:
        return atom_id in self.aromatic


def node_token(node: SmilesNode, ctx: RenderContext) -> str:
    """Renderiza el token de un nodo: enlace, átomo y cierres de anillo.

    Args:
        node: Nodo del árbol a renderizar.
        ctx: Contexto con la vista, los aromáticos y la opción de Kekulé.

    Returns:
        Texto SMILES del átomo sin sus descendientes.
    """
    view = ctx.view
    atom_id = node.atom_id
    aromatic = ctx.is_aromatic(atom_id)
    parts: List[str] = []

    if node.parent is not None:
        both_aromatic = aromatic and ctx.is_aromatic(node.parent.atom_id)
        if ctx.kekulize or not both_aromatic:
            parts.append(BOND_SYMBOLS.get(node.bond_order, ""))

    element = view.element(atom_id)
    if aromatic and not ctx.kekulize:
        if element == "N" and view.neighbor_count(atom_id, "H") == 1:
            parts.append("[nH]")
        else:
            parts.append(element.lower())
    elif is_organic_atom(view, atom_id):
        parts.append(element)
    else:
        parts.append(_bracket_atom(node, view))

    for ring_number, bond_order in node.ring_closures:
        if ctx.kekulize or not aromatic:
            parts.append(RING_BOND_SYMBOLS.get(bond_order, ""))
        if ring_number > 9:
            parts.append("%")
        parts.append(str(ring_number))

    return "".join(parts)


def _bracket_atom(node: SmilesNode, view: MolView) -> str:
    atom_id = node.atom_id
    parts = ["["]
    if is_isotope(view, atom_id):
        parts.append(str(view.isotope(atom_id)))
    parts.append(view.element(atom_id))

    if node.hydrogen_count > 0:
        parts.append("H")
        if node.hydrogen_count > 1:
            parts.append(str(node.hydrogen_count))

    charge = view.atom_charge(atom_id)
    if charge > 0:
        parts.append("+")
    elif charge < 0:
        parts.append("-")
    if abs(charge) > 1:
        parts.append(str(abs(charge)))

    parts.append("]")
    return "".join(parts)


def write_node(node: SmilesNode, ctx: RenderContext) -> str:
    """Escribe un nodo y todo su subárbol.

    Con varios hijos, todos salvo el último van entre paréntesis como ramas
    y el último continúa la cadena principal. La cadena principal se recorre
    en bucle; solo las ramas recurren.
    """
    parts: List[str] = []
    current = node
    while True:
        parts.append(node_token(current, ctx))
        if not current.children:
            break
        for child in current.children[:-1]:
            parts.append(f"({write_node(child, ctx)})")
        current = current.children[-1]
    return "".join(parts)

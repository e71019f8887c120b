"""Modelos de datos base del grafo molecular.

Este módulo concentra las estructuras que representan el grafo molecular
(átomos y enlaces). El escritor SMILES, el puente con RDKit y los cálculos
de valencia interactúan con estas clases para construir y consultar la
química que se desea serializar.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from enum import IntEnum
from typing import Dict, List, Optional

from core.elements import is_known_element


class BondOrder(IntEnum):
    """Órdenes de enlace admitidos por el modelo."""
    SINGLE = 1
    DOUBLE = 2
    TRIPLE = 3
    QUADRUPLE = 4


@dataclass
class Atom:
    """Un átomo del grafo: elemento, carga formal y número másico."""
    id: int
    element: str
    charge: int = 0
    # None indica el isótopo por defecto del elemento.
    isotope: Optional[int] = None


@dataclass
class Bond:
    """Enlace entre dos átomos del grafo."""
    id: int
    a1_id: int
    a2_id: int
    order: int = BondOrder.SINGLE
    is_aromatic: bool = False

    def other(self, atom_id: int) -> int:
        """Devuelve el extremo opuesto a `atom_id`."""
        return self.a2_id if atom_id == self.a1_id else self.a1_id


class MolGraph:
    """Grafo molecular con IDs estables y orden de inserción conservado."""

    def __init__(self) -> None:
        self.atoms: Dict[int, Atom] = {}
        self.bonds: Dict[int, Bond] = {}
        self._next_atom_id = 1
        self._next_bond_id = 1

    def __len__(self) -> int:
        return len(self.atoms)

    def add_atom(
        self,
        element: str,
        charge: int = 0,
        isotope: Optional[int] = None,
        atom_id: Optional[int] = None,
    ) -> Atom:
        """Crea y registra un átomo en el grafo.

        Args:
            element: Símbolo del elemento químico (p. ej., "C", "O").
            charge: Carga formal del átomo.
            isotope: Número másico; `None` indica el isótopo por defecto.
            atom_id: ID explícito al copiar otro grafo conservando IDs.

        Returns:
            El átomo creado.

        Raises:
            ValueError: Si el símbolo no corresponde a un elemento conocido.
        """
        if not is_known_element(element):
            raise ValueError(f"Unknown element symbol: {element!r}")
        if atom_id is None:
            atom_id = self._next_atom_id
        self._next_atom_id = max(self._next_atom_id, atom_id + 1)
        atom = Atom(id=atom_id, element=element, charge=charge, isotope=isotope)
        self.atoms[atom_id] = atom
        return atom

    def add_bond(
        self,
        a1_id: int,
        a2_id: int,
        order: int = BondOrder.SINGLE,
        is_aromatic: bool = False,
    ) -> Bond:
        """Crea y registra un enlace entre dos átomos.

        Args:
            a1_id: ID del primer átomo.
            a2_id: ID del segundo átomo.
            order: Orden de enlace (1 a 4).
            is_aromatic: Marca si el enlace pertenece a un sistema aromático.

        Returns:
            El enlace creado.

        Raises:
            ValueError: Si algún extremo no existe, si ambos extremos son el
                mismo átomo o si el orden no está entre 1 y 4.
        """
        for atom_id in (a1_id, a2_id):
            if atom_id not in self.atoms:
                raise ValueError(f"Bond endpoint {atom_id} is not an atom of the graph")
        if a1_id == a2_id:
            raise ValueError("A bond needs two distinct atoms")
        try:
            order = BondOrder(order)
        except ValueError:
            raise ValueError(f"Unsupported bond order: {order!r}") from None
        bond = Bond(
            id=self._next_bond_id,
            a1_id=a1_id,
            a2_id=a2_id,
            order=order,
            is_aromatic=is_aromatic,
        )
        self.bonds[bond.id] = bond
        self._next_bond_id += 1
        return bond

    def get_atom(self, atom_id: int) -> Atom:
        """Obtiene un átomo por ID.

        Raises:
            KeyError: Si el átomo no existe.
        """
        return self.atoms[atom_id]

    def find_bond_between(self, a1_id: int, a2_id: int) -> Optional[Bond]:
        """Busca el enlace entre dos átomos, o `None` si no están enlazados."""
        for bond in self.bonds.values():
            if {bond.a1_id, bond.a2_id} == {a1_id, a2_id}:
                return bond
        return None

    def neighbors(self, atom_id: int) -> List[int]:
        """Vecinos de un átomo en el orden de inserción de sus enlaces."""
        return [
            bond.other(atom_id)
            for bond in self.bonds.values()
            if atom_id in (bond.a1_id, bond.a2_id)
        ]

    def copy(self) -> "MolGraph":
        """Devuelve una copia independiente del grafo (mismos IDs)."""
        clone = MolGraph()
        clone.atoms = {atom_id: replace(atom) for atom_id, atom in self.atoms.items()}
        clone.bonds = {bond_id: replace(bond) for bond_id, bond in self.bonds.items()}
        clone._next_atom_id = self._next_atom_id
        clone._next_bond_id = self._next_bond_id
        return clone

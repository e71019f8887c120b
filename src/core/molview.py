"""Vista de lectura sobre grafos moleculares heterogéneos.

`MolView` actúa como adaptador para distintos formatos de grafo, ofreciendo
a los consumidores (escritor SMILES, valencias) una API uniforme: orden estable de átomos, vecinos en
orden de inserción de enlaces y consulta de enlaces entre pares.
"""

from __future__ import annotations

from typing import Dict, Iterable, List, Optional, Tuple

from core.errors import GraphNotSupported


class MolView:
    """Adaptador ligero sobre objetos tipo `MolGraph`."""

    def __init__(self, graph) -> None:
        """Inicializa la vista sobre un grafo arbitrario.

        Args:
            graph: Objeto con atributos compatibles (`atoms` y `bonds`).

        Side Effects:
            Inicializa cachés internas para átomos, adyacencias y enlaces.
        """
        self.graph = graph
        self._atom_index: Optional[Dict[int, object]] = None
        self._adj: Optional[Dict[int, List[int]]] = None
        self._bond_orders: Optional[Dict[frozenset[int], int]] = None
        self._bond_aromatic: Optional[Dict[frozenset[int], bool]] = None

    def __len__(self) -> int:
        return len(self.atoms())

    def atoms(self) -> List[int]:
        """Devuelve la lista de IDs atómicos en orden estable.

        Returns:
            Lista de IDs de átomos en el orden en que el grafo los expone.

        Raises:
            GraphNotSupported: Si el grafo no expone átomos accesibles.
        """
        self._ensure_atoms()
        return list(self._atom_index.keys())

    def element(self, atom_id: int) -> str:
        """Obtiene el símbolo del elemento para un átomo.

        Args:
            atom_id: Identificador del átomo.

        Returns:
            Símbolo químico (por ejemplo, "C", "O").

        Raises:
            GraphNotSupported: Si no se puede resolver el elemento.
        """
        atom = self._get_atom(atom_id)
        if atom is None:
            raise GraphNotSupported("Cannot resolve atom element")
        element = self._field(atom, "element")
        if element is None:
            element = self._field(atom, "symbol")
        if element is None:
            raise GraphNotSupported("Cannot resolve atom element")
        return str(element)

    def atom_charge(self, atom_id: int) -> int:
        """Obtiene la carga formal del átomo (0 por defecto)."""
        atom = self._get_atom(atom_id)
        charge = self._field(atom, "charge") if atom is not None else None
        return int(charge) if charge is not None else 0

    def isotope(self, atom_id: int) -> Optional[int]:
        """Obtiene el número másico del átomo, o `None` si es el por defecto."""
        atom = self._get_atom(atom_id)
        value = self._field(atom, "isotope") if atom is not None else None
        return int(value) if value else None

    def neighbors(self, atom_id: int) -> List[int]:
        """Devuelve los vecinos del átomo en orden de inserción de enlaces.

        Args:
            atom_id: Identificador del átomo.

        Returns:
            Lista de IDs vecinos.
        """
        self._ensure_adjacency()
        return list(self._adj.get(atom_id, []))

    def neighbor_count(self, atom_id: int, element: Optional[str] = None) -> int:
        """Cuenta vecinos, opcionalmente solo los de un elemento dado."""
        neighbors = self.neighbors(atom_id)
        if element is None:
            return len(neighbors)
        return sum(1 for nbr in neighbors if self.element(nbr) == element)

    def is_bonded_to(self, atom_id: int, element: str) -> bool:
        """Indica si el átomo tiene algún vecino del elemento indicado."""
        return any(self.element(nbr) == element for nbr in self.neighbors(atom_id))

    def bond_order_between(self, atom_id_1: int, atom_id_2: int) -> int:
        """Obtiene el orden de enlace entre dos átomos.

        Args:
            atom_id_1: ID del primer átomo.
            atom_id_2: ID del segundo átomo.

        Returns:
            Orden de enlace, o 0 si los átomos no están enlazados.
        """
        self._ensure_adjacency()
        return self._bond_orders.get(frozenset({atom_id_1, atom_id_2}), 0)

    def bond_is_aromatic(self, atom_id_1: int, atom_id_2: int) -> bool:
        """Indica si el enlace entre dos átomos está marcado como aromático."""
        self._ensure_adjacency()
        return self._bond_aromatic.get(frozenset({atom_id_1, atom_id_2}), False)

    def bonds(self) -> List[Tuple[int, int, int]]:
        """Lista de enlaces válidos como tuplas (a1, a2, orden)."""
        self._ensure_adjacency()
        return [(min(pair), max(pair), order) for pair, order in self._bond_orders.items()]

    def _ensure_atoms(self) -> None:
        """Construye el índice id -> átomo respetando el orden del grafo."""
        if self._atom_index is not None:
            return
        graph = self.graph
        atoms_attr = getattr(graph, "atoms", None)
        if atoms_attr is None:
            raise GraphNotSupported("Cannot read atoms from graph")
        atoms_iter = atoms_attr() if callable(atoms_attr) else atoms_attr
        index: Dict[int, object] = {}
        if isinstance(atoms_iter, dict):
            index.update(atoms_iter)
        else:
            for atom in atoms_iter:
                index[self._atom_id(atom)] = atom
        self._atom_index = index

    def _get_atom(self, atom_id: int):
        self._ensure_atoms()
        return self._atom_index.get(atom_id)

    @staticmethod
    def _field(atom, name: str):
        if isinstance(atom, dict):
            return atom.get(name)
        return getattr(atom, name, None)

    def _atom_id(self, atom) -> int:
        """Normaliza un objeto átomo a su ID entero.

        Raises:
            GraphNotSupported: Si no se puede extraer el ID.
        """
        if isinstance(atom, int):
            return atom
        atom_id = self._field(atom, "id")
        if atom_id is None:
            atom_id = self._field(atom, "atom_id")
        if atom_id is not None:
            return int(atom_id)
        raise GraphNotSupported("Atom object has no id")

    def _iter_bonds(self) -> Iterable[Tuple[int, int, int, bool]]:
        """Itera enlaces con orden y aromaticidad si están disponibles."""
        bonds_attr = getattr(self.graph, "bonds", None)
        if bonds_attr is None:
            return
        bonds_iter = bonds_attr() if callable(bonds_attr) else bonds_attr
        if isinstance(bonds_iter, dict):
            bonds_iter = bonds_iter.values()
        for bond in bonds_iter:
            if isinstance(bond, (tuple, list)):
                if len(bond) < 2:
                    continue
                order = bond[2] if len(bond) >= 3 and bond[2] is not None else 1
                yield int(bond[0]), int(bond[1]), int(order), False
                continue
            a1 = self._field(bond, "a1_id")
            a2 = self._field(bond, "a2_id")
            if a1 is None or a2 is None:
                a1 = self._field(bond, "a1")
                a2 = self._field(bond, "a2")
            if a1 is None or a2 is None:
                continue
            order = self._field(bond, "order")
            if order is None:
                order = 1
            is_aromatic = self._field(bond, "is_aromatic") or False
            yield int(a1), int(a2), int(order), bool(is_aromatic)

    def _ensure_adjacency(self) -> None:
        """Construye y cachea adyacencias y órdenes de enlace.

        Los enlaces cuyos extremos no pertenecen al grafo, los enlaces de un
        átomo consigo mismo y los duplicados se ignoran.
        """
        if self._adj is not None:
            return
        self._ensure_atoms()
        adjacency: Dict[int, List[int]] = {atom_id: [] for atom_id in self._atom_index}
        bond_orders: Dict[frozenset[int], int] = {}
        bond_aromatic: Dict[frozenset[int], bool] = {}

        for a1, a2, order, is_aromatic in self._iter_bonds():
            if a1 not in adjacency or a2 not in adjacency or a1 == a2:
                continue
            key = frozenset({a1, a2})
            if key in bond_orders:
                continue
            adjacency[a1].append(a2)
            adjacency[a2].append(a1)
            bond_orders[key] = order
            bond_aromatic[key] = is_aromatic

        self._adj = adjacency
        self._bond_orders = bond_orders
        self._bond_aromatic = bond_aromatic

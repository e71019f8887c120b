"""Pruebas del árbol de expansión y de los cierres de anillo."""

import os
import sys
import unittest
from collections import Counter

sys.path.append(os.path.abspath(os.path.join(os.path.dirname(__file__), "..", "src")))

from core.model import MolGraph
from core.molview import MolView
from smiles.rings import Ring, RingContext, build_ring_context
from smiles.tree import SmilesNode, build_smiles_tree


def build_benzene_kekule(graph: MolGraph) -> list[int]:
    atoms = [graph.add_atom("C") for _ in range(6)]
    for i in range(6):
        order = 2 if i % 2 == 0 else 1
        graph.add_bond(atoms[i].id, atoms[(i + 1) % 6].id, order=order)
    for atom in atoms:
        h = graph.add_atom("H")
        graph.add_bond(atom.id, h.id)
    return [atom.id for atom in atoms]


def build_adamantane(graph: MolGraph) -> list[int]:
    """Adamantano con H explícitos: 4 CH de cabeza de puente y 6 CH2."""
    bridgeheads = [graph.add_atom("C") for _ in range(4)]
    hydrogens = {atom.id: 1 for atom in bridgeheads}
    for i in range(4):
        for j in range(i + 1, 4):
            methylene = graph.add_atom("C")
            graph.add_bond(bridgeheads[i].id, methylene.id)
            graph.add_bond(methylene.id, bridgeheads[j].id)
            hydrogens[methylene.id] = 2
    for atom_id, count in hydrogens.items():
        for _ in range(count):
            h = graph.add_atom("H")
            graph.add_bond(atom_id, h.id)
    return list(hydrogens)


def build_cubane(graph: MolGraph) -> list[int]:
    atoms = [graph.add_atom("C") for _ in range(8)]
    for i in range(8):
        for bit in (1, 2, 4):
            j = i ^ bit
            if i < j:
                graph.add_bond(atoms[i].id, atoms[j].id)
    return [atom.id for atom in atoms]


def cube_faces(ids: list[int]) -> list[Ring]:
    """Las seis caras del cubo, cada una en orden cíclico."""
    faces = []
    for fixed in (1, 2, 4):
        p, q = [bit for bit in (1, 2, 4) if bit != fixed]
        for base in (0, fixed):
            cycle = [base, base | p, base | p | q, base | q]
            faces.append(Ring(tuple(ids[k] for k in cycle)))
    return faces


def ring_number_usage(tree) -> Counter:
    usage: Counter = Counter()
    for node in tree.nodes.values():
        for number, _order in node.ring_closures:
            usage[number] += 1
    return usage


def walk(node: SmilesNode):
    yield node
    for child in node.children:
        yield from walk(child)


class SmilesNodeTest(unittest.TestCase):
    def test_attach_links_parent_and_child(self):
        parent = SmilesNode(1)
        child = SmilesNode(2)
        child.attach(parent, 2)

        self.assertTrue(parent.is_root)
        self.assertFalse(child.is_root)
        self.assertIs(child.parent, parent)
        self.assertEqual(child.bond_order, 2)
        self.assertEqual(parent.children, [child])

    def test_ring_closures_keep_assignment_order(self):
        node = SmilesNode(1)
        node.add_ring(3, 0)
        node.add_ring(1, 2)
        self.assertEqual(node.ring_closures, [(3, 0), (1, 2)])


class SmilesTreeTest(unittest.TestCase):
    def test_benzene_is_a_chain_with_one_closure(self):
        """Verifica benzene is a chain with one closure.

        El primer carbono cierra el anillo con el último vecino del anillo
        (el sexto carbono) y el resto forma una cadena lineal.

        """
        graph = MolGraph()
        ring = build_benzene_kekule(graph)
        view = MolView(graph)
        tree = build_smiles_tree(view, build_ring_context(view))

        self.assertEqual(len(tree), 1)
        root = tree.roots[0]
        self.assertEqual(root.atom_id, ring[0])
        self.assertEqual(root.ring_closures, [(1, 1)])
        self.assertEqual(root.hydrogen_count, 1)

        chain = [node.atom_id for node in walk(root)]
        self.assertEqual(chain, ring)
        self.assertEqual(tree.nodes[ring[5]].ring_closures, [(1, 0)])
        self.assertTrue(all(len(node.children) <= 1 for node in tree.nodes.values()))

    def test_implicit_hydrogens_have_no_nodes(self):
        graph = MolGraph()
        ring = build_benzene_kekule(graph)
        view = MolView(graph)
        tree = build_smiles_tree(view, build_ring_context(view))

        self.assertEqual(sorted(tree.nodes), sorted(ring))
        self.assertTrue(all(node.hydrogen_count == 1 for node in tree.nodes.values()))

    def test_every_ring_number_used_twice(self):
        graph = MolGraph()
        atoms = [graph.add_atom("C") for _ in range(10)]
        edges = [
            (0, 1), (1, 2), (2, 3), (3, 8), (8, 9), (9, 0),
            (8, 4), (4, 5), (5, 6), (6, 7), (7, 9),
        ]
        for a, b in edges:
            graph.add_bond(atoms[a].id, atoms[b].id)
        view = MolView(graph)
        tree = build_smiles_tree(view, build_ring_context(view))

        usage = ring_number_usage(tree)
        self.assertEqual(set(usage), {1, 2})
        self.assertTrue(all(count == 2 for count in usage.values()))

    def test_cages_stay_in_one_fragment(self):
        """Verifica que adamantano y cubano forman un único árbol.

        Cada enlace fuera del árbol recibe un número propio, usado en
        exactamente dos nodos: 3 cierres para adamantano y 5 para cubano.

        """
        for builder, heavy_atoms, closures in ((build_adamantane, 10, 3), (build_cubane, 8, 5)):
            with self.subTest(cage=builder.__name__):
                graph = MolGraph()
                builder(graph)
                view = MolView(graph)
                tree = build_smiles_tree(view, build_ring_context(view))

                self.assertEqual(len(tree), 1)
                self.assertEqual(len(tree.nodes), heavy_atoms)
                usage = ring_number_usage(tree)
                self.assertEqual(set(usage), set(range(1, closures + 1)))
                self.assertTrue(all(count == 2 for count in usage.values()))

    def test_redundant_rings_never_split_the_tree(self):
        # Las seis caras del cubo: una más que el rango de ciclos.
        graph = MolGraph()
        ids = build_cubane(graph)
        faces = cube_faces(ids)
        atom_rings = {}
        for face in faces:
            for atom_id in face:
                atom_rings.setdefault(atom_id, []).append(face)
        view = MolView(graph)

        tree = build_smiles_tree(view, RingContext(rings=faces, atom_rings=atom_rings))

        self.assertEqual(len(tree), 1)
        usage = ring_number_usage(tree)
        self.assertEqual(set(usage), {1, 2, 3, 4, 5})
        self.assertTrue(all(count == 2 for count in usage.values()))

    def test_disconnected_fragments_restart_ring_numbers(self):
        graph = MolGraph()
        for _ in range(2):
            atoms = [graph.add_atom("C") for _ in range(3)]
            for i in range(3):
                graph.add_bond(atoms[i].id, atoms[(i + 1) % 3].id)
        view = MolView(graph)
        tree = build_smiles_tree(view, build_ring_context(view))

        self.assertEqual(len(tree), 2)
        for root in tree.roots:
            self.assertEqual(root.ring_closures, [(1, 1)])

    def test_unperceived_cycle_is_still_closed(self):
        graph = MolGraph()
        atoms = [graph.add_atom("C") for _ in range(3)]
        for i in range(3):
            graph.add_bond(atoms[i].id, atoms[(i + 1) % 3].id)
        view = MolView(graph)
        tree = build_smiles_tree(view, RingContext(rings=[], atom_rings={}))

        root = tree.roots[0]
        self.assertEqual([child.atom_id for child in root.children], [atoms[1].id, atoms[2].id])
        self.assertEqual(tree.nodes[atoms[1].id].ring_closures, [(1, 1)])
        self.assertEqual(tree.nodes[atoms[2].id].ring_closures, [(1, 0)])

    def test_branch_children_follow_neighbor_order(self):
        graph = MolGraph()
        center = graph.add_atom("C")
        o = graph.add_atom("O")
        n = graph.add_atom("N")
        cl = graph.add_atom("Cl")
        for other in (o, n, cl):
            graph.add_bond(center.id, other.id)
        view = MolView(graph)
        tree = build_smiles_tree(view, build_ring_context(view))

        root = tree.roots[0]
        self.assertEqual([child.atom_id for child in root.children], [o.id, n.id, cl.id])
        self.assertEqual([child.bond_order for child in root.children], [1, 1, 1])

    def test_lone_hydrogen_becomes_root(self):
        graph = MolGraph()
        graph.add_atom("H", charge=1)
        view = MolView(graph)
        tree = build_smiles_tree(view, build_ring_context(view))

        self.assertEqual(len(tree), 1)
        self.assertEqual(tree.roots[0].hydrogen_count, 0)


if __name__ == "__main__":
    unittest.main()

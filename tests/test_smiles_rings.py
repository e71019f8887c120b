import os
import sys
import unittest

sys.path.append(os.path.abspath(os.path.join(os.path.dirname(__file__), "..", "src")))

from core.model import MolGraph
from core.molview import MolView
from smiles.rings import Ring, build_ring_context, find_rings_simple


def build_cycle(graph: MolGraph, size: int, element: str = "C") -> list[int]:
    atoms = [graph.add_atom(element) for _ in range(size)]
    for i in range(size):
        graph.add_bond(atoms[i].id, atoms[(i + 1) % size].id)
    return [atom.id for atom in atoms]


def build_adamantane(graph: MolGraph) -> list[int]:
    """Cuatro cabezas de puente unidas de dos en dos por un CH2."""
    bridgeheads = [graph.add_atom("C") for _ in range(4)]
    ids = [atom.id for atom in bridgeheads]
    for i in range(4):
        for j in range(i + 1, 4):
            methylene = graph.add_atom("C")
            graph.add_bond(bridgeheads[i].id, methylene.id)
            graph.add_bond(methylene.id, bridgeheads[j].id)
            ids.append(methylene.id)
    return ids


def build_cubane(graph: MolGraph) -> list[int]:
    """Vértices del cubo numerados en binario; aristas entre vecinos de un bit."""
    atoms = [graph.add_atom("C") for _ in range(8)]
    for i in range(8):
        for bit in (1, 2, 4):
            j = i ^ bit
            if i < j:
                graph.add_bond(atoms[i].id, atoms[j].id)
    return [atom.id for atom in atoms]


class RingRecordTest(unittest.TestCase):
    def test_membership_and_bonds(self):
        ring = Ring((3, 1, 2))

        self.assertEqual(len(ring), 3)
        self.assertIn(1, ring)
        self.assertNotIn(4, ring)
        self.assertEqual(list(ring), [3, 1, 2])
        self.assertTrue(ring.contains_bond(1, 2))
        self.assertFalse(ring.contains_bond(1, 4))

    def test_equal_rings_hash_alike(self):
        self.assertEqual(Ring((1, 2, 3)), Ring((1, 2, 3)))
        self.assertEqual(len({Ring((1, 2, 3)), Ring((1, 2, 3))}), 1)


class FindRingsTest(unittest.TestCase):
    def test_chain_has_no_rings(self):
        graph = MolGraph()
        c1 = graph.add_atom("C")
        c2 = graph.add_atom("C")
        graph.add_bond(c1.id, c2.id)
        view = MolView(graph)

        self.assertEqual(find_rings_simple(view), [])

    def test_ring_atoms_are_in_cyclic_order(self):
        graph = MolGraph()
        ids = build_cycle(graph, 6)
        for atom_id in ids:
            h = graph.add_atom("H")
            graph.add_bond(atom_id, h.id)
        view = MolView(graph)

        rings = find_rings_simple(view)

        self.assertEqual(len(rings), 1)
        ring = rings[0].atoms
        self.assertEqual(set(ring), set(ids))
        for i, atom_id in enumerate(ring):
            self.assertGreater(view.bond_order_between(atom_id, ring[(i + 1) % len(ring)]), 0)

    def test_smaller_rings_come_first(self):
        graph = MolGraph()
        build_cycle(graph, 6)
        small = build_cycle(graph, 3)
        rings = find_rings_simple(MolView(graph))

        self.assertEqual([len(ring) for ring in rings], [3, 6])
        self.assertEqual(set(rings[0]), set(small))

    def test_fused_rings_share_atoms(self):
        graph = MolGraph()
        atoms = [graph.add_atom("C") for _ in range(10)]
        edges = [
            (0, 1), (1, 2), (2, 3), (3, 8), (8, 9), (9, 0),
            (8, 4), (4, 5), (5, 6), (6, 7), (7, 9),
        ]
        for a, b in edges:
            graph.add_bond(atoms[a].id, atoms[b].id)
        ctx = build_ring_context(MolView(graph))

        self.assertEqual(len(ctx.rings), 2)
        self.assertTrue(all(len(ring) == 6 for ring in ctx.rings))
        self.assertEqual(len(ctx.rings_of(atoms[8].id)), 2)
        self.assertEqual(len(ctx.rings_of(atoms[0].id)), 1)
        self.assertTrue(ctx.is_in_ring(atoms[9].id))

    def test_cages_keep_one_ring_per_cycle_rank(self):
        """Verifica que las jaulas no producen anillos redundantes.

        Adamantano tiene cuatro anillos de seis miembros pero solo tres son
        independientes (12 enlaces - 10 átomos + 1); el cubano tiene seis
        caras y rango 5.

        """
        graph = MolGraph()
        build_adamantane(graph)
        rings = find_rings_simple(MolView(graph))
        self.assertEqual(len(rings), 3)
        self.assertTrue(all(len(ring) == 6 for ring in rings))

        graph = MolGraph()
        build_cubane(graph)
        rings = find_rings_simple(MolView(graph))
        self.assertEqual(len(rings), 5)
        self.assertTrue(all(len(ring) == 4 for ring in rings))

    def test_ring_rank_counts_each_fragment(self):
        graph = MolGraph()
        build_cycle(graph, 6)
        build_adamantane(graph)
        graph.add_atom("Na", charge=1)

        self.assertEqual(len(find_rings_simple(MolView(graph))), 4)

    def test_substituent_is_not_in_ring(self):
        graph = MolGraph()
        ids = build_cycle(graph, 5)
        methyl = graph.add_atom("C")
        graph.add_bond(ids[0], methyl.id)
        ctx = build_ring_context(MolView(graph))

        self.assertFalse(ctx.is_in_ring(methyl.id))
        self.assertEqual(ctx.rings_of(methyl.id), [])


if __name__ == "__main__":
    unittest.main()

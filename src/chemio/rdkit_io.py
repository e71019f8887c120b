from __future__ import annotations

import logging
from typing import Dict

from core.model import BondOrder, MolGraph

try:
    from rdkit import Chem, RDLogger
except Exception:  # pragma: no cover - optional dependency at runtime
    Chem = None
    RDLogger = None

logger = logging.getLogger(__name__)


def _require_rdkit():
    if Chem is None:
        raise RuntimeError("RDKit no disponible")


def _rdkit_bond_order(bond) -> int:
    bond_type = bond.GetBondType()
    if bond_type == Chem.BondType.DOUBLE:
        return BondOrder.DOUBLE
    if bond_type == Chem.BondType.TRIPLE:
        return BondOrder.TRIPLE
    if bond_type == Chem.BondType.QUADRUPLE:
        return BondOrder.QUADRUPLE
    return BondOrder.SINGLE


def molgraph_to_rdkit_with_map(molgraph: MolGraph):
    _require_rdkit()
    rw = Chem.RWMol()
    id_map: Dict[int, int] = {}

    for atom in molgraph.atoms.values():
        rd_atom = Chem.Atom(atom.element)
        rd_atom.SetFormalCharge(atom.charge)
        if atom.isotope is not None:
            rd_atom.SetIsotope(atom.isotope)
        id_map[atom.id] = rw.AddAtom(rd_atom)

    for bond in molgraph.bonds.values():
        if bond.is_aromatic:
            rw.GetAtomWithIdx(id_map[bond.a1_id]).SetIsAromatic(True)
            rw.GetAtomWithIdx(id_map[bond.a2_id]).SetIsAromatic(True)
            bond_type = Chem.BondType.AROMATIC
        elif bond.order == BondOrder.DOUBLE:
            bond_type = Chem.BondType.DOUBLE
        elif bond.order == BondOrder.TRIPLE:
            bond_type = Chem.BondType.TRIPLE
        elif bond.order == BondOrder.QUADRUPLE:
            bond_type = Chem.BondType.QUADRUPLE
        else:
            bond_type = Chem.BondType.SINGLE

        if rw.GetBondBetweenAtoms(id_map[bond.a1_id], id_map[bond.a2_id]) is None:
            rw.AddBond(id_map[bond.a1_id], id_map[bond.a2_id], bond_type)

    return rw.GetMol(), id_map


def molgraph_to_rdkit(molgraph: MolGraph):
    mol, _ = molgraph_to_rdkit_with_map(molgraph)
    return mol


def molgraph_to_smiles(molgraph: MolGraph) -> str:
    """Canonical RDKit SMILES of a graph, hydrogens folded."""
    mol = molgraph_to_rdkit(molgraph)
    Chem.SanitizeMol(mol)
    return Chem.MolToSmiles(Chem.RemoveHs(mol), canonical=True)


def canonical_smiles(smiles: str) -> str:
    """Canonicalize a SMILES string with RDKit.

    Raises:
        ValueError: If RDKit cannot parse the string.
    """
    _require_rdkit()
    mol = Chem.MolFromSmiles(smiles)
    if mol is None:
        raise ValueError(f"SMILES inválido: {smiles!r}")
    return Chem.MolToSmiles(mol, canonical=True)


def smiles_to_molgraph(smiles: str, explicit_hydrogens: bool = True) -> MolGraph:
    _require_rdkit()
    mol = Chem.MolFromSmiles(smiles)
    if mol is None:
        raise ValueError(f"SMILES inválido: {smiles!r}")
    return rdkit_to_molgraph(mol, explicit_hydrogens=explicit_hydrogens)


def rdkit_to_molgraph(mol, explicit_hydrogens: bool = True) -> MolGraph:
    """Convert an RDKit mol into a `MolGraph` with Kekulé bond orders.

    Hydrogens are added as explicit atoms by default so the SMILES writer
    can fold them back into their heavy atoms.
    """
    _require_rdkit()
    if mol is None:
        raise ValueError("Mol inválido")
    if explicit_hydrogens:
        mol = Chem.AddHs(mol)
    mol = Chem.Mol(mol)

    kekulized = True
    RDLogger.DisableLog("rdApp.*")
    try:
        Chem.Kekulize(mol, clearAromaticFlags=True)
    except Exception as exc:
        kekulized = False
        logger.warning("Kekulization failed, keeping aromatic flags: %s", exc)
    finally:
        RDLogger.EnableLog("rdApp.*")

    graph = MolGraph()
    idx_map: Dict[int, int] = {}
    for atom in mol.GetAtoms():
        new_atom = graph.add_atom(
            atom.GetSymbol(),
            charge=atom.GetFormalCharge(),
            isotope=atom.GetIsotope() or None,
        )
        idx_map[atom.GetIdx()] = new_atom.id

    for bond in mol.GetBonds():
        graph.add_bond(
            idx_map[bond.GetBeginAtomIdx()],
            idx_map[bond.GetEndAtomIdx()],
            _rdkit_bond_order(bond),
            is_aromatic=not kekulized and bond.GetIsAromatic(),
        )
    return graph

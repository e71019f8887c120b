"""Puente opcional con RDKit para leer y verificar SMILES."""

from .rdkit_io import (
    canonical_smiles,
    molgraph_to_rdkit,
    molgraph_to_smiles,
    rdkit_to_molgraph,
    smiles_to_molgraph,
)

__all__ = [
    "canonical_smiles",
    "molgraph_to_rdkit",
    "molgraph_to_smiles",
    "rdkit_to_molgraph",
    "smiles_to_molgraph",
]

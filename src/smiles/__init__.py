"""Escritor SMILES para grafos moleculares.

Convierte un grafo molecular (posiblemente cíclico) en una cadena SMILES
lineal en una sola pasada determinista:
- Percepción de anillos y heurística de aromaticidad por anillo.
- Árbol de expansión en anchura con un cierre de anillo numerado por ciclo.
- Escritura recursiva de ramas entre paréntesis.
- Fragmentos desconectados separados por ".".

No genera SMILES canónico: el resultado depende del orden de los átomos.
"""

from .classifiers import (
    is_aromatic_atom,
    is_aromatic_ring,
    is_implicit_hydrogen,
    is_organic_atom,
    is_planar_atom,
)
from .errors import SmilesInternalError, SmilesNotSupported
from .options import WriterOptions
from .tree import SmilesNode, SmilesTree, build_smiles_tree
from .writer import write_smiles

__all__ = [
    "write_smiles",
    "WriterOptions",
    "SmilesNode",
    "SmilesTree",
    "build_smiles_tree",
    "SmilesNotSupported",
    "SmilesInternalError",
    "is_aromatic_atom",
    "is_aromatic_ring",
    "is_implicit_hydrogen",
    "is_organic_atom",
    "is_planar_atom",
]

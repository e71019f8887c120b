"""Excepciones específicas del escritor SMILES."""

from core.errors import GraphNotSupported


class SmilesNotSupported(GraphNotSupported):
    """Se lanza cuando el objeto de entrada no puede leerse como grafo."""


class SmilesInternalError(Exception):
    """Se lanza ante errores internos inesperados del escritor."""

"""Excepciones del núcleo químico."""


class GraphNotSupported(Exception):
    """Se lanza cuando un objeto no puede leerse como grafo molecular."""

"""API pública de cálculos químicos auxiliares."""

from .valence import TYPICAL_VALENCE, add_implicit_hydrogens, implicit_h_count

__all__ = [
    "implicit_h_count",
    "add_implicit_hydrogens",
    "TYPICAL_VALENCE",
]

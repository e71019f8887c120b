"""Opciones de configuración del escritor SMILES."""

from dataclasses import dataclass


@dataclass
class WriterOptions:
    """Opciones de control de la serialización."""

    # Escribir los aromáticos con enlaces explícitos y símbolos en mayúscula.
    kekulize: bool = False
    # Materializar los H implícitos (por valencia) antes de escribir.
    add_hydrogens: bool = False
    # Si es False, los fallos devuelven `fallback` en lugar de propagarse.
    raise_on_error: bool = True
    fallback: str = ""

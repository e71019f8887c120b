"""Tabla de elementos químicos usada por el modelo y el escritor SMILES.

Los símbolos se listan en orden de número atómico siguiendo las filas de la
tabla periódica; el índice (base 1) de cada símbolo es su número atómico.
"""

from __future__ import annotations

from typing import Dict, Optional

# Filas de la tabla periódica (lantánidos y actínidos intercalados en orden).
_PERIODS = [
    ["H", "He"],
    ["Li", "Be", "B", "C", "N", "O", "F", "Ne"],
    ["Na", "Mg", "Al", "Si", "P", "S", "Cl", "Ar"],
    ["K", "Ca", "Sc", "Ti", "V", "Cr", "Mn", "Fe", "Co", "Ni", "Cu", "Zn",
     "Ga", "Ge", "As", "Se", "Br", "Kr"],
    ["Rb", "Sr", "Y", "Zr", "Nb", "Mo", "Tc", "Ru", "Rh", "Pd", "Ag", "Cd",
     "In", "Sn", "Sb", "Te", "I", "Xe"],
    ["Cs", "Ba", "La", "Ce", "Pr", "Nd", "Pm", "Sm", "Eu", "Gd", "Tb", "Dy",
     "Ho", "Er", "Tm", "Yb", "Lu", "Hf", "Ta", "W", "Re", "Os", "Ir", "Pt",
     "Au", "Hg", "Tl", "Pb", "Bi", "Po", "At", "Rn"],
    ["Fr", "Ra", "Ac", "Th", "Pa", "U", "Np", "Pu", "Am", "Cm", "Bk", "Cf",
     "Es", "Fm", "Md", "No", "Lr", "Rf", "Db", "Sg", "Bh", "Hs", "Mt", "Ds",
     "Rg", "Cn", "Nh", "Fl", "Mc", "Lv", "Ts", "Og"],
]

ATOMIC_NUMBERS: Dict[str, int] = {
    symbol: index + 1
    for index, symbol in enumerate(symbol for period in _PERIODS for symbol in period)
}


def atomic_number(element: str) -> Optional[int]:
    """Devuelve el número atómico de un símbolo o `None` si no existe."""
    return ATOMIC_NUMBERS.get(element)


def is_known_element(element: str) -> bool:
    return element in ATOMIC_NUMBERS


def default_mass_number(element: str) -> Optional[int]:
    """Número másico considerado "por defecto" para un elemento.

    Se usa 1 para el hidrógeno y 2·Z para el resto, una aproximación que
    basta para decidir si un isótopo debe escribirse explícitamente.

    Args:
        element: Símbolo del elemento.

    Returns:
        Número másico por defecto o `None` si el símbolo es desconocido.
    """
    number = ATOMIC_NUMBERS.get(element)
    if number is None:
        return None
    if number == 1:
        return 1
    return number * 2

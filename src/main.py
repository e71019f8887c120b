"""Punto de entrada de línea de comandos del escritor SMILES.

Lee cadenas SMILES (mediante RDKit), reconstruye el grafo molecular con
hidrógenos explícitos y lo vuelve a escribir con el escritor propio. Sirve
para inspeccionar el orden de recorrido y los cierres de anillo generados.
"""

import argparse
import logging
import os
import sys

# Aseguramos que Python encuentre los módulos dentro de `src` al ejecutar
# el archivo directamente.
sys.path.append(os.path.dirname(os.path.abspath(__file__)))

from chemio.rdkit_io import smiles_to_molgraph
from smiles import WriterOptions, write_smiles

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Reescribe SMILES recorriendo el grafo molecular"
    )
    parser.add_argument(
        "smiles",
        nargs="*",
        help="Cadenas SMILES de entrada (si se omiten, se leen de stdin)",
    )
    parser.add_argument(
        "--kekulize",
        action="store_true",
        help="Escribir enlaces aromáticos explícitos en forma de Kekulé",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Mostrar el registro de depuración del recorrido",
    )
    return parser


def main(argv=None) -> int:
    """
    Procesa los argumentos y escribe un SMILES por línea en stdout.

    Args:
        argv: Argumentos de línea de comandos (por defecto `sys.argv[1:]`).

    Returns:
        0 si todas las entradas se procesaron, 1 si alguna falló.
    """
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(levelname)s - %(message)s",
    )

    inputs = args.smiles or [line.strip() for line in sys.stdin if line.strip()]
    opts = WriterOptions(kekulize=args.kekulize)
    status = 0
    for smiles in inputs:
        try:
            graph = smiles_to_molgraph(smiles)
        except (ValueError, RuntimeError) as exc:
            logger.error("%s", exc)
            status = 1
            continue
        print(write_smiles(graph, opts))
    return status


if __name__ == "__main__":
    sys.exit(main())

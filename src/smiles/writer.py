from __future__ import annotations

import logging

from chemcalc.valence import add_implicit_hydrogens
from core.errors import GraphNotSupported
from core.molview import MolView

from .classifiers import aromatic_atoms
from .errors import SmilesInternalError, SmilesNotSupported
from .options import WriterOptions
from .render import RenderContext, write_node
from .rings import build_ring_context
from .tree import SmilesTree, build_smiles_tree

logger = logging.getLogger(__name__)

FRAGMENT_SEPARATOR = "."


def write_smiles(graph, opts: WriterOptions = WriterOptions()) -> str:
    """Public entry point: serialize a molecular graph to SMILES."""
    try:
        return write_smiles_strict(graph, opts)
    except GraphNotSupported as exc:
        if not opts.raise_on_error:
            return opts.fallback
        if isinstance(exc, SmilesNotSupported):
            raise
        raise SmilesNotSupported(str(exc)) from exc
    except Exception as exc:  # pragma: no cover
        if not opts.raise_on_error:
            return opts.fallback
        raise SmilesInternalError(str(exc)) from exc


def write_smiles_strict(graph, opts: WriterOptions) -> str:
    """Build the spanning forest and join the text of every fragment."""
    if opts.add_hydrogens:
        graph = add_implicit_hydrogens(graph)
    view = MolView(graph)
    ring_ctx = build_ring_context(view)
    tree = build_smiles_tree(view, ring_ctx)
    ctx = RenderContext(view=view, aromatic=aromatic_atoms(view, ring_ctx), kekulize=opts.kekulize)
    text = render_tree(tree, ctx)
    logger.debug("Wrote %d fragment(s), %d characters", len(tree), len(text))
    return text


def render_tree(tree: SmilesTree, ctx: RenderContext) -> str:
    if not tree.roots:
        return ""
    if len(tree.roots) == 1:
        return write_node(tree.roots[0], ctx)
    return FRAGMENT_SEPARATOR.join(write_node(root, ctx) for root in tree.roots)

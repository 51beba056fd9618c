import logging
from dataclasses import dataclass
from typing import List

from ..ast import nodes
from ..errors import InternalRenderError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DeclItem:
    keyword: str     # "var ", "const ", "type " or "" for functions
    node: object
    source: str


def declaration_items(program: nodes.Program, source: str) -> List[DeclItem]:
    """Reportable top-level declarations in source order; imports are skipped."""
    items: List[DeclItem] = []
    for decl in program.decls:
        if isinstance(decl, nodes.ImportGroup):
            continue
        if isinstance(decl, (nodes.VarGroup, nodes.ConstGroup, nodes.TypeGroup)):
            for spec in decl.specs:
                items.append(DeclItem(decl.keyword + " ", spec, source))
        elif isinstance(decl, nodes.FuncDecl):
            items.append(DeclItem("", decl, source))
        else:
            raise InternalRenderError(source, decl, "unknown declaration")
    logger.debug("%s: %d declarations", source, len(items))
    return items

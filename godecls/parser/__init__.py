import logging
from functools import lru_cache

from lark import Lark
from lark.exceptions import (UnexpectedCharacters, UnexpectedEOF, UnexpectedInput,
                             UnexpectedToken, VisitError)

from ..errors import GoSyntaxError
from .semicolons import GoSemicolons
from .transform import GoTransformer

logger = logging.getLogger(__name__)

NO_FILENAME = "<no filename>"


@lru_cache(maxsize=1)
def go_parser() -> Lark:
    return Lark.open(
        "go.lark",
        rel_to=__file__,
        parser="earley",
        lexer="basic",
        postlex=GoSemicolons(),
        propagate_positions=True,
        maybe_placeholders=True,
    )


def _decode(src, source):
    if isinstance(src, str):
        text = src
    else:
        try:
            text = src.decode("utf-8")
        except UnicodeDecodeError as e:
            line = src[:e.start].count(b"\n") + 1
            col = e.start - (src.rfind(b"\n", 0, e.start) + 1) + 1
            raise GoSyntaxError(source, line, col, "illegal UTF-8 encoding") from None
    if text.startswith("\ufeff"):
        text = text[1:]
    return text


def _found(tok) -> str:
    if tok is None or tok.type == "$END":
        return "EOF"
    if tok.type == "_SEMI" and str(tok) == "\n":
        return "newline"
    return f"'{tok}'"


def _end_position(text):
    line = text.count("\n") + 1
    col = len(text) - (text.rfind("\n") + 1) + 1
    return line, col


def _syntax_error(e: UnexpectedInput, text, source) -> GoSyntaxError:
    if isinstance(e, UnexpectedCharacters):
        ch = text[e.pos_in_stream] if 0 <= e.pos_in_stream < len(text) else ""
        return GoSyntaxError(source, e.line, e.column,
                             f"illegal character U+{ord(ch):04X} '{ch}'" if ch else "illegal character")
    if isinstance(e, UnexpectedEOF):
        line, col = _end_position(text)
        return GoSyntaxError(source, line, col, "unexpected EOF")
    if isinstance(e, UnexpectedToken):
        tok = e.token
        if tok.type == "$END":
            line, col = _end_position(text)
        else:
            line, col = tok.line, tok.column
        return GoSyntaxError(source, line, col, f"unexpected {_found(tok)}")
    line = getattr(e, "line", -1)
    if line is None or line < 1:
        line, col = _end_position(text)
    else:
        col = e.column
    return GoSyntaxError(source, line, col, "syntax error")


def parse_go(src, source=NO_FILENAME):
    """Parse one Go source unit (bytes or str) into a nodes.Program.

    Raises GoSyntaxError for anything that does not parse; lark's own
    exceptions do not escape.
    """
    text = _decode(src, source)
    try:
        tree = go_parser().parse(text)
    except UnexpectedInput as e:
        raise _syntax_error(e, text, source) from None
    try:
        prog = GoTransformer(text, source).transform(tree)
    except VisitError as e:
        if isinstance(e.orig_exc, GoSyntaxError):
            raise e.orig_exc from None
        raise
    logger.debug("parsed %s: package %s, %d top-level declarations",
                 source, prog.package, len(prog.decls))
    return prog

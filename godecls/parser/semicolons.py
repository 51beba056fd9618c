from lark import Token
from lark.lark import PostLex

# a line ending in one of these gets a semicolon at the newline
_TERMINATING_TYPES = {"NAME", "NUMBER", "STRING", "RAW_STRING", "CHAR"}
_TERMINATING_VALUES = {"break", "continue", "fallthrough", "return",
                       "++", "--", ")", "]", "}"}


def _terminates(tok) -> bool:
    if tok is None:
        return False
    if tok.type == "_SEMI":
        return False
    return tok.type in _TERMINATING_TYPES or str(tok) in _TERMINATING_VALUES


class GoSemicolons(PostLex):
    """Go's automatic semicolon insertion, as a lark post-lexer.

    Newlines (and block comments spanning lines) become ``_SEMI`` tokens when
    the last token on the line could end a statement; otherwise they are
    dropped together with all comments. Inserted semicolons carry the text
    ``"\\n"`` so parse errors can say "newline".
    """

    always_accept = ("NEWLINE", "LINE_COMMENT", "BLOCK_COMMENT")

    def process(self, stream):
        last = None
        for tok in stream:
            if tok.type == "NEWLINE" or (tok.type == "BLOCK_COMMENT" and "\n" in tok):
                if _terminates(last):
                    last = Token.new_borrow_pos("_SEMI", "\n", tok)
                    yield last
                continue
            if tok.type in ("LINE_COMMENT", "BLOCK_COMMENT"):
                continue
            last = tok
            yield tok
        # EOF acts as a final newline
        if _terminates(last):
            yield Token.new_borrow_pos("_SEMI", "\n", last)

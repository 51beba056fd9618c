"""Canonical (gofmt-style) rendering of declaration nodes.

The printer works on strings: every helper returns the text of a node as it
would appear starting at the beginning of a line, continuation lines indented
relative to that line. Source line numbers carried by the nodes decide where
line breaks are kept, the way go/printer keeps them.
"""
import re
from typing import List

from ..ast import nodes
from ..errors import InternalRenderError

PRECEDENCE = {
    "||": 1,
    "&&": 2,
    "==": 3, "!=": 3, "<": 3, "<=": 3, ">": 3, ">=": 3,
    "+": 4, "-": 4, "|": 4, "^": 4,
    "*": 5, "/": 5, "%": 5, "<<": 5, ">>": 5, "&": 5, "&^": 5,
}
LOWEST_PREC = 0
UNARY_PREC = 6
HIGHEST_PREC = 7

# single-line limits used by go/printer
MAX_FUNC_ONE_LINE = 100
MAX_FIELD_ONE_LINE = 30
MAX_ONE_LINE_STMTS = 5

# operator -> following characters that would fuse into another token
_COMBINES = {"+": "+", "-": "-", "/": "*", "<": "-<", "&": "&^"}


def _indent(text: str) -> str:
    first, *rest = text.split("\n")
    return "\n".join([first] + [("\t" + l) if l else l for l in rest])

def _join(op: str, operand: str) -> str:
    if operand and operand[0] in _COMBINES.get(op, ""):
        return op + " " + operand
    return op + operand

def _reduce_depth(depth: int) -> int:
    return max(1, depth - 1)

def _diff_prec(x, prec: int) -> int:
    if not isinstance(x, nodes.BinaryExpr) or prec != PRECEDENCE[x.op]:
        return 1
    return 0

def _walk_binary(e):
    has4 = has5 = False
    max_problem = 0
    prec = PRECEDENCE[e.op]
    if prec == 4:
        has4 = True
    elif prec == 5:
        has5 = True

    l = e.x
    if isinstance(l, nodes.BinaryExpr) and not PRECEDENCE[l.op] < prec:
        h4, h5, mp = _walk_binary(l)
        has4, has5, max_problem = has4 or h4, has5 or h5, max(max_problem, mp)

    r = e.y
    if isinstance(r, nodes.BinaryExpr):
        if not PRECEDENCE[r.op] <= prec:
            h4, h5, mp = _walk_binary(r)
            has4, has5, max_problem = has4 or h4, has5 or h5, max(max_problem, mp)
    elif isinstance(r, nodes.StarExpr):
        if e.op == "/":  # `*/`
            max_problem = 5
    elif isinstance(r, nodes.UnaryExpr):
        pair = e.op + r.op
        if pair in ("/*", "&&", "&^"):
            max_problem = 5
        elif pair in ("++", "--"):
            max_problem = max(max_problem, 4)
    return has4, has5, max_problem

def _cutoff(e, depth: int) -> int:
    has4, has5, max_problem = _walk_binary(e)
    if max_problem > 0:
        return max_problem + 1
    if has4 and has5:
        return 5 if depth == 1 else 4
    return 6 if depth == 1 else 4

def _strip_parens(x):
    while isinstance(x, nodes.ParenExpr):
        x = x.x
    return x

def _is_type_elem(x) -> bool:
    if isinstance(x, (nodes.ArrayType, nodes.StructType, nodes.FuncType,
                      nodes.InterfaceType, nodes.MapType, nodes.ChanType)):
        return True
    if isinstance(x, nodes.BinaryExpr):
        return _is_type_elem(x.x) or _is_type_elem(x.y)
    if isinstance(x, nodes.UnaryExpr):
        return x.op == "~"
    if isinstance(x, nodes.ParenExpr):
        return _is_type_elem(x.x)
    return False

def _combines_with_name(x) -> bool:
    # [P *T] would read as the array length P*T without a trailing comma
    if isinstance(x, nodes.StarExpr):
        return not _is_type_elem(x.x)
    if isinstance(x, nodes.BinaryExpr):
        return _combines_with_name(x.x) and not _is_type_elem(x.y)
    return False


def normalized_number(lit: str) -> str:
    """Number literal spelling as go/printer normalizes it."""
    if len(lit) < 2:
        return lit
    prefix = lit[:2]
    if prefix in ("0X", "0x"):
        x = "0x" + lit[2:]
        i = x.rfind("P")
        if i >= 0:
            x = x[:i] + "p" + x[i + 1:]
        return x
    if prefix in ("0O", "0B"):
        return prefix.lower() + lit[2:]
    if prefix in ("0o", "0b"):
        return lit
    x = lit
    i = x.rfind("E")
    if i >= 0:
        return x[:i] + "e" + x[i + 1:]
    if x.endswith("i") and not any(c in x for c in ".e"):
        x = x.lstrip("0_")
        if x == "i":
            x = "0i"
    return x


# --- function bodies (kept as source text) ---

_BODY_TOKEN = re.compile(
    r'"(?:[^"\\\n]|\\.)*"|\'(?:[^\'\\\n]|\\.)*\'|`[^`]*`|//[^\n]*|/\*[\s\S]*?\*/'
    r'|[{}()\[\];\n]|[^"\'`/{}()\[\];\n]+|/'
)
_OPENERS = "{(["
_CLOSERS = "})]"

def _statements(text: str) -> List[str]:
    """Split body text at top-level semicolons and newlines."""
    stmts, cur, depth = [], [], 0
    for m in _BODY_TOKEN.finditer(text):
        tok = m.group(0)
        if tok in _OPENERS:
            depth += 1
        elif tok in _CLOSERS:
            depth -= 1
        elif tok in (";", "\n") and depth <= 0:
            stmt = "".join(cur).strip()
            if stmt or (tok == "\n" and stmts and stmts[-1]):
                stmts.append(stmt)
            cur = []
            continue
        elif tok.startswith("//"):
            continue
        cur.append(tok)
    stmt = "".join(cur).strip()
    if stmt:
        stmts.append(stmt)
    while stmts and not stmts[-1]:
        stmts.pop()
    return stmts

def _body_lines(text: str) -> List[str]:
    """Re-indent multi-line body text by bracket depth, one tab per level."""
    out, depth = [], 0
    for raw in text.split("\n"):
        line = raw.strip()
        if not line:
            if out and out[-1]:
                out.append("")
            continue
        level = depth
        if line[0] in _CLOSERS:
            level -= 1
        elif line.startswith(("case ", "default:")):
            level -= 1
        for m in _BODY_TOKEN.finditer(line):
            tok = m.group(0)
            if tok in _OPENERS:
                depth += 1
            elif tok in _CLOSERS:
                depth -= 1
        out.append("\t" * max(level, 0) + line)
    while out and not out[-1]:
        out.pop()
    return out

def _align(rows) -> List[str]:
    """Tabwriter-style column alignment (padding 1, empty columns dropped).

    Each row is a list of cells; every cell but the last is padded so that
    cells of consecutive rows line up. A None row breaks the column blocks
    and produces no output.
    """
    widths = [[0] * (len(r) - 1) if r is not None else [] for r in rows]

    def fmt(lo, hi, col):
        i = lo
        while i < hi:
            if rows[i] is None or len(rows[i]) - 1 <= col:
                i += 1
                continue
            j = i
            while j < hi and rows[j] is not None and len(rows[j]) - 1 > col:
                j += 1
            w = max(len(rows[k][col]) for k in range(i, j))
            w = w + 1 if w > 0 else 0
            for k in range(i, j):
                widths[k][col] = w
            fmt(i, j, col + 1)
            i = j

    fmt(0, len(rows), 0)
    out = []
    for r, ws in zip(rows, widths):
        if r is None:
            continue
        out.append("".join(c.ljust(w) for c, w in zip(r, ws)) + r[-1])
    return out


class Printer:
    def __init__(self, source="<no filename>"):
        self.source = source

    def node(self, n) -> str:
        if isinstance(n, nodes.ValueSpec):
            return self.value_spec(n)
        if isinstance(n, nodes.TypeSpec):
            return self.type_spec(n)
        if isinstance(n, nodes.FuncDecl):
            return self.func_decl(n)
        if isinstance(n, nodes.ImportSpec):
            return (n.name + " " if n.name else "") + n.path
        return self.expr(n)

    # --- specs and declarations ---

    def value_spec(self, s) -> str:
        out = self._ident_list(s.names)
        if s.type is not None:
            out += " " + self.expr(s.type)
        if s.values:
            out += " = " + self._expr_list(s.values, 1)
        return out

    def type_spec(self, s) -> str:
        out = s.name.name
        if s.type_params is not None:
            out += self._parameters(s.type_params, "[", "]")
        out += " "
        if s.assign:
            out += "= "
        return out + self.expr(s.type)

    def func_decl(self, d) -> str:
        out = "func "
        if d.recv is not None:
            out += self._parameters(d.recv, "(", ")") + " "
        out += d.name.name + self._signature(d.type)
        if d.body is not None:
            # declared functions always show their body block expanded
            out += " " + self._block(d.body)
        return out

    # --- expressions ---

    def expr(self, x) -> str:
        return self.expr1(x, LOWEST_PREC, 1)

    def _expr0(self, x, depth) -> str:
        return self.expr1(x, LOWEST_PREC, depth)

    def expr1(self, x, prec1: int, depth: int) -> str:
        if isinstance(x, nodes.BinaryExpr):
            depth = max(depth, 1)
            return self._binary(x, prec1, _cutoff(x, depth), depth)
        if isinstance(x, nodes.Ident):
            return x.name
        if isinstance(x, nodes.BasicLit):
            if x.kind == "NUMBER":
                return normalized_number(x.value)
            return x.value
        if isinstance(x, nodes.KeyValueExpr):
            return self.expr(x.key) + ": " + self.expr(x.value)
        if isinstance(x, nodes.StarExpr):
            if UNARY_PREC < prec1:
                return "(*" + self.expr(x.x) + ")"
            return _join("*", self.expr(x.x))
        if isinstance(x, nodes.UnaryExpr):
            if UNARY_PREC < prec1:
                return "(" + self.expr(x) + ")"
            return _join(x.op, self.expr1(x.x, UNARY_PREC, depth))
        if isinstance(x, nodes.ParenExpr):
            if isinstance(x.x, nodes.ParenExpr):
                return self._expr0(x.x, depth)
            return "(" + self._expr0(x.x, _reduce_depth(depth)) + ")"
        if isinstance(x, nodes.SelectorExpr):
            return self.expr1(x.x, HIGHEST_PREC, depth) + "." + x.sel.name
        if isinstance(x, nodes.TypeAssertExpr):
            return self.expr1(x.x, HIGHEST_PREC, depth) + ".(" + self.expr(x.type) + ")"
        if isinstance(x, nodes.IndexExpr):
            return self._index(x, depth)
        if isinstance(x, nodes.SliceExpr):
            return self._slice(x, depth)
        if isinstance(x, nodes.CallExpr):
            return self._call(x, depth)
        if isinstance(x, nodes.CompositeLit):
            typ = self.expr1(x.type, HIGHEST_PREC, depth) if x.type is not None else ""
            elts = self._expr_list(x.elts, 1, x.lbrace_line, x.rbrace_line, comma_term=True)
            return typ + "{" + elts + "}"
        if isinstance(x, nodes.FuncLit):
            header = "func" + self._signature(x.type)
            return header + " " + self._func_lit_body(header, x.body)
        if isinstance(x, nodes.Ellipsis):
            return "..." + (self.expr(x.elt) if x.elt is not None else "")
        if isinstance(x, nodes.ArrayType):
            length = self.expr(x.len) if x.len is not None else ""
            return "[" + length + "]" + self.expr(x.elt)
        if isinstance(x, nodes.StructType):
            return "struct" + self._field_list(x.fields, is_struct=True)
        if isinstance(x, nodes.FuncType):
            return "func" + self._signature(x)
        if isinstance(x, nodes.InterfaceType):
            return "interface" + self._field_list(x.methods, is_struct=False)
        if isinstance(x, nodes.MapType):
            return "map[" + self.expr(x.key) + "]" + self.expr(x.value)
        if isinstance(x, nodes.ChanType):
            head = {"both": "chan", "send": "chan<-", "recv": "<-chan"}[x.dir]
            return head + " " + self.expr(x.value)
        raise InternalRenderError(self.source, x)

    def _binary(self, x, prec1, cutoff, depth) -> str:
        prec = PRECEDENCE[x.op]
        if prec < prec1:
            # parentheses undo one level of depth
            return "(" + self._expr0(x, _reduce_depth(depth)) + ")"
        blank = prec < cutoff
        left = self.expr1(x.x, prec, depth + _diff_prec(x.x, prec))
        right = self.expr1(x.y, prec + 1, depth + 1)
        out = left + (" " if blank else "") + x.op
        if 0 < x.x.end_line < x.y.line:
            return out + "\n\t" + _indent(right)
        if blank:
            return out + " " + right
        return left + _join(x.op, right)

    def _index(self, x, depth) -> str:
        base = self.expr1(x.x, HIGHEST_PREC, 1)
        if len(x.indices) == 1:
            return base + "[" + self._expr0(x.indices[0], depth + 1) + "]"
        inner = self._expr_list(x.indices, depth + 1, x.x.end_line, x.end_line, comma_term=True)
        return base + "[" + inner + "]"

    def _slice(self, x, depth) -> str:
        indices = [x.low, x.high]
        if x.slice3:
            indices.append(x.max)
        needs_blanks = False
        if depth <= 1:
            present = [i for i in indices if i is not None]
            if len(present) > 1 and any(isinstance(i, nodes.BinaryExpr) for i in present):
                needs_blanks = True
        out = self.expr1(x.x, HIGHEST_PREC, 1) + "["
        for n, i in enumerate(indices):
            if n > 0:
                if indices[n - 1] is not None and needs_blanks:
                    out += " "
                out += ":"
                if i is not None and needs_blanks:
                    out += " "
            if i is not None:
                out += self._expr0(i, depth + 1)
        return out + "]"

    def _call(self, x, depth) -> str:
        if len(x.args) > 1:
            depth += 1
        fun = self.expr1(x.fun, HIGHEST_PREC, depth)
        if isinstance(x.fun, nodes.FuncType):
            # conversions to literal function types need parentheses
            fun = "(" + fun + ")"
        args = self._expr_list(x.args, depth, x.fun.end_line, x.end_line,
                               comma_term=True, ellipsis=x.ellipsis)
        return fun + "(" + args + ")"

    def _expr_list(self, items, depth, open_line=0, close_line=0,
                   comma_term=False, ellipsis=False) -> str:
        parts = []
        broke = False
        prev = open_line
        for i, x in enumerate(items):
            if 0 < prev < x.line:
                parts.append(",\n" if i else "\n")
                broke = True
            elif i:
                parts.append(", ")
            parts.append(self._expr0(x, depth))
            prev = x.end_line or x.line
        if ellipsis:
            parts.append("...")
        tail = ""
        if comma_term and items and 0 < prev < close_line:
            tail = ",\n"
            broke = True
        body = "".join(parts)
        if broke:
            body = _indent(body)
        return body + tail

    def _ident_list(self, names) -> str:
        return ", ".join(n.name for n in names)

    # --- signatures and field lists ---

    def _signature(self, ft) -> str:
        out = ""
        if ft.type_params is not None:
            out += self._parameters(ft.type_params, "[", "]")
        out += self._parameters(ft.params, "(", ")")
        res = ft.results
        if res is not None and res.fields:
            if len(res.fields) == 1 and not res.fields[0].names:
                # single anonymous result; no parentheses
                return out + " " + self.expr(_strip_parens(res.fields[0].type))
            out += " " + self._parameters(res, "(", ")")
        return out

    def _parameters(self, fl, open_tok, close_tok) -> str:
        if not fl.fields:
            return open_tok + close_tok
        parts = []
        broke = False
        prev_line = fl.opening_line
        for i, f in enumerate(fl.fields):
            needs_break = 0 < prev_line < f.line
            if i > 0:
                parts.append(",")
            if needs_break:
                parts.append("\n")
                broke = True
            elif i > 0:
                parts.append(" ")
            if f.names:
                parts.append(self._ident_list(f.names) + " ")
            parts.append(self.expr(_strip_parens(f.type)))
            prev_line = f.type.line
        tail = ""
        if 0 < prev_line < fl.closing_line:
            tail = ",\n"
            broke = True
        elif (close_tok == "]" and len(fl.fields) == 1 and len(fl.fields[0].names) == 1
              and _combines_with_name(fl.fields[0].type)):
            tail = ","
        body = "".join(parts)
        if broke:
            body = _indent(body)
        return open_tok + body + tail + close_tok

    def _is_one_line_field(self, f) -> bool:
        if f.tag is not None:
            return False
        names_size = 1 if f.names else 0
        typ = self.expr(f.type)
        type_size = len(typ) if "\n" not in typ else MAX_FIELD_ONE_LINE + 1
        return names_size + type_size <= MAX_FIELD_ONE_LINE

    def _method(self, f) -> str:
        if f.names:
            return f.names[0].name + self._signature(f.type)
        return self.expr(f.type)

    def _field_list(self, fl, is_struct) -> str:
        fields = fl.fields
        if fl.opening_line and fl.opening_line == fl.closing_line:
            if not fields:
                return "{}"
            if len(fields) == 1 and self._is_one_line_field(fields[0]):
                f = fields[0]
                if is_struct:
                    inner = (self._ident_list(f.names) + " " if f.names else "") + self.expr(f.type)
                else:
                    inner = self._method(f)
                return "{ " + inner + " }"
        if not fields:
            return " {\n}"

        rows = []
        prev_end = 0
        for f in fields:
            if prev_end and f.line - prev_end > 1:
                rows.append(None)
                rows.append([""])
            if is_struct:
                row = self._struct_row(f, sep_cells=len(fields) > 1)
            else:
                row = [self._method(f)]
            rows.append(row)
            if "\n" in row[-1]:
                rows.append(None)
            prev_end = f.end_line or f.line
        body = "\n".join(_align(rows))
        return " {\n\t" + _indent(body) + "\n}"

    def _struct_row(self, f, sep_cells) -> List[str]:
        typ = self.expr(f.type)
        tag = f.tag.value if f.tag is not None else None
        if not sep_cells:
            # a lone field is separated by blanks, not columns
            text = (self._ident_list(f.names) + " " if f.names else "") + typ
            return [text + (" " + tag if tag else "")]
        if f.names:
            row = [self._ident_list(f.names), typ]
        else:
            row = [typ, ""] if tag else [typ]
        if tag:
            row.append(tag)
        return row

    # --- bodies ---

    def _block(self, b) -> str:
        if b.lbrace_line == b.rbrace_line:
            lines = _statements(b.text)
        else:
            lines = _body_lines(b.text)
        if not lines:
            return "{\n}"
        return "{\n" + "\n".join(("\t" + l) if l else l for l in lines) + "\n}"

    def _func_lit_body(self, header: str, b) -> str:
        if b.lbrace_line == b.rbrace_line and "\n" not in header:
            stmts = _statements(b.text)
            if len(stmts) <= MAX_ONE_LINE_STMTS:
                size = sum(len(s) for s in stmts) + 2 * max(len(stmts) - 1, 0)
                if len(header) + 1 + size <= MAX_FUNC_ONE_LINE:
                    if not stmts:
                        return "{}"
                    return "{ " + "; ".join(stmts) + " }"
        return self._block(b)

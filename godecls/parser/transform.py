from lark import Transformer, v_args, Token
from ..ast import nodes
from ..errors import GoSyntaxError


def _at(node, meta):
    node.line = getattr(meta, "line", 0)
    node.end_line = getattr(meta, "end_line", node.line)
    return node

def _ident(tok):
    i = nodes.Ident(name=str(tok))
    i.line = tok.line
    i.end_line = tok.end_line
    return i

def _span(node, first, last):
    node.line = first.line
    node.end_line = last.end_line or last.line
    return node


class _Param:
    """One entry of a parameter list before Go's name/type regrouping."""
    def __init__(self, name, type_, variadic=False):
        self.name = name
        self.type = type_
        if variadic:
            self.type = _span(nodes.Ellipsis(elt=type_), type_, type_)


@v_args(inline=True, meta=True)
class GoTransformer(Transformer):
    def __init__(self, text, source="<no filename>"):
        super().__init__()
        self.text = text
        self.source = source

    # --- File ---
    def start(self, meta, package, *decls):
        return _at(nodes.Program(package=package, decls=list(decls)), meta)

    def package_clause(self, meta, name):
        return str(name)

    # --- Imports ---
    def import_single(self, meta, spec):
        return _at(nodes.ImportGroup(specs=[spec]), meta)

    def import_group(self, meta, *specs):
        return _at(nodes.ImportGroup(specs=list(specs), grouped=True), meta)

    def import_spec(self, meta, alias, path):
        return _at(nodes.ImportSpec(name=alias, path=path), meta)

    def import_alias(self, meta, tok):
        return str(tok)

    def import_path(self, meta, tok):
        return str(tok)

    # --- var / const / type ---
    def var_single(self, meta, spec):
        return _at(nodes.VarGroup(specs=[spec]), meta)

    def var_group(self, meta, *specs):
        return _at(nodes.VarGroup(specs=list(specs), grouped=True), meta)

    def var_spec_typed(self, meta, names, typ, values=None):
        return _at(nodes.ValueSpec(names=names, type=typ, values=values or []), meta)

    def var_spec_untyped(self, meta, names, values):
        return _at(nodes.ValueSpec(names=names, values=values), meta)

    def const_single(self, meta, spec):
        return _at(nodes.ConstGroup(specs=[spec]), meta)

    def const_group(self, meta, *specs):
        return _at(nodes.ConstGroup(specs=list(specs), grouped=True), meta)

    def const_spec_init(self, meta, names, typ, values):
        return _at(nodes.ValueSpec(names=names, type=typ, values=values), meta)

    def const_spec_bare(self, meta, names):
        return _at(nodes.ValueSpec(names=names), meta)

    def type_single(self, meta, spec):
        return _at(nodes.TypeGroup(specs=[spec]), meta)

    def type_group(self, meta, *specs):
        return _at(nodes.TypeGroup(specs=list(specs), grouped=True), meta)

    def type_def(self, meta, name, tparams, typ):
        return _at(nodes.TypeSpec(name=_ident(name), type=typ, type_params=tparams), meta)

    def type_alias(self, meta, name, tparams, typ):
        return _at(nodes.TypeSpec(name=_ident(name), type=typ, type_params=tparams,
                                  assign=True), meta)

    # --- Functions ---
    def func_decl(self, meta, recv, name, tparams, sig, body):
        sig.type_params = tparams
        return _at(nodes.FuncDecl(name=_ident(name), type=sig, recv=recv, body=body), meta)

    def receiver(self, meta, params):
        return params

    def signature(self, meta, params, result=None):
        if result is None or isinstance(result, nodes.FieldList):
            results = result
        else:
            # a bare result type, as in `func f() error`
            results = nodes.FieldList(fields=[_span(nodes.Field(names=[], type=result), result, result)])
            _span(results, result, result)
        return _at(nodes.FuncType(params=params, results=results), meta)

    def parameters(self, meta, *params):
        fl = nodes.FieldList(fields=self._group_params(list(params)))
        fl.opening_line = getattr(meta, "line", 0)
        fl.closing_line = getattr(meta, "end_line", 0)
        return _at(fl, meta)

    def param_type(self, meta, typ):
        return _Param(None, typ)

    def param_named(self, meta, name, typ):
        return _Param(_ident(name), typ)

    def param_variadic(self, meta, typ):
        return _Param(None, typ, variadic=True)

    def param_named_variadic(self, meta, name, typ):
        return _Param(_ident(name), typ, variadic=True)

    def _group_params(self, params):
        # (a, b int) arrives as [a, b int]; fold bare names into the next typed entry
        if not any(p.name is not None for p in params):
            return [_span(nodes.Field(names=[], type=p.type), p.type, p.type) for p in params]
        fields, pending = [], []
        for p in params:
            if p.name is None:
                if not isinstance(p.type, nodes.Ident):
                    self._mixed(p.type)
                pending.append(p.type)
                continue
            names = pending + [p.name]
            fields.append(_span(nodes.Field(names=names, type=p.type), names[0], p.type))
            pending = []
        if pending:
            self._mixed(pending[-1])
        return fields

    def _mixed(self, node):
        raise GoSyntaxError(self.source, node.line, 0, "mixed named and unnamed parameters")

    def type_params(self, meta, *tparams):
        fl = nodes.FieldList(fields=list(tparams))
        fl.opening_line = getattr(meta, "line", 0)
        fl.closing_line = getattr(meta, "end_line", 0)
        return _at(fl, meta)

    def type_param(self, meta, names, constraint):
        return _at(nodes.Field(names=names, type=constraint), meta)

    # --- Types ---
    def named_type(self, meta, name, targs=None):
        if targs is None:
            return name
        return _at(nodes.IndexExpr(x=name, indices=targs), meta)

    def ident(self, meta, tok):
        return _ident(tok)

    def qualified_ident(self, meta, pkg, sel):
        return _at(nodes.SelectorExpr(x=_ident(pkg), sel=_ident(sel)), meta)

    def type_args(self, meta, *types):
        return list(types)

    def paren_type(self, meta, typ):
        return _at(nodes.ParenExpr(x=typ), meta)

    def array_type(self, meta, length, elt):
        return _at(nodes.ArrayType(len=length, elt=elt), meta)

    def slice_type(self, meta, elt):
        return _at(nodes.ArrayType(len=None, elt=elt), meta)

    def ellipsis_array(self, meta, elt):
        return _at(nodes.ArrayType(len=_at(nodes.Ellipsis(), meta), elt=elt), meta)

    def pointer_type(self, meta, typ):
        return _at(nodes.StarExpr(x=typ), meta)

    def map_type(self, meta, key, value):
        return _at(nodes.MapType(key=key, value=value), meta)

    def chan_both(self, meta, typ):
        return _at(nodes.ChanType(dir="both", value=typ), meta)

    def chan_send(self, meta, typ):
        return _at(nodes.ChanType(dir="send", value=typ), meta)

    def chan_recv(self, meta, typ):
        return _at(nodes.ChanType(dir="recv", value=typ), meta)

    def func_type(self, meta, sig):
        return _at(sig, meta)

    def struct_type(self, meta, fields):
        return _at(nodes.StructType(fields=fields), meta)

    def interface_type(self, meta, methods):
        return _at(nodes.InterfaceType(methods=methods), meta)

    def field_block(self, meta, *fields):
        fl = nodes.FieldList(fields=list(fields))
        fl.opening_line = getattr(meta, "line", 0)
        fl.closing_line = getattr(meta, "end_line", 0)
        return _at(fl, meta)

    method_block = field_block

    def field_named(self, meta, names, typ, tag=None):
        return _at(nodes.Field(names=names, type=typ, tag=tag), meta)

    def field_embedded(self, meta, typ, tag=None):
        return _at(nodes.Field(names=[], type=typ, tag=tag), meta)

    def embedded(self, meta, typ):
        return typ

    def embedded_ptr(self, meta, typ):
        return _at(nodes.StarExpr(x=typ), meta)

    def tag(self, meta, tok):
        return _at(nodes.BasicLit(kind=tok.type, value=str(tok)), meta)

    def method_spec(self, meta, name, sig):
        return _at(nodes.Field(names=[_ident(name)], type=sig), meta)

    def embedded_elem(self, meta, typ):
        # embedded interfaces and type-set terms are unnamed fields
        return _at(nodes.Field(names=[], type=typ), meta)

    def union(self, meta, x, y):
        return _at(nodes.BinaryExpr(x=x, op="|", y=y), meta)

    def type_term(self, meta, tilde, typ):
        if tilde is None:
            return typ
        return _at(nodes.UnaryExpr(op="~", x=typ), meta)

    def tilde(self, meta, tok):
        return str(tok)

    # --- Expressions ---
    def expr_list(self, meta, *exprs):
        return list(exprs)

    def ident_list(self, meta, *names):
        return [_ident(n) for n in names]

    def binary(self, meta, x, op, y):
        return _at(nodes.BinaryExpr(x=x, op=op, y=y), meta)

    def unary_expr(self, meta, op, x):
        if op == "*":
            return _at(nodes.StarExpr(x=x), meta)
        return _at(nodes.UnaryExpr(op=op, x=x), meta)

    def _op(self, meta, tok):
        return str(tok)

    lor_op = land_op = cmp_op = sum_op = product_op = unary_op = _op

    def selector(self, meta, x, sel):
        return _at(nodes.SelectorExpr(x=x, sel=_ident(sel)), meta)

    def type_assert(self, meta, x, typ):
        return _at(nodes.TypeAssertExpr(x=x, type=typ), meta)

    def index(self, meta, x, idx):
        return _at(nodes.IndexExpr(x=x, indices=[idx]), meta)

    def index_list(self, meta, x, *indices):
        return _at(nodes.IndexExpr(x=x, indices=list(indices)), meta)

    def slice_expr(self, meta, x, low, high):
        return _at(nodes.SliceExpr(x=x, low=low, high=high), meta)

    def slice3_expr(self, meta, x, low, high, max_):
        return _at(nodes.SliceExpr(x=x, low=low, high=high, max=max_, slice3=True), meta)

    def call(self, meta, fun, args=None):
        args, ellipsis = args if args is not None else ([], False)
        return _at(nodes.CallExpr(fun=fun, args=args, ellipsis=ellipsis), meta)

    def call_args(self, meta, *parts):
        args = [p for p in parts if not (isinstance(p, Token) and p.type == "ELLIPSIS")]
        return args, len(args) != len(parts)

    def conversion(self, meta, typ, x):
        return _at(nodes.CallExpr(fun=typ, args=[x]), meta)

    def paren(self, meta, x):
        return _at(nodes.ParenExpr(x=x), meta)

    def basic_lit(self, meta, tok):
        return _at(nodes.BasicLit(kind=tok.type, value=str(tok)), meta)

    def func_lit(self, meta, sig, body):
        return _at(nodes.FuncLit(type=sig, body=body), meta)

    def composite_lit(self, meta, typ, lit):
        lit.type = typ
        return _at(lit, meta)

    def lit_value(self, meta, *elts):
        lit = nodes.CompositeLit(type=None, elts=list(elts))
        lit.lbrace_line = getattr(meta, "line", 0)
        lit.rbrace_line = getattr(meta, "end_line", 0)
        return _at(lit, meta)

    def key_value(self, meta, key, value):
        return _at(nodes.KeyValueExpr(key=key, value=value), meta)

    def block(self, meta, *_nested):
        # keep the text between the braces; statements are not parsed
        inner = self.text[meta.start_pos + 1:meta.end_pos - 1]
        b = nodes.Block(text=inner, lbrace_line=meta.line, rbrace_line=meta.end_line)
        return _at(b, meta)

from dataclasses import dataclass, field
from typing import List, Optional, Union


class Node:
    # source span, set by the transformer; 0 means unknown
    line = 0
    end_line = 0


# ---------- expressions / types ----------

@dataclass
class Ident(Node):
    name: str

@dataclass
class BasicLit(Node):
    kind: str          # NUMBER, STRING, RAW_STRING, CHAR
    value: str

@dataclass
class ParenExpr(Node):
    x: "Expr"

@dataclass
class SelectorExpr(Node):
    x: "Expr"
    sel: Ident

@dataclass
class IndexExpr(Node):
    """x[i] or, for generic instantiation, x[A, B]."""
    x: "Expr"
    indices: List["Expr"]

@dataclass
class SliceExpr(Node):
    x: "Expr"
    low: Optional["Expr"] = None
    high: Optional["Expr"] = None
    max: Optional["Expr"] = None
    slice3: bool = False

@dataclass
class TypeAssertExpr(Node):
    x: "Expr"
    type: "Expr"

@dataclass
class CallExpr(Node):
    fun: "Expr"
    args: List["Expr"] = field(default_factory=list)
    ellipsis: bool = False

@dataclass
class StarExpr(Node):
    x: "Expr"

@dataclass
class UnaryExpr(Node):
    op: str
    x: "Expr"

@dataclass
class BinaryExpr(Node):
    x: "Expr"
    op: str
    y: "Expr"

@dataclass
class KeyValueExpr(Node):
    key: "Expr"
    value: "Expr"

@dataclass
class CompositeLit(Node):
    type: Optional["Expr"]
    elts: List["Expr"] = field(default_factory=list)
    lbrace_line: int = 0
    rbrace_line: int = 0

@dataclass
class Ellipsis(Node):
    elt: Optional["Expr"] = None

@dataclass
class ArrayType(Node):
    len: Optional["Expr"]   # None for slices, Ellipsis for [...]T
    elt: "Expr"

@dataclass
class MapType(Node):
    key: "Expr"
    value: "Expr"

@dataclass
class ChanType(Node):
    dir: str    # "both", "send", "recv"
    value: "Expr"

@dataclass
class Field(Node):
    names: List[Ident]
    type: "Expr"
    tag: Optional[BasicLit] = None

@dataclass
class FieldList(Node):
    fields: List[Field] = field(default_factory=list)
    opening_line: int = 0
    closing_line: int = 0

@dataclass
class StructType(Node):
    fields: FieldList

@dataclass
class InterfaceType(Node):
    methods: FieldList

@dataclass
class FuncType(Node):
    params: FieldList
    results: Optional[FieldList] = None
    type_params: Optional[FieldList] = None

@dataclass
class Block(Node):
    """Function body kept as source text; only brace structure was checked."""
    text: str
    lbrace_line: int = 0
    rbrace_line: int = 0

@dataclass
class FuncLit(Node):
    type: FuncType
    body: Block


Expr = Union[Ident, BasicLit, ParenExpr, SelectorExpr, IndexExpr, SliceExpr,
             TypeAssertExpr, CallExpr, StarExpr, UnaryExpr, BinaryExpr,
             KeyValueExpr, CompositeLit, Ellipsis, ArrayType, MapType, ChanType,
             StructType, InterfaceType, FuncType, FuncLit]


# ---------- specs ----------

@dataclass
class ImportSpec(Node):
    name: Optional[str]
    path: str

@dataclass
class ValueSpec(Node):
    names: List[Ident]
    type: Optional[Expr] = None
    values: List[Expr] = field(default_factory=list)

@dataclass
class TypeSpec(Node):
    name: Ident
    type: Expr
    type_params: Optional[FieldList] = None
    assign: bool = False

Spec = Union[ImportSpec, ValueSpec, TypeSpec]


# ---------- declarations ----------

@dataclass
class Group(Node):
    specs: List[Spec] = field(default_factory=list)
    grouped: bool = False
    keyword = ""

@dataclass
class ImportGroup(Group):
    keyword = "import"

@dataclass
class VarGroup(Group):
    keyword = "var"

@dataclass
class ConstGroup(Group):
    keyword = "const"

@dataclass
class TypeGroup(Group):
    keyword = "type"

@dataclass
class FuncDecl(Node):
    name: Ident
    type: FuncType
    recv: Optional[FieldList] = None
    body: Optional[Block] = None

Decl = Union[ImportGroup, VarGroup, ConstGroup, TypeGroup, FuncDecl]


@dataclass
class Program(Node):
    package: str
    decls: List[Decl] = field(default_factory=list)

    @property
    def imports(self) -> List[ImportSpec]:
        return [s for d in self.decls if isinstance(d, ImportGroup) for s in d.specs]

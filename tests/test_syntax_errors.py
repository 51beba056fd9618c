import pytest

from godecls.errors import GoSyntaxError
from godecls.parser import parse_go
from .util_extract import run_extract

def test_missing_package_clause():
    with pytest.raises(GoSyntaxError) as ei:
        parse_go("var x = 1\n")
    assert (ei.value.line, ei.value.column) == (1, 1)
    assert str(ei.value).startswith("<no filename>:1:1: ")

def test_error_carries_source_name():
    with pytest.raises(GoSyntaxError) as ei:
        run_extract("package p\nvar = 1\n", "bad.go")
    assert str(ei.value).startswith("bad.go:2:")

def test_illegal_character():
    with pytest.raises(GoSyntaxError) as ei:
        parse_go("package p\nvar x = 1 @\n")
    assert ei.value.line == 2
    assert "illegal character" in ei.value.message

def test_unclosed_body():
    with pytest.raises(GoSyntaxError) as ei:
        parse_go("package p\nfunc f() {\n")
    assert str(ei.value).startswith("<no filename>:")

def test_import_after_declaration():
    with pytest.raises(GoSyntaxError):
        parse_go('package p\nvar x = 1\nimport "fmt"\n')

def test_mixed_named_and_unnamed_parameters():
    with pytest.raises(GoSyntaxError) as ei:
        parse_go("package p\nfunc f(a int, string)\n")
    assert ei.value.message == "mixed named and unnamed parameters"
    assert ei.value.line == 2

def test_invalid_utf8():
    with pytest.raises(GoSyntaxError) as ei:
        parse_go(b'package p\nvar s = "\xff"\n')
    assert ei.value.line == 2
    assert ei.value.message == "illegal UTF-8 encoding"

def test_missing_newline_between_declarations():
    with pytest.raises(GoSyntaxError) as ei:
        parse_go("package p\nvar x = 1 var y = 2\n")
    assert ei.value.line == 2

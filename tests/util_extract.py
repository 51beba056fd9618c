from godecls.codegen import render_item
from godecls.parser import NO_FILENAME, parse_go
from godecls.pipeline import extract_declarations
from godecls.semantics.filter import declaration_items

def run_extract(src_text: str, source: str = NO_FILENAME) -> str:
    return "".join(line + "\n" for line in extract_declarations(src_text, source))

def render_all(src_text: str, source: str = NO_FILENAME):
    program = parse_go(src_text, source)
    return [render_item(it) for it in declaration_items(program, source)]

def write_go(dirpath, name, text):
    p = dirpath / name
    p.write_text(text)
    return p

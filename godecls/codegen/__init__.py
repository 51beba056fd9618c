from ..errors import InternalRenderError
from .printer import Printer
from .truncate import truncate

def render_item(item) -> str:
    try:
        text = Printer(item.source).node(item.node)
    except (AttributeError, KeyError, TypeError, RecursionError) as e:
        raise InternalRenderError(item.source, item.node, str(e)) from e
    return item.keyword + text

def summaries(items):
    return [truncate(render_item(it)) for it in items]

PLACEHOLDER = "...}"


def truncate(text: str) -> str:
    """First line of a rendered declaration; a trailing `{` gets `...}`."""
    head, newline, _ = text.partition("\n")
    if newline and head.endswith("{"):
        head += PLACEHOLDER
    return head


def summarize(text: str) -> str:
    return truncate(text) + "\n"

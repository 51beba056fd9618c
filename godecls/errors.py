class GodeclsError(Exception):
    """Base for every error reported against a single source unit."""


class PathError(GodeclsError):
    def __init__(self, path, reason):
        self.path = path
        self.reason = reason
        super().__init__(f"stat {path}: {reason}")


class ReadError(GodeclsError):
    def __init__(self, path, reason, op="read"):
        self.path = path
        self.reason = reason
        super().__init__(f"{op} {path}: {reason}")


class GoSyntaxError(GodeclsError):
    def __init__(self, source, line, column, message):
        self.source = source
        self.line = line
        self.column = column
        self.message = message
        super().__init__(f"{source}:{line}:{column}: {message}")


class InternalRenderError(GodeclsError):
    def __init__(self, source, node, detail=None):
        self.source = source
        self.node = node
        kind = type(node).__name__
        msg = f"{source}: internal error: cannot render {kind}"
        if detail:
            msg += f": {detail}"
        super().__init__(msg)


def describe_os_error(exc: OSError) -> str:
    """Lower-cased strerror, the way Go spells syscall errors."""
    reason = exc.strerror or str(exc)
    return reason[:1].lower() + reason[1:]

import logging
from dataclasses import dataclass
from enum import IntEnum
from typing import List

from .codegen import summaries
from .config import RunConfig
from .errors import GodeclsError
from .parser import NO_FILENAME, parse_go
from .report import Reporter
from .semantics.filter import declaration_items
from .sources import SourceUnit, expand_paths, is_multi, stdin_unit

logger = logging.getLogger(__name__)


class Status(IntEnum):
    OK = 0
    ERROR = 2


@dataclass
class UnitResult:
    source: str
    status: Status
    lines: int = 0


def extract_declarations(src, source=NO_FILENAME) -> List[str]:
    """Summary lines (without terminators) for one unit's declarations."""
    program = parse_go(src, source)
    return summaries(declaration_items(program, source))


def process_unit(unit: SourceUnit, config: RunConfig, reporter: Reporter,
                 multi=False) -> UnitResult:
    try:
        src = unit.read()
        if config.list_only:
            logger.debug("list-only: %s", unit.name)
            reporter.finding(unit.name)
            return UnitResult(unit.name, Status.OK)
        # render everything first; a failing unit reports no lines
        lines = extract_declarations(src, unit.name)
    except GodeclsError as e:
        reporter.error(e)
        return UnitResult(unit.name, Status.ERROR)
    reporter.lines(unit.name, lines, config.show_headers(multi))
    return UnitResult(unit.name, Status.OK, len(lines))


def run(paths, config: RunConfig, reporter: Reporter, stdin=None) -> Status:
    """Process every unit named by paths (stdin when empty); worst status wins."""
    if paths:
        units = expand_paths(paths)
        multi = is_multi(paths)
    else:
        units = [stdin_unit(stdin)]
        multi = False
    status = Status.OK
    for unit in units:
        if isinstance(unit, GodeclsError):
            reporter.error(unit)
            status = Status.ERROR
            continue
        result = process_unit(unit, config, reporter, multi)
        status = max(status, result.status)
    return status

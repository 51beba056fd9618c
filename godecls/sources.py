import logging
import os
import stat
import sys
from dataclasses import dataclass
from pathlib import Path
from typing import BinaryIO, Iterable, Iterator, Optional, Union

from .errors import PathError, ReadError, describe_os_error
from .parser import NO_FILENAME

logger = logging.getLogger(__name__)

GO_SUFFIX = ".go"


@dataclass(frozen=True)
class SourceUnit:
    """One input to process: a file on disk or an already-open stream."""
    name: str
    path: Optional[Path] = None
    stream: Optional[BinaryIO] = None

    def read(self) -> bytes:
        if self.stream is not None:
            try:
                return self.stream.read()
            except OSError as e:
                raise ReadError(self.name, describe_os_error(e)) from None
        try:
            f = open(self.path, "rb")
        except OSError as e:
            raise ReadError(self.name, describe_os_error(e), op="open") from None
        with f:
            try:
                return f.read()
            except OSError as e:
                raise ReadError(self.name, describe_os_error(e)) from None


def stdin_unit(stream=None) -> SourceUnit:
    if stream is None:
        stream = sys.stdin.buffer
    return SourceUnit(NO_FILENAME, stream=stream)


def expand_paths(paths: Iterable[str]) -> Iterator[Union[SourceUnit, PathError]]:
    """Units for the given paths, in argument order.

    Directories contribute their direct `.go` children in lexical order;
    subdirectories are not entered. Paths that cannot be examined are
    yielded as PathError so the caller can report them and move on.
    """
    for p in paths:
        try:
            is_dir = stat.S_ISDIR(os.stat(p).st_mode)
        except OSError as e:
            yield PathError(p, describe_os_error(e))
            continue
        if not is_dir:
            yield SourceUnit(p, Path(p))
            continue
        try:
            with os.scandir(p) as it:
                entries = sorted(it, key=lambda e: e.name)
        except OSError as e:
            yield PathError(p, describe_os_error(e))
            continue
        for entry in entries:
            name = os.path.normpath(os.path.join(p, entry.name))
            if entry.is_dir(follow_symlinks=False):
                logger.debug("skipping subdirectory %s", name)
                continue
            if not entry.name.endswith(GO_SUFFIX):
                continue
            logger.debug("expanded %s from %s", name, p)
            yield SourceUnit(name, Path(name))


def is_multi(paths) -> bool:
    """Whether the arguments name more than one path or any directory."""
    return len(paths) > 1 or any(os.path.isdir(p) for p in paths)

from dataclasses import dataclass
from enum import Enum


class HeaderMode(Enum):
    AUTO = "auto"
    NEVER = "never"
    ALWAYS = "always"


@dataclass(frozen=True)
class RunConfig:
    list_only: bool = False
    headers: HeaderMode = HeaderMode.AUTO
    verbose: bool = False

    def show_headers(self, multi: bool) -> bool:
        """multi: more than one path was given, or a directory was."""
        if self.headers is HeaderMode.ALWAYS:
            return True
        if self.headers is HeaderMode.NEVER:
            return False
        return multi

    @classmethod
    def from_flags(cls, list_only=False, no_header=False, header=False, verbose=False):
        # -H wins over -h
        if header:
            mode = HeaderMode.ALWAYS
        elif no_header:
            mode = HeaderMode.NEVER
        else:
            mode = HeaderMode.AUTO
        return cls(list_only=list_only, headers=mode, verbose=verbose)

"""Common types and data structures for tmateboot"""

from dataclasses import dataclass
from enum import Enum, IntFlag


class ClientFlags(IntFlag):
    """Client capability and mode flags handed to the client entry point"""
    NONE = 0
    LOGIN = 0x1
    UTF8 = 0x2
    COLOURS_256 = 0x4
    CONTROL = 0x8
    CONTROL_CONTROL = 0x10

    def describe(self) -> str:
        """Render set flags as a comma separated list of names"""
        names = [flag.name.lower() for flag in ClientFlags if flag and flag in self]
        return ",".join(names) if names else "none"


class ModeKeys(Enum):
    """Key table identifiers for status-keys and mode-keys"""
    EMACS = "emacs"
    VI = "vi"


class OptionScope(Enum):
    """Which configuration tree an option lives in"""
    SERVER = "server"
    SESSION = "session"
    WINDOW = "window"


class OptionType(Enum):
    """Value types understood by the option schema"""
    STRING = "string"
    NUMBER = "number"
    FLAG = "flag"
    CHOICE = "choice"


@dataclass(frozen=True)
class DeferredOption:
    """Option captured on the command line and applied after config load"""
    name: str
    value: str

"""
sopt faults (errors raised by registration and parsing) and rendering.

Scope
- FaultCode: stable numeric identifiers for every failure the registry or the
  parser can raise. Codes are grouped by domain so logs and searches stay
  predictable.
- OptionsException: base type carrying a message plus read-only options
  (code, title, hint, input, ...). It knows how to render itself with rich.
- trigger(): opt-in entry point for host tools that prefer a rendered message
  and a non-zero exit over a traceback.

Policy
- The registry and the parser only raise. They never print, log or exit.
- Malformed int/float tokens are not wrapped: the ValueError raised by int()
  or float() reaches the caller unchanged.
- Rendering is configurable through __main__: __prog__ (header name),
  __styles__ (palette overrides) and __codes__ (code relabelling).
"""
import sys
from collections import defaultdict
from enum import IntEnum
from types import MappingProxyType

from rich.console import Console, Group
from rich.panel import Panel
from rich.text import Text

from .utils import Unset, program_name

console = Console(stderr=True)


class FaultCode(IntEnum):
    """
    canonical fault codes (stable identifiers).

    grouping
    - registration (2110x): LONG_SHORT, DUPLICATE_OPTION, DEFAULT_TYPE
    - options (2111x): UNKNOWN_OPTION, EMPTY_LONG, MISSING_ARGUMENT, UNKNOWN_TYPE
    - validation (2112x): MISSING_REQUIRED
    - commands (2113x): MISSING_FUNC
    """
    # --- registration errors ---
    LONG_SHORT                  = 21101
    DUPLICATE_OPTION            = 21102
    DEFAULT_TYPE                = 21103

    # --- option errors ---
    UNKNOWN_OPTION              = 21111
    EMPTY_LONG                  = 21112
    MISSING_ARGUMENT            = 21113
    UNKNOWN_TYPE                = 21114

    # --- end-of-scan errors ---
    MISSING_REQUIRED            = 21121

    # --- command errors ---
    MISSING_FUNC                = 21131

    def normalize(self):
        """
        return a host-normalized string for this code.

        the host can provide a __codes__ mapping in __main__ to override numeric
        ids with friendlier labels. otherwise the numeric value is returned.
        """
        return str(getattr(__import__("__main__"), "__codes__", {}).get(self, self.value))


class OptionsException(Exception):
    """
    base class for every fault raised by sopt.

    the message is the one-line description; options carries structured context
    (code, title, hint, input, ...) exposed as a read-only mapping.
    """
    code = Unset
    title = "error"

    def __init__(self, message=Unset, /, **options):
        assert isinstance(message, str | Unset)
        super().__init__(*(() if message is Unset else (message,)))
        self.message = message
        self.options = MappingProxyType({"code": self.code, "title": self.title} | options)

    @property
    def input(self):
        """the offending name or token, when there is one."""
        return self.options.get("input")

    def __rich__(self):
        main = __import__("__main__")

        styles = defaultdict(str, {
            "prog-name": "bold #E6E6F0",
            "code": "bold #00E5FF",
            "error-title": "bold #FF4DA6",
            "error-message": "#C8C8D0",
            "hint-arrow": "#9CE19C dim",
            "hint": "italic #9CE19C",
        } | getattr(main, "__styles__", {}))

        colorful = self.options.get("colorful", True)

        def text(fragment, style=""):
            if not fragment:
                return Text("")
            if not colorful:
                return Text(str(fragment))
            if isinstance(fragment, Text):
                return fragment
            return Text(str(fragment), styles[style])

        prog = program_name()
        code = self.options["code"]

        header = Text.assemble(
            "[ ",
            text(prog, "prog-name"),
            " — ",
            text(code.normalize() if isinstance(code, FaultCode) else "", "code"),
            " | ",
            text(self.options["title"].title(), "error-title"),
            " ]"
        )
        message = text(self.message if self.message is not Unset else "", "error-message")
        renders = [message]
        if hint := self.options.get("hint"):
            renders.append(Text.assemble(text(" → ", "hint-arrow"), text(hint, "hint")))

        if self.options.get("fancy", False):
            return Panel(Group(*renders), title=header, title_align="left")
        return Group(header, *renders)

    def __trigger__(self):
        console.print(self)
        sys.exit(1)

    def __replace__(self, *unused, **overrides):
        assert not unused, "positional arguments are not allowed"
        return type(self)(self.message, **{**self.options, **overrides})


class LongShortError(OptionsException):
    code = FaultCode.LONG_SHORT
    title = "invalid option name"


class DuplicateOptionError(OptionsException):
    code = FaultCode.DUPLICATE_OPTION
    title = "duplicated option"


class DefaultTypeError(OptionsException):
    code = FaultCode.DEFAULT_TYPE
    title = "invalid default"


class UnknownOptionError(OptionsException):
    code = FaultCode.UNKNOWN_OPTION
    title = "unknown option"


class EmptyLongError(OptionsException):
    code = FaultCode.EMPTY_LONG
    title = "empty long option"


class MissingArgumentError(OptionsException):
    code = FaultCode.MISSING_ARGUMENT
    title = "missing argument"


class UnknownTypeError(OptionsException):
    code = FaultCode.UNKNOWN_TYPE
    title = "unknown option type"


class MissingRequiredError(OptionsException):
    code = FaultCode.MISSING_REQUIRED
    title = "missing required option"


class MissingFuncError(OptionsException):
    code = FaultCode.MISSING_FUNC
    title = "missing command function"


def trigger(fault, /, **options):
    """
    surface a fault on stderr and exit with status 1.

    contract
    - fault must provide __trigger__ and __replace__ methods (see OptionsException).
    - options (colorful, fancy, hint, ...) are merged into the fault before rendering.
    """
    if (
        not hasattr(fault, "__trigger__") or
        not callable(fault.__trigger__) or
        not hasattr(fault, "__replace__") or
        not callable(fault.__replace__)
    ):
        raise TypeError("trigger() argument must have a __trigger__ and __replace__ methods")
    fault.__replace__(**options).__trigger__()


__all__ = (
    "OptionsException",
    "LongShortError",
    "DuplicateOptionError",
    "DefaultTypeError",
    "UnknownOptionError",
    "EmptyLongError",
    "MissingArgumentError",
    "UnknownTypeError",
    "MissingRequiredError",
    "MissingFuncError",
    "FaultCode",
    "trigger",
)

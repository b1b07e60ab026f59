"""
Optline faults (configuration errors, parse errors) and rendering.

Scope
- ConfigurationError: programmer mistakes found while the registry is being
  built (duplicate alias, descriptor without alias or action, optional slot
  before a required one). Raised eagerly, never collected.
- FaultCode: stable numeric identifiers for every user-facing parse error.
- ParseError and subclasses: bad user input. Each carries a message plus
  options (code, title, hint, token, index) and knows how to render itself
  through rich.
- ParseExit: the group of parse errors of one failed run, rendered together
  with the usage text.
- trigger(): central entry point to surface a fault (print-and-exit in shell
  mode, raise otherwise).

UX goals
- Position-first messages: parse errors name the ordinal position and the
  offending token (“unknown option '--bogus' at second position”).
- One short title, one sentence body, one hint.

Integration
- The parser collects ParseError instances during a run and returns them in
  Outcome.diagnostics; Registry.run() hands them to trigger() as a ParseExit.
"""
import copy
import sys
from collections import defaultdict
from enum import IntEnum
from types import MappingProxyType

from rich.console import Console, Group
from rich.panel import Panel
from rich.text import Text

from .utils import Unset

console = Console(stderr=True)


class FaultCode(IntEnum):
    """
    canonical fault codes for parse errors (stable identifiers).

    grouping
    - options (1111x)
      • UNKNOWN_OPTION, UNEXPECTED_VALUE, MISSING_VALUE, INVALID_VALUE, INVALID_CHOICE
    - positionals (1112x)
      • UNEXPECTED_POSITIONAL, NOT_ENOUGH_POSITIONALS, MISSING_POSITIONALS
    - delegated (1113x)
      • DELEGATED_ERROR

    normalize() lets the host remap codes to its own labels through a
    __codes__ mapping in __main__.
    """
    # --- option errors (1111x) ---
    UNKNOWN_OPTION              = 11112
    UNEXPECTED_VALUE            = 11113
    MISSING_VALUE               = 11117
    INVALID_VALUE               = 11118
    INVALID_CHOICE              = 11119

    # --- positional errors (1112x) ---
    UNEXPECTED_POSITIONAL       = 11121
    NOT_ENOUGH_POSITIONALS      = 11122
    MISSING_POSITIONALS         = 11125

    # --- delegated errors (1113x) ---
    DELEGATED_ERROR             = 11131

    def normalize(self):
        """
        return a host-normalized string for this code.
        """
        return str(getattr(__import__("__main__"), "__codes__", {}).get(self, self.value))


class ConfigurationError(ValueError):
    """
    A registry was configured incorrectly by the calling program.

    These are bugs in the program, not bad user input: they are raised as soon
    as the offending descriptor or positional specification is registered.
    The offending object is kept in 'subject' for diagnostics.
    """

    def __init__(self, message, /, subject=Unset):
        super().__init__(message)
        self.subject = subject


class ParseError(Exception):
    def __init__(self, message=Unset, /, **options):
        assert isinstance(message, str | Unset)
        self.message = message
        self.options = MappingProxyType(options)

    @property
    def code(self):
        return self.options.get("code")

    @property
    def token(self):
        return self.options.get("token")

    @property
    def index(self):
        return self.options.get("index")

    @property
    def hint(self):
        return self.options.get("hint")

    def __rich__(self):
        main = __import__("__main__")
        colorful = self.options.get("colorful", False)

        styles = defaultdict(str, {
            # header parts
            "prog-name": "bold #E6E6F0",  # near-white program name
            "code": "bold #00E5FF",  # neon cyan fault code
            "error-title": "bold #FF4DA6",  # friendly pinky title

            # body
            "error-message": "#C8C8D0",  # soft light gray message
            "hint-arrow": "#9CE19C dim",  # gentle green arrow
            "hint": "italic #9CE19C",  # gentle green hint text
        } | getattr(main, "__styles__", {}))

        def styler(style):
            return styles[style] if colorful else ""

        def text(fragment, style=""):
            if not fragment:
                return Text("")
            if not colorful:
                return Text(str(fragment))
            if isinstance(fragment, Text):
                return fragment
            return Text(str(fragment), style)

        prog = text(getattr(main, "__prog__", self.options.get("prog", "")), styler("prog-name"))
        code = self.code.normalize() if isinstance(self.code, FaultCode) else ""

        header = Text.assemble(
            "[ ",
            prog,
            " — ",
            text(code, styler("code")),
            " | ",
            text(str(self.options.get("title", "error")).title(), styler("error-title")),
            " ]"
        )
        message = text(self.message, styler("error-message"))
        hint = Text.assemble(text(" → ", styler("hint-arrow")), text(self.hint, styler("hint")))

        if self.options.get("fancy", False):
            return Panel(Group(message, hint), title=header, title_align="left")

        return Group(header, message, hint)

    def __trigger__(self) -> None:
        if not self.options.get("shell", False):
            raise self from None
        console.print(self)
        sys.exit(1)

    def __replace__(self, *unused, **overrides):
        assert not unused, "unused arguments are not allowed"
        return type(self)(self.message, **{**self.options, **overrides})


class UnknownOptionError(ParseError): ...
class UnexpectedValueError(ParseError): ...
class MissingValueError(ParseError): ...
class InvalidValueError(ParseError): ...
class InvalidChoiceError(ParseError): ...
class UnexpectedPositionalError(ParseError): ...
class NotEnoughPositionalsError(ParseError): ...
class MissingPositionalError(ParseError): ...
class DelegatedOptionError(ParseError): ...


class ParseExit(ExceptionGroup[ParseError]):
    def __new__(cls, exceptions, **options):
        return super().__new__(cls, "bad exit", exceptions)

    def __init__(self, exceptions, **options):
        super().__init__("bad exit", tuple(exceptions))
        self.options = MappingProxyType(options)

    def __rich__(self):
        main = __import__("__main__")
        colorful = self.options.get("colorful", False)

        styles = defaultdict(str, {
            "prog-name": "bold #E6E6F0",  # near-white program name
            "title": "bold #FF4DA6",  # friendly pinky group title (Bad Exit)
        } | getattr(main, "__styles__", {}))

        def text(fragment, style=""):
            if not fragment:
                return Text("")
            if not colorful:
                return Text(str(fragment))
            return Text(str(fragment), styles[style])

        prog = text(getattr(main, "__prog__", self.options.get("prog", "")), "prog-name")
        header = Text.assemble("[ ", prog, " — ", text(self.message.title(), "title"), " ]")

        renders = [copy.replace(exception, colorful=colorful, prog=self.options.get("prog", "")) for exception in self.exceptions]
        if usage := self.options.get("usage"):
            renders.append(usage)

        if self.options.get("fancy", False):
            return Panel(Group(*renders), title=header, title_align="left")

        return Group(header, *renders)

    def __trigger__(self) -> None:
        if not self.options.get("shell", False):
            raise self from None
        console.print(self)
        sys.exit(1)

    def __replace__(self, *unused, **overrides):
        assert not unused, "positional arguments are not allowed"
        return type(self)(self.exceptions, **{**self.options, **overrides})


def trigger(fault, /, **options):
    """
    surface a fault with the given runtime options.

    contract
    - fault must provide __trigger__ and __replace__ methods (see ParseError).
    - options are merged into the fault via copy.replace() before triggering.
    - in shell mode the fault is printed to stderr and the process exits with
      status 1; otherwise the fault is raised.

    typical options
    - shell, fancy, colorful, prog, usage.
    """
    if (
        not hasattr(fault, "__trigger__") or
        not callable(fault.__trigger__) or
        not hasattr(fault, "__replace__") or
        not callable(fault.__replace__)
    ):
        raise TypeError("trigger() argument must have a __trigger__ and __replace__ methods")
    copy.replace(fault, **options).__trigger__()


__all__ = (
    "ConfigurationError",
    "ParseError",
    "UnknownOptionError",
    "UnexpectedValueError",
    "MissingValueError",
    "InvalidValueError",
    "InvalidChoiceError",
    "UnexpectedPositionalError",
    "NotEnoughPositionalsError",
    "MissingPositionalError",
    "DelegatedOptionError",
    "ParseExit",
    "FaultCode",
    "trigger",
)

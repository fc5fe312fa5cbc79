"""
Argot faults (errors and warnings) and rendering.

Scope
- FaultCode: canonical, stable numeric identifiers for all user-facing issues.
- ParserException / ParserWarning: base types that carry message + options and
  know how to render themselves through rich.
- trigger(): central entry point to surface any fault (respecting shell/fancy/colorful).

Integration
- The parser never raises while walking the command line; it records invalid
  parameters and the caller asks for them with ArgParser.found_invalid().
- In non-shell mode, exceptions are raised and warnings go through warnings.warn;
  in shell mode, both are rendered on the stderr console (errors then exit with 1).
- Host applications may set __prog__, __styles__ and __codes__ in __main__ to
  relabel the program, restyle the output or remap fault codes.
"""
import copy
import inspect
import sys
import warnings
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
    canonical fault codes (stable identifiers).

    grouping
    - parameter errors (211xx)
      • INVALID_PARAMETER: a name on the command line is not registered, or is
        registered with a kind that cannot be spelled that way.
    - registration warnings (221xx)
      • DUPLICATED_PARAMETER: a key was registered twice; the last one wins.
    """
    # --- parameter errors (21xxx) ---
    INVALID_PARAMETER    = 21101

    # --- warnings (22xxx) ---
    DUPLICATED_PARAMETER = 22101

    def normalize(self):
        """
        return a host-normalized string for this code.

        the host application can provide a __codes__ mapping in __main__
        to override numeric ids with friendlier labels.
        """
        return str(getattr(__import__("__main__"), "__codes__", {}).get(self, self.value))


def _render(fault, palette, titlekey):
    main = __import__("__main__")

    styles = defaultdict(str, palette | getattr(main, "__styles__", {}))
    colorful = fault.options.get("colorful", True)
    fancy = fault.options.get("fancy", False)

    def text(fragment, style=""):
        if not fragment:
            return Text("")
        if isinstance(fragment, Text):
            return fragment
        return Text(str(fragment), styles[style] if colorful else "")

    prog = text(getattr(main, "__prog__", fault.options.get("prog", "argot")), "prog-name")

    header = Text.assemble(
        "[ ",
        prog,
        " | ",
        text(code.normalize() if (code := fault.options.get("code")) else "?", "code"),
        " | ",
        text(fault.options.get("title", "").title(), titlekey),
        " ]"
    )
    message = text(str(fault).rstrip("\n"), "message")

    body = [message]
    if hint := fault.options.get("hint"):
        body.append(Text.assemble(text(" → ", "hint-arrow"), text(hint, "hint")))

    if fancy:
        return Panel(Group(*body), title=header, title_align="left")

    return Group(header, *body)


class ParserException(Exception):
    """
    Base error for user-facing parser faults.

    str(exception) is the plain message; rich renders a header with the
    program name, the fault code and the title, followed by the message and
    an optional hint.
    """

    def __init__(self, message=Unset, /, **options):
        assert isinstance(message, str | Unset)
        super().__init__(message)
        self.message = message
        self.options = MappingProxyType(options)

    def __str__(self):
        return self.message if self.message is not Unset else ""

    def __rich__(self):
        return _render(self, {
            "prog-name": "bold #E6E6F0",
            "code": "bold #00E5FF",
            "error-title": "bold #FF4DA6",
            "message": "#C8C8D0",
            "hint-arrow": "#9CE19C dim",
            "hint": "italic #9CE19C",
        }, "error-title")

    def __trigger__(self):
        if not self.options.get("shell", False):
            raise self from None
        console.print(self)
        sys.exit(1)

    def __replace__(self, *unused, **overrides):
        assert not unused, "unused arguments are not allowed"
        return type(self)(self.message, **{**self.options, **overrides})


class InvalidParameterError(ParserException):
    """
    One or more parameters on the command line were not recognized.

    `params` holds the offending keys in encounter order (duplicates kept);
    the message is the exact summary line, e.g. "Invalid parameter '-z'\\n".
    """

    @property
    def params(self):
        return tuple(self.options.get("params", ()))


class ParserWarning(Warning):
    """Base warning for parser faults; same rendering contract as ParserException."""

    def __init__(self, message=Unset, /, **options):
        assert isinstance(message, str | Unset)
        super().__init__(message)
        self.message = message
        self.options = MappingProxyType(options)

    def __str__(self):
        return self.message if self.message is not Unset else ""

    def __rich__(self):
        return _render(self, {
            "prog-name": "bold #E6E6F0",
            "code": "bold #FFB400",
            "warning-title": "bold #FFC2E0",
            "message": "#D6D6DE",
            "hint-arrow": "#B8EFAF dim",
            "hint": "italic #B8EFAF",
        }, "warning-title")

    def __trigger__(self):
        if not self.options.get("shell", False):
            return warnings.warn(self, stacklevel=len(inspect.stack()))
        console.print(self)

    def __replace__(self, *unused, **overrides):
        assert not unused, "positional arguments are not allowed"
        return type(self)(self.message, **{**self.options, **overrides})


class DuplicateParameterWarning(ParserWarning): ...


def trigger(fault, /, **options):
    """
    surface a fault with the given runtime options.

    contract
    - fault must provide __trigger__ and __replace__ methods (see base classes).
    - options are merged into the fault via copy.replace() before triggering.

    typical options
    - shell, fancy, colorful, prog, title, code, hint and any other context the
      renderer may want to show (e.g., params).
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
    "FaultCode",
    "ParserException",
    "InvalidParameterError",
    "ParserWarning",
    "DuplicateParameterWarning",
    "trigger",
)

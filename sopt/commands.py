"""
sopt command records: named sub-commands dispatched by the parser.

What this module provides
- Command: a name, a one-line help text, the group it is listed under, a
  callback taking the residual tokens, and a list of aliases.

Dispatch contract
- When the parser meets a token equal to a registered command name, it calls
  the command with every token after it and stops scanning.
- Matching is by exact name. Aliases are kept on the record and listed by the
  help renderer, but they are not looked up during dispatch.
- Whatever the callback raises propagates out of the parse unchanged; its
  return value is handed back to the caller through Options.result.

Quick start
    from sopt import Options

    options = Options()

    @options.command("moo", help="Have you mooed today?")
    def moo(tokens):
        print("moo", tokens)

    options.parse_args(["moo", "--help"])   # calls moo(["--help"])
"""
import builtins

from .faults import MissingFuncError
from .utils import *


class Command:
    """
    A sub-command record.

    Attributes (read-only)
    - name: exact dispatch name.
    - help: one-line description for help output.
    - group: name of the group the command is listed under.
    - callback: Callable[[list[str]], Any] | None.
    - aliases: alternate names, displayed only.
    """

    __introspectable__ = (
        "name",
        "help",
        "group",
        "callback",
        "aliases",
    )

    name = mirror("name")
    help = mirror("help")
    group = mirror("group")
    callback = mirror("callback")
    aliases = mirror("aliases")

    def __init__(self, name, help="", group="", callback=None, aliases=()):
        if not isinstance(name, str):
            raise TypeError("command 'name' must be a string")
        elif not (name := name.strip()):
            raise ValueError("command 'name' cannot be empty")
        if callback is not None and not builtins.callable(callback):
            raise TypeError("command 'callback' must be callable")
        if isinstance(aliases, str):
            raise TypeError("command 'aliases' must be an iterable of strings, not a string")

        sanitized = []
        for alias in aliases:
            if not isinstance(alias, str):
                raise TypeError("command aliases must be strings")
            elif alias in sanitized:
                raise ValueError("command aliases cannot contain duplicates")
            sanitized.append(alias)

        self._name = name
        self._help = help
        self._group = group
        self._callback = callback
        self._aliases = tuple(sanitized)

    def __call__(self, tokens, /):
        """
        Run the callback with the residual tokens and return its result.

        Raises MissingFuncError when no callback was bound.
        """
        if self._callback is None:
            raise MissingFuncError(
                "command %r has no function to run" % self._name,
                input=self._name,
                hint="bind a callback with set_command() or the @options.command() decorator",
            )
        return self._callback(list(tokens))

    def __repr__(self):
        return "command(%s)" % ", ".join("%s=%r" % pair for pair in self.__rich_repr__())

    def __rich_repr__(self):
        for name in type(self).__introspectable__:
            yield name, getattr(self, name)


__all__ = (
    "Command",
)

"""
sopt options registry: declare options, positionals and commands, parse, read.

What this module provides
- Options: the aggregate a tool builds once at start-up.
  • Registries: short names, long names, ordered positional slots, commands.
  • Groups: ordered, display-only containers; "default" always comes first.
  • Accessors: get_bool/get_string/get_int/get_float/get_strings.
  • Entry points: parse_args(tokens) for library use, parse() for a main().

Name spaces
- A short name is exactly one character, a long name more than one. The
  registration rules keep the two sets disjoint by length, which is why
  get_option(name) can still pick the registry from the length of the query.
  New code should say what it means: get_short(), get_long(),
  get_positional(), or get_option(name, Kind.LONG).

Quick start
    from sopt import Options, VarType

    options = Options()
    options.set_default_help()
    options.set_option("", "v", "verbose", "Show more details in output.")
    options.set_option("", "p", "port", "Port number.", 3000, type=VarType.INT)
    options.set_positional("FILES", "Files to process.", type=VarType.POS_STRING_SLICE)

    options.parse_args(["-v", "--port=8080", "a.txt", "b.txt"])
    options.get_int("port")                            # 8080
    options.get_strings("FILES", Kind.POSITIONAL)      # ["a.txt", "b.txt"]
"""
import sys
from types import MappingProxyType

from .arguments import *
from .commands import Command
from .faults import *
from . import parser
from .help import print_help
from .utils import *


class Options:
    """
    The option/command registry and the target of a parse.

    Attributes (read-only)
    - shorts, longs: name -> Option mappings (the same record may appear in both).
    - positionals: slots in registration order.
    - commands: name -> Command mapping.
    - remainder: tokens the last parse could not classify, in input order.
    - result: what the last dispatched command returned (Unset when none ran).
    - hashelp: set_default_help() was called.
    """

    def __init__(self, *, colorful=True, fancy=False):
        self._short = {}
        self._long = {}
        self._positional = []
        self._groups = {}
        self._commands = {}
        self._order = []
        self._remainder = []
        self._result = Unset
        self._hashelp = False
        self.colorful = bool(colorful)
        self.fancy = bool(fancy)
        self.add_group(DEFAULT_GROUP)

    shorts = property(lambda self: MappingProxyType(self._short))
    longs = property(lambda self: MappingProxyType(self._long))
    positionals = property(lambda self: tuple(self._positional))
    commands = property(lambda self: MappingProxyType(self._commands))
    remainder = mirror("remainder")
    result = property(lambda self: self._result)
    hashelp = mirror("hashelp")

    # ── groups ─────────────────────────────────────────────────────────────

    def group_count(self):
        """Number of groups."""
        return len(self._order)

    def add_group(self, name, /):
        """
        Add a group at the end of the display order and return it.

        Adding an existing name replaces its contents and moves it last.
        """
        if not isinstance(name, str):
            raise TypeError("add_group() argument must be a string")
        if name in self._groups:
            self._order.remove(name)
        self._groups[name] = group = Group(name)
        self._order.append(name)
        return group

    def get_group(self, name, /):
        """Return a group by name; the empty name means "default". None if absent."""
        return self._groups.get(name or DEFAULT_GROUP)

    def get_groups(self):
        """Groups in display order."""
        return [self._groups[name] for name in self._order]

    def remove_group(self, name, /):
        """Drop a group (its options stay registered, they just lose a listing)."""
        if self._groups.pop(name, None) is not None:
            self._order.remove(name)

    def _ensure_group(self, name):
        return self.get_group(name) or self.add_group(name)

    # ── registration ───────────────────────────────────────────────────────

    def set_option(self, group, short, long, help="", default=Unset, required=False, type=VarType.BOOL):
        """
        Register a named option and return its record.

        Parameters
        - group: group name ("" for the default group; created when missing).
        - short: "" or a single character.
        - long: "" or more than one character.
        - help: one-line description.
        - default: value of the declared type (omitted -> the type's zero value).
        - required: the option must appear on the command line.
        - type: VarType (BOOL when omitted).

        Raises
        - LongShortError: short longer than one character, long of length 1,
          or neither name given.
        - DuplicateOptionError: a name is already registered. One record sits
          under both its names and in a group listing, so replacing "-v"
          alone would leave the old record live under "--verbose". Commands
          have a single name and are replaced instead (see set_command()).
        - DefaultTypeError: default does not match type.
        """
        if not isinstance(short, str) or not isinstance(long, str):
            raise TypeError("set_option() names must be strings")
        if len(short) > 1:
            raise LongShortError(
                "short option %r must be one character" % short,
                input=short,
                hint="use %r as the long name instead" % short,
            )
        if len(long) == 1:
            raise LongShortError(
                "long option %r must be more than one character" % long,
                input=long,
                hint="use %r as the short name instead" % long,
            )
        if short in ("-", "=") or "=" in long or long.startswith("-"):
            raise ValueError("set_option() names cannot start with '-' or contain '='")
        if not short and not long:
            raise LongShortError(
                "option needs a short or a long name",
                hint="use set_positional() for unnamed arguments",
            )
        if short in self._short:
            raise DuplicateOptionError("short option %r is already registered" % ("-" + short), input="-" + short)
        if long in self._long:
            raise DuplicateOptionError("long option %r is already registered" % ("--" + long), input="--" + long)

        name = group or DEFAULT_GROUP
        option = Option(name, short, long, help, default, required, type)
        if short:
            self._short[short] = option
        if long:
            self._long[long] = option
        self._ensure_group(name).add_option(option)
        return option

    def set_positional(self, placeholder, help="", default=Unset, required=False, type=VarType.STRING, *, group=""):
        """
        Register the next positional slot and return its record.

        Slots are filled in registration order. A POS_STRING_SLICE slot takes
        every remaining token, so slots registered after it are never reached.
        """
        if not isinstance(placeholder, str):
            raise TypeError("set_positional() placeholder must be a string")
        elif not (placeholder := placeholder.strip()):
            raise ValueError("set_positional() placeholder cannot be empty")
        if self.get_positional(placeholder) is not None:
            raise DuplicateOptionError("positional %r is already registered" % placeholder, input=placeholder)

        name = group or DEFAULT_GROUP
        option = Option(name, "", "", help, default, required, type, placeholder=placeholder)
        self._positional.append(option)
        self._ensure_group(name).add_option(option)
        return option

    def set_command(self, name, help="", group="", callback=None, aliases=()):
        """
        Register a command and return its record.

        The command is listed under its group (created when missing). A later
        registration under the same name replaces the earlier record and its
        listing.
        """
        command = Command(name, help, group or DEFAULT_GROUP, callback, aliases)
        if (previous := self._commands.get(command.name)) is not None:
            if (listing := self.get_group(previous.group)) is not None:
                listing.remove_command(previous.name)
        self._commands[command.name] = command
        self._ensure_group(command.group).add_command(command.name)
        return command

    def command(self, name, /, help="", group="", aliases=()):
        """
        Decorator form of set_command().

            @options.command("moo", help="Have you mooed today?")
            def moo(tokens): ...
        """
        def decorator(callback, /):
            if not callable(callback):
                raise TypeError("@command() must be applied to a callable")
            self.set_command(name, help, group, callback, aliases)
            return callback
        return decorator

    def set_default_help(self):
        """Register -h/--help in the default group; parse() acts on it."""
        option = self.set_option("", "h", "help", "Print this help message")
        self._hashelp = True
        return option

    # ── lookup ─────────────────────────────────────────────────────────────

    def get_short(self, name, /):
        return self._short.get(name)

    def get_long(self, name, /):
        return self._long.get(name)

    def get_positional(self, placeholder, /):
        for option in self._positional:
            if option.placeholder == placeholder:
                return option
        return None

    def get_option(self, name, kind=Unset, /):
        """
        Return the Option for a name, or None.

        With kind omitted the registry is picked by length: one character (or
        fewer) means short, anything longer means long. Pass a Kind to address
        a name space explicitly, including positional placeholders.
        """
        match coalesce(kind, Kind.LONG if len(name) > 1 else Kind.SHORT):
            case Kind.SHORT:
                return self.get_short(name)
            case Kind.LONG:
                return self.get_long(name)
            case Kind.POSITIONAL:
                return self.get_positional(name)
        raise TypeError("get_option() kind must be a Kind")

    # ── accessors ──────────────────────────────────────────────────────────

    def _read(self, name, kind, vartype):
        option = self.get_option(name, kind)
        if option is None or option.type is not vartype:
            return vartype.zero
        return option.resolve()

    def get_bool(self, name, kind=Unset, /):
        return self._read(name, kind, VarType.BOOL)

    def get_string(self, name, kind=Unset, /):
        return self._read(name, kind, VarType.STRING)

    def get_int(self, name, kind=Unset, /):
        return self._read(name, kind, VarType.INT)

    def get_float(self, name, kind=Unset, /):
        return self._read(name, kind, VarType.FLOAT)

    def get_strings(self, name, kind=Unset, /):
        return self._read(name, kind, VarType.POS_STRING_SLICE)

    # ── parsing ────────────────────────────────────────────────────────────

    def reset(self):
        """Forget every observed value, the remainder and the last command result."""
        for option in self._iter_options():
            option.reset()
        self._remainder = []
        self._result = Unset

    def _iter_options(self):
        seen = set()
        for option in (*self._short.values(), *self._long.values(), *self._positional):
            if id(option) not in seen:
                seen.add(id(option))
                yield option

    def parse_args(self, tokens, /):
        """
        Parse a token sequence (see sopt.parser for the rules).

        Returns the dispatched command's result or None. Faults are raised;
        nothing is printed and the process is never terminated here.
        """
        self._result = Unset
        return parser.parse_args(self, tokens)

    def parse(self, emptyhelp=False, argv=Unset):
        """
        Parse the process arguments for a program's main().

        - argv defaults to sys.argv[1:].
        - With emptyhelp and no arguments, print help and exit with status 0.
        - After a successful parse, when set_default_help() was called and -h
          is set, print help and exit with status 0.
        - Faults propagate; wrap with trigger() to render them and exit 1.
        """
        tokens = list(sys.argv[1:] if argv is Unset else argv)
        if not tokens and emptyhelp:
            print_help(self)
            sys.exit(0)

        result = self.parse_args(tokens)

        if self._hashelp and self.get_bool("h"):
            print_help(self)
            sys.exit(0)

        return result

    def trigger(self, fault, /):
        """Render a fault with this registry's presentation flags and exit 1."""
        trigger(fault, colorful=self.colorful, fancy=self.fancy)

    @property
    def prog(self):
        """Program name for usage lines (__main__.__prog__ or argv[0])."""
        return program_name()

    def __repr__(self):
        return "options(groups=%r, commands=%r, remainder=%r)" % (self._order, list(self._commands), self._remainder)


__all__ = (
    "Options",
)

r"""
sopt option records and value coercion.

Overview
- VarType: closed set of value types an option can declare
  (BOOL, STRING, INT, FLOAT, POS_STRING_SLICE).
- Kind: which name space a lookup addresses (SHORT, LONG, POSITIONAL).
- decode_bool(token): truthy/falsy literal recognition shared by the parser.
- Option: one declared parameter (named option or positional slot).
- Group: ordered, purely organizational bag of options and command names.

Value model
- Every Option carries a declared type, a default and a tri-state value.
  The value is Unset until the parser observes the option; readers call
  resolve() to get the value if set, otherwise the default.
- The default is checked against the declared type when the record is built.
  An omitted default becomes the type's zero value.

Naming rules
- short: empty or exactly one character.
- long: empty or more than one character.
- placeholder: display label for positional slots (both names empty).

Example
    >>> option = Option("default", "p", "port", "Port number.", 3000, type=VarType.INT)
    >>> option.resolve()
    3000
"""
import enum
import functools
import operator
from collections.abc import Iterable

from .faults import DefaultTypeError
from .utils import *
from .utils import _detach


class VarType(enum.Enum):
    """
    Declared value type of an Option.

    POS_STRING_SLICE is only meaningful for positional slots: once reached it
    greedily absorbs every remaining token.
    """
    BOOL = "bool"
    STRING = "string"
    INT = "int"
    FLOAT = "float"
    POS_STRING_SLICE = "strings"

    @property
    def zero(self):
        """The value readers fall back to when no default applies."""
        match self:
            case VarType.BOOL:
                return False
            case VarType.STRING:
                return ""
            case VarType.INT:
                return 0
            case VarType.FLOAT:
                return 0.0
            case VarType.POS_STRING_SLICE:
                return []


class Kind(enum.Enum):
    """Name space addressed by a lookup."""
    SHORT = "short"
    LONG = "long"
    POSITIONAL = "positional"


DEFAULT_GROUP = "default"

TRUTHY = frozenset({"true", "yes", "on", "1", "t"})
FALSY = frozenset({"false", "no", "off", "0", "f"})


def decode_bool(token, /):
    """
    Recognize a boolean literal.

    Returns a (recognized, value) pair. Matching is case-insensitive against
    the truthy set {true, yes, on, 1, t} and the falsy set
    {false, no, off, 0, f}. Anything else yields (False, False).

    Examples
    - decode_bool("YES") -> (True, True)
    - decode_bool("off") -> (True, False)
    - decode_bool("maybe") -> (False, False)
    """
    lowered = token.lower()
    if lowered in TRUTHY:
        return True, True
    if lowered in FALSY:
        return True, False
    return False, False


def _sanitize_default(option, default, /):
    """
    Internal: check a default against the declared type.

    Unset becomes the type's zero value. INT rejects bool (a bool is an int in
    Python but never a sensible port number); FLOAT accepts ints and widens
    them; POS_STRING_SLICE accepts any iterable of strings except a bare string.
    """
    vartype = option.type
    if default is Unset:
        return vartype.zero

    match vartype:
        case VarType.BOOL if isinstance(default, bool):
            return default
        case VarType.STRING if isinstance(default, str):
            return default
        case VarType.INT if isinstance(default, int) and not isinstance(default, bool):
            return default
        case VarType.FLOAT if isinstance(default, int | float) and not isinstance(default, bool):
            return float(default)
        case VarType.POS_STRING_SLICE if isinstance(default, Iterable) and not isinstance(default, str):
            values = list(default)
            if all(isinstance(value, str) for value in values):
                return values

    raise DefaultTypeError(
        "default %r does not match type %s of %s" % (default, vartype.value, option.display),
        input=option.display,
        hint="pass a %s default or omit it" % vartype.value,
    )


class Option:
    """
    A declared parameter: a named option (-s/--long) or a positional slot.

    The same record is reachable from the short-name and long-name registries,
    so a value written through one is visible through the other.

    Attributes (read-only)
    - group: name of the group the option is listed under.
    - short, long: the names (either may be empty, not both for named options).
    - placeholder: display label for positional slots.
    - help: one-line description used by the help renderer.
    - default: the registered default (already type-checked).
    - required: the option must be observed during a parse.
    - type: the declared VarType.
    - value: Unset until the parser writes it.
    """

    __introspectable__ = (
        "group",
        "short",
        "long",
        "placeholder",
        "help",
        "default",
        "required",
        "type",
        "value",
    )

    group = mirror("group")
    short = mirror("short")
    long = mirror("long")
    placeholder = mirror("placeholder")
    help = mirror("help")
    default = mirror("default")
    required = mirror("required")
    type = mirror("type")
    value = mirror("value")

    def __init__(self, group, short, long, help="", default=Unset, required=False, type=VarType.BOOL, *, placeholder=""):
        if not isinstance(type, VarType):
            raise TypeError("option 'type' must be a VarType")
        for name, object in (("group", group), ("short", short), ("long", long), ("help", help), ("placeholder", placeholder)):
            if not isinstance(object, str):
                raise TypeError(f"option {name!r} must be a string")

        self._group = group
        self._short = short
        self._long = long
        self._placeholder = placeholder
        self._help = help
        self._required = bool(required)
        self._type = type
        self._value = Unset
        self._default = _sanitize_default(self, default)

    @property
    def positional(self):
        """True when the option has neither a short nor a long name."""
        return not self._short and not self._long

    @property
    def display(self):
        """
        Label used in group listings and fault messages.

        Prefers "-s", then "--long", then the placeholder (in angle brackets).
        """
        if self._short:
            return "-" + self._short
        if self._long:
            return "--" + self._long
        return "<%s>" % self._placeholder

    @property
    def isset(self):
        return self._value is not Unset

    def resolve(self):
        """
        Return the parsed value if the option was observed, else the default.
        """
        return _detach(coalesce(self._value, self._default))

    def assign(self, value, /):
        """Record a value observed by the parser (last write wins)."""
        self._value = value

    def append(self, token, /):
        """Grow a POS_STRING_SLICE value by one token."""
        if self._value is Unset:
            self._value = []
        self._value.append(token)

    def reset(self):
        """Forget the observed value so readers fall back to the default."""
        self._value = Unset

    def __repr__(self):
        return f"option({', '.join(map(functools.partial(operator.mod, '%s=%r'), self.__rich_repr__()))})"

    def __rich_repr__(self):
        for name in type(self).__introspectable__:
            yield name, getattr(self, name)


class Group:
    """
    Named, ordered bag of options and command names.

    Groups only drive help layout; they have no effect on parsing. The order
    of options and commands is registration order until sort() is called.
    """

    __introspectable__ = ("name", "options", "commands")

    name = mirror("name")
    commands = mirror("commands")

    def __init__(self, name):
        if not isinstance(name, str):
            raise TypeError("group 'name' must be a string")
        self._name = name
        self._options = []
        self._commands = []

    @property
    def options(self):
        return tuple(self._options)

    def get_options(self):
        """Return the options in their current order (a copy of the list)."""
        return list(self._options)

    def add_option(self, option, /):
        self._options.append(option)

    def add_command(self, name, /):
        self._commands.append(name)

    def remove_command(self, name, /):
        """Drop a command name from the listing (no-op when absent)."""
        if name in self._commands:
            self._commands.remove(name)

    def sort(self):
        """
        Order options by short name.

        Options without a short name sort by their long name, positional slots
        by their placeholder. The sort is stable.
        """
        self._options.sort(key=lambda option: option.short or option.long or option.placeholder)

    def __repr__(self):
        return f"group(name={self._name!r}, options={[option.display for option in self._options]!r}, commands={self._commands!r})"

    def __rich_repr__(self):
        yield "name", self._name
        yield "options", [option.display for option in self._options]
        yield "commands", list(self._commands)


__all__ = (
    # Types
    "VarType",
    "Kind",
    "Option",
    "Group",

    # Functions
    "decode_bool",

    # Constants
    "DEFAULT_GROUP",
    "TRUTHY",
    "FALSY",
)

r"""
sopt parser: classify and consume argv-like tokens against an Options registry.

Scan
- Tokens are read left to right by a cursor. A token used as the value of a
  preceding option is recorded in a consumed-index set and skipped when the
  cursor reaches it; the caller's sequence is never modified. Empty tokens
  are skipped.
- For each remaining token, in priority order:
  1. greedy slice: once a POS_STRING_SLICE slot has been reached it claims
     every later token, whatever it looks like.
  2. command: an exact command name runs its callback with every token after
     it and ends the parse (no required-option validation).
  3. long option: '--name', '--name=value' or '--name value'.
  4. short cluster: '-a', '-abc', '-p=8080', '-p 8080'. '=value' binds to the
     last character only; every character is looked up on its own.
  5. positional: the next free slot takes the token; with no slot left the
     token goes to the remainder, order preserved.
- End of scan: the remainder is published, then every required option must
  have been observed (short registry, then long, then positional slots).

Value binding
- BOOL: a truthy/falsy inline value wins; otherwise a truthy/falsy next token
  is consumed; otherwise True (bare flag).
- STRING/INT/FLOAT: a non-empty inline value wins; otherwise the next token is
  consumed whatever it looks like (so '--offset -5' works); with no next token
  the parse fails with MissingArgumentError.
- INT/FLOAT conversion failures propagate as the ValueError from int()/float().

Positional binding
- BOOL: True for a truthy literal, False for anything else (falsy and
  unrecognized tokens are not told apart).
- STRING: raw token. INT/FLOAT: converted, failures propagate.
- POS_STRING_SLICE: starts a fresh list and never releases the cursor.

Faults abort the scan immediately; nothing after the failing token is read.
"""
import difflib
from collections import deque

from .arguments import VarType, decode_bool
from .faults import *
from .utils import *


def _convert(option, token, /):
    match option.type:
        case VarType.INT:
            return int(token)
        case VarType.FLOAT:
            return float(token)
    return token


class Parser:
    """
    One scan over one token sequence.

    A Parser is single-use: build it, call run(), read the result. The
    Options registry is mutated in place (values and remainder); concurrent
    parses over the same registry must be serialized by the caller.
    """

    def __init__(self, options, tokens, /):
        self._options = options
        self._tokens = list(tokens)
        self._consumed = set()
        self._unknown = []
        self._slots = deque(options.positionals)
        self._slice = Unset
        self._index = 0

    def _lookahead(self):
        """
        Return (index, token) for the first unconsumed token after the cursor,
        or (None, None) at end of input.
        """
        for index in range(self._index + 1, len(self._tokens)):
            if index not in self._consumed:
                return index, self._tokens[index]
        return None, None

    def _unknown_option(self, input, names):
        suggestions = difflib.get_close_matches(input, names, 5)
        try:
            hint = "did you mean %r?" % suggestions[0]
        except IndexError:
            hint = "check the spelling or run with --help to see all options"
        return UnknownOptionError(
            "unknown option %r" % input,
            input=input,
            index=self._index,
            suggestions=suggestions,
            hint=hint,
        )

    def _argument(self, option, input, inline):
        """Pick the raw value for a value-bearing option (inline, then next token)."""
        if inline:
            return inline

        index, token = self._lookahead()
        if index is None:
            raise MissingArgumentError(
                "option %r expects a %s value" % (input, option.type.value),
                input=input,
                index=self._index,
                hint="pass it inline (%s=<value>) or after a space (%s <value>)" % (input, input),
            )
        self._consumed.add(index)
        return token

    def _bind(self, option, input, inline):
        """Write one occurrence of a named option (last write wins)."""
        match option.type:
            case VarType.BOOL:
                recognized, value = decode_bool(inline)
                if not recognized:
                    index, token = self._lookahead()
                    if index is not None:
                        recognized, value = decode_bool(token)
                        if recognized:
                            self._consumed.add(index)
                if not recognized:
                    value = True
                option.assign(value)
            case VarType.STRING | VarType.INT | VarType.FLOAT:
                option.assign(_convert(option, self._argument(option, input, inline)))
            case _:
                raise UnknownTypeError(
                    "option %r has a type the parser cannot bind (%s)" % (input, option.type.value),
                    input=input,
                    index=self._index,
                    hint="named options must be bool, string, int or float",
                )

    def _parse_long(self, body):
        if not body:
            raise EmptyLongError(
                "long option without a name",
                input="--",
                index=self._index,
                hint="write the option name after the dashes (for example: --name)",
            )

        name, _, inline = body.partition("=")
        if (option := self._options.get_long(name)) is None:
            raise self._unknown_option("--" + name, ["--" + key for key in self._options.longs])
        self._bind(option, "--" + name, inline)

    def _parse_short(self, body):
        cluster, _, inline = body.partition("=")
        if not cluster:
            raise self._unknown_option("-" + body, ["-" + key for key in self._options.shorts])

        last = len(cluster) - 1
        for position, char in enumerate(cluster):
            if (option := self._options.get_short(char)) is None:
                raise self._unknown_option("-" + char, ["-" + key for key in self._options.shorts])
            self._bind(option, "-" + char, inline if position == last else "")

    def _parse_positional(self, token):
        if not self._slots:
            self._unknown.append(token)
            return

        option = self._slots[0]
        match option.type:
            case VarType.BOOL:
                recognized, value = decode_bool(token)
                option.assign(recognized and value)
            case VarType.STRING | VarType.INT | VarType.FLOAT:
                option.assign(_convert(option, token))
            case VarType.POS_STRING_SLICE:
                option.assign([token])
                self._slice = option
            case _:
                raise UnknownTypeError(
                    "positional %r has a type the parser cannot bind (%s)" % (option.display, option.type.value),
                    input=option.display,
                    index=self._index,
                )
        self._slots.popleft()

    def _validate(self):
        """Fail on the first required option that was never observed."""
        for registry, prefix in ((self._options.shorts, "-"), (self._options.longs, "--")):
            for name, option in registry.items():
                if option.required and not option.isset:
                    raise MissingRequiredError(
                        "required option %r was not supplied" % (prefix + name),
                        input=prefix + name,
                        hint="add %s <value> to the command line" % (prefix + name),
                    )

        for option in self._options.positionals:
            if option.required and not option.isset:
                raise MissingRequiredError(
                    "required positional %r was not supplied" % option.display,
                    input=option.display,
                    hint="add a value for %s" % option.display,
                )

    def run(self):
        """
        Scan every token, then validate.

        Returns the matched command's result when a command ends the parse,
        otherwise None.
        """
        self._options._remainder = []
        commands = self._options.commands

        for index, token in enumerate(self._tokens):
            if index in self._consumed or not token:
                continue
            self._index = index

            if self._slice is not Unset:
                self._slice.append(token)
                continue

            if (command := commands.get(token)) is not None:
                self._options._remainder = self._unknown
                self._options._result = command(self._tokens[index + 1:])
                return self._options._result

            if token.startswith("--"):
                self._parse_long(token[2:])
            elif token.startswith("-") and len(token) > 1:
                self._parse_short(token[1:])
            else:
                self._parse_positional(token)

        self._options._remainder = self._unknown
        self._validate()
        return None


def parse_args(options, tokens, /):
    """
    Parse tokens against an Options registry.

    Parameters
    - options: Options registry (mutated in place).
    - tokens: Iterable[str], typically sys.argv[1:]. Not modified.

    Returns
    - the dispatched command's result, or None when no command matched.

    Raises
    - OptionsException subclasses for unknown/empty/missing/required faults.
    - ValueError for malformed int/float values.
    - whatever a dispatched command callback raises.
    """
    tokens = list(tokens)
    for token in tokens:
        if not isinstance(token, str):
            raise TypeError("parse_args() tokens must be strings")
    return Parser(options, tokens).run()


__all__ = (
    "Parser",
    "parse_args",
)

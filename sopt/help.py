"""
sopt help rendering (rich) and the option value dump.

Scope
- print_help(options): usage line, one section per group with its options
  and positional slots, then the group's commands with their aliases.
- show_options(options): table of every option with its type, parsed value
  and default. Meant for debugging a tool's option wiring.

Both functions only read the registry. Output goes to the given rich Console
(stdout by default). Styling follows options.colorful and options.fancy, and
the palette can be overridden from the host through __main__.__styles__.

Layout
    Usage:
      prog [OPTIONS] [COMMAND] <FILES>

    Main options:
      -h, --help            Print this help message
      -p, --port <int>      Port number. [default: 3000]

    Main commands:
      moo                   Have you mooed today? (aliases: m, mu)
"""
from collections import defaultdict

from rich.box import ROUNDED
from rich.console import Console, Group
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from .arguments import DEFAULT_GROUP, VarType
from .utils import *


def _styles():
    return defaultdict(str, {
        "usage-label": "bold #00E6FF",
        "program-name": "bold #FF4D94",
        "usage-section": "bold #36C5F0",
        "group-label": "bold #FFFFFF",
        "option-name": "bold #00E6FF",
        "flag-name": "bold #22C55E",
        "positional-name": "bold #FFD600",
        "metavar": "bold #FFD600",
        "description": "#9CA3AF",
        "default": "#737373",
        "required": "bold #EF4444",
        "command-name": "bold #36C5F0",
        "alias": "italic #9CA3AF",
        "unset": "dim",
        "panel-title": "bold #FF4D94",
    } | getattr(__import__("__main__"), "__styles__", {}))


def _texter(colorful):
    styles = _styles()

    def text(fragment, style=""):
        if fragment is None or fragment == "":
            return Text("")
        if not colorful:
            return Text(str(fragment))
        if isinstance(fragment, Text):
            return fragment
        return Text(str(fragment), styles[style])

    return text


def _names(option, text):
    """Name column for one option: '-s, --long <type>' or '<PLACEHOLDER>'."""
    if option.positional:
        return text("<%s>" % option.placeholder, "positional-name")

    style = "flag-name" if option.type is VarType.BOOL else "option-name"
    short = text("-" + option.short, style) if option.short else Text("  ")
    separator = Text(", ") if option.short and option.long else Text("  ")
    long = text("--" + option.long, style) if option.long else Text("")
    names = Text.assemble(short, separator, long)
    if option.type is not VarType.BOOL:
        names.append(" ").append(text("<%s>" % option.type.value, "metavar"))
    return names


def _description(option, text):
    description = text(option.help, "description")
    if option.required:
        description = Text.assemble(description, " ", text("(required)", "required"))
    elif option.default != option.type.zero:
        description = Text.assemble(description, " ", text("[default: %s]" % (option.default,), "default"))
    return description


def _usage(options, text):
    usage = Text.assemble(text("Usage", "usage-label"), ":\n  ", text(options.prog, "program-name"))
    if any(option for group in options.get_groups() for option in group.options if not option.positional):
        usage.append(" ").append(text("[OPTIONS]", "usage-section"))
    if options.commands:
        usage.append(" ").append(text("[COMMAND]", "usage-section"))
    for option in options.positionals:
        label = "<%s>" % option.placeholder
        if option.type is VarType.POS_STRING_SLICE:
            label += "..."
        if not option.required:
            label = "[%s]" % label
        usage.append(" ").append(text(label, "positional-name"))
    return usage


def render_help(options):
    """Build the help renderable without printing it."""
    text = _texter(options.colorful)
    renders = [_usage(options, text)]

    for group in options.get_groups():
        label = "Main" if group.name == DEFAULT_GROUP else group.name

        if group.options:
            table = Table.grid(padding=(0, 4))
            table.add_column(no_wrap=True)
            table.add_column()
            for option in group.options:
                table.add_row(Text("  ") + _names(option, text), _description(option, text))
            renders.append(Text(""))
            renders.append(Text.assemble(text("%s options" % label, "group-label"), ":"))
            renders.append(table)

        if group.commands:
            table = Table.grid(padding=(0, 4))
            table.add_column(no_wrap=True)
            table.add_column()
            for name in group.commands:
                command = options.commands.get(name)
                if command is None:
                    continue
                description = text(command.help, "description")
                if aliases := command.aliases:
                    description = Text.assemble(
                        description,
                        " ",
                        text("(aliases: %s)" % ", ".join(aliases), "alias"),
                    )
                table.add_row(Text("  ") + text(name, "command-name"), description)
            renders.append(Text(""))
            renders.append(Text.assemble(text("%s commands" % label, "group-label"), ":"))
            renders.append(table)

    renderable = Group(*renders)
    if options.fancy:
        renderable = Panel(
            renderable,
            title=Text.assemble("[ ", f"{options.prog} HELP".upper(), " ]", style=_styles()["panel-title"] if options.colorful else ""),
            title_align="left",
            box=ROUNDED,
        )
    return renderable


def print_help(options, console=None):
    """Print the help text for a registry."""
    console = console or Console()
    console.print(render_help(options))


def show_options(options, console=None):
    """
    Print every option's parsed value next to its default.

    Options reachable from both registries are listed once. Unobserved values
    show as Unset.
    """
    console = console or Console()
    text = _texter(options.colorful)

    table = Table("option", "type", "value", "default", box=ROUNDED, title="options")
    seen = set()
    for option in (*options.shorts.values(), *options.longs.values(), *options.positionals):
        if id(option) in seen:
            continue
        seen.add(id(option))
        value = option.value
        table.add_row(
            _names(option, text),
            option.type.value,
            text(repr(value), "unset") if value is Unset else repr(value),
            repr(option.default),
        )
    console.print(table)


__all__ = (
    "print_help",
    "render_help",
    "show_options",
)

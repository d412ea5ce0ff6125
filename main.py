from rich.pretty import pprint

from sopt import *

options = Options()
options.set_default_help()
options.set_option("", "v", "verbose", "Show more details in output.")
options.set_option("", "p", "port", "Port number.", 3000, type=VarType.INT)
options.set_positional("FILES", "Files to process.", type=VarType.POS_STRING_SLICE)


@options.command("moo", help="Have you mooed today?", aliases=["m"])
def moo(tokens):
    return tokens


if __name__ == '__main__':
    try:
        options.parse(emptyhelp=True)
    except OptionsException as fault:
        options.trigger(fault)
    pprint(options.get_groups())
    show_options(options)

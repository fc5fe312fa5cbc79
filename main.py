from rich.pretty import pprint

from argot import *


parser = (
    ArgParser(6)
    .add_flag("h", "help")
    .add_flag("v", "verbose")
    .add_opt("b", "bs", "512")
    .add_setting("if")
    .add_setting("of", "/dev/stdout")
)


if __name__ == '__main__':
    invoke(parser)
    pprint(parser)
    if (size := parser.get_opt("bs")) and size.isdigit():
        pprint({"bs": to_human_readable_string(int(size))})

"""
Command line entry point: `python -m scrivener [SCRIPT] [options]`.

Without SCRIPT, lines are read interactively until 'quit' or end of input.
With SCRIPT, its lines are executed in order; '--check' keeps going after
mistakes and reports all of them at the end (exit status 1 if any).
"""
import argparse
import logging
import sys

from rich.console import Console
from rich.logging import RichHandler

from . import __title__, __version__
from .editor import MemoryEditor
from .interpreter import Interpreter

PROMPT = "[bold green]scrivener[/bold green][bold white]>[/bold white] "


def _parser():
    parser = argparse.ArgumentParser(
        prog=__title__,
        description="line-oriented command interpreter for an in-memory text editor",
    )
    parser.add_argument("script", nargs="?",
                        help="file of command lines (default: interactive prompt)")
    parser.add_argument("--plain", action="store_true", help="render faults without colors")
    parser.add_argument("--fancy", action="store_true", help="render faults inside panels")
    parser.add_argument("--check", action="store_true",
                        help="collect every fault and report them together at the end")
    parser.add_argument("-v", "--verbose", action="store_true", help="log matching and dispatch details")
    parser.add_argument("--version", action="version", version="%(prog)s " + __version__)
    return parser


def _interactive(console):
    """
    yield lines typed at the prompt until end of input.
    """
    while True:
        try:
            yield console.input(PROMPT)
        except (EOFError, KeyboardInterrupt):
            console.print()
            return


def main(argv=None):
    parser = _parser()
    options = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if options.verbose else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
    )

    interpreter = Interpreter(
        MemoryEditor(),
        shell=True,
        fancy=options.fancy,
        colorful=not options.plain,
        deferred=options.check,
    )

    if options.script is None:
        faults = interpreter.run(_interactive(Console()))
    else:
        try:
            script = open(options.script, encoding="utf-8")
        except OSError as error:
            parser.error("can't open %r: %s" % (options.script, error.strerror))
        with script:
            faults = interpreter.run(line.rstrip("\n") for line in script)

    return 1 if faults and options.check else 0


if __name__ == "__main__":
    sys.exit(main())

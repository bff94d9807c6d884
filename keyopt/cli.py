"""Command-line entry point for scoring and optimising keyboard layouts."""

from __future__ import annotations

import argparse
import re
import sys

from keyopt.layout import (
    ARENSITO_LAYOUT,
    CAPEWELL_LAYOUT,
    COLEMAK_LAYOUT,
    DVORAK_LAYOUT,
    INIT_LAYOUT,
    MALTRON_LAYOUT,
    MTGAP_LAYOUT,
    QGMLWY_LAYOUT,
    QWERTY_LAYOUT,
    WORKMAN_LAYOUT,
    Layout,
)
from keyopt.penalty import calculate_penalty, init, prepare_quartad_list
from keyopt.simulator import print_result, refine, simulate

PROGRAM = "keyopt"

_OPTIONS_HELP = """Options:
    -h, --help          print this help menu
    -d, --debug         show debug logging
    -t, --top TOP_LAYOUTS
                        number of top layouts to print (default: 1)
    -s, --swaps-per-iteration SWAPS
                        maximum number of swaps per iteration (default: 3)
"""

REFERENCE_LAYOUTS = (
    ("QWERTY", QWERTY_LAYOUT),
    ("DVORAK", DVORAK_LAYOUT),
    ("COLEMAK", COLEMAK_LAYOUT),
    ("QGMLWY", QGMLWY_LAYOUT),
    ("WORKMAN", WORKMAN_LAYOUT),
    ("MALTRON", MALTRON_LAYOUT),
    ("MTGAP", MTGAP_LAYOUT),
    ("CAPEWELL", CAPEWELL_LAYOUT),
    ("ARENSITO", ARENSITO_LAYOUT),
    ("INITIAL", INIT_LAYOUT),
)

_NUMBER = re.compile(r"\+?[0-9]+")


def _print_usage(progname):
    print(f"Usage: {progname} (run|run-ref) <corpus> [OPTIONS]\n\n{_OPTIONS_HELP}", end="")


def numopt(value, default):
    """Parse a non-negative integer option, falling back to ``default``."""
    if value is None:
        return default
    if _NUMBER.fullmatch(value):
        return int(value)
    print(f"Error: invalid option value {value}. Using default value {default}.")
    return default


def _prepare(corpus):
    penalties = init()
    quartads = prepare_quartad_list(corpus, INIT_LAYOUT.position_map())
    return quartads, len(corpus.encode("utf-8")), penalties


def run(corpus, layout, debug, top, swaps):
    """Run annealing passes from ``layout`` forever."""
    quartads, length, penalties = _prepare(corpus)
    while True:
        simulate(quartads, length, layout, penalties, debug, top, swaps)


def run_ref(corpus):
    """Print the scores of the well-known reference layouts."""
    quartads, length, penalties = _prepare(corpus)
    for k, (name, layout) in enumerate(REFERENCE_LAYOUTS):
        if k:
            print()
        summary = calculate_penalty(quartads, length, layout, penalties, True)
        print(f"Reference: {name}")
        print_result(layout, summary)


def run_refine(corpus, layout, debug, top, swaps):
    """Refine ``layout`` by exhaustive swaps until it stops improving."""
    quartads, length, penalties = _prepare(corpus)
    return refine(quartads, length, layout, penalties, debug, top, swaps)


def _read_text(path, what):
    try:
        with open(path, encoding="utf-8") as handle:
            return handle.read()
    except (OSError, UnicodeDecodeError) as error:
        print(f"Error: {error}")
        raise SystemExit(f"could not read {what}") from error


def _parser():
    parser = argparse.ArgumentParser(prog=PROGRAM, add_help=False)
    parser.add_argument("-h", "--help", action="store_true")
    parser.add_argument("-d", "--debug", action="store_true")
    parser.add_argument("-t", "--top")
    parser.add_argument("-s", "--swaps-per-iteration", dest="swaps")
    parser.add_argument("free", nargs="*")
    return parser


def main(argv=None):
    """Parse the command line and run the chosen command."""
    args = sys.argv[1:] if argv is None else list(argv)
    if not args:
        _print_usage(PROGRAM)
        return
    command, rest = args[0], args[1:]
    options = _parser().parse_intermixed_args(rest)

    if options.help or not options.free:
        _print_usage(PROGRAM)
        return

    corpus = _read_text(options.free[0], "corpus")
    if len(options.free) > 1:
        layout = Layout.from_string(_read_text(options.free[1], "layout"))
    else:
        layout = INIT_LAYOUT

    top = numopt(options.top, 1)
    swaps = numopt(options.swaps, 3)

    if command == "run":
        run(corpus, layout, options.debug, top, swaps)
    elif command == "run-ref":
        run_ref(corpus)
    elif command == "refine":
        run_refine(corpus, layout, options.debug, top, swaps)
    else:
        _print_usage(PROGRAM)


if __name__ == "__main__":
    main()
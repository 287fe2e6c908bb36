# Copyright 2011 Matt Chaput. All rights reserved.
#
# Redistribution and use in source and binary forms, with or without
# modification, are permitted provided that the following conditions are met:
#
#    1. Redistributions of source code must retain the above copyright notice,
#       this list of conditions and the following disclaimer.
#
#    2. Redistributions in binary form must reproduce the above copyright
#       notice, this list of conditions and the following disclaimer in the
#       documentation and/or other materials provided with the distribution.
#
# THIS SOFTWARE IS PROVIDED BY MATT CHAPUT ``AS IS'' AND ANY EXPRESS OR
# IMPLIED WARRANTIES, INCLUDING, BUT NOT LIMITED TO, THE IMPLIED WARRANTIES OF
# MERCHANTABILITY AND FITNESS FOR A PARTICULAR PURPOSE ARE DISCLAIMED. IN NO
# EVENT SHALL MATT CHAPUT OR CONTRIBUTORS BE LIABLE FOR ANY DIRECT, INDIRECT,
# INCIDENTAL, SPECIAL, EXEMPLARY, OR CONSEQUENTIAL DAMAGES (INCLUDING, BUT NOT
# LIMITED TO, PROCUREMENT OF SUBSTITUTE GOODS OR SERVICES; LOSS OF USE, DATA,
# OR PROFITS; OR BUSINESS INTERRUPTION) HOWEVER CAUSED AND ON ANY THEORY OF
# LIABILITY, WHETHER IN CONTRACT, STRICT LIABILITY, OR TORT (INCLUDING
# NEGLIGENCE OR OTHERWISE) ARISING IN ANY WAY OUT OF THE USE OF THIS SOFTWARE,
# EVEN IF ADVISED OF THE POSSIBILITY OF SUCH DAMAGE.
#
# The views and conclusions contained in the software and documentation are
# those of the authors and should not be interpreted as representing official
# policies, either expressed or implied, of Matt Chaput.

"""
Command line interface.

Usage::

    dfalgebra evaluate <dfa> [string ...]
    dfalgebra negate <outfile> <dfa>
    dfalgebra intersect <outfile> <dfa1> <dfa2> [dfa ...]
    dfalgebra union <outfile> <dfa1> <dfa2> [dfa ...]
    dfalgebra difference <outfile> <dfa1> <dfa2>
    dfalgebra xor <outfile> <dfa1> <dfa2>
    dfalgebra generate <preset> <outfile> <alphabet> [args ...]

Automaton files are looked up as given and then with ``.dfa`` appended.
"""

import argparse
import sys

from loguru import logger

from dfalgebra import versionstring
from dfalgebra.automata import algebra, gen
from dfalgebra.automata.dfa import DFAError
from dfalgebra.codec import plaintext


class UsageError(Exception):
    pass


class CommandParser(argparse.ArgumentParser):
    """Argument parser that raises :class:`UsageError` instead of exiting, so
    :func:`main` can choose the exit status.
    """

    def error(self, message):
        raise UsageError(f"{self.prog}: {message}")


# Helpers


def _load(path):
    try:
        return plaintext.load(path)
    except (OSError, UnicodeDecodeError):
        print(f"unable to open file {path}")
        return None


def _load_all(paths):
    dfas = []
    for path in paths:
        dfa = _load(path)
        if dfa is None:
            return None
        dfas.append(dfa)
    return dfas


def _save(dfa, path):
    try:
        plaintext.save(dfa, path)
    except OSError:
        print(f"error creating file {path}")
        return 1
    return 0


def _parse_alphabet(text):
    symbols = (c for c in text if c not in ",%" and not c.isspace())
    return list(dict.fromkeys(symbols))


# Subcommands


def cmd_evaluate(args):
    dfa = _load(args.dfa)
    if dfa is None:
        return 1
    if not args.strings:
        print(f" : {dfa.evaluate_to_string('')}")
    for string in args.strings:
        print(f"{string}: {dfa.evaluate_to_string(string)}")
    return 0


def cmd_negate(args):
    dfa = _load(args.dfa)
    if dfa is None:
        return 1
    return _save(algebra.negation(dfa), args.outfile)


def cmd_intersect(args):
    dfas = _load_all([args.dfa1, args.dfa2] + args.more)
    if dfas is None:
        return 1
    return _save(algebra.big_intersection(dfas), args.outfile)


def cmd_union(args):
    dfas = _load_all([args.dfa1, args.dfa2] + args.more)
    if dfas is None:
        return 1
    return _save(algebra.big_union(dfas), args.outfile)


def cmd_difference(args):
    dfas = _load_all([args.dfa1, args.dfa2])
    if dfas is None:
        return 1
    return _save(algebra.difference(*dfas), args.outfile)


def cmd_xor(args):
    dfas = _load_all([args.dfa1, args.dfa2])
    if dfas is None:
        return 1
    return _save(algebra.xor(*dfas), args.outfile)


# Generator presets: name -> (function, argument names, argument types)
presets = {
    "empty": (gen.empty, (), ()),
    "all": (gen.all_strings, (), ()),
    "modulo": (gen.modulo_n, ("chars", "accept", "n"), (str, int, int)),
    "exact-length": (gen.exact_length, ("chars", "n"), (str, int)),
    "max-length": (gen.length_or_less, ("chars", "n"), (str, int)),
    "only": (gen.only_string, ("string",), (str,)),
    "begins-with": (gen.begins_with, ("string",), (str,)),
    "ends-with": (gen.ends_with, ("string",), (str,)),
    "contains": (gen.contains_substring, ("string",), (str,)),
}


def cmd_generate(args):
    fn, names, _ = presets[args.preset]
    alphabet = _parse_alphabet(args.alphabet)
    params = [getattr(args, name) for name in names]
    if "chars" in names:
        params[0] = _parse_alphabet(params[0])
    try:
        dfa = fn(alphabet, *params)
    except gen.GeneratorError as e:
        print(f"invalid parameters for {args.preset}: {e}")
        return 1
    return _save(dfa, args.outfile)


def create_parser(prog=None):
    parser = CommandParser(prog=prog, description="Build and evaluate DFA files.")
    parser.add_argument(
        "--version", action="version", version="%(prog)s " + versionstring()
    )
    parser.add_argument(
        "-v", "--verbose", action="store_true", help="Log debug messages to stderr"
    )
    commands = parser.add_subparsers(dest="command", metavar="command")

    p = commands.add_parser(
        "evaluate", aliases=["eval"], help="Evaluate strings in an automaton"
    )
    p.add_argument("dfa")
    p.add_argument("strings", nargs="*")
    p.set_defaults(func=cmd_evaluate)

    p = commands.add_parser(
        "negate", aliases=["negation"], help="Write the complement of an automaton"
    )
    p.add_argument("outfile")
    p.add_argument("dfa")
    p.set_defaults(func=cmd_negate)

    for name, alias, func, desc in (
        ("intersect", "and", cmd_intersect, "intersection"),
        ("union", "or", cmd_union, "union"),
    ):
        p = commands.add_parser(
            name, aliases=[alias], help=f"Write the {desc} of two or more automata"
        )
        p.add_argument("outfile")
        p.add_argument("dfa1")
        p.add_argument("dfa2")
        p.add_argument("more", nargs="*", metavar="dfa")
        p.set_defaults(func=func)

    for name, func, desc in (
        ("difference", cmd_difference, "strings accepted by dfa1 but not dfa2"),
        ("xor", cmd_xor, "strings accepted by exactly one of two automata"),
    ):
        p = commands.add_parser(name, help=f"Write an automaton for the {desc}")
        p.add_argument("outfile")
        p.add_argument("dfa1")
        p.add_argument("dfa2")
        p.set_defaults(func=func)

    p = commands.add_parser("generate", help="Write an automaton from a preset")
    kinds = p.add_subparsers(dest="preset", metavar="preset", required=True)
    for preset, (fn, names, types) in presets.items():
        k = kinds.add_parser(preset, help=fn.__doc__.strip().splitlines()[0])
        k.add_argument("outfile")
        k.add_argument("alphabet", help="Symbols of the automaton, e.g. 01 or a,b,c")
        for name, type_ in zip(names, types):
            k.add_argument(name, type=type_)
        k.set_defaults(func=cmd_generate)

    return parser


def configure_logging(verbose=False):
    logger.remove()
    logger.add(sys.stderr, level="DEBUG" if verbose else "WARNING")
    logger.enable("dfalgebra")


def main(argv=None, prog=None):
    """
    Runs the command line interface and returns the exit status.

    With no arguments the help text is printed and the status is 0. Unknown
    commands, bad arguments, and files that can't be read or written give
    status 1.
    """
    if argv is None:
        argv = sys.argv[1:]
    parser = create_parser(prog)
    if not argv:
        parser.print_help()
        return 0

    try:
        args = parser.parse_args(argv)
    except UsageError as e:
        print(e)
        parser.print_help()
        return 1
    if args.command is None:
        parser.print_help()
        return 0

    configure_logging(args.verbose)
    try:
        return args.func(args)
    except DFAError as e:
        print(f"error: {e}")
        return 1


def run():
    sys.exit(main())

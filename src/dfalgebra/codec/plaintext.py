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
Reads and writes automata in the plain text ``.dfa`` format.

Each line holds a comma-separated payload followed by an optional comment
starting with ``%``::

    3 %states
    0,2 %accepting states
    a,b %alphabet
    1,0 %0:
    2,0 %1:
    2,2 %2:

The first line is the state count, the second the accepting states, the third
the alphabet (one character per entry, in column order) and every following
line the transition targets of one state, one per alphabet column.

Parsing is lenient: tokens that don't parse are skipped rather than replaced
with a default, so a damaged transition table loads as a partial automaton
and the problem is reported when a string is evaluated.
"""

import os
import re
from io import StringIO

from loguru import logger

from dfalgebra.automata.dfa import DFA

_int_expr = re.compile("^[+-]?[0-9]+$")

# Symbols that can't appear in the alphabet line
_reserved = frozenset(",%")

extension = ".dfa"


def _payload(line):
    return line.split("%", 1)[0]


def _parse_int(token):
    token = token.strip()
    if not _int_expr.match(token):
        return None
    return int(token)


# Reading


class DFAReader:
    """
    Builds a :class:`DFA` from the lines of a ``.dfa`` file.

    The reader goes through the lines once, dispatching on the line number,
    and keeps the partially built automaton in its attributes until
    :meth:`dfa` is called.
    """

    def __init__(self, lines):
        self._lines = lines
        self.states = 0
        self.finals = set()
        self.columns = []
        self.transitions = {}

    def read(self):
        for lineno, line in enumerate(self._lines):
            payload = _payload(line)
            if lineno == 0:
                self._read_count(payload)
            elif lineno == 1:
                self._read_finals(payload)
            elif lineno == 2:
                self._read_alphabet(payload)
            else:
                self._read_row(lineno - 3, payload)
        return self.dfa()

    def _read_count(self, payload):
        count = _parse_int(payload)
        if count is None or count < 0:
            logger.warning("Unparsable state count {!r}, using 0", payload.strip())
            count = 0
        self.states = count

    def _read_finals(self, payload):
        for token in payload.split(","):
            state = _parse_int(token)
            if state is None:
                continue
            if not 0 <= state < self.states:
                logger.warning("Skipping out of range accepting state {}", state)
                continue
            self.finals.add(state)

    def _read_alphabet(self, payload):
        for token in payload.split(","):
            token = token.strip()
            if token:
                self.columns.append(token[0])

    def _read_row(self, state, payload):
        if state >= self.states:
            if payload.strip():
                logger.debug("Ignoring transitions for nonexistent state {}", state)
            return

        columns = self.columns
        for col, token in enumerate(payload.split(",")):
            if col >= len(columns):
                break
            dest = _parse_int(token)
            if dest is None:
                logger.debug(
                    "Skipping transition {!r} of state {} on {!r}",
                    token.strip(),
                    state,
                    columns[col],
                )
                continue
            self.transitions[state, columns[col]] = dest

    def dfa(self):
        # A repeated alphabet entry keeps its first position
        alphabet = list(dict.fromkeys(self.columns))
        accepting = [s in self.finals for s in range(self.states)]
        return DFA(alphabet, self.states, accepting, self.transitions)


def loads(text):
    """
    Parses the contents of a ``.dfa`` file.

    Args:
        text (str): The file contents.

    Returns:
        DFA: The automaton. It may be partial if the transition table has
        missing or unparsable entries.
    """
    return DFAReader(text.split("\n")).read()


def load(path):
    """
    Reads an automaton from ``path``. If the file can't be opened, tries again
    with the ``.dfa`` extension added.

    Raises:
        OSError: If neither file can be opened.
        UnicodeDecodeError: If the file is not valid UTF-8.
    """
    try:
        f = open(path, encoding="utf8")
    except OSError:
        f = open(os.fspath(path) + extension, encoding="utf8")
    with f:
        text = f.read()
    logger.debug("Loaded {}", f.name)
    return loads(text)


# Writing


class DFAWriter:
    """
    Writes the text form of a :class:`DFA` to a file-like object.
    """

    def __init__(self, stream):
        self._stream = stream

    def _print_line(self, values, comment):
        # Every value is written with a leading comma which is dropped again
        # for the first value on the line
        line = "".join(f",{v}" for v in values)
        self._stream.write(f"{line[1:]} %{comment}\n")

    def write(self, dfa):
        for symbol in dfa.alphabet:
            if (
                not isinstance(symbol, str)
                or len(symbol) != 1
                or symbol in _reserved
                or symbol.isspace()
            ):
                raise ValueError(f"Symbol {symbol!r} can't be written to a .dfa file")

        finals = [s for s in range(dfa.states) if dfa.accepting[s]]
        self._stream.write(f"{dfa.states} %states\n")
        self._print_line(finals, "accepting states")
        self._print_line(dfa.alphabet, "alphabet")
        for state in range(dfa.states):
            row = [dfa.target(state, symbol) for symbol in dfa.alphabet]
            self._print_line(row, f"{state}:")


def dumps(dfa):
    """
    Returns the text form of ``dfa``.

    Raises:
        MalformedDFAError: If the automaton is missing a transition.
        ValueError: If a symbol is not a single character, or is a comma,
            ``%`` or whitespace.
    """
    buf = StringIO()
    DFAWriter(buf).write(dfa)
    return buf.getvalue()


def save(dfa, path):
    """Writes ``dfa`` to the file at ``path``, replacing it if it exists."""
    text = dumps(dfa)
    with open(path, "w", encoding="utf8") as f:
        f.write(text)
    logger.debug("Saved {!r} to {}", dfa, path)

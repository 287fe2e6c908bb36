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
Boolean operations on :class:`~dfalgebra.automata.dfa.DFA` objects.

Intersection is the only operation that builds a product automaton. Union,
difference and exclusive-or are derived from intersection and negation, and
every result is passed through :func:`~dfalgebra.automata.reduce.optimize`
before it is returned.

The product of two automata has ``len(a) * len(b)`` states before
minimization, so folding many automata together can grow quickly.
"""

import operator
from functools import reduce

from loguru import logger

from dfalgebra.automata.dfa import DFA
from dfalgebra.automata.reduce import optimize


def align_alphabets(dfa1, dfa2):
    """
    Extends each automaton with the symbols only the other one has.

    Each added symbol leads to a new rejecting trap state, so a string using
    a symbol one automaton doesn't know is rejected by that automaton.

    Returns:
        tuple: The two extended automata. Both have the same set of symbols;
        the first keeps its column order with the second's extra symbols
        appended.
    """
    ext1 = dfa1
    ext2 = dfa2
    for symbol in dfa1.alphabet:
        ext2 = ext2.add_symbol_accept(symbol, False)
    for symbol in dfa2.alphabet:
        ext1 = ext1.add_symbol_accept(symbol, False)
    return ext1, ext2


def product(dfa1, op, dfa2):
    """
    Computes the cross product of two automata over the same symbols.

    State ``(i, j)`` of the product is numbered ``i * len(dfa2) + j``. It
    accepts when ``op(dfa1 accepts i, dfa2 accepts j)`` is true, and on each
    symbol it moves to the pair of the two automata's targets.

    The result is not minimized.

    Args:
        dfa1 (DFA): The first automaton. Its column order is used.
        op (callable): Takes two booleans and returns a boolean.
        dfa2 (DFA): The second automaton. Must have the same symbols as
            ``dfa1``.

    Raises:
        MalformedDFAError: If either automaton is missing a transition.
    """
    width = dfa2.states
    alphabet = dfa1.alphabet
    accepting = []
    transitions = {}
    for i in range(dfa1.states):
        for j in range(width):
            src = i * width + j
            accepting.append(op(dfa1.accepting[i], dfa2.accepting[j]))
            for symbol in alphabet:
                dest1 = dfa1.target(i, symbol)
                dest2 = dfa2.target(j, symbol)
                transitions[src, symbol] = dest1 * width + dest2
    return DFA(alphabet, dfa1.states * width, accepting, transitions)


def intersection(dfa1, dfa2):
    """
    Returns an automaton accepting the strings both automata accept.

    If ``dfa1`` is the zero-state placeholder automaton, ``dfa2`` is returned
    as it is. This makes ``DFA()`` a starting value for folding intersections
    over a list.

    The automata don't need to share an alphabet: see :func:`align_alphabets`.
    """
    if dfa1.states == 0:
        return dfa2

    ext1, ext2 = align_alphabets(dfa1, dfa2)
    prod = product(ext1, operator.and_, ext2)
    result = optimize(prod)
    logger.debug(
        "intersection: {} x {} = {} states, {} after optimizing",
        ext1.states,
        ext2.states,
        prod.states,
        result.states,
    )
    return result


def negation(dfa):
    """Returns an automaton accepting the strings over the same alphabet that
    ``dfa`` rejects.
    """
    flipped = DFA(
        dfa.alphabet,
        dfa.states,
        [not a for a in dfa.accepting],
        dfa.transitions,
    )
    return optimize(flipped)


def union(dfa1, dfa2):
    return negation(intersection(negation(dfa1), negation(dfa2)))


def difference(dfa1, dfa2):
    """Returns an automaton accepting what ``dfa1`` accepts and ``dfa2``
    rejects.
    """
    return intersection(dfa1, negation(dfa2))


def xor(dfa1, dfa2):
    return difference(union(dfa1, dfa2), intersection(dfa1, dfa2))


def big_intersection(dfas):
    """
    Intersects any number of automata, left to right.

    The fold starts from the zero-state placeholder, so a single automaton is
    returned unchanged and an empty sequence gives ``DFA()``.
    """
    return reduce(intersection, dfas, DFA())


def big_union(dfas):
    """
    Unions any number of automata by intersecting their negations and negating
    the result.
    """
    folded = reduce(lambda acc, dfa: intersection(acc, negation(dfa)), dfas, DFA())
    return negation(folded)

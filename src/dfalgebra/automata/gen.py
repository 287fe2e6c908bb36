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
Functions that build ready-made automata for common languages.

Every generator takes the alphabet of the automaton to build as its first
argument. Some languages only count a subset of the alphabet (``chars``);
the other symbols are read without changing state.
"""

from dfalgebra.automata.dfa import DFA


class GeneratorError(ValueError):
    """Raised when a generator is called with parameters that don't describe
    a language.
    """


def _single_state(alphabet, accept):
    alphabet = tuple(alphabet)
    transitions = {(0, symbol): 0 for symbol in alphabet}
    return DFA(alphabet, 1, [accept], transitions)


def _check_string(alphabet, string):
    for char in string:
        if char not in alphabet:
            raise GeneratorError(f"{char!r} is not in the alphabet {alphabet!r}")


def empty(alphabet):
    """Returns an automaton that accepts nothing."""
    return _single_state(alphabet, False)


def all_strings(alphabet):
    """Returns an automaton that accepts every string over ``alphabet``."""
    return _single_state(alphabet, True)


def modulo_n(alphabet, chars, accept, n):
    """
    Returns an automaton accepting strings in which the number of symbols
    from ``chars`` is congruent to ``accept`` modulo ``n``.

    Args:
        alphabet (iterable): The alphabet of the automaton.
        chars (iterable): The symbols to count.
        accept (int): The remainder to accept, ``0 <= accept < n``.
        n (int): The modulus.

    Raises:
        GeneratorError: If ``accept`` is not a valid remainder.

    Example:
        >>> modulo_n("01", "1", 0, 2).evaluate("1010")
        True
    """
    if not 0 <= accept < n:
        raise GeneratorError(f"Remainder {accept} is not in range for modulus {n}")

    alphabet = tuple(alphabet)
    chars = set(chars)
    accepting = [False] * n
    accepting[accept] = True
    transitions = {}
    for state in range(n):
        for symbol in alphabet:
            if symbol in chars:
                transitions[state, symbol] = (state + 1) % n
            else:
                transitions[state, symbol] = state
    return DFA(alphabet, n, accepting, transitions).optimize()


def _counting(alphabet, chars, n, accepting):
    # States 0..n count symbols from chars, state n + 1 is the overflow trap
    alphabet = tuple(alphabet)
    chars = set(chars)
    transitions = {}
    for state in range(n + 1):
        for symbol in alphabet:
            if symbol in chars:
                transitions[state, symbol] = state + 1
            else:
                transitions[state, symbol] = state
    for symbol in alphabet:
        transitions[n + 1, symbol] = n + 1
    return DFA(alphabet, n + 2, accepting, transitions)


def exact_length(alphabet, chars, n):
    """
    Returns an automaton accepting strings containing exactly ``n`` symbols
    from ``chars``.

    Raises:
        GeneratorError: If ``n`` is negative.
    """
    if n < 0:
        raise GeneratorError(f"Length can't be negative: {n}")

    accepting = [False] * (n + 2)
    accepting[n] = True
    return _counting(alphabet, chars, n, accepting)


def length_or_less(alphabet, chars, n):
    """
    Returns an automaton accepting strings containing at most ``n`` symbols
    from ``chars``.

    Raises:
        GeneratorError: If ``n`` is negative.
    """
    if n < 0:
        raise GeneratorError(f"Length can't be negative: {n}")

    accepting = [True] * (n + 1) + [False]
    return _counting(alphabet, chars, n, accepting)


def _prefix_chain(alphabet, string):
    # States 0..len(string) track how much of the string was matched, state
    # len(string) + 1 is the mismatch trap
    length = len(string)
    trap = length + 1
    transitions = {}
    for state in range(length + 2):
        for symbol in alphabet:
            transitions[state, symbol] = trap
    for i, char in enumerate(string):
        transitions[i, char] = i + 1
    return transitions


def only_string(alphabet, string):
    """
    Returns an automaton that accepts ``string`` and nothing else.

    Raises:
        GeneratorError: If ``string`` uses a symbol outside the alphabet.
    """
    alphabet = tuple(alphabet)
    _check_string(alphabet, string)

    length = len(string)
    accepting = [False] * (length + 2)
    accepting[length] = True
    transitions = _prefix_chain(alphabet, string)
    return DFA(alphabet, length + 2, accepting, transitions)


def begins_with(alphabet, string):
    """
    Returns an automaton accepting the strings that start with ``string``.

    Raises:
        GeneratorError: If ``string`` uses a symbol outside the alphabet.
    """
    alphabet = tuple(alphabet)
    _check_string(alphabet, string)

    length = len(string)
    accepting = [False] * (length + 2)
    accepting[length] = True
    transitions = _prefix_chain(alphabet, string)
    for symbol in alphabet:
        transitions[length, symbol] = length
    return DFA(alphabet, length + 2, accepting, transitions)


def overlap(pattern, text):
    """
    Returns the length of the longest proper prefix of ``pattern`` that is
    also a suffix of ``text``, considering prefixes shorter than ``text``.

    >>> overlap("abab", "aba")
    1
    """
    result = 0
    for i in range(1, len(text)):
        if pattern[:i] == text[len(text) - i :]:
            result = i
    return result


def _matcher(alphabet, string):
    # Knuth-Morris-Pratt style automaton: state i means the last i symbols
    # read are the first i symbols of the string
    length = len(string)
    transitions = {}
    for state in range(length + 1):
        for symbol in alphabet:
            transitions[state, symbol] = overlap(string, string[:state] + symbol)
    for i, char in enumerate(string):
        transitions[i, char] = i + 1
    return transitions


def ends_with(alphabet, string):
    """
    Returns an automaton accepting the strings that end with ``string``.

    Raises:
        GeneratorError: If ``string`` uses a symbol outside the alphabet.
    """
    alphabet = tuple(alphabet)
    _check_string(alphabet, string)

    length = len(string)
    accepting = [False] * (length + 1)
    accepting[length] = True
    return DFA(alphabet, length + 1, accepting, _matcher(alphabet, string))


def contains_substring(alphabet, string):
    """
    Returns an automaton accepting the strings that contain ``string`` as a
    contiguous substring.

    Raises:
        GeneratorError: If ``string`` uses a symbol outside the alphabet.

    Example:
        >>> contains_substring("abc", "ab").evaluate("cab")
        True
    """
    alphabet = tuple(alphabet)
    _check_string(alphabet, string)

    length = len(string)
    accepting = [False] * (length + 1)
    accepting[length] = True
    transitions = _matcher(alphabet, string)
    for symbol in alphabet:
        transitions[length, symbol] = length
    return DFA(alphabet, length + 1, accepting, transitions)

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
This module contains the deterministic finite automaton value type together
with the primitive operations every other part of the library is built from:
evaluation, alphabet extension, reachability and state removal.

States are dense integer indices ``0 .. states - 1`` and state ``0`` is always
the initial state. The transition function is a flat dictionary keyed by
``(state, symbol)`` pairs. Automata loaded from untrusted text may be partial,
so lookups report a missing entry as ``None`` instead of defaulting it.
"""

from cached_property import cached_property

# Exceptions


class DFAError(Exception):
    """Base class for errors raised by automaton operations."""


class EvaluationError(DFAError):
    """
    Raised when a string cannot be run through an automaton.

    Evaluation errors describe a problem with one input string (or with a
    malformed automaton) and are meant to be reported per string by the
    caller, not to abort a batch of evaluations.
    """

    def describe(self):
        raise NotImplementedError


class InvalidChar(EvaluationError):
    def __init__(self, char):
        super().__init__(char)
        self.char = char

    def describe(self):
        return f"invalid character: {self.char}"


class InvalidState(EvaluationError):
    def __init__(self, state):
        super().__init__(state)
        self.state = state

    def describe(self):
        return f"invalid state: {self.state}"


class NoTransition(EvaluationError):
    def __init__(self, state, char):
        super().__init__(state, char)
        self.state = state
        self.char = char

    def describe(self):
        return f"no transition found for character {self.char} and state {self.state}"


class StateRemovalError(DFAError, ValueError):
    """Raised when :meth:`DFA.remove_state` is called with invalid indices."""


class MalformedDFAError(DFAError, ValueError):
    """Raised when an operation needs a total transition function but finds a
    missing entry, or finds a transition leading to a state that does not
    exist.
    """


# Automaton


class DFA:
    """
    Deterministic finite automaton over a finite, ordered alphabet.

    A DFA is treated as an immutable value: none of the methods below modify
    the automaton they are called on, they all return a new object.

    Attributes:
        alphabet (tuple): The symbols the automaton reads, in column order.
        states (int): The number of states. State ``0`` is the initial state.
        accepting (tuple): One boolean per state, ``True`` for accepting states.
        transitions (dict): Maps ``(state, symbol)`` pairs to target states.

    Calling ``DFA()`` with no arguments creates the zero-state placeholder
    automaton, which :func:`dfalgebra.automata.algebra.intersection` treats as
    its identity element.

    Example:
        >>> dfa = DFA("ab", 2, [False, True], {(0, "a"): 1, (0, "b"): 0,
        ...                                    (1, "a"): 1, (1, "b"): 0})
        >>> dfa.evaluate("ba")
        True
    """

    def __init__(self, alphabet=(), states=0, accepting=None, transitions=None):
        """
        Initializes a new automaton.

        Args:
            alphabet (iterable): The symbols of the automaton, in column order.
                Symbols must be unique.
            states (int): The number of states.
            accepting (iterable, optional): One flag per state. Defaults to
                all states rejecting.
            transitions (dict, optional): The ``(state, symbol) -> state``
                mapping. The dictionary is copied.

        Raises:
            ValueError: If the alphabet has duplicates or the accepting flags
                don't match the state count.
        """
        self.alphabet = tuple(alphabet)
        self.states = states
        if accepting is None:
            accepting = (False,) * states
        self.accepting = tuple(bool(a) for a in accepting)
        self.transitions = dict(transitions) if transitions else {}

        if len(set(self.alphabet)) != len(self.alphabet):
            raise ValueError(f"Duplicate symbols in alphabet {self.alphabet!r}")
        if len(self.accepting) != states:
            raise ValueError(
                f"Expected {states} accepting flags, got {len(self.accepting)}"
            )

    def __len__(self):
        return self.states

    def __eq__(self, other):
        if not isinstance(other, DFA):
            return NotImplemented
        return (
            self.alphabet == other.alphabet
            and self.states == other.states
            and self.accepting == other.accepting
            and self.transitions == other.transitions
        )

    def __hash__(self):
        return hash((self.alphabet, self.states, self.accepting))

    def __repr__(self):
        finals = [s for s in range(self.states) if self.accepting[s]]
        return (
            f"{type(self).__name__}(alphabet={''.join(map(str, self.alphabet))!r}, "
            f"states={self.states}, accepting={finals!r})"
        )

    # Operator forms of the boolean algebra

    def __and__(self, other):
        return self.intersect(other)

    def __or__(self, other):
        return self.union(other)

    def __sub__(self, other):
        return self.difference(other)

    def __xor__(self, other):
        return self.xor(other)

    def __invert__(self):
        return self.negation()

    @cached_property
    def symbols(self):
        """The alphabet as a frozenset, for membership tests."""
        return frozenset(self.alphabet)

    def copy(self):
        return DFA(self.alphabet, self.states, self.accepting, self.transitions)

    def is_final(self, state):
        return self.accepting[state]

    def next_state(self, state, symbol):
        """
        Returns the target of the transition from ``state`` on ``symbol``, or
        ``None`` if the automaton has no such transition.
        """
        return self.transitions.get((state, symbol))

    def target(self, state, symbol):
        """
        Like :meth:`next_state`, but for operations that need a total
        transition function.

        Raises:
            MalformedDFAError: If the transition is missing or leads outside
                the automaton.
        """
        try:
            dest = self.transitions[state, symbol]
        except KeyError:
            raise MalformedDFAError(
                f"No transition for state {state} on {symbol!r}"
            ) from None
        self._check_dest(state, symbol, dest)
        return dest

    def _check_dest(self, state, symbol, dest):
        if not 0 <= dest < self.states:
            raise MalformedDFAError(
                f"Transition from state {state} on {symbol!r} leads to "
                f"invalid state {dest}"
            )

    def is_total(self):
        """Returns True if every state has a transition on every symbol."""
        return all(
            (state, symbol) in self.transitions
            for state in range(self.states)
            for symbol in self.alphabet
        )

    def is_well_formed(self):
        """
        Returns True if the automaton is total and every transition target is
        a valid state index.
        """
        if not self.is_total():
            return False
        return all(0 <= dest < self.states for dest in self.transitions.values())

    # Evaluation

    def evaluate(self, string):
        """
        Runs ``string`` through the automaton starting at state 0.

        Args:
            string (iterable): The input symbols.

        Returns:
            bool: True if the automaton ends in an accepting state.

        Raises:
            InvalidChar: If a symbol is not in the alphabet.
            InvalidState: If the automaton reaches a state index that does
                not exist.
            NoTransition: If the automaton has no transition for the current
                state and symbol.
        """
        state = 0
        for char in string:
            if char not in self.symbols:
                raise InvalidChar(char)
            if not 0 <= state < self.states:
                raise InvalidState(state)
            dest = self.next_state(state, char)
            if dest is None:
                raise NoTransition(state, char)
            state = dest
        if not 0 <= state < self.states:
            raise InvalidState(state)
        return self.accepting[state]

    def evaluate_to_string(self, string):
        """
        Evaluates ``string`` and returns the outcome as text: ``"true"``,
        ``"false"``, or a description of the evaluation error.
        """
        try:
            result = self.evaluate(string)
        except EvaluationError as e:
            return e.describe()
        return "true" if result else "false"

    # Alphabet extension

    def add_symbol_ignore(self, symbol):
        """
        Returns a copy of this automaton with ``symbol`` added to the alphabet.
        The new symbol loops back to the same state everywhere, so it has no
        effect on acceptance.
        """
        if symbol in self.symbols:
            return self.copy()

        transitions = dict(self.transitions)
        for state in range(self.states):
            transitions[state, symbol] = state
        return DFA(self.alphabet + (symbol,), self.states, self.accepting, transitions)

    def add_symbol_imitate(self, symbol, other):
        """
        Returns a copy of this automaton with ``symbol`` added to the alphabet,
        behaving exactly like the existing symbol ``other``.

        If ``other`` is not in the alphabet the copy is returned unchanged.
        """
        if symbol in self.symbols or other not in self.symbols:
            return self.copy()

        transitions = dict(self.transitions)
        for state in range(self.states):
            dest = self.next_state(state, other)
            if dest is not None:
                transitions[state, symbol] = dest
        return DFA(self.alphabet + (symbol,), self.states, self.accepting, transitions)

    def add_symbol_accept(self, symbol, accept):
        """
        Returns a copy of this automaton with ``symbol`` added to the alphabet
        and a new trap state at index ``states``.

        Reading ``symbol`` from any existing state leads to the trap state,
        which loops on every symbol and accepts according to ``accept``.
        """
        if symbol in self.symbols:
            return self.copy()

        trap = self.states
        alphabet = self.alphabet + (symbol,)
        transitions = dict(self.transitions)
        for state in range(self.states):
            transitions[state, symbol] = trap
        for label in alphabet:
            transitions[trap, label] = trap
        return DFA(alphabet, self.states + 1, self.accepting + (accept,), transitions)

    # Structure

    def reachable_from(self, src):
        """
        Returns a sorted list of the states reachable from ``src``, including
        ``src`` itself. Missing transitions are ignored.

        Raises:
            MalformedDFAError: If a transition on the way leads outside the
                automaton.
        """
        reached = {src}
        stack = [src]
        while stack:
            state = stack.pop()
            for symbol in self.alphabet:
                dest = self.next_state(state, symbol)
                if dest is None:
                    continue
                self._check_dest(state, symbol, dest)
                if dest not in reached:
                    reached.add(dest)
                    stack.append(dest)
        return sorted(reached)

    def unreachable_states(self):
        """Returns the states not reachable from state 0, highest first."""
        reached = set(self.reachable_from(0))
        return [s for s in reversed(range(self.states)) if s not in reached]

    def is_permanently(self, state, accept):
        """
        Returns True if every state reachable from ``state`` (including
        itself) has the acceptance flag ``accept``.
        """
        return all(self.accepting[s] == accept for s in self.reachable_from(state))

    def is_permanently_accepting(self, state):
        return self.is_permanently(state, True)

    def is_permanently_rejecting(self, state):
        return self.is_permanently(state, False)

    def remove_state(self, state, replacement):
        """
        Returns a copy of this automaton with ``state`` deleted.

        Every transition into ``state`` is redirected to ``replacement``, then
        all state indices above ``state`` move down by one. ``replacement`` is
        given in the numbering before the removal.

        This is the only operation that renumbers states; every reduction in
        :mod:`dfalgebra.automata.reduce` goes through it.

        Args:
            state (int): The state to delete.
            replacement (int): The state that takes over its inbound edges.

        Raises:
            StateRemovalError: If either index is out of range, if they are
                equal, or if removing state 0 would make anything other than
                state 1 the new initial state.
        """
        count = self.states
        if not 0 <= state < count or not 0 <= replacement < count:
            raise StateRemovalError(
                f"Can't replace state {state} with {replacement} in a "
                f"{count}-state automaton"
            )
        if replacement == state:
            raise StateRemovalError(f"State {state} can't replace itself")
        if state == 0 and replacement > 1:
            raise StateRemovalError(
                f"Removing the initial state would make state {replacement} initial"
            )
        if replacement > state:
            replacement -= 1

        def remap(dest):
            if dest == state:
                return replacement
            elif dest > state:
                return dest - 1
            return dest

        transitions = {}
        for (src, symbol), dest in self.transitions.items():
            if src == state:
                continue
            newsrc = src - 1 if src > state else src
            transitions[newsrc, symbol] = remap(dest)

        accepting = self.accepting[:state] + self.accepting[state + 1 :]
        return DFA(self.alphabet, count - 1, accepting, transitions)

    # Derived operations, implemented in other modules

    def optimize(self):
        from dfalgebra.automata.reduce import optimize

        return optimize(self)

    def negation(self):
        from dfalgebra.automata.algebra import negation

        return negation(self)

    def intersect(self, other):
        from dfalgebra.automata.algebra import intersection

        return intersection(self, other)

    def union(self, other):
        from dfalgebra.automata.algebra import union

        return union(self, other)

    def difference(self, other):
        from dfalgebra.automata.algebra import difference

        return difference(self, other)

    def xor(self, other):
        from dfalgebra.automata.algebra import xor

        return xor(self, other)

    def dump(self, stream=None):
        """
        Prints a human-readable table of the automaton, marking the initial
        state with ``@`` and accepting states with ``||``.
        """
        for src in range(self.states):
            beg = "@" if src == 0 else " "
            end = "||" if self.accepting[src] else ""
            print(beg, src, end, file=stream)
            for symbol in self.alphabet:
                print("  ", symbol, "->", self.next_state(src, symbol), file=stream)

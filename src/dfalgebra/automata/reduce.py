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
Minimization passes for :class:`~dfalgebra.automata.dfa.DFA` objects.

:func:`optimize` runs the passes below once each, in this order:

1. :func:`remove_unreachable_states`
2. :func:`reduce_accepting_states`
3. :func:`reduce_rejecting_states`
4. :func:`remove_indistinguishable_states`

The passes are not iterated to a fixed point. Every deletion goes through
:meth:`DFA.remove_state`, so a :class:`StateRemovalError` escaping from here
means one of the passes computed a bad index, not that the input was bad.

The indistinguishability check is local: two states are merged only when, on
every symbol, they go to the same state, both loop on themselves, or they go to
each other. Equivalences that need longer input to establish are not found, so
the result is not always the minimal automaton for its language.
"""

from loguru import logger


def remove_unreachable_states(dfa):
    """
    Returns a copy of ``dfa`` without the states that can't be reached from
    the initial state.

    States are deleted from the highest index down, so the remaining indices
    in the list stay valid. Inbound edges are redirected to state 0; only
    other unreachable states can have them.
    """
    result = dfa
    for state in dfa.unreachable_states():
        result = result.remove_state(state, 0)
    return result


def _reduce_like_states(dfa, accept):
    permanent = [s for s in range(dfa.states) if dfa.is_permanently(s, accept)]
    permanent.reverse()

    # Each state is folded into the next lower one, so the survivor is the
    # lowest index and the lower indices never shift.
    result = dfa
    for state, replacement in zip(permanent, permanent[1:]):
        result = result.remove_state(state, replacement)
    return result


def reduce_accepting_states(dfa):
    """
    Collapses all permanently accepting states (states from which every
    reachable state accepts) into a single state.
    """
    return _reduce_like_states(dfa, True)


def reduce_rejecting_states(dfa):
    """
    Collapses all permanently rejecting states (states from which no
    reachable state accepts) into a single state.
    """
    return _reduce_like_states(dfa, False)


def states_indistinguishable(dfa, i, j):
    """
    Returns True if states ``i`` and ``j`` have the same acceptance and, for
    every symbol, either move to the same state, both loop back to
    themselves, or move to each other.
    """
    if dfa.accepting[i] != dfa.accepting[j]:
        return False
    for symbol in dfa.alphabet:
        dest_i = dfa.next_state(i, symbol)
        dest_j = dfa.next_state(j, symbol)
        if dest_i == dest_j:
            continue
        if dest_i == i and dest_j == j:
            continue
        if dest_i == j and dest_j == i:
            continue
        return False
    return True


def remove_indistinguishable_states(dfa):
    """
    Merges pairs of indistinguishable states.

    Pairs ``(i, j)`` with ``i > j`` are scanned from the highest ``i`` down.
    When a pair matches, ``i`` is deleted in favor of ``j`` and the scan
    starts again at ``i - 1``.
    """
    result = dfa
    highest = result.states
    merged = True
    while merged:
        merged = False
        for i in reversed(range(highest)):
            for j in reversed(range(i)):
                if states_indistinguishable(result, i, j):
                    result = result.remove_state(i, j)
                    highest = i
                    merged = True
                    break
            if merged:
                break
    return result


def optimize(dfa):
    """
    Runs the full minimization pipeline on ``dfa`` and returns the result.

    Args:
        dfa (DFA): The automaton to minimize. It is not modified.

    Returns:
        DFA: An automaton accepting the same language where every state is
        reachable, permanently accepting and permanently rejecting states are
        each collapsed into one, and locally indistinguishable states are
        merged.
    """
    before = dfa.states
    result = remove_unreachable_states(dfa)
    reachable = result.states
    result = reduce_accepting_states(result)
    result = reduce_rejecting_states(result)
    collapsed = result.states
    result = remove_indistinguishable_states(result)
    logger.debug(
        "optimize: {} states, {} reachable, {} after collapsing, {} after merging",
        before,
        reachable,
        collapsed,
        result.states,
    )
    return result

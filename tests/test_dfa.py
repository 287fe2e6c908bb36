from io import StringIO

import pytest
from dfalgebra.automata.dfa import (
    DFA,
    InvalidChar,
    InvalidState,
    MalformedDFAError,
    NoTransition,
    StateRemovalError,
)


def div3():
    # Binary numbers divisible by 3, most significant bit first
    transitions = {}
    for state in range(3):
        for bit in "01":
            transitions[state, bit] = (state * 2 + int(bit)) % 3
    return DFA("01", 3, [True, False, False], transitions)


def chain():
    # 0 -a-> 1 -a-> 2, state 2 accepts and loops
    return DFA("a", 3, [False, False, True], {(0, "a"): 1, (1, "a"): 2, (2, "a"): 2})


def test_construction():
    dfa = div3()
    assert dfa.alphabet == ("0", "1")
    assert len(dfa) == 3
    assert dfa.accepting == (True, False, False)
    assert dfa.is_final(0)
    assert not dfa.is_final(1)
    assert dfa.symbols == frozenset("01")
    assert "states=3" in repr(dfa)


def test_placeholder():
    dfa = DFA()
    assert dfa.states == 0
    assert dfa.alphabet == ()
    assert dfa.accepting == ()
    assert dfa.is_well_formed()


def test_bad_construction():
    with pytest.raises(ValueError):
        DFA("aa", 1, [False], {})
    with pytest.raises(ValueError):
        DFA("a", 2, [False], {})


def test_equality():
    assert div3() == div3()
    assert div3() != chain()
    assert div3() != DFA("01", 3, [False, False, True], div3().transitions)


def test_copy_is_independent():
    dfa = div3()
    c = dfa.copy()
    assert c == dfa
    assert c.transitions is not dfa.transitions


def test_evaluate():
    dfa = div3()
    assert dfa.evaluate("")
    assert dfa.evaluate("0")
    assert dfa.evaluate("11")
    assert dfa.evaluate("110")
    assert dfa.evaluate("1001")
    assert not dfa.evaluate("1")
    assert not dfa.evaluate("111")
    assert dfa.evaluate("1100")


def test_invalid_char():
    dfa = div3()
    with pytest.raises(InvalidChar) as e:
        dfa.evaluate("012")
    assert e.value.char == "2"
    assert dfa.evaluate_to_string("x") == "invalid character: x"


def test_no_transition():
    dfa = DFA("ab", 2, [False, True], {(0, "a"): 1})
    assert dfa.evaluate("a")
    with pytest.raises(NoTransition) as e:
        dfa.evaluate("ab")
    assert e.value.state == 1
    assert e.value.char == "b"
    assert dfa.evaluate_to_string("ab") == "no transition found for character b and state 1"


def test_invalid_state():
    dfa = DFA("a", 1, [True], {(0, "a"): 5})
    with pytest.raises(InvalidState) as e:
        dfa.evaluate("aa")
    assert e.value.state == 5
    with pytest.raises(InvalidState):
        dfa.evaluate("a")
    assert dfa.evaluate_to_string("a") == "invalid state: 5"

    with pytest.raises(InvalidState):
        DFA().evaluate("")


def test_evaluate_to_string():
    dfa = div3()
    assert dfa.evaluate_to_string("11") == "true"
    assert dfa.evaluate_to_string("10") == "false"


def test_well_formed():
    assert div3().is_total()
    assert div3().is_well_formed()

    partial = DFA("ab", 1, [True], {(0, "a"): 0})
    assert not partial.is_total()
    assert not partial.is_well_formed()

    bad_target = DFA("a", 1, [True], {(0, "a"): 1})
    assert bad_target.is_total()
    assert not bad_target.is_well_formed()


def test_target():
    dfa = DFA("ab", 1, [True], {(0, "a"): 0})
    assert dfa.target(0, "a") == 0
    assert dfa.next_state(0, "b") is None
    with pytest.raises(MalformedDFAError):
        dfa.target(0, "b")

    dangling = DFA("a", 1, [True], {(0, "a"): 3})
    with pytest.raises(MalformedDFAError):
        dangling.target(0, "a")


def test_add_symbol_ignore():
    dfa = div3()
    ext = dfa.add_symbol_ignore("x")
    assert ext.alphabet == ("0", "1", "x")
    assert ext.states == 3
    assert ext.evaluate("1x1x0")
    assert not ext.evaluate("x1")
    assert ext.is_well_formed()

    # Unchanged input
    assert dfa.alphabet == ("0", "1")
    assert ("0", "x") not in dfa.transitions

    same = dfa.add_symbol_ignore("0")
    assert same == dfa
    assert same is not dfa


def test_add_symbol_imitate():
    dfa = div3()
    ext = dfa.add_symbol_imitate("2", "1")
    assert ext.alphabet == ("0", "1", "2")
    assert ext.evaluate("22")
    assert ext.evaluate("2") == dfa.evaluate("1")
    assert ext.evaluate("2102") == dfa.evaluate("1101")

    assert dfa.add_symbol_imitate("x", "y") == dfa
    assert dfa.add_symbol_imitate("1", "0") == dfa


def test_add_symbol_accept():
    dfa = div3()
    ext = dfa.add_symbol_accept("x", False)
    assert ext.alphabet == ("0", "1", "x")
    assert ext.states == 4
    assert ext.accepting == (True, False, False, False)
    for symbol in "01x":
        assert ext.transitions[3, symbol] == 3
    for state in range(3):
        assert ext.transitions[state, "x"] == 3
    assert ext.evaluate("11")
    assert not ext.evaluate("x")
    assert not ext.evaluate("11x0")
    assert ext.is_well_formed()

    accepting = dfa.add_symbol_accept("x", True)
    assert accepting.evaluate("1x0")
    assert accepting.evaluate("x")

    assert dfa.add_symbol_accept("1", True) == dfa


def test_remove_state():
    dfa = chain()
    result = dfa.remove_state(1, 2)
    assert result == DFA("a", 2, [False, True], {(0, "a"): 1, (1, "a"): 1})

    # The input automaton is untouched
    assert dfa.states == 3


def test_remove_state_replacement_below():
    dfa = DFA(
        "ab",
        3,
        [False, True, True],
        {(0, "a"): 1, (0, "b"): 2, (1, "a"): 1, (1, "b"): 1, (2, "a"): 2, (2, "b"): 2},
    )
    result = dfa.remove_state(2, 1)
    assert result.states == 2
    assert result.transitions == {(0, "a"): 1, (0, "b"): 1, (1, "a"): 1, (1, "b"): 1}


def test_remove_initial_state():
    result = chain().remove_state(0, 1)
    assert result == DFA("a", 2, [False, True], {(0, "a"): 1, (1, "a"): 1})


def test_remove_state_errors():
    dfa = chain()
    with pytest.raises(StateRemovalError):
        dfa.remove_state(3, 0)
    with pytest.raises(StateRemovalError):
        dfa.remove_state(1, 3)
    with pytest.raises(StateRemovalError):
        dfa.remove_state(-1, 0)
    with pytest.raises(StateRemovalError):
        dfa.remove_state(1, 1)
    with pytest.raises(StateRemovalError):
        dfa.remove_state(0, 2)
    with pytest.raises(ValueError):
        dfa.remove_state(0, 0)


def test_remove_state_keeps_partial():
    dfa = DFA("ab", 3, [False, False, True], {(0, "a"): 2, (1, "a"): 0, (2, "a"): 2})
    result = dfa.remove_state(1, 0)
    assert result.transitions == {(0, "a"): 1, (1, "a"): 1}
    assert not result.is_total()


def test_reachability():
    dfa = DFA("a", 4, [False] * 4, {(0, "a"): 1, (1, "a"): 0, (2, "a"): 3, (3, "a"): 2})
    assert dfa.reachable_from(0) == [0, 1]
    assert dfa.reachable_from(3) == [2, 3]
    assert dfa.unreachable_states() == [3, 2]
    assert div3().unreachable_states() == []


def test_reachability_rejects_invalid_targets():
    too_high = DFA("a", 2, [False, False], {(0, "a"): 5, (1, "a"): 0})
    with pytest.raises(MalformedDFAError):
        too_high.reachable_from(0)
    with pytest.raises(MalformedDFAError):
        too_high.unreachable_states()

    # A negative target must not wrap around to the last state
    negative = DFA("a", 2, [False, True], {(0, "a"): -1, (1, "a"): 1})
    with pytest.raises(MalformedDFAError):
        negative.is_permanently_rejecting(0)
    with pytest.raises(InvalidState):
        negative.evaluate("a")


def test_permanently():
    dfa = chain()
    assert dfa.is_permanently_accepting(2)
    assert not dfa.is_permanently_accepting(0)
    assert not dfa.is_permanently_rejecting(0)
    assert not dfa.is_permanently_rejecting(2)

    d = div3()
    for state in range(3):
        assert not d.is_permanently_accepting(state)
        assert not d.is_permanently_rejecting(state)


def test_dump():
    out = StringIO()
    chain().dump(out)
    text = out.getvalue()
    assert text.startswith("@ 0")
    assert "2 ||" in text
    assert "a -> 2" in text

import pytest
from dfalgebra.automata import gen


def test_empty_and_all():
    empty = gen.empty("ab")
    full = gen.all_strings("ab")
    assert empty.states == full.states == 1
    for s in ["", "a", "abba"]:
        assert not empty.evaluate(s)
        assert full.evaluate(s)


def test_modulo_n():
    dfa = gen.modulo_n("01", "1", 0, 2)
    assert dfa.evaluate("1010")
    assert not dfa.evaluate("101")
    assert dfa.evaluate("")
    assert dfa.states == 2

    dfa = gen.modulo_n("abc", "ab", 2, 3)
    assert dfa.evaluate("ab")
    assert dfa.evaluate("cacbc")
    assert not dfa.evaluate("abc" * 3)
    assert dfa.evaluate("aaaaa")


def test_modulo_n_errors():
    with pytest.raises(gen.GeneratorError):
        gen.modulo_n("01", "1", 2, 2)
    with pytest.raises(gen.GeneratorError):
        gen.modulo_n("01", "1", -1, 2)
    with pytest.raises(ValueError):
        gen.modulo_n("01", "1", 0, 0)


def test_exact_length():
    dfa = gen.exact_length("01", "01", 3)
    assert dfa.evaluate("010")
    assert not dfa.evaluate("01")
    assert not dfa.evaluate("0101")

    # Only counting "a"
    dfa = gen.exact_length("ab", "a", 2)
    assert dfa.evaluate("bab" + "a")
    assert not dfa.evaluate("bbb")

    assert gen.exact_length("ab", "ab", 0).evaluate("")
    with pytest.raises(gen.GeneratorError):
        gen.exact_length("01", "01", -1)


def test_length_or_less():
    dfa = gen.length_or_less("01", "1", 2)
    assert dfa.evaluate("")
    assert dfa.evaluate("0000")
    assert dfa.evaluate("0101")
    assert not dfa.evaluate("111")
    assert not dfa.evaluate("10101")
    with pytest.raises(gen.GeneratorError):
        gen.length_or_less("01", "1", -3)


def test_only_string():
    dfa = gen.only_string("01", "101")
    assert dfa.evaluate("101")
    for s in ["", "1", "10", "1011", "100", "0101"]:
        assert not dfa.evaluate(s)

    assert gen.only_string("01", "").evaluate("")
    assert not gen.only_string("01", "").evaluate("0")


def test_begins_with():
    dfa = gen.begins_with("01", "10")
    for s in ["10", "101", "1000"]:
        assert dfa.evaluate(s)
    for s in ["", "01", "1", "110"]:
        assert not dfa.evaluate(s)


def test_ends_with():
    dfa = gen.ends_with("01", "10")
    for s in ["10", "110", "010", "1010"]:
        assert dfa.evaluate(s)
    for s in ["", "1", "101", "100"]:
        assert not dfa.evaluate(s)

    # Overlapping occurrences
    dfa = gen.ends_with("a", "aa")
    assert dfa.evaluate("aaa")
    assert not dfa.evaluate("a")


def test_contains_substring():
    dfa = gen.contains_substring("abc", "ab")
    for s in ["ab", "cab", "abab", "aabb", "ccabcc"]:
        assert dfa.evaluate(s)
    for s in ["", "ba", "aa", "acb", "bbbaa"]:
        assert not dfa.evaluate(s)

    dfa = gen.contains_substring("ab", "aab")
    assert dfa.evaluate("aaab")
    assert not dfa.evaluate("abab")


def test_pattern_outside_alphabet():
    for fn in (gen.only_string, gen.begins_with, gen.ends_with, gen.contains_substring):
        with pytest.raises(gen.GeneratorError):
            fn("01", "102")


def test_overlap():
    assert gen.overlap("abab", "aba") == 1
    assert gen.overlap("abab", "abaa") == 1
    assert gen.overlap("aab", "aaa") == 2
    assert gen.overlap("ab", "b") == 0


def test_generated_are_well_formed():
    dfas = [
        gen.empty("01"),
        gen.all_strings("01"),
        gen.modulo_n("01", "1", 1, 3),
        gen.exact_length("01", "0", 2),
        gen.length_or_less("01", "01", 2),
        gen.only_string("01", "11"),
        gen.begins_with("01", "0"),
        gen.ends_with("01", "011"),
        gen.contains_substring("01", "010"),
    ]
    for dfa in dfas:
        assert dfa.is_well_formed()
        assert dfa.alphabet == ("0", "1")

import pytest

from sprachcoach.scoring import AlignmentOperation, align, edit_distance


def _expected_side(ops):
    return [op.expected for op in ops if op.op != "insertion"]


def _actual_side(ops):
    return [op.actual for op in ops if op.op != "omission"]


@pytest.mark.parametrize(
    "ref, hyp",
    [
        ([], []),
        (["a"], []),
        ([], ["a", "b"]),
        (["ich", "gehe", "heute"], ["ich", "gehe", "morgen", "heute"]),
        (["the", "the", "cat"], ["the", "cat"]),
        (["a", "b", "c", "d"], ["d", "c", "b", "a"]),
        (["wir", "fahren", "nach", "berlin"], ["fahren", "wir", "berlin", "nach", "heute"]),
    ],
)
def test_alignment_reproduces_both_sequences(ref, hyp):
    ops = align(ref, hyp)
    assert _expected_side(ops) == ref
    assert _actual_side(ops) == hyp


def test_identical_sequences_are_all_matches():
    tokens = ["guten", "morgen", "guten", "tag"]
    ops = align(tokens, tokens)
    assert len(ops) == len(tokens)
    assert all(op.op == "match" for op in ops)


def test_single_substitution():
    ops = align(["ich", "gehe", "heute", "einkaufen"], ["ich", "gehe", "morgen", "einkaufen"])
    assert [op for op in ops if op.is_error] == [AlignmentOperation.substitution("heute", "morgen")]


def test_omission_and_insertion():
    ops = align(["wir", "fahren", "nach", "berlin"], ["wir", "fahren", "berlin"])
    assert [op for op in ops if op.is_error] == [AlignmentOperation.omission("nach")]

    ops = align(["guten", "morgen"], ["guten", "schönen", "morgen"])
    assert [op for op in ops if op.is_error] == [AlignmentOperation.insertion("schönen")]


def test_tie_break_omits_the_earlier_repeated_token():
    ops = align(["the", "the", "cat"], ["the", "cat"])
    assert ops == [
        AlignmentOperation.omission("the"),
        AlignmentOperation.match("the", "the"),
        AlignmentOperation.match("cat", "cat"),
    ]


def test_tie_break_prefers_substitution_over_omission():
    ops = align(["a", "b"], ["c"])
    assert ops == [AlignmentOperation.omission("a"), AlignmentOperation.substitution("b", "c")]


def test_boundaries():
    assert align([], []) == []
    assert align(["a", "b"], []) == [AlignmentOperation.omission("a"), AlignmentOperation.omission("b")]
    assert align([], ["x"]) == [AlignmentOperation.insertion("x")]


def test_edit_distance():
    assert edit_distance(["a", "b", "c"], ["a", "c"]) == 1
    assert edit_distance(["a", "b"], ["c", "d", "e"]) == 3
    assert edit_distance([], []) == 0

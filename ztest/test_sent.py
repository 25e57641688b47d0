#

# tokens, sentences, predicates and frames

import pytest
from zsrl.data.inst import Token, TokenSentence, TokenSentenceAndPredicates, SemanticFrameSet, yield_arguments
from zsrl.utils import get_json_serializer
from ztoy import scenario_sentence, scenario_frame

def test_tree():
    sent = scenario_sentence()
    t = sent.get_token
    assert len(sent) == 5
    assert [z.sentence_index for z in sent.get_roots()] == [4]
    assert sent.get_parent(t(4)) is None
    assert sent.get_parent(t(0)) == t(1)
    assert sent.get_children(t(2)) == [t(1), t(3)]
    assert sent.get_children(t(0)) == []
    assert t(1) < t(3) and t(1).comes_before(t(3)) and not t(3).comes_before(t(1))

def test_token_equality():
    a = Token(1, 2, "dog", "dog", "NN", "SBJ")
    b = Token(1, 2, "dog", "dog", "NN", "SBJ")
    assert a == b and hash(a) == hash(b)
    assert a != Token(1, 3, "dog", "dog", "NN", "SBJ")
    with pytest.raises(AttributeError):
        a.word = "cat"

def test_bad_heads():
    for heads in ([1, 0], [0, 3]):  # self-loop, out of range
        with pytest.raises(AssertionError):
            TokenSentence.create(["a", "b"], heads)
    # no root, two roots, a cycle away from the root
    for heads in ([2, 1], [0, 0], [0, 3, 2]):
        with pytest.raises(AssertionError):
            TokenSentence.create(["a", "b", "c"][:len(heads)], heads)

def test_predicate_list():
    sent = scenario_sentence()
    t = sent.get_token
    one = TokenSentenceAndPredicates.create_from_sent(sent, [t(3), t(1)])
    assert one.get_predicate_list() == (t(1), t(3))
    one.add_predicate(t(4))
    assert one.get_predicate_list() == (t(1), t(3), t(4))
    assert one.is_predicate(t(3)) and not one.is_predicate(t(2))
    # only the last one is checked when adding
    one.add_predicate(t(2))
    assert one.get_predicate_list() == (t(1), t(3), t(2), t(4))

def test_frame():
    frame = scenario_frame()
    t = frame.get_token
    assert list(frame) == [t(2)]
    assert frame.arguments_of(t(2)) == {t(1): "A0", t(3): "A1"}
    assert frame.arguments_of(t(4)) == {}
    assert frame.num_arguments() == 2
    assert sorted((p.sentence_index, a.sentence_index, lab) for _, p, a, lab in yield_arguments([frame])) \
           == [(2, 1, "A0"), (2, 3, "A1")]
    empty = frame.copy_without_arguments()
    assert empty.get_predicate_list() == frame.get_predicate_list() and empty.num_arguments() == 0
    with pytest.raises(AssertionError):
        frame.add_argument(t(0), t(1), "A0")  # not a predicate

def test_frame_json():
    frame = scenario_frame()
    ser = get_json_serializer(SemanticFrameSet)
    frame2 = ser.from_obj(ser.to_obj(frame))
    assert frame2.tokens == frame.tokens
    assert frame2.get_predicate_list() == frame.get_predicate_list()
    p = frame.get_token(2)
    assert frame2.arguments_of(p) == frame.arguments_of(p)

def main():
    test_tree()
    test_token_equality()
    test_bad_heads()
    test_predicate_list()
    test_frame()
    test_frame_json()

if __name__ == '__main__':
    main()

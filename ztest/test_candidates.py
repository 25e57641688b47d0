#

# argument candidates and consistency constraints

from zsrl.argument import argument_candidates, ConsistencyConf, enforce_consistency, is_restricted_label
from ztoy import scenario_sentence, scenario_frame

def test_candidates():
    sent = scenario_sentence()
    t = sent.get_token
    # children of token2, then children of token4 (including token2 itself), then the root
    assert argument_candidates(sent, t(2)) == [t(1), t(2), t(3), t(4)]
    assert argument_candidates(sent, t(4)) == [t(2), t(4)]
    assert argument_candidates(sent, t(0)) == [t(0), t(1), t(2), t(3), t(4)]
    for p in sent.tokens:
        cands = argument_candidates(sent, p)
        assert len(set(cands)) == len(cands)
        assert [z.sentence_index for z in cands] == sorted(z.sentence_index for z in cands)
        assert t(4) in cands

def test_restricted_labels():
    for lab in ["A0", "A1", "A9"]:
        assert is_restricted_label(lab)
    for lab in ["A10", "AM-TMP", "NIL", "a0", "A", "R-A0", "", None]:
        assert not is_restricted_label(lab)

def _scores(sent):
    t = sent.get_token
    return {t(i): {"A0": 1., "A1": 0.5, "AM-TMP": 0.2, "NIL": 0.} for i in [0, 1, 3, 4]}

def test_enforce():
    frame = scenario_frame()
    t = frame.get_token
    scores = _scores(frame)
    enforce_consistency(ConsistencyConf(), t(2), t(1), "A0", frame, False, scores)
    # A0 is used up everywhere
    assert all("A0" not in z for z in scores.values())
    # token0 is inside token1's span: no core roles any more
    assert set(scores[t(0)].keys()) == {"AM-TMP", "NIL"}
    assert set(scores[t(3)].keys()) == {"A1", "AM-TMP", "NIL"}
    assert set(scores[t(4)].keys()) == {"A1", "AM-TMP", "NIL"}

def test_enforce_ancestor():
    frame = scenario_frame()
    t = frame.get_token
    scores = _scores(frame)
    # the traversal stops at the predicate, so nothing under the predicate is touched
    enforce_consistency(ConsistencyConf(), t(2), t(4), "A1", frame, False, scores)
    for i in [0, 1, 3]:
        assert set(scores[t(i)].keys()) == {"A0", "AM-TMP", "NIL"}

def test_enforce_noop():
    frame = scenario_frame()
    t = frame.get_token
    # non-core labels
    for lab in ["AM-TMP", "A10", "NIL"]:
        scores = _scores(frame)
        enforce_consistency(ConsistencyConf(), t(2), t(1), lab, frame, False, scores)
        assert scores == _scores(frame)
    # disabled or training
    for conf, training in [(ConsistencyConf.direct_conf(enabled=False), False), (ConsistencyConf(), True)]:
        scores = _scores(frame)
        enforce_consistency(conf, t(2), t(1), "A0", frame, training, scores)
        assert scores == _scores(frame)
    # enabled for training
    scores = _scores(frame)
    enforce_consistency(ConsistencyConf.direct_conf(when_training=True), t(2), t(1), "A0", frame, True, scores)
    assert "A0" not in scores[t(3)]

def test_enforce_predicate_itself():
    frame = scenario_frame()
    t = frame.get_token
    scores = _scores(frame)
    enforce_consistency(ConsistencyConf(), t(2), t(2), "A1", frame, False, scores)
    assert all("A1" not in z for z in scores.values())
    assert all("A0" in z for z in scores.values())

def main():
    test_candidates()
    test_restricted_labels()
    test_enforce()
    test_enforce_ancestor()
    test_enforce_noop()
    test_enforce_predicate_itself()

if __name__ == '__main__':
    main()

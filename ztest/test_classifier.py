#

# argument classifier: datasets, structured updates, labels, features, decoding

from typing import Dict
from zsrl.data.inst import SemanticFrameSet
from zsrl.data.dataset import Datum, Dataset
from zsrl.classifier import ZClassifier, format_manual_training_label, parse_manual_training_label
from zsrl.argument import ArgumentClassifier, ArgClassifierConf, ArgumentFeatureGenerator, ArgDecoder
from ztoy import scenario_frame, toy_corpus

# remember what it gets, score by the word of the candidate
class _RecordingClassifier(ZClassifier):
    def __init__(self, word_scores: Dict[str, Dict[str, float]] = None, default_scores: Dict[str, float] = None):
        self.word_scores = {} if word_scores is None else word_scores
        self.default_scores = {"NIL": 0.} if default_scores is None else default_scores
        self.trained = []
        self.manual_trained = []
        self.num_average = 0

    def scores_of(self, datum: Datum):
        for f in datum.features:
            if f.startswith("AW=") and f[3:] in self.word_scores:
                return dict(self.word_scores[f[3:]])
        return dict(self.default_scores)

    def training_scores(self, datum: Datum):
        return self.scores_of(datum)

    def train(self, dataset: Dataset):
        self.trained.append(dataset)

    def manual_train(self, dataset: Dataset):
        self.manual_trained.append(dataset)
        return len(dataset)

    def reset(self):
        pass

    def update_average_weights(self):
        self.num_average += 1

def test_manual_label():
    lab = format_manual_training_label("NIL", "A0")
    assert parse_manual_training_label(lab) == ("NIL", "A0")
    assert format_manual_training_label("A0", "A0") != format_manual_training_label("A0", "A1")

def test_label_set():
    frames = [scenario_frame(), scenario_frame()]
    frames[1].add_argument(frames[1].get_token(2), frames[1].get_token(4), "AM-TMP")
    assert ArgumentClassifier.get_label_set(frames, print_table=True) == ["NIL", "A0", "A1", "AM-TMP"]
    assert ArgumentClassifier.get_label_set([]) == ["NIL"]

def test_batch_dataset():
    clf = _RecordingClassifier()
    arg_clf = ArgumentClassifier(["A0", "A1"], ArgClassifierConf.direct_conf(feature_count_threshold=1), classifier=clf)
    frame = scenario_frame()
    dataset = arg_clf.build_dataset([frame])
    # candidates of token2: 1, 2, 3, 4
    assert dataset.labels() == ["A0", "NIL", "A1", "NIL"]
    assert all(len(d.features) > 0 for d in dataset)
    arg_clf.unstructured_train([frame, frame])
    assert len(clf.trained) == 1 and len(clf.trained[0]) == 8
    # two predicates with overlapping candidates: one datum per (predicate, candidate)
    t = frame.get_token
    frame2 = SemanticFrameSet.create_from_sent(frame, [t(2), t(1)])
    frame2.add_argument(t(2), t(1), "A0")
    frame2.add_argument(t(1), t(0), "A1")
    dataset2 = arg_clf.build_dataset([frame2])
    # candidates of token1: 0, 1, 2, 3, 4; of token2: 1, 2, 3, 4
    assert len(dataset2) == 5 + 4
    assert dataset2.labels() == ["A1", "NIL", "NIL", "NIL", "NIL"] + ["A0", "NIL", "NIL", "NIL"]

def test_feature_threshold():
    dataset = Dataset([Datum(["a", "b"], "X"), Datum(["a", "c"], "Y"), Datum(["a", "b"], "X")])
    kept = dataset.apply_feature_count_threshold(2)
    assert kept == {"a", "b"}
    assert [d.features for d in dataset] == [["a", "b"], ["a"], ["a", "b"]]

def test_update_nil_pairing():
    clf = _RecordingClassifier()
    arg_clf = ArgumentClassifier(["A0", "A1"], classifier=clf)
    gold = scenario_frame()
    t = gold.get_token
    # the predicted one does not know the predicate
    predicted = SemanticFrameSet.create_from_sent(gold, [])
    arg_clf.update(predicted, gold)
    assert clf.manual_trained[-1].labels() == [format_manual_training_label(a, b) for a, b in
                                               [("NIL", "A0"), ("NIL", "NIL"), ("NIL", "A1"), ("NIL", "NIL")]]
    # the predicted one with a wrong and a spurious argument
    predicted = SemanticFrameSet.create_from_sent(gold, [t(2)])
    predicted.add_argument(t(2), t(1), "A1")
    predicted.add_argument(t(2), t(4), "AM-TMP")
    arg_clf.update(predicted, gold)
    assert clf.manual_trained[-1].labels() == [format_manual_training_label(a, b) for a, b in
                                               [("A1", "A0"), ("NIL", "NIL"), ("NIL", "A1"), ("AM-TMP", "NIL")]]

def test_feature_generators():
    frame = scenario_frame()
    t = frame.get_token
    basic = ArgumentFeatureGenerator.create("basic")
    feats = basic.datum_from(frame, t(1), t(2)).features
    assert "AW=dog" in feats and "PL=chase" in feats and "POSI=BEFORE" in feats and "REL=CHILD" in feats
    assert "PATH=SBJ^" in feats
    assert "PATH=VCv" in basic.features_of(frame, t(4), t(2))
    assert "PATH=SBJ^VCv" not in feats
    assert "PATH=NMOD^SBJ^" in basic.features_of(frame, t(0), t(2))
    assert not basic.is_trainable()
    # --
    ext = ArgumentFeatureGenerator.create("extensible")
    assert ext.is_trainable()
    assert ext.add_conjunction("AP", "PP")
    assert not ext.add_conjunction("AP", "PP")
    feats2 = ext.features_of(frame, t(1), t(2))
    assert "AP&PP=NN&VBD" in feats2 and set(feats) < set(feats2)
    ext2 = ArgumentFeatureGenerator.create("extensible")
    ext2.set_state(ext.get_state())
    assert ext2.features_of(frame, t(1), t(2)) == feats2

def test_decode_consistency():
    frame = scenario_frame()
    t = frame.get_token
    # everyone likes A0 best
    clf = _RecordingClassifier(default_scores={"A0": 1., "A1": 0.5, "NIL": 0.})
    for key in ["local", "greedy"]:
        arg_clf = ArgumentClassifier(["A0", "A1"], ArgClassifierConf.direct_conf(decoder=key), classifier=clf)
        pred = arg_clf.frames_with_arguments(frame)
        assert pred is not frame and pred.get_predicate_list() == frame.get_predicate_list()
        labels = sorted(pred.arguments_of(t(2)).values())
        assert labels == ["A0", "A1"], f"{key}: {labels}"
        # without constraints
        arg_clf.set_consistency_mode(False, False)
        assert sorted(arg_clf.frames_with_arguments(frame).arguments_of(t(2)).values()) == ["A0"] * 4
        # training mode does not enforce by default
        arg_clf.set_consistency_mode(True, False)
        assert len(arg_clf.training_frames_with_arguments(frame).arguments_of(t(2))) == 4

def test_decode_orders():
    frame = scenario_frame()
    t = frame.get_token
    # "cats" (token3) is the better A0, but the left-to-right decoder meets "dog" (token1) first
    clf = _RecordingClassifier(word_scores={
        "dog": {"A0": 1., "A1": 0.8, "NIL": 0.}, "cats": {"A0": 3., "A1": -1., "NIL": 0.}})
    local = ArgumentClassifier(["A0", "A1"], ArgClassifierConf.direct_conf(decoder="local"), classifier=clf)
    assert local.frames_with_arguments(frame).arguments_of(t(2)) == {t(1): "A0"}
    greedy = ArgumentClassifier(["A0", "A1"], ArgClassifierConf.direct_conf(decoder="greedy"), classifier=clf)
    assert greedy.frames_with_arguments(frame).arguments_of(t(2)) == {t(3): "A0", t(1): "A1"}
    assert sorted(ArgDecoder.keys()) == ["greedy", "local"]

def test_lifecycle():
    clf = _RecordingClassifier()
    arg_clf = ArgumentClassifier(["A1", "NIL", "A0", "A1"], classifier=clf)
    assert arg_clf.labels == ["NIL", "A1", "A0"]
    arg_clf.update_average_weights()
    assert clf.num_average == 1
    assert not arg_clf.is_feature_trainable()
    assert arg_clf.get_feature_generator() is arg_clf.feature_generator
    arg_clf.set_consistency_mode(False, True)
    assert not arg_clf.consistency.enabled and arg_clf.consistency.when_training

def main():
    test_manual_label()
    test_label_set()
    test_batch_dataset()
    test_feature_threshold()
    test_update_nil_pairing()
    test_feature_generators()
    test_decode_consistency()
    test_decode_orders()
    test_lifecycle()

if __name__ == '__main__':
    main()

#

# the argument classifier: candidates + features + a classifier + consistency
# -- batch training from gold frames, structured updates from (predicted, gold) frame pairs

__all__ = [
    "ArgClassifierConf", "ArgumentClassifier",
]

from typing import List, Dict, Iterable
from zsrl.utils import Conf, zlog, save_archive, load_archive, DictHelper
from zsrl.data.inst import Token, TokenSentenceAndPredicates, SemanticFrameSet
from zsrl.data.dataset import Dataset
from zsrl.classifier import ZClassifier, PerceptronConf, format_manual_training_label
from .candidates import argument_candidates
from .consistency import ConsistencyConf, enforce_consistency
from .featgen import FeatGenConf, ArgumentFeatureGenerator
from .decoders import ArgDecoder

# features seen fewer times than this are discarded for batch training
FEATURE_COUNT_THRESHOLD = 3

class ArgClassifierConf(Conf):
    def __init__(self):
        self.classifier = "perceptron"  # which classifier
        self.featgen = "basic"  # which feature generator
        self.decoder = "local"  # which decoder
        self.feature_count_threshold = FEATURE_COUNT_THRESHOLD
        # sub-confs
        self.consistency = ConsistencyConf()
        self.featgen_conf = FeatGenConf()
        self.perceptron = PerceptronConf()

    def classifier_kwargs(self):
        return {"conf": self.perceptron} if self.classifier == "perceptron" else {}

class ArgumentClassifier:
    NIL_LABEL = "NIL"
    FEATURE_COUNT_THRESHOLD = FEATURE_COUNT_THRESHOLD
    FORMAT = "zsrl-argclf"
    VERSION = 1

    def __init__(self, labels: Iterable[str], conf: ArgClassifierConf = None,
                 feature_generator: ArgumentFeatureGenerator = None, classifier: ZClassifier = None):
        self.conf = conf if conf is not None else ArgClassifierConf()
        conf = self.conf
        # --
        self.labels = [ArgumentClassifier.NIL_LABEL] + [z for z in dict.fromkeys(labels) if z != ArgumentClassifier.NIL_LABEL]
        self.feature_generator = feature_generator if feature_generator is not None \
            else ArgumentFeatureGenerator.create(conf.featgen, conf.featgen_conf)
        self.classifier = classifier if classifier is not None \
            else ZClassifier.create(conf.classifier, self.labels, **conf.classifier_kwargs())
        self.decoder = ArgDecoder.create(conf.decoder)
        self.consistency = conf.consistency

    def __repr__(self):
        return f"ArgumentClassifier(L={len(self.labels)},featgen={self.feature_generator.reg_key},clf={self.classifier})"

    # =====
    # labels

    @staticmethod
    def get_label_set(frames: Iterable[SemanticFrameSet], print_table=False) -> List[str]:
        counts = {}
        for frame in frames:
            for p in frame:
                for a, lab in frame.arguments_of(p).items():
                    counts[lab] = counts.get(lab, 0) + 1
        ret = [ArgumentClassifier.NIL_LABEL] + [z for z in counts.keys() if z != ArgumentClassifier.NIL_LABEL]
        if print_table:
            zlog(f"Label distribution:\n{DictHelper.get_counts_info_table(counts, key=lambda x: -counts[x]).to_string()}",
                 func="report")
        return ret

    # =====
    # scoring & decoding

    # candidate -> label -> score
    def arg_class_scores(self, frame: TokenSentenceAndPredicates, predicate: Token, training: bool) -> Dict[Token, Dict[str, float]]:
        _featgen = self.feature_generator
        _score_f = self.classifier.training_scores if training else self.classifier.scores_of
        ret = {}
        for cand in argument_candidates(frame, predicate):
            ret[cand] = _score_f(_featgen.datum_from(frame, cand, predicate))
        return ret

    def enforce_consistency(self, predicate: Token, arg: Token, arg_label: str, frame: SemanticFrameSet,
                            training: bool, scores: Dict[Token, Dict[str, float]]):
        enforce_consistency(self.consistency, predicate, arg, arg_label, frame, training, scores)

    # with the final (averaged) weights
    def frames_with_arguments(self, frame: TokenSentenceAndPredicates) -> SemanticFrameSet:
        return self.decoder.decode(self, frame, False)

    # with the in-progress weights
    def training_frames_with_arguments(self, frame: TokenSentenceAndPredicates) -> SemanticFrameSet:
        return self.decoder.decode(self, frame, True)

    # =====
    # datasets & training

    # one datum per (predicate, candidate), labeled with the gold role or NIL
    def build_dataset(self, frames: Iterable[SemanticFrameSet]) -> Dataset:
        _featgen, _nil = self.feature_generator, ArgumentClassifier.NIL_LABEL
        ret = Dataset()
        for frame in frames:
            for p in frame:
                gold_args = frame.arguments_of(p)
                for cand in argument_candidates(frame, p):
                    datum = _featgen.datum_from(frame, cand, p)
                    datum.set_label(gold_args.get(cand, _nil))
                    ret.add(datum)
        return ret

    # one datum per (gold predicate, candidate), labeled with the (predicted, gold) pair
    def build_update_dataset(self, predicted: SemanticFrameSet, gold: SemanticFrameSet) -> Dataset:
        _featgen, _nil = self.feature_generator, ArgumentClassifier.NIL_LABEL
        ret = Dataset()
        for p in gold:
            gold_args = gold.arguments_of(p)
            pred_args = predicted.arguments_of(p) if predicted.is_predicate(p) else {}
            for cand in argument_candidates(predicted, p):
                datum = _featgen.datum_from(predicted, cand, p)
                datum.set_label(format_manual_training_label(pred_args.get(cand, _nil), gold_args.get(cand, _nil)))
                ret.add(datum)
        return ret

    def unstructured_train(self, frames: Iterable[SemanticFrameSet]):
        dataset = self.build_dataset(frames)
        dataset.apply_feature_count_threshold(self.conf.feature_count_threshold)
        zlog(f"Unstructured training of {self} with {dataset}.")
        self.classifier.train(dataset)

    def update(self, predicted: SemanticFrameSet, gold: SemanticFrameSet):
        dataset = self.build_update_dataset(predicted, gold)
        return self.classifier.manual_train(dataset)

    # =====
    # lifecycle

    def reset(self):
        self.classifier.reset()

    # note: remember to call this after training and before testing!
    def update_average_weights(self):
        self.classifier.update_average_weights()

    def set_consistency_mode(self, enabled: bool, when_training: bool):
        self.consistency = ConsistencyConf.direct_conf(enabled=enabled, when_training=when_training)
        self.conf.consistency = self.consistency

    def is_feature_trainable(self):
        return self.feature_generator.is_trainable()

    def get_feature_generator(self):
        return self.feature_generator

    # =====
    # storing

    def export_classifier(self, path: str):
        payload = {
            "conf": self.conf.to_json(), "labels": list(self.labels),
            "featgen": self.feature_generator.reg_key, "featgen_state": self.feature_generator.get_state(),
            "classifier": self.classifier.reg_key, "classifier_state": self.classifier.to_state(),
        }
        save_archive(payload, path, ArgumentClassifier.FORMAT, ArgumentClassifier.VERSION)

    @classmethod
    def import_classifier(cls, path: str):
        archive = load_archive(path, ArgumentClassifier.FORMAT, ArgumentClassifier.VERSION)
        conf = ArgClassifierConf()
        conf.from_json(archive["conf"])
        featgen = ArgumentFeatureGenerator.create(archive["featgen"], conf.featgen_conf)
        featgen.set_state(archive["featgen_state"])
        classifier = ZClassifier.create_from_state(archive["classifier"], archive["classifier_state"])
        return cls(archive["labels"], conf, feature_generator=featgen, classifier=classifier)

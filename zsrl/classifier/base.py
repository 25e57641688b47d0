#

# the classifier capability: what the argument classifiers need from a (linear) classifier

__all__ = [
    "ZClassifier", "format_manual_training_label", "parse_manual_training_label",
]

from typing import Dict, Iterable
from zsrl.utils import Registrable
from zsrl.data.dataset import Datum, Dataset

# =====
# (predicted, gold) pair label for manual (structured) training
MANUAL_LABEL_SEP = "=>"

def format_manual_training_label(predicted_label: str, gold_label: str):
    return f"{predicted_label}{MANUAL_LABEL_SEP}{gold_label}"

def parse_manual_training_label(label: str):
    fields = label.split(MANUAL_LABEL_SEP)
    assert len(fields) == 2, f"Bad manual training label: {label}"
    return fields[0], fields[1]

# =====
# note: an interface, concrete variants are registered with `ZClassifier.reg_decorator(key)`
class ZClassifier(Registrable):
    # label -> score with the final (averaged) weights
    def scores_of(self, datum: Datum) -> Dict[str, float]: raise NotImplementedError()

    # best label with the final weights
    def class_of(self, datum: Datum) -> str:
        scores = self.scores_of(datum)
        return max(scores.keys(), key=lambda k: scores[k])  # note: first one for ties

    # label -> score with the in-progress weights
    def training_scores(self, datum: Datum) -> Dict[str, float]: raise NotImplementedError()

    # (re-)estimate from a dataset of (features, label)
    def train(self, dataset: Dataset): raise NotImplementedError()

    # corrective updates from a dataset with (predicted, gold) pair labels
    def manual_train(self, dataset: Dataset): raise NotImplementedError()

    def reset(self): raise NotImplementedError()

    # finalize the weights used for `scores_of`, need to be called after training!
    def update_average_weights(self): raise NotImplementedError()

    # plain-data state for storing
    def to_state(self) -> Dict: raise NotImplementedError()

    @classmethod
    def from_state(cls, state: Dict): raise NotImplementedError()

    def save(self, path: str): raise NotImplementedError()

    @classmethod
    def load(cls, path: str): raise NotImplementedError()

    # =====
    @staticmethod
    def create(key: str, labels: Iterable[str], **kwargs):
        entry = ZClassifier.lookup(key)
        assert entry is not None, f"Unknown classifier: {key}, should be in {list(ZClassifier.keys())}"
        return entry.T(labels, **kwargs)

    @staticmethod
    def create_from_state(key: str, state: Dict):
        entry = ZClassifier.lookup(key)
        assert entry is not None, f"Unknown classifier: {key}, should be in {list(ZClassifier.keys())}"
        return entry.T.from_state(state)

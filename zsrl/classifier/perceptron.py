#

# multi-class averaged perceptron over sparse string features

__all__ = [
    "PerceptronConf", "PerceptronClassifier",
]

from typing import Dict, Iterable, List
import numpy as np
from zsrl.utils import Conf, Random, MathHelper, zlog, zwarn, save_archive, load_archive
from zsrl.data.dataset import Datum, Dataset
from .base import ZClassifier, parse_manual_training_label

class PerceptronConf(Conf):
    def __init__(self):
        self.max_epochs = 10  # epochs for batch training
        self.shuffle = True  # shuffle the data for each epoch
        self.learning_rate = 1.
        self.grow_in_manual = True  # allow unseen features/labels in manual updates
        self.init_rows = 64  # initial capacity (features)

    def _do_validate(self):
        assert self.max_epochs >= 0 and self.learning_rate > 0.

@ZClassifier.reg_decorator("perceptron")
class PerceptronClassifier(ZClassifier):
    FORMAT = "zsrl-perceptron"
    VERSION = 1

    def __init__(self, labels: Iterable[str], conf: PerceptronConf = None):
        self.conf = conf if conf is not None else PerceptronConf()
        # vocabs
        self.labels: List[str] = []
        self.label2idx: Dict[str, int] = {}
        self.features: List[str] = []
        self.feat2idx: Dict[str, int] = {}
        # weights: [F, L]; averaging with the trick of avg=W-U/c
        self.weights = np.zeros([0, 0], dtype=np.float64)
        self.accu_weights = np.zeros([0, 0], dtype=np.float64)  # sum of c*delta
        self.avg_weights = np.zeros([0, 0], dtype=np.float64)
        self.num_ticks = 1  # c
        for lab in labels:
            self._add_label(lab)

    def __repr__(self):
        return f"PerceptronClassifier(L={len(self.labels)},F={len(self.features)},c={self.num_ticks})"

    # =====
    # vocabs and growing

    def _resize(self, num_feats: int, num_labels: int):
        old_f, old_l = self.weights.shape
        if num_feats <= old_f and num_labels <= old_l:
            return
        new_f = max(num_feats, old_f, self.conf.init_rows)
        if num_feats > old_f:
            new_f = max(new_f, 2*old_f)  # amortized growing
        new_l = max(num_labels, old_l)
        for name in ["weights", "accu_weights", "avg_weights"]:
            old_arr = getattr(self, name)
            new_arr = np.zeros([new_f, new_l], dtype=np.float64)
            new_arr[:old_arr.shape[0], :old_arr.shape[1]] = old_arr
            setattr(self, name, new_arr)

    def _add_label(self, label: str):
        idx = self.label2idx.get(label)
        if idx is None:
            idx = len(self.labels)
            self.labels.append(label)
            self.label2idx[label] = idx
            self._resize(len(self.features), len(self.labels))
        return idx

    def _add_feature(self, feature: str):
        idx = self.feat2idx.get(feature)
        if idx is None:
            idx = len(self.features)
            self.features.append(feature)
            self.feat2idx[feature] = idx
            self._resize(len(self.features), len(self.labels))
        return idx

    def _feature_idxes(self, features: Iterable[str], add: bool):
        if add:
            return [self._add_feature(f) for f in features]
        else:
            _get = self.feat2idx.get
            return [i for i in (_get(f) for f in features) if i is not None]

    def _score_arr(self, weights: np.ndarray, datum: Datum):
        idxes = self._feature_idxes(datum.features, False)
        num_labels = len(self.labels)
        if len(idxes) == 0:
            return np.zeros(num_labels, dtype=np.float64)
        return weights[idxes, :num_labels].sum(0)

    def _arr2dict(self, arr: np.ndarray):
        return {lab: float(arr[i]) for i, lab in enumerate(self.labels)}

    # one perceptron step: +gold, -pred on all the features
    def _step(self, feat_idxes: List[int], pred_idx: int, gold_idx: int):
        if pred_idx != gold_idx and len(feat_idxes) > 0:
            lr, c = self.conf.learning_rate, self.num_ticks
            for f in feat_idxes:  # note: repeated features count repeatedly
                self.weights[f, gold_idx] += lr
                self.weights[f, pred_idx] -= lr
                self.accu_weights[f, gold_idx] += c * lr
                self.accu_weights[f, pred_idx] -= c * lr
        self.num_ticks += 1

    # =====
    # scoring

    def scores_of(self, datum: Datum) -> Dict[str, float]:
        return self._arr2dict(self._score_arr(self.avg_weights, datum))

    def training_scores(self, datum: Datum) -> Dict[str, float]:
        return self._arr2dict(self._score_arr(self.weights, datum))

    def probs_of(self, datum: Datum) -> Dict[str, float]:
        return MathHelper.softmax_dict(self.scores_of(datum))

    # =====
    # training

    def train(self, dataset: Dataset):
        conf = self.conf
        # fresh weights for all features in the data
        self.reset()
        for d in dataset:
            self._add_label(d.label)
            self._feature_idxes(d.features, True)
        insts = [(self._feature_idxes(d.features, False), self.label2idx[d.label]) for d in dataset]
        num_labels = len(self.labels)
        zlog(f"Start training {self} with {len(insts)} datums.")
        for eidx in range(conf.max_epochs):
            if conf.shuffle:
                Random.shuffle(insts, "perceptron")
            num_err = 0
            for feat_idxes, gold_idx in insts:
                if len(feat_idxes) > 0:
                    pred_idx = int(np.argmax(self.weights[feat_idxes, :num_labels].sum(0)))
                else:
                    pred_idx = 0
                num_err += int(pred_idx != gold_idx)
                self._step(feat_idxes, pred_idx, gold_idx)
            zlog(f"Perceptron epoch {eidx}: err={num_err}/{len(insts)}", func="report")
            if num_err == 0:
                break

    def manual_train(self, dataset: Dataset):
        grow = self.conf.grow_in_manual
        num_update, num_skip = 0, 0
        for d in dataset:
            pred_lab, gold_lab = parse_manual_training_label(d.label)
            if grow:
                pred_idx, gold_idx = self._add_label(pred_lab), self._add_label(gold_lab)
            else:
                pred_idx, gold_idx = self.label2idx.get(pred_lab), self.label2idx.get(gold_lab)
                if pred_idx is None or gold_idx is None:
                    num_skip += 1
                    continue
            feat_idxes = self._feature_idxes(d.features, grow)
            num_update += int(pred_idx != gold_idx)
            self._step(feat_idxes, pred_idx, gold_idx)
        if num_skip > 0:
            zwarn(f"Skip {num_skip} datums with unknown labels in manual_train.")
        return num_update

    def reset(self):
        self.weights.fill(0.)
        self.accu_weights.fill(0.)
        self.avg_weights.fill(0.)
        self.num_ticks = 1

    def update_average_weights(self):
        self.avg_weights = self.weights - self.accu_weights / self.num_ticks

    # =====
    # storing

    def to_state(self) -> Dict:
        nf, nl = len(self.features), len(self.labels)
        return {
            "conf": self.conf.to_json(), "labels": list(self.labels), "features": list(self.features),
            "weights": self.weights[:nf, :nl].copy(), "accu_weights": self.accu_weights[:nf, :nl].copy(),
            "avg_weights": self.avg_weights[:nf, :nl].copy(), "num_ticks": self.num_ticks,
        }

    @classmethod
    def from_state(cls, state: Dict):
        conf = PerceptronConf()
        conf.from_json(state["conf"])
        ret = cls(state["labels"], conf)
        for f in state["features"]:
            ret._add_feature(f)
        nf, nl = len(ret.features), len(ret.labels)
        ret.weights[:nf, :nl] = state["weights"]
        ret.accu_weights[:nf, :nl] = state["accu_weights"]
        ret.avg_weights[:nf, :nl] = state["avg_weights"]
        ret.num_ticks = state["num_ticks"]
        return ret

    def save(self, path: str):
        save_archive({"state": self.to_state()}, path, PerceptronClassifier.FORMAT, PerceptronClassifier.VERSION)

    @classmethod
    def load(cls, path: str):
        archive = load_archive(path, PerceptronClassifier.FORMAT, PerceptronClassifier.VERSION)
        return cls.from_state(archive["state"])

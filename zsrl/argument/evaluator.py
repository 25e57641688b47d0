#

# argument evaluator: labeled & unlabeled P/R/F1 over (predicate, argument) pairs

__all__ = [
    "ArgEvalConf", "ArgEvaluator", "ArgEvalResult",
]

from typing import List, Iterable
from zsrl.utils import Conf, F1EvalEntry, zwarn
from zsrl.data.inst import SemanticFrameSet

class ArgEvalConf(Conf):
    def __init__(self):
        self.ignore_labels = []  # labels to be excluded from both sides
        self.weight_labeled = 1.  # final result = weighted avg of labeled & unlabeled F1
        self.weight_unlabeled = 0.

    def _do_validate(self):
        assert self.weight_labeled + self.weight_unlabeled > 0.

class ArgEvalResult:
    def __init__(self, conf: ArgEvalConf):
        self.conf = conf
        self.labeled = F1EvalEntry()
        self.unlabeled = F1EvalEntry()
        self.num_frames = 0

    def __iadd__(self, other: 'ArgEvalResult'):
        self.labeled.combine(other.labeled)
        self.unlabeled.combine(other.unlabeled)
        self.num_frames += other.num_frames
        return self

    def get_result(self) -> float:
        conf = self.conf
        _w = conf.weight_labeled + conf.weight_unlabeled
        return (conf.weight_labeled * self.labeled.res + conf.weight_unlabeled * self.unlabeled.res) / _w

    def get_brief_str(self) -> str:
        lp, lr, lf = self.labeled.prf
        up, ur, uf = self.unlabeled.prf
        return f"L={lp:.4f}/{lr:.4f}/{lf:.4f} U={up:.4f}/{ur:.4f}/{uf:.4f}"

    def get_detailed_str(self) -> str:
        return f"Frames={self.num_frames}\nLabeled: {self.labeled}\nUnlabeled: {self.unlabeled}"

    def get_summary(self) -> dict:
        return {"labeled": self.labeled.prf, "unlabeled": self.unlabeled.prf, "res": self.get_result()}

    def __float__(self): return float(self.get_result())
    def __repr__(self): return f"{self.__class__.__name__}: {self.get_brief_str()}"

class ArgEvaluator:
    def __init__(self, conf: ArgEvalConf = None):
        self.conf = conf if conf is not None else ArgEvalConf()
        self.current_result = ArgEvalResult(self.conf)

    def reset(self):
        self.current_result = ArgEvalResult(self.conf)

    def get_current_result(self):
        return self.current_result

    def _get_args(self, frame: SemanticFrameSet):
        _ignore = set(self.conf.ignore_labels)
        ret = {}
        for p in frame:
            for a, lab in frame.arguments_of(p).items():
                if lab not in _ignore:
                    ret[(p.sentence_index, a.sentence_index)] = lab
        return ret

    # evaluate one pair of frame lists (accumulated into current result), return the result of this call
    def eval(self, gold_frames: Iterable[SemanticFrameSet], pred_frames: Iterable[SemanticFrameSet]):
        gold_frames, pred_frames = list(gold_frames), list(pred_frames)
        assert len(gold_frames) == len(pred_frames), "Unmatched number of frames!"
        res = ArgEvalResult(self.conf)
        for gold, pred in zip(gold_frames, pred_frames):
            if len(gold) != len(pred):
                zwarn(f"Unmatched sentence lengths: {gold} vs {pred}")
            gold_args, pred_args = self._get_args(gold), self._get_args(pred)
            num_unlabeled = len(set(gold_args.keys()) & set(pred_args.keys()))
            num_labeled = sum(int(gold_args.get(k) == v) for k, v in pred_args.items())
            res.labeled.record_p(num_labeled, len(pred_args))
            res.labeled.record_r(num_labeled, len(gold_args))
            res.unlabeled.record_p(num_unlabeled, len(pred_args))
            res.unlabeled.record_r(num_unlabeled, len(gold_args))
            res.num_frames += 1
        self.current_result += res
        return res

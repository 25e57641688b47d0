#

# decoders: from candidate label scores to the arguments of a new frame
# note: consistency is enforced after each commitment, which prunes the still-open score maps

__all__ = [
    "ArgDecoder", "LocalArgDecoder", "GreedyArgDecoder",
]

from typing import Dict
from zsrl.utils import Registrable
from zsrl.data.inst import Token, TokenSentenceAndPredicates, SemanticFrameSet

class ArgDecoder(Registrable):
    # "arg_classifier" should provide: NIL_LABEL, arg_class_scores, enforce_consistency
    def decode(self, arg_classifier, frame: TokenSentenceAndPredicates, training: bool) -> SemanticFrameSet:
        ret = SemanticFrameSet.create_from_sent(frame)  # same sentence and predicates, no args
        for predicate in ret:
            scores = arg_classifier.arg_class_scores(ret, predicate, training)
            self.decode_predicate(arg_classifier, ret, predicate, scores, training)
        return ret

    def decode_predicate(self, arg_classifier, frame: SemanticFrameSet, predicate: Token,
                         scores: Dict[Token, Dict[str, float]], training: bool):
        raise NotImplementedError()

    # commit one (predicate, arg, label) and prune the others
    @staticmethod
    def _commit(arg_classifier, frame: SemanticFrameSet, predicate: Token, arg: Token, label: str,
                scores: Dict[Token, Dict[str, float]], training: bool):
        del scores[arg]
        if label is None or label == arg_classifier.NIL_LABEL:
            return
        frame.add_argument(predicate, arg, label)
        arg_classifier.enforce_consistency(predicate, arg, label, frame, training, scores)

    @staticmethod
    def create(key: str):
        entry = ArgDecoder.lookup(key)
        assert entry is not None, f"Unknown decoder: {key}, should be in {list(ArgDecoder.keys())}"
        return entry.T()

# argmax of a label map, first one for ties
def _best_label(label_scores: Dict[str, float]):
    best_lab, best_score = None, None
    for lab, score in label_scores.items():
        if best_score is None or score > best_score:
            best_lab, best_score = lab, score
    return best_lab, best_score

@ArgDecoder.reg_decorator("local")
class LocalArgDecoder(ArgDecoder):
    # left to right, each candidate takes its best remaining label
    def decode_predicate(self, arg_classifier, frame: SemanticFrameSet, predicate: Token,
                         scores: Dict[Token, Dict[str, float]], training: bool):
        for cand in sorted(scores.keys(), key=lambda t: t.sentence_index):
            if cand not in scores:
                continue
            label, _ = _best_label(scores[cand])
            self._commit(arg_classifier, frame, predicate, cand, label, scores, training)

@ArgDecoder.reg_decorator("greedy")
class GreedyArgDecoder(ArgDecoder):
    # best-first: repeatedly commit the globally best (candidate, label)
    def decode_predicate(self, arg_classifier, frame: SemanticFrameSet, predicate: Token,
                         scores: Dict[Token, Dict[str, float]], training: bool):
        while len(scores) > 0:
            best_cand, best_lab, best_score = None, None, None
            for cand in sorted(scores.keys(), key=lambda t: t.sentence_index):
                lab, score = _best_label(scores[cand])
                if best_cand is None or (score is not None and (best_score is None or score > best_score)):
                    best_cand, best_lab, best_score = cand, lab, score
            self._commit(arg_classifier, frame, predicate, best_cand, best_lab, scores, training)

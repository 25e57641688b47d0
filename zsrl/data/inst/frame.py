#

# Semantic Frames: sentence + predicates + arguments of each predicate

__all__ = [
    "SemanticFrameSet", "yield_arguments",
]

from typing import Dict, Iterable, List, Tuple
from .sent import Token, TokenSentence, TokenSentenceAndPredicates

# =====
# the unit of gold data and of prediction
class SemanticFrameSet(TokenSentenceAndPredicates):
    def __init__(self):
        super().__init__()
        self._arguments: Dict[Token, Dict[Token, str]] = {}  # predicate -> {arg -> label}

    @classmethod
    def create_from_sent(cls, sentence: TokenSentence, predicates: Iterable[Token] = None):
        if predicates is None and isinstance(sentence, TokenSentenceAndPredicates):
            predicates = sentence.get_predicate_list()  # note: keep the predicates if there are
        return super().create_from_sent(sentence, () if predicates is None else predicates)

    def __repr__(self):
        return f"SemanticFrameSet(len={len(self)},P={len(self.predicate_list)},A={self.num_arguments()})"

    # note: iterating a frame set means iterating its predicates
    def __iter__(self):
        return iter(self.get_predicate_list())

    def add_argument(self, predicate: Token, arg: Token, label: str):
        assert self.is_predicate(predicate), f"Not a predicate: {predicate}"
        self._arguments.setdefault(predicate, {})[arg] = label

    def arguments_of(self, predicate: Token) -> Dict[Token, str]:
        return dict(self._arguments.get(predicate, {}))

    def clear_arguments(self, predicate: Token = None):
        if predicate is None:
            self._arguments.clear()
        else:
            self._arguments.pop(predicate, None)

    def num_arguments(self):
        return sum(len(z) for z in self._arguments.values())

    # a new frame set over the same sentence and predicates, but without args
    def copy_without_arguments(self):
        return SemanticFrameSet.create_from_sent(self, self.get_predicate_list())

    # =====
    def to_json(self):
        ret = super().to_json()
        args = []
        for p in self.predicate_list:
            for a, lab in sorted(self._arguments.get(p, {}).items(), key=lambda x: x[0].sentence_index):
                args.append([p.sentence_index, a.sentence_index, lab])
        ret["arguments"] = args
        return ret

    def from_json(self, data: Dict):
        super().from_json(data)
        self._arguments = {}
        for pidx, aidx, lab in data.get("arguments", []):
            self.add_argument(self.tokens[pidx], self.tokens[aidx], lab)

# (predicate, arg, label) of all
def yield_arguments(frames: Iterable[SemanticFrameSet]) -> Iterable[Tuple[SemanticFrameSet, Token, Token, str]]:
    for frame in frames:
        for p in frame:
            for a, lab in frame.arguments_of(p).items():
                yield frame, p, a, lab

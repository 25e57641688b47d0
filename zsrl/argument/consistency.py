#

# consistency constraints for core roles (A0-A9): each core role at most once per predicate,
#  and no core role for tokens on the path/subtree of an already labeled core argument

__all__ = [
    "ConsistencyConf", "is_restricted_label", "enforce_consistency",
]

import re
from typing import Dict, List
from zsrl.utils import Conf
from zsrl.data.inst import Token, SemanticFrameSet

_RESTRICTED_PATTERN = re.compile(r"A[0-9]")

class ConsistencyConf(Conf):
    def __init__(self):
        self.enabled = True  # enforce at all
        self.when_training = False  # also enforce in training-mode decoding

    def is_active(self, training: bool):
        return self.enabled and ((not training) or self.when_training)

def is_restricted_label(label: str):
    return label is not None and _RESTRICTED_PATTERN.fullmatch(label) is not None

# span of an arg: ancestors up to (excluding) the predicate + descendants (not going through the predicate)
def _arg_span(frame: SemanticFrameSet, predicate: Token, arg: Token) -> List[Token]:
    ret = []
    cur = frame.get_parent(arg)
    while cur is not None and cur != predicate:
        ret.append(cur)
        cur = frame.get_parent(cur)
    stack = list(frame.get_children(arg))
    while len(stack) > 0:
        one = stack.pop()
        if one == predicate:
            continue
        ret.append(one)
        stack.extend(frame.get_children(one))
    return ret

# note: modify "scores" (candidate -> label -> score) inplace
def enforce_consistency(conf: ConsistencyConf, predicate: Token, arg: Token, arg_label: str,
                        frame: SemanticFrameSet, training: bool, scores: Dict[Token, Dict[str, float]]):
    if not conf.is_active(training) or not is_restricted_label(arg_label):
        return
    # 1. this core role is used up
    for label_scores in scores.values():
        label_scores.pop(arg_label, None)
    if arg == predicate:
        return
    # 2. no core roles for the overlapping ones
    for one in _arg_span(frame, predicate, arg):
        label_scores = scores.get(one)
        if label_scores is not None:
            for lab in [z for z in label_scores.keys() if is_restricted_label(z)]:
                del label_scores[lab]

#

# argument candidates of a predicate: the predicate's children, then its ancestors' children, up to the root

__all__ = [
    "argument_candidates",
]

from typing import List
from zsrl.data.inst import Token, TokenSentence

def argument_candidates(sentence: TokenSentence, predicate: Token) -> List[Token]:
    ret = []
    cur = predicate
    while True:
        ret.extend(sentence.get_children(cur))
        if cur.is_root():
            ret.append(cur)
            break
        cur = sentence.get_parent(cur)
    # note: no duplicates on a well-formed tree, since each token has only one parent
    ret.sort(key=lambda t: t.sentence_index)
    return ret

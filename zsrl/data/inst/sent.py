#

# Tokens and Sentences (with dependency trees)

__all__ = [
    "Token", "TokenSentence", "TokenSentenceAndPredicates",
]

from typing import List, Dict, Iterable, Tuple
from zsrl.utils import JsonSerializable

# =====
# Token: a word inside a sentence, knowing its own position and its head's position
# note: head_sentence_index<0 means the token is the root of the (dependency) tree
class Token:
    __slots__ = ("sentence_index", "head_sentence_index", "word", "lemma", "pos", "deprel", "_hash")

    def __init__(self, sentence_index: int, head_sentence_index: int, word: str = None,
                 lemma: str = None, pos: str = None, deprel: str = None):
        _set = super().__setattr__
        _set("sentence_index", sentence_index)
        _set("head_sentence_index", head_sentence_index)
        _set("word", word)
        _set("lemma", lemma)
        _set("pos", pos)
        _set("deprel", deprel)
        _set("_hash", hash(self.sig()))

    def __setattr__(self, key, value):
        raise AttributeError(f"Token is immutable: can not set {key}")

    def __repr__(self):
        return f"T{self.sentence_index}({self.word}<-{self.head_sentence_index})"

    def sig(self):
        return (self.sentence_index, self.head_sentence_index, self.word, self.lemma, self.pos, self.deprel)

    def __eq__(self, other):
        return isinstance(other, Token) and self.sig() == other.sig()

    def __hash__(self):
        return self._hash

    def __reduce__(self):  # for pickle & copy
        return (Token, self.sig())

    # order by sentence position
    def __lt__(self, other: 'Token'):
        return self.sentence_index < other.sentence_index

    def comes_before(self, other: 'Token'):
        return self.sentence_index < other.sentence_index

    def is_root(self):
        return self.head_sentence_index < 0

    def to_json(self):
        # note: heads are stored in the conll style (1-based, 0 for root)
        return {"word": self.word, "lemma": self.lemma, "pos": self.pos,
                "head": self.head_sentence_index + 1, "deprel": self.deprel}

# =====
# a sentence and its dependency tree
class TokenSentence(JsonSerializable):
    def __init__(self):
        self.tokens: List[Token] = []
        self._children: Dict[int, List[Token]] = {}  # idx -> children (left to right)

    @classmethod
    def create(cls, words: List[str], heads: List[int], lemmas: List[str] = None, poses: List[str] = None,
               deprels: List[str] = None):
        # note: heads follow the conll style: 1-based and 0 means root
        inst = cls()
        inst.build_tokens(words, heads, lemmas, poses, deprels)
        return inst

    def build_tokens(self, words: List[str], heads: List[int], lemmas: List[str] = None, poses: List[str] = None,
                     deprels: List[str] = None):
        slen = len(words)
        assert len(heads) == slen, "Error: length mismatch of words and heads!"
        _get = lambda _seq, _i: None if _seq is None else _seq[_i]
        tokens = []
        for i in range(slen):
            h = heads[i]
            assert 0 <= h <= slen and h != i+1, f"Bad head {h} for token {i}!"
            tokens.append(Token(i, h-1, words[i], _get(lemmas, i), _get(poses, i), _get(deprels, i)))
        assert sum(int(h==0) for h in heads) == 1, f"Expect exactly one root, but get heads={heads}"
        # every head chain should reach the root, otherwise there are cycles
        for i in range(slen):
            cur, steps = i+1, 0
            while cur != 0:
                cur, steps = heads[cur-1], steps+1
                assert steps <= slen, f"Cycle in heads from token {i}: heads={heads}"
        self._set_tokens(tokens)
        return self.tokens

    def _set_tokens(self, tokens: List[Token]):
        self.tokens = list(tokens)
        children = {t.sentence_index: [] for t in self.tokens}
        for t in self.tokens:  # note: already sorted in left-to-right
            if not t.is_root():
                children[t.head_sentence_index].append(t)
        self._children = children

    # share tokens and tree from another one
    def _share_from(self, sentence: 'TokenSentence'):
        self.tokens = sentence.tokens
        self._children = sentence._children

    def __len__(self):
        return len(self.tokens)

    def __repr__(self):
        return f"{self.__class__.__name__}(len={len(self)})"

    def get_text(self):
        return " ".join(str(t.word) for t in self.tokens)

    def get_token(self, idx: int) -> Token:
        return self.tokens[idx]

    def get_parent(self, token: Token):
        if token.is_root():
            return None
        return self.tokens[token.head_sentence_index]

    def get_children(self, token: Token) -> List[Token]:
        return self._children[token.sentence_index]

    def get_roots(self) -> List[Token]:
        return [t for t in self.tokens if t.is_root()]

    # =====
    def to_json(self):
        return {"tokens": [t.to_json() for t in self.tokens]}

    def from_json(self, data: Dict):
        ts = data["tokens"]
        self.build_tokens([z.get("word") for z in ts], [z["head"] for z in ts], [z.get("lemma") for z in ts],
                          [z.get("pos") for z in ts], [z.get("deprel") for z in ts])
        self.finish_build()

# =====
# sentence + list of predicates in it
class TokenSentenceAndPredicates(TokenSentence):
    def __init__(self):
        super().__init__()
        self.predicate_list: List[Token] = []

    @classmethod
    def create_from_sent(cls, sentence: TokenSentence, predicates: Iterable[Token] = ()):
        inst = cls()
        inst._share_from(sentence)
        for p in predicates:
            inst.add_predicate(p)
        return inst

    # note: only fix one misplaced predicate at the end (assume nearly in-order adding),
    #  adding several out-of-order ones in a row can leave the list unsorted!
    def add_predicate(self, predicate: Token):
        if len(self.predicate_list) > 0:
            last_predicate = self.predicate_list[-1]
            if predicate.comes_before(last_predicate):
                self.predicate_list.insert(len(self.predicate_list)-1, predicate)
                return
        self.predicate_list.append(predicate)

    def get_predicate_list(self) -> Tuple[Token, ...]:
        return tuple(self.predicate_list)

    def is_predicate(self, token: Token):
        return token in self.predicate_list

    def to_json(self):
        ret = super().to_json()
        ret["predicates"] = [p.sentence_index for p in self.predicate_list]
        return ret

    def from_json(self, data: Dict):
        super().from_json(data)
        self.predicate_list = []
        for pidx in data.get("predicates", []):
            self.add_predicate(self.tokens[pidx])

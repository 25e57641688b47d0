#

# feature generators: (frame, candidate, predicate) -> Datum of string features

__all__ = [
    "FeatGenConf", "ArgumentFeatureGenerator", "BasicFeatureGenerator", "ExtensibleFeatureGenerator",
]

from typing import List, Dict, Tuple, Iterable
from itertools import product
from zsrl.utils import Conf, Registrable, zlog
from zsrl.data.inst import Token, TokenSentence
from zsrl.data.dataset import Datum

class FeatGenConf(Conf):
    def __init__(self):
        self.use_path = True  # dependency path between the candidate and the predicate
        self.max_path_len = 8  # longer ones are marked as "LONG"
        self.dist_buckets = [1, 2, 3, 5, 8]  # bucketed distances

# =====
class ArgumentFeatureGenerator(Registrable):
    def __init__(self, conf: FeatGenConf = None):
        self.conf = conf if conf is not None else FeatGenConf()

    def datum_from(self, frame: TokenSentence, candidate: Token, predicate: Token) -> Datum:
        return Datum(self.features_of(frame, candidate, predicate))

    def features_of(self, frame: TokenSentence, candidate: Token, predicate: Token) -> List[str]:
        raise NotImplementedError()

    def is_trainable(self):
        return False

    # extra state to store along with a model
    def get_state(self) -> Dict:
        return {}

    def set_state(self, state: Dict):
        pass

    @staticmethod
    def create(key: str, conf: FeatGenConf = None):
        entry = ArgumentFeatureGenerator.lookup(key)
        assert entry is not None, f"Unknown feature generator: {key}, should be in {list(ArgumentFeatureGenerator.keys())}"
        return entry.T(conf)

# =====
# fixed templates: lexical & pos & deprel of both ends, relative position, distance and path

@ArgumentFeatureGenerator.reg_decorator("basic")
class BasicFeatureGenerator(ArgumentFeatureGenerator):
    def _bucket(self, dist: int):
        for b in self.conf.dist_buckets:
            if dist <= b:
                return str(b)
        return "INF"

    @staticmethod
    def _ancestors(frame: TokenSentence, token: Token):
        ret = [token]
        cur = frame.get_parent(token)
        while cur is not None:
            ret.append(cur)
            cur = frame.get_parent(cur)
        return ret

    def _path(self, frame: TokenSentence, candidate: Token, predicate: Token):
        up_chain = self._ancestors(frame, candidate)
        down_chain = self._ancestors(frame, predicate)
        down_set = {t.sentence_index: i for i, t in enumerate(down_chain)}
        for i, t in enumerate(up_chain):
            j = down_set.get(t.sentence_index)
            if j is not None:  # lowest common ancestor
                if i + j > self.conf.max_path_len:
                    return "LONG"
                ups = [f"{z.deprel}^" for z in up_chain[:i]]
                downs = [f"{z.deprel}v" for z in reversed(down_chain[:j])]
                return "".join(ups + downs) if (i+j) > 0 else "SELF"
        return "NONE"  # different trees

    def features_of(self, frame: TokenSentence, candidate: Token, predicate: Token) -> List[str]:
        a, p = candidate, predicate
        if a == p:
            position = "SELF"
        else:
            position = "BEFORE" if a.comes_before(p) else "AFTER"
        if frame.get_parent(a) == p:
            relation = "CHILD"
        elif frame.get_parent(p) == a:
            relation = "PARENT"
        else:
            relation = "OTHER"
        ret = [
            "B=", f"AW={a.word}", f"AL={a.lemma}", f"AP={a.pos}", f"AD={a.deprel}",
            f"PW={p.word}", f"PL={p.lemma}", f"PP={p.pos}",
            f"POSI={position}", f"REL={relation}", f"DIST={self._bucket(abs(a.sentence_index-p.sentence_index))}",
            f"AP_POSI={a.pos}|{position}", f"AD_POSI={a.deprel}|{position}", f"PL_AD={p.lemma}|{a.deprel}",
        ]
        if self.conf.use_path:
            path = self._path(frame, a, p)
            ret.extend([f"PATH={path}", f"PL_PATH={p.lemma}|{path}"])
        return ret

# =====
# basic templates + conjunctions of them, which can be added along the way

@ArgumentFeatureGenerator.reg_decorator("extensible")
class ExtensibleFeatureGenerator(BasicFeatureGenerator):
    def __init__(self, conf: FeatGenConf = None):
        super().__init__(conf)
        self.conjunctions: List[Tuple[str, ...]] = []

    def is_trainable(self):
        return True

    # a conjunction of feature templates by their names (the part before "=")
    def add_conjunction(self, *names: str):
        names = tuple(names)
        assert len(names) >= 2, "A conjunction needs at least two templates!"
        if names in self.conjunctions:
            return False
        self.conjunctions.append(names)
        zlog(f"Add feature conjunction {'&'.join(names)}, now {len(self.conjunctions)} conjunctions.")
        return True

    def add_conjunctions(self, conjunctions: Iterable[Iterable[str]]):
        return [self.add_conjunction(*z) for z in conjunctions]

    def get_state(self) -> Dict:
        return {"conjunctions": [list(z) for z in self.conjunctions]}

    def set_state(self, state: Dict):
        self.conjunctions = []
        self.add_conjunctions(state.get("conjunctions", []))

    def features_of(self, frame: TokenSentence, candidate: Token, predicate: Token) -> List[str]:
        base = super().features_of(frame, candidate, predicate)
        if len(self.conjunctions) == 0:
            return base
        by_name: Dict[str, List[str]] = {}
        for f in base:
            name, value = f.split("=", 1)
            by_name.setdefault(name, []).append(value)
        ret = list(base)
        for names in self.conjunctions:
            values = [by_name.get(n, []) for n in names]
            for vs in product(*values):
                ret.append(f"{'&'.join(names)}={'&'.join(vs)}")
        return ret

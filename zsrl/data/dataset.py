#

# Datum (features + label) and Dataset (a list of datums)

__all__ = [
    "Datum", "Dataset",
]

from typing import List, Iterable
from collections import Counter
from zsrl.utils import zlog

class Datum:
    def __init__(self, features: Iterable[str], label: str = None):
        self.features: List[str] = list(features)
        self.label = label

    def __repr__(self):
        return f"Datum({self.label}, F={len(self.features)})"

    def set_label(self, label: str):
        self.label = label

class Dataset:
    def __init__(self, datums: Iterable[Datum] = ()):
        self.datums: List[Datum] = list(datums)

    def __len__(self):
        return len(self.datums)

    def __iter__(self):
        return iter(self.datums)

    def __getitem__(self, item):
        return self.datums[item]

    def __repr__(self):
        return f"Dataset(N={len(self)})"

    def add(self, datum: Datum):
        self.datums.append(datum)

    def add_all(self, datums: Iterable[Datum]):
        self.datums.extend(datums)

    def labels(self):
        return [d.label for d in self.datums]

    def feature_counts(self) -> Counter:
        ret = Counter()
        for d in self.datums:
            ret.update(d.features)
        return ret

    # discard rare features (count<k) from all datums
    def apply_feature_count_threshold(self, k: int):
        counts = self.feature_counts()
        kept = {f for f, c in counts.items() if c >= k}
        for d in self.datums:
            d.features = [f for f in d.features if f in kept]
        zlog(f"Apply feature count threshold {k} to {self}: keep {len(kept)}/{len(counts)} features.")
        return kept

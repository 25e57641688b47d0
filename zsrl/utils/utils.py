#

# misc helpers

__all__ = [
    "DictHelper", "ZObject",
]

from typing import Dict
import pandas as pd

class DictHelper:
    # a table of counts: one row per key (sorted by "key"), with percentages and accumulated ones
    @staticmethod
    def get_counts_info_table(counts: Dict, key=None):
        keys = sorted(counts.keys(), key=key)
        df = pd.DataFrame({"Key": keys, "Count": [counts[k] for k in keys]})
        df.insert(0, "Idx", range(len(keys)))
        df["ACount"] = df["Count"].cumsum()
        total = df["Count"].sum()
        df["Perc."] = df["Count"] / total if total > 0 else 0.
        df["APerc."] = df["ACount"] / total if total > 0 else 0.
        return df[["Idx", "Key", "Count", "Perc.", "ACount", "APerc."]]

# attribute bag
class ZObject:
    def __init__(self, _m: Dict = None, **kwargs):
        self.update(_m, **kwargs)

    def update(self, _m: Dict = None, **kwargs):
        if isinstance(_m, ZObject):
            _m = vars(_m)
        for k, v in dict(_m or {}, **kwargs).items():
            setattr(self, k, v)
        return self

    def __repr__(self):
        return f"ZObject({self.__dict__})"

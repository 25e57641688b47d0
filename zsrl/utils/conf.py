#

# configuration class: plain attributes with defaults, updated by "name:value" args
# -- names can be shortened to any unique dotted suffix, for example "enabled" for "consistency.enabled"

__all__ = [
    "Conf",
]

from typing import List, Dict, Iterable, Type
from collections import defaultdict, OrderedDict
from .log import zlog, zwarn
from .file import zopen
from .seria import JsonSerializable

class Conf(JsonSerializable):
    NV_SEP = ":"  # sep for name & value
    HIERARCHICAL_SEP = "."  # sep for sub-confs
    LIST_SEP = ","  # sep for list items

    def __repr__(self):
        return f"{self.__class__.__name__}({', '.join(f'{k}={getattr(self, k)!r}' for k in self.get_good_names())})"

    def valid_json_fields(self):
        return self.get_good_names()

    # everything except "_*"
    def get_good_names(self):
        return [k for k in self.__dict__.keys() if not k.startswith("_")]

    # check from the leaves, only need to be called on the top one
    def validate(self):
        for n in self.get_good_names():
            v = getattr(self, n)
            if isinstance(v, Conf):
                v.validate()
        self._do_validate()

    def _do_validate(self):
        pass

    # =====
    # updating

    # short name -> List[(owner_conf, key, full_name)]
    def _collect_all_names(self):
        ret = defaultdict(list)
        _SEP = Conf.HIERARCHICAL_SEP
        def _add_rec(cur_conf: Conf, path: List[str]):
            for n in cur_conf.get_good_names():
                one = cur_conf.__dict__[n]
                if isinstance(one, Conf):
                    _add_rec(one, path + [n])
                else:
                    full = path + [n]
                    for i in range(len(full)):
                        ret[_SEP.join(full[i:])].append((cur_conf, n, _SEP.join(full)))
        _add_rec(self, [])
        return ret

    # convert by the type of the default value
    @staticmethod
    def _typed_value(value_str: str, T: Type):
        if issubclass(T, bool):  # note: "0" should be False
            return T(int(value_str))
        return T(value_str)

    def _do_update(self, k: str, value_str: str):
        old_v = self.__dict__[k]
        trg_type = str if old_v is None else type(old_v)
        if len(value_str) > 0 and (value_str[0]+value_str[-1]) in ["()", "[]", "{}"]:
            new_v = eval(value_str)
        elif isinstance(old_v, list):
            _item_type = str if len(old_v) == 0 else type(old_v[0])
            new_v = [Conf._typed_value(z, _item_type) for z in value_str.split(Conf.LIST_SEP)] if len(value_str) > 0 else []
        elif issubclass(trg_type, (tuple, dict)):
            new_v = eval(value_str)
        else:
            new_v = Conf._typed_value(value_str, trg_type)
        if not isinstance(new_v, trg_type):
            zwarn(f"Possible type error when updating {self.__class__.__name__}/{k}={value_str}, "
                  f"trg={trg_type}, real={type(new_v)}")
        setattr(self, k, new_v)
        return old_v, new_v

    def update_from_dict(self, d: Dict, _quite=True, _check=False):
        name_map = self._collect_all_names()
        good_ones, bad_ones = [], []
        for n, v in d.items():
            items = name_map.get(n, [])
            if len(items) != 1:
                bad_ones.append(f"{'Unknown' if len(items)==0 else 'Ambiguous'} config {n}={v}: {[z[-1] for z in items]}")
                continue
            owner, key, full_name = items[0]
            old_v, new_v = owner._do_update(key, v)
            if old_v != new_v:
                good_ones.append(f"Update config '{n}={v}': {full_name} = {old_v} -> {new_v}")
        if not _quite:
            for one in good_ones:
                zlog(one, func="config")
            for one in bad_ones:
                zwarn(f"ERROR: {one}")
        if _check:
            assert len(bad_ones) == 0, f"Bad confs: {bad_ones}"
        return self

    # directly set fields of this level
    def direct_update(self, _assert_exists=False, **kwargs):
        for k, v in kwargs.items():
            if _assert_exists:
                assert hasattr(self, k), f"No-exist of attr: {k}"
            setattr(self, k, v)
        return self

    @classmethod
    def direct_conf(cls, conf: 'Conf' = None, **kwargs):
        return (cls() if conf is None else conf).direct_update(**kwargs)

    # =====
    # from args: the first one can be a file of args (one per line)

    @staticmethod
    def extend_args(args: Iterable[str], quite=False):
        sep = Conf.NV_SEP
        args = list(args)
        if len(args) > 0 and sep not in args[0]:
            if not quite:
                zlog(f"Read config file from {args[0]}.", func="config")
            with zopen(args[0]) as fd:
                f_args = [z.strip() for z in fd]
            args = [z for z in f_args if len(z) > 0 and not z.startswith('#')] + args[1:]
        ret = OrderedDict()
        for a in args:
            fields = a.split(sep, 1)
            assert len(fields) == 2, f"Strange config updating value: {a}"
            if fields[0] in ret and not quite:
                zwarn(f"Overwrite with config {a}")
            ret[fields[0]] = fields[1]
        return ret

    def update_from_args(self, args: Iterable[str], quite=False, check=True, validate=True):
        if not quite:
            zlog(f"Update conf from args: {args}.", func="config")
        argv = Conf.extend_args(args, quite=quite)
        self.update_from_dict(argv, _quite=quite, _check=check)
        if validate:
            self.validate()
        return argv

#

# mix-in for registering implementations under string keys, one table per base class

__all__ = [
    "Registrable",
]

from typing import Type, Union, Callable, Dict
from .seria import get_class_id
from .utils import ZObject

class Registrable:
    # base-class-id -> key -> ZObject(T, key, ...)
    _reg_index: Dict[str, Dict[str, ZObject]] = {}

    @classmethod
    def _reg_table(base_cls) -> Dict[str, ZObject]:
        return Registrable._reg_index.setdefault(get_class_id(base_cls, use_mod=True), {})

    @classmethod
    def reg(base_cls, key: str, T: Union[Type, Callable], **kwargs):
        table = base_cls._reg_table()
        assert key not in table, f"Repeated key {key} for {base_cls.__name__}!"
        table[key] = ZObject(T=T, key=key, **kwargs)
        return T

    # the decorated class also remembers its key
    @classmethod
    def reg_decorator(base_cls, key: str, **kwargs):
        def _decorator(_T: Union[Type, Callable]):
            base_cls.reg(key, _T, **kwargs)
            _T._reg_key = key
            return _T
        return _decorator

    @classmethod
    def lookup(base_cls, key: str, df=None):
        return base_cls._reg_table().get(key, df)

    @classmethod
    def keys(base_cls):
        return base_cls._reg_table().keys()

    @property
    def reg_key(self):
        return getattr(self.__class__, "_reg_key", None)

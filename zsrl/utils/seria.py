#

# serialization: json-able objects, json-lines/pickle serializers and versioned model archives

__all__ = [
    "get_class_id", "JsonSerializable", "Serializer",
    "default_json_serializer", "default_pickle_serializer", "get_json_serializer",
    "ModelIOError", "UnexpectedStoredTypeError", "save_archive", "load_archive",
]

from typing import Type, Dict, Union, Iterable, IO
import gzip
import json
import pickle
from .file import zopen, zopen_atomic
from .log import zlog

# unique class id (as registry keys)
def get_class_id(cls: Type, use_mod=False):
    return f"{cls.__module__}-{cls.__name__}" if use_mod else cls.__name__

# =====
# json: "cls_from_json" for creating, "to_json" & "from_json" for instances

class JsonSerializable:
    def valid_json_fields(self):
        return list(self.__dict__.keys())

    @classmethod
    def cls_from_json(cls, data: Dict, **kwargs):
        ret = cls(**kwargs)  # note: need a default constructor!
        ret.from_json(data)
        return ret

    def to_json(self) -> Dict:
        ret = {}
        for k in self.valid_json_fields():
            v = getattr(self, k)
            ret[k] = v.to_json() if isinstance(v, JsonSerializable) else v
        return ret

    def from_json(self, data: Dict):
        for k in self.valid_json_fields():
            if k not in data:
                continue
            v = getattr(self, k)
            if isinstance(v, JsonSerializable):
                v.from_json(data[k])  # update inplace for sub-ones
            else:
                setattr(self, k, data[k])
        self.finish_build()

    # rebuild caches after loading
    def finish_build(self):
        pass

class _JsonEncoder(json.JSONEncoder):
    def default(self, one: object):
        if isinstance(one, JsonSerializable):
            return one.to_json()
        return super().default(one)

# =====
# one object per line (json) or per pickle record

class Serializer:
    def __init__(self, binary: bool):
        self.binary = binary

    def open(self, path: str, mode: str): return zopen(path, mode+('b' if self.binary else ''))
    def from_obj(self, s, **kwargs): raise NotImplementedError()
    def to_obj(self, one: object, **kwargs): raise NotImplementedError()
    def read_one(self, fd, **kwargs): raise NotImplementedError()  # EOFError at the end
    def write_one(self, one: object, fd, **kwargs): raise NotImplementedError()

    def yield_iter(self, fn_or_fd: Union[str, IO], max_num=-1, **kwargs):
        if isinstance(fn_or_fd, str):
            with self.open(fn_or_fd, 'r') as fd:
                yield from self.yield_iter(fd, max_num, **kwargs)
            return
        c = 0
        while c != max_num:
            try:
                one = self.read_one(fn_or_fd, **kwargs)
            except EOFError:
                break
            c += 1
            yield one

    def load_list(self, fn_or_fd: Union[str, IO], max_num=-1, **kwargs):
        return list(self.yield_iter(fn_or_fd, max_num, **kwargs))

    def save_iter(self, ones: Iterable, fn_or_fd: Union[str, IO], **kwargs):
        if isinstance(fn_or_fd, str):
            with self.open(fn_or_fd, 'w') as fd:
                self.save_iter(ones, fd, **kwargs)
        else:
            for one in ones:
                self.write_one(one, fn_or_fd, **kwargs)

class _JsonSerializer(Serializer):
    def __init__(self, cls: Type = None):
        super().__init__(False)
        assert cls is None or issubclass(cls, JsonSerializable)
        self.cls = cls

    def from_obj(self, s: str, **kwargs):
        v = json.loads(s, **kwargs)
        return v if self.cls is None else self.cls.cls_from_json(v)

    def to_obj(self, one: object, **kwargs): return json.dumps(one, cls=_JsonEncoder, ensure_ascii=False, **kwargs)
    def write_one(self, one: object, fd, **kwargs): fd.write(self.to_obj(one, **kwargs) + "\n")

    def read_one(self, fd, **kwargs):
        line = fd.readline()
        while len(line) > 0 and len(line.strip()) == 0:  # skip empty lines
            line = fd.readline()
        if len(line) == 0:
            raise EOFError()
        return self.from_obj(line, **kwargs)

class _PickleSerializer(Serializer):
    def __init__(self):
        super().__init__(True)

    def from_obj(self, s: bytes, **kwargs): return pickle.loads(s, **kwargs)
    def to_obj(self, one: object, **kwargs): return pickle.dumps(one, **kwargs)
    def read_one(self, fd, **kwargs): return pickle.load(fd, **kwargs)
    def write_one(self, one: object, fd, **kwargs): pickle.dump(one, fd, **kwargs)

default_json_serializer = _JsonSerializer(None)
default_pickle_serializer = _PickleSerializer()
def get_json_serializer(cls: Type): return _JsonSerializer(cls)

# =====
# versioned archives: a tagged dict (format + version + payload), gzipped pickle, written atomically

class ModelIOError(IOError):
    pass

class UnexpectedStoredTypeError(TypeError):
    pass

def save_archive(payload: Dict, path: str, format: str, version: int):
    archive = {"format": format, "version": version}
    archive.update(payload)
    try:
        with zopen_atomic(path, 'wb', compress=True) as fd:
            pickle.dump(archive, fd, protocol=pickle.HIGHEST_PROTOCOL)
    except (OSError, pickle.PicklingError) as e:
        raise ModelIOError(f"Failed writing {format} to {path}: {e}") from e
    zlog(f"Save {format}(v{version}) to {path}", func="io")

def load_archive(path: str, format: str, version: int) -> Dict:
    try:
        with gzip.open(path, "rb") as fd:
            archive = pickle.load(fd)
    except gzip.BadGzipFile as e:
        raise UnexpectedStoredTypeError(f"Not a compressed {format} archive at {path}: {e}") from e
    except (OSError, EOFError) as e:
        raise ModelIOError(f"Failed reading {format} from {path}: {e}") from e
    except (pickle.UnpicklingError, AttributeError, ImportError, IndexError) as e:
        raise UnexpectedStoredTypeError(f"Not a valid {format} archive at {path}: {e}") from e
    if not isinstance(archive, dict) or archive.get("format") != format:
        _found = archive.get("format") if isinstance(archive, dict) else type(archive).__name__
        raise UnexpectedStoredTypeError(f"Expect {format} at {path}, but found {_found}")
    if archive.get("version") != version:
        raise UnexpectedStoredTypeError(f"Unsupported {format} version at {path}: {archive.get('version')} vs {version}")
    zlog(f"Load {format}(v{version}) from {path}", func="io")
    return archive

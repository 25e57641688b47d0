#

# file opening: compressed by suffix, already-opened fds, all-or-nothing writing

__all__ = [
    "zopen", "WithWrapper", "zopen_withwrapper", "zopen_atomic",
]

from typing import IO, Union, Callable
from contextlib import contextmanager
import gzip, bz2
import os
import tempfile

_OPENERS = {".gz": gzip.open, ".bz2": bz2.open}

def _open(path: str, mode: str, opener: Callable = None, encoding="utf-8"):
    if 'b' in mode:
        return (opener or open)(path, mode)
    if opener is None:
        return open(path, mode, encoding=encoding)
    return opener(path, mode if 't' in mode else mode+'t', encoding=encoding)  # text mode for the zipped ones

def zopen(filename: str, mode='r', encoding="utf-8", check_zip=True):
    opener = None
    if check_zip:
        opener = _OPENERS.get(os.path.splitext(filename)[-1])
    return _open(filename, mode, opener, encoding)

# for "with" over sth that should not be closed here
class WithWrapper:
    def __init__(self, f_start: Callable = None, f_end: Callable = None, item=None):
        self.f_start, self.f_end, self.item = f_start, f_end, item

    def __enter__(self):
        if self.f_start is not None:
            self.f_start()
        return self if self.item is None else self.item

    def __exit__(self, exc_type, exc_val, exc_tb):
        if self.f_end is not None:
            self.f_end()

def zopen_withwrapper(fd_or_path: Union[str, IO], **kwargs):
    return zopen(fd_or_path, **kwargs) if isinstance(fd_or_path, str) else WithWrapper(item=fd_or_path)

# write to a tmp file in the same dir, then replace the target; nothing is left if failed
@contextmanager
def zopen_atomic(filename: str, mode='w', compress: bool = None):
    assert 'w' in mode, "Atomic open is only for writing!"
    if compress is None:
        compress = filename.endswith('.gz')
    handle, tmp_path = tempfile.mkstemp(prefix=".tmp_", dir=os.path.dirname(os.path.abspath(filename)))
    os.close(handle)
    committed = False
    try:
        with _open(tmp_path, mode, gzip.open if compress else None) as fd:
            yield fd
        os.replace(tmp_path, filename)
        committed = True
    finally:
        if not committed and os.path.exists(tmp_path):
            os.remove(tmp_path)

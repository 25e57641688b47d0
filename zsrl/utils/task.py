#

# task recording: timing of runs and accumulators for evaluation

__all__ = [
    "Timer", "AccEvalEntry", "F1EvalEntry",
]

import time
from typing import Union
from .log import zlog
from .math import MathHelper, DivNumber

# =====
# timing, relative to the program start (set by "init")

class Timer:
    _START = 0.

    @staticmethod
    def init():
        Timer._START = time.time()

    @staticmethod
    def time():
        return time.time() - Timer._START

    def __init__(self, info="ANON", print_date=True, quite=False):
        self.info = info
        self.print_date = print_date
        self.quite = quite
        self.accu = 0.  # seconds so far
        self._last = None  # None if not running

    def __repr__(self):
        return f"Timer({self.info}, accu={self.accu:.3f}, running={self._last is not None})"

    def _report(self, msg: str):
        if not self.quite:
            zlog(f"{msg} ({time.ctime() if self.print_date else ''})", func="time")

    def begin(self):
        if self._last is None:
            self._last = Timer.time()
        self._report(f"Start timer {self.info} at {self._last:.3f}.")

    def end(self):
        if self._last is not None:
            self.accu += Timer.time() - self._last
            self._last = None
        self._report(f"End timer {self.info}, took {self.accu:.3f} seconds.")

    def __enter__(self):
        self.begin()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.end()

# =====
# eval accumulators

class AccEvalEntry:
    def __init__(self):
        self.v = DivNumber(0, 0)

    def record(self, corr: Union[int, float], all=1):
        self.v.add_xy(corr, all)

    def combine(self, e: 'AccEvalEntry', scale=1.):
        self.v.combine(e.v, scale=scale)

    res = property(lambda self: self.v.res)
    details = property(lambda self: self.v.details)  # (corr, all, acc)

    def __float__(self): return float(self.v)
    def __repr__(self): return repr(self.v)

# precision from predicted ones, recall from gold ones
class F1EvalEntry:
    def __init__(self):
        self.p, self.r = AccEvalEntry(), AccEvalEntry()

    def record_p(self, corr: int, all=1): self.p.record(corr, all)
    def record_r(self, corr: int, all=1): self.r.record(corr, all)

    def combine(self, e: 'F1EvalEntry', scale=1.):
        for a, b in [(self.p, e.p), (self.r, e.r)]:
            a.combine(b, scale=scale)

    @property
    def prf(self):
        if self.p.v.y == 0 and self.r.v.y == 0:  # nothing predicted & nothing to find
            return 1., 1., 1.
        precision, recall = self.p.res, self.r.res
        return precision, recall, MathHelper.safe_div(2 * precision * recall, precision + recall)

    @property
    def res(self):
        return float(self.prf[-1])

    @property
    def details(self):
        return self.p.details + self.r.details + (self.res, )

    def __float__(self): return self.res
    def __repr__(self): return f"P={self.p}; R={self.r}; F1={self.res:.4f}"

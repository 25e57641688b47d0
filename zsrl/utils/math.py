#

# numerics: softmax over score dicts, and a fraction for accuracy-like numbers

__all__ = [
    "MathHelper", "DivNumber",
]

from typing import Union, Dict
import math
import numpy as np
from scipy.special import logsumexp

class MathHelper:
    @staticmethod
    def softmax(vals, axis=0):
        arr = np.asarray(vals, dtype=np.float64)
        return np.exp(arr - logsumexp(arr, axis=axis, keepdims=True))

    # label -> score => label -> prob
    @staticmethod
    def softmax_dict(scores: Dict[str, float]):
        if len(scores) == 0:
            return {}
        probs = MathHelper.softmax(list(scores.values()))
        return dict(zip(scores.keys(), probs.tolist()))

    @staticmethod
    def logsumexp(a):
        return float(logsumexp(a))

    # tolerance as numpy's allclose
    @staticmethod
    def isclose(a, b):
        return math.isclose(a, b, rel_tol=1.e-5, abs_tol=1.e-8)

    # x/y, or x itself if y is zero
    @staticmethod
    def safe_div(x, y):
        return x / y if y != 0 else x

Number = Union[int, float]

class DivNumber:
    DIGITS = 4

    def __init__(self, x: Number, y: Number):
        self.x, self.y = x, y

    res = property(lambda self: MathHelper.safe_div(self.x, self.y))
    details = property(lambda self: (self.x, self.y, self.res))

    def add_xy(self, dx: Number, dy: Number):
        self.x += dx
        self.y += dy

    def combine(self, other: 'DivNumber', scale=1.):
        self.add_xy(other.x * scale, other.y * scale)

    def __float__(self):
        return float(self.res)

    def __repr__(self):
        return f"{self.x}/{self.y}={self.res:.{DivNumber.DIGITS}f}"

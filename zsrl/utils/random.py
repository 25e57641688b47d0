#

# randomness with numpy: one generator per task name, all derived from the global seed

__all__ = ["Random"]

import numpy as np
from .log import zlog

class Random:
    _init_times = 0
    _init_seed = 9341
    _seed = _init_seed
    _generators = {}

    # deterministic given (global seed, task name)
    @staticmethod
    def get_generator(task: str):
        g = Random._generators.get(task)
        if g is None:
            if Random._init_times == 0:
                Random.init(quite=True)
            one = Random._seed
            for t in task:
                one = (one * 31 + ord(t)) % (1 << 31)
            g = np.random.RandomState(one + 1)
            Random._generators[task] = g
        return g

    @staticmethod
    def init(seed: int = None, quite=False):
        Random._init_times += 1
        Random._seed = Random._init_seed if seed is None else seed
        if not quite:
            zlog(f"Init zsrl.utils.random (time={Random._init_times}) with seed={Random._seed}.")
        np.random.seed(Random._seed)
        Random._generators.clear()

    # inplace
    @staticmethod
    def shuffle(xs: list, task: str = "shuffle"):
        perm = Random.get_generator(task).permutation(len(xs))
        xs[:] = [xs[i] for i in perm]
        return xs

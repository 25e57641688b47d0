#

# zsrl.utils: logging, confs, files & serialization, registry, randomness, timing & eval

from .conf import *
from .file import *
from .log import *
from .math import *
from .random import *
from .reg import *
from .seria import *
from .task import *
from .utils import *

from typing import List
import sys
import platform
import numpy as np

# stderr logging and the default seed, at import time
def auto_init():
    Logger.init([sys.stderr])
    Random.init(quite=True)
    Timer.init()

auto_init()

class ZsrlUtilsConf(Conf):
    def __init__(self):
        self.log_stderr = True
        self.log_file = ""  # extra log file
        self.log_files = []
        self.log_magic_file = False  # a time-stamped file
        self.log_level = 0
        self.seed = Random._init_seed
        self.np_raise = True  # np.seterr

# manual init at the start of a program, overriding the auto one
def init(utils_conf: ZsrlUtilsConf = None, extra_files: List = None):
    conf = ZsrlUtilsConf() if utils_conf is None else utils_conf
    log_files = ([sys.stderr] if conf.log_stderr else []) + [conf.log_file] + list(conf.log_files)
    if extra_files is not None:
        log_files.extend(extra_files)
    Logger.init(log_files, conf.log_level, conf.log_magic_file)
    Random.init(conf.seed)
    Timer.init()
    if conf.np_raise:
        np.seterr(all='raise')
    zlog(f"Start with utils conf: {conf}", func="config")
    zlog(f"*cmd: {' '.join(sys.argv)}", func="config")
    zlog(f"*platform: {' '.join(platform.uname())}", func="config")

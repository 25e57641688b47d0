#

# printing and logging: one global logger writing to several files (stderr by default)

__all__ = [
    "Logger", "zlog", "zwarn", "zfatal", "zcheck",
]

from typing import Iterable
import platform, time, logging, sys
from .file import zopen

def _time_str():
    return '-'.join(time.ctime().split()[-4:])

class Logger:
    _instance = None
    # func -> line head
    HEADS = {
        "plain": "-- ", "time": "## ", "io": "== ", "result": ">> ", "report": "** ", "config": "CC ",
        "warn": "Warn ", "fatal": "KI ", "": "",
    }

    @staticmethod
    def get_singleton_logger():
        assert Logger._instance is not None, "Not initialized!!"
        return Logger._instance

    # (re-)create the global one, "files" can be paths or opened fds
    @staticmethod
    def init(files: Iterable = (), level=0, use_magic_file=False, log_append=False):
        log_files = []
        if use_magic_file:  # note: no ':' for the sake of Win
            log_files.append(f"LOG-{platform.uname().node}-{_time_str()}.txt".replace(":", "-"))
        log_files.extend(f for f in files if f is not None and not (isinstance(f, str) and len(f) == 0))
        old = Logger._instance
        if old is not None and old.log_files == log_files and old.level == level:
            zlog("Pass init to allow continue writing!!")
            return
        if old is not None:
            old.close()
        Logger._instance = Logger(log_files, level=level, log_append=log_append)

    def __init__(self, log_files: Iterable, level=0, log_append=False):
        self.log_files = list(log_files)
        self.level = level
        # only the ones opened here are closed here
        self.fds = [zopen(f, mode=("a" if log_append else "w")) if isinstance(f, str) else f for f in self.log_files]

    def __repr__(self):
        return f"Logger({self.log_files})"

    def close(self):
        for f, fd in zip(self.log_files, self.fds):
            if isinstance(f, str) and not fd.closed:
                fd.close()

    def log(self, s: object, func="", end="\n", flush=True, timed=False, level=0):
        if level < self.level:
            return
        head = Logger.HEADS.get(func, func)
        if level != 0:
            head = f"{head}[L{level}] "
        line = f"{head}[{_time_str()}] {s}" if timed else f"{head}{s}"
        for fd in self.fds:
            print(line, end=end, file=fd, flush=flush)

    # loggers from the "logging" module, for the outside libraries' style
    _sys_loggers = {}

    @staticmethod
    def get_sys_logger(name="zsrl", level=logging.INFO, handler=sys.stderr,
                       formatter='%(asctime)s - %(name)s - %(levelname)s - %(message)s'):
        ret = Logger._sys_loggers.get(name)
        if ret is None:
            ret = logging.getLogger(name)
            ret.setLevel(logging.INFO)
            h = logging.StreamHandler(handler)
            h.setLevel(level)
            h.setFormatter(logging.Formatter(formatter))
            ret.addHandler(h)
            Logger._sys_loggers[name] = ret
        return ret

# =====
# shortcuts

def zlog(s: object, **kwargs):
    Logger.get_singleton_logger().log(s, **kwargs)

def zwarn(s=""):
    zlog(s, func="warn", timed=True, level=1)

def zfatal(s=""):
    zlog(s, func="fatal", timed=True, level=1)
    raise RuntimeError(s)

def zcheck(v, s="", error=False):
    if not v:
        (zfatal if error else zwarn)(s)

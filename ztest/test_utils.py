#

# utils: confs, logging, files, registry

import os
import tempfile
import pytest
from zsrl import utils
from zsrl.utils import zlog, zwarn, zcheck, zfatal, Conf, Logger, zopen, zopen_atomic, Registrable, DictHelper, MathHelper, \
    default_pickle_serializer, default_json_serializer
from zsrl.argument import ArgClassifierConf, ArgTrainConf
from ztoy import scenario_frame

class _Conf0(Conf):
    def __init__(self):
        self.x = 1
        self.y = "test"
        self.z = _Conf1()

class _Conf1(Conf):
    def __init__(self):
        self.x = "k"
        self.a = 100
        self.ok = False

def test_conf():
    cc = _Conf0()
    cc.update_from_args(["a:10", "y:www", "z.x:1", "ok:1"])
    assert cc.y == "www" and cc.z.x == "1" and cc.z.a == 10 and cc.z.ok is True and cc.x == 1
    # ambiguous names are rejected
    with pytest.raises(AssertionError):
        _Conf0().update_from_args(["x:2"])
    # the classifier conf
    conf = ArgClassifierConf()
    conf.update_from_args(["enabled:0", "decoder:greedy", "perceptron.max_epochs:3", "dist_buckets:1,4"])
    assert not conf.consistency.enabled and conf.decoder == "greedy" and conf.perceptron.max_epochs == 3
    assert conf.featgen_conf.dist_buckets == [1, 4]
    conf2 = ArgClassifierConf()
    conf2.from_json(conf.to_json())
    assert conf2.to_json() == conf.to_json()
    with pytest.raises(AssertionError):
        ArgTrainConf().update_from_args(["max_epochs:-1"])

def test_log():
    with tempfile.TemporaryDirectory() as tmp_dir:
        log_file = os.path.join(tmp_dir, "zlog")
        utils.init(utils.ZsrlUtilsConf().direct_update(log_file=log_file, np_raise=False))
        zlog("hello", func="report")
        zwarn("careful")
        Logger.get_singleton_logger().close()
        with zopen(log_file) as fd:
            content = fd.read()
        utils.auto_init()
    assert "hello" in content and "careful" in content

def test_log_helpers():
    zcheck(True, "fine")
    zcheck(False, "not fine")
    for f in [lambda: zcheck(False, "bad", error=True), lambda: zfatal("fatal")]:
        with pytest.raises(RuntimeError):
            f()
    logger = Logger.get_sys_logger("zsrl_test")
    assert logger is Logger.get_sys_logger("zsrl_test")
    logger.info("from the logging module")

def test_serializers():
    frame = scenario_frame()
    p = frame.get_token(2)
    frame2 = default_pickle_serializer.from_obj(default_pickle_serializer.to_obj(frame))
    assert frame2.tokens == frame.tokens and frame2.arguments_of(p) == frame.arguments_of(p)
    assert default_json_serializer.from_obj(default_json_serializer.to_obj(frame)) == frame.to_json()

def test_atomic_write():
    with tempfile.TemporaryDirectory() as tmp_dir:
        path = os.path.join(tmp_dir, "out.txt")
        with zopen_atomic(path) as fd:
            fd.write("one\n")
        try:
            with zopen_atomic(path) as fd:
                fd.write("two\n")
                raise ValueError("stop")
        except ValueError:
            pass
        with zopen(path) as fd:
            assert fd.read() == "one\n"
        assert os.listdir(tmp_dir) == ["out.txt"]

class _Base(Registrable):
    pass

@_Base.reg_decorator("one")
class _One(_Base):
    pass

def test_reg():
    assert _Base.lookup("one").T is _One
    assert _Base.lookup("two") is None and list(_Base.keys()) == ["one"]
    assert _One().reg_key == "one"

def test_helpers():
    table = DictHelper.get_counts_info_table({"A0": 3, "A1": 1})
    assert list(table["Key"]) == ["A0", "A1"] and abs(table["APerc."].iloc[-1] - 1.) < 1e-6
    probs = MathHelper.softmax_dict({"a": 0., "b": 0.})
    assert MathHelper.isclose(probs["a"], 0.5) and MathHelper.softmax_dict({}) == {}

def main():
    test_conf()
    test_log()
    test_log_helpers()
    test_serializers()
    test_atomic_write()
    test_reg()
    test_helpers()

if __name__ == '__main__':
    main()

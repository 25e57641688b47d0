#

# structured training: decode with the in-progress weights, then update with (predicted, gold)

__all__ = [
    "ArgTrainConf", "StructuredTrainer",
]

from typing import List, Iterable
from zsrl.utils import Conf, Random, Timer, zlog
from zsrl.data.inst import SemanticFrameSet
from .classifier import ArgumentClassifier
from .evaluator import ArgEvalConf, ArgEvaluator

class ArgTrainConf(Conf):
    def __init__(self):
        self.max_epochs = 10
        self.shuffle = True  # shuffle the frames for each epoch
        self.unstructured_init = False  # start with batch training (otherwise from zero weights)
        self.average_each_epoch = True  # update avg weights at the end of each epoch
        self.report_freq = 1000  # report every this many frames
        self.eval = ArgEvalConf()

    def _do_validate(self):
        assert self.max_epochs >= 0

class StructuredTrainer:
    def __init__(self, arg_classifier: ArgumentClassifier, conf: ArgTrainConf = None):
        self.conf = conf if conf is not None else ArgTrainConf()
        self.arg_classifier = arg_classifier

    def test(self, frames: Iterable[SemanticFrameSet]):
        evaluator = ArgEvaluator(self.conf.eval)
        frames = list(frames)
        preds = [self.arg_classifier.frames_with_arguments(z) for z in frames]
        return evaluator.eval(frames, preds)

    # return the per-epoch records
    def train(self, gold_frames: Iterable[SemanticFrameSet], dev_frames: Iterable[SemanticFrameSet] = None):
        conf, clf = self.conf, self.arg_classifier
        gold_frames = list(gold_frames)
        dev_frames = None if dev_frames is None else list(dev_frames)
        if conf.unstructured_init:
            clf.unstructured_train(gold_frames)
        else:
            clf.reset()
        records = []
        with Timer(info="StructuredTraining", print_date=False):
            for eidx in range(conf.max_epochs):
                order = list(gold_frames)
                if conf.shuffle:
                    Random.shuffle(order, "trainer")
                evaluator = ArgEvaluator(conf.eval)
                num_updates = 0
                for fidx, gold in enumerate(order):
                    pred = clf.training_frames_with_arguments(gold)
                    evaluator.eval([gold], [pred])
                    num_updates += clf.update(pred, gold)
                    if (fidx+1) % conf.report_freq == 0:
                        zlog(f"Epoch {eidx} [{fidx+1}/{len(order)}]: {evaluator.get_current_result()}", func="report")
                one = {"eidx": eidx, "updates": num_updates, "train": float(evaluator.get_current_result())}
                if conf.average_each_epoch or dev_frames is not None:
                    clf.update_average_weights()
                if dev_frames is not None:
                    dev_res = self.test(dev_frames)
                    one["dev"] = float(dev_res)
                zlog(f"End of epoch {eidx}: {one}", func="report")
                records.append(one)
        clf.update_average_weights()
        return records

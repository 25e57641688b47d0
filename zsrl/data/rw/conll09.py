#

# CoNLL-2009 (semantic dependencies) reader & writer

__all__ = [
    "Conll09Conf", "Conll09Reader", "Conll09Writer",
]

from typing import List, Iterable, IO, Union
from zsrl.utils import Conf, zopen_withwrapper, zwarn, zlog
from zsrl.data.inst import SemanticFrameSet, TokenSentence

# ID FORM LEMMA PLEMMA POS PPOS FEAT PFEAT HEAD PHEAD DEPREL PDEPREL FILLPRED PRED APREDs
_IDX_FORM, _IDX_LEMMA, _IDX_PLEMMA, _IDX_POS, _IDX_PPOS = 1, 2, 3, 4, 5
_IDX_HEAD, _IDX_PHEAD, _IDX_DEPREL, _IDX_PDEPREL = 8, 9, 10, 11
_IDX_FILLPRED, _IDX_PRED, _IDX_APRED0 = 12, 13, 14
_NUM_FIXED = 14

class Conll09Conf(Conf):
    def __init__(self):
        self.use_predicted = False  # use the P* columns (PLEMMA, PPOS, PHEAD, PDEPREL)
        self.pred_by_fillpred = True  # FILLPRED=='Y' marks predicates, otherwise PRED!='_'
        self.skip_bad = True  # skip bad blocks instead of raising

class Conll09Reader:
    def __init__(self, conf: Conll09Conf = None):
        self.conf = conf if conf is not None else Conll09Conf()

    # group lines into blocks
    @staticmethod
    def yield_blocks(fd_or_path: Union[IO, str]):
        with zopen_withwrapper(fd_or_path) as fd:
            lines = []
            for line in fd:
                line = line.rstrip("\n")
                if len(line.strip()) == 0:
                    if len(lines) > 0:
                        yield lines
                    lines = []
                elif not line.startswith("#"):
                    lines.append(line)
            if len(lines) > 0:
                yield lines

    def parse_block(self, lines: List[str]) -> SemanticFrameSet:
        conf = self.conf
        rows = [z.split("\t") if "\t" in z else z.split() for z in lines]
        for r in rows:
            assert len(r) >= _NUM_FIXED, f"Bad conll09 line: {r}"
        if conf.use_predicted:
            i_lemma, i_pos, i_head, i_deprel = _IDX_PLEMMA, _IDX_PPOS, _IDX_PHEAD, _IDX_PDEPREL
        else:
            i_lemma, i_pos, i_head, i_deprel = _IDX_LEMMA, _IDX_POS, _IDX_HEAD, _IDX_DEPREL
        sent = TokenSentence.create([r[_IDX_FORM] for r in rows], [int(r[i_head]) for r in rows],
                                    [r[i_lemma] for r in rows], [r[i_pos] for r in rows], [r[i_deprel] for r in rows])
        # predicates
        if conf.pred_by_fillpred:
            pred_idxes = [i for i, r in enumerate(rows) if r[_IDX_FILLPRED] == "Y"]
        else:
            pred_idxes = [i for i, r in enumerate(rows) if r[_IDX_PRED] != "_"]
        ret = SemanticFrameSet.create_from_sent(sent, [sent.get_token(i) for i in pred_idxes])
        # arguments: the k-th APRED column is for the k-th predicate
        num_apreds = [len(r) - _NUM_FIXED for r in rows]
        assert all(z == num_apreds[0] for z in num_apreds), "Unmatched number of APRED columns!"
        if num_apreds[0] != len(pred_idxes):
            zwarn(f"Unmatched predicates and APRED columns: {len(pred_idxes)} vs {num_apreds[0]}")
        for k, pidx in enumerate(pred_idxes[:num_apreds[0]]):
            predicate = sent.get_token(pidx)
            for i, r in enumerate(rows):
                lab = r[_IDX_APRED0+k]
                if lab != "_":
                    ret.add_argument(predicate, sent.get_token(i), lab)
        return ret

    def yield_frames(self, fd_or_path: Union[IO, str]) -> Iterable[SemanticFrameSet]:
        num_read, num_bad = 0, 0
        for lines in Conll09Reader.yield_blocks(fd_or_path):
            try:
                one = self.parse_block(lines)
            except (AssertionError, ValueError, IndexError) as e:
                if not self.conf.skip_bad:
                    raise
                zwarn(f"Skip bad conll09 block: {e}")
                num_bad += 1
                continue
            num_read += 1
            yield one
        zlog(f"Read conll09 from {fd_or_path}: {num_read} frame sets ({num_bad} bad ones skipped).", func="io")

    def read_frames(self, fd_or_path: Union[IO, str]) -> List[SemanticFrameSet]:
        return list(self.yield_frames(fd_or_path))

class Conll09Writer:
    @staticmethod
    def frame_to_lines(frame: SemanticFrameSet) -> List[str]:
        predicates = frame.get_predicate_list()
        all_args = [frame.arguments_of(p) for p in predicates]
        lines = []
        for t in frame.tokens:
            _lemma, _pos, _deprel = [("_" if z is None else z) for z in (t.lemma, t.pos, t.deprel)]
            _head = str(t.head_sentence_index+1)
            is_pred = frame.is_predicate(t)
            fields = [str(t.sentence_index+1), str(t.word), _lemma, _lemma, _pos, _pos, "_", "_",
                      _head, _head, _deprel, _deprel, ("Y" if is_pred else "_"), (_lemma if is_pred else "_")]
            fields.extend([args.get(t, "_") for args in all_args])
            lines.append("\t".join(fields))
        return lines

    @staticmethod
    def write_frames(frames: Iterable[SemanticFrameSet], fd_or_path: Union[IO, str]):
        with zopen_withwrapper(fd_or_path, mode='w') as fd:
            for frame in frames:
                for line in Conll09Writer.frame_to_lines(frame):
                    fd.write(line + "\n")
                fd.write("\n")

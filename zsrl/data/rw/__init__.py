#

# reading & writing frame sets

from typing import Iterable, IO, Union, List
from zsrl.utils import get_json_serializer
from zsrl.data.inst import SemanticFrameSet
from .conll09 import *

# json-lines: one frame set per line
_frame_serializer = get_json_serializer(SemanticFrameSet)

def read_frames_jsonl(fd_or_path: Union[IO, str], max_num=-1) -> List[SemanticFrameSet]:
    return _frame_serializer.load_list(fd_or_path, max_num)

def write_frames_jsonl(frames: Iterable[SemanticFrameSet], fd_or_path: Union[IO, str]):
    _frame_serializer.save_iter(frames, fd_or_path)

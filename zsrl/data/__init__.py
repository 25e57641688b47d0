#

# zsrl.data: data instances, datasets and readers/writers

from .inst import *
from .dataset import *

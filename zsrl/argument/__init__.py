#

# zsrl.argument: finding and labeling the arguments of predicates

from .candidates import *
from .consistency import *
from .featgen import *
from .decoders import *
from .classifier import *
from .evaluator import *
from .trainer import *

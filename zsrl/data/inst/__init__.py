#

# data instances

from .sent import *
from .frame import *

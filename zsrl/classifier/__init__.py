#

# zsrl.classifier: the classifier capability and its variants

from .base import *
from .perceptron import *

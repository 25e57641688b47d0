#

# zsrl: semantic role labeling over dependency trees
# -- argument candidates from the tree, core-role consistency, and structured training of a linear classifier

VERSION_MAJOR = 0
VERSION_MINOR = 1
VERSION_PATCH = 0

def version(level=3):
    return (VERSION_MAJOR, VERSION_MINOR, VERSION_PATCH)[:level]

__version__ = ".".join(str(z) for z in version())

# layout
"""
zsrl:
- utils: logging, confs, files & serialization, registry, randomness, timing & eval entries
- data: tokens & sentences & frames, Datum/Dataset, conll09 and json-lines reading/writing
- classifier: the classifier capability and the averaged perceptron
- argument: candidates, consistency, feature generators, decoders, the argument classifier, training and eval
"""

#

# small hand-made data for the tests

from zsrl.data.inst import TokenSentence, SemanticFrameSet

# token4 is the root, token2 (the predicate) is under it, token1 & token3 are under token2, token0 is under token1
def scenario_sentence():
    return TokenSentence.create(["the", "dog", "chased", "cats", "today"], [2, 3, 5, 3, 0],
                                ["the", "dog", "chase", "cat", "today"], ["DT", "NN", "VBD", "NNS", "NN"],
                                ["NMOD", "SBJ", "VC", "OBJ", "ROOT"])

def scenario_frame():
    sent = scenario_sentence()
    frame = SemanticFrameSet.create_from_sent(sent, [sent.get_token(2)])
    frame.add_argument(sent.get_token(2), sent.get_token(1), "A0")
    frame.add_argument(sent.get_token(2), sent.get_token(3), "A1")
    return frame

# "<subj> <verb> <obj>": subj is A0, obj is A1
_TOY_TRIPLES = [
    ("John", "eats", "apples"), ("Mary", "reads", "books"), ("Tom", "likes", "dogs"),
    ("Anna", "buys", "cars"), ("Bob", "sells", "houses"), ("Kim", "paints", "walls"),
    ("Lee", "eats", "rice"), ("Sam", "reads", "papers"),
]

def toy_corpus():
    ret = []
    for subj, verb, obj in _TOY_TRIPLES:
        sent = TokenSentence.create([subj, verb, obj], [2, 0, 2], [subj.lower(), verb[:-1], obj[:-1]],
                                    ["NNP", "VBZ", "NNS"], ["SBJ", "ROOT", "OBJ"])
        frame = SemanticFrameSet.create_from_sent(sent, [sent.get_token(1)])
        frame.add_argument(sent.get_token(1), sent.get_token(0), "A0")
        frame.add_argument(sent.get_token(1), sent.get_token(2), "A1")
        ret.append(frame)
    return ret

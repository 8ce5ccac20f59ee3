from base_rule import BaseRule
from loop_classifier import classify


class LoopShapeRule(BaseRule):
    """
    Classifies every loop the walker converted (range loops and three-clause
    for loops, nested ones included).
    """

    def matches(self, node):
        return node.get("loop") is not None

    def apply(self, node):
        loop = node["loop"]
        return {
            "line": loop.line if loop.line is not None else node.get("line"),
            "classification": classify(loop),
        }

class BaseRule:
    """
    A rule looks at the node dicts produced by the walkers
    ("kind", "line", "children", "parent", "file", "loop") and returns one
    result per matching node.
    """

    def matches(self, node):
        raise NotImplementedError("matches() must be implemented")

    def apply(self, node):
        raise NotImplementedError("apply() must be implemented")

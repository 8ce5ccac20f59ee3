class RuleEngine:
    """
    Applies a collection of rules to a flat list of AST nodes
    and collects their results in node order.
    """

    def __init__(self, rules):
        self.rules = rules

    def run(self, nodes):
        results = []

        for node in nodes:
            for rule in self.rules:
                if rule.matches(node):
                    result = rule.apply(node)

                    if result:
                        results.append(result)

        return results

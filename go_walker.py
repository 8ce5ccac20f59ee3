import loop_model as lm


_IDENT_TYPES = {"identifier", "true", "false", "nil", "iota"}
_LITERAL_TYPES = {
    "int_literal",
    "float_literal",
    "imaginary_literal",
    "rune_literal",
    "raw_string_literal",
    "interpreted_string_literal",
}


def _text(ts_node):
    return ts_node.text.decode("utf-8", errors="replace")


def _named(ts_node):
    return [c for c in ts_node.named_children if c.type != "comment"]


def _expr_list(ts_node):
    if ts_node is None:
        return []
    if ts_node.type == "expression_list":
        return _named(ts_node)
    return [ts_node]


def convert_expr(ts_node, operand=False):
    if ts_node is None:
        return None

    kind = ts_node.type
    if kind in _IDENT_TYPES:
        return lm.Ident(_text(ts_node))
    if kind in _LITERAL_TYPES:
        return lm.Literal(_text(ts_node))
    # operands that are themselves binary stay opaque
    if kind == "binary_expression" and not operand:
        op = ts_node.child_by_field_name("operator")
        return lm.BinaryExpr(
            op.type if op is not None else None,
            convert_expr(ts_node.child_by_field_name("left"), operand=True),
            convert_expr(ts_node.child_by_field_name("right"), operand=True),
        )
    return lm.OtherExpr(kind)


def convert_stmt(ts_node):
    if ts_node is None:
        return None

    kind = ts_node.type
    if kind == "short_var_declaration":
        return lm.Assign(
            [convert_expr(c) for c in _expr_list(ts_node.child_by_field_name("left"))],
            ":=",
            [convert_expr(c) for c in _expr_list(ts_node.child_by_field_name("right"))],
        )

    if kind == "assignment_statement":
        op = ts_node.child_by_field_name("operator")
        return lm.Assign(
            [convert_expr(c) for c in _expr_list(ts_node.child_by_field_name("left"))],
            op.type if op is not None else None,
            [convert_expr(c) for c in _expr_list(ts_node.child_by_field_name("right"))],
        )

    if kind in ("inc_statement", "dec_statement"):
        operands = _named(ts_node)
        target = convert_expr(operands[0]) if operands else None
        return lm.IncDec(target, "++" if kind == "inc_statement" else "--")

    return lm.OtherStmt(kind)


def loop_from_go(ts_node):
    """
    Converts a tree-sitter for_statement into the loop model, or returns None
    for any other node.
    """
    if ts_node.type != "for_statement":
        return None

    line = ts_node.start_point[0] + 1
    header = [c for c in _named(ts_node) if c.type != "block"]
    if not header:
        # for {
        return lm.ForLoop(line=line)

    clause = header[0]
    if clause.type == "range_clause":
        return lm.RangeLoop(line=line)

    if clause.type == "for_clause":
        return lm.ForLoop(
            init=convert_stmt(clause.child_by_field_name("initializer")),
            cond=convert_expr(clause.child_by_field_name("condition")),
            post=convert_stmt(clause.child_by_field_name("update")),
            line=line,
        )

    # for cond {
    return lm.ForLoop(cond=convert_expr(clause), line=line)


def walk_go_tree(ts_node, nodes, *, parent=None):
    """
    Walks a tree-sitter Go tree and collects every node into a flat
    pre-order list for the rule engine. Loop nodes carry their converted
    loop model under "loop".

    Uses an explicit stack; generated code can nest deeper than the
    interpreter's recursion limit.
    """

    root = None
    stack = [(ts_node, parent)]
    while stack:
        current, owner = stack.pop()
        node = {
            "kind": current.type,
            "line": current.start_point[0] + 1,
            "children": [],
            "ts_node": current,
            "parent": owner,
            "loop": loop_from_go(current),
        }
        nodes.append(node)

        if root is None:
            root = node
        else:
            owner["children"].append(node)

        for child in reversed(current.children):
            stack.append((child, node))

    return root

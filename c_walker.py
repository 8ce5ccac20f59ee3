import logging
import os

from clang.cindex import CursorKind

import loop_model as lm


logger = logging.getLogger(__name__)


_WRAPPER_KINDS = {CursorKind.UNEXPOSED_EXPR}
_LITERAL_KINDS = {
    CursorKind.INTEGER_LITERAL,
    CursorKind.FLOATING_LITERAL,
    CursorKind.IMAGINARY_LITERAL,
    CursorKind.STRING_LITERAL,
    CursorKind.CHARACTER_LITERAL,
}
_INC_DEC = {"++", "--"}
_OPENERS = {"(", "[", "{"}
_CLOSERS = {")", "]", "}"}


def _unwrap(cursor):
    cur = cursor
    while cur is not None and cur.kind in _WRAPPER_KINDS:
        children = list(cur.get_children())
        if len(children) != 1:
            break
        cur = children[0]
    return cur


def _operator_after(cursor, left):
    # first token past the left operand
    end = left.extent.end.offset
    for tok in cursor.get_tokens():
        if tok.extent.start.offset >= end:
            return tok.spelling
    return None


def _incdec_operator(cursor, operand):
    # the only token outside the operand must be ++ or --, as in i++ or --i
    start = operand.extent.start.offset
    end = operand.extent.end.offset
    outside = [
        t.spelling
        for t in cursor.get_tokens()
        if t.extent.end.offset <= start or t.extent.start.offset >= end
    ]
    if len(outside) == 1 and outside[0] in _INC_DEC:
        return outside[0]
    return None


def _binary_operands(cursor):
    children = list(cursor.get_children())
    if len(children) != 2:
        return None, None
    return children[0], children[1]


def convert_expr(cursor, operand=False):
    if cursor is None:
        return None

    cursor = _unwrap(cursor)
    kind = cursor.kind
    if kind == CursorKind.DECL_REF_EXPR:
        return lm.Ident(cursor.spelling)

    if kind in _LITERAL_KINDS:
        tokens = list(cursor.get_tokens())
        return lm.Literal(tokens[0].spelling if tokens else "")

    # operands that are themselves binary stay opaque
    if kind == CursorKind.BINARY_OPERATOR and not operand:
        left, right = _binary_operands(cursor)
        if left is not None:
            return lm.BinaryExpr(
                _operator_after(cursor, left),
                convert_expr(left, operand=True),
                convert_expr(right, operand=True),
            )

    return lm.OtherExpr(kind.name)


def _var_initializer(decl):
    exprs = [c for c in decl.get_children() if c.kind.is_expression()]
    if not exprs:
        return None
    return exprs[-1]


def convert_stmt(cursor):
    if cursor is None:
        return None

    cursor = _unwrap(cursor)
    kind = cursor.kind

    if kind == CursorKind.DECL_STMT:
        # int i = 0, j = n;
        decls = [c for c in cursor.get_children() if c.kind == CursorKind.VAR_DECL]
        if not decls:
            return lm.OtherStmt(kind.name)
        targets = [lm.Ident(d.spelling) for d in decls]
        values = []
        for decl in decls:
            init = _var_initializer(decl)
            if init is not None:
                values.append(convert_expr(init))
        return lm.Assign(targets, "=", values)

    if kind in (CursorKind.BINARY_OPERATOR, CursorKind.COMPOUND_ASSIGNMENT_OPERATOR):
        left, right = _binary_operands(cursor)
        if left is not None:
            op = _operator_after(cursor, left)
            if kind == CursorKind.COMPOUND_ASSIGNMENT_OPERATOR or op == "=":
                return lm.Assign([convert_expr(left, operand=True)], op, [convert_expr(right, operand=True)])

    if kind == CursorKind.UNARY_OPERATOR:
        children = list(cursor.get_children())
        if len(children) == 1:
            op = _incdec_operator(cursor, children[0])
            if op is not None:
                return lm.IncDec(convert_expr(children[0], operand=True), op)

    return lm.OtherStmt(kind.name)


def _header_semicolons(cursor):
    offsets = []
    depth = 0
    started = False
    for tok in cursor.get_tokens():
        spelling = tok.spelling
        if not started:
            started = spelling == "("
            continue
        if spelling in _OPENERS:
            depth += 1
        elif spelling in _CLOSERS:
            if depth == 0:
                break
            depth -= 1
        elif spelling == ";" and depth == 0:
            offsets.append(tok.extent.start.offset)
    return offsets


def loop_from_cursor(cursor):
    """
    Converts FOR_STMT and CXX_FOR_RANGE_STMT cursors into the loop model.

    libclang only reports the clauses that are present, so each child of
    the for statement is placed by where it starts relative to the two
    semicolons of the loop header. That needs the header spelled out in the
    file: loops written through a macro (the first token is not "for") are
    skipped, as are headers whose semicolons cannot be found. Returns None
    for those and for any other cursor.
    """
    line = cursor.location.line
    if cursor.kind == CursorKind.CXX_FOR_RANGE_STMT:
        return lm.RangeLoop(line=line)
    if cursor.kind != CursorKind.FOR_STMT:
        return None

    first = next(iter(cursor.get_tokens()), None)
    if first is None or first.spelling != "for":
        logger.info("skipping for loop from a macro expansion on line %s", line)
        return None

    semicolons = _header_semicolons(cursor)
    if len(semicolons) < 2:
        return None

    init = cond = post = None
    # last child is the body
    for child in list(cursor.get_children())[:-1]:
        start = child.extent.start.offset
        if start < semicolons[0]:
            init = child
        elif start < semicolons[1]:
            cond = child
        else:
            post = child

    return lm.ForLoop(
        init=convert_stmt(init),
        cond=convert_expr(cond),
        post=convert_stmt(post),
        line=line,
    )


def walk_ast(cursor, nodes, *, parent=None, target_file=None):
    """
    Walks a Clang AST cursor and collects all nodes into a flat pre-order
    list for the rule engine.

    Cursors from other files (included headers) are skipped with their
    subtrees when target_file is given. Uses an explicit stack; deeply
    nested expressions would overflow the recursion limit.
    """

    realpath_cache = {}

    def in_target(cur):
        cursor_file = cur.location.file.name if cur.location.file else None
        if not (target_file and cursor_file):
            return True
        cached = realpath_cache.get(cursor_file)
        if cached is None:
            cached = os.path.realpath(cursor_file)
            realpath_cache[cursor_file] = cached
        return cached == target_file

    root = None
    stack = [(cursor, parent)]
    while stack:
        current, owner = stack.pop()
        if not in_target(current):
            continue

        node = {
            "kind": current.kind,
            "name": current.spelling,
            "line": current.location.line,
            "children": [],
            "cursor": current,
            "parent": owner,
            "file": current.location.file.name if current.location.file else None,
            "loop": loop_from_cursor(current),
        }
        nodes.append(node)

        if root is None:
            root = node
        else:
            owner["children"].append(node)

        for child in reversed(list(current.get_children())):
            stack.append((child, node))

    return root

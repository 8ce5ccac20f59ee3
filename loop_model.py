from collections import namedtuple


ZERO = "Zero"
ONE = "One"
LITERAL = "Literal"
NON_LITERAL = "NonLiteral"


class Ident:
    kind = "ident"

    def __init__(self, name):
        self.name = name

    def __repr__(self):
        return f"Ident({self.name!r})"


class Literal:
    kind = "literal"

    def __init__(self, text):
        self.text = text

    def __repr__(self):
        return f"Literal({self.text!r})"


class BinaryExpr:
    kind = "binary"

    def __init__(self, op, left, right):
        self.op = op
        self.left = left
        self.right = right

    def __repr__(self):
        return f"BinaryExpr({self.op!r}, {self.left!r}, {self.right!r})"


class OtherExpr:
    """
    Any expression the classifier does not look into (calls, selectors,
    unary minus, parenthesized expressions, ...).
    """

    kind = "other"

    def __init__(self, source_kind=None):
        self.source_kind = source_kind

    def __repr__(self):
        return f"OtherExpr({self.source_kind!r})"


class Assign:
    """
    Assignment-shaped statement: i := 0, i = 0, i += 2, int i = 0.
    """

    kind = "assign"

    def __init__(self, targets, op, values):
        self.targets = list(targets)
        self.op = op
        self.values = list(values)

    def __repr__(self):
        return f"Assign({self.targets!r}, {self.op!r}, {self.values!r})"


class IncDec:
    kind = "incdec"

    def __init__(self, target, op):
        self.target = target
        self.op = op

    def __repr__(self):
        return f"IncDec({self.target!r}, {self.op!r})"


class OtherStmt:
    kind = "other_stmt"

    def __init__(self, source_kind=None):
        self.source_kind = source_kind

    def __repr__(self):
        return f"OtherStmt({self.source_kind!r})"


class RangeLoop:
    kind = "range_loop"

    def __init__(self, line=None):
        self.line = line


class ForLoop:
    """
    Three-clause loop. Any of init, cond and post may be None; a loop with
    none of them is a bare loop and one with only cond is a while-style loop.
    """

    kind = "for_loop"

    def __init__(self, init=None, cond=None, post=None, line=None):
        self.init = init
        self.cond = cond
        self.post = post
        self.line = line


def ident_name(node):
    if isinstance(node, Ident):
        return node.name
    return None


def literal_text(node):
    if isinstance(node, Literal):
        return node.text
    return None


class Rejection(namedtuple("Rejection", ["code", "phrase"])):
    __slots__ = ()

    def describe(self):
        return self.phrase


class CountingLoop(namedtuple("CountingLoop", ["min_kind", "max_kind", "stride_kind"])):
    __slots__ = ()

    code = "CountingLoop"

    def describe(self):
        return f"counting loop min {self.min_kind}, max {self.max_kind}, stride {self.stride_kind}"


RANGE = Rejection("Range", "range")
BARE_FOR = Rejection("BareFor", "bare for")
COND_ONLY = Rejection("CondOnly", "cond only")
MISSING_INIT = Rejection("MissingInit", "missing init")
MISSING_POST = Rejection("MissingPost", "missing post")
COND_NOT_LESS_THAN = Rejection("CondNotLessThan", "cond not < or <=")
COND_LHS_NOT_IDENT = Rejection("CondLhsNotIdent", "cond lhs not identifier")
INIT_NOT_SIMPLE_ASSIGN = Rejection("InitNotSimpleAssign", "init not i := n")
INIT_LHS_NOT_IDENT = Rejection("InitLhsNotIdent", "init lhs not identifier")
INIT_COND_MISMATCH = Rejection("InitCondMismatch", "init lhs != cond lhs")
POST_NOT_ASSIGN_OR_INC_DEC = Rejection("PostNotAssignOrIncDec", "post not assign or inc/dec")
POST_ASSIGN_MULTI_VALUE = Rejection("PostAssignMultiValue", "post assign multiple values")
POST_ASSIGN_LHS_NOT_IDENT = Rejection("PostAssignLhsNotIdent", "post assign lhs not ident")
INIT_POST_MISMATCH = Rejection("InitPostMismatch", "init lhs != post lhs")
# i = i - 1 lands here too.
POST_ASSIGN_BAD_OPERATOR = Rejection("PostAssignBadOperator", "post assign not += or -=")
POST_INC_DEC_LHS_NOT_IDENT = Rejection("PostIncDecLhsNotIdent", "post incdec lhs not ident")

ALL_REJECTIONS = (
    RANGE,
    BARE_FOR,
    COND_ONLY,
    MISSING_INIT,
    MISSING_POST,
    COND_NOT_LESS_THAN,
    COND_LHS_NOT_IDENT,
    INIT_NOT_SIMPLE_ASSIGN,
    INIT_LHS_NOT_IDENT,
    INIT_COND_MISMATCH,
    POST_NOT_ASSIGN_OR_INC_DEC,
    POST_ASSIGN_MULTI_VALUE,
    POST_ASSIGN_LHS_NOT_IDENT,
    INIT_POST_MISMATCH,
    POST_ASSIGN_BAD_OPERATOR,
    POST_INC_DEC_LHS_NOT_IDENT,
)

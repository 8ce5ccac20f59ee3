"""
Counting-loop classifier.

Sorts a single loop into the shapes on the way to

    for i := min; i < max; i += stride

Most outcomes are rejections explaining the first way a loop departs from
that shape. Loops that match are described by their min, max and stride:
0 and 1 are the canonical min and stride, everything else is literal or
non-literal.
"""

import loop_model as lm


_LESS_THAN_OPS = {"<", "<="}
_STRIDE_ASSIGN_OPS = {"+=", "-="}


def classify(loop):
    if isinstance(loop, lm.RangeLoop):
        return lm.RANGE

    if not isinstance(loop, lm.ForLoop):
        raise TypeError(f"not a loop node: {loop!r}")

    init, cond, post = loop.init, loop.cond, loop.post

    # for {
    if init is None and cond is None and post is None:
        return lm.BARE_FOR

    # for scan.Scan() {
    if init is None and post is None:
        return lm.COND_ONLY

    if init is None:
        return lm.MISSING_INIT

    if post is None:
        return lm.MISSING_POST

    if not isinstance(cond, lm.BinaryExpr) or cond.op not in _LESS_THAN_OPS:
        return lm.COND_NOT_LESS_THAN

    cond_name = lm.ident_name(cond.left)
    if cond_name is None:
        return lm.COND_LHS_NOT_IDENT

    if not isinstance(init, lm.Assign) or len(init.targets) != 1 or len(init.values) != 1:
        return lm.INIT_NOT_SIMPLE_ASSIGN

    init_name = lm.ident_name(init.targets[0])
    if init_name is None:
        return lm.INIT_LHS_NOT_IDENT

    if init_name != cond_name:
        return lm.INIT_COND_MISMATCH

    if isinstance(post, lm.Assign):
        rejection = _check_post_assign(post, init_name)
    elif isinstance(post, lm.IncDec):
        rejection = _check_post_incdec(post, init_name)
    else:
        return lm.POST_NOT_ASSIGN_OR_INC_DEC

    if rejection is not None:
        return rejection

    # for i := ?; i <[=] ?; i += ? / i -= ? / i++ / i--
    return lm.CountingLoop(
        _min_kind(init.values[0]),
        _max_kind(cond.right),
        _stride_kind(post),
    )


def _check_post_assign(post, init_name):
    if len(post.targets) != 1 or len(post.values) != 1:
        return lm.POST_ASSIGN_MULTI_VALUE

    target = lm.ident_name(post.targets[0])
    if target is None:
        return lm.POST_ASSIGN_LHS_NOT_IDENT

    if target != init_name:
        return lm.INIT_POST_MISMATCH

    if post.op not in _STRIDE_ASSIGN_OPS:
        return lm.POST_ASSIGN_BAD_OPERATOR

    return None


def _check_post_incdec(post, init_name):
    target = lm.ident_name(post.target)
    if target is None:
        return lm.POST_INC_DEC_LHS_NOT_IDENT

    if target != init_name:
        return lm.INIT_POST_MISMATCH

    return None


def _min_kind(value):
    text = lm.literal_text(value)
    if text is None:
        return lm.NON_LITERAL
    if text == "0":
        return lm.ZERO
    return lm.LITERAL


def _max_kind(bound):
    if lm.literal_text(bound) is None:
        return lm.NON_LITERAL
    return lm.LITERAL


def _stride_kind(post):
    if isinstance(post, lm.IncDec):
        if post.op == "++":
            return lm.ONE
        # i-- steps by -1
        return lm.LITERAL

    text = lm.literal_text(post.values[0])
    if text is None:
        return lm.NON_LITERAL
    # i -= -1 stays literal
    if text == "1" and post.op == "+=":
        return lm.ONE
    return lm.LITERAL

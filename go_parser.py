import os

import tree_sitter_go as tsgo
from tree_sitter import Language, Parser


GO_LANGUAGE = Language(tsgo.language())

_parser = None


class ParseGoError(RuntimeError):
    pass


def _get_parser():
    global _parser
    if _parser is None:
        _parser = Parser(GO_LANGUAGE)
    return _parser


def _first_error_line(node):
    # follow the erroneous branch down without recursing
    while True:
        if node.type == "ERROR" or node.is_missing:
            return node.start_point[0] + 1
        for child in node.children:
            if child.has_error:
                node = child
                break
        else:
            return None


def parse_go_source(source, filename="<source>"):
    if isinstance(source, str):
        source = source.encode("utf-8")

    tree = _get_parser().parse(source)
    if tree.root_node.has_error:
        line = _first_error_line(tree.root_node)
        where = f" near line {line}" if line else ""
        raise ParseGoError(f"Could not parse '{os.path.basename(filename)}'{where}.")
    return tree


def parse_go_file(filename):
    if not os.path.exists(filename):
        raise ParseGoError(f"Input file does not exist: {filename}")
    if not os.path.isfile(filename):
        raise ParseGoError(f"Input path is not a file: {filename}")

    try:
        with open(filename, "rb") as f:
            source = f.read()
    except OSError as exc:
        raise ParseGoError(f"Could not read '{filename}': {exc}") from exc

    return parse_go_source(source, filename)

import os

from c_parser import ParseCError, parse_c_file
from c_walker import walk_ast
from go_parser import ParseGoError, parse_go_file
from go_walker import walk_go_tree


ALL_LANGUAGES = {"go", "c", "cpp"}
DEFAULT_LANGUAGES = {"go"}

PARSE_ERRORS = (ParseGoError, ParseCError)


class Frontend:
    """
    Parser and walker pair for one source language.
    """

    def __init__(self, language, extensions, parse, walk):
        self.language = language
        self.extensions = set(extensions)
        self.parse = parse
        self.walk = walk

    def collect_nodes(self, path):
        tree = self.parse(path)
        nodes = []
        self.walk(tree, path, nodes)
        return nodes


def _walk_go(tree, path, nodes):
    walk_go_tree(tree.root_node, nodes)


def _walk_c(translation_unit, path, nodes):
    walk_ast(translation_unit.cursor, nodes, target_file=os.path.realpath(path))


def _normalized_languages(enabled_languages):
    if not enabled_languages:
        return set(DEFAULT_LANGUAGES)
    return {lang for lang in enabled_languages if lang in ALL_LANGUAGES}


def build_frontends(enabled_languages=None):
    languages = _normalized_languages(enabled_languages)
    frontends = []

    if "go" in languages:
        frontends.append(Frontend("go", {".go"}, parse_go_file, _walk_go))

    if "c" in languages:
        frontends.append(Frontend("c", {".c", ".h"}, parse_c_file, _walk_c))

    if "cpp" in languages:
        frontends.append(
            Frontend("cpp", {".cc", ".cpp", ".cxx", ".hh", ".hpp", ".hxx"}, parse_c_file, _walk_c)
        )

    return frontends


def frontends_by_extension(frontends):
    out = {}
    for frontend in frontends:
        for ext in frontend.extensions:
            out[ext] = frontend
    return out

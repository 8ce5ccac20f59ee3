"""
loopshape reports the shape of every for loop under a directory, one line
per loop, geared towards spotting counting loops:

    for i := min; i < max; i += stride

Feed the output to sort and uniq for a frequency table:

    loopshape <dir> | sort | uniq -c | sort -n -r
"""

import json
import logging
import os
import sys

from frontend_factory import (
    ALL_LANGUAGES,
    DEFAULT_LANGUAGES,
    PARSE_ERRORS,
    build_frontends,
    frontends_by_extension,
)
from loop_model import CountingLoop
from loop_shape_rule import LoopShapeRule
from rule_engine import RuleEngine
from source_files import iter_source_files


USAGE = "usage: loopshape [--json] [--lang go,c,cpp] [--verbose] <dir> | sort | uniq -c | sort -n -r"

logger = logging.getLogger("loopshape")


def _configure_logging(verbose):
    logging.basicConfig(
        stream=sys.stderr,
        level=logging.INFO if verbose else logging.WARNING,
        format="loopshape: %(levelname)s: %(message)s",
        force=True,
    )


def _report_walk_error(exc):
    logger.warning("error during filesystem walk: %s", exc)


def _parse_languages(raw):
    languages = [lang.strip().lower() for lang in raw.split(",") if lang.strip()]
    unknown = sorted({lang for lang in languages if lang not in ALL_LANGUAGES})
    if unknown:
        raise ValueError(
            "Unknown language(s): "
            + ", ".join(unknown)
            + ". Valid languages: "
            + ", ".join(sorted(ALL_LANGUAGES))
            + "."
        )
    return languages


def _json_record(path, language, result):
    classification = result["classification"]
    record = {
        "file": path,
        "line": result["line"],
        "language": language,
        "code": classification.code,
        "label": classification.describe(),
    }
    if isinstance(classification, CountingLoop):
        record["min"] = classification.min_kind
        record["max"] = classification.max_kind
        record["stride"] = classification.stride_kind
    return record


def run(root, languages=None, json_mode=False, out=None):
    out = out or sys.stdout
    frontends = build_frontends(languages)
    by_extension = frontends_by_extension(frontends)
    engine = RuleEngine([LoopShapeRule()])

    for path in iter_source_files(root, set(by_extension), on_error=_report_walk_error):
        frontend = by_extension[os.path.splitext(path)[1]]
        try:
            nodes = frontend.collect_nodes(path)
        except PARSE_ERRORS as exc:
            # broken code is common in bulk scans; only shown with --verbose
            logger.info("skipping %s: %s", path, exc)
            continue

        for result in engine.run(nodes):
            if json_mode:
                out.write(json.dumps(_json_record(path, frontend.language, result)) + "\n")
            else:
                out.write(result["classification"].describe() + "\n")


def main(argv=None):
    args = list(sys.argv[1:] if argv is None else argv)

    json_mode = "--json" in args
    verbose = "--verbose" in args
    args = [a for a in args if a not in ("--json", "--verbose")]

    languages = sorted(DEFAULT_LANGUAGES)
    if "--lang" in args:
        idx = args.index("--lang")
        if idx + 1 >= len(args):
            print("Missing value after --lang (expected comma-separated language names).", file=sys.stderr)
            return 2
        try:
            languages = _parse_languages(args[idx + 1])
        except ValueError as exc:
            print(str(exc), file=sys.stderr)
            return 2
        args = args[:idx] + args[idx + 2 :]

    unknown = [a for a in args if a.startswith("--")]
    if unknown:
        print(f"Unknown option: {unknown[0]}", file=sys.stderr)
        print(USAGE, file=sys.stderr)
        return 2

    if not args:
        print(USAGE, file=sys.stderr)
        return 1

    _configure_logging(verbose)
    run(args[0], languages=languages, json_mode=json_mode)
    return 0


if __name__ == "__main__":
    sys.exit(main())

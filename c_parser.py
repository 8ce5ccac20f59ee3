import logging
import os
import shlex
import subprocess
import sys

from clang import cindex


logger = logging.getLogger(__name__)

CPP_EXTENSIONS = {".cc", ".cpp", ".cxx", ".hpp", ".hh", ".hxx"}


def _find_libclang():
    env_path = os.environ.get("LIBCLANG_FILE") or os.environ.get("LIBCLANG_PATH")
    if not env_path:
        # the libclang wheel ships its own shared library
        return None

    if os.path.isdir(env_path):
        for name in ("libclang.so", "libclang.dylib", "libclang.dll"):
            candidate = os.path.join(env_path, name)
            if os.path.exists(candidate):
                return candidate
    if os.path.exists(env_path):
        return env_path

    logger.warning("libclang not found at %s; using the default library", env_path)
    return None


libclang_path = _find_libclang()
if libclang_path:
    cindex.Config.set_library_file(libclang_path)


class ParseCError(RuntimeError):
    pass


def _sdk_args():
    if sys.platform != "darwin":
        return []
    try:
        sdk_path = subprocess.check_output(
            ["xcrun", "--show-sdk-path"],
            stderr=subprocess.DEVNULL,
            text=True,
        ).strip()
    except (OSError, subprocess.CalledProcessError):
        return []
    if not sdk_path:
        return []
    return [
        "-isysroot",
        sdk_path,
        "-I",
        os.path.join(sdk_path, "usr/include/c++/v1"),
    ]


def env_clang_args():
    return shlex.split(os.environ.get("LOOPSHAPE_CLANG_ARGS", ""))


def language_args(filename):
    ext = os.path.splitext(filename)[1].lower()
    if ext in CPP_EXTENSIONS:
        return ["-x", "c++", "-std=gnu++17"]
    return ["-x", "c", "-std=gnu11"]


def _blocking_diagnostics(translation_unit, target_file):
    blocking = []
    for diag in translation_unit.diagnostics:
        if diag.severity < cindex.Diagnostic.Error:
            continue
        loc = diag.location
        loc_file = loc.file.name if loc and loc.file else None
        if loc_file and os.path.realpath(loc_file) != target_file:
            continue
        blocking.append(diag)
    return blocking


def parse_c_file(filename, extra_args=None):
    if not os.path.exists(filename):
        raise ParseCError(f"Input file does not exist: {filename}")
    if not os.path.isfile(filename):
        raise ParseCError(f"Input path is not a file: {filename}")

    index = cindex.Index.create()
    args = language_args(filename) + _sdk_args() + env_clang_args() + (extra_args or [])

    try:
        translation_unit = index.parse(filename, args=args)
    except cindex.TranslationUnitLoadError as exc:
        raise ParseCError(f"Could not parse '{os.path.basename(filename)}'.") from exc

    blocking = _blocking_diagnostics(translation_unit, os.path.realpath(filename))
    if blocking:
        first = blocking[0]
        raise ParseCError(
            f"Could not parse '{os.path.basename(filename)}': "
            f"line {first.location.line}: {first.spelling}"
        )

    return translation_unit

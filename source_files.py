import os


def has_source_extension(path, extensions):
    return os.path.splitext(path)[1] in extensions


def iter_source_files(root, extensions, on_error=None):
    """
    Lazily yields candidate source files under root, in sorted walk order.

    A root that is itself a file is yielded on its own when its extension
    matches. Errors listing a directory go to on_error and the walk goes on.
    """
    if os.path.isfile(root):
        if has_source_extension(root, extensions):
            yield root
        return

    for dirpath, dirnames, filenames in os.walk(root, onerror=on_error):
        dirnames.sort()
        for name in sorted(filenames):
            path = os.path.join(dirpath, name)
            if os.path.isdir(path) or not has_source_extension(path, extensions):
                continue
            yield path

"""Listing files in a directory or a tree, and copying lists of files."""

from __future__ import annotations

import os
from collections.abc import Iterable
from pathlib import Path


def _extension(name: str) -> str | None:
    """Return the text after the last dot of a file name, if it has one.

    A name whose only dot is its first character (``.bashrc``) has no
    extension; ``name.`` has an empty one.
    """
    stem, dot, ext = name.rpartition(".")
    if not dot or not stem:
        return None
    return ext


def get_files_in_dir(
    directory: str | os.PathLike[str],
    with_ext: Iterable[str] | None = None,
    without_ext: Iterable[str] | None = None,
) -> list[Path]:
    """List the non-hidden files directly inside ``directory``.

    Paths are relative to ``directory``; sub-directories are not entered.
    ``with_ext`` keeps only files whose extension is listed and
    ``without_ext`` drops files whose extension is listed. Extensions are
    compared exactly, and with either filter given, files without an
    extension are dropped.
    """
    directory = Path(directory)
    wanted = None if with_ext is None else set(with_ext)
    unwanted = None if without_ext is None else set(without_ext)
    files = []
    with os.scandir(directory) as entries:
        for entry in entries:
            if not entry.is_file() or entry.name.startswith("."):
                continue
            ext = _extension(entry.name)
            if wanted is not None and (ext is None or ext not in wanted):
                continue
            if unwanted is not None and (ext is None or ext in unwanted):
                continue
            files.append(Path(entry.name))
    return sorted(files)


def get_files_in_tree(
    directory: str | os.PathLike[str],
    with_ext: Iterable[str] | None = None,
    without_ext: Iterable[str] | None = None,
) -> list[Path]:
    """List the files under ``directory`` and all its sub-directories.

    Paths are relative to ``directory`` and sorted. Anything inside a hidden
    directory, and hidden files, are skipped. Extension filters are case
    insensitive and never drop a file that has no extension.

    Raises NotADirectoryError if ``directory`` is not a directory.
    """
    directory = Path(directory)
    if not directory.is_dir():
        raise NotADirectoryError(f"Not a directory at: {directory}")
    wanted = None if with_ext is None else {e.lower() for e in with_ext}
    unwanted = None if without_ext is None else {e.lower() for e in without_ext}
    files = []
    for root, _dirs, names in os.walk(directory):
        for name in names:
            full = Path(root, name)
            if not full.is_file():
                continue
            relative = full.relative_to(directory)
            if any(part.startswith(".") for part in relative.parts):
                continue
            ext = _extension(name)
            if ext is not None:
                ext = ext.lower()
                if wanted is not None and ext not in wanted:
                    continue
                if unwanted is not None and ext in unwanted:
                    continue
            files.append(relative)
    return sorted(files, key=lambda p: p.parts)


def copy_file_list_from_to(
    files: Iterable[str | os.PathLike[str]],
    source: str | os.PathLike[str],
    destination: str | os.PathLike[str],
    overwrite: bool = False,
) -> None:
    """Copy relative ``files`` from ``source`` to ``destination``.

    Parent directories are created as needed. Existing files are left alone
    unless ``overwrite`` is true.
    """
    source = Path(source)
    destination = Path(destination)
    for file in files:
        out_path = destination / file
        if out_path.exists() and not overwrite:
            continue
        out_path.parent.mkdir(parents=True, exist_ok=True)
        # Read and write rather than copy so file watchers see a plain
        # content change instead of a copy event.
        out_path.write_bytes((source / file).read_bytes())
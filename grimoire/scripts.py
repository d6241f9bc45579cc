"""Run every executable file found under a directory."""

from __future__ import annotations

import argparse
import os
import subprocess
import sys
from pathlib import Path


def find_scripts(directory: str | os.PathLike[str]) -> list[Path]:
    """Return the executable, non-hidden files under ``directory``, sorted.

    Raises NotADirectoryError if ``directory`` is not a directory.
    """
    directory = Path(directory)
    if not directory.is_dir():
        raise NotADirectoryError(f"Not a directory at: {directory}")
    scripts = []
    for root, _dirs, names in os.walk(directory):
        for name in names:
            path = Path(root, name)
            if not path.is_file():
                continue
            if any(part.startswith(".") for part in path.relative_to(directory).parts):
                continue
            if os.access(path, os.X_OK):
                scripts.append(path)
    return sorted(scripts, key=lambda p: p.parts)


def run_scripts(directory: str | os.PathLike[str]) -> list[subprocess.Popen]:
    """Start each script from ``find_scripts`` inside its own directory.

    The scripts are started without waiting; the started processes are
    returned.
    """
    processes = []
    for script in find_scripts(directory):
        working_dir = script.parent.resolve(strict=True)
        processes.append(subprocess.Popen([f"./{script.name}"], cwd=working_dir))
    return processes


def main(argv: list[str] | None = None) -> int:
    """Run the scripts in a directory given on the command line."""
    parser = argparse.ArgumentParser(description="Run executable files in a directory.")
    parser.add_argument("directory", nargs="?", default="test-dirs/1")
    args = parser.parse_args(argv)
    try:
        run_scripts(args.directory)
    except OSError as error:
        print(f"Error: {error}", file=sys.stderr)
        return 1
    return 0
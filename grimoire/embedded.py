"""Writing a bundle of named files out under a directory."""

from __future__ import annotations

import os
from collections.abc import Mapping
from pathlib import Path


def extract_files(
    files: Mapping[str, bytes | str], output_root: str | os.PathLike[str]
) -> list[Path]:
    """Write each named file under ``output_root`` and return the paths written.

    Names may contain sub-directories, which are created as needed. Existing
    files are replaced. Text content is written as UTF-8.
    """
    root = Path(output_root)
    written = []
    for name, content in files.items():
        path = root / name
        path.parent.mkdir(parents=True, exist_ok=True)
        data = content.encode("utf-8") if isinstance(content, str) else bytes(content)
        path.write_bytes(data)
        written.append(path)
    return written
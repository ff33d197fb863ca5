"""Project manifest (package.json) lookup."""

from __future__ import annotations

import json
import logging
import os
from typing import Any, Dict, Optional

from constants import Constants

logger = logging.getLogger(__name__)


def find_package_json(start_dir: Optional[str] = None) -> Optional[str]:
    """Find the closest package.json, walking up from ``start_dir``.

    Args:
        start_dir: Directory to start in. Defaults to the current directory.

    Returns:
        str: Path of the package.json, or None when there is none up to the root.
    """
    directory = os.path.abspath(start_dir or os.getcwd())
    while True:
        candidate = os.path.join(directory, Constants.PACKAGE_JSON_FILE)
        if os.path.isfile(candidate):
            return candidate
        parent = os.path.dirname(directory)
        if parent == directory:
            return None
        directory = parent


def read_package_json(path: str) -> Dict[str, Any]:
    """Load a package.json file.

    Raises:
        OSError: If the file cannot be read.
        ValueError: If it is not a JSON object.
    """
    with open(path, "r", encoding="utf-8") as file:
        data = json.load(file)
    if not isinstance(data, dict):
        raise ValueError(f"{path} does not contain a JSON object")
    return data


class PackageJsonManifestReader:
    """Answers questions about the host project's package.json."""

    def __init__(self, cwd: Optional[str] = None):
        self._cwd = cwd

    def package_json_path(self) -> Optional[str]:
        return find_package_json(self._cwd)

    def declares_esm(self) -> bool:
        """True when the nearest package.json has ``"type": "module"``.

        A missing or unreadable manifest counts as CommonJS.
        """
        path = self.package_json_path()
        if not path:
            return False
        try:
            contents = read_package_json(path)
        except (OSError, ValueError) as exc:
            logger.warning("Couldn't read %s, assuming CommonJS: %s", path, exc)
            return False
        return contents.get("type") == "module"

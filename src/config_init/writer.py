"""Serialize a config object and write the .ec0lintrc file."""

from __future__ import annotations

import asyncio
import json
import logging
import os
from pathlib import Path
from typing import Any, Dict, Optional, Protocol

import yaml

from constants import ConfigFormats, Constants

from .errors import ConfigWriteError

logger = logging.getLogger(__name__)

EXTENSIONS = {
    ConfigFormats.YAML.value: ".yml",
    ConfigFormats.JSON.value: ".json",
}
SCRIPT_EXTENSION = ".js"
ESM_SCRIPT_EXTENSION = ".cjs"


class ManifestReader(Protocol):
    def declares_esm(self) -> bool:
        ...


def to_json(config: Dict[str, Any]) -> str:
    return json.dumps(config, indent=4, sort_keys=True, ensure_ascii=False) + "\n"


def to_yaml(config: Dict[str, Any]) -> str:
    return yaml.safe_dump(config, sort_keys=True, default_flow_style=False, allow_unicode=True)


def to_javascript(config: Dict[str, Any]) -> str:
    """CommonJS module, loadable as both .js and .cjs."""
    body = json.dumps(config, indent=4, sort_keys=True, ensure_ascii=False)
    return f"module.exports = {body};\n"


SERIALIZERS = {
    ConfigFormats.YAML.value: to_yaml,
    ConfigFormats.JSON.value: to_json,
}


class ConfigWriter:
    """Writes ``.ec0lintrc.<ext>`` into a project directory."""

    def __init__(self, manifest_reader: ManifestReader, cwd: Optional[str] = None):
        """Initialize the writer.

        Args:
            manifest_reader: Tells whether the project is an ES module package.
            cwd: Target directory. Defaults to the current directory.
        """
        self._manifest_reader = manifest_reader
        self._cwd = cwd

    @property
    def directory(self) -> Path:
        return Path(self._cwd or os.getcwd())

    def select_extension(self, fmt: Optional[str]) -> str:
        """Pick the file extension for ``fmt``.

        JavaScript configs become .cjs in "type": "module" projects, since a
        CommonJS .js file would not load there.
        """
        if fmt in EXTENSIONS:
            return EXTENSIONS[fmt]
        if self._manifest_reader.declares_esm():
            return ESM_SCRIPT_EXTENSION
        return SCRIPT_EXTENSION

    def target_path(self, fmt: Optional[str]) -> Path:
        return self.directory / f"{Constants.CONFIG_BASENAME}{self.select_extension(fmt)}"

    @staticmethod
    def serialize(config: Dict[str, Any], fmt: Optional[str]) -> str:
        return SERIALIZERS.get(fmt or "", to_javascript)(config)

    async def write(self, config: Dict[str, Any], fmt: Optional[str]) -> Path:
        """Write ``config`` in format ``fmt``, replacing any existing file.

        The fresh-install marker is removed from ``config`` first.

        Returns:
            Path: The written file.

        Raises:
            ConfigWriteError: If the file cannot be written.
        """
        path = self.target_path(fmt)
        config.pop(Constants.FRESH_INSTALL_MARKER, None)
        content = self.serialize(config, fmt)

        await asyncio.to_thread(_write_atomic, path, content)
        logger.info("Successfully created %s file in %s", path.name, path.parent)
        return path


def _write_atomic(path: Path, content: str) -> None:
    """Write through a temp file so a failed write leaves no partial config."""
    tmp_path = path.with_name(path.name + ".tmp")
    try:
        with open(tmp_path, "w", encoding="utf-8") as file:
            file.write(content)
        os.replace(tmp_path, path)
    except OSError as exc:
        if tmp_path.exists():
            tmp_path.unlink()
        raise ConfigWriteError(f"Couldn't write {path}: {exc}", path=str(path)) from exc

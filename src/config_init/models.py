"""Data models for answers and install decisions."""

from __future__ import annotations

from dataclasses import dataclass, field
from collections.abc import Mapping
from typing import Any, List, Optional, Union

from constants import ConfigFormats, Purposes

# Short names used by the interactive prompt
_PURPOSE_ALIASES = {
    "syntax": Purposes.SYNTAX.value,
    "all": Purposes.SYNTAX_AND_RESOURCES.value,
}


def _as_tags(value: Any) -> List[str]:
    """Coerce an answer into a list of unique string tags, order kept."""
    if value is None:
        return []
    if isinstance(value, str):
        value = [value]
    elif isinstance(value, Mapping):
        value = [key for key, selected in value.items() if selected]
    try:
        items = list(value)
    except TypeError:
        return []
    tags: List[str] = []
    for item in items:
        if isinstance(item, str) and item and item not in tags:
            tags.append(item)
    return tags


@dataclass
class RawAnswers:
    """Answers collected by the prompt front-end (or the command line).

    Every field is optional; ``None`` and empty values mean "not selected".
    """

    purpose: Optional[str] = None
    env: List[str] = field(default_factory=list)
    format: Optional[str] = None
    framework: Optional[str] = None
    typescript: bool = False
    indent: Optional[Union[str, int]] = None

    @classmethod
    def from_mapping(cls, data: Optional[Mapping[str, Any]]) -> "RawAnswers":
        """Build answers from a loosely structured mapping, ignoring unknown keys."""
        if isinstance(data, RawAnswers):
            return data
        if not isinstance(data, Mapping):
            return cls()

        purpose = data.get("purpose")
        if isinstance(purpose, str):
            purpose = _PURPOSE_ALIASES.get(purpose, purpose)
        else:
            purpose = None

        fmt = data.get("format")
        framework = data.get("framework")
        indent = data.get("indent")
        if not isinstance(indent, (str, int)) or isinstance(indent, bool):
            indent = None

        return cls(
            purpose=purpose,
            env=_as_tags(data.get("env")),
            format=fmt if isinstance(fmt, str) else None,
            framework=framework if isinstance(framework, str) else None,
            typescript=data.get("typescript") is True,
            indent=indent,
        )

    @property
    def is_syntax_only(self) -> bool:
        return self.purpose == Purposes.SYNTAX.value

    @property
    def config_format(self) -> str:
        """Requested format; JavaScript when nothing usable was chosen."""
        return self.format or ConfigFormats.JAVASCRIPT.value


@dataclass
class InstallDecision:
    """Modules that still need installing after the installed check."""

    to_install: List[str] = field(default_factory=list)

    def __bool__(self) -> bool:
        return bool(self.to_install)

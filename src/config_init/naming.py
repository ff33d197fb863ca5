"""Package naming helpers for plugins and shareable configs.

Plugins and presets can be referenced by short names in a config
(``react``, ``@scope``, ``airbnb``). npm only knows the full package names
(``eslint-plugin-react``, ``@scope/eslint-plugin``, ``ec0lint-config-airbnb``),
so everything handed to the resolver goes through ``normalize_package_name``.
"""

from __future__ import annotations

import re

from constants import Constants


def normalize_package_name(name: str, prefix: str) -> str:
    """Expand a short plugin/config reference into its npm package name.

    Args:
        name: Reference as written in the config, e.g. "react" or "@foo/bar".
        prefix: Package prefix, e.g. "eslint-plugin" or "ec0lint-config".

    Returns:
        str: Full package name, e.g. "eslint-plugin-react" or "@foo/eslint-plugin-bar".
    """
    normalized = name.replace("\\", "/")

    if normalized.startswith("@"):
        escaped = re.escape(prefix)
        shortcut = re.compile(rf"^(@[^/]+)(?:/(?:{escaped})?)?$")
        scoped_full = re.compile(rf"^{escaped}(-|$)")

        if shortcut.match(normalized):
            # "@scope", "@scope/" or "@scope/<prefix>"
            return shortcut.sub(rf"\1/{prefix}", normalized)
        _, _, rest = normalized.partition("/")
        if not scoped_full.match(rest):
            return re.sub(r"^@([^/]+)/(.*)$", rf"@\1/{prefix}-\2", normalized)
        return normalized

    if not normalized.startswith(f"{prefix}-"):
        normalized = f"{prefix}-{normalized}"
    return normalized


def is_bundled_preset(reference: str) -> bool:
    """True for presets that need no package of their own.

    Built-in presets ("ec0lint:recommended") ship with the tool, and
    "plugin:<name>/<config>" presets ship inside a plugin that is listed
    separately under ``plugins``.
    """
    return (
        reference.startswith(Constants.BUILTIN_PRESET_PREFIXES)
        or reference.startswith(Constants.PLUGIN_PRESET_PREFIX)
    )


def package_name_from_specifier(specifier: str) -> str:
    """Drop the version part of "name@version", keeping npm scopes intact.

    >>> package_name_from_specifier("@scope/pkg@latest")
    '@scope/pkg'
    """
    at = specifier.rfind("@")
    if at <= 0:
        return specifier
    return specifier[:at]

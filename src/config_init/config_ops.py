"""Canonicalization pass applied to a config before it is considered complete."""

from __future__ import annotations

from typing import Any, Dict

RULE_SEVERITY_STRINGS = ["off", "warn", "error"]


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def _severity_string(value: Any) -> str:
    if value in (0, 1, 2):
        return RULE_SEVERITY_STRINGS[int(value)]
    return RULE_SEVERITY_STRINGS[0]


def normalize_to_strings(config: Dict[str, Any]) -> Dict[str, Any]:
    """Normalize truthy surrogates in ``config`` in place.

    ``env`` entries become literal booleans. Numeric rule severities
    (``0``/``1``/``2``, bare or as the first item of a rule array) become
    "off"/"warn"/"error"; unknown numbers fall back to "off".

    Returns:
        dict: The same ``config`` object, for chaining.
    """
    env = config.get("env")
    if isinstance(env, dict):
        for key, value in env.items():
            if not isinstance(value, bool):
                env[key] = bool(value)

    rules = config.get("rules")
    if isinstance(rules, dict):
        for rule_id, rule_config in rules.items():
            if _is_number(rule_config):
                rules[rule_id] = _severity_string(rule_config)
            elif isinstance(rule_config, list) and rule_config and _is_number(rule_config[0]):
                rule_config[0] = _severity_string(rule_config[0])

    return config

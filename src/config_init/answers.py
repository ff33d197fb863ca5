"""Turn prompt answers into a canonical config object."""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Mapping, Optional, Union

from constants import Constants

from .config_ops import normalize_to_strings
from .models import RawAnswers

logger = logging.getLogger(__name__)

# framework answer -> (preset, plugin)
FRAMEWORK_PRESETS = {
    "react": ("plugin:react/recommended", "react"),
    "vue": ("plugin:vue/essential", "vue"),
}
TYPESCRIPT_PARSER = "@typescript-eslint/parser"
TYPESCRIPT_PLUGIN = "@typescript-eslint"
TYPESCRIPT_PRESET = "plugin:@typescript-eslint/recommended"


def _collapse_extends(extends: List[str]) -> Optional[Union[str, List[str]]]:
    """Deduplicate ``extends`` and reduce it to the simplest shape."""
    unique: List[str] = []
    for entry in extends:
        if entry not in unique:
            unique.append(entry)
    if not unique:
        return None
    if len(unique) == 1:
        return unique[0]
    return unique


def process_answers(answers: Union[RawAnswers, Mapping[str, Any], None]) -> Dict[str, Any]:
    """Process the user's answers and build a config object.

    Args:
        answers: Answers from the prompt, either raw or already parsed.

    Returns:
        dict: Canonical config with ``rules``, ``env``, ``parserOptions`` and,
        when needed, ``extends``, ``plugins`` and ``parser``.
    """
    answers = RawAnswers.from_mapping(answers)

    config: Dict[str, Any] = {
        "rules": {},
        "env": {Constants.BASELINE_ENV: True},
        "parserOptions": {"ecmaVersion": Constants.ECMA_VERSION},
    }
    extends: List[str] = []
    plugins: List[str] = []

    for env in answers.env:
        config["env"][env] = True

    if answers.is_syntax_only:
        extends.insert(0, Constants.RECOMMENDED_PRESET)
    # Rules for checking static resources are chosen elsewhere.

    framework = FRAMEWORK_PRESETS.get(answers.framework or "")
    if framework:
        preset, plugin = framework
        extends.append(preset)
        plugins.append(plugin)

    if answers.typescript:
        config["parser"] = TYPESCRIPT_PARSER
        extends.append(TYPESCRIPT_PRESET)
        plugins.append(TYPESCRIPT_PLUGIN)

    collapsed = _collapse_extends(extends)
    if collapsed is not None:
        config["extends"] = collapsed
    if plugins:
        config["plugins"] = plugins

    normalize_to_strings(config)
    logger.debug("Processed answers into config with keys %s", sorted(config))
    return config

"""Settings file loading and runtime overrides for ec0lint-init.

Precedence, lowest to highest: built-in Constants, settings file,
environment variables, CLI flags. Applying overrides never raises, so a
broken settings file cannot stop the initializer.
"""

from __future__ import annotations

import json
import logging
import os
from typing import Any, Dict, List, Optional

import yaml

from constants import Constants

logger = logging.getLogger(__name__)


def default_config_paths() -> List[str]:
    """Settings file locations tried when --config is not given."""
    xdg = os.environ.get("XDG_CONFIG_HOME") or os.path.join(os.path.expanduser("~"), ".config")
    paths = [os.path.join(xdg, Constants.DEFAULT_CONFIG_DIR, name) for name in Constants.DEFAULT_CONFIG_NAMES]
    paths.append(os.path.join(os.path.expanduser("~"), Constants.HOME_CONFIG_FILE))
    return paths


def load_config_file(path: Optional[str] = None) -> Dict[str, Any]:
    """Load the settings file.

    Args:
        path: Explicit YAML/JSON file. When None, the default locations are tried.

    Returns:
        dict: Settings, or an empty dict when no usable file exists.
    """
    candidates = [path] if path else default_config_paths()
    for candidate in candidates:
        if not os.path.isfile(candidate):
            if path:
                logger.warning("Config file not found: %s", candidate)
            continue
        try:
            with open(candidate, "r", encoding="utf-8") as fh:
                if candidate.lower().endswith(".json"):
                    data = json.load(fh)
                else:
                    data = yaml.safe_load(fh)
        except (OSError, ValueError, yaml.YAMLError) as exc:
            logger.error("Failed to load config %s: %s", candidate, exc)
            return {}
        if isinstance(data, dict):
            logger.debug("Loaded settings from %s", candidate)
            return data
        logger.warning("Ignoring config %s: expected a mapping", candidate)
        return {}
    return {}


def apply_overrides(args, cfg: Optional[Dict[str, Any]] = None) -> None:
    """Apply settings file, environment and CLI overrides to Constants."""
    cfg = cfg or {}
    try:
        if cfg.get("registry_url"):
            Constants.REGISTRY_URL_NPM = str(cfg["registry_url"])
        if cfg.get("request_timeout") is not None:
            Constants.REQUEST_TIMEOUT = int(cfg["request_timeout"])
    except (TypeError, ValueError) as exc:
        logger.warning("Ignoring invalid settings value: %s", exc)

    env_registry = os.environ.get(Constants.ENV_REGISTRY_URL)
    if env_registry and env_registry.strip():
        Constants.REGISTRY_URL_NPM = env_registry.strip()

    if getattr(args, "REGISTRY_URL", None):
        Constants.REGISTRY_URL_NPM = args.REGISTRY_URL


def collect_answers(args, cfg: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
    """Merge default answers from the settings file with CLI answers.

    Only answers that were actually given are present in the result, so the
    prompt can ask for the rest.
    """
    answers: Dict[str, Any] = {}
    defaults = (cfg or {}).get("answers")
    if isinstance(defaults, dict):
        answers.update(defaults)

    cli = {
        "purpose": getattr(args, "PURPOSE", None),
        "env": getattr(args, "ENV", None),
        "format": getattr(args, "FORMAT", None),
        "framework": getattr(args, "FRAMEWORK", None),
        "indent": getattr(args, "INDENT", None),
    }
    answers.update({key: value for key, value in cli.items() if value is not None})
    if getattr(args, "TYPESCRIPT", False):
        answers["typescript"] = True
    return answers

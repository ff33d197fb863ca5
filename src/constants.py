"""Constants used in the project."""

from enum import Enum


class ExitCodes(Enum):
    """Exit codes for the program.

    Args:
        Enum (int): Exit codes for the program.
    """

    SUCCESS = 0
    FILE_ERROR = 1
    INSTALL_ERROR = 2
    INTERRUPTED = 130


class ConfigFormats(Enum):
    """Config file formats the initializer can write.

    Args:
        Enum (string): Format names as offered by the prompt.
    """

    JAVASCRIPT = "JavaScript"
    YAML = "YAML"
    JSON = "JSON"


class Purposes(Enum):
    """Answers to the "How would you like to use ec0lint?" question.

    Args:
        Enum (string): Canonical purpose values.
    """

    SYNTAX = "syntax-only"
    SYNTAX_AND_RESOURCES = "syntax-and-resources"


class Constants:  # pylint: disable=too-few-public-methods
    """General constants used in the project.
    Data holder for configuration constants; not intended to provide behavior.
    """

    REGISTRY_URL_NPM = "https://registry.npmjs.org/"
    PACKAGE_JSON_FILE = "package.json"
    NPM_COMMAND = "npm"
    LOG_FORMAT = "[%(levelname)s] %(message)s"
    REQUEST_TIMEOUT = 30  # Timeout in seconds for registry requests

    # Config file naming
    CONFIG_BASENAME = ".ec0lintrc"
    SUPPORTED_FORMATS = [
        ConfigFormats.JAVASCRIPT.value,
        ConfigFormats.YAML.value,
        ConfigFormats.JSON.value,
    ]
    SUPPORTED_ENVS = ["browser", "node"]
    SUPPORTED_FRAMEWORKS = ["react", "vue", "none"]

    # Canonical config baseline
    BASELINE_ENV = "es2021"
    ECMA_VERSION = "latest"
    RECOMMENDED_PRESET = "ec0lint:recommended"

    # Package naming
    SELF_PACKAGE = "ec0lint"
    PLUGIN_PREFIX = "eslint-plugin"
    CONFIG_PREFIX = "ec0lint-config"
    BUILTIN_PRESET_PREFIXES = ("ec0lint:", "eslint:")
    PLUGIN_PRESET_PREFIX = "plugin:"
    VERSION_CONSTRAINT = "latest"

    # Transient marker set by the resolver, stripped before writing
    FRESH_INSTALL_MARKER = "installedEc0lint"

    # Environment / config file locations
    ENV_LOG_LEVEL = "EC0LINT_INIT_LOG_LEVEL"
    ENV_REGISTRY_URL = "EC0LINT_INIT_REGISTRY_URL"
    DEFAULT_CONFIG_NAMES = ["config.yml", "config.yaml"]
    DEFAULT_CONFIG_DIR = "ec0lint-init"
    HOME_CONFIG_FILE = ".ec0lint-init.yml"

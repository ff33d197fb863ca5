"""ec0lint config initializer package.

Turns prompt answers into a canonical config, resolves the npm packages the
config needs, installs the missing ones on request and writes the
``.ec0lintrc`` file.
"""

from .answers import process_answers
from .errors import (
    ConfigWriteError,
    Ec0lintInitError,
    InstallError,
    InstalledQueryError,
    RegistryError,
)
from .initializer import InitResult, initialize_config
from .installer import InstallDecisionMaker
from .manifest import PackageJsonManifestReader, find_package_json
from .models import InstallDecision, RawAnswers
from .resolver import ModuleResolver, PeerDependencyCache
from .writer import ConfigWriter

__all__ = [
    "process_answers",
    "Ec0lintInitError",
    "RegistryError",
    "InstalledQueryError",
    "InstallError",
    "ConfigWriteError",
    "InitResult",
    "initialize_config",
    "InstallDecisionMaker",
    "PackageJsonManifestReader",
    "find_package_json",
    "InstallDecision",
    "RawAnswers",
    "ModuleResolver",
    "PeerDependencyCache",
    "ConfigWriter",
]

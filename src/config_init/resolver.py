"""Work out which npm packages a config needs.

The resolver walks plugins, shareable configs (plus their peer
dependencies) and the parser of a config and returns ``name@latest``
specifiers. Peer lookups go to the registry oracle, which is slow, so every
answer is memoized in a ``PeerDependencyCache`` owned by the resolver.
"""

from __future__ import annotations

import inspect
import logging
from typing import Any, Awaitable, Callable, Dict, List, Mapping, Optional, Sequence, Union

from common.logging_utils import extra_context, is_debug_enabled
from constants import Constants

from .errors import RegistryError
from .naming import is_bundled_preset, normalize_package_name

logger = logging.getLogger(__name__)

PeerDependencies = Dict[str, str]
PeerOracle = Callable[[str], Union[Optional[Mapping[str, str]], Awaitable[Optional[Mapping[str, str]]]]]
InstalledQuery = Callable[[Sequence[str]], Union[Mapping[str, bool], Awaitable[Mapping[str, bool]]]]


async def _maybe_await(value: Any) -> Any:
    if inspect.isawaitable(value):
        return await value
    return value


class _Unqueried:
    """Sentinel type for cache keys the oracle has not answered yet."""

    def __repr__(self) -> str:
        return "UNQUERIED"


UNQUERIED = _Unqueried()


class PeerDependencyCache:
    """Memoized peer dependencies, keyed by the exact "name@version" string.

    Entries are never invalidated; a key is stored once the oracle has been
    asked, even when it had nothing to say.
    """

    def __init__(self) -> None:
        self._entries: Dict[str, PeerDependencies] = {}

    def get(self, key: str) -> Union[PeerDependencies, _Unqueried]:
        return self._entries.get(key, UNQUERIED)

    def set(self, key: str, peers: PeerDependencies) -> None:
        self._entries[key] = peers

    def __contains__(self, key: object) -> bool:
        return key in self._entries

    def __len__(self) -> int:
        return len(self._entries)


class ModuleResolver:
    """Resolves the modules a config depends on.

    One resolver is meant to live for one initializer session so that the
    peer cache is shared by every ``resolve`` call in it.
    """

    def __init__(
        self,
        fetch_peer_dependencies: PeerOracle,
        check_installed: InstalledQuery,
        cache: Optional[PeerDependencyCache] = None,
        self_package: str = Constants.SELF_PACKAGE,
    ):
        """Initialize the resolver.

        Args:
            fetch_peer_dependencies: Oracle returning the peer dependencies
                of a "name@version" specifier (sync or async).
            check_installed: Query returning name -> installed for a list of
                package names (sync or async).
            cache: Peer cache to use. A fresh one is created by default.
            self_package: Package name of the lint tool itself.
        """
        self._fetch_peer_dependencies = fetch_peer_dependencies
        self._check_installed = check_installed
        self.cache = cache if cache is not None else PeerDependencyCache()
        self.self_package = self_package
        self.installed_status: Dict[str, bool] = {}

    async def get_peer_dependencies(self, module_name: str) -> PeerDependencies:
        """Get the peer dependencies of ``module_name``, asking the oracle at most once.

        Registry failures are logged and produce an empty mapping. That empty
        answer is cached as well, so a key the registry failed on is not asked
        again in this session. It is not left unqueried for a retry on the
        next lookup.
        """
        cached = self.cache.get(module_name)
        if cached is not UNQUERIED:
            if is_debug_enabled(logger):
                logger.debug(
                    "Peer dependency cache hit",
                    extra=extra_context(event="cache_hit", component="resolver", target=module_name),
                )
            return cached

        logger.info("Checking peerDependencies of %s", module_name)
        try:
            result = await _maybe_await(self._fetch_peer_dependencies(module_name))
        except RegistryError as exc:
            logger.warning("Couldn't fetch peerDependencies of %s: %s", module_name, exc)
            result = None

        peers = dict(result) if result else {}
        self.cache.set(module_name, peers)
        return peers

    async def resolve(self, config: Dict[str, Any], include_self_tool: bool = True) -> List[str]:
        """Return the modules needed by ``config`` as "name@latest" strings.

        Order is first discovery: plugins, presets with their peers, parser,
        then the lint tool itself. Each package appears once. The installed
        status of every listed package is queried once and kept in
        ``installed_status`` for the install decision.

        Args:
            config: Canonical config. Gets the transient fresh-install marker
                when the lint tool itself has to be installed.
            include_self_tool: When False the lint tool is never listed.

        Raises:
            InstalledQueryError: If the installed check fails.
        """
        latest = Constants.VERSION_CONSTRAINT
        modules: Dict[str, str] = {}

        for plugin in config.get("plugins") or []:
            modules.setdefault(normalize_package_name(plugin, Constants.PLUGIN_PREFIX), latest)

        extends = config.get("extends") or []
        if isinstance(extends, str):
            extends = [extends]
        for extend in extends:
            if is_bundled_preset(extend):
                continue
            module_name = normalize_package_name(extend, Constants.CONFIG_PREFIX)
            modules.setdefault(module_name, latest)
            # One level only: peers of peers are not looked up.
            peers = await self.get_peer_dependencies(f"{module_name}@{latest}")
            for peer in peers:
                modules.setdefault(peer, latest)

        parser = config.get("parser") or (config.get("parserOptions") or {}).get("parser")
        if parser:
            modules.setdefault(parser, latest)

        self.installed_status = {}
        if include_self_tool:
            # One installed query per pass, covering every module and the tool
            names = list(modules)
            if self.self_package not in modules:
                names.append(self.self_package)
            status = dict(await _maybe_await(self._check_installed(names)))
            self.installed_status = status
            if not status.get(self.self_package, False):
                logger.info("Local %s installation not found.", self.self_package)
                modules.setdefault(self.self_package, latest)
                config[Constants.FRESH_INSTALL_MARKER] = True
        else:
            modules.pop(self.self_package, None)

        if is_debug_enabled(logger):
            logger.debug(
                "Resolved modules",
                extra=extra_context(
                    event="decision", component="resolver", action="resolve", count=len(modules)
                ),
            )
        return [f"{name}@{constraint}" for name, constraint in modules.items()]

"""npm collaborators: registry peer lookup, installed check and installer.

These are the default implementations handed to the resolver and the
install decision maker. Tests substitute their own callables.
"""

from __future__ import annotations

import asyncio
import json
import logging
import shutil
import urllib.parse
from typing import Dict, List, Optional, Sequence

import aiohttp

from common.logging_utils import Timer, extra_context, is_debug_enabled, safe_url
from constants import Constants

from .errors import InstallError, InstalledQueryError, RegistryError
from .manifest import find_package_json, read_package_json
from .naming import package_name_from_specifier

logger = logging.getLogger(__name__)

ABBREVIATED_ACCEPT = "application/vnd.npm.install-v1+json; q=1.0, application/json; q=0.8, */*"


def _split_specifier(specifier: str) -> tuple:
    name = package_name_from_specifier(specifier)
    version = specifier[len(name) + 1:] or Constants.VERSION_CONSTRAINT
    return name, version


def peer_dependencies_from_packument(packument: dict, version: str) -> Dict[str, str]:
    """Pick the ``peerDependencies`` of ``version`` (a tag or exact version).

    Returns:
        dict: name -> range, empty when the version or field is absent or
        the packument has an unexpected shape.
    """
    dist_tags = packument.get("dist-tags") or {}
    versions = packument.get("versions") or {}
    if not isinstance(dist_tags, dict) or not isinstance(versions, dict):
        return {}
    resolved = dist_tags.get(version, version)
    if not isinstance(resolved, str):
        return {}
    version_info = versions.get(resolved) or {}
    if not isinstance(version_info, dict):
        return {}
    peers = version_info.get("peerDependencies") or {}
    if not isinstance(peers, dict):
        return {}
    return {str(name): str(spec) for name, spec in peers.items()}


class RegistryPeerDependencyOracle:
    """Reads peer dependencies from the npm registry."""

    def __init__(self, registry_url: Optional[str] = None, timeout: Optional[int] = None):
        """Initialize the oracle.

        Args:
            registry_url: Registry base URL. Defaults to Constants.REGISTRY_URL_NPM.
            timeout: Request timeout in seconds. Defaults to Constants.REQUEST_TIMEOUT.
        """
        base = registry_url or Constants.REGISTRY_URL_NPM
        self._registry_url = base.rstrip("/") + "/"
        self._timeout = aiohttp.ClientTimeout(total=timeout or Constants.REQUEST_TIMEOUT)
        self._session: Optional[aiohttp.ClientSession] = None

    async def start(self) -> None:
        """Start the HTTP session."""
        if self._session is None:
            self._session = aiohttp.ClientSession(timeout=self._timeout)

    async def stop(self) -> None:
        """Stop the HTTP session."""
        if self._session:
            await self._session.close()
            self._session = None

    async def __aenter__(self) -> "RegistryPeerDependencyOracle":
        await self.start()
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.stop()

    def packument_url(self, name: str) -> str:
        # Scoped names keep the leading "@" and escape the slash
        return self._registry_url + urllib.parse.quote(name, safe="@")

    async def _get_packument(self, url: str) -> dict:
        if self._session is None:
            await self.start()
        assert self._session is not None
        try:
            async with self._session.get(url, headers={"Accept": ABBREVIATED_ACCEPT}) as res:
                if res.status != 200:
                    raise RegistryError(f"registry returned HTTP {res.status} for {safe_url(url)}")
                text = await res.text()
        except (aiohttp.ClientError, asyncio.TimeoutError) as exc:
            raise RegistryError(f"registry request failed for {safe_url(url)}: {exc}") from exc
        except UnicodeDecodeError as exc:
            raise RegistryError(f"couldn't decode registry response for {safe_url(url)}") from exc
        try:
            data = json.loads(text)
        except json.JSONDecodeError as exc:
            raise RegistryError(f"couldn't decode registry response for {safe_url(url)}") from exc
        if not isinstance(data, dict):
            raise RegistryError(f"unexpected registry response for {safe_url(url)}")
        return data

    async def fetch_peer_dependencies(self, specifier: str) -> Dict[str, str]:
        """Fetch the peerDependencies of ``name@version``.

        Raises:
            RegistryError: If the registry cannot be reached or answers badly.
        """
        name, version = _split_specifier(specifier)
        url = self.packument_url(name)
        with Timer() as timer:
            packument = await self._get_packument(url)
        if is_debug_enabled(logger):
            logger.debug(
                "Fetched packument",
                extra=extra_context(
                    event="http_response",
                    component="oracle",
                    action="GET",
                    outcome="success",
                    duration_ms=timer.duration_ms(),
                    target=safe_url(url),
                ),
            )
        return peer_dependencies_from_packument(packument, version)


def check_dev_deps(packages: Sequence[str], cwd: Optional[str] = None) -> Dict[str, bool]:
    """Check whether packages are declared in the nearest package.json.

    Both ``dependencies`` and ``devDependencies`` count as present.

    Args:
        packages: Bare package names.
        cwd: Directory to start looking for package.json in.

    Returns:
        dict: package name -> True when declared.

    Raises:
        InstalledQueryError: If there is no readable package.json.
    """
    path = find_package_json(cwd)
    if not path:
        raise InstalledQueryError(
            "Could not find a package.json file. Run 'npm init' to create one, "
            f"then check for {', '.join(packages)} again.",
            packages=packages,
        )
    try:
        contents = read_package_json(path)
    except (OSError, ValueError) as exc:
        raise InstalledQueryError(
            f"Could not read {path} while checking for {', '.join(packages)}: {exc}",
            packages=packages,
            path=path,
        ) from exc

    declared = set()
    for field in ("dependencies", "devDependencies"):
        section = contents.get(field) or {}
        if isinstance(section, dict):
            declared.update(section)
    return {pkg: pkg in declared for pkg in packages}


async def install_packages(packages: Sequence[str], cwd: Optional[str] = None) -> None:
    """Install ``packages`` as dev dependencies with one npm invocation.

    Raises:
        InstallError: If npm is missing or exits with a non-zero status.
    """
    packages = list(packages)
    npm = shutil.which(Constants.NPM_COMMAND)
    if npm is None:
        raise InstallError(
            f"Could not execute npm. Please install the following packages manually: {' '.join(packages)}",
            packages=packages,
        )
    cmd: List[str] = [npm, "install", "--save-dev", *packages]
    logger.debug("Running %s", " ".join(cmd))
    try:
        proc = await asyncio.create_subprocess_exec(*cmd, cwd=cwd)
    except OSError as exc:
        raise InstallError(
            f"Could not execute npm ({exc}). Please install the following packages manually: {' '.join(packages)}",
            packages=packages,
        ) from exc
    returncode = await proc.wait()
    if returncode != 0:
        raise InstallError(
            f"npm exited with status {returncode}. Please install the following packages manually: {' '.join(packages)}",
            packages=packages,
            returncode=returncode,
        )

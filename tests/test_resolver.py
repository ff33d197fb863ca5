"""Tests for module resolution and the peer dependency cache."""

import asyncio

import pytest

from config_init.errors import InstalledQueryError, RegistryError
from config_init.naming import package_name_from_specifier
from config_init.resolver import UNQUERIED, ModuleResolver, PeerDependencyCache


class FakeOracle:
    """Peer dependency oracle that records every call."""

    def __init__(self, peers=None, error=None):
        self.peers = peers or {}
        self.error = error
        self.calls = []

    async def __call__(self, specifier):
        self.calls.append(specifier)
        if self.error is not None:
            raise self.error
        return self.peers.get(specifier)


def installed(**status):
    def check(packages):
        return {pkg: status.get(pkg, False) for pkg in packages}
    return check


def make_resolver(oracle=None, check=None):
    return ModuleResolver(oracle or FakeOracle(), check or installed(ec0lint=True))


class TestResolve:
    """Tests for ModuleResolver.resolve()."""

    def test_builtin_preset_needs_nothing(self):
        oracle = FakeOracle()
        resolver = make_resolver(oracle)
        config = {"extends": "ec0lint:recommended", "env": {"es2021": True, "node": True}}

        modules = asyncio.run(resolver.resolve(config))

        assert modules == []
        assert oracle.calls == []

    def test_tool_added_when_not_installed(self):
        resolver = make_resolver(check=installed())
        config = {"extends": "ec0lint:recommended"}

        modules = asyncio.run(resolver.resolve(config))

        assert modules == ["ec0lint@latest"]
        assert config["installedEc0lint"] is True

    def test_tool_not_marked_when_installed(self):
        resolver = make_resolver(check=installed(ec0lint=True))
        config = {}

        asyncio.run(resolver.resolve(config))

        assert "installedEc0lint" not in config

    def test_plugins(self):
        resolver = make_resolver()
        config = {"plugins": ["react", "@typescript-eslint"]}

        modules = asyncio.run(resolver.resolve(config))

        assert modules == [
            "eslint-plugin-react@latest",
            "@typescript-eslint/eslint-plugin@latest",
        ]

    def test_preset_with_peers(self):
        oracle = FakeOracle({"ec0lint-config-foo@latest": {"pkgA": "^1.0.0", "pkgB": "^2.0.0"}})
        resolver = make_resolver(oracle)

        modules = asyncio.run(resolver.resolve({"extends": ["foo"]}))

        assert modules == ["ec0lint-config-foo@latest", "pkgA@latest", "pkgB@latest"]
        assert oracle.calls == ["ec0lint-config-foo@latest"]

    def test_plugin_presets_not_sent_to_oracle(self):
        oracle = FakeOracle()
        resolver = make_resolver(oracle)
        config = {"extends": ["ec0lint:recommended", "plugin:react/recommended"], "plugins": ["react"]}

        modules = asyncio.run(resolver.resolve(config))

        assert modules == ["eslint-plugin-react@latest"]
        assert oracle.calls == []

    def test_peers_are_one_level_deep(self):
        oracle = FakeOracle({
            "ec0lint-config-foo@latest": {"pkgA": "*"},
            "pkgA@latest": {"pkgDeep": "*"},
        })
        resolver = make_resolver(oracle)

        modules = asyncio.run(resolver.resolve({"extends": "foo"}))

        assert "pkgDeep@latest" not in modules
        assert oracle.calls == ["ec0lint-config-foo@latest"]

    def test_parser_top_level_and_nested(self):
        resolver = make_resolver()

        top = asyncio.run(resolver.resolve({"parser": "@babel/eslint-parser"}))
        nested = asyncio.run(resolver.resolve({"parserOptions": {"parser": "vue-eslint-parser"}}))

        assert top == ["@babel/eslint-parser@latest"]
        assert nested == ["vue-eslint-parser@latest"]

    def test_order_and_uniqueness(self):
        oracle = FakeOracle({
            "ec0lint-config-foo@latest": {"eslint-plugin-react": "^7", "ec0lint": ">=1"},
            "ec0lint-config-bar@latest": {"eslint-plugin-react": "^7", "pkgC": "1"},
        })
        resolver = make_resolver(oracle, installed())
        config = {
            "plugins": ["react"],
            "extends": ["foo", "bar", "foo"],
            "parser": "pkgC",
        }

        modules = asyncio.run(resolver.resolve(config))
        names = [package_name_from_specifier(m) for m in modules]

        assert modules == [
            "eslint-plugin-react@latest",
            "ec0lint-config-foo@latest",
            "ec0lint@latest",
            "ec0lint-config-bar@latest",
            "pkgC@latest",
        ]
        assert len(names) == len(set(names))

    def test_exclude_self_tool(self):
        oracle = FakeOracle({"ec0lint-config-foo@latest": {"ec0lint": ">=1", "pkgA": "1"}})
        checks = []

        def check(packages):
            checks.append(packages)
            return {}

        resolver = ModuleResolver(oracle, check)
        config = {"extends": "foo"}

        modules = asyncio.run(resolver.resolve(config, include_self_tool=False))

        assert modules == ["ec0lint-config-foo@latest", "pkgA@latest"]
        assert checks == []
        assert "installedEc0lint" not in config

    def test_registry_failure_degrades_to_no_peers(self):
        oracle = FakeOracle(error=RegistryError("offline"))
        resolver = make_resolver(oracle)

        modules = asyncio.run(resolver.resolve({"extends": "foo"}))

        assert modules == ["ec0lint-config-foo@latest"]

    def test_oracle_returning_none(self):
        resolver = make_resolver(FakeOracle())

        modules = asyncio.run(resolver.resolve({"extends": "foo"}))

        assert modules == ["ec0lint-config-foo@latest"]

    def test_one_installed_query_per_pass(self):
        checks = []

        def check(packages):
            checks.append(list(packages))
            return {"eslint-plugin-react": True, "ec0lint": True}

        resolver = ModuleResolver(FakeOracle(), check)

        asyncio.run(resolver.resolve({"plugins": ["react"], "parser": "espree"}))

        assert checks == [["eslint-plugin-react", "espree", "ec0lint"]]
        assert resolver.installed_status == {"eslint-plugin-react": True, "ec0lint": True}

    def test_installed_query_failure_propagates(self):
        def check(packages):
            raise InstalledQueryError("no package.json", packages=packages)

        resolver = ModuleResolver(FakeOracle(), check)

        with pytest.raises(InstalledQueryError):
            asyncio.run(resolver.resolve({}))

    def test_async_installed_query(self):
        async def check(packages):
            return {"ec0lint": True}

        resolver = ModuleResolver(FakeOracle(), check)

        assert asyncio.run(resolver.resolve({})) == []

    def test_sync_oracle(self):
        calls = []

        def oracle(specifier):
            calls.append(specifier)
            return {"pkgA": "1"}

        resolver = ModuleResolver(oracle, installed(ec0lint=True))

        modules = asyncio.run(resolver.resolve({"extends": "foo"}))

        assert modules == ["ec0lint-config-foo@latest", "pkgA@latest"]
        assert calls == ["ec0lint-config-foo@latest"]


class TestPeerDependencyCache:
    """Tests for memoized peer lookups."""

    def test_oracle_queried_once_across_resolves(self):
        oracle = FakeOracle({"ec0lint-config-foo@latest": {"pkgA": "^1.0.0"}})
        resolver = make_resolver(oracle)

        first = asyncio.run(resolver.resolve({"extends": "foo"}))
        second = asyncio.run(resolver.resolve({"extends": ["foo", "ec0lint:recommended"]}))

        assert first == second
        assert oracle.calls == ["ec0lint-config-foo@latest"]

    def test_failed_lookup_is_not_repeated(self):
        oracle = FakeOracle(error=RegistryError("offline"))
        resolver = make_resolver(oracle)

        asyncio.run(resolver.resolve({"extends": "foo"}))
        asyncio.run(resolver.resolve({"extends": "foo"}))

        assert oracle.calls == ["ec0lint-config-foo@latest"]

    def test_separate_resolvers_do_not_share_cache(self):
        oracle = FakeOracle({"ec0lint-config-foo@latest": {"pkgA": "1"}})

        asyncio.run(make_resolver(oracle).resolve({"extends": "foo"}))
        asyncio.run(make_resolver(oracle).resolve({"extends": "foo"}))

        assert len(oracle.calls) == 2

    def test_shared_cache_instance(self):
        oracle = FakeOracle({"ec0lint-config-foo@latest": {"pkgA": "1"}})
        cache = PeerDependencyCache()

        asyncio.run(ModuleResolver(oracle, installed(ec0lint=True), cache=cache).resolve({"extends": "foo"}))
        asyncio.run(ModuleResolver(oracle, installed(ec0lint=True), cache=cache).resolve({"extends": "foo"}))

        assert len(oracle.calls) == 1
        assert "ec0lint-config-foo@latest" in cache

    def test_unqueried_sentinel(self):
        cache = PeerDependencyCache()

        assert cache.get("x@latest") is UNQUERIED
        cache.set("x@latest", {})
        assert cache.get("x@latest") == {}
        assert len(cache) == 1

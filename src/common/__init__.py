"""Shared helpers used by the CLI and the config_init package."""

"""ec0lint-init - create an .ec0lintrc config file

    Asks how ec0lint should be used, writes the matching config file and
    offers to install the packages the config depends on.

    Returns:
        int: Exit code
"""
import asyncio
import logging
import os
import sys

from args import parse_args
from cli_config import apply_overrides, collect_answers, load_config_file
from common.logging_utils import configure_logging, extra_context, is_debug_enabled
from constants import Constants, ExitCodes

REQUIRED_ANSWERS = ("purpose", "env", "format", "indent")


def _setup_logging(args):
    """Configure logging based on CLI arguments.

    Args:
        args: Parsed CLI arguments.
    """
    # Honor CLI --loglevel by passing it to centralized logger via env
    if getattr(args, "LOG_LEVEL", None):
        os.environ[Constants.ENV_LOG_LEVEL] = str(args.LOG_LEVEL).upper()
    configure_logging()

    log_file = getattr(args, "LOG_FILE", None)
    if log_file:
        file_handler = logging.FileHandler(log_file, encoding="utf-8")
        file_handler.setFormatter(logging.Formatter("%(asctime)s %(levelname)s %(name)s %(message)s"))
        logging.getLogger().addHandler(file_handler)
        logging.info("Logging to file: %s", log_file)


def gather_answers(args, cfg):
    """Combine settings file and CLI answers, prompting for the rest on a terminal."""
    answers = collect_answers(args, cfg)
    missing = [key for key in REQUIRED_ANSWERS if key not in answers]
    if missing and sys.stdin.isatty():
        # Lazy import keeps rich off the non-interactive path
        from config_init.prompts import prompt_answers  # pylint: disable=import-outside-toplevel
        answers = prompt_answers(answers)
    elif missing:
        logging.debug("Not a terminal; leaving %s unanswered", ", ".join(missing))
    return answers


async def run_initializer(args, answers):
    """Wire the default collaborators and run the initializer pipeline."""
    # pylint: disable=import-outside-toplevel
    from config_init import (
        ConfigWriter,
        InstallDecisionMaker,
        ModuleResolver,
        PackageJsonManifestReader,
        initialize_config,
    )
    from config_init.npm_utils import RegistryPeerDependencyOracle, check_dev_deps, install_packages
    from config_init.prompts import confirm_install

    cwd = getattr(args, "CWD", None)

    def check_installed(packages):
        return check_dev_deps(packages, cwd)

    def install(packages):
        return install_packages(packages, cwd)

    def confirm(modules):
        if getattr(args, "YES", False):
            return True
        return confirm_install(modules)

    async with RegistryPeerDependencyOracle(Constants.REGISTRY_URL_NPM, Constants.REQUEST_TIMEOUT) as oracle:
        resolver = ModuleResolver(oracle.fetch_peer_dependencies, check_installed)
        return await initialize_config(
            answers,
            resolver=resolver,
            decision_maker=InstallDecisionMaker(install),
            writer=ConfigWriter(PackageJsonManifestReader(cwd), cwd),
            confirm=confirm,
            install=not getattr(args, "NO_INSTALL", False),
        )


def main(argv=None):
    """Main function of the program."""
    logger = logging.getLogger(__name__)

    args = parse_args(argv)
    _setup_logging(args)
    cfg = load_config_file(getattr(args, "CONFIG", None))
    apply_overrides(args, cfg)

    if is_debug_enabled(logger):
        logger.debug(
            "CLI start",
            extra=extra_context(event="function_entry", component="cli", action="main")
        )

    from config_init.errors import ConfigWriteError, InstallError, InstalledQueryError  # pylint: disable=import-outside-toplevel

    try:
        answers = gather_answers(args, cfg)
        result = asyncio.run(run_initializer(args, answers))
    except InstalledQueryError as e:
        logging.error("%s", e)
        if not getattr(args, "NO_INSTALL", False):
            logging.error("Use --no-install to only write the config file.")
        sys.exit(ExitCodes.FILE_ERROR.value)
    except InstallError as e:
        logging.error("%s", e)
        sys.exit(ExitCodes.INSTALL_ERROR.value)
    except ConfigWriteError as e:
        logging.error("%s", e)
        sys.exit(ExitCodes.FILE_ERROR.value)
    except KeyboardInterrupt:
        logging.warning("Aborted.")
        sys.exit(ExitCodes.INTERRUPTED.value)

    if getattr(args, "NO_INSTALL", False) and result.modules:
        logging.info("The config requires the following dependencies: %s", " ".join(result.modules))

    if is_debug_enabled(logger):
        logger.debug(
            "CLI finished",
            extra=extra_context(
                event="function_exit",
                component="cli",
                action="main",
                outcome="success",
                target=str(result.path),
            )
        )
    sys.exit(ExitCodes.SUCCESS.value)


if __name__ == "__main__":
    main()

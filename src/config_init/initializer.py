"""Config initialization pipeline.

answers -> config -> modules -> install decision -> install, then write.
Every collaborator is injected so the pipeline can run without a terminal,
npm or the network.
"""

from __future__ import annotations

import inspect
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Callable, Dict, List, Mapping, Optional, Sequence

from .answers import process_answers
from .installer import InstallDecisionMaker
from .models import InstallDecision, RawAnswers
from .resolver import ModuleResolver
from .writer import ConfigWriter

logger = logging.getLogger(__name__)

Confirm = Callable[[Sequence[str]], Any]


@dataclass
class InitResult:
    """What one initializer run produced."""

    config: Dict[str, Any]
    modules: List[str] = field(default_factory=list)
    decision: InstallDecision = field(default_factory=InstallDecision)
    installed: bool = False
    path: Optional[Path] = None


async def _maybe_await(value: Any) -> Any:
    if inspect.isawaitable(value):
        return await value
    return value


async def initialize_config(
    answers: Mapping[str, Any],
    resolver: ModuleResolver,
    decision_maker: InstallDecisionMaker,
    writer: ConfigWriter,
    confirm: Optional[Confirm] = None,
    install: bool = True,
) -> InitResult:
    """Run the whole initializer once.

    Args:
        answers: Raw answers from the prompt or the command line.
        resolver: Module resolver for this session.
        decision_maker: Filters and installs modules.
        writer: Writes the config file.
        confirm: Asked with the missing modules; only a True answer installs.
        install: False skips resolving the lint tool and installing anything.

    Raises:
        InstalledQueryError, InstallError, ConfigWriteError: Propagated.
    """
    raw = RawAnswers.from_mapping(answers)
    config = process_answers(raw)
    result = InitResult(config=config)

    if install:
        result.modules = await resolver.resolve(config, include_self_tool=True)
        result.decision = decision_maker.decide(result.modules, resolver.installed_status)
        if result.decision.to_install:
            confirmed = await _maybe_await(confirm(result.decision.to_install)) if confirm else False
            result.installed = await decision_maker.install(result.decision, confirmed)
            if not result.installed:
                logger.info(
                    "Skipped installation. Install these packages manually: %s",
                    " ".join(result.decision.to_install),
                )
    else:
        result.modules = await resolver.resolve(config, include_self_tool=False)

    result.path = await writer.write(config, raw.config_format)
    return result

"""Interactive questions, asked with rich."""

from __future__ import annotations

from typing import Any, Dict, List, Optional, Sequence

from rich.console import Console
from rich.prompt import Confirm, Prompt

from constants import Constants, Purposes

PURPOSE_CHOICES = {
    "1": ("To check code issues only", Purposes.SYNTAX.value),
    "2": ("To check code issues and static resources", Purposes.SYNTAX_AND_RESOURCES.value),
}
INDENT_CHOICES = {"tab": "tab", "spaces": 4}


def _ask_purpose(console: Console) -> str:
    console.print("How would you like to use ec0lint?")
    for key, (label, _) in PURPOSE_CHOICES.items():
        console.print(f"  {key}) {label}")
    choice = Prompt.ask("Select", choices=list(PURPOSE_CHOICES), default="2", console=console)
    return PURPOSE_CHOICES[choice][1]


def _ask_env(console: Console) -> List[str]:
    console.print("Where does your code run?")
    return [
        env for env in Constants.SUPPORTED_ENVS
        if Confirm.ask(f"  {env.capitalize()}?", default=env == "browser", console=console)
    ]


def prompt_answers(defaults: Optional[Dict[str, Any]] = None, console: Optional[Console] = None) -> Dict[str, Any]:
    """Ask for every answer not already present in ``defaults``.

    Returns:
        dict: Raw answers, ready for ``process_answers``.
    """
    console = console or Console()
    answers: Dict[str, Any] = dict(defaults or {})

    if not answers.get("purpose"):
        answers["purpose"] = _ask_purpose(console)
    if "env" not in answers:
        answers["env"] = _ask_env(console)
    if not answers.get("format"):
        answers["format"] = Prompt.ask(
            "What format do you want your config file to be in?",
            choices=Constants.SUPPORTED_FORMATS,
            default=Constants.SUPPORTED_FORMATS[0],
            console=console,
        )
    if answers.get("indent") is None:
        indent = Prompt.ask(
            "What style of indentation do you use?",
            choices=list(INDENT_CHOICES),
            default="tab",
            console=console,
        )
        answers["indent"] = INDENT_CHOICES[indent]
    return answers


def confirm_install(modules: Sequence[str], console: Optional[Console] = None) -> bool:
    """Show the modules that are missing and ask whether to install them."""
    console = console or Console()
    console.print("The config that you've selected requires the following dependencies:\n")
    console.print(" ".join(modules), markup=False)
    return Confirm.ask("Would you like to install them now with npm?", default=True, console=console)

"""Operator interaction: menus, text input, confirmations and progress.

The import logic only talks to the small ``Prompter`` interface, so the
same flow can run against a terminal (click), the ``dialog`` program, or a
scripted fake in tests.
"""

import logging
import shutil
import subprocess
import sys
from abc import ABC, abstractmethod
from typing import List, Optional, Tuple

import click
from colorama import Fore, Style
from tqdm import tqdm

logger = logging.getLogger(__name__)

Choice = Tuple[str, str]  # (key, label)


class PromptUnavailableError(RuntimeError):
    """Raised when the prompt backend cannot talk to the operator."""


class Prompter(ABC):
    """Operator interface used by the import workflow."""

    @abstractmethod
    def select(self, title: str, text: str, choices: List[Choice]) -> Optional[str]:
        """Single-choice menu. Returns the chosen key, or None if cancelled."""

    @abstractmethod
    def input_text(self, title: str, text: str, default: str) -> Optional[str]:
        """Free-text input pre-filled with default. Returns None if cancelled."""

    @abstractmethod
    def confirm(self, title: str, text: str) -> bool:
        """Yes/no question. Cancelling counts as no."""

    @abstractmethod
    def message(self, title: str, text: str) -> bool:
        """Show a message. Returns False if the operator cancelled it."""

    @abstractmethod
    def progress(self, percent: int, text: str) -> None:
        """Report progress of a running operation."""

    def close_progress(self) -> None:
        """Finish the progress display, if any."""


class ClickPrompter(Prompter):
    """Terminal prompts built on click, with a tqdm progress bar."""

    def __init__(self):
        if not sys.stdin.isatty():
            raise PromptUnavailableError("An interactive terminal is required for this command")
        self._bar: Optional[tqdm] = None

    def _title(self, title: str) -> None:
        click.echo(f"\n{Fore.CYAN}{title}{Style.RESET_ALL}")

    def select(self, title: str, text: str, choices: List[Choice]) -> Optional[str]:
        self._title(title)
        click.echo(text)
        for key, label in choices:
            click.echo(f"  {key}) {label}")
        try:
            answer = click.prompt("Choice", default='', show_default=False)
        except click.Abort:
            return None
        answer = answer.strip()
        keys = [key for key, _ in choices]
        if answer not in keys:
            logger.debug(f"Invalid selection: {answer!r}")
            return None
        return answer

    def input_text(self, title: str, text: str, default: str) -> Optional[str]:
        self._title(title)
        try:
            return click.prompt(text, default=default)
        except click.Abort:
            return None

    def confirm(self, title: str, text: str) -> bool:
        self._title(title)
        try:
            return click.confirm(text, default=True)
        except click.Abort:
            return False

    def message(self, title: str, text: str) -> bool:
        self._title(title)
        click.echo(text)
        return True

    def progress(self, percent: int, text: str) -> None:
        if self._bar is None:
            self._bar = tqdm(total=100, desc="Importing photos", unit="%")
        self._bar.set_postfix_str(text, refresh=False)
        self._bar.update(percent - self._bar.n)

    def close_progress(self) -> None:
        if self._bar is not None:
            self._bar.close()
            self._bar = None


class DialogPrompter(Prompter):
    """Prompts rendered by the ncurses ``dialog`` program."""

    def __init__(self, dialog_path: Optional[str] = None):
        self.dialog_path = dialog_path or shutil.which('dialog')
        if not self.dialog_path:
            raise PromptUnavailableError(
                "dialog is required for this backend\n"
                "Install it with your package manager, e.g.: sudo pacman -S dialog"
            )

    def _run(self, title: str, args: List[str]) -> subprocess.CompletedProcess:
        cmd = [self.dialog_path, '--clear', '--stdout', '--title', title] + args
        return subprocess.run(cmd, stdout=subprocess.PIPE, text=True)

    def select(self, title: str, text: str, choices: List[Choice]) -> Optional[str]:
        args = ['--menu', text, '12', '50', str(len(choices))]
        for key, label in choices:
            args.extend([key, label])
        result = self._run(title, args)
        if result.returncode != 0:
            return None
        answer = result.stdout.strip()
        return answer if answer in [key for key, _ in choices] else None

    def input_text(self, title: str, text: str, default: str) -> Optional[str]:
        result = self._run(title, ['--inputbox', text, '10', '60', default])
        if result.returncode != 0:
            return None
        return result.stdout.strip()

    def confirm(self, title: str, text: str) -> bool:
        return self._run(title, ['--yesno', text, '12', '60']).returncode == 0

    def message(self, title: str, text: str) -> bool:
        return self._run(title, ['--msgbox', text, '10', '50']).returncode == 0

    def progress(self, percent: int, text: str) -> None:
        subprocess.run(
            [self.dialog_path, '--title', 'Importing Photos',
             '--gauge', f"Processing: {text}", '10', '60', str(percent)],
            input='', text=True,
        )


def create_prompter(backend: str = 'click') -> Prompter:
    """Build the prompter for a configured backend name."""
    if backend == 'dialog':
        return DialogPrompter()
    if backend == 'click':
        return ClickPrompter()
    raise ValueError(f"Unknown ui backend: {backend}")

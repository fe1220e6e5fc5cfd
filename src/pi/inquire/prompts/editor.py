"""Prompt that hands text entry over to an external editor."""

from __future__ import annotations

import enum
import logging
import os
import shlex
import subprocess
import sys
import tempfile
from dataclasses import dataclass, field
from pathlib import Path
from typing import Sequence

from pi.inquire.backend import Backend
from pi.inquire.formatter import Formatter
from pi.inquire.keys import Key
from pi.inquire.prompts.prompt import ActionResult, Prompt, PromptBuilder, run_prompt
from pi.inquire.render_config import RenderConfig, get_global_render_config
from pi.inquire.terminal import Terminal
from pi.inquire.validator import Invalid, Validator, run_validators

logger = logging.getLogger(__name__)

DEFAULT_FILE_EXTENSION = ".txt"


def default_editor_command() -> list[str]:
    """Command line from ``$EDITOR``, then ``$VISUAL``, then a platform default."""
    for variable in ("EDITOR", "VISUAL"):
        value = os.environ.get(variable)
        if value:
            parts = shlex.split(value)
            if parts:
                return parts
    return ["notepad" if sys.platform == "win32" else "nano"]


def _format_submitted(_value: str) -> str:
    return "<received>"


class EditorAction(enum.Enum):
    OPEN_EDITOR = "openEditor"


class EditorPrompt(Prompt[EditorAction, str]):
    """Owns a temporary file that must be released with :meth:`cleanup`."""

    def __init__(self, editor: Editor) -> None:
        if editor.editor_command is not None:
            command = [editor.editor_command]
        else:
            command = default_editor_command()

        self.message = editor.message
        self.editor_command = command[0]
        self.editor_args = [*command[1:], *editor.editor_args]
        self.help_message = editor.help_message
        self.formatter = editor.formatter
        self.validators = list(editor.validators)
        self.error: Invalid | None = None
        self._terminal: Terminal | None = None
        self.path = self._create_file(editor.file_extension, editor.predefined_text)

    @staticmethod
    def _create_file(extension: str, predefined_text: str | None) -> Path:
        with tempfile.NamedTemporaryFile(
            mode="w", prefix="tmp-", suffix=extension, delete=False, encoding="utf-8"
        ) as tmp:
            if predefined_text:
                tmp.write(predefined_text)
        return Path(tmp.name)

    def cleanup(self) -> None:
        self.path.unlink(missing_ok=True)

    def _run_editor(self) -> None:
        argv = [self.editor_command, *self.editor_args, str(self.path)]
        logger.debug("Launching editor: %s", argv)
        terminal = self._terminal
        if terminal is not None:
            terminal.stop()
        try:
            subprocess.run(argv, check=False)
        finally:
            if terminal is not None:
                terminal.start()

    def _current_answer(self) -> str:
        return self.path.read_text(encoding="utf-8").rstrip("\r\n")

    @property
    def editor_name(self) -> str:
        return Path(self.editor_command).stem or "editor"

    # -- Prompt hooks -------------------------------------------------------

    def from_key(self, key: Key) -> EditorAction | None:
        if key.is_char("e"):
            return EditorAction.OPEN_EDITOR
        return None

    def submit(self) -> str | None:
        answer = self._current_answer()
        validation = run_validators(self.validators, answer)
        if isinstance(validation, Invalid):
            self.error = validation
            return None
        return answer

    def handle(self, action: EditorAction) -> ActionResult:
        self._run_editor()
        return ActionResult.NEEDS_REDRAW

    def format_answer(self, answer: str) -> str:
        return self.formatter(answer)

    def prompt(self, backend: Backend) -> str:
        self._terminal = backend.terminal
        return super().prompt(backend)

    def render(self, backend: Backend) -> None:
        if self.error is not None:
            backend.render_error_message(self.error.message)

        backend.render_editor_prompt(self.message, self.editor_name)

        if self.help_message:
            backend.render_help_message(self.help_message)


@dataclass
class Editor(PromptBuilder[str]):
    """Collect multi-line text by opening the user's editor on a temporary file.

    ``e`` opens the editor, Enter submits the file contents with trailing
    line breaks removed. The file is deleted however the prompt ends.
    """

    message: str
    editor_command: str | None = None
    editor_args: Sequence[str] = ()
    file_extension: str = DEFAULT_FILE_EXTENSION
    predefined_text: str | None = None
    help_message: str | None = None
    formatter: Formatter[str] = _format_submitted
    validators: list[Validator[str]] = field(default_factory=list)
    render_config: RenderConfig = field(default_factory=get_global_render_config)

    def _build(self) -> EditorPrompt:
        return EditorPrompt(self)

    def raw_prompt(self, terminal: Terminal | None = None) -> str:
        prompt = self._build()
        try:
            return run_prompt(prompt, self.render_config, terminal)
        finally:
            prompt.cleanup()

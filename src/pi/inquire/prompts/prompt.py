"""Behaviour shared by every prompt: the event loop and the action model.

A prompt is split in two objects. The user-facing class (``Text``,
``Select``, ...) is a dataclass holding the options chosen by the caller;
its :meth:`PromptBuilder.prompt` builds a :class:`Prompt` holding the
mutable state and runs :meth:`Prompt.prompt` against a backend.
"""

from __future__ import annotations

import enum
import logging
from typing import Any, Generic, TypeVar

from pi.inquire.backend import Backend
from pi.inquire.errors import OperationCanceledError, OperationInterruptedError
from pi.inquire.input import InputActionResult
from pi.inquire.keys import Key, KeyKind, KeyModifiers
from pi.inquire.render_config import RenderConfig
from pi.inquire.terminal import ProcessTerminal, Terminal

logger = logging.getLogger(__name__)

A = TypeVar("A")
T = TypeVar("T")


class ActionResult(enum.Enum):
    """Outcome of handling an action."""

    NEEDS_REDRAW = "needsRedraw"
    CLEAN = "clean"

    @property
    def needs_redraw(self) -> bool:
        return self is ActionResult.NEEDS_REDRAW

    def merge(self, other: ActionResult) -> ActionResult:
        if self.needs_redraw or other.needs_redraw:
            return ActionResult.NEEDS_REDRAW
        return ActionResult.CLEAN

    @classmethod
    def from_input(cls, result: InputActionResult) -> ActionResult:
        return cls.NEEDS_REDRAW if result.needs_redraw else cls.CLEAN


class Action(enum.Enum):
    """Actions handled by the loop itself rather than by the prompt."""

    SUBMIT = "submit"
    CANCEL = "cancel"
    INTERRUPT = "interrupt"

    @classmethod
    def from_key(cls, key: Key) -> Action | None:
        if key.kind in (KeyKind.SUBMIT, KeyKind.ENTER):
            return cls.SUBMIT
        if key.kind in (KeyKind.CANCEL, KeyKind.ESCAPE) and key.modifiers == KeyModifiers.NONE:
            return cls.CANCEL
        if key.kind is KeyKind.INTERRUPT:
            return cls.INTERRUPT
        return None


class Prompt(Generic[A, T]):
    """Stateful prompt driven by :meth:`prompt`.

    Subclasses implement :meth:`from_key`, :meth:`handle`, :meth:`submit`,
    :meth:`render` and :meth:`format_answer`. ``A`` is the prompt's inner
    action type and ``T`` the answer type. :meth:`submit` returns ``None``
    when the submission was rejected and the prompt should keep running.
    """

    message: str

    def from_key(self, key: Key) -> A | None:
        raise NotImplementedError

    def setup(self) -> None:
        """Called once before the first frame is drawn."""

    def pre_cancel(self) -> bool:
        """Called on Esc; return ``False`` to swallow the cancellation."""
        return True

    def submit(self) -> T | None:
        raise NotImplementedError

    def handle(self, action: A) -> ActionResult:
        raise NotImplementedError

    def render(self, backend: Backend) -> None:
        raise NotImplementedError

    def format_answer(self, answer: T) -> str:
        return str(answer)

    # ------------------------------------------------------------------
    # Loop
    # ------------------------------------------------------------------

    def prompt(self, backend: Backend) -> T:
        """Run the read-dispatch-render loop until an answer is accepted."""
        logger.debug("Prompt %s started: %r", type(self).__name__, self.message)
        self.setup()

        last_handle = ActionResult.NEEDS_REDRAW
        while True:
            if last_handle.needs_redraw:
                backend.frame_setup()
                self.render(backend)
                backend.frame_finish()
                last_handle = ActionResult.CLEAN

            key = backend.read_key()
            action = Action.from_key(key)

            if action is Action.INTERRUPT:
                logger.debug("Prompt %r interrupted", self.message)
                raise OperationInterruptedError()

            if action is Action.CANCEL:
                if self.pre_cancel():
                    backend.frame_setup()
                    backend.render_canceled_prompt(self.message)
                    backend.frame_finish()
                    logger.debug("Prompt %r canceled", self.message)
                    raise OperationCanceledError()
                last_handle = ActionResult.NEEDS_REDRAW
                continue

            if action is Action.SUBMIT:
                answer = self.submit()
                if answer is not None:
                    break
                last_handle = ActionResult.NEEDS_REDRAW
                continue

            inner = self.from_key(key)
            if inner is not None:
                last_handle = self.handle(inner)

        backend.frame_setup()
        backend.render_prompt_with_answer(self.message, self.format_answer(answer))
        backend.frame_finish()
        logger.debug("Prompt %r answered", self.message)
        return answer


def run_prompt(
    prompt: Prompt[Any, T],
    render_config: RenderConfig,
    terminal: Terminal | None = None,
) -> T:
    """Run *prompt* on *terminal* (the process TTY by default).

    Raw mode is entered before the first frame and always restored, and the
    cursor is left on a fresh line below the prompt on every exit path.
    """
    if terminal is None:
        terminal = ProcessTerminal()

    terminal.start()
    try:
        backend = Backend(terminal, render_config)
        try:
            return prompt.prompt(backend)
        finally:
            backend.close()
    finally:
        terminal.stop()


class PromptBuilder(Generic[T]):
    """Mixin giving the user-facing prompt dataclasses their entry points.

    ``raw_prompt`` returns what the prompt state produced; ``prompt`` passes
    it through :meth:`_unwrap`, which list prompts override to return plain
    values instead of :class:`~pi.inquire.list_option.ListOption` objects.
    """

    render_config: RenderConfig

    def _build(self) -> Prompt[Any, Any]:
        raise NotImplementedError

    def _unwrap(self, answer: Any) -> T:
        return answer

    def raw_prompt(self, terminal: Terminal | None = None) -> Any:
        return run_prompt(self._build(), self.render_config, terminal)

    def prompt(self, terminal: Terminal | None = None) -> T:
        """Show the prompt and return the answer.

        Raises :class:`~pi.inquire.errors.OperationCanceledError` on Esc and
        :class:`~pi.inquire.errors.OperationInterruptedError` on Ctrl+C.
        """
        return self._unwrap(self.raw_prompt(terminal))

    def prompt_skippable(self, terminal: Terminal | None = None) -> T | None:
        """Like :meth:`prompt` but returns ``None`` when the user cancels."""
        try:
            return self.prompt(terminal)
        except OperationCanceledError:
            return None

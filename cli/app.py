"""
PolySolver - Terminal client.

A line-oriented chat: stage polynomials with ``add``, pick an operation,
and read the answer with its step-by-step explanation. The history is kept
in session storage and shown again on the next start.
"""

import asyncio
import logging
from typing import Callable, Optional

from polysolver import (
    InsufficientOperands,
    JsonFileSessionStorage,
    OperationInvoker,
    OperationKind,
    PolySolverError,
    SessionController,
)
from polysolver.config import Settings, load_settings

from cli import render

logger = logging.getLogger(__name__)

PENDING_TEXT = "  Calculating..."

HELP_TEXT = """\
Commands:
  add <polynomial>   stage a polynomial, e.g.  add (2x^2) + 3x - 5
  rm <n>             remove staged polynomial Pn
  list               show staged polynomials
  suma | resta | multiplicacion | division
                     run the operation over the staged polynomials
  history            show the whole conversation
  clear              delete the conversation history
  help               show this text
  quit               leave"""


class PolySolverApp:
    """Interactive terminal front end over a ``SessionController``."""

    def __init__(
        self,
        controller: Optional[SessionController] = None,
        settings: Optional[Settings] = None,
        write: Callable[[str], None] = print,
    ) -> None:
        self._settings = settings or load_settings()
        if controller is None:
            controller = SessionController(
                storage=JsonFileSessionStorage(self._settings.data_file),
                invoker=OperationInvoker(self._settings.api_url),
            )
        self.controller = controller
        self._write = write
        self._running = False

    # ── Main loop ───────────────────────────────────────────────────────

    def mainloop(self, lines=None) -> None:
        restored = self.controller.restore()
        logger.debug("Session started with %d stored entries", restored)
        self._show_welcome()
        self._running = True
        source = lines if lines is not None else self._read_stdin()
        for line in source:
            self.handle(line)
            if not self._running:
                break

    @staticmethod
    def _read_stdin():
        while True:
            try:
                yield input("polysolver> ")
            except EOFError:
                return

    def _show_welcome(self) -> None:
        self._write("Polynomial Calculator - type 'help' for commands.")
        if self.controller.entries:
            self._write(render.render_transcript(self.controller.entries))

    # ── Commands ────────────────────────────────────────────────────────

    def handle(self, line: str) -> None:
        command, _, arg = line.strip().partition(" ")
        command = command.lower()
        if not command:
            return
        if command in ("quit", "exit"):
            self._running = False
        elif command == "help":
            self._write(HELP_TEXT)
        elif command == "add":
            if self.controller.stage_operand(arg):
                self._write(render.render_operands(self.controller.staged))
        elif command == "rm":
            self._remove(arg)
        elif command == "list":
            self._write(render.render_operands(self.controller.staged))
        elif command == "history":
            self._write(render.render_transcript(self.controller.entries))
        elif command == "clear":
            self.controller.clear_transcript()
            self._write("History cleared.")
        elif command in {kind.value for kind in OperationKind}:
            self._run(command)
        else:
            self._write(f"Unknown command '{command}'. Type 'help'.")

    def _remove(self, arg: str) -> None:
        try:
            position = int(arg.strip().lstrip("Pp"))
        except ValueError:
            self._write("Usage: rm <n>")
            return
        if not self.controller.unstage_operand(position - 1):
            self._write(f"There is no P{position}.")
            return
        self._write(render.render_operands(self.controller.staged))

    def _run(self, kind: str) -> None:
        try:
            outcome = asyncio.run(
                self.controller.run_operation(kind, on_request=self._show_pending)
            )
        except InsufficientOperands:
            self._write("At least 2 polynomials are needed to run an operation.")
            return
        except PolySolverError as exc:
            self._write(str(exc))
            return
        if outcome.ok:
            self._write(render.render_result(outcome.result))
        else:
            self._write(self._friendly_error(kind, outcome.error))

    def _show_pending(self, entry) -> None:
        self._write(render.render_request(entry))
        self._write(PENDING_TEXT)

    @staticmethod
    def _friendly_error(kind: str, detail: Optional[str]) -> str:
        msg = (
            f"The {kind} could not be calculated right now.\n"
            "Your polynomials were cleared; add them again to retry."
        )
        if detail:
            msg += f"\nDetails: {detail}"
        return msg


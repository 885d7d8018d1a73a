"""User interaction contract used by the installer flows."""
from __future__ import annotations

import sys
import webbrowser
from typing import Callable, Protocol, Sequence, TextIO, TypeVar

T = TypeVar("T")
StatusCallback = Callable[[str], None]


class UserInteraction(Protocol):
    def show_progress(self, title: str, operation: Callable[[StatusCallback], T]) -> T:
        """Run ``operation`` while a progress indicator titled ``title`` is visible.

        ``operation`` receives a callback that replaces the indicator's label.
        """

    def run_blocking(self, operation: Callable[[], T]) -> T:
        """Run a long blocking step without freezing the host; errors propagate."""

    def confirm(self, message: str, options: Sequence[str]) -> str | None:
        """Return the selected option, or ``None`` when the prompt is dismissed."""

    def notify(self, message: str) -> None:
        ...

    def append_log(self, line: str) -> None:
        ...

    def open_url(self, url: str) -> bool:
        ...


class ConsoleInteraction:
    """Terminal implementation used by the CLI."""

    def __init__(
        self,
        *,
        assume_yes: bool = False,
        input_fn: Callable[[str], str] = input,
        stream: TextIO | None = None,
    ) -> None:
        self._assume_yes = assume_yes
        self._input = input_fn
        self._stream = stream or sys.stdout

    def show_progress(self, title: str, operation: Callable[[StatusCallback], T]) -> T:
        self._write(title)
        result = operation(self._write)
        self._write("Done.")
        return result

    def run_blocking(self, operation: Callable[[], T]) -> T:
        return operation()

    def confirm(self, message: str, options: Sequence[str]) -> str | None:
        if not options:
            return None
        if self._assume_yes:
            self._write(f"{message} [{options[0]}]")
            return options[0]
        labels = ", ".join(f"{index}) {option}" for index, option in enumerate(options, start=1))
        try:
            answer = self._input(f"{message} {labels} (blank to dismiss): ").strip()
        except EOFError:
            return None
        if not answer:
            return None
        if answer.isdigit() and 1 <= int(answer) <= len(options):
            return options[int(answer) - 1]
        for option in options:
            if option.lower() == answer.lower():
                return option
        return None

    def notify(self, message: str) -> None:
        self._write(message)

    def append_log(self, line: str) -> None:
        self._write(line)

    def open_url(self, url: str) -> bool:
        self._write(f"Opening {url}")
        return webbrowser.open(url)

    def _write(self, text: str) -> None:
        print(text, file=self._stream)

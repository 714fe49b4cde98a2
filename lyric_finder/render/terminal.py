from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence, TypeVar

import typer
from colorama import Fore, Style, just_fix_windows_console

T = TypeVar("T")


@dataclass(frozen=True, slots=True)
class Theme:
    title: str = Fore.CYAN + Style.BRIGHT
    index: str = Fore.GREEN + Style.BRIGHT
    dim: str = Style.DIM
    warning: str = Fore.YELLOW + Style.BRIGHT
    reset: str = Style.RESET_ALL


class TerminalView:
    def __init__(self, color: bool = True, theme: Theme | None = None):
        self.color = color
        self.theme = theme or Theme()
        if color:
            just_fix_windows_console()

    def _c(self, style: str, text: str) -> str:
        if not self.color:
            return text
        return f"{style}{text}{self.theme.reset}"

    def show_lyrics(self, artist: str, song: str, lyrics: str) -> None:
        typer.echo(self._c(self.theme.title, f"♫ {artist} - {song} ♫"))
        typer.echo()
        typer.echo(lyrics.rstrip("\n"))

    def warn(self, message: str) -> None:
        typer.echo(self._c(self.theme.warning, message), err=True)

    def pick(self, prompt: str, candidates: Sequence[tuple[str, T]]) -> T | None:
        """
        Number the labels, ask for one. Returns the chosen payload, or None
        for an empty list or an empty answer.
        """
        if not candidates:
            return None

        width = len(str(len(candidates)))
        for i, (label, _payload) in enumerate(candidates, 1):
            typer.echo(f"{self._c(self.theme.index, str(i).rjust(width))}  {label}")

        while True:
            answer = typer.prompt(prompt, default="", show_default=False).strip()
            if not answer:
                return None
            if answer.isdigit() and 1 <= int(answer) <= len(candidates):
                return candidates[int(answer) - 1][1]
            self.warn(f"Enter a number between 1 and {len(candidates)}, or nothing to cancel")

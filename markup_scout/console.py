# File: markup_scout/console.py
"""markup_scout.console: colored progress stream for the user (stdout)."""

from __future__ import annotations

from typing import Dict, Literal

import click

Kind = Literal["success", "error", "warning", "info", "note"]

_COLORS: Dict[str, str] = {
    "success": "green",
    "error": "red",
    "warning": "yellow",
    "info": "blue",
    "note": "magenta",
}


def color(kind: Kind, message: str, enabled: bool = True) -> str:
    """Return *message* styled for *kind*, or untouched when coloring is off."""
    if not enabled:
        return message
    return click.style(message, fg=_COLORS[kind])


class Console:
    """Writes the run's progress markers, failure blocks and summary."""

    def __init__(self, *, colored: bool = True, verbose: bool = False) -> None:
        self.colored = colored
        self.verbose = verbose

    def say(self, kind: Kind, message: str, nl: bool = True) -> None:
        click.echo(color(kind, message, self.colored), nl=nl)

    def page_ok(self) -> None:
        self.say("success", ".", nl=False)

    def page_invalid(self, location: str, errors: "list[str] | tuple[str, ...]") -> None:
        click.echo()
        self.say("error", f"* {location}")
        if self.verbose:
            self.say("error", ", ".join(errors))

    def not_found(self, location: str) -> None:
        click.echo()
        self.say("error", f"{location} linked but not exist")

    def summary(self, visited: int, failures: int, not_founds: int, errors: int) -> None:
        click.echo("\n")
        self.say(
            "info",
            ", ".join(
                [
                    f"{visited} visited",
                    f"{failures} failures",
                    f"{not_founds} not founds",
                    f"{errors} errors",
                ]
            ),
        )


__all__ = ["Console", "color"]

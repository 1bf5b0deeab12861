"""Audio cue collaborators for the live session: voice, beeps and ducking."""

from dataclasses import dataclass, field
from typing import Callable, Protocol

import click
from loguru import logger


class Announcer(Protocol):
    def speak(self, text: str) -> None: ...


class Beeper(Protocol):
    def countdown_cue(self) -> None: ...

    def go_cue(self) -> None: ...

    def end_cue(self) -> None: ...


class Ducking(Protocol):
    def duck(self) -> None: ...

    def unduck(self) -> None: ...


class ConsoleAnnouncer:
    """Prints announcements to the terminal."""

    def speak(self, text: str) -> None:
        click.echo(click.style(f"  >> {text}", fg="cyan", bold=True))

    def stop(self) -> None:
        pass


class ConsoleBeeper:
    """Terminal bell plus a short marker per cue."""

    def __init__(self, bell: bool = True):
        self.bell = bell

    def _emit(self, marker: str) -> None:
        click.echo(("\a" if self.bell else "") + marker)

    def countdown_cue(self) -> None:
        self._emit("  *")

    def go_cue(self) -> None:
        self._emit(click.style("  GO", fg="green", bold=True))

    def end_cue(self) -> None:
        self._emit(click.style("  --", fg="yellow"))


class NullDucking:
    """Used when there is no background music to lower."""

    def duck(self) -> None:
        logger.debug("duck")

    def unduck(self) -> None:
        logger.debug("unduck")


@dataclass
class CueRecorder:
    """Announcer, beeper and ducking in one object that records every call."""

    events: list[tuple[str, str | None]] = field(default_factory=list)
    echo: Callable[[str], None] | None = None

    def _record(self, kind: str, detail: str | None = None) -> None:
        self.events.append((kind, detail))
        if self.echo:
            self.echo(f"{kind}: {detail}" if detail else kind)

    def speak(self, text: str) -> None:
        self._record("speak", text)

    def countdown_cue(self) -> None:
        self._record("countdown")

    def go_cue(self) -> None:
        self._record("go")

    def end_cue(self) -> None:
        self._record("end")

    def duck(self) -> None:
        self._record("duck")

    def unduck(self) -> None:
        self._record("unduck")

    def spoken(self) -> list[str]:
        return [detail for kind, detail in self.events if kind == "speak"]

    def count(self, kind: str) -> int:
        return sum(1 for k, _ in self.events if k == kind)


class CueDispatcher:
    """Fire-and-forget front for the cue collaborators.

    Background audio is ducked while anything is being spoken or while the
    session is paused; the first holder ducks and the last one releases.
    Collaborator errors are logged and never reach the caller.
    """

    def __init__(self, announcer: Announcer, beeper: Beeper, ducking: Ducking):
        self.announcer = announcer
        self.beeper = beeper
        self.ducking = ducking
        self._duck_holders = 0

    def _call(self, name: str, fn: Callable[[], None]) -> None:
        try:
            fn()
        except Exception:
            logger.exception(f"Cue '{name}' failed")

    def duck(self) -> None:
        self._duck_holders += 1
        if self._duck_holders == 1:
            self._call("duck", self.ducking.duck)

    def unduck(self) -> None:
        if self._duck_holders == 0:
            return
        self._duck_holders -= 1
        if self._duck_holders == 0:
            self._call("unduck", self.ducking.unduck)

    def speak(self, text: str) -> None:
        self.duck()
        try:
            self._call("speak", lambda: self.announcer.speak(text))
        finally:
            self.unduck()

    def countdown(self) -> None:
        self._call("countdown", self.beeper.countdown_cue)

    def go(self) -> None:
        self._call("go", self.beeper.go_cue)

    def end(self) -> None:
        self._call("end", self.beeper.end_cue)

    def stop(self) -> None:
        """Silence the announcer and restore background audio."""
        stop = getattr(self.announcer, "stop", None)
        if stop is not None:
            self._call("stop", stop)
        if self._duck_holders:
            self._duck_holders = 0
            self._call("unduck", self.ducking.unduck)

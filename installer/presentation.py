"""
Terminal output for the bootstrap: section titles, the closing banner and the
Docker follow-up instructions.

Only presentation lives here. The core hands over step titles and the
detected OperatingSystem and never reads anything back.
"""

from typing import IO, Optional

import click

from common.system_utils import OperatingSystem
from installer.config_models import PresentationSettings

TITLE_RULE: str = "=" * 60

LOGO: str = r"""
    d888888b d8b   db d888888b d888888b
      `88'   888o  88   `88'   `~~88~~'
       88    88V8o 88    88       88
       88    88 V8o88    88       88
      .88.   88  V888   .88.      88
    Y888888P VP   V8P Y888888P    YP

        ... has set you up for Laravel!
"""


class Presenter:
    """Writes styled text to a stream; styling is dropped when not a terminal."""

    def __init__(
        self,
        settings: Optional[PresentationSettings] = None,
        stream: Optional[IO[str]] = None,
    ):
        self.settings = settings or PresentationSettings()
        self.stream = stream

    def _echo(self, message: str = "") -> None:
        # color=None lets click decide from the stream's isatty()
        click.echo(message, file=self.stream, color=self.settings.use_color)

    def title(self, text: str) -> None:
        self._echo()
        self._echo(click.style(text, fg="green"))
        self._echo(TITLE_RULE)

    def underline(self, text: str) -> str:
        return click.style(text, underline=True)

    def logo(self) -> None:
        self._echo()
        self._echo(click.style(LOGO, fg="blue"))

    def docs_url(self, operating_system: OperatingSystem) -> str:
        return f"{self.settings.docs_base_url.rstrip('/')}/{operating_system.slug}"

    def instructions(self, operating_system: OperatingSystem) -> None:
        self._echo()
        self._echo("In order for Takeout to work, you'll need to install Docker.")
        self._echo("Here are instructions for your system:")
        self._echo()
        self._echo(self.underline(self.docs_url(operating_system)))
        self._echo()
        self._echo("Once you've done that, you can run 'takeout install' to install")
        self._echo("dependencies like MySQL.")

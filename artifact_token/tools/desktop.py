"""Desktop notifications and the interactive-login prompt.

macOS goes through osascript (Notification Center, System Events dialog, Terminal);
Linux uses notify-send, zenity and x-terminal-emulator. Every call is fire-and-forget
(the login dialog runs in its own detached process, see artifact_token.prompt):
a missing tool or a failing call is logged and otherwise ignored.
"""

import shlex
import sys

from artifact_token.tools.runner import CommandRunner
from artifact_token.utils.logger import get_logger

logger = get_logger("artifact_token.tools.desktop")

APP_TITLE = "AWS Token Utility"
PROMPT_TEXT = "Token refresh failed or timed out. Do you want to run the interactive login now?"
ACCEPT_BUTTON = "Yes, run login"
DECLINE_BUTTON = "No, later"
DIALOG_TIMEOUT_SECONDS = 300
CALL_TIMEOUT_SECONDS = 15


def _applescript_str(value: str) -> str:
    return '"' + value.replace("\\", "\\\\").replace('"', '\\"') + '"'


class DesktopNotifier:
    """Notifier backed by the host OS notification and dialog tools."""

    def __init__(self, runner: CommandRunner, platform: str | None = None):
        self._runner = runner
        self._platform = platform or sys.platform

    @property
    def is_macos(self) -> bool:
        return self._platform == "darwin"

    def notify(self, subtitle: str, message: str) -> None:
        if self.is_macos:
            script = (
                f"display notification {_applescript_str(message)} "
                f"with title {_applescript_str(APP_TITLE)} subtitle {_applescript_str(subtitle)}"
            )
            args = ["osascript", "-e", script]
        else:
            args = ["notify-send", "--app-name", APP_TITLE, f"{APP_TITLE}: {subtitle}", message]
        result = self._runner.run(args, timeout=CALL_TIMEOUT_SECONDS)
        if not result.ok:
            logger.warning("notify.failed", subtitle=subtitle, error=result.detail)

    def prompt_login(self, login_command: list[str]) -> bool:
        """Start the dialog in a detached process and return at once; True if it was started.

        The dialog can stay open for minutes, so the caller never waits on it.
        """
        started = self._runner.spawn_detached(
            [sys.executable, "-m", "artifact_token.prompt", self._platform, *login_command]
        )
        logger.info("prompt.spawned", started=started)
        return started

    def ask_and_launch(self, login_command: list[str]) -> bool:
        """Blocking: show the dialog and, if accepted, open a terminal running login_command."""
        if not self._ask():
            logger.info("prompt.declined")
            return False
        logger.info("prompt.accepted")
        return self._open_terminal(login_command)

    def _ask(self) -> bool:
        if self.is_macos:
            script = (
                'tell application "System Events"\n'
                "activate\n"
                f"display dialog {_applescript_str(PROMPT_TEXT)} "
                f"with title {_applescript_str(APP_TITLE)} with icon caution "
                f"buttons {{{_applescript_str(DECLINE_BUTTON)}, {_applescript_str(ACCEPT_BUTTON)}}} "
                f"default button {_applescript_str(ACCEPT_BUTTON)}\n"
                "return button returned of result\n"
                "end tell"
            )
            result = self._runner.run(["osascript", "-e", script], timeout=DIALOG_TIMEOUT_SECONDS)
            # cancel/close also exits non-zero
            if not result.ok:
                logger.warning("prompt.dialog_failed", error=result.detail)
                return False
            return result.output.strip() == ACCEPT_BUTTON
        result = self._runner.run(
            [
                "zenity", "--question",
                f"--title={APP_TITLE}",
                f"--text={PROMPT_TEXT}",
                f"--ok-label={ACCEPT_BUTTON}",
                f"--cancel-label={DECLINE_BUTTON}",
            ],
            timeout=DIALOG_TIMEOUT_SECONDS,
        )
        return result.ok

    def _open_terminal(self, login_command: list[str]) -> bool:
        if self.is_macos:
            command_line = shlex.join(login_command)
            script = (
                'tell application "Terminal"\n'
                "activate\n"
                f"do script {_applescript_str(command_line)}\n"
                "end tell"
            )
            args = ["osascript", "-e", script]
        else:
            args = ["x-terminal-emulator", "-e", *login_command]
        result = self._runner.run(args, timeout=CALL_TIMEOUT_SECONDS)
        if not result.ok:
            logger.warning("prompt.terminal_failed", error=result.detail)
        return result.ok

"""Detached login prompt: `python -m artifact_token.prompt PLATFORM LOGIN_COMMAND...`.

Started by DesktopNotifier.prompt_login so that the dialog (and the terminal it may
open) outlives the process that asked for it.
"""

import sys

from artifact_token.config import load_settings
from artifact_token.tools.desktop import DesktopNotifier
from artifact_token.tools.runner import CommandRunner
from artifact_token.utils.logger import configure_logging, get_logger


def main(argv: list[str] | None = None) -> int:
    argv = sys.argv[1:] if argv is None else argv
    if len(argv) < 2:
        print("usage: python -m artifact_token.prompt PLATFORM LOGIN_COMMAND...", file=sys.stderr)
        return 2
    platform, login_command = argv[0], argv[1:]
    settings = load_settings()
    configure_logging(settings.log_file)
    notifier = DesktopNotifier(CommandRunner(settings), platform=platform)
    launched = notifier.ask_and_launch(login_command)
    get_logger("artifact_token.prompt").info("prompt.done", launched=launched)
    return 0 if launched else 1


if __name__ == "__main__":
    sys.exit(main())

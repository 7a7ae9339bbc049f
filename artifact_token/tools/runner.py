"""Runs external command-line tools and normalises their outcome into CommandResult."""

import os
import shutil
import subprocess
from collections.abc import Sequence

from artifact_token.config import Settings
from artifact_token.errors import ToolNotFoundError
from artifact_token.models import CommandResult
from artifact_token.utils.logger import get_logger

logger = get_logger("artifact_token.tools.runner")

# Exit status reported for a tool that is not installed (same as a shell's "command not found")
NOT_FOUND_RETURNCODE = 127


class CommandRunner:
    """Executes external programs with the tool PATH from settings.

    Failures never raise: a missing executable or an expired per-call timeout
    comes back as a failed CommandResult carrying the error text.
    """

    def __init__(self, settings: Settings, env: dict[str, str] | None = None):
        self._env = dict(os.environ if env is None else env)
        self._env["PATH"] = settings.tool_path(self._env.get("PATH", ""))

    @property
    def env(self) -> dict[str, str]:
        return dict(self._env)

    def resolve(self, executable: str) -> str:
        """Return the full path of executable on the tool PATH."""
        found = shutil.which(executable, path=self._env["PATH"])
        if not found:
            raise ToolNotFoundError(executable)
        return found

    def run(
        self,
        args: Sequence[str],
        timeout: float | None = None,
        interactive: bool = False,
        extra_env: dict[str, str] | None = None,
    ) -> CommandResult:
        """Run args; interactive calls inherit the terminal instead of capturing output.

        stdout and stderr are captured separately: output is stdout, error is stderr.
        """
        args = list(args)
        env = self._env if not extra_env else {**self._env, **extra_env}
        try:
            executable = self.resolve(args[0])
        except ToolNotFoundError as e:
            logger.warning("command.not_found", executable=args[0])
            return CommandResult(args=args, returncode=NOT_FOUND_RETURNCODE, error=str(e))

        logger.debug("command.run", executable=args[0], interactive=interactive, timeout=timeout)
        try:
            if interactive:
                proc = subprocess.run([executable, *args[1:]], env=env, timeout=timeout)
                return CommandResult(args=args, returncode=proc.returncode)
            proc = subprocess.run(
                [executable, *args[1:]],
                env=env,
                stdout=subprocess.PIPE,
                stderr=subprocess.PIPE,
                stdin=subprocess.DEVNULL,
                text=True,
                timeout=timeout,
            )
        except subprocess.TimeoutExpired as e:
            logger.warning("command.timeout", executable=args[0], timeout=timeout)
            return CommandResult(
                args=args,
                returncode=-1,
                output=_text(e.stdout),
                error=_text(e.stderr) or f"{args[0]} timed out after {timeout}s",
                timed_out=True,
            )
        except OSError as e:
            logger.warning("command.os_error", executable=args[0], error=str(e))
            return CommandResult(args=args, returncode=NOT_FOUND_RETURNCODE, error=str(e))
        return CommandResult(
            args=args,
            returncode=proc.returncode,
            output=(proc.stdout or "").strip(),
            error=(proc.stderr or "").strip(),
        )

    def spawn_detached(self, args: Sequence[str]) -> bool:
        """Start args in its own session without waiting for it; True if it was started."""
        args = list(args)
        try:
            subprocess.Popen(
                args,
                env=self._env,
                stdin=subprocess.DEVNULL,
                stdout=subprocess.DEVNULL,
                stderr=subprocess.DEVNULL,
                start_new_session=(os.name == "posix"),
            )
        except OSError as e:
            logger.warning("command.spawn_failed", executable=args[0], error=str(e))
            return False
        logger.debug("command.spawned", executable=args[0])
        return True


def _text(value: bytes | str | None) -> str:
    if isinstance(value, bytes):
        value = value.decode(errors="replace")
    return (value or "").strip()

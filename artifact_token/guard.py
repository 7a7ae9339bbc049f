"""Bounded refresh: run `refresh` in a child process with a hard deadline.

The child gets its own process session so that on expiry the whole group
(including a hung saml2aws or aws call) is killed, not just the Python process.
On failure or timeout the user is offered the interactive login.
"""

import os
import signal
import subprocess
import sys
import time

from artifact_token.models import GuardResult, GuardStatus
from artifact_token.tools.protocol import Notifier
from artifact_token.utils.logger import get_logger

logger = get_logger("artifact_token.guard")

# Grace period for reaping the child after it has been killed
KILL_WAIT_SECONDS = 5.0


def self_command(command: str) -> list[str]:
    """Command line that re-invokes this tool with a single subcommand."""
    return [sys.executable, "-m", "artifact_token.main", command]


def _kill_tree(proc: subprocess.Popen) -> None:
    if os.name == "posix":
        try:
            os.killpg(proc.pid, signal.SIGKILL)
        except ProcessLookupError:
            return
    else:
        proc.kill()


class GuardedRunner:
    """Runs a command under a wall-clock deadline and prompts for login when it does not succeed."""

    def __init__(
        self,
        notifier: Notifier,
        command: list[str] | None = None,
        login_command: list[str] | None = None,
        env: dict[str, str] | None = None,
    ):
        self._notifier = notifier
        self._command = command or self_command("refresh")
        self._login_command = login_command or self_command("login")
        self._env = env

    def run(self, timeout_seconds: float) -> GuardResult:
        """Run the command once; never waits longer than timeout_seconds plus the reap grace."""
        log = logger.bind(timeout=timeout_seconds)
        log.info("guard.start")
        started = time.monotonic()
        try:
            proc = subprocess.Popen(
                self._command,
                env=self._env,
                stdin=subprocess.DEVNULL,
                start_new_session=(os.name == "posix"),
            )
        except OSError as e:
            log.error("guard.spawn_failed", error=str(e))
            result = GuardResult(status=GuardStatus.FAILED, elapsed_seconds=time.monotonic() - started)
            self._on_failure(result)
            return result

        try:
            returncode = proc.wait(timeout=timeout_seconds)
        except subprocess.TimeoutExpired:
            _kill_tree(proc)
            try:
                proc.wait(timeout=KILL_WAIT_SECONDS)
            except subprocess.TimeoutExpired:
                log.warning("guard.reap_timeout", pid=proc.pid)
            result = GuardResult(status=GuardStatus.TIMEOUT, elapsed_seconds=time.monotonic() - started)
            log.error("guard.timeout", elapsed=round(result.elapsed_seconds, 2))
            self._on_failure(result)
            return result

        elapsed = time.monotonic() - started
        if returncode == 0:
            log.info("guard.success", elapsed=round(elapsed, 2))
            return GuardResult(status=GuardStatus.SUCCESS, returncode=0, elapsed_seconds=elapsed)

        result = GuardResult(status=GuardStatus.FAILED, returncode=returncode, elapsed_seconds=elapsed)
        log.error("guard.failed", returncode=returncode, elapsed=round(elapsed, 2))
        self._on_failure(result)
        return result

    def _on_failure(self, result: GuardResult) -> None:
        try:
            self._notifier.prompt_login(self._login_command)
        except Exception as e:
            logger.warning("guard.prompt_failed", status=result.status.value, error=str(e))


def guarded_refresh(notifier: Notifier, timeout_seconds: float, **kwargs) -> bool:
    """True iff the bounded refresh exited 0 within timeout_seconds."""
    return GuardedRunner(notifier, **kwargs).run(timeout_seconds).ok

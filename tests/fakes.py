"""In-memory stand-ins for the external tools, recording every call."""

from pathlib import Path

from artifact_token.models import CommandResult


def ok(output: str = "") -> CommandResult:
    return CommandResult(args=["fake"], returncode=0, output=output)


def failed(error: str = "boom", returncode: int = 1) -> CommandResult:
    return CommandResult(args=["fake"], returncode=returncode, error=error)


class FakeIdentity:
    def __init__(self, valid: bool = True, login_ok: bool = True):
        self.valid = valid
        self.login_ok = login_ok
        self.probe_calls = 0
        self.login_calls: list[bool] = []

    def probe(self) -> CommandResult:
        self.probe_calls += 1
        return ok() if self.valid else failed("ExpiredToken")

    def login(self, interactive: bool = False) -> CommandResult:
        self.login_calls.append(interactive)
        if self.login_ok:
            self.valid = True
            return ok("Logged in")
        return failed("MFA required")


class FakeIssuer:
    def __init__(self, *results: CommandResult):
        self._results = list(results) or [ok("token-1")]
        self.calls = 0

    def fetch_token(self) -> CommandResult:
        result = self._results[min(self.calls, len(self._results) - 1)]
        self.calls += 1
        return result


class FakeStore:
    def __init__(self, result: CommandResult | None = None):
        self._result = result or ok()
        self.tokens: list[str] = []

    def update(self, token: str) -> CommandResult:
        self.tokens.append(token)
        return self._result


class RecordingNotifier:
    def __init__(self, accept: bool = False, raise_on_call: bool = False):
        self.accept = accept
        self.raise_on_call = raise_on_call
        self.notifications: list[tuple[str, str]] = []
        self.prompts: list[list[str]] = []

    def notify(self, subtitle: str, message: str) -> None:
        self.notifications.append((subtitle, message))
        if self.raise_on_call:
            raise RuntimeError("notification service unavailable")

    def prompt_login(self, login_command: list[str]) -> bool:
        self.prompts.append(list(login_command))
        if self.raise_on_call:
            raise RuntimeError("dialog unavailable")
        return self.accept


class FakeRunner:
    """CommandRunner stand-in for adapter tests: canned result per executable."""

    def __init__(self, results: dict[str, CommandResult] | None = None):
        self._results = results or {}
        self.calls: list[dict] = []
        self.spawned: list[list[str]] = []

    def run(self, args, timeout=None, interactive=False, extra_env=None) -> CommandResult:
        args = list(args)
        self.calls.append({"args": args, "timeout": timeout, "interactive": interactive, "extra_env": extra_env})
        result = self._results.get(args[0], ok())
        return CommandResult(args=args, returncode=result.returncode, output=result.output, error=result.error)

    def spawn_detached(self, args) -> bool:
        self.spawned.append(list(args))
        return True


class StaticReader:
    """TokenReader returning a fixed value (or raising) for inspector ordering tests."""

    def __init__(self, name: str, value: str | None = None, error: Exception | None = None):
        self.name = name
        self._value = value
        self._error = error
        self.calls = 0

    def read(self, path: Path) -> str | None:
        self.calls += 1
        if self._error is not None:
            raise self._error
        return self._value

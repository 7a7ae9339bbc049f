"""Command, refresh and guard result models."""

from enum import Enum

from pydantic import BaseModel


class CommandResult(BaseModel):
    """Outcome of one external command: exit status, stdout (output) and stderr (error)."""

    args: list[str]
    returncode: int
    output: str = ""
    error: str = ""
    timed_out: bool = False

    @property
    def ok(self) -> bool:
        return self.returncode == 0 and not self.timed_out

    @property
    def detail(self) -> str:
        """Raw error text for logs: stderr, or stdout when the tool reported on stdout."""
        return self.error or self.output


class RefreshStatus(str, Enum):
    SUCCESS = "success"
    AUTH_REQUIRED = "auth_required"
    TOKEN_FETCH_FAILED = "token_fetch_failed"
    STORE_UPDATE_FAILED = "store_update_failed"


class RefreshResult(BaseModel):
    """Result of one refresh cycle. detail holds the raw error text of the failing step."""

    status: RefreshStatus
    detail: str = ""
    token_length: int = 0

    @property
    def ok(self) -> bool:
        return self.status is RefreshStatus.SUCCESS


class GuardStatus(str, Enum):
    SUCCESS = "success"
    FAILED = "failed"
    TIMEOUT = "timeout"


class GuardResult(BaseModel):
    """Result of a bounded refresh run in a child process."""

    status: GuardStatus
    returncode: int | None = None
    elapsed_seconds: float = 0.0

    @property
    def ok(self) -> bool:
        return self.status is GuardStatus.SUCCESS

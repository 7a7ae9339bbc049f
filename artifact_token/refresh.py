"""Credential check and the non-interactive refresh cycle.

One cycle: probe the identity endpoint, re-authenticate silently if needed,
fetch a CodeArtifact token and push it into the NuGet source. Nothing is
retried inside a cycle; a failed step is logged, notified and returned as a
RefreshResult so the caller (CLI, scheduler, guarded runner) decides what next.
"""

from artifact_token.models import RefreshResult, RefreshStatus
from artifact_token.tools.protocol import IdentityClient, Notifier, TokenIssuer, TokenStore
from artifact_token.utils.logger import get_logger

logger = get_logger("artifact_token.refresh")


class CredentialVerifier:
    """Single identity probe; no caching between calls."""

    def __init__(self, identity: IdentityClient):
        self._identity = identity

    def is_valid(self) -> bool:
        result = self._identity.probe()
        logger.debug("credentials.probe", ok=result.ok, returncode=result.returncode)
        return result.ok


class RefreshOrchestrator:
    """Runs one refresh cycle against injected tool adapters."""

    def __init__(
        self,
        identity: IdentityClient,
        issuer: TokenIssuer,
        store: TokenStore,
        notifier: Notifier,
        source_name: str = "",
    ):
        self._identity = identity
        self._verifier = CredentialVerifier(identity)
        self._issuer = issuer
        self._store = store
        self._notifier = notifier
        self._source_name = source_name

    def refresh(self) -> RefreshResult:
        log = logger.bind(source=self._source_name)
        log.info("refresh.start")

        if not self._verifier.is_valid():
            log.info("refresh.credentials_invalid", action="auto_login")
            login = self._identity.login(interactive=False)
            if not login.ok:
                log.warning("refresh.auth_required", error=login.detail)
                self._notify(
                    "MFA Required",
                    "Automatic refresh failed. Please run 'artifact-token login' manually.",
                )
                return RefreshResult(status=RefreshStatus.AUTH_REQUIRED, detail=login.detail)
            log.info("refresh.auto_login_ok")
        log.info("refresh.credentials_valid")

        log.info("refresh.token_fetch")
        fetched = self._issuer.fetch_token()
        token = fetched.output.strip() if fetched.ok else ""
        if not token:
            log.error("refresh.token_fetch_failed", error=fetched.detail, returncode=fetched.returncode)
            self._notify("Refresh Failed", "Could not retrieve CodeArtifact token. Check logs.")
            return RefreshResult(status=RefreshStatus.TOKEN_FETCH_FAILED, detail=fetched.detail)
        log.info("refresh.token_fetched", token_length=len(token))

        log.info("refresh.store_update")
        updated = self._store.update(token)
        if not updated.ok:
            log.error("refresh.store_update_failed", error=updated.detail, returncode=updated.returncode)
            self._notify("Refresh Failed", "Could not update the NuGet source. Check logs.")
            return RefreshResult(
                status=RefreshStatus.STORE_UPDATE_FAILED,
                detail=updated.detail,
                token_length=len(token),
            )

        log.info("refresh.success", token_length=len(token))
        self._notify("Refresh Successful", "Your NuGet token has been updated.")
        return RefreshResult(status=RefreshStatus.SUCCESS, token_length=len(token))

    def _notify(self, subtitle: str, message: str) -> None:
        try:
            self._notifier.notify(subtitle, message)
        except Exception as e:
            logger.warning("refresh.notify_failed", subtitle=subtitle, error=str(e))

"""Read the stored CodeArtifact token back out of the global NuGet.Config.

Two readers, tried in order:

1. XPathTokenReader parses the XML with lxml and selects the ClearTextPassword
   of the source's element under <packageSourceCredentials>. This is the
   authoritative path.
2. LineScanTokenReader is a best-effort fallback: it finds a line mentioning the
   CodeArtifact domain and looks a few lines further for ClearTextPassword. It is
   positional and breaks if NuGet reorders the file; it is only consulted when the
   XPath reader yields nothing.

Freshness and validity of the token are not checked.
"""

import html
import re
from pathlib import Path

from lxml import etree

from artifact_token.config import Settings
from artifact_token.errors import ConfigNotFoundError, TokenNotFoundError
from artifact_token.tools.protocol import TokenReader
from artifact_token.utils.logger import get_logger

logger = get_logger("artifact_token.inspector")

PASSWORD_KEY = "ClearTextPassword"
_VALUE_RE = re.compile(r'value="([^"]*)"')
_TOKEN_XPATH = etree.XPath(
    "string(//configuration/packageSourceCredentials/*[local-name()=$slot]"
    f"/add[@key='{PASSWORD_KEY}']/@value)"
)


class XPathTokenReader:
    name = "xpath"

    def __init__(self, credential_key: str):
        self._credential_key = credential_key

    def read(self, path: Path) -> str | None:
        parser = etree.XMLParser(resolve_entities=False, no_network=True)
        tree = etree.parse(str(path), parser)
        value = str(_TOKEN_XPATH(tree, slot=self._credential_key)).strip()
        return value or None


class LineScanTokenReader:
    name = "line_scan"

    def __init__(self, marker: str, window: int = 5):
        self._marker = marker
        self._window = window

    def read(self, path: Path) -> str | None:
        lines = path.read_text(encoding="utf-8", errors="replace").splitlines()
        for i, line in enumerate(lines):
            if self._marker not in line:
                continue
            for candidate in lines[i : i + self._window + 1]:
                if PASSWORD_KEY not in candidate:
                    continue
                match = _VALUE_RE.search(candidate)
                if match and match.group(1):
                    # attribute text is still XML-escaped (&amp; &quot; ...)
                    return html.unescape(match.group(1))
        return None


class TokenInspector:
    """Presentation accessor for the token currently held by NuGet."""

    def __init__(self, config_path: Path, credential_key: str, readers: list[TokenReader]):
        self.config_path = Path(config_path).expanduser()
        self.credential_key = credential_key
        self._readers = readers

    @classmethod
    def from_settings(cls, settings: Settings) -> "TokenInspector":
        return cls(
            settings.nuget_config_path,
            settings.credential_key,
            [
                XPathTokenReader(settings.credential_key),
                LineScanTokenReader(settings.domain, settings.fallback_scan_lines),
            ],
        )

    def require_token(self) -> str:
        """Return the stored token or raise ConfigNotFoundError / TokenNotFoundError."""
        if not self.config_path.is_file():
            raise ConfigNotFoundError(self.config_path)
        for reader in self._readers:
            try:
                token = reader.read(self.config_path)
            except (OSError, etree.LxmlError) as e:
                logger.warning("inspector.reader_failed", reader=reader.name, error=str(e))
                continue
            if token:
                logger.debug("inspector.token_found", reader=reader.name, token_length=len(token))
                return token
            logger.debug("inspector.reader_empty", reader=reader.name)
        raise TokenNotFoundError(self.config_path, self.credential_key)

    def current_token(self) -> str | None:
        try:
            return self.require_token()
        except (ConfigNotFoundError, TokenNotFoundError) as e:
            logger.info("inspector.not_found", error=str(e))
            return None

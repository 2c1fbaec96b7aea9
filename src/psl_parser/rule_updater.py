"""
Public suffix list updater.

Downloads the published list, extracts the rule tokens, checks that they
form a consistent RuleIndex and writes them to a snapshot file, one rule
per line. A list that fails the check is never written.
"""

from dataclasses import dataclass
from pathlib import Path
from typing import Optional
from urllib.parse import urlparse
import time

import httpx

from .audit_logger import AuditLogger
from .config import PUBLIC_SUFFIX_LIST_URL
from .enums import LogLevel
from .exceptions import RuleFetchError
from .rules import RuleIndex, build_index, parse_rule_line


@dataclass
class UpdateResult:
    """Outcome of a successful update."""

    url: str
    path: Path
    rule_count: int
    duration_ms: float


def extract_rules(text: str) -> list[str]:
    """Extract rule tokens from the raw list text, skipping blanks and comments."""
    rules = []
    for line in text.splitlines():
        rule = parse_rule_line(line)
        if rule is not None:
            rules.append(rule)
    return rules


class RuleUpdater:
    """
    Async downloader for the public suffix list.

    Use as an async context manager, or call fetch()/update() directly and
    let the client be created on demand.
    """

    COMPONENT = "rule_updater"

    def __init__(
        self,
        url: str = PUBLIC_SUFFIX_LIST_URL,
        timeout: float = 30.0,
        logger: Optional[AuditLogger] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        """
        Initialize the updater.

        Args:
            url: HTTPS URL of the list
            timeout: Request timeout in seconds
            logger: Optional logger
            transport: Optional httpx transport (e.g. httpx.MockTransport)
        """
        self._url = url
        self._timeout = timeout
        self._logger = logger
        self._transport = transport
        self._client: Optional[httpx.AsyncClient] = None

    async def __aenter__(self) -> "RuleUpdater":
        self._client = self._create_client()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        if self._client:
            await self._client.aclose()
            self._client = None

    def _create_client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(
            verify=True,
            timeout=httpx.Timeout(self._timeout),
            follow_redirects=True,
            transport=self._transport,
        )

    def _validate_url(self) -> None:
        parsed = urlparse(self._url)
        if parsed.scheme.lower() != "https":
            raise RuleFetchError(
                code="tls_error",
                message=f"Rule list URL must use HTTPS: {self._url}",
                details={"url": self._url, "scheme": parsed.scheme},
            )

    async def fetch(self) -> list[str]:
        """
        Download the list and return its rule tokens in order.

        Raises:
            RuleFetchError: On non-HTTPS URL, network failure, non-200
                status or a list without rules
        """
        self._validate_url()

        if self._client is None:
            self._client = self._create_client()

        try:
            response = await self._client.get(self._url)
        except httpx.TimeoutException as e:
            raise RuleFetchError(
                code="timeout",
                message=f"Timed out downloading rule list: {e}",
                details={"url": self._url},
            )
        except httpx.HTTPError as e:
            raise RuleFetchError(
                code="network_error",
                message=f"Could not download rule list: {e}",
                details={"url": self._url},
            )

        if response.status_code != 200:
            raise RuleFetchError(
                code="http_error",
                message=f"Unexpected HTTP status {response.status_code}",
                details={"url": self._url, "status_code": response.status_code},
            )

        rules = extract_rules(response.text)
        if not rules:
            raise RuleFetchError(
                code="empty_rule_list",
                message="Downloaded rule list contains no rules",
                details={"url": self._url},
            )

        return rules

    async def update(self, path: Path) -> UpdateResult:
        """
        Download the list, validate it and write it to ``path``.

        Raises:
            RuleFetchError: If the download fails
            RuleIndexError: If the downloaded list has duplicate suffixes
        """
        start_time = time.perf_counter()

        self._log(LogLevel.INFO, "Downloading rule list", {"url": self._url})
        rules = await self.fetch()

        # Raises before anything is written
        index: RuleIndex = build_index(rules)

        path.parent.mkdir(parents=True, exist_ok=True)
        with open(path, "w", encoding="utf-8") as f:
            f.write("\n".join(rules) + "\n")

        result = UpdateResult(
            url=self._url,
            path=path,
            rule_count=len(index),
            duration_ms=(time.perf_counter() - start_time) * 1000,
        )
        self._log(
            LogLevel.INFO,
            "Rule list written",
            {"path": str(path), "rule_count": result.rule_count},
        )
        return result

    def _log(self, level: LogLevel, message: str, data: dict) -> None:
        if self._logger is not None:
            self._logger.log(level, self.COMPONENT, message, data)

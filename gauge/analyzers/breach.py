"""
Breach Exposure Checker
========================

k-Anonymity client for the Pwned Passwords range API.

Only the first five hex characters of the password's SHA-1 digest leave
the process.  The service answers with every known suffix sharing that
prefix, one ``SUFFIX:COUNT`` line each, and the match happens locally::

    sha1("password") = 5baa61e4c9b93f3f0682250b6cf8331b7ee68fd8
    GET /range/5baa6  ->  ...
                          1E4C9B93F3F0682250B6CF8331B7EE68FD8:10434004
                          ...

Network and parse failures fail open: the password is reported as not
found, but with status ``UNKNOWN`` so callers can tell the difference.
An unavailable digest algorithm is fatal and propagates.

References:
    - Ali, J. (2018). Validating Leaked Passwords with k-Anonymity.
      Cloudflare Blog.
    - Hunt, T. Pwned Passwords API v3.
      https://haveibeenpwned.com/API/v3#PwnedPasswords
    - Sweeney, L. (2002). k-Anonymity: A Model for Protecting Privacy.
      International Journal of Uncertainty, Fuzziness and
      Knowledge-Based Systems, 10(5).
"""

from __future__ import annotations

import hashlib
from typing import Optional

import httpx

from shared.config import GaugeConfig
from shared.logger import GaugeLogger
from shared.network import GaugeHTTP, GaugeHTTPError

from gauge.core.errors import DigestUnavailableError
from gauge.core.models import BreachCheckResult, BreachStatus

DIGEST_ALGORITHM = "sha1"
PREFIX_LENGTH = 5


class BreachResponseError(ValueError):
    """A range response line could not be parsed."""


def digest_parts(password: str, algorithm: str = DIGEST_ALGORITHM) -> tuple[str, str]:
    """Split the hex digest of *password* into ``(prefix, SUFFIX)``.

    The prefix stays lowercase for the request path; the suffix is
    uppercased to compare against the response.

    Raises:
        DigestUnavailableError: If *algorithm* cannot be instantiated.
    """
    try:
        hasher = hashlib.new(algorithm, usedforsecurity=False)
    except (ValueError, TypeError) as exc:
        raise DigestUnavailableError(algorithm) from exc

    hasher.update(password.encode("utf-8"))
    hex_digest = hasher.hexdigest().lower()
    return hex_digest[:PREFIX_LENGTH], hex_digest[PREFIX_LENGTH:].upper()


def parse_range_response(body: str, suffix: str) -> Optional[int]:
    """Find *suffix* in a range response body.

    Returns:
        The occurrence count, or ``None`` when the suffix is absent.
        Padding entries (count 0) count as absent.

    Raises:
        BreachResponseError: On a non-blank line that is not
            ``SUFFIX:COUNT``.
    """
    target = suffix.upper()
    found: Optional[int] = None

    for line_no, raw_line in enumerate(body.splitlines(), start=1):
        line = raw_line.strip()
        if not line:
            continue
        candidate, sep, count_text = line.partition(":")
        if not sep:
            raise BreachResponseError(f"Line {line_no}: missing ':' separator")
        try:
            count = int(count_text.strip())
        except ValueError as exc:
            raise BreachResponseError(f"Line {line_no}: invalid count") from exc
        if count < 0:
            raise BreachResponseError(f"Line {line_no}: negative count")

        if found is None and candidate.strip().upper() == target and count > 0:
            found = count

    return found


class BreachChecker:
    """Looks a password up in the breach corpus without disclosing it.

    Usage::

        checker = BreachChecker(config.gauge)
        result = await checker.check("hunter2")
        if result.is_pwned:
            print(f"Seen {result.pwned_count} times")

    Args:
        config: Tool configuration (API URL, timeout, retries, padding).
        transport: Optional httpx transport, passed to the HTTP client.
        algorithm: Digest algorithm name; the range API expects SHA-1.
        logger: Logger to use; defaults to ``pwgauge.breach``.
    """

    def __init__(
        self,
        config: Optional[GaugeConfig] = None,
        *,
        transport: httpx.AsyncBaseTransport | None = None,
        algorithm: str = DIGEST_ALGORITHM,
        logger: Optional[GaugeLogger] = None,
    ) -> None:
        self.config = config or GaugeConfig()
        self._transport = transport
        self._algorithm = algorithm
        self.logger = logger or GaugeLogger("breach")

    def digest_parts(self, password: str) -> tuple[str, str]:
        return digest_parts(password, self._algorithm)

    async def check(self, password: str) -> BreachCheckResult:
        """Hash *password* and look the digest up.

        Raises:
            DigestUnavailableError: If the digest cannot be computed.
        """
        prefix, suffix = self.digest_parts(password)
        return await self.lookup(prefix, suffix)

    async def lookup(self, prefix: str, suffix: str) -> BreachCheckResult:
        """Query the range endpoint for *prefix* and match *suffix* locally."""
        headers = {"Add-Padding": "true"} if self.config.breach_add_padding else None

        with self.logger.operation("breach_check"):
            self.logger.debug("Querying range %s", prefix)
            try:
                async with GaugeHTTP(
                    base_url=self.config.breach_api_url,
                    timeout=self.config.breach_timeout,
                    max_retries=self.config.breach_max_retries,
                    user_agent=self.config.user_agent,
                    transport=self._transport,
                ) as http:
                    body = await http.fetch_text(f"/range/{prefix}", headers=headers)
                count = parse_range_response(body, suffix)
            except (GaugeHTTPError, httpx.HTTPError, BreachResponseError) as exc:
                self.logger.warning(
                    "Breach lookup failed for range %s; reporting as unknown: %s",
                    prefix,
                    exc,
                )
                return BreachCheckResult(status=BreachStatus.UNKNOWN)

        if count is None:
            return BreachCheckResult(status=BreachStatus.NOT_FOUND)
        return BreachCheckResult(status=BreachStatus.FOUND, count=count)

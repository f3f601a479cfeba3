"""HTTP client abstraction for interacting with the Advent of Code site."""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from enum import Enum
from typing import List, Optional
from urllib.parse import urljoin

import requests
from bs4 import BeautifulSoup
from requests import Session
from requests.exceptions import RequestException

from .config_store import DEFAULT_BASE_URL, DEFAULT_TIMEOUT
from .errors import CredentialRejected, ExampleNotFound, NetworkError

LOGGER = logging.getLogger(__name__)

# any puzzle input works here, it only has to exist for every account
VALIDATION_PATH = "2022/day/1/input"

_WAIT_PATTERN = re.compile(r"you have (?:(\d+)m )?(\d+)s left")


def _normalize_base_url(domain: str) -> str:
    url = domain.strip()
    if not url:
        raise ValueError("base url must not be empty")
    if not url.startswith(("http://", "https://")):
        url = f"https://{url}"
    return url.rstrip("/")


def _redact(token: str) -> str:
    return "..." + token[-4:]


class SubmitOutcome(str, Enum):
    CORRECT = "correct"
    ALREADY_SOLVED_OR_LOCKED = "already_solved_or_locked"
    INCORRECT_TOO_LOW = "incorrect_too_low"
    INCORRECT_TOO_HIGH = "incorrect_too_high"
    INCORRECT_OTHER = "incorrect_other"
    RATE_LIMITED = "rate_limited"
    UNPARSEABLE = "unparseable"


@dataclass(frozen=True, slots=True)
class SubmitResult:
    outcome: SubmitOutcome
    message: str
    wait_seconds: Optional[int] = None


def classify_response(message: str) -> SubmitResult:
    """Map the judge's primary message text onto a `SubmitOutcome`.

    Checks run in a fixed order, so a message mentioning several phrases
    resolves to the first match.
    """
    lowered = message.strip().lower()
    if "one gold star closer" in lowered:
        return SubmitResult(SubmitOutcome.CORRECT, message)
    if "already complete it" in lowered:
        return SubmitResult(SubmitOutcome.ALREADY_SOLVED_OR_LOCKED, message)
    if "too low" in lowered:
        return SubmitResult(SubmitOutcome.INCORRECT_TOO_LOW, message)
    if "too high" in lowered:
        return SubmitResult(SubmitOutcome.INCORRECT_TOO_HIGH, message)
    if "not the right answer" in lowered:
        return SubmitResult(SubmitOutcome.INCORRECT_OTHER, message)
    if "answer too recently" in lowered:
        wait: Optional[int] = None
        m = _WAIT_PATTERN.search(lowered)
        if m:
            minutes, seconds = m.groups()
            wait = int(seconds) + 60 * int(minutes or 0)
        return SubmitResult(SubmitOutcome.RATE_LIMITED, message, wait_seconds=wait)
    return SubmitResult(SubmitOutcome.UNPARSEABLE, message)


class AdventClient:
    """High level helper around the Advent of Code web endpoints."""

    def __init__(
        self,
        base_url: str = DEFAULT_BASE_URL,
        *,
        timeout: float = DEFAULT_TIMEOUT,
    ) -> None:
        self.base_url = _normalize_base_url(base_url)
        self.timeout = timeout
        self._session: Optional[Session] = None

    # ------------------------------------------------------------------
    # Session helpers
    # ------------------------------------------------------------------
    def _new_session(self) -> Session:
        session = requests.Session()
        session.headers.update(
            {
                "User-Agent": "aoc-kit/0.1 (python-requests)",
                "Accept-Language": "en-US,en;q=0.9",
            }
        )
        return session

    def _url(self, path: str) -> str:
        return urljoin(self.base_url + "/", path.lstrip("/"))

    def _ensure_session(self) -> Session:
        if self._session is None:
            self._session = self._new_session()
        return self._session

    # ------------------------------------------------------------------
    # Endpoints
    # ------------------------------------------------------------------
    def validate_token(self, token: str) -> None:
        """HEAD a stable authenticated endpoint; raise if the token is refused."""
        session = self._ensure_session()
        url = self._url(VALIDATION_PATH)
        LOGGER.debug("Validating session token %s against %s", _redact(token), url)
        try:
            resp = session.head(url, cookies={"session": token}, timeout=self.timeout)
            resp.raise_for_status()
        except RequestException as exc:
            raise CredentialRejected("Token validation failed") from exc

    def fetch_input(self, year: int, day: int, token: str) -> str:
        session = self._ensure_session()
        url = self._url(f"{year}/day/{day}/input")
        try:
            resp = session.get(url, cookies={"session": token}, timeout=self.timeout)
            resp.raise_for_status()
        except RequestException as exc:
            raise NetworkError(
                f"Unable to load input for day {day} of {year}"
            ) from exc
        return resp.text

    def fetch_puzzle_page(self, year: int, day: int) -> str:
        session = self._ensure_session()
        url = self._url(f"{year}/day/{day}")
        try:
            resp = session.get(url, timeout=self.timeout)
            resp.raise_for_status()
        except RequestException as exc:
            raise NetworkError(
                f"Unable to load example for day {day} of {year}"
            ) from exc
        return resp.text

    def fetch_example(self, year: int, day: int) -> str:
        return self.extract_example(self.fetch_puzzle_page(year, day))

    def submit_answer(
        self, year: int, day: int, part: int, answer: str, token: str
    ) -> SubmitResult:
        """Post an answer and classify the judge's reply."""
        session = self._ensure_session()
        url = self._url(f"{year}/day/{day}/answer")
        payload = {"level": str(part), "answer": answer}
        LOGGER.debug(
            "Posting %r to %s (part %s) token=%s", answer, url, part, _redact(token)
        )
        try:
            resp = session.post(
                url, data=payload, cookies={"session": token}, timeout=self.timeout
            )
            resp.raise_for_status()
        except RequestException as exc:
            raise NetworkError("Answer submission failed") from exc
        return classify_response(self._extract_message(resp.text))

    # ------------------------------------------------------------------
    # HTML helpers
    # ------------------------------------------------------------------
    @staticmethod
    def _example_blocks(html: str) -> List[str]:
        soup = BeautifulSoup(html, "html.parser")
        blocks = []
        for code in soup.select("pre > code"):
            prev = code.parent.find_previous_sibling()
            if prev is None or prev.name != "p":
                continue
            if "for example" in prev.get_text().lower():
                blocks.append(code.get_text())
        return blocks

    @staticmethod
    def extract_example(html: str) -> str:
        """Return the single code block introduced by a "for example" paragraph."""
        blocks = AdventClient._example_blocks(html)
        if len(blocks) != 1:
            LOGGER.debug("Found %d example candidates", len(blocks))
            raise ExampleNotFound("Unable to locate example input on the page")
        return blocks[0].strip()

    @staticmethod
    def _extract_message(html: str) -> str:
        soup = BeautifulSoup(html, "html.parser")
        el = soup.select_one("main > article > p")
        return el.get_text().strip() if el is not None else ""

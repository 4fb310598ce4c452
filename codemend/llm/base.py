import random
import time
from abc import ABC, abstractmethod
from typing import Optional

from ..cli_display import log


class LLMError(Exception):
    """Raised when all LLM retries are exhausted."""


class LLMClient(ABC):

    name = "LLM"

    def __init__(self, max_retries: int = 3, retry_delay: float = 2.0):
        self.max_retries = max(1, max_retries)
        self.retry_delay = retry_delay

    # ── Public entry point ──

    def generate_response(self, prompt: str) -> Optional[str]:
        """Send *prompt* with automatic retry and exponential backoff.

        Returns the reply text, or ``None`` when the provider answered with
        an empty body.  Raises :class:`LLMError` after all retries are
        exhausted.
        """
        last_error: Exception | None = None

        for attempt in range(1, self.max_retries + 1):
            try:
                return self._generate(prompt)
            except Exception as e:
                last_error = e
                log.warning(
                    f"[{self.name}] Error on attempt {attempt}/{self.max_retries}: {e}")

                if attempt < self.max_retries:
                    # Jittered exponential backoff
                    wait = self.retry_delay * (2 ** (attempt - 1))
                    jitter = wait * 0.1 * random.random()

                    # Special handling for 429: wait longer
                    if "429" in str(e):
                        wait *= 2
                        log.info(f"[{self.name}] Rate limit detected (429). "
                                 f"Backing off for {wait:.1f}s")

                    time.sleep(wait + jitter)

        raise LLMError(
            f"{self.name} request failed after {self.max_retries} retries: {last_error}")

    # ── Subclass hooks ──

    @abstractmethod
    def _generate(self, prompt: str) -> Optional[str]:
        """One request/response round trip; may raise on transport errors."""

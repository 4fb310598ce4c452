import logging
import os
import sys
import threading
import time as _time
from datetime import datetime


class TokenTracker:
    """Tracks token usage across chat-completion calls."""

    def __init__(self):
        self.total_prompt_tokens = 0
        self.total_completion_tokens = 0
        self.call_count = 0

    def record(self, prompt_tokens: int, completion_tokens: int):
        self.total_prompt_tokens += prompt_tokens
        self.total_completion_tokens += completion_tokens
        self.call_count += 1

    @property
    def total_tokens(self):
        return self.total_prompt_tokens + self.total_completion_tokens


# Global singleton
token_tracker = TokenTracker()

# Shared application logger; handlers are attached by setup_logger()
log = logging.getLogger("codemend")


def setup_logger(log_dir: str = ".codemend/logs") -> logging.Logger:
    """Attach a DEBUG file handler to the ``codemend`` logger.

    All verbose output (request bodies, merge decisions) goes to the file;
    the terminal only sees what the CLI prints.
    """
    os.makedirs(log_dir, exist_ok=True)
    timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
    log_file = os.path.join(log_dir, f"codemend_{timestamp}.log")

    log.setLevel(logging.DEBUG)
    for handler in list(log.handlers):
        if isinstance(handler, logging.FileHandler):
            log.removeHandler(handler)
            handler.close()

    fh = logging.FileHandler(log_file, encoding="utf-8")
    fh.setLevel(logging.DEBUG)
    fh.setFormatter(logging.Formatter(
        "%(asctime)s [%(levelname)s] %(message)s", datefmt="%H:%M:%S"
    ))
    log.addHandler(fh)
    return log


class Spinner:
    """Background spinner shown while waiting for the model.

    Usable as a context manager::

        with Spinner("Waiting for Hyperbolic"):
            reply = client.generate_response(prompt)
    """

    # ASCII-safe frames for Windows consoles
    _FRAMES = ["|", "/", "-", "\\"]

    C_CYAN = "\033[38;5;81m"
    C_YELLOW = "\033[38;5;221m"
    C_DIM = "\033[38;5;243m"
    C_RESET = "\033[0m"

    def __init__(self, message: str = "Waiting for response", stream=None):
        self.message = message
        self._stream = stream or sys.stdout
        self._thread: threading.Thread | None = None
        self._stop = threading.Event()

    def start(self):
        self.stop()
        self._stop.clear()
        self._thread = threading.Thread(target=self._loop, daemon=True)
        self._thread.start()

    def stop(self):
        if self._thread and self._thread.is_alive():
            self._stop.set()
            self._thread.join(timeout=1.0)
            try:
                self._stream.write("\r\033[2K")
                self._stream.flush()
            except (OSError, ValueError):
                pass
        self._thread = None

    def _loop(self):
        C = self.C_CYAN; Y = self.C_YELLOW; D = self.C_DIM; R = self.C_RESET
        frame_idx = 0
        start_time = _time.monotonic()
        base = self.message.rstrip(". ")

        while not self._stop.is_set():
            elapsed = int(_time.monotonic() - start_time)
            mins, secs = divmod(elapsed, 60)
            time_str = f"{mins}:{secs:02d}" if mins else f"{secs}s"
            frame = self._FRAMES[frame_idx % len(self._FRAMES)]
            dots = "." * ((frame_idx % 3) + 1)
            try:
                self._stream.write(
                    f"\r\033[2K{Y}{frame}{R} {C}{base}{dots:<3}{R} {D}({time_str}){R}")
                self._stream.flush()
            except (OSError, ValueError):
                break
            frame_idx += 1
            self._stop.wait(0.15)

    def __enter__(self):
        self.start()
        return self

    def __exit__(self, exc_type, exc, tb):
        self.stop()
        return False

"""
CLI entry point — argument parsing and main execution flow.
"""

import argparse
import sys

from .config import Config
from .cli_display import Spinner, log, setup_logger, token_tracker
from .credentials import get_or_prompt_for_api_key
from .editing.review import ReviewController, console_confirm, textual_confirm_factory
from .errors import CodemendError
from .llm.base import LLMError
from .llm.chat_client import create_client
from .models import default_model, find_model, select_model
from .session import EditSession, read_text_file


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="codemend",
        description="Ask a language model to edit a file, review the changes, apply them.")
    parser.add_argument("-f", "--file", required=True,
                        help="The file to modify")
    parser.add_argument("-m", "--model", action="store_true",
                        help="Pick the model from an interactive menu")
    parser.add_argument("-o", "--openrouter", action="store_true",
                        help="Send the request to OpenRouter instead of Hyperbolic")
    parser.add_argument("--config", default=None,
                        help="Path to .codemend.yaml config file")
    parser.add_argument("--apply-deletions", action="store_true",
                        help="Remove trailing lines reported as deleted "
                             "instead of only listing them")
    parser.add_argument("--tui", action="store_true",
                        help="Review changes in the Textual viewer")
    parser.add_argument("-y", "--yes", action="store_true",
                        help="Apply changes without asking")
    parser.add_argument("-q", "--quiet", action="store_true",
                        help="Do not echo the raw model reply")
    return parser


def prompt_for_user_input() -> str:
    return input("Enter your prompt: ").strip()


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)

    # ── 0. Load config ──
    try:
        cfg = Config.load(args.config)
    except CodemendError as e:
        print(f"\n  [ERROR] {e}\n")
        return 1
    setup_logger(cfg.LOG_DIR)

    provider = "openrouter" if args.openrouter else cfg.PROVIDER
    log.info(f"File: {args.file}, provider: {provider}")

    try:
        # ── 1. Credentials ──
        api_key = get_or_prompt_for_api_key(
            provider, cfg.CREDENTIALS_DIR, configured=cfg.get_api_key(provider))

        # ── 2. Original file ──
        try:
            file_content = read_text_file(args.file)
        except (OSError, UnicodeDecodeError) as e:
            log.error(f"Failed to read file {args.file}: {e}")
            print(f"\n  [ERROR] Failed to read file: {args.file} ({e})\n")
            return 1

        instruction = prompt_for_user_input()

        # ── 3. Model ──
        if args.model:
            model = select_model()
        elif cfg.MODEL:
            model = find_model(cfg.MODEL)
        else:
            model = default_model(provider)
        log.info(f"Model: {model.model_id}")

        client = create_client(provider, cfg, model.model_id, api_key)

        def request_reply(prompt: str):
            with Spinner(f"Waiting for {client.name}"):
                return client.generate_response(prompt)

        # ── 4. Review controller ──
        if args.yes:
            controller = ReviewController(confirm=lambda _question: True)
        elif args.tui or cfg.REVIEW_UI == "tui":
            controller = ReviewController(confirm_factory=textual_confirm_factory)
        else:
            controller = ReviewController(confirm=console_confirm)

        session = EditSession(
            request_reply,
            controller=controller,
            read_original=lambda _path: file_content,
            full_replace_ratio=cfg.FULL_REPLACE_RATIO,
            apply_deletions=args.apply_deletions or cfg.APPLY_DELETIONS,
            echo_reply=not args.quiet,
        )
        outcome = session.run(args.file, instruction)

    except (CodemendError, LLMError) as e:
        log.error(str(e))
        print(f"\n  [ERROR] {e}\n")
        return 1
    except EOFError:
        log.error("Input closed before all prompts were answered")
        print("\n  [ERROR] No input available. Aborted.\n")
        return 1
    except KeyboardInterrupt:
        print("\n  Aborted.")
        return 130

    log.info(f"Finished. applied={outcome.applied if outcome else False} "
             f"tokens={token_tracker.total_tokens}")
    return 0


if __name__ == "__main__":
    sys.exit(main())

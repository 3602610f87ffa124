from __future__ import annotations

import argparse
import json
import sys
from contextlib import nullcontext
from pathlib import Path
from typing import Any, ContextManager, Sequence

from .config import config_sha256, load_config
from .config_schema import AppConfig
from .errors import ConfigError, ExtractionError, FetchError, InputError
from .extract import extract_posts
from .fetcher import ChannelPageFetcher, PageFetcher
from .post import NormalizedPost
from .retry import RetryEvent
from .run_log import RunLogger, utc_now_iso

EXIT_CONFIG = 2
EXIT_FETCH = 3
EXIT_EXTRACTION = 4
EXIT_NO_POST = 5
EXIT_INPUT = 6

GENERIC_EXTRACTION_MESSAGE = "Failed to process YouTube community data."
NO_POST_MESSAGE = "No community post found at the given URL."


class _NoPostFound(Exception):
    pass


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="yt_community")
    subparsers = parser.add_subparsers(dest="command", required=True)

    latest = subparsers.add_parser(
        "latest",
        help="Fetch a channel page and print its most recent community post.",
    )
    latest.add_argument("--url", help="YouTube channel community URL.")
    latest.add_argument(
        "--offline",
        action="store_true",
        help="Use a built-in sample page instead of the network.",
    )
    _add_common_args(latest)
    latest.set_defaults(_handler=_cmd_latest)

    parse = subparsers.add_parser(
        "parse",
        help="Extract community posts from a saved channel page.",
    )
    parse.add_argument("--html", required=True, help="Path to a saved HTML file.")
    parse.add_argument(
        "--all",
        action="store_true",
        help="Print every post on the page instead of only the first.",
    )
    _add_common_args(parse)
    parse.set_defaults(_handler=_cmd_parse)

    return parser


def _add_common_args(sub: argparse.ArgumentParser) -> None:
    sub.add_argument("--config", help="Path to YAML config file (defaults apply if omitted).")
    sub.add_argument("--log", help="Append JSONL run events to this file.")


def _eprint(message: str) -> None:
    print(message, file=sys.stderr)


def _open_log(path: str | None) -> ContextManager[RunLogger | None]:
    if not path:
        return nullcontext(None)
    return RunLogger.open(Path(path))


def _print_json(payload: Any) -> None:
    print(json.dumps(payload, indent=2, ensure_ascii=False))


def _envelope(data: Any) -> dict[str, Any]:
    return {"status": True, "data": data, "timestamp": utc_now_iso()}


def _log_config(log: RunLogger | None, cfg: AppConfig, args: argparse.Namespace) -> None:
    if log is not None:
        log.info(
            "config_loaded",
            config_path=args.config,
            config_sha256=config_sha256(cfg),
            community_tab_title=cfg.extraction.community_tab_title,
        )


def _posts_from_html(
    html: str, cfg: AppConfig, log: RunLogger | None
) -> list[NormalizedPost]:
    return extract_posts(
        html,
        tab_title=cfg.extraction.community_tab_title,
        logger=log,
    )


def _cmd_latest(args: argparse.Namespace, log: RunLogger | None) -> int:
    cfg = load_config(args.config)
    _log_config(log, cfg, args)

    def _on_retry(event: RetryEvent) -> None:
        if log is not None:
            log.warning(
                "fetch_retry",
                url=event.url,
                attempt=event.failure_attempt,
                max_attempts=event.max_attempts,
                delay_seconds=round(event.delay_seconds, 3),
                reason=event.reason,
                error_type=event.error_type,
            )

    fetcher: PageFetcher
    if args.offline:
        from .offline import OfflineChannelPageFetcher

        fetcher = OfflineChannelPageFetcher()
        url = (args.url or "").strip() or "offline://sample-channel/community"
    else:
        fetcher = ChannelPageFetcher(cfg.fetch, on_retry=_on_retry)
        url = args.url or ""

    html = fetcher.fetch(url)
    if log is not None:
        log.info("page_fetched", url=url, chars=len(html))

    posts = _posts_from_html(html, cfg, log)
    if not posts:
        raise _NoPostFound(NO_POST_MESSAGE)

    _print_json(_envelope(posts[0].to_dict()))
    return 0


def _cmd_parse(args: argparse.Namespace, log: RunLogger | None) -> int:
    cfg = load_config(args.config)
    _log_config(log, cfg, args)

    path = Path(args.html)
    try:
        # Invalid UTF-8 bytes decode to U+FFFD.
        html = path.read_text(encoding="utf-8", errors="replace")
    except OSError as e:
        raise InputError(f"Failed to read HTML file: {path}") from e

    posts = _posts_from_html(html, cfg, log)
    if not posts:
        raise _NoPostFound(NO_POST_MESSAGE)

    if args.all:
        _print_json(_envelope([p.to_dict() for p in posts]))
    else:
        _print_json(_envelope(posts[0].to_dict()))
    return 0


def main(argv: Sequence[str] | None = None) -> int:
    parser = _build_parser()
    args = parser.parse_args(list(argv) if argv is not None else None)
    handler = getattr(args, "_handler")

    with _open_log(getattr(args, "log", None)) as log:
        if log is not None:
            log.info("command_started", command=args.command)
        try:
            code = int(handler(args, log))
        except ConfigError as e:
            _log_failure(log, e)
            _eprint(str(e))
            return EXIT_CONFIG
        except FetchError as e:
            _log_failure(log, e)
            _eprint(str(e))
            return EXIT_FETCH
        except InputError as e:
            _log_failure(log, e)
            _eprint(str(e))
            return EXIT_INPUT
        except ExtractionError as e:
            _log_failure(log, e)
            _eprint(GENERIC_EXTRACTION_MESSAGE)
            return EXIT_EXTRACTION
        except _NoPostFound as e:
            if log is not None:
                log.warning("command_completed", posts=0)
            _eprint(str(e))
            return EXIT_NO_POST
        except KeyboardInterrupt:
            _eprint("Interrupted")
            return 130
        except Exception as e:
            _log_failure(log, e)
            _eprint(f"Unexpected error: {e}")
            return 1

        if log is not None:
            log.info("command_completed", exit_code=code)
        return code


def _log_failure(log: RunLogger | None, exc: BaseException) -> None:
    if log is not None:
        log.exception("command_failed", exc=exc)

# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""sniprobe CLI."""

from __future__ import annotations

import argparse
import sys

from ..config import ProbeSettings, load_probe_settings
from ..errors import SetupError
from ..log import setup_logging
from ..models.probe import ProbeConfig, ProbeTarget
from ..probe.dispatcher import ProbeDispatcher
from ..report import print_header, print_outcome
from ..request_file import RequestFile, load_request_file, override
from ..results import prepare_results_dir


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Request one URL through a list of candidate IPs, keeping the original SNI and Host header"
    )
    parser.add_argument("-c", "--config", help="Request file to read (default: request.txt)")
    parser.add_argument("-u", "--url", help="Base URL; overrides the request file")
    parser.add_argument(
        "-i",
        "--ip",
        action="append",
        dest="ips",
        metavar="IP",
        help="Candidate IP (repeatable); replaces the request file's IP list",
    )
    parser.add_argument("-o", "--results-dir", help="Directory for header/body artifacts (default: result)")
    parser.add_argument("--timeout", type=float, help="Per-request timeout in seconds")
    parser.add_argument(
        "--insecure",
        action="store_true",
        help="Skip TLS certificate verification",
    )
    parser.add_argument("--json", action="store_true", help="Print one JSON object per outcome")
    parser.add_argument("--pause", action="store_true", help="Wait for Enter before exiting")
    parser.add_argument("--log-level", help="Logging level (default: $SNIPROBE_LOG_LEVEL or WARNING)")
    return parser


def _apply_args(settings: ProbeSettings, args: argparse.Namespace) -> ProbeSettings:
    if args.timeout is not None and args.timeout > 0:
        settings.timeout = args.timeout
    if args.insecure:
        settings.verify_ssl = False
    if args.results_dir:
        settings.results_dir = args.results_dir
    if args.config:
        settings.request_file = args.config
    return settings


def _load_request(settings: ProbeSettings, args: argparse.Namespace) -> RequestFile:
    if args.url and not args.config:
        # The request file is optional when the URL comes from the command line.
        config = ProbeConfig(
            base_url=args.url,
            timeout=settings.timeout,
            default_user_agent=settings.user_agent,
            verify_ssl=settings.verify_ssl,
        )
        targets = [ProbeTarget(ip=ip.strip()) for ip in args.ips or []] or [ProbeTarget()]
        return RequestFile(config=config, targets=targets)
    request = load_request_file(settings.request_file, settings)
    return override(request, url=args.url, ips=args.ips)


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    setup_logging(args.log_level)

    settings = _apply_args(load_probe_settings(), args)

    try:
        results_dir = prepare_results_dir(settings.results_dir)
        request = _load_request(settings, args)
    except SetupError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 1

    config = request.config
    if not config.base_url:
        print(f"error: no url given (set 'url:' in {settings.request_file} or pass --url)", file=sys.stderr)
        return 1

    if not args.json:
        print_header(config.base_url)

    dispatcher = ProbeDispatcher(config, results_dir=results_dir)
    for outcome in dispatcher.iter_outcomes(request.targets):
        print_outcome(outcome, as_json=args.json)

    if config.captures and not args.json:
        print(f"Done. See the {results_dir} directory for full headers and bodies.")

    if args.pause:
        print("Press Enter to exit")
        try:
            input()
        except EOFError:
            pass

    return 0


if __name__ == "__main__":
    raise SystemExit(main())

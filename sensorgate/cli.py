"""CLI entrypoints for sensorgate commands."""

from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path

from .logging import configure_logging
from .models import ConfigError
from .orchestrator import CheckResult, Orchestrator
from .settings import parse_property_overrides


def _add_verbose_option(
    parser: argparse.ArgumentParser, *, suppress_default: bool = False
) -> None:
    kwargs: dict[str, object] = {
        "action": "count",
        "help": "Increase log verbosity; repeat (-vv) to log why sensors were skipped.",
    }
    if suppress_default:
        kwargs["default"] = argparse.SUPPRESS
    else:
        kwargs["default"] = 0
    parser.add_argument(
        "-v",
        "--verbose",
        **kwargs,
    )


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="sensorgate",
        description="Decide which analysis sensors apply to a repository.",
    )
    _add_verbose_option(parser)
    subparsers = parser.add_subparsers(dest="command", required=True)

    check_parser = subparsers.add_parser(
        "check",
        help="Scan a repository and report which sensors would run.",
    )
    _add_verbose_option(check_parser, suppress_default=True)
    check_parser.add_argument(
        "path",
        nargs="?",
        default=".",
        help="Path to the repository root (defaults to current directory).",
    )
    check_parser.add_argument(
        "--config",
        type=Path,
        default=None,
        help="Configuration file to use instead of <path>/.sensorgate.yml.",
    )
    check_parser.add_argument(
        "-D",
        "--define",
        dest="properties",
        action="append",
        default=[],
        metavar="KEY=VALUE",
        help="Set an analysis property; may be repeated.",
    )
    check_parser.add_argument(
        "--json",
        action="store_true",
        help="Print outcomes as JSON.",
    )
    check_parser.add_argument(
        "--log-file",
        type=Path,
        default=None,
        help="Also write logs to this file.",
    )

    return parser


def main(argv: list[str] | None = None) -> None:
    """CLI entrypoint for sensorgate commands."""
    parser = _build_parser()
    args = parser.parse_args(argv)

    configure_logging(
        verbosity=int(args.verbose),
        log_file=getattr(args, "log_file", None),
    )

    if args.command == "check":
        try:
            properties = parse_property_overrides(args.properties)
            result = Orchestrator().run_check(
                args.path,
                config_path=args.config,
                properties=properties,
            )
        except (FileNotFoundError, NotADirectoryError) as exc:
            parser.exit(1, f"{exc}\n")
        except (ConfigError, ValueError) as exc:
            parser.exit(1, f"sensorgate check failed: {exc}\n")
        if args.json:
            print(json.dumps([outcome.to_dict() for outcome in result.outcomes], indent=2))
        else:
            print(_render_text(result))
    else:  # pragma: no cover - argparse enforces choices
        parser.exit(1, "Unknown command\n")


def _render_text(result: CheckResult) -> str:
    context = result.context
    languages = sorted(context.fs.languages())
    repositories = context.active_rules.repositories()
    lines = [
        f"Indexed {len(result.manifest.files)} files"
        + (f" ({', '.join(languages)})" if languages else ""),
        f"Active rules: {len(context.active_rules)}"
        + (f" in {', '.join(repositories)}" if repositories else ""),
        f"Properties set: {len(context.settings.keys())}",
    ]
    for outcome in result.outcomes:
        if outcome.executed:
            lines.append(f"  run   {outcome.name}")
        else:
            reason = outcome.reason.message if outcome.reason else "not applicable"
            lines.append(f"  skip  {outcome.name} ({reason})")
    return "\n".join(lines)


if __name__ == "__main__":
    main(sys.argv[1:])

import argparse
import asyncio
import json
import logging
import os
import sys
from typing import List, Optional

from .core.config import CONFIG_FILE, init_config, load_patch_options
from .core.constants import DEFAULT_TOKEN_REPORT_FILE, OUTPUT_FORMATS
from .core.errors import TailwindcssPatchError
from .core.extraction import format_grouped_preview, format_token_line, group_tokens_by_file
from .core.patcher import TailwindcssPatcher

TOKEN_FORMATS = ("json", "lines", "grouped-json")
GROUP_KEYS = ("relative", "absolute")


def setup_logging(log_level: str = "INFO") -> None:
    """Configure application logging."""
    logging.basicConfig(
        level=getattr(logging, log_level.upper()),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        handlers=[
            logging.StreamHandler(sys.stdout)
        ]
    )
    # Reduce noise from third-party libraries
    logging.getLogger("asyncio").setLevel(logging.WARNING)


logger = logging.getLogger(__name__)


# =============================================================================
# Commands
# =============================================================================


async def run_install(args) -> None:
    patcher = TailwindcssPatcher(load_patch_options(args.cwd))
    report = await patcher.patch()
    if report.pending:
        logger.info(f"Patches pending (overwrite disabled): {', '.join(report.pending)}")
    logger.info("Tailwind CSS runtime patched successfully.")


async def run_extract(args) -> None:
    overrides = {}
    if args.output or args.format:
        overrides["output"] = {"file": args.output, "format": args.format}
    if args.css:
        overrides["tailwind"] = {"v4": {"css_entries": [args.css]}}

    patcher = TailwindcssPatcher(load_patch_options(args.cwd, overrides))
    result = await patcher.extract(write=args.write)

    if result.filename:
        logger.info(f"Collected {len(result.class_list)} classes → {result.filename}")
    else:
        logger.info(f"Collected {len(result.class_list)} classes.")


async def run_tokens(args) -> None:
    patcher = TailwindcssPatcher(load_patch_options(args.cwd))
    report = await patcher.collect_content_tokens()

    grouped = None
    if args.format == "grouped-json":
        grouped = group_tokens_by_file(
            report, key=args.group_key, strip_absolute_paths=args.group_key != "absolute"
        )

    if args.write:
        target = os.path.join(os.path.abspath(args.cwd), args.output)
        os.makedirs(os.path.dirname(target), exist_ok=True)
        with open(target, "w", encoding="utf-8") as f:
            if args.format == "json":
                json.dump(report.to_dict(), f, indent=2)
            elif args.format == "grouped-json":
                json.dump(
                    {key: [entry.to_dict() for entry in entries] for key, entries in grouped.items()},
                    f,
                    indent=2,
                )
            else:
                f.write("\n".join(format_token_line(entry) for entry in report.entries) + "\n")
        logger.info(f"Collected {len(report.entries)} tokens ({args.format}) → {os.path.relpath(target)}")
    else:
        logger.info(f"Collected {len(report.entries)} tokens from {report.files_scanned} files.")
        if args.format == "lines":
            preview = "\n".join(format_token_line(entry) for entry in report.entries[:5])
            if preview:
                logger.info(preview)
                if len(report.entries) > 5:
                    logger.info(f"…and {len(report.entries) - 5} more.")
        elif args.format == "grouped-json":
            preview, more_files = format_grouped_preview(grouped)
            if preview:
                logger.info(preview)
                if more_files > 0:
                    logger.info(f"…and {more_files} more files.")
        elif report.entries:
            logger.info(json.dumps([entry.to_dict() for entry in report.entries[:3]], indent=2))

    if report.skipped_files:
        logger.warning("Skipped files:")
        for skipped in report.skipped_files:
            logger.warning(f"  • {skipped.file} ({skipped.reason})")


async def run_init(args) -> None:
    path = init_config(args.cwd)
    logger.info(f"{CONFIG_FILE} initialized at {path}")


COMMANDS = {
    "install": run_install,
    "extract": run_extract,
    "tokens": run_tokens,
    "init": run_init,
}


# =============================================================================
# Argument parsing
# =============================================================================


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="tw-patch", description="Tailwind CSS class extraction and cache")
    parser.add_argument(
        "--log-level",
        type=str,
        default="INFO",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging level"
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    def add_command(name: str, help_text: str) -> argparse.ArgumentParser:
        sub = subparsers.add_parser(name, help=help_text)
        sub.add_argument("--cwd", type=str, default=os.getcwd(), help="Working directory")
        return sub

    add_command("install", "Apply Tailwind CSS runtime patches")

    extract = add_command("extract", "Collect generated class names into a cache file")
    extract.add_argument("--output", type=str, help="Override output file path")
    extract.add_argument("--format", type=str, choices=OUTPUT_FORMATS, help="Output format")
    extract.add_argument("--css", type=str, help="Tailwind CSS entry CSS when using v4")
    extract.add_argument("--no-write", dest="write", action="store_false", default=None,
                         help="Skip writing to disk")

    tokens = add_command("tokens", "Extract Tailwind tokens with file/position metadata")
    tokens.add_argument("--output", type=str, default=DEFAULT_TOKEN_REPORT_FILE, help="Override output file path")
    tokens.add_argument("--format", type=str, default="json", choices=TOKEN_FORMATS, help="Output format")
    tokens.add_argument("--group-key", type=str, default="relative", choices=GROUP_KEYS,
                        help="Grouping key for grouped-json output")
    tokens.add_argument("--no-write", dest="write", action="store_false", default=True,
                        help="Skip writing to disk")

    add_command("init", "Generate a tailwindcss-mangle config file")
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """Entry point of the ``tw-patch`` command."""
    args = build_parser().parse_args(argv)
    setup_logging(args.log_level)

    try:
        asyncio.run(COMMANDS[args.command](args))
    except TailwindcssPatchError as e:
        logger.error(f"{args.command} failed: {e}")
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())

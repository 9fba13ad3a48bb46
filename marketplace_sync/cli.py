#!/usr/bin/env python3
"""Command-line entry point for the marketplace sync.

Usage:
    marketplace-sync                                   # use ../skills-repo
    marketplace-sync --repo=https://github.com/org/skills-repo
    SKILLS_REPO_PATH=/path/to/skills-repo marketplace-sync -v
"""

import argparse
import logging
import sys
from typing import List, Optional

from rich.console import Console
from rich.table import Table

from .config import DEFAULT_CONFIG_PATH, SyncConfig
from .exceptions import ConfigurationError
from .sync import SkillSync, SyncExitCode, SyncResult, SyncStatus, setup_logging


logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Sync skills from the skills repository into the marketplace site data"
    )
    parser.add_argument(
        "--repo",
        dest="remote_repo_url",
        help="Remote repository URL to clone when no local checkout exists"
    )
    parser.add_argument(
        "--config",
        default=DEFAULT_CONFIG_PATH,
        help=f"Path to configuration file (default: {DEFAULT_CONFIG_PATH})"
    )
    parser.add_argument("--local-path", dest="local_repo_path", help="Local skills repository path")
    parser.add_argument("--output", dest="output_path", help="Catalog index output file")
    parser.add_argument("--downloads-dir", help="Directory for skill ZIP archives")
    parser.add_argument("--contents-dir", help="Directory for per-skill content files")
    parser.add_argument("--temp-dir", dest="temp_clone_dir", help="Temporary clone directory")
    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Enable verbose logging"
    )
    return parser


def print_summary(result: SyncResult, console: Optional[Console] = None) -> None:
    """Print the sync statistics table."""
    console = console or Console()

    if result.status == SyncStatus.FAILED:
        console.print(f"[red]Sync failed:[/red] {result.error}")
        return
    if result.status == SyncStatus.NO_SKILLS:
        console.print("[yellow]No skills found - nothing was packaged or indexed[/yellow]")
        return

    table = Table(title=f"Sync Summary ({result.total} skills)")
    table.add_column("Skill", style="cyan")
    table.add_column("Files", justify="right")
    table.add_column("Archive", justify="right")
    table.add_column("Tags")

    for skill in result.skills:
        size = result.archive_sizes.get(skill.id, 0)
        table.add_row(
            skill.id,
            str(len(skill.files)),
            f"{size / 1024:.1f} KB",
            ", ".join(skill.tags) or "-",
        )

    console.print(table)
    console.print(
        f"Tags: {result.tag_count}  "
        f"Multi-file: {result.multi_file_count}  "
        f"Single-file: {result.single_file_count}"
    )


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point."""
    args = build_parser().parse_args(argv)

    try:
        config = SyncConfig.load(
            args.config,
            remote_repo_url=args.remote_repo_url,
            local_repo_path=args.local_repo_path,
            output_path=args.output_path,
            downloads_dir=args.downloads_dir,
            contents_dir=args.contents_dir,
            temp_clone_dir=args.temp_clone_dir,
        )
    except ConfigurationError as e:
        setup_logging(args.verbose)
        logger.error(f"Fatal error: {e}")
        return int(SyncExitCode.FAILURE)

    setup_logging(args.verbose, config.log_dir)

    result = SkillSync(config).run()
    print_summary(result)
    return int(result.exit_code)


if __name__ == "__main__":
    sys.exit(main())

# ABOUTME: Shared Click options for quire CLI commands.
# ABOUTME: Provides reusable decorators for common flags like --staging-dir.

from pathlib import Path

import click

staging_dir_option = click.option(
    "--staging-dir",
    "staging_root",
    type=click.Path(file_okay=False, exists=True, path_type=Path),
    default=None,
    help="Directory for temporary staging files (default: system temp directory)",
)

"""ideathread CLI: capture, browse and manage idea threads."""

import click

from ideathread import __version__

from .common import AppContext, load_config


@click.group()
@click.version_option(version=__version__, package_name="ideathread")
@click.option("--config", "config_file", default=None, help="Config file (YAML or JSON).")
@click.option("--root", default=None, help="Document store directory (overrides storage.root).")
@click.option("--verbose", "-v", is_flag=True, help="Log debug output to stderr.")
@click.pass_context
def main(ctx: click.Context, config_file: str | None, root: str | None, verbose: bool) -> None:
    """Capture and browse append-only idea threads in plain markdown."""
    from ideathread.core.utils.logging import setup_logging_from_config

    config = load_config(config_file, root)
    setup_logging_from_config(config, verbose=verbose)
    ctx.obj = AppContext(config)


# Register subcommands
from .capture_cmd import continue_, edit, new, reflect
from .manage_cmd import rename, rm, rm_entry, sync
from .view_cmd import dates, ref, search, show, timeline

for _command in (new, continue_, reflect, edit, show, timeline, dates, search, ref, rename, rm, rm_entry, sync):
    main.add_command(_command)

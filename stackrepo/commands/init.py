import click
from rich.console import Console
from rich.markup import escape

from stackrepo.cli_utils import standard_command
from stackrepo.config import get_home
from stackrepo.services import BootstrapService

console = Console()


@click.command("init")
@click.pass_obj
@standard_command
def init_handler(obj):
    """Prepare the stackrepo home directory.

    Creates the home and repository directories, a repository file
    pointing at the default hub, and an empty config file. Existing
    files are left alone.
    """
    config = obj["config"]
    created = BootstrapService(config, dry_run=obj["dry_run"]).ensure_config()

    if obj["dry_run"]:
        return

    if not created:
        console.print(f"[dim]Nothing to do, {escape(str(get_home(config)))} is already set up[/dim]")
        return

    for path in created:
        console.print(f"[green]✓[/green] Created [cyan]{escape(path)}[/cyan]")

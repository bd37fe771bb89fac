"""
Repository source management commands.

Commands for managing the list of stack repositories kept in
<home>/repository/repository.yaml.
"""

import click
from rich.console import Console
from rich.markup import escape

from ..cli_utils import standard_command, add_common_options, output_jsonl
from ..config import get_repo_file_path
from ..domain import RepositoryEntry
from ..exit_codes import DuplicateRepositoryError, RepositoryNotFoundError
from ..infra import RepositoryFileStore, IndexDownloader
from ..render import render_repositories

console = Console()


def get_store(obj) -> RepositoryFileStore:
    return RepositoryFileStore(get_repo_file_path(obj["config"]))


@click.group("repo")
def repo_cmd():
    """Manage your stack repositories.

    Each repository is a name plus the URL of an index document
    listing the stacks it publishes.
    """
    pass


@repo_cmd.command("list")
@add_common_options('json')
@click.pass_obj
@standard_command
def repo_list(obj, json_output):
    """List configured repositories.

    Examples:

    \b
        stackrepo repo list
        stackrepo repo list --json
    """
    repos = get_store(obj).load()

    if json_output:
        output_jsonl(entry.to_dict() for entry in repos.repositories)
        return

    click.echo(render_repositories(repos), nl=False)


@repo_cmd.command("add")
@click.argument("name")
@click.argument("url")
@click.option("--no-verify", is_flag=True, help="Do not download the index before adding")
@click.pass_obj
@standard_command
def repo_add(obj, name, url, no_verify):
    """Add a repository.

    NAME: Unique name for the repository
    URL: Location of its index (http://, https:// or file://)

    Examples:

    \b
        stackrepo repo add incubator https://example.com/incubator/index.yaml
        stackrepo repo add local file:///home/me/stacks/index.yaml
    """
    store = get_store(obj)
    repos = store.load()

    if repos.has(name):
        raise DuplicateRepositoryError(f"A repository with the name '{name}' already exists.")
    if repos.has_url(url):
        raise DuplicateRepositoryError(f"A repository with the URL '{url}' already exists.")

    if not no_verify:
        index = IndexDownloader().download_index(url)
        console.print(f"[dim]Found {len(index.projects)} stacks in {escape(url)}[/dim]")

    repos.add(RepositoryEntry(name=name, url=url))

    if obj["dry_run"]:
        console.print(f"[yellow]Dry Run - Skipping write of {escape(str(store.path))}[/yellow]")
        return

    store.write(repos)
    console.print(f"[green]✓[/green] Added repository: [cyan]{escape(name)}[/cyan]")


@repo_cmd.command("remove")
@click.argument("name")
@click.pass_obj
@standard_command
def repo_remove(obj, name):
    """Remove a repository.

    NAME: Repository name (must match exactly as stored)

    Examples:

    \b
        stackrepo repo remove incubator
    """
    store = get_store(obj)
    repos = store.load()

    if not repos.remove(name):
        raise RepositoryNotFoundError(name)

    if obj["dry_run"]:
        console.print(f"[yellow]Dry Run - Skipping write of {escape(str(store.path))}[/yellow]")
        return

    store.write(repos)
    console.print(f"[green]✓[/green] Removed repository: [cyan]{escape(name)}[/cyan]")

import click

from stackrepo.cli_utils import standard_command, add_common_options, output_jsonl
from stackrepo.config import get_repo_file_path
from stackrepo.infra import RepositoryFileStore
from stackrepo.render import render_projects
from stackrepo.services import IndexService


@click.command("list")
@add_common_options('json')
@click.pass_obj
@standard_command
def list_handler(obj, json_output):
    """List the stacks available from all configured repositories.

    Every repository index is downloaded; if any one of them fails the
    command fails. When two repositories publish a stack with the same
    name, the one listed last wins.

    Examples:

    \b
        stackrepo list
        stackrepo list --json
    """
    store = RepositoryFileStore(get_repo_file_path(obj["config"]))
    catalog = IndexService(store).build_catalog()

    if json_output:
        output_jsonl(
            {"id": name, "versions": [v.to_dict() for v in versions]}
            for name, versions in catalog.projects.items()
        )
        return

    click.echo(render_projects(catalog), nl=False)

#!/usr/bin/env python3

import click
from pathlib import Path

from stackrepo.config import load_config, get_config_path, configure_logging
from stackrepo.commands.init import init_handler
from stackrepo.commands.list import list_handler
from stackrepo.commands.repo import repo_cmd
from stackrepo.commands.config import config_cmd


@click.group()
@click.version_option(package_name="stackrepo")
@click.option("--home", type=click.Path(file_okay=False, path_type=Path),
              help="Home directory (default: STACKREPO_HOME or ~/.stackrepo)")
@click.option("--config", "config_path", type=click.Path(dir_okay=False, path_type=Path),
              help="Config file (default: STACKREPO_CONFIG or <home>/config.yaml)")
@click.option("--dry-run", is_flag=True, help="Show what would change without writing anything")
@click.option("-v", "--verbose", is_flag=True, help="Enable debug logging")
@click.pass_context
def cli(ctx, home, config_path, dry_run, verbose):
    """stackrepo - Manage stack repositories and browse the stacks they publish.

    Keeps a list of named repository indexes and merges them into a
    single catalog of available stacks.
    """
    if config_path is None:
        config_path = home / "config.yaml" if home else get_config_path()

    config = load_config(config_path)
    if home:
        config["home"] = str(home)

    configure_logging(config, verbose=verbose)

    ctx.obj = {
        "config": config,
        "config_path": config_path,
        "dry_run": dry_run,
    }


cli.add_command(init_handler)
cli.add_command(list_handler)
cli.add_command(repo_cmd)
cli.add_command(config_cmd)


def main():
    cli()

if __name__ == "__main__":
    main()

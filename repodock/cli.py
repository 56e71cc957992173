"""Click-based CLI for repodock - git repository sync and docker workflows."""

from __future__ import annotations

import sys
from pathlib import Path
from typing import Optional

import click

from repodock import __version__
from repodock.config import ConfigError, RepodockConfig, get_config_path, load_config, validate_config_file
from repodock.docker import DockerError, DockerManager
from repodock.git.scanner import ScanError
from repodock.output.console import Console, create_console
from repodock.sync.engine import Syncer


def _load_config(ctx: click.Context) -> RepodockConfig:
    """Load configuration or exit with an error message."""
    try:
        return load_config(ctx.obj.get("config_path"))
    except ConfigError as e:
        console = create_console()
        console.print_error(f"Failed to load configuration: {e.message}")
        for error in e.errors:
            console.print(f"  • {error}")
        sys.exit(1)


def _make_console(ctx: click.Context, config: RepodockConfig) -> Console:
    return create_console(
        verbose=ctx.obj.get("verbose", False) or config.output.verbose,
        colored=config.output.colored,
    )


def _resolve_directory(directory: Optional[Path], config: RepodockConfig) -> Path:
    if directory is not None:
        return directory.expanduser().absolute()
    if config.scan_directory:
        return Path(config.scan_directory).absolute()
    return Path.cwd()


@click.group()
@click.version_option(version=__version__, prog_name="repodock")
@click.option(
    "--config",
    "-c",
    "config_path",
    type=click.Path(path_type=Path),
    help="Path to a config.json or YAML config file",
)
@click.option("--branch", "-b", default=None, help="Git branch to checkout and pull (default: main)")
@click.option("--verbose", "-v", is_flag=True, help="Show detailed output")
@click.pass_context
def cli(ctx: click.Context, config_path: Optional[Path], branch: Optional[str], verbose: bool) -> None:
    """Repodock - git repository sync and Docker management.

    \b
    - Scans a directory for git repositories, checks out the main branch
      and pulls the latest changes, in parallel
    - Starts and stops dependencies and microservices with Docker Compose
    """
    ctx.ensure_object(dict)
    ctx.obj["config_path"] = config_path
    ctx.obj["branch"] = branch
    ctx.obj["verbose"] = verbose


@cli.command()
@click.option(
    "--directory",
    "-d",
    type=click.Path(path_type=Path),
    help="Directory to scan (default: configured scan directory or current directory)",
)
@click.option("--from-config", is_flag=True, help="Sync the repositories listed in the config file instead of scanning")
@click.pass_context
def sync(ctx: click.Context, directory: Optional[Path], from_config: bool) -> None:
    """Sync git repositories in a directory.

    Scans a directory for git repositories and syncs them by checking out
    the target branch and pulling the latest changes. Repositories are
    processed in parallel. Exits with status 1 if any repository fails.
    """
    config = _load_config(ctx)
    console = _make_console(ctx, config)
    branch = ctx.obj.get("branch") or config.git_branch
    syncer = Syncer(console=console)

    if from_config:
        errors = config.validate_repositories()
        if errors:
            console.print_error("Invalid configuration:")
            for error in errors:
                console.print(f"  • {error}")
            sys.exit(1)

        console.print_info(f"Starting Git repository sync for {len(config.repositories)} configured repositories")
        console.print_info(f"Target branch: {branch}")
        result = syncer.sync_repositories(config.working_copies(), branch)
    else:
        root = _resolve_directory(directory, config)
        console.print_info(f"Scanning {root}")
        console.print_info(f"Target branch: {branch}")
        try:
            result = syncer.sync_all(root, branch)
        except ScanError as e:
            console.print_error(f"Failed to scan directory: {e.message}")
            sys.exit(1)

    if result.total == 0:
        console.print_warning("No repositories found")
        return

    syncer.print_summary(result)
    if console.verbose:
        console.print_outcomes_table(result)

    if not result.success:
        sys.exit(1)


@cli.group()
@click.option(
    "--directory",
    "-d",
    type=click.Path(path_type=Path),
    help="Directory containing the docker-compose files (default: configured scan directory or current directory)",
)
@click.pass_context
def docker(ctx: click.Context, directory: Optional[Path]) -> None:
    """Manage Docker containers and dependencies.

    \b
    Dependencies: docker-compose.dependencies.yml
    Services:     docker-compose.services.yml
    """
    ctx.obj["directory"] = directory


def _run_docker(ctx: click.Context, action: str, *args: str) -> None:
    """Build a DockerManager for the context and run one of its workflows."""
    config = _load_config(ctx)
    console = _make_console(ctx, config)
    manager = DockerManager(_resolve_directory(ctx.obj.get("directory"), config), config.docker, console=console)

    try:
        getattr(manager, action)(*args)
    except DockerError as e:
        console.print_error(e.message)
        sys.exit(1)


@docker.group()
def start() -> None:
    """Start Docker services."""
    pass


@start.command("deps")
@click.pass_context
def start_deps(ctx: click.Context) -> None:
    """Start shared dependencies (databases, message queues, etc.)."""
    _run_docker(ctx, "start_dependencies")


@start.command("services")
@click.pass_context
def start_services(ctx: click.Context) -> None:
    """Start microservices only."""
    _run_docker(ctx, "start_services")


@start.command("all")
@click.pass_context
def start_all(ctx: click.Context) -> None:
    """Start dependencies, then microservices."""
    _run_docker(ctx, "start_all")


@docker.command()
@click.pass_context
def stop(ctx: click.Context) -> None:
    """Stop all running services and dependencies."""
    _run_docker(ctx, "stop")


@docker.command()
@click.pass_context
def status(ctx: click.Context) -> None:
    """Show the status of all services and dependencies."""
    _run_docker(ctx, "status")


@docker.command()
@click.argument("service", required=False)
@click.pass_context
def logs(ctx: click.Context, service: Optional[str]) -> None:
    """Follow logs, for all services or only SERVICE."""
    if service:
        _run_docker(ctx, "logs", service)
    else:
        _run_docker(ctx, "logs")


@cli.group()
def config() -> None:
    """Configuration commands.

    \b
    Lookup order:
    - --config option
    - REPODOCK_CONFIG environment variable
    - ./config.json, ./repodock.yaml
    - ~/.config/repodock/config.yaml
    """
    pass


@config.command("show")
@click.pass_context
def config_show(ctx: click.Context) -> None:
    """Show the effective configuration."""
    cfg = _load_config(ctx)
    console = _make_console(ctx, cfg)
    path = get_config_path(ctx.obj.get("config_path"))

    console.print_mapping(
        "Repodock Configuration",
        {
            "config file": str(path) if path else None,
            "git branch": cfg.git_branch,
            "scan directory": cfg.scan_directory,
            "repositories": str(len(cfg.repositories)),
            "compose project": cfg.docker.project_name,
            "dependencies file": cfg.docker.dependencies_file,
            "services file": cfg.docker.services_file,
        },
    )


@config.command("validate")
@click.pass_context
def config_validate(ctx: click.Context) -> None:
    """Validate the configuration and its repository list."""
    console = create_console()
    valid, errors = validate_config_file(ctx.obj.get("config_path"))

    if valid:
        console.print_success("Configuration is valid")
        return

    console.print_error("Invalid configuration:")
    for error in errors:
        console.print(f"  • {error}")
    sys.exit(1)


def main() -> None:
    cli(obj={})


if __name__ == "__main__":
    main()

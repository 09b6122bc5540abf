import click

from workspace_manager.settings import PROGRAM_NAME, get_settings


@click.command(name=PROGRAM_NAME)
@click.option(
    "-p",
    "--path",
    default=".",
    show_default=True,
    help="Directory to scan for workspace folders.",
)
@click.option("-e", "--exclude-current", is_flag=True, default=False, help="Do not list the scanned directory itself.")
@click.option(
    "-i",
    "--include-current",
    is_flag=True,
    default=False,
    help="List the scanned directory itself as the first folder (the default unless WSM_INCLUDE_CURRENT=false).",
)
@click.option("-n", "--name", default=None, help="Custom name for the workspace file (without extension).")
@click.option(
    "-o",
    "--output-dir",
    type=click.Path(file_okay=False),
    default=None,
    help="Directory to write the workspace file to (default: current directory).",
)
@click.option(
    "-u",
    "--update-tasks",
    "--update-task",
    "update_tasks",
    is_flag=True,
    default=False,
    help="Replace the tasks block even if the workspace file already exists.",
)
@click.option("--dry-run", is_flag=True, default=False, help="Print the workspace instead of writing it.")
@click.option("-v", "--verbose", is_flag=True, default=False, help="Enable debug logging.")
@click.version_option(package_name=PROGRAM_NAME)
def main(
    path: str,
    exclude_current: bool,
    include_current: bool,
    name: str | None,
    output_dir: str | None,
    update_tasks: bool,
    dry_run: bool,
    verbose: bool,
) -> None:
    """Create or update a VS Code workspace listing the folders under PATH."""
    from workspace_manager.log import setup_logging
    from workspace_manager.managers.workspaces import update_workspace
    from workspace_manager.scanner import PathError
    from workspace_manager.store.local import ParseError, WorkspaceIOError, dump_workspace

    settings = get_settings()
    setup_logging("DEBUG" if verbose else settings.log_level)

    if exclude_current and include_current:
        raise click.UsageError("--include-current and --exclude-current are mutually exclusive.")
    include: bool | None = None
    if exclude_current or include_current:
        include = include_current

    try:
        result = update_workspace(
            path,
            workspace_dir=output_dir,
            name=name,
            include_current=include,
            update_tasks=update_tasks,
            write=not dry_run,
            settings=settings,
        )
    except (PathError, ParseError, WorkspaceIOError) as exc:
        raise click.ClickException(str(exc)) from exc

    if dry_run:
        click.echo(dump_workspace(result.document, indent=settings.indent), nl=False)
        return

    click.echo(f"Workspace file '{result.path.name}' updated successfully!")


if __name__ == "__main__":
    main()

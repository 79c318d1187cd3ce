"""Command-line interface for nbinject."""

import sys
import click
from colorama import init, Fore, Style
from rich.text import Text

from nbinject_cli.version import get_version
from nbinject_cli.config import InjectionConfig, ConfigError
from nbinject_cli.injection import HtmlInjector, InjectionResult, render_payload
from nbinject_cli.launch import LaunchContext
from nbinject_cli.utils.console import (
    _rich_success, _rich_error, _rich_info, _rich_warning, _rich_echo, _rich_panel,
    _create_files_table, _print_table, _get_console,
)

# Initialize colorama for fallback
init(autoreset=True)

TITLE = f"{Fore.CYAN}{Style.BRIGHT}"
ERROR = f"{Fore.RED}{Style.BRIGHT}"
RESET = Style.RESET_ALL

STATUS_LABELS = {
    "PATCHED": "patched",
    "ALREADY_PATCHED": "already patched",
    "NO_BODY_TAG": "no </body>, left unchanged",
    "ERROR": "error",
}


def print_version(ctx, param, value):
    """Print version and exit."""
    if not value or ctx.resilient_parsing:
        return

    version_text = Text()
    version_text.append("nbinject", style="bold cyan")
    version_text.append(f" version {get_version()}", style="white")
    _rich_panel(version_text, fallback=f"{TITLE}nbinject{RESET} version {get_version()}")

    ctx.exit()


def _load_config(config_path, **overrides) -> InjectionConfig:
    try:
        return InjectionConfig.from_config_file(config_path, **overrides)
    except ConfigError as e:
        _rich_error(f"Invalid configuration: {e}", symbol="error")
        sys.exit(1)


def _report(result: InjectionResult, verbose: bool) -> None:
    """Print the outcome of an injection run."""
    if verbose:
        for missing in result.missing_directories:
            _rich_echo(f"Skipping missing directory: {missing}", color="white")
        for directory in result.directories:
            _rich_info(f"Scanned {directory}", symbol="list")

    for outcome in result.errors:
        _rich_error(f"{outcome.path}: {outcome.error}", symbol="error")

    if verbose and result.outcomes:
        rows = [(str(o.path), STATUS_LABELS[o.status]) for o in result.outcomes]
        _print_table(_create_files_table(rows, title="HTML files"))

    patched = len(result.patched)
    if result.dry_run:
        _rich_info(f"Dry run: {patched} of {result.files_scanned} HTML files would be patched", symbol="preview")
        return

    _rich_success(
        f"Done. Patched {patched} of {result.files_scanned} HTML files "
        f"({len(result.already_patched)} already patched)",
        symbol="sparkles",
    )


@click.group(help="nbinject: add workspace launch buttons to built documentation sites")
@click.option('--version', is_flag=True, callback=print_version,
              expose_value=False, is_eager=True, help="Show version and exit.")
@click.pass_context
def cli(ctx):
    """Main entry point for the nbinject CLI."""
    ctx.ensure_object(dict)


@cli.command(help="Inject the launch payload into every built HTML page")
@click.option('--dir', '-d', 'directories', multiple=True,
              help="Build output directory to patch (repeatable, replaces the configured list)")
@click.option('--base-dir', type=click.Path(file_okay=False), help="Project root the directories are relative to")
@click.option('--config', 'config_path', type=click.Path(dir_okay=False), help="Path to nbinject.yml")
@click.option('--dry-run', is_flag=True, help="Report what would be patched without writing files")
@click.option('--verbose', '-v', is_flag=True, help="Show every file and skipped directory")
@click.option('--debug-payload', is_flag=True, help="Enable console logging in the injected script")
@click.pass_context
def inject(ctx, directories, base_dir, config_path, dry_run, verbose, debug_payload):
    """Patch HTML pages under the build output directories.

    Pages that already contain the injection marker are left alone, so the
    command can be re-run safely. A missing build directory is reported but
    does not fail the command.
    """
    config = _load_config(
        config_path,
        base_dir=base_dir,
        directories=list(directories) or None,
        dry_run=dry_run,
        verbose=verbose,
        debug=True if debug_payload else None,
    )

    try:
        _rich_info("Starting context-aware injection...", symbol="running")
        if config.dry_run:
            _rich_info("Dry run mode: no files will be written", symbol="preview")

        result = HtmlInjector(config).run()

        if not result.found_directory:
            _rich_error("Could not find build directory.", symbol="error")
            if config.verbose:
                _rich_info(f"Looked for: {', '.join(str(p) for p in result.missing_directories)}")
            return

        _report(result, config.verbose)
    except Exception as e:
        _rich_error(f"Error during injection: {e}", symbol="error")
        sys.exit(1)


@cli.command(help="Print the payload block that would be injected")
@click.option('--config', 'config_path', type=click.Path(dir_okay=False), help="Path to nbinject.yml")
@click.option('--debug-payload', is_flag=True, help="Enable console logging in the injected script")
def payload(config_path, debug_payload):
    """Write the rendered payload to stdout."""
    config = _load_config(config_path, debug=True if debug_payload else None)
    click.echo(render_payload(config), nl=False)


@cli.command('launch-url', help="Show the launch URL built from a page's edit link")
@click.argument('edit_href')
@click.option('--home', help="Workspace home URL, as sent in the handshake")
@click.option('--config', 'config_path', type=click.Path(dir_okay=False), help="Path to nbinject.yml")
def launch_url(edit_href, home, config_path):
    """Compute the URL the launch button opens for EDIT_HREF.

    Example:
        nbinject launch-url https://github.com/org/repo/edit/main/notebooks/ex1.ipynb
    """
    config = _load_config(config_path)
    context = LaunchContext(hub_url=config.fallback_hub_url, hub_path=config.hub_path)
    if home:
        context.on_handshake({"workspaceConfig": {"home": home}})

    url = context.launch_url(edit_href)
    if url is None:
        _rich_error("Edit link does not match /{org}/{repo}/edit/{branch}/{path}", symbol="error")
        _rich_warning("No launch button would be created for this page")
        sys.exit(1)
    click.echo(url)


@cli.command(help="Show nbinject configuration")
@click.option('--show', is_flag=True, help="Show effective configuration")
@click.option('--base-dir', type=click.Path(file_okay=False), help="Project root holding nbinject.yml")
@click.option('--config', 'config_path', type=click.Path(dir_okay=False), help="Path to nbinject.yml")
def config(show, base_dir, config_path):
    """Display the configuration an inject run would use."""
    if not show:
        _rich_info("Use 'nbinject config --show' to display the effective configuration")
        return

    effective = _load_config(config_path, base_dir=base_dir)
    rows = []
    for key, value in effective.as_dict().items():
        if isinstance(value, list):
            value = ", ".join(value)
        rows.append((key, str(value)))

    console = _get_console()
    if console:
        from rich.table import Table  # type: ignore
        table = Table(title="⚙️ Configuration", show_header=True, header_style="bold cyan")
        table.add_column("Key", style="bold white")
        table.add_column("Value", style="white", overflow="fold")
        for key, value in rows:
            table.add_row(key, value)
        console.print(table)
    else:
        for key, value in rows:
            click.echo(f"{key}: {value}")


def main():
    """Main entry point for the CLI."""
    try:
        cli(obj={})
    except Exception as e:
        click.echo(f"{ERROR}Error: {e}{RESET}", err=True)
        sys.exit(1)


if __name__ == "__main__":
    main()

"""
Blob filesystem CLI tool.

Operates on Azure Blob Storage through the filesystem adapter using
<container>/<blob-name> paths.

Usage:
    poetry run blobfs ls
    poetry run blobfs ls docs
    poetry run blobfs put docs/report.txt ./report.txt --content-type text/plain
    poetry run blobfs mv docs/report.txt archive/report.txt
"""

import sys
from functools import wraps
from pathlib import Path

import click
import structlog
from azure.core.exceptions import AzureError

from src.config import configure_logging, get_settings
from src.models import WriteOptions
from src.storage import StorageError, get_adapter

logger = structlog.get_logger(__name__)


def handle_storage_errors(func):
    """Report adapter and remote failures on stderr and exit non-zero."""

    @wraps(func)
    def wrapper(*args, **kwargs):
        try:
            return func(*args, **kwargs)
        except (AzureError, StorageError) as e:
            logger.debug("Command failed", command=func.__name__, error=str(e))
            click.echo(f"Error: {e}", err=True)
            sys.exit(1)

    return wrapper


@click.group()
@click.pass_context
def cli(ctx: click.Context):
    """Browse and manage Azure Blob Storage as a filesystem."""
    settings = get_settings()
    configure_logging(settings.log_level, settings.log_format)
    if ctx.obj is None:
        try:
            ctx.obj = get_adapter()
        except ValueError as e:
            raise click.UsageError(str(e)) from e


@cli.command("ls")
@click.argument("directory", default="")
@click.option("--max-results", type=int, default=None, help="Maximum entries to list")
@click.pass_obj
@handle_storage_errors
def list_command(adapter, directory: str, max_results: int | None):
    """List containers, or blobs in DIRECTORY (<container>[/<prefix>])."""
    if max_results is None:
        max_results = get_settings().list_max_results

    for entry in adapter.list_contents(directory, max_results=max_results):
        timestamp = entry.timestamp.isoformat() if entry.timestamp else "-"
        if entry.is_directory:
            click.echo(f"{timestamp}  {'<DIR>':>12}  {entry.path}/")
        else:
            click.echo(f"{timestamp}  {entry.size or 0:>12}  {entry.path}")


@cli.command("cat")
@click.argument("path")
@click.pass_obj
@handle_storage_errors
def cat_command(adapter, path: str):
    """Write the contents of a blob to stdout."""
    record = adapter.read(path)
    click.echo(record.contents, nl=False)


@cli.command("put")
@click.argument("path")
@click.argument(
    "source",
    type=click.Path(exists=True, file_okay=True, dir_okay=False, path_type=Path),
)
@click.option("--content-type", default=None, help="MIME type to store with the blob")
@click.pass_obj
@handle_storage_errors
def put_command(adapter, path: str, source: Path, content_type: str | None):
    """Upload SOURCE file to PATH."""
    with open(source, "rb") as f:
        record = adapter.write_stream(path, f, WriteOptions(content_type=content_type))
    click.echo(f"Uploaded {source} -> {record.path} ({record.timestamp})")


@cli.command("rm")
@click.argument("path")
@click.pass_obj
@handle_storage_errors
def remove_command(adapter, path: str):
    """Delete a blob."""
    if adapter.delete(path):
        click.echo(f"Deleted {path}")
    else:
        click.echo(f"{path} did not exist")


@cli.command("mv")
@click.argument("source")
@click.argument("dest")
@click.pass_obj
@handle_storage_errors
def move_command(adapter, source: str, dest: str):
    """Move a blob (copy then delete, not atomic)."""
    adapter.rename(source, dest)
    click.echo(f"Moved {source} -> {dest}")


@cli.command("cp")
@click.argument("source")
@click.argument("dest")
@click.pass_obj
@handle_storage_errors
def copy_command(adapter, source: str, dest: str):
    """Copy a blob."""
    adapter.copy(source, dest)
    click.echo(f"Copied {source} -> {dest}")


@cli.command("stat")
@click.argument("path")
@click.pass_obj
@handle_storage_errors
def stat_command(adapter, path: str):
    """Show blob properties and metadata."""
    for key, value in adapter.get_metadata(path).items():
        click.echo(f"{key}: {value}")


@cli.command("exists")
@click.argument("path")
@click.pass_obj
@handle_storage_errors
def exists_command(adapter, path: str):
    """Check whether a blob exists (exit 0 found, 1 missing, 2 probe failed)."""
    result = adapter.has(path)
    click.echo(result.status.value)
    if result.is_transport_error:
        click.echo(f"Error: {result.error}", err=True)
        sys.exit(2)
    if not result:
        sys.exit(1)


@cli.command("mkdir")
@click.argument("name")
@click.pass_obj
@handle_storage_errors
def mkdir_command(adapter, name: str):
    """Create a container."""
    record = adapter.create_dir(name)
    click.echo(f"Created container {record.path}")


@cli.command("rmdir")
@click.argument("name")
@click.option("--yes", is_flag=True, help="Confirm deleting the container and all its blobs")
@click.pass_obj
@handle_storage_errors
def rmdir_command(adapter, name: str, yes: bool):
    """Delete a container and every blob in it."""
    if not yes:
        click.confirm(f"Delete container '{name}' and all its blobs?", abort=True)
    adapter.delete_dir(name)
    click.echo(f"Deleted container {name}")


if __name__ == "__main__":
    cli()

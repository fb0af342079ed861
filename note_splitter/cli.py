"""
Note Splitter CLI.

Commands:
    note-splitter split NOTE        Split a note on the configured delimiter
    note-splitter config show       Print the current settings
    note-splitter config set K V    Change one setting (saved immediately)
    note-splitter serve             Start the HTTP command server
"""

from __future__ import annotations

import asyncio
import json
from pathlib import Path
from typing import Optional

import typer

from .config import CONFIG
from .exceptions import NoteSplitterError, SettingsError
from .main import EDITING_MODE, configure_logging, file_view, run_split_command, serve
from .notifier import ConsoleNotifier
from .settings import SettingsStore
from .storage.base import VaultStorage
from .storage.local import LocalVaultStorage

app = typer.Typer(
    name="note-splitter",
    help="Split a Markdown note into separate notes using a delimiter.",
    no_args_is_help=True,
    add_completion=False,
)

config_app = typer.Typer(help="View and change split settings.", no_args_is_help=True)
app.add_typer(config_app, name="config")


def _open_storage(vault: str, remote: bool) -> VaultStorage:
    if remote:
        missing = CONFIG.validate(remote=True)
        if missing:
            typer.echo(f"Missing required configuration: {', '.join(missing)}", err=True)
            raise typer.Exit(code=2)
        from .api_client import VaultAPIClient

        return VaultAPIClient()
    return LocalVaultStorage(vault)


def _vault_path(storage: VaultStorage, note: str) -> str:
    """Accept absolute file paths for local vaults, vault-relative paths otherwise."""
    candidate = Path(note)
    if isinstance(storage, LocalVaultStorage) and candidate.is_absolute():
        try:
            return storage.relative(candidate)
        except ValueError:
            raise typer.BadParameter(f"{note} is not inside the vault {storage.root}")
    return note


@app.command("split")
def split(
    note: str = typer.Argument(..., help="Note to split (vault-relative path)."),
    vault: str = typer.Option(CONFIG.VAULT_PATH, "--vault", help="Vault root directory."),
    settings_path: str = typer.Option(CONFIG.SETTINGS_PATH, "--settings", help="Settings file."),
    mode: str = typer.Option(EDITING_MODE, "--mode", help="View mode of the note (source or preview)."),
    remote: bool = typer.Option(False, "--remote", help="Use the vault API instead of a local folder."),
    log_level: Optional[str] = typer.Option(None, "--log-level", help="Logging level."),
) -> None:
    """Split a note into separate notes."""
    configure_logging(log_level)

    try:
        settings = SettingsStore(settings_path).load()
    except SettingsError as e:
        typer.echo(str(e), err=True)
        raise typer.Exit(code=2)

    storage = _open_storage(vault, remote)
    notifier = ConsoleNotifier()

    async def _run():
        try:
            view = await file_view(storage, _vault_path(storage, note), mode)
            return await run_split_command(lambda: view, settings, storage, notifier)
        finally:
            await storage.aclose()

    try:
        result = asyncio.run(_run())
    except NoteSplitterError as e:
        typer.echo(f"Split failed: {e}", err=True)
        raise typer.Exit(code=1)

    if result is not None and not result.complete:
        raise typer.Exit(code=1)


@app.command("serve")
def serve_command(
    vault: str = typer.Option(CONFIG.VAULT_PATH, "--vault", help="Vault root directory."),
    settings_path: str = typer.Option(CONFIG.SETTINGS_PATH, "--settings", help="Settings file."),
    remote: bool = typer.Option(False, "--remote", help="Use the vault API instead of a local folder."),
    port: Optional[int] = typer.Option(None, "--port", "-p", help="Port to listen on."),
) -> None:
    """Start the HTTP command server."""
    configure_logging()
    store = SettingsStore(settings_path)
    serve(_open_storage(vault, remote), store.load, port=port)


@config_app.command("show")
def config_show(
    settings_path: str = typer.Option(CONFIG.SETTINGS_PATH, "--settings", help="Settings file."),
) -> None:
    """Print the current settings as JSON."""
    try:
        settings = SettingsStore(settings_path).load()
    except SettingsError as e:
        typer.echo(str(e), err=True)
        raise typer.Exit(code=2)
    typer.echo(json.dumps(settings.to_dict(), indent=2))


@config_app.command("set")
def config_set(
    key: str = typer.Argument(..., help="Setting name, e.g. delimiter."),
    value: str = typer.Argument(..., help="New value. Use \\n for a newline in the delimiter."),
    settings_path: str = typer.Option(CONFIG.SETTINGS_PATH, "--settings", help="Settings file."),
) -> None:
    """Change one setting and save it."""
    try:
        settings = SettingsStore(settings_path).update(key, value)
    except SettingsError as e:
        typer.echo(str(e), err=True)
        raise typer.Exit(code=2)
    typer.echo(f"{key} = {json.dumps(settings.to_dict()[key])}")


def main() -> None:
    app()


if __name__ == "__main__":
    main()

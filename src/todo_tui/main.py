"""Main entry point for todo-tui."""

import typer
from rich.console import Console

from todo_tui import __version__
from todo_tui.adapters.sqlite import open_store
from todo_tui.services.config_service import get_config_service
from todo_tui.services.todo_service import TodoService
from todo_tui.ui.app import TodoApp
from todo_tui.utils.exit_codes import ERROR_GENERAL, SUCCESS, get_exit_code_name
from todo_tui.utils.logger import get_logger, set_level

app = typer.Typer(
    name="todo-tui",
    help="A keyboard-driven terminal todo list",
    add_completion=False,
)

console = Console(stderr=True)


def _version_callback(value: bool) -> None:
    if value:
        typer.echo(f"todo-tui {__version__}")
        raise typer.Exit()


@app.command()
def run(
    version: bool | None = typer.Option(
        None,
        "--version",
        callback=_version_callback,
        is_eager=True,
        help="Show the version and exit",
    ),
) -> None:
    """Open the todo list."""
    logger = get_logger()

    try:
        config_service = get_config_service()
        config = config_service.load_config()
        set_level(config.logging.level)
    except RuntimeError as e:
        logger.error("startup failed: %s", e)
        console.print(f"[red]✗ {e}[/red]")
        raise typer.Exit(ERROR_GENERAL) from e

    # A storage failure is not fatal: the list runs in memory and shows why.
    store, status = open_store(config_service.db_path())
    service = TodoService.start(store, status)

    tui = TodoApp(service)
    try:
        tui.run()
    except Exception as e:
        logger.exception("event loop failed")
        _fail(f"Error running program: {e}")
    finally:
        service.close()

    # textual reports exceptions raised inside the app through return_code
    # instead of propagating them out of run().
    if tui.return_code:
        logger.error("event loop exited with return code %s", tui.return_code)
        _fail(f"Error running program: exited with code {tui.return_code}")

    logger.info("exiting with %s", get_exit_code_name(SUCCESS))


def _fail(message: str) -> None:
    console.print(f"[red]✗ {message}[/red]")
    get_logger().info("exiting with %s", get_exit_code_name(ERROR_GENERAL))
    raise typer.Exit(ERROR_GENERAL)


def main() -> None:
    """Console script entry point."""
    app()


if __name__ == "__main__":
    main()

"""Tasks for the edge-portal-role project."""

from pathlib import Path

from invoke import Context, task  # type: ignore[import-not-found]
from rich import box  # type: ignore[import-not-found]
from rich.console import Console  # type: ignore[import-not-found]
from rich.panel import Panel  # type: ignore[import-not-found]

console = Console()

MAIN_DIRECTORY_PATH = Path(__file__).parent

LINTERS = {
    "ruff": "ruff check edge_portal_role tests",
    "mypy": "mypy --show-error-codes edge_portal_role",
}


@task(optional=["user", "role", "base_url", "debug"], name="create-role")
def create_role(
    context: Context,
    org: str,
    user: str = "",
    role: str = "",
    base_url: str = "",
    debug: bool = False,
) -> None:
    """Create the Drupal portal role in an Apigee Edge org (prompts for the password)."""
    command = f"python -m edge_portal_role -o {org}"
    if user:
        command += f" -u {user}"
    if role:
        command += f" -r {role}"
    if base_url:
        command += f" -b {base_url}"
    if debug:
        command += " -d"
    context.run(command, pty=True)


@task(name="run-tests")
def run_tests(context: Context) -> None:
    """Run unit and integration tests."""
    console.print(Panel("[bold cyan]Running Tests[/bold cyan]", border_style="cyan", box=box.SIMPLE))
    with context.cd(MAIN_DIRECTORY_PATH):
        context.run("pytest -vv tests")
    console.print("[green]✓[/green] Tests completed")


@task(optional=["only"], name="lint")
def lint(context: Context, only: str = "") -> None:
    """Run ruff and mypy (use --only=ruff or --only=mypy to pick one)."""
    selected = {name: cmd for name, cmd in LINTERS.items() if not only or name == only}
    if not selected:
        console.print(f"[red]✗[/red] Unknown linter '{only}', choose from: {', '.join(LINTERS)}")
        return

    with context.cd(MAIN_DIRECTORY_PATH):
        for name, cmd in selected.items():
            console.print(f"[yellow]→[/yellow] Running {name}...")
            context.run(cmd)

    console.print("[green]✓[/green] Lint completed")

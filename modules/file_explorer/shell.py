"""
Interactive shell for the File Explorer.

Reads a line, splits it on whitespace, looks the first word up in the
command table and renders the OperationResult with rich.
"""

from dataclasses import dataclass
from typing import Callable, Dict, List, Optional

from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

from .file_ops import FileExplorer, DirectoryListing
from .results import OperationResult


RULE_WIDTH = 80

EXIT_COMMANDS = ("exit", "quit")


@dataclass
class Command:
    """One entry of the shell's command table."""
    name: str
    args: List[str]
    summary: str
    section: str
    handler: Callable[..., None]

    @property
    def usage(self) -> str:
        return " ".join([self.name] + [f"<{a}>" for a in self.args])


class ExplorerShell:
    """Read-eval-print loop over a FileExplorer."""

    def __init__(self, explorer: FileExplorer, console: Optional[Console] = None):
        self.explorer = explorer
        self.console = console or Console()
        self.commands: Dict[str, Command] = {}

        self._register("ls", [], "List files in current directory", "Navigation", self.do_ls)
        self._register("ll", [], "List files with detailed information", "Navigation", self.do_ll)
        self._register("cd", ["dir"], "Change directory", "Navigation", self.do_cd)
        self._register("pwd", [], "Print current directory", "Navigation", self.do_pwd)
        self._register("mkdir", ["name"], "Create directory", "File Operations", self.do_mkdir)
        self._register("touch", ["name"], "Create file", "File Operations", self.do_touch)
        self._register("rm", ["name"], "Delete file or empty directory", "File Operations", self.do_rm)
        self._register("cp", ["src", "dest"], "Copy file", "File Operations", self.do_cp)
        self._register("mv", ["src", "dest"], "Move/rename file", "File Operations", self.do_mv)
        self._register("find", ["pattern"], "Search for files by name", "Search", self.do_find)
        self._register("chmod", ["file", "mode"], "Change permissions (e.g., chmod file.txt 755)",
                       "Permissions", self.do_chmod)
        self._register("chown", ["file", "user"], "Change owner", "Permissions", self.do_chown)
        self._register("help", [], "Show this help", "Other", self.do_help)

    def _register(
        self,
        name: str,
        args: List[str],
        summary: str,
        section: str,
        handler: Callable[..., None]
    ) -> None:
        self.commands[name] = Command(name, args, summary, section, handler)

    @property
    def prompt(self) -> str:
        return f"\n[bold blue]\\[{escape(self.explorer.current_path)}]$ [/bold blue]"

    def run(self) -> None:
        """Run the loop until exit, quit, EOF or Ctrl-C."""
        self.console.print(Panel.fit(
            "[bold green]File Explorer[/bold green]\n"
            "[dim]Type 'help' for available commands[/dim]"
        ))

        while True:
            try:
                line = self.console.input(self.prompt)
            except (EOFError, KeyboardInterrupt):
                self.console.print("\n[green]Goodbye![/green]")
                break

            if not self.execute(line):
                self.console.print("[green]Goodbye![/green]")
                break

    def execute(self, line: str) -> bool:
        """
        Run one command line.

        Returns:
            False when the line asks the shell to exit, True otherwise
        """
        words = line.split()
        if not words:
            return True

        name, args = words[0], words[1:]
        if name in EXIT_COMMANDS:
            return False

        command = self.commands.get(name)
        if command is None:
            self.console.print(f"[red]Unknown command: {escape(name)}[/red]")
            self.console.print("Type 'help' for available commands")
            return True

        if len(args) < len(command.args):
            self.console.print(f"[red]Usage: {escape(command.usage)}[/red]")
            return True

        command.handler(*args[:len(command.args)])
        return True

    def _report(self, result: OperationResult) -> None:
        if result.success:
            self.console.print(f"[green]{escape(result.message)}[/green]")
        else:
            self.console.print(f"[red]Error: {escape(result.message)}[/red]")

    def _listing(self) -> Optional[DirectoryListing]:
        result = self.explorer.list_directory()
        if not result.success:
            self._report(result)
            return None
        self.console.print(f"\n[bold cyan]Current Directory: {escape(result.data.path)}[/bold cyan]")
        return result.data

    def do_ls(self) -> None:
        listing = self._listing()
        if listing is None:
            return
        self.console.print("=" * RULE_WIDTH, markup=False)
        self.console.print("  ".join(f"[blue]{escape(d)}/[/blue]" for d in listing.directories))
        self.console.print("  ".join(escape(f) for f in listing.files))
        self.console.print("=" * RULE_WIDTH, markup=False)

    def do_ll(self) -> None:
        listing = self._listing()
        if listing is None:
            return

        table = Table(show_edge=False, box=None, pad_edge=False)
        table.add_column("Permissions")
        table.add_column("Owner")
        table.add_column("Group")
        table.add_column("Size", justify="right")
        table.add_column("Type")
        table.add_column("Name")

        for entry in listing.entries:
            if entry.is_dir:
                name = f"[blue]{escape(entry.name)}/[/blue]"
            elif entry.is_executable:
                name = f"[green]{escape(entry.name)}[/green]"
            else:
                name = escape(entry.name)
            table.add_row(
                entry.permissions,
                escape(entry.owner),
                escape(entry.group),
                entry.size_human,
                entry.file_type.value,
                name
            )

        self.console.print(table)

    def do_pwd(self) -> None:
        self.console.print(self.explorer.current_path, markup=False, highlight=False)

    def do_cd(self, path: str) -> None:
        result = self.explorer.change_directory(path)
        if not result.success:
            self._report(result)

    def do_mkdir(self, name: str) -> None:
        self._report(self.explorer.create_directory(name))

    def do_touch(self, name: str) -> None:
        self._report(self.explorer.create_file(name))

    def do_rm(self, name: str) -> None:
        self._report(self.explorer.delete_item(name))

    def do_cp(self, src: str, dest: str) -> None:
        self._report(self.explorer.copy(src, dest))

    def do_mv(self, src: str, dest: str) -> None:
        self._report(self.explorer.move(src, dest))

    def do_find(self, pattern: str) -> None:
        self.console.print(f"[yellow]Searching for: {escape(pattern)}[/yellow]")
        result = self.explorer.search(pattern)
        if not result.data:
            self.console.print("No files found matching the pattern.")
            return
        self.console.print(f"[green]{escape(result.message)}:[/green]")
        for path in result.data:
            self.console.print(f"  {path}", markup=False, highlight=False)

    def do_chmod(self, name: str, mode: str) -> None:
        self._report(self.explorer.change_permissions(name, mode))

    def do_chown(self, name: str, owner: str) -> None:
        self._report(self.explorer.change_owner(name, owner))

    def do_help(self) -> None:
        table = Table(title="File Explorer Commands", show_header=False, box=None)
        table.add_column("Command", style="bold")
        table.add_column("Description")

        section = None
        for command in self.commands.values():
            if command.section != section:
                section = command.section
                table.add_row(f"[yellow]{section}:[/yellow]", "")
            table.add_row(f"  {escape(command.usage)}", command.summary)
        table.add_row("  exit", "Exit the application")

        self.console.print(table)

"""
Interactive shell over a student record file.

Run with: python -m recstore.main [--data-file students.dat]
"""
import argparse
import logging
import sys
from contextlib import closing
from typing import Iterable, Sequence

from rich import box
from rich.console import Console, Group
from rich.markup import escape
from rich.prompt import FloatPrompt, IntPrompt, Prompt
from rich.table import Table

from .core.exceptions import DbException
from .core.record import StudentRecord
from .log import ROOT_LOGGER, configure_console_log, disable_file_log, enable_file_log
from .primitives import IndexEntry, RecordStatus
from .storage import PrimaryIndex, RecordStore


def render_index_table(entries: Sequence[IndexEntry]) -> Group:
    """Build the 'Current Index Table' view."""
    table = Table(box=box.SIMPLE_HEAD)
    table.add_column("ID", justify="right")
    table.add_column("Offset", justify="right")
    for entry in entries:
        table.add_row(str(entry.id), str(entry.offset))
    return _titled("Current Index Table", table, f"Total active records: {len(entries)}")


def render_records_table(rows: Iterable[tuple[int, StudentRecord, RecordStatus]]) -> Group:
    """Build the full file dump, tombstones included."""
    table = Table(box=box.SIMPLE_HEAD)
    table.add_column("Offset", justify="right")
    table.add_column("ID", justify="right")
    table.add_column("Name")
    table.add_column("CGPA", justify="right")
    table.add_column("Status")

    count = 0
    for offset, record, status in rows:
        style = "green" if status is RecordStatus.ACTIVE else "red"
        table.add_row(str(offset), str(record.id), escape(record.name),
                      f"{record.cgpa:.2f}", f"[{style}]{status.value}[/{style}]")
        count += 1

    return _titled("All Records in File", table, f"Total records in file: {count}")


def _titled(title: str, table: Table, footer: str) -> Group:
    # Title and footer get their own lines so a narrow table never wraps them
    return Group(f"[bold]{title}[/bold]", table, footer)


class RecordShell:
    """
    Menu-driven front end for a PrimaryIndex.

    Each action prints its outcome and never raises for store errors, so
    the loop keeps going after a failed operation.
    """

    MENU = (
        "Add Record",
        "Search Record (using Index)",
        "Delete Record",
        "Display Index Table",
        "Display All Records (Debug)",
        "Exit",
    )
    EXIT_CHOICE = len(MENU)

    def __init__(self, index: PrimaryIndex, console: Console | None = None):
        self.index = index
        self.console = console or Console()

    def add_record(self, record_id: int, name: str, cgpa: float) -> bool:
        try:
            offset = self.index.add(record_id, name, cgpa)
        except (DbException, ValueError, TypeError) as e:
            self._error(str(e))
            return False

        self._success(f"Record added at offset {offset}.")
        self.console.print(f"[dim]Index now has {len(self.index)} records.[/dim]")
        return True

    def search_record(self, record_id: int) -> StudentRecord | None:
        try:
            record = self.index.search(record_id)
        except DbException as e:
            self._error(str(e))
            return None

        self._success("Record Retrieved:")
        self.console.print(f"ID: {record.id}")
        self.console.print(f"Name: {escape(record.name)}")
        self.console.print(f"CGPA: {record.cgpa:.2f}")
        return record

    def delete_record(self, record_id: int) -> bool:
        try:
            self.index.delete(record_id)
        except DbException as e:
            self._error(str(e))
            return False

        self._success(f"Record with ID {record_id} deleted.")
        return True

    def display_index(self) -> None:
        self.console.print(render_index_table(self.index.list_index()))

    def display_all_records(self) -> None:
        if not self.index.store.file_path.exists():
            self._error("No data file found.")
            return
        try:
            with closing(self.index.list_all_records()) as rows:
                table = render_records_table(rows)
        except DbException as e:
            self._error(str(e))
            return
        self.console.print(table)

    def run(self) -> None:
        """Prompt for menu choices until Exit or end of input."""
        try:
            while self.handle_choice(self._ask_choice()):
                pass
        except (EOFError, KeyboardInterrupt):
            self.console.print()

    def handle_choice(self, choice: int) -> bool:
        """Dispatch one menu choice. Returns False when the user exits."""
        if choice == 1:
            record_id = IntPrompt.ask("Enter Student ID", console=self.console)
            name = Prompt.ask("Enter Name", console=self.console)
            cgpa = FloatPrompt.ask("Enter CGPA", console=self.console)
            self.add_record(record_id, name, cgpa)
        elif choice == 2:
            self.search_record(IntPrompt.ask("Enter ID to search", console=self.console))
        elif choice == 3:
            self.delete_record(IntPrompt.ask("Enter ID to delete", console=self.console))
        elif choice == 4:
            self.display_index()
        elif choice == 5:
            self.display_all_records()
        elif choice == self.EXIT_CHOICE:
            return False
        else:
            self._error("Invalid choice.")
        return True

    def _ask_choice(self) -> int:
        self.console.print("\n[bold blue]=== Indexing Demo Menu ===[/bold blue]")
        for number, label in enumerate(self.MENU, start=1):
            self.console.print(f"{number}. {label}")
        return IntPrompt.ask("Enter choice", console=self.console)

    def _success(self, message: str) -> None:
        self.console.print(f"[bold green]✓[/bold green] {escape(message)}")

    def _error(self, message: str) -> None:
        self.console.print(f"[bold red]✗[/bold red] {escape(message)}")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="recstore", description="Indexed fixed-size student record file")
    parser.add_argument("--data-file", default=RecordStore.DEFAULT_FILE,
                        help="record file to open (default: %(default)s)")
    parser.add_argument("--log-file", default=None,
                        help="also write log records to this file")
    parser.add_argument("--verbose", action="store_true",
                        help="show debug log output")
    parser.add_argument("--no-fsync", action="store_true",
                        help="do not fsync after each write")
    return parser


def main(argv: Sequence[str] | None = None, console: Console | None = None) -> int:
    """Main entry point of the application."""
    args = build_parser().parse_args(argv)
    console = console or Console()

    logger = logging.getLogger(ROOT_LOGGER)
    previous_level = logger.level
    handler = configure_console_log(args.verbose, console=console)
    if args.log_file:
        enable_file_log(args.log_file)

    try:
        index = PrimaryIndex(RecordStore(args.data_file, fsync=not args.no_fsync))
        try:
            count = index.rebuild()
        except DbException as e:
            console.print(f"[bold red]✗[/bold red] Cannot load {escape(args.data_file)}: {escape(str(e))}")
            return 1

        console.print(f"[bold cyan]ℹ[/bold cyan] Index loaded. {count} records found.")
        RecordShell(index, console).run()
        return 0
    finally:
        logger.removeHandler(handler)
        disable_file_log()
        logger.setLevel(previous_level)


if __name__ == "__main__":
    sys.exit(main())

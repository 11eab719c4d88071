"""Interactive SQL console for learners."""

from __future__ import annotations

import argparse
import logging
from dataclasses import dataclass, field
from typing import Callable

from sqlsandbox.core.config import load_settings
from sqlsandbox.core.database import ensure_database_directory
from sqlsandbox.core.errors import SandboxError
from sqlsandbox.core.models import CellValue, QueryResult
from sqlsandbox.core.service import QueryService, build_query_service
from sqlsandbox.core.statements import StatementKind
from sqlsandbox.integrations.sample_queries import CONSOLE_EXAMPLES
from sqlsandbox.integrations.sample_schema import bootstrap_database

_exit_commands = {"quit", "exit"}
_COLUMN_WIDTH = 15
_RULE_WIDTH = 80


@dataclass
class SqlConsole:
    """Line-oriented ``SQL>`` prompt built on top of the query service."""

    service: QueryService
    input_func: Callable[[str], str] = field(default=input)
    output_func: Callable[[str], None] = field(default=print)
    session_id: str = "console"

    def start(self) -> None:
        """Run the read-eval-print loop until the learner quits."""

        self.output_func("Welcome to SQL Learning Console!")
        self.output_func("Type 'help' for examples, 'quit' to exit")
        self.output_func("-" * 50)

        while True:
            try:
                raw = self.input_func("SQL> ")
            except EOFError:
                self.output_func("\nHappy learning! Goodbye!")
                break

            command = raw.strip()
            if not command:
                continue
            if command.lower() in _exit_commands:
                self.output_func("Happy learning! Goodbye!")
                break
            if command.lower() == "help":
                self.show_examples()
                continue

            self.run_statement(command)

    def run_statement(self, sql: str) -> QueryResult | None:
        try:
            result = self.service.execute(sql, session_id=self.session_id)
        except SandboxError as exc:
            self.output_func(f"SQL Error: {exc}")
            return None
        self.render(result)
        return result

    def render(self, result: QueryResult) -> None:
        if result.statement_kind is StatementKind.MUTATION:
            self.output_func(f"Query executed successfully! Rows affected: {result.total_rows}")
            return

        self.output_func("=" * _RULE_WIDTH)
        self.output_func(_format_line(result.columns))
        self.output_func("-" * _RULE_WIDTH)
        for row in result.rows:
            self.output_func(_format_line(row))
        self.output_func("=" * _RULE_WIDTH)
        self.output_func(f"{result.total_rows} row(s) in {result.execution_time_ms} ms")

    def show_examples(self) -> None:
        self.output_func("SQL Examples to Try:")
        self.output_func("=" * 50)
        for index, (heading, lines) in enumerate(CONSOLE_EXAMPLES, start=1):
            self.output_func(f"{index}. {heading}:")
            for line in lines:
                self.output_func(f"   {line}")
        self.output_func("=" * 50)


def _format_cell(value: CellValue) -> str:
    if value is None:
        return "NULL"
    return str(value)


def _format_line(values: tuple[CellValue, ...] | tuple[str, ...]) -> str:
    return "".join(f"{_format_cell(value):<{_COLUMN_WIDTH}}" for value in values).rstrip()


def main() -> None:
    parser = argparse.ArgumentParser(description="Interactive SQL console for the sandbox")
    parser.add_argument("--config", default="configs/dev.yaml", help="Path to the YAML config file")
    parser.add_argument(
        "--no-seed",
        action="store_true",
        help="Skip recreating the sample tables before starting",
    )
    args = parser.parse_args()

    logging.basicConfig(level=logging.WARNING, format="%(levelname)s %(name)s - %(message)s")
    settings = load_settings(args.config)
    ensure_database_directory(settings.database)
    service = build_query_service(settings)
    if settings.database.seed_on_startup and not args.no_seed:
        bootstrap_database(service.engine)

    SqlConsole(service=service).start()


if __name__ == "__main__":
    main()

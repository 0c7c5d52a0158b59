"""Database schema update (database compare)."""

import logging
import re
import sqlite3
from dataclasses import dataclass, field, replace
from pathlib import Path
from typing import Any

from typo3_console.commands.base import BootingCommand
from typo3_console.console import ConsoleOutput
from typo3_console.core.paths import ProjectPaths
from typo3_console.exceptions import DatabaseError, InvalidValueError

logger = logging.getLogger(__name__)

SCHEMA_FILENAME = "ext_tables.sql"

# Update types accepted by --schema-update-types, "safe" and "*" select all
# non-destructive changes
UPDATE_TYPES = ("table.add", "field.add")
UPDATE_TYPE_ALIASES = {"safe": UPDATE_TYPES, "*": UPDATE_TYPES, "*.add": UPDATE_TYPES}

_CREATE_TABLE = re.compile(
    r"CREATE\s+TABLE\s+(?:IF\s+NOT\s+EXISTS\s+)?[`\"]?(\w+)[`\"]?\s*\((.*)\)",
    re.IGNORECASE | re.DOTALL,
)
_NON_COLUMN_DEFINITIONS = ("PRIMARY", "KEY", "UNIQUE", "INDEX", "CONSTRAINT", "FOREIGN", "CHECK")


@dataclass(frozen=True)
class TableDefinition:
    name: str
    columns: dict[str, str]  # column name -> full column definition
    statement: str
    # Columns added by later CREATE TABLE statements for the same table
    extra_columns: dict[str, str] = field(default_factory=dict)


@dataclass(frozen=True)
class SchemaChange:
    update_type: str
    statement: str


def resolve_update_types(update_types: list[str]) -> set[str]:
    """Expand aliases and validate the requested update types."""
    resolved: set[str] = set()
    for update_type in update_types:
        if update_type in UPDATE_TYPE_ALIASES:
            resolved.update(UPDATE_TYPE_ALIASES[update_type])
        elif update_type in UPDATE_TYPES:
            resolved.add(update_type)
        else:
            known = ", ".join([*UPDATE_TYPE_ALIASES, *UPDATE_TYPES])
            raise InvalidValueError(
                f'Schema update type "{update_type}" is invalid (known: {known})'
            )
    return resolved


def _split_definitions(body: str) -> list[str]:
    """Split a CREATE TABLE body on commas outside parentheses."""
    definitions = []
    depth = 0
    current = []
    for char in body:
        if char == "(":
            depth += 1
        elif char == ")":
            depth -= 1
        if char == "," and depth == 0:
            definitions.append("".join(current).strip())
            current = []
        else:
            current.append(char)
    definitions.append("".join(current).strip())
    return [definition for definition in definitions if definition]


def parse_schema(sql: str) -> list[TableDefinition]:
    """Parse the CREATE TABLE statements of a schema file."""
    tables = []
    for statement in sql.split(";"):
        statement = "\n".join(
            line for line in statement.splitlines() if not line.strip().startswith("--")
        ).strip()
        match = _CREATE_TABLE.match(statement)
        if not match:
            continue

        columns = {}
        for definition in _split_definitions(match.group(2)):
            first_word = definition.split()[0].strip('`"')
            if first_word.upper() in _NON_COLUMN_DEFINITIONS:
                continue
            columns[first_word] = definition
        tables.append(TableDefinition(match.group(1), columns, statement))
    return tables


def collect_schema_files(extensions_path: Path) -> list[Path]:
    if not extensions_path.is_dir():
        return []
    return sorted(extensions_path.glob(f"*/{SCHEMA_FILENAME}"))


def merge_tables(tables: list[TableDefinition]) -> list[TableDefinition]:
    """Merge definitions of the same table, in order of first appearance.

    The first CREATE TABLE statement creates the table; columns only found in
    later statements become extra columns.
    """
    merged: dict[str, TableDefinition] = {}
    for table in tables:
        if table.name not in merged:
            merged[table.name] = table
            continue
        first = merged[table.name]
        extra = dict(first.extra_columns)
        for column, definition in table.columns.items():
            if column not in first.columns and column not in extra:
                extra[column] = definition
        merged[table.name] = replace(first, extra_columns=extra)
    return list(merged.values())


def compare_schema(
    connection: sqlite3.Connection,
    tables: list[TableDefinition],
    update_types: set[str] | None = None,
) -> list[SchemaChange]:
    """List the changes of the given update types needed for the given tables.

    Fields of a missing table are only listed when the table itself is added.
    """
    if update_types is None:
        update_types = set(UPDATE_TYPES)

    changes = []
    for table in merge_tables(tables):
        existing = {
            row[1] for row in connection.execute(f'PRAGMA table_info("{table.name}")')
        }
        if not existing:
            if "table.add" not in update_types:
                continue
            changes.append(SchemaChange("table.add", table.statement))
            existing = set(table.columns)
        if "field.add" not in update_types:
            continue
        for column, definition in {**table.columns, **table.extra_columns}.items():
            if column not in existing:
                changes.append(
                    SchemaChange(
                        "field.add", f'ALTER TABLE "{table.name}" ADD COLUMN {definition}'
                    )
                )
    return changes


class DatabaseUpdateSchemaCommand(BootingCommand):
    name = "database:updateschema"
    description = "Update database schema (TYPO3 Database Compare)"

    def execute(
        self,
        io: ConsoleOutput,
        paths: ProjectPaths,
        schema_update_types: list[str] | None = None,
        dry_run: bool = False,
        **options: Any,
    ) -> int:
        """Compare the extension schema files with the database and apply additions.

        Only additive changes are supported, so every update type is safe.

        Raises:
            DatabaseError: If reading the schema or applying a change fails
        """
        update_types = resolve_update_types(schema_update_types or ["safe"])

        tables: list[TableDefinition] = []
        for schema_file in collect_schema_files(self.boot_service.paths.extensions):
            logger.debug(f"Reading schema from {schema_file}")
            tables.extend(parse_schema(schema_file.read_text(encoding="utf-8")))

        connection = self.boot_service.connect()
        try:
            try:
                changes = compare_schema(connection, tables, update_types)
            except sqlite3.Error as e:
                raise DatabaseError(f"Could not read the database schema: {e}")
            if not changes:
                io.output_line("<info>No schema updates were performed for update types:</info>")
                io.output_line("  %s", [", ".join(sorted(update_types))])
                return 0

            if dry_run:
                io.output_line("<info>The following schema updates would be performed:</info>")
            else:
                self._apply(io, connection, changes)
                io.output_line()
                io.output_line("<info>The following schema updates were performed:</info>")
        finally:
            connection.close()

        io.output_table(
            [[change.update_type, change.statement.splitlines()[0]] for change in changes],
            ["Type", "Statement"],
        )
        return 0

    def _apply(
        self, io: ConsoleOutput, connection: sqlite3.Connection, changes: list[SchemaChange]
    ) -> None:
        io.progress_start(len(changes))
        try:
            for change in changes:
                logger.info(f"Schema update ({change.update_type}): {change.statement}")
                try:
                    connection.execute(change.statement)
                except sqlite3.Error as e:
                    raise DatabaseError(
                        f"Schema update failed ({change.statement.splitlines()[0]}): {e}"
                    )
                io.progress_advance()
            connection.commit()
        finally:
            io.progress_finish()

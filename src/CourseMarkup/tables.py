from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field
from functools import lru_cache
from pathlib import Path
from typing import Any, Sequence

import yaml

from .model import TableCell, TableRow

logger = logging.getLogger(__name__)

_LEADING_NUMBER_RE = re.compile(r"^\d+")


@dataclass(frozen=True)
class TableContext:
    """A known source document, recognised by a marker string in its text."""

    name: str
    marker: str
    split_keys: tuple[str, ...] = ()
    spanning_keys: tuple[str, ...] = ()

    def applies_to(self, document_text: str) -> bool:
        return bool(self.marker) and self.marker in document_text


@dataclass(frozen=True)
class TableSchemaRegistry:
    headers: dict[str, tuple[str, ...]] = field(default_factory=dict)
    literal_rows: dict[str, tuple[str, ...]] = field(default_factory=dict)
    row_keys: tuple[str, ...] = ()
    contexts: tuple[TableContext, ...] = ()
    stage_widths: tuple[int, ...] = (10, 40, 20)
    fallback_colspan: int = 5

    @classmethod
    def from_yaml(cls, text: str) -> "TableSchemaRegistry":
        """Build a registry from YAML text; see table_schemas.yaml for the layout."""
        data = yaml.safe_load(text) or {}
        if not isinstance(data, dict):
            raise ValueError("Table schema root must be a mapping.")
        return cls.from_mapping(data)

    @classmethod
    def from_mapping(cls, data: dict[str, Any]) -> "TableSchemaRegistry":
        headers = {}
        for entry in _as_list(data.get("headers"), "headers"):
            signature = _require(entry, "signature", "headers")
            headers[str(signature)] = tuple(str(c) for c in _as_list(entry.get("columns"), "headers.columns"))

        literal_rows = {}
        for entry in _as_list(data.get("literal_rows"), "literal_rows"):
            line = _require(entry, "line", "literal_rows")
            literal_rows[str(line)] = tuple(str(c) for c in _as_list(entry.get("cells"), "literal_rows.cells"))

        contexts = []
        for entry in _as_list(data.get("contexts"), "contexts"):
            contexts.append(
                TableContext(
                    name=str(_require(entry, "name", "contexts")),
                    marker=str(_require(entry, "marker", "contexts")),
                    split_keys=tuple(str(k) for k in _as_list(entry.get("split_keys"), "contexts.split_keys")),
                    spanning_keys=tuple(str(k) for k in _as_list(entry.get("spanning_keys"), "contexts.spanning_keys")),
                )
            )

        stage_rows = data.get("stage_rows") or {}
        if not isinstance(stage_rows, dict):
            raise ValueError("'stage_rows' must be a mapping.")
        widths = tuple(int(w) for w in _as_list(stage_rows.get("widths", [10, 40, 20]), "stage_rows.widths"))

        return cls(
            headers=headers,
            literal_rows=literal_rows,
            row_keys=tuple(str(k) for k in _as_list(data.get("row_keys"), "row_keys")),
            contexts=tuple(contexts),
            stage_widths=widths,
            fallback_colspan=int(data.get("fallback_colspan", 5)),
        )

    def header_cells(self, line: str) -> list[str]:
        columns = self.headers.get(line)
        if columns:
            return list(columns)
        return [line]

    def active_context(self, document_text: str) -> TableContext | None:
        for context in self.contexts:
            if context.applies_to(document_text):
                return context
        return None

    def split_row(self, line: str, document_text: str = "") -> TableRow:
        """Split one data line into cells using the registered row rules."""
        literal = self.literal_rows.get(line)
        if literal:
            first, *rest = literal
            return TableRow(cells=[TableCell(first, key=True)] + [TableCell(c) for c in rest])

        for key in self.row_keys:
            if line.startswith(key):
                value = line[len(key):].strip()
                return self._keyed_row(key, value, self.active_context(document_text))

        if _LEADING_NUMBER_RE.match(line):
            return self._stage_row(line)

        logger.debug("Unrecognised table row, rendering as a single cell: %r", line)
        return TableRow(cells=[TableCell(line, colspan=self.fallback_colspan)])

    def _keyed_row(self, key: str, value: str, context: TableContext | None) -> TableRow:
        key_cell = TableCell(key, key=True)
        if context is not None and key in context.split_keys:
            parts = value.split()
            if len(parts) > 1:
                return TableRow(cells=[key_cell, TableCell(parts[0]), TableCell(" ".join(parts[1:]))])
            return TableRow(cells=[key_cell, TableCell(value, colspan=2)])
        if context is not None and key in context.spanning_keys:
            return TableRow(cells=[key_cell, TableCell(value, colspan=2)])
        return TableRow(cells=[key_cell, TableCell(value)])

    def _stage_row(self, line: str) -> TableRow:
        number = _LEADING_NUMBER_RE.match(line).group(0)
        rest = line[len(number):]
        cells = [TableCell(number, key=True)]
        for width in self.stage_widths:
            cells.append(TableCell(rest[:width]))
            rest = rest[width:]
        cells.append(TableCell(rest))
        return TableRow(cells=cells)


def load_registry(path: str | Path) -> TableSchemaRegistry:
    return TableSchemaRegistry.from_yaml(Path(path).read_text(encoding="utf-8"))


@lru_cache(maxsize=1)
def default_registry() -> TableSchemaRegistry:
    """Registry for the tables that appear in the institute's course pages."""
    return load_registry(Path(__file__).with_name("table_schemas.yaml"))


def _as_list(value, name: str) -> Sequence:
    if value is None:
        return []
    if not isinstance(value, (list, tuple)):
        raise ValueError(f"'{name}' must be a list.")
    return value


def _require(entry, key: str, section: str):
    if not isinstance(entry, dict) or key not in entry:
        raise ValueError(f"Every '{section}' entry needs a '{key}' field.")
    return entry[key]

"""
Parse the model lifecycle document into structured records.

The document is markdown: ``##``/``###`` headings name a model category and
pipe tables under them list one model/version per row. Parsing is a single
forward fold over the lines with a two-flag state (current section, inside a
table). Columns are mapped by position, not by header text, because header
wording changes between document revisions:

    | Model | Version | Lifecycle stage | Deprecation | Retirement | Replacement |

Malformed rows are skipped. Parsing never raises.
"""

import logging
import re
from dataclasses import dataclass, replace
from typing import Iterable, Optional

from lifecycle.record import KNOWN_SECTIONS, LifecycleRecord, model_type_for_section

logger = logging.getLogger(__name__)

HEADING_RE = re.compile(r"^(#{1,6})\s+(.*?)\s*#*\s*$")
SEPARATOR_CELL_RE = re.compile(r"^:?-+:?$")
LINE_BREAK_RE = re.compile(r"\s*<br\s*/?>\s*", re.IGNORECASE)

HEADER_FIRST_CELLS = ("model", "model name")
EXPECTED_COLUMNS = 6
MIN_COLUMNS = 3


@dataclass(frozen=True)
class ParserState:
    """Scan state threaded through the fold."""

    current_section: Optional[str] = None
    in_table: bool = False
    skip_next: bool = False


def split_cells(line: str) -> list[str]:
    """Split a pipe row into trimmed cells with code/bold markup removed.

    Only the empty boundary cells produced by the leading and trailing pipe
    are discarded; interior empty cells keep their position.
    """
    parts = line.strip().split("|")
    if parts and not parts[0].strip():
        parts = parts[1:]
    if parts and not parts[-1].strip():
        parts = parts[:-1]
    return [p.replace("`", "").replace("**", "").strip() for p in parts]


def is_separator_row(cells: list[str]) -> bool:
    return bool(cells) and all(SEPARATOR_CELL_RE.match(c.replace(" ", "")) for c in cells)


def _is_table_header(cells: list[str]) -> bool:
    first = next((c for c in cells if c), "")
    return first.lower() in HEADER_FIRST_CELLS


def _row_to_record(cells: list[str], section: str) -> Optional[LifecycleRecord]:
    if len(cells) < MIN_COLUMNS or not cells[0]:
        return None

    def cell(i):
        return cells[i] if i < len(cells) else ""

    replacement = LINE_BREAK_RE.sub("; ", cell(5)).strip("; ").strip()
    return LifecycleRecord(
        model_type=model_type_for_section(section),
        model_name=cell(0),
        version=cell(1),
        lifecycle_stage=cell(2),
        deprecation_date=cell(3),
        retirement_date=cell(4),
        replacement_model=replacement,
        section=section,
    )


def step(state: ParserState, line: str) -> tuple[ParserState, Optional[LifecycleRecord]]:
    """Advance the parser by one line, returning the new state and any record."""
    if state.skip_next:
        return replace(state, skip_next=False), None

    stripped = line.strip()

    heading = HEADING_RE.match(stripped)
    if heading:
        level, text = len(heading.group(1)), heading.group(2)
        if level in (2, 3) and text in KNOWN_SECTIONS:
            return ParserState(current_section=text), None
        return replace(state, in_table=False), None

    if not stripped:
        return replace(state, in_table=False), None

    if not stripped.startswith("|"):
        return state, None

    cells = split_cells(stripped)

    if state.current_section and _is_table_header(cells):
        if len(cells) != EXPECTED_COLUMNS:
            logger.warning(
                "Lifecycle table under '%s' has %d columns (expected %d); "
                "columns are mapped by position",
                state.current_section, len(cells), EXPECTED_COLUMNS,
            )
        return replace(state, in_table=True, skip_next=True), None

    if state.in_table and state.current_section and not is_separator_row(cells):
        return state, _row_to_record(cells, state.current_section)

    return state, None


class LifecycleTableParser:
    """Extract lifecycle records from a raw markdown document."""

    def parse(self, raw_text: str) -> list[LifecycleRecord]:
        return self.parse_lines((raw_text or "").splitlines())

    def parse_lines(self, lines: Iterable[str]) -> list[LifecycleRecord]:
        state = ParserState()
        records: list[LifecycleRecord] = []
        for line in lines:
            state, record = step(state, line)
            if record is not None:
                records.append(record)
        logger.debug("Parsed %d lifecycle record(s)", len(records))
        return records

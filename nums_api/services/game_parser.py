"""Parser for tab-delimited lottery draw records.

One line holds 19 tab-separated columns::

    round  date(YYYY.MM.DD)  (winners  amount) x 5  number1..number6  bonus

Winner counts may carry thousands separators (``1,518``) and prize amounts
additionally end with the currency marker (``50,000원``).
"""

from __future__ import annotations

import re
from dataclasses import asdict, dataclass, fields
from datetime import date
from typing import Dict, List

from nums_api.core.errors import MalformedRecordError

EXPECTED_COLUMNS = 19
CURRENCY_MARKER = "원"
THOUSANDS_SEPARATOR = ","
DIGITS = re.compile(r"[0-9]+")


@dataclass(frozen=True)
class DrawRecord:
    """Typed form of one parsed draw line."""

    round: int
    draw_date: date
    first_prize_winners: int
    first_prize_amount: int
    second_prize_winners: int
    second_prize_amount: int
    third_prize_winners: int
    third_prize_amount: int
    fourth_prize_winners: int
    fourth_prize_amount: int
    fifth_prize_winners: int
    fifth_prize_amount: int
    number1: int
    number2: int
    number3: int
    number4: int
    number5: int
    number6: int
    bonus_number: int

    def as_dict(self) -> Dict[str, object]:
        return asdict(self)


FIELD_NAMES = tuple(field.name for field in fields(DrawRecord))


def _parse_int(raw: str, column: str) -> int:
    if not DIGITS.fullmatch(raw):
        raise MalformedRecordError(f"Invalid integer for {column}: {raw!r}")
    return int(raw)


def parse_number(raw: str, column: str = "value") -> int:
    """``"1,258,677"`` -> ``1258677``."""

    return _parse_int(raw.replace(THOUSANDS_SEPARATOR, ""), column)


def parse_amount(raw: str, column: str = "amount") -> int:
    """``"50,000원"`` -> ``50000``."""

    cleaned = raw.strip().removesuffix(CURRENCY_MARKER)
    return parse_number(cleaned, column)


def parse_draw_date(raw: str) -> date:
    """Parse ``YYYY.MM.DD`` into a calendar date."""

    parts = raw.split(".")
    if len(parts) != 3:
        raise MalformedRecordError(f"Invalid draw date: {raw!r}")
    year, month, day = (_parse_int(part, "draw_date") for part in parts)
    try:
        return date(year, month, day)
    except ValueError as exc:
        raise MalformedRecordError(f"Invalid draw date: {raw!r}") from exc


def parse_game_row(row: str, line_number: int | None = None) -> DrawRecord:
    """Parse one tab-separated line into a :class:`DrawRecord`."""

    columns = [column.strip() for column in row.split("\t")]
    if len(columns) != EXPECTED_COLUMNS:
        raise MalformedRecordError(
            f"Invalid data format. Expected {EXPECTED_COLUMNS} columns, "
            f"got {len(columns)}",
            line_number=line_number,
            expected=EXPECTED_COLUMNS,
            actual=len(columns),
        )

    try:
        values: List[object] = [
            _parse_int(columns[0], "round"),
            parse_draw_date(columns[1]),
        ]
        for index in range(2, 12, 2):
            winners_field, amount_field = FIELD_NAMES[index], FIELD_NAMES[index + 1]
            values.append(parse_number(columns[index], winners_field))
            values.append(parse_amount(columns[index + 1], amount_field))
        values.extend(
            _parse_int(columns[index], FIELD_NAMES[index])
            for index in range(12, EXPECTED_COLUMNS)
        )
    except MalformedRecordError as exc:
        if line_number is None:
            raise
        raise MalformedRecordError(exc.message, line_number=line_number) from exc

    return DrawRecord(*values)  # type: ignore[arg-type]


def parse_game_data(data: str) -> List[DrawRecord]:
    """Parse a newline-separated batch; the first bad line aborts it.

    Blank lines are skipped but still count towards reported line numbers.
    """

    records: List[DrawRecord] = []
    for line_number, line in enumerate(data.splitlines(), start=1):
        if not line.strip():
            continue
        records.append(parse_game_row(line, line_number=line_number))
    return records


def format_game_row(record: DrawRecord) -> str:
    """Render a record back into the tab-separated upload format."""

    columns: List[str] = [
        str(record.round),
        record.draw_date.strftime("%Y.%m.%d"),
    ]
    for tier in ("first", "second", "third", "fourth", "fifth"):
        winners = getattr(record, f"{tier}_prize_winners")
        amount = getattr(record, f"{tier}_prize_amount")
        columns.append(f"{winners:,}")
        columns.append(f"{amount:,}{CURRENCY_MARKER}")
    columns.extend(str(getattr(record, name)) for name in FIELD_NAMES[12:])
    return "\t".join(columns)


__all__ = [
    "DrawRecord",
    "EXPECTED_COLUMNS",
    "parse_amount",
    "parse_number",
    "parse_draw_date",
    "parse_game_row",
    "parse_game_data",
    "format_game_row",
]

"""
Object Serializer - renders travel records as object literals.

Output follows the layout of the generated templates: array elements sit
at 4 spaces, their fields at 6, nested object fields at 8. Serialized text
starts at the element's opening brace; callers that put an element on its
own line prepend ELEMENT_INDENT (see format_element).

Transport tables nest one level deeper: their columns and rows are arrays
whose items sit at ROW_INDENT with fields 2 spaces further in.

The same record always renders to the same text.
"""

import re
from typing import Any, List, Optional, Sequence, Tuple

from backend.editor.records import (
    FlightRecord,
    HotelRecord,
    TransportColumn,
    TransportRow,
    TransportTable,
    TravelRecord,
)

ELEMENT_INDENT = "    "
INDENT_STEP = "  "
# Items of an array nested in an element (transport columns and rows)
ROW_INDENT = ELEMENT_INDENT + INDENT_STEP * 2

_BARE_KEY = re.compile(r'[A-Za-z_$][\w$]*\Z')


class _Array(list):
    """Marks a value that renders as an array of objects, each a list of pairs."""


def escape_string(value: str) -> str:
    """
    Escape a value for a double-quoted literal: quotes and newlines.

    Backslashes and carriage returns pass through as they are, so a value
    ending in a backslash escapes its own closing quote and a bare CR
    splits the literal. The record models reject both.
    """
    return value.replace('"', '\\"').replace('\n', '\\n')


def _literal(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (int, float)):
        return str(value)
    return f'"{escape_string(str(value))}"'


def _key(name: str) -> str:
    return name if _BARE_KEY.match(name) else f'"{escape_string(name)}"'


def _render_array(items: List[List[Tuple[str, Any]]], indent: str) -> str:
    if not items:
        return "[]"
    item_indent = indent + INDENT_STEP
    rendered = [item_indent + _render_object(pairs, item_indent) for pairs in items]
    return "[\n" + ",\n".join(rendered) + "\n" + indent + "]"


def _render_object(pairs: List[Tuple[str, Any]], indent: str) -> str:
    """
    Render (key, value) pairs as an object literal whose closing brace sits
    at indent. Values that are lists of pairs render as nested objects,
    _Array values as arrays of such objects.
    """
    inner = indent + INDENT_STEP
    lines = []
    for key, value in pairs:
        if isinstance(value, _Array):
            rendered = _render_array(value, inner)
        elif isinstance(value, list):
            rendered = _render_object(value, inner)
        else:
            rendered = _literal(value)
        lines.append(f"{inner}{_key(key)}: {rendered}")
    return "{\n" + ",\n".join(lines) + "\n" + indent + "}"


def _flight_pairs(flight: FlightRecord) -> List[Tuple[str, Any]]:
    return [
        ("date", flight.date),
        ("fromAirport", flight.from_airport),
        ("toAirport", flight.to_airport),
        ("travelers", [
            ("adults", flight.travelers.adults),
            ("children", flight.travelers.children),
            ("infants", flight.travelers.infants),
        ]),
        ("luggage", flight.luggage),
    ]


def _hotel_pairs(hotel: HotelRecord) -> List[Tuple[str, Any]]:
    room = hotel.room_description
    room_pairs: List[Tuple[str, Any]] = [
        ("includesAll", room.includes_all),
        ("bedType", room.bed_type),
    ]
    if room.room_type:
        room_pairs.append(("roomType", room.room_type))

    pairs: List[Tuple[str, Any]] = [
        ("city", hotel.city),
        ("nights", hotel.nights),
    ]
    if hotel.city_badge:
        pairs.append(("cityBadge", hotel.city_badge))
    pairs.append(("hotelName", hotel.hotel_name))
    pairs.append(("hasDetailsLink", bool(hotel.has_details_link)))
    if hotel.details_link:
        pairs.append(("detailsLink", hotel.details_link))
    pairs.extend([
        ("roomDescription", room_pairs),
        ("checkInDate", hotel.check_in_date),
        ("checkOutDate", hotel.check_out_date),
        ("dayInfo", [
            ("checkInDay", hotel.day_info.check_in_day),
            ("checkOutDay", hotel.day_info.check_out_day),
        ]),
    ])
    return pairs


def _row_pairs(row: TransportRow, columns: Sequence[TransportColumn]) -> List[Tuple[str, Any]]:
    """
    Cell values in column order, missing cells as "", then the note.
    Without columns every non-empty key of the row is written.
    """
    values = row.model_dump(by_alias=True, exclude_none=True)
    note = values.get("note")
    if columns:
        keys = [column.key for column in columns]
        pairs = [(key, values.get(key) or "") for key in keys]
    else:
        keys = [key for key, value in values.items() if key != "note" and value != ""]
        pairs = [(key, values[key]) for key in keys]
    if note and "note" not in keys:
        pairs.append(("note", note))
    return pairs


def _table_pairs(table: TransportTable) -> List[Tuple[str, Any]]:
    return [
        ("id", table.id),
        ("title", table.title),
        ("backgroundColor", table.background_color),
        ("columns", _Array([("key", c.key), ("label", c.label)] for c in table.columns)),
        ("rows", _Array(_row_pairs(row, table.columns) for row in table.rows)),
    ]


def serialize_flight(flight: FlightRecord) -> str:
    return _render_object(_flight_pairs(flight), ELEMENT_INDENT)


def serialize_hotel(hotel: HotelRecord) -> str:
    return _render_object(_hotel_pairs(hotel), ELEMENT_INDENT)


def serialize_transport_table(table: TransportTable) -> str:
    return _render_object(_table_pairs(table), ELEMENT_INDENT)


def serialize_transport_row(row: TransportRow, columns: Optional[Sequence[TransportColumn]] = None) -> str:
    """A row as it sits inside a table's rows array."""
    return _render_object(_row_pairs(row, columns or []), ROW_INDENT)


def serialize_record(record: TravelRecord) -> str:
    """Dispatch on record type."""
    if isinstance(record, FlightRecord):
        return serialize_flight(record)
    if isinstance(record, HotelRecord):
        return serialize_hotel(record)
    if isinstance(record, TransportTable):
        return serialize_transport_table(record)
    raise TypeError(f"Cannot serialize {type(record).__name__}")


def format_element(record: TravelRecord) -> str:
    """Serialized record with the leading indentation of an array element."""
    return ELEMENT_INDENT + serialize_record(record)

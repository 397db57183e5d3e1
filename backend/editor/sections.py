"""
Flight and hotel section editing.

Binds the generic splice editor to the two section components the template
generator emits:

    <AirplaneSection flights={[ {...}, ... ]} ... />
    <HotelsSection hotels={[ {...}, ... ]} ... />

Records may be passed as model instances or as plain dicts (camelCase or
snake_case keys); dicts are validated first and raise
pydantic.ValidationError when malformed.
"""

import logging
from dataclasses import dataclass
from typing import Any, Dict, List, Mapping, Optional, Sequence, Type, Union

from pydantic import BaseModel

from backend.editor import splice
from backend.editor.arrays import extract_array_field
from backend.editor.base import EditResult
from backend.editor.locator import find_block
from backend.editor.reader import read_record
from backend.editor.records import FlightRecord, HotelRecord

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SectionKind:
    """Which component holds which array of which record type."""
    name: str
    component: str
    field_name: str
    record_type: Type[BaseModel]

    def coerce(self, record: Union[BaseModel, Mapping[str, Any]]) -> BaseModel:
        if isinstance(record, self.record_type):
            return record
        if isinstance(record, BaseModel):
            record = record.model_dump(by_alias=True)
        return self.record_type.model_validate(record)


FLIGHTS = SectionKind("flights", "AirplaneSection", "flights", FlightRecord)
HOTELS = SectionKind("hotels", "HotelsSection", "hotels", HotelRecord)

SECTION_KINDS: Dict[str, SectionKind] = {FLIGHTS.name: FLIGHTS, HOTELS.name: HOTELS}


def get_section_kind(name: str) -> Optional[SectionKind]:
    return SECTION_KINDS.get(name)


# =============================================================================
# RESULT-RETURNING EDITS (any kind)
# =============================================================================

def edit_update(kind: SectionKind, code: str, section_index: int, element_index: int, record) -> EditResult:
    return splice.edit_update(code, kind.component, kind.field_name, section_index, element_index,
                              kind.coerce(record))


def edit_remove(kind: SectionKind, code: str, section_index: int, element_index: int) -> EditResult:
    return splice.edit_remove(code, kind.component, kind.field_name, section_index, element_index)


def edit_add(kind: SectionKind, code: str, section_index: int, record) -> EditResult:
    return splice.edit_add(code, kind.component, kind.field_name, section_index, kind.coerce(record))


def edit_replace(kind: SectionKind, code: str, section_id: str, records: Sequence) -> EditResult:
    return splice.edit_replace_elements(code, kind.component, kind.field_name, section_id,
                                        [kind.coerce(r) for r in records])


def edit_delete(kind: SectionKind, code: str, section_id: str) -> EditResult:
    return splice.edit_delete_block(code, kind.component, section_id)


def edit_props(kind: SectionKind, code: str, section_id: str, props: Dict[str, Any]) -> EditResult:
    return splice.edit_block_props(code, kind.component, section_id, props)


def list_records(kind: SectionKind, code: str, section_index: int) -> List[BaseModel]:
    """
    Read a section's elements back into records.

    Returns [] when the section or its array is missing. Elements that do
    not parse or validate are skipped with a warning.
    """
    block = find_block(code, kind.component, section_index)
    if block is None:
        return []
    field = extract_array_field(block.block_text, kind.field_name)
    if field is None:
        return []

    records = []
    for i, text in enumerate(field.element_texts):
        try:
            records.append(read_record(text, kind.record_type))
        except ValueError as e:  # ObjectLiteralError, ValidationError
            logger.warning(f"[SECTIONS] Skipping unreadable {kind.field_name}[{i}] in "
                           f"{kind.component} #{section_index}: {e}")
    return records


# =============================================================================
# FLIGHTS
# =============================================================================

def update_flight_in_section(code: str, section_index: int, flight_index: int, flight) -> str:
    return edit_update(FLIGHTS, code, section_index, flight_index, flight).code


def remove_flight_from_section(code: str, section_index: int, flight_index: int) -> str:
    return edit_remove(FLIGHTS, code, section_index, flight_index).code


def add_flight_to_section(code: str, section_index: int, flight) -> str:
    return edit_add(FLIGHTS, code, section_index, flight).code


def list_flights(code: str, section_index: int) -> List[FlightRecord]:
    return list_records(FLIGHTS, code, section_index)


def set_section_flights(code: str, section_id: str, flights: Sequence) -> str:
    return edit_replace(FLIGHTS, code, section_id, flights).code


def delete_airplane_section(code: str, section_id: str) -> str:
    return edit_delete(FLIGHTS, code, section_id).code


# =============================================================================
# HOTELS
# =============================================================================

def update_hotel_in_section(code: str, section_index: int, hotel_index: int, hotel) -> str:
    return edit_update(HOTELS, code, section_index, hotel_index, hotel).code


def remove_hotel_from_section(code: str, section_index: int, hotel_index: int) -> str:
    return edit_remove(HOTELS, code, section_index, hotel_index).code


def add_hotel_to_section(code: str, section_index: int, hotel) -> str:
    return edit_add(HOTELS, code, section_index, hotel).code


def list_hotels(code: str, section_index: int) -> List[HotelRecord]:
    return list_records(HOTELS, code, section_index)


def set_section_hotels(code: str, section_id: str, hotels: Sequence) -> str:
    return edit_replace(HOTELS, code, section_id, hotels).code


def delete_hotels_section(code: str, section_id: str) -> str:
    return edit_delete(HOTELS, code, section_id).code

"""
SECTION EDITOR
==============

Position-preserving structural edits of generated template code.

The template generator emits self-closing section components whose data
lives in an array prop:

    <AirplaneSection
      flights={[
        {
          date: "2024-01-01",
          ...
        }
      ]}
      id="airplane_1712345678901_k3j2h1g0f"
    />

The editor works on the raw text in four layers:

1. LOCATOR     - find the Nth <Component ... /> block (or the one with an id)
2. ARRAYS      - find `field={[ ... ]}` in the block, split its top-level
                 object literals with a brace-depth scan
3. SERIALIZER  - render a flight, hotel or transport table as an object literal
4. SPLICE      - replace / remove / add one element and splice it back

TransportSection tables nest a rows array inside each table; transport.py
edits those rows with the same splice primitives, one level down.

Every edit returns new text; the input string is never modified. Nothing
raises for a missing target: the input comes back unchanged, and the
EditResult variants say why.

USAGE
=====

    from backend.editor import add_flight_to_section, FlightRecord

    code = add_flight_to_section(code, 0, FlightRecord(
        date="2024-02-02",
        from_airport="Cairo (CAI)",
        to_airport="Dubai (DXB)",
        travelers={"adults": 2, "children": 0, "infants": 0},
        luggage="23kg",
    ))

    # Need to know why nothing changed?
    from backend.editor import FLIGHTS, sections
    result = sections.edit_remove(FLIGHTS, code, 0, 5)
    print(result.status)   # EditStatus.INDEX_OUT_OF_RANGE

Author: Section Editor Team
Version: 1.0.0
"""

import logging

logger = logging.getLogger(__name__)

# =============================================================================
# TYPES
# =============================================================================

from .base import (
    EditStatus,
    BlockMatch,
    ArrayField,
    EditResult,
)

from .records import (
    Travelers,
    FlightRecord,
    RoomDescription,
    DayInfo,
    HotelRecord,
    TravelRecord,
    TransportColumn,
    TransportRow,
    TransportTable,
)

# =============================================================================
# LAYERS
# =============================================================================

from .locator import find_blocks, find_block, find_block_by_id, count_blocks
from .arrays import extract_array_field, extract_array_key, split_elements
from .serializer import (
    escape_string,
    serialize_flight,
    serialize_hotel,
    serialize_transport_table,
    serialize_transport_row,
    serialize_record,
    format_element,
)
from .reader import ObjectLiteralError, parse_object_literal, read_record
from .splice import (
    update_element,
    remove_element,
    add_element,
    replace_elements,
    delete_block,
    update_block_props,
)

# =============================================================================
# FLIGHT / HOTEL SURFACE
# =============================================================================

from .sections import (
    SectionKind,
    SECTION_KINDS,
    FLIGHTS,
    HOTELS,
    get_section_kind,
    update_flight_in_section,
    remove_flight_from_section,
    add_flight_to_section,
    list_flights,
    set_section_flights,
    delete_airplane_section,
    update_hotel_in_section,
    remove_hotel_from_section,
    add_hotel_to_section,
    list_hotels,
    set_section_hotels,
    delete_hotels_section,
)


# =============================================================================
# TRANSPORT SURFACE
# =============================================================================

from .transport import (
    TRANSPORT,
    update_transport_row,
    add_transport_row,
    remove_transport_row,
    update_transport_table,
    add_transport_table,
    remove_transport_table,
    list_transport_tables,
    update_transport_section_props,
    delete_transport_section,
)

from .inserter import (
    build_airplane_section,
    build_hotels_section,
    build_transport_section,
    ensure_import,
    insert_airplane_section,
    insert_hotels_section,
    insert_transport_section,
)


# =============================================================================
# EXPORTS
# =============================================================================

__all__ = [
    # Types
    'EditStatus',
    'BlockMatch',
    'ArrayField',
    'EditResult',
    'Travelers',
    'FlightRecord',
    'RoomDescription',
    'DayInfo',
    'HotelRecord',
    'TravelRecord',
    'TransportColumn',
    'TransportRow',
    'TransportTable',

    # Layers
    'find_blocks',
    'find_block',
    'find_block_by_id',
    'count_blocks',
    'extract_array_field',
    'extract_array_key',
    'split_elements',
    'escape_string',
    'serialize_flight',
    'serialize_hotel',
    'serialize_transport_table',
    'serialize_transport_row',
    'serialize_record',
    'format_element',
    'ObjectLiteralError',
    'parse_object_literal',
    'read_record',
    'update_element',
    'remove_element',
    'add_element',
    'replace_elements',
    'delete_block',
    'update_block_props',

    # Sections
    'SectionKind',
    'SECTION_KINDS',
    'FLIGHTS',
    'HOTELS',
    'get_section_kind',
    'update_flight_in_section',
    'remove_flight_from_section',
    'add_flight_to_section',
    'list_flights',
    'set_section_flights',
    'delete_airplane_section',
    'update_hotel_in_section',
    'remove_hotel_from_section',
    'add_hotel_to_section',
    'list_hotels',
    'set_section_hotels',
    'delete_hotels_section',

    # Transport
    'TRANSPORT',
    'update_transport_row',
    'add_transport_row',
    'remove_transport_row',
    'update_transport_table',
    'add_transport_table',
    'remove_transport_table',
    'list_transport_tables',
    'update_transport_section_props',
    'delete_transport_section',

    # Inserter
    'build_airplane_section',
    'build_hotels_section',
    'build_transport_section',
    'ensure_import',
    'insert_airplane_section',
    'insert_hotels_section',
    'insert_transport_section',
]

logger.debug(f"[EDITOR] Loaded {len(SECTION_KINDS)} section kinds: {list(SECTION_KINDS)}")

"""
Element Reader Tests
====================
Parsing object-literal elements back into records.
"""

import pytest
from pydantic import ValidationError

from backend.editor.reader import ObjectLiteralError, parse_object_literal, read_record
from backend.editor.records import FlightRecord, HotelRecord
from conftest import FLIGHT_A_TEXT, HOTEL_B_TEXT


class TestParseObjectLiteral:

    def test_parses_generated_flight(self, flight_a):
        assert parse_object_literal(FLIGHT_A_TEXT) == flight_a

    def test_quoted_keys_trailing_commas_and_comments(self):
        text = """{
          // leading comment
          'city': "Makkah",
          "nights": 4, /* inline */
          tags: ["a", 'b',],
        }"""
        assert parse_object_literal(text) == {"city": "Makkah", "nights": 4, "tags": ["a", "b"]}

    def test_literals(self):
        result = parse_object_literal("{ a: true, b: false, c: null, d: undefined, e: -1.5, f: 2 }")
        assert result == {"a": True, "b": False, "c": None, "d": None, "e": -1.5, "f": 2}

    def test_escapes_decoded(self):
        assert parse_object_literal(r'{ s: "a\"b\nc" }') == {"s": 'a"b\nc'}

    @pytest.mark.parametrize("text", [
        "",
        "[1, 2]",
        "{ a: 1 } trailing",
        "{ a: }",
        "{ a: someVariable }",
        '{ a: "unterminated }',
        "{ a: 1",
    ])
    def test_rejects_malformed(self, text):
        with pytest.raises(ObjectLiteralError):
            parse_object_literal(text)


class TestReadRecord:

    def test_reads_hotel_with_optionals(self):
        hotel = read_record(HOTEL_B_TEXT, HotelRecord)
        assert hotel.hotel_name == "Pullman Zamzam"
        assert hotel.city_badge is None
        assert hotel.has_details_link is True
        assert hotel.room_description.room_type == "Suite"

    def test_invalid_record_raises_validation_error(self):
        with pytest.raises(ValidationError):
            read_record('{ date: "2024-01-01" }', FlightRecord)

"""
Object Serializer Tests
=======================
Rendering records in the generated template layout.
"""

import pytest
from pydantic import ValidationError

from backend.editor.records import FlightRecord, HotelRecord, TransportRow, Travelers
from backend.editor.serializer import (
    escape_string,
    serialize_flight,
    serialize_hotel,
    serialize_record,
    format_element,
)
from conftest import FLIGHT_A_TEXT, HOTEL_A_TEXT, HOTEL_B_TEXT


class TestSerializeFlight:

    def test_matches_generated_layout(self, flight_a):
        assert serialize_flight(FlightRecord.model_validate(flight_a)) == FLIGHT_A_TEXT

    def test_deterministic(self, flight_a):
        first = serialize_flight(FlightRecord.model_validate(flight_a))
        second = serialize_flight(FlightRecord.model_validate(dict(flight_a)))
        assert first == second

    def test_snake_case_construction(self):
        flight = FlightRecord(
            date="2024-01-01",
            from_airport="Cairo (CAI)",
            to_airport="Jeddah (JED)",
            travelers=Travelers(adults=2, children=1),
            luggage="23kg",
        )
        assert serialize_flight(flight) == FLIGHT_A_TEXT

    def test_quotes_and_newlines_escaped(self, flight_a):
        flight_a["luggage"] = 'one "large"\nbag'
        text = serialize_flight(FlightRecord.model_validate(flight_a))
        assert 'luggage: "one \\"large\\"\\nbag"' in text
        assert "\nbag" not in text


class TestSerializeHotel:

    def test_matches_generated_layout(self, hotel_a):
        assert serialize_hotel(HotelRecord.model_validate(hotel_a)) == HOTEL_A_TEXT

    def test_optional_fields_rendered_when_set(self):
        hotel = HotelRecord.model_validate({
            "city": "Madinah",
            "nights": 3,
            "hotelName": "Pullman Zamzam",
            "hasDetailsLink": True,
            "detailsLink": "https://example.com/pullman",
            "roomDescription": {"includesAll": "Half board", "bedType": "Twin", "roomType": "Suite"},
            "checkInDate": "2024-01-05",
            "checkOutDate": "2024-01-08",
            "dayInfo": {"checkInDay": "Friday", "checkOutDay": "Monday"},
        })
        assert serialize_hotel(hotel) == HOTEL_B_TEXT

    def test_absent_optionals_leave_no_line(self, new_hotel):
        text = serialize_hotel(HotelRecord.model_validate(new_hotel))
        assert "cityBadge" not in text
        assert "roomType" not in text
        assert "detailsLink" not in text
        assert "hasDetailsLink: false" in text
        assert "\n\n" not in text

    def test_empty_badge_treated_as_absent(self, hotel_a):
        hotel_a["cityBadge"] = ""
        assert "cityBadge" not in serialize_hotel(HotelRecord.model_validate(hotel_a))

    def test_every_string_field_escaped(self, hotel_a):
        hotel_a["hotelName"] = 'The "Grand"'
        hotel_a["roomDescription"]["bedType"] = "King\nSize"
        text = serialize_hotel(HotelRecord.model_validate(hotel_a))
        assert 'hotelName: "The \\"Grand\\""' in text
        assert 'bedType: "King\\nSize"' in text


class TestDispatch:

    def test_serialize_record_dispatches(self, flight_a, hotel_a):
        assert serialize_record(FlightRecord.model_validate(flight_a)) == FLIGHT_A_TEXT
        assert serialize_record(HotelRecord.model_validate(hotel_a)) == HOTEL_A_TEXT

    def test_unknown_record_type(self):
        with pytest.raises(TypeError):
            serialize_record({"date": "2024-01-01"})

    def test_format_element_indents(self, flight_a):
        assert format_element(FlightRecord.model_validate(flight_a)) == "    " + FLIGHT_A_TEXT

    def test_escape_string_only_quotes_and_newlines(self):
        assert escape_string('a"b\nc') == 'a\\"b\\nc'
        assert escape_string("tab\there") == "tab\there"


class TestUnwritableValues:
    """Values the quote-and-newline escaping cannot carry are refused up front."""

    def test_trailing_backslash_rejected(self, flight_a):
        with pytest.raises(ValidationError):
            FlightRecord.model_validate({**flight_a, "luggage": "C:\\"})

    def test_carriage_return_rejected(self, hotel_a):
        with pytest.raises(ValidationError):
            HotelRecord.model_validate({**hotel_a, "hotelName": "Hilton\r\nSuites"})

    def test_nested_value_rejected(self, hotel_a):
        room = {**hotel_a["roomDescription"], "bedType": "King\\Queen"}
        with pytest.raises(ValidationError):
            HotelRecord.model_validate({**hotel_a, "roomDescription": room})

    def test_extra_transport_column_rejected(self):
        with pytest.raises(ValidationError):
            TransportRow.model_validate({"day": "1", "driver": "A\\B"})

    def test_plain_values_still_accepted(self, flight_a):
        assert FlightRecord.model_validate({**flight_a, "luggage": 'one "large"\nbag'}).luggage == 'one "large"\nbag'

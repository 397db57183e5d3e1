"""
Pytest Configuration and Fixtures
==================================
Shared fixtures for the section editor test suite.

Sample sections are written in the layout the template generator emits:
elements at 4 spaces, their fields at 6, nested fields at 8.
"""

import pytest
import os
import sys
from typing import Dict, Any, List

# Add project root to path
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))


# =============================================================================
# SAMPLE ELEMENTS
# =============================================================================

FLIGHT_A_TEXT = """{
      date: "2024-01-01",
      fromAirport: "Cairo (CAI)",
      toAirport: "Jeddah (JED)",
      travelers: {
        adults: 2,
        children: 1,
        infants: 0
      },
      luggage: "23kg"
    }"""

FLIGHT_B_TEXT = """{
      date: "2024-01-10",
      fromAirport: "Jeddah (JED)",
      toAirport: "Cairo (CAI)",
      travelers: {
        adults: 2,
        children: 1,
        infants: 0
      },
      luggage: "23kg"
    }"""

HOTEL_A_TEXT = """{
      city: "Makkah",
      nights: 4,
      cityBadge: "1",
      hotelName: "Hilton Suites",
      hasDetailsLink: false,
      roomDescription: {
        includesAll: "Breakfast included",
        bedType: "Double"
      },
      checkInDate: "2024-01-01",
      checkOutDate: "2024-01-05",
      dayInfo: {
        checkInDay: "Monday",
        checkOutDay: "Friday"
      }
    }"""

HOTEL_B_TEXT = """{
      city: "Madinah",
      nights: 3,
      hotelName: "Pullman Zamzam",
      hasDetailsLink: true,
      detailsLink: "https://example.com/pullman",
      roomDescription: {
        includesAll: "Half board",
        bedType: "Twin",
        roomType: "Suite"
      },
      checkInDate: "2024-01-05",
      checkOutDate: "2024-01-08",
      dayInfo: {
        checkInDay: "Friday",
        checkOutDay: "Monday"
      }
    }"""

TABLE_A_TEXT = """{
      id: "table_1700000000002",
      title: "Airport transfers",
      backgroundColor: "dark-blue",
      columns: [
        {
          key: "day",
          label: "Day"
        },
        {
          key: "date",
          label: "Date"
        },
        {
          key: "description",
          label: "Description"
        },
        {
          key: "carType",
          label: "Car Type"
        }
      ],
      rows: [
        {
          day: "1",
          date: "2024-01-01",
          description: "Airport to hotel",
          carType: "Sedan",
          note: "Driver waits at gate 3"
        },
        {
          day: "2",
          date: "2024-01-02",
          description: "Hotel to Haram",
          carType: "Van"
        }
      ]
    }"""

TABLE_B_TEXT = """{
      id: "table_1700000000004",
      title: "Intercity",
      backgroundColor: "dark-red",
      columns: [
        {
          key: "day",
          label: "Day"
        },
        {
          key: "description",
          label: "Description"
        }
      ],
      rows: [
        {
          day: "3",
          description: "Makkah to Madinah"
        }
      ]
    }"""

AIRPLANE_ID = "airplane_1700000000000_k3j2h1g0f"
HOTELS_ID = "hotels_1700000000001_a1b2c3d4e"
TRANSPORT_ID = "user_transport_1700000000003_x9y8z7w6v"


def build_section(component: str, field_name: str, element_texts: List[str], section_id: str) -> str:
    elements = ",\n".join("    " + text for text in element_texts)
    return (
        f"<{component}\n"
        f"  {field_name}={{[\n{elements}\n  ]}}\n"
        f"  id=\"{section_id}\"\n"
        f"  title=\"Itinerary\"\n"
        f"  showTitle={{true}}\n"
        f"  direction=\"rtl\"\n"
        f"  language=\"ar\"\n"
        f"/>"
    )


def build_template(*blocks: str) -> str:
    body = "\n".join(blocks)
    return (
        '"use client";\n'
        "\n"
        "import React from 'react';\n"
        "import BaseTemplate from '@/app/Templates/baseTemplate';\n"
        "import AirplaneSection from '@/app/Templates/airplaneSection';\n"
        "import HotelsSection from '@/app/Templates/HotelsSection';\n"
        "\n"
        "export default function Template() {\n"
        "  return (\n"
        '    <BaseTemplate direction="rtl">\n'
        f"{body}\n"
        "    </BaseTemplate>\n"
        "  );\n"
        "}\n"
    )


# =============================================================================
# ENVIRONMENT FIXTURES
# =============================================================================

@pytest.fixture(autouse=True)
def mock_environment(monkeypatch):
    """Pin editor configuration so tests do not depend on a local .env."""
    from config import AppConfig
    monkeypatch.setattr(AppConfig, "EDITOR_STRICT_MODE", False)
    monkeypatch.setattr(AppConfig, "MAX_CODE_SIZE_KB", 512)
    monkeypatch.setattr(AppConfig, "DEFAULT_DIRECTION", "rtl")
    monkeypatch.setattr(AppConfig, "DEFAULT_LANGUAGE", "ar")
    monkeypatch.setattr(AppConfig, "TEMPLATES_IMPORT_BASE", "@/app/Templates")


# =============================================================================
# SAMPLE DATA FIXTURES
# =============================================================================

@pytest.fixture
def flight_a() -> Dict[str, Any]:
    """The record FLIGHT_A_TEXT holds, as camelCase keys."""
    return {
        "date": "2024-01-01",
        "fromAirport": "Cairo (CAI)",
        "toAirport": "Jeddah (JED)",
        "travelers": {"adults": 2, "children": 1, "infants": 0},
        "luggage": "23kg",
    }


@pytest.fixture
def new_flight() -> Dict[str, Any]:
    return {
        "date": "2024-02-02",
        "fromAirport": "Riyadh (RUH)",
        "toAirport": "Dubai (DXB)",
        "travelers": {"adults": 1, "children": 0, "infants": 1},
        "luggage": "30kg",
    }


@pytest.fixture
def hotel_a() -> Dict[str, Any]:
    return {
        "city": "Makkah",
        "nights": 4,
        "cityBadge": "1",
        "hotelName": "Hilton Suites",
        "hasDetailsLink": False,
        "roomDescription": {"includesAll": "Breakfast included", "bedType": "Double"},
        "checkInDate": "2024-01-01",
        "checkOutDate": "2024-01-05",
        "dayInfo": {"checkInDay": "Monday", "checkOutDay": "Friday"},
    }


@pytest.fixture
def new_hotel() -> Dict[str, Any]:
    return {
        "city": "Taif",
        "nights": 2,
        "hotelName": "Le Meridien",
        "roomDescription": {"includesAll": "Room only", "bedType": "King"},
        "checkInDate": "2024-01-08",
        "checkOutDate": "2024-01-10",
        "dayInfo": {"checkInDay": "Monday", "checkOutDay": "Wednesday"},
    }


@pytest.fixture
def one_flight_section() -> str:
    return build_section("AirplaneSection", "flights", [FLIGHT_A_TEXT], AIRPLANE_ID)


@pytest.fixture
def two_flight_section() -> str:
    return build_section("AirplaneSection", "flights", [FLIGHT_A_TEXT, FLIGHT_B_TEXT], AIRPLANE_ID)


@pytest.fixture
def hotels_section() -> str:
    return build_section("HotelsSection", "hotels", [HOTEL_A_TEXT, HOTEL_B_TEXT], HOTELS_ID)


@pytest.fixture
def template_code(two_flight_section, hotels_section) -> str:
    """Full generated template holding one AirplaneSection and one HotelsSection."""
    return build_template(two_flight_section, hotels_section)


@pytest.fixture
def table_a() -> Dict[str, Any]:
    """The record TABLE_A_TEXT holds."""
    columns = [
        {"key": "day", "label": "Day"},
        {"key": "date", "label": "Date"},
        {"key": "description", "label": "Description"},
        {"key": "carType", "label": "Car Type"},
    ]
    return {
        "id": "table_1700000000002",
        "title": "Airport transfers",
        "backgroundColor": "dark-blue",
        "columns": columns,
        "rows": [
            {"day": "1", "date": "2024-01-01", "description": "Airport to hotel", "carType": "Sedan",
             "note": "Driver waits at gate 3"},
            {"day": "2", "date": "2024-01-02", "description": "Hotel to Haram", "carType": "Van"},
        ],
    }


@pytest.fixture
def new_row() -> Dict[str, Any]:
    return {"day": "4", "date": "2024-01-04", "description": "Hotel to airport", "carType": "SUV"}


@pytest.fixture
def transport_section() -> str:
    return build_section("TransportSection", "tables", [TABLE_A_TEXT, TABLE_B_TEXT], TRANSPORT_ID)


@pytest.fixture
def transport_code(transport_section, hotels_section) -> str:
    """Template holding a TransportSection followed by a HotelsSection."""
    return build_template(transport_section, hotels_section)

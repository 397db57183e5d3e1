"""
Travel record models.

Attributes are snake_case; aliases are the camelCase keys used inside the
generated component markup, so a record can be built from either a Python
caller or a dict parsed out of the code.

String values may not contain a backslash or a carriage return: the
serializer escapes only quotes and newlines (see escape_string), so either
character would produce a literal that reads back differently or not at all.
"""

import time
from typing import Any, List, Literal, Optional, Union
from pydantic import BaseModel, Field, field_validator, model_validator


def _check_literal_safe(value: Any) -> Any:
    if isinstance(value, str) and ("\\" in value or "\r" in value):
        raise ValueError("backslashes and carriage returns cannot be written into the template")
    return value


class _RecordModel(BaseModel):
    model_config = {"populate_by_name": True}

    @field_validator("*")
    @classmethod
    def _literal_safe(cls, value):
        return _check_literal_safe(value)


class Travelers(_RecordModel):
    adults: int = Field(0, ge=0)
    children: int = Field(0, ge=0)
    infants: int = Field(0, ge=0)


class FlightRecord(_RecordModel):
    """One entry of an AirplaneSection flights array."""
    date: str
    from_airport: str = Field(..., alias="fromAirport")
    to_airport: str = Field(..., alias="toAirport")
    travelers: Travelers
    luggage: str


class RoomDescription(_RecordModel):
    includes_all: str = Field(..., alias="includesAll")
    bed_type: str = Field(..., alias="bedType")
    room_type: Optional[str] = Field(None, alias="roomType")


class DayInfo(_RecordModel):
    check_in_day: str = Field(..., alias="checkInDay")
    check_out_day: str = Field(..., alias="checkOutDay")


class HotelRecord(_RecordModel):
    """One entry of a HotelsSection hotels array."""
    city: str
    nights: int = Field(..., ge=0)
    city_badge: Optional[str] = Field(None, alias="cityBadge")
    hotel_name: str = Field(..., alias="hotelName")
    has_details_link: bool = Field(False, alias="hasDetailsLink")
    details_link: Optional[str] = Field(None, alias="detailsLink")
    room_description: RoomDescription = Field(..., alias="roomDescription")
    check_in_date: str = Field(..., alias="checkInDate")
    check_out_date: str = Field(..., alias="checkOutDate")
    day_info: DayInfo = Field(..., alias="dayInfo")


# =============================================================================
# TRANSPORT
# =============================================================================

TableColor = Literal["dark-blue", "dark-red", "pink"]


def _table_id() -> str:
    return f"table_{int(time.time() * 1000)}"


class TransportColumn(_RecordModel):
    key: str
    label: str


class TransportRow(_RecordModel):
    """
    One row of a transport table. Columns beyond the four standard ones
    are kept as extra fields under their own key.
    """
    model_config = {"populate_by_name": True, "extra": "allow"}

    day: str = ""
    date: str = ""
    description: str = ""
    car_type: str = Field("", alias="carType")
    note: Optional[str] = None

    @model_validator(mode="after")
    def _extra_literal_safe(self):
        for value in (self.model_extra or {}).values():
            _check_literal_safe(value)
        return self


class TransportTable(_RecordModel):
    """One entry of a TransportSection tables array."""
    id: str = Field(default_factory=_table_id)
    title: str
    background_color: TableColor = Field("dark-blue", alias="backgroundColor")
    columns: List[TransportColumn] = Field(default_factory=list)
    rows: List[TransportRow] = Field(default_factory=list)


TravelRecord = Union[FlightRecord, HotelRecord, TransportTable]

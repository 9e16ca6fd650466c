"""
Request/response models for the booking intake API.

The wire format is camelCase JSON; attributes are snake_case and pydantic
aliases map between the two. Incoming booking fields are loose (plain
strings, optional contact fields); booking_validation applies the rules.
"""

from datetime import date, datetime
from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


# ============================================================================
# ENUMS
# ============================================================================

class ServiceType(str, Enum):
    ONE_WAY = "one-way"
    HOURLY = "hourly"


class LocationType(str, Enum):
    LOCATION = "location"
    AIRPORT = "airport"


class BookingStatus(str, Enum):
    CONFIRMED = "confirmed"


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


# ============================================================================
# REQUEST MODELS
# ============================================================================

class Location(CamelModel):
    """A picked place: free-text address plus map coordinates."""
    address: str = ""
    lat: Optional[float] = None
    lng: Optional[float] = None


class BookingRequest(CamelModel):
    """Booking form submission as sent by the client."""

    service_type: str = ""
    pickup_date: str = Field(default="", description="Pickup date, YYYY-MM-DD")
    pickup_time: str = Field(default="", description="Pickup time, HH:MM")
    pickup_location_type: str = ""
    pickup_location: Location = Field(default_factory=Location)
    stops: list[str] = Field(default_factory=list, description="Ordered stop addresses")
    dropoff_location_type: str = ""
    dropoff_location: Location = Field(default_factory=Location)

    # Contact
    phone: Optional[str] = None
    phone_recognized: bool = Field(
        default=False,
        description="Set by the client when the phone lookup found a stored contact",
    )
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    email: Optional[str] = None

    passengers: int = 1

    # Trip metrics computed by the client's map provider
    distance: Optional[str] = None
    duration: Optional[str] = None


class ValidatedBooking(CamelModel):
    """Booking that passed every validation rule, with strings trimmed."""

    service_type: ServiceType
    pickup_date: date
    pickup_time: str
    pickup_location_type: LocationType
    pickup_location: Location
    stops: list[str]
    dropoff_location_type: LocationType
    dropoff_location: Location
    phone: str
    phone_recognized: bool
    first_name: str
    last_name: str
    email: str
    passengers: int
    distance: Optional[str] = None
    duration: Optional[str] = None

    @property
    def has_full_identity(self) -> bool:
        return bool(self.first_name and self.last_name and self.email)


# ============================================================================
# RESPONSE MODELS
# ============================================================================

class ContactOut(CamelModel):
    first_name: str
    last_name: str
    email: str
    phone: str


class PhoneLookupResponse(CamelModel):
    found: bool
    contact: Optional[ContactOut] = None


class ContactSnapshot(CamelModel):
    phone: str = ""
    first_name: str = ""
    last_name: str = ""
    email: str = ""


class BookingConfirmation(CamelModel):
    """Summary of an accepted booking. Returned to the caller, never stored."""

    id: str
    status: BookingStatus = BookingStatus.CONFIRMED
    service_type: ServiceType
    pickup_date: date
    pickup_time: str
    pickup: Location
    dropoff: Location
    stops: list[str]
    distance: Optional[str] = None
    duration: Optional[str] = None
    contact: ContactSnapshot
    passengers: int
    created_at: datetime

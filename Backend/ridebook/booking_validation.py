"""
Booking Validation - cross-field rules for a submitted booking.

validate_booking() runs every rule against one immutable snapshot of the form
and collects all violations, so the client can highlight every offending field
at once. Field names in violations use the camelCase wire names
(e.g. "pickupLocation.address").
"""

import logging
from dataclasses import dataclass, field
from datetime import date
from typing import Optional

from .phone import is_valid_email, is_valid_phone
from .schemas import BookingRequest, Location, LocationType, ServiceType, ValidatedBooking

logger = logging.getLogger(__name__)

SERVICE_TYPES = {s.value for s in ServiceType}
LOCATION_TYPES = {t.value for t in LocationType}


@dataclass(frozen=True)
class Violation:
    field: str
    message: str

    def to_dict(self) -> dict[str, str]:
        return {"field": self.field, "message": self.message}


@dataclass
class BookingValidation:
    violations: list[Violation] = field(default_factory=list)
    booking: Optional[ValidatedBooking] = None

    @property
    def valid(self) -> bool:
        return not self.violations

    def fields(self) -> set[str]:
        return {v.field for v in self.violations}

    def add(self, field_name: str, message: str) -> None:
        self.violations.append(Violation(field_name, message))


def _clean(value: Optional[str]) -> str:
    return value.strip() if value else ""


def contact_fields_required(phone_recognized: bool) -> bool:
    """First name, last name and email are required (and shown) for new customers only."""
    return not phone_recognized


def _parse_pickup_date(value: str) -> Optional[date]:
    try:
        return date.fromisoformat(value)
    except ValueError:
        return None


def validate_booking(request: BookingRequest, today: date) -> BookingValidation:
    """
    Check a booking submission against every intake rule.

    Args:
        request: The submitted booking
        today: Current calendar date in the service timezone

    Returns:
        BookingValidation with either a cleaned booking or all violations
    """
    result = BookingValidation()

    if request.service_type not in SERVICE_TYPES:
        result.add("serviceType", "Choose one-way or hourly service")
    if request.pickup_location_type not in LOCATION_TYPES:
        result.add("pickupLocationType", "Choose a location or an airport")
    if request.dropoff_location_type not in LOCATION_TYPES:
        result.add("dropoffLocationType", "Choose a location or an airport")

    pickup_date = None
    raw_date = _clean(request.pickup_date)
    if not raw_date:
        result.add("pickupDate", "Pickup date is required")
    else:
        pickup_date = _parse_pickup_date(raw_date)
        if pickup_date is None:
            result.add("pickupDate", "Enter a valid pickup date")
        elif pickup_date < today:
            result.add("pickupDate", "Pickup date cannot be in the past")

    if not _clean(request.pickup_time):
        result.add("pickupTime", "Pickup time is required")

    if not _clean(request.pickup_location.address):
        result.add("pickupLocation.address", "Location is required")
    if not _clean(request.dropoff_location.address):
        result.add("dropoffLocation.address", "Location is required")

    if request.passengers < 1:
        result.add("passengers", "At least 1 passenger required")

    phone = _clean(request.phone)
    first_name = _clean(request.first_name)
    last_name = _clean(request.last_name)
    email = _clean(request.email)
    has_identity = bool(first_name and last_name and email)

    if not phone and not has_identity:
        result.add("phone", "Phone number is required")
    if phone and not is_valid_phone(phone):
        result.add("phone", "Enter a valid phone number")

    if contact_fields_required(request.phone_recognized):
        if not first_name:
            result.add("firstName", "First name is required for new customers")
        if not last_name:
            result.add("lastName", "Last name is required for new customers")
        if not email:
            result.add("email", "Email is required for new customers")
        elif not is_valid_email(request.email):
            result.add("email", "Enter a valid email address")

    if not result.valid:
        logger.debug(f"Booking rejected on fields: {sorted(result.fields())}")
        return result

    result.booking = ValidatedBooking(
        service_type=ServiceType(request.service_type),
        pickup_date=pickup_date,
        pickup_time=_clean(request.pickup_time),
        pickup_location_type=LocationType(request.pickup_location_type),
        pickup_location=_clean_location(request.pickup_location),
        stops=[s.strip() for s in request.stops if s and s.strip()],
        dropoff_location_type=LocationType(request.dropoff_location_type),
        dropoff_location=_clean_location(request.dropoff_location),
        phone=phone,
        phone_recognized=request.phone_recognized,
        first_name=first_name,
        last_name=last_name,
        email=email,
        passengers=request.passengers,
        distance=_clean(request.distance) or None,
        duration=_clean(request.duration) or None,
    )
    return result


def _clean_location(location: Location) -> Location:
    return location.model_copy(update={"address": location.address.strip()})

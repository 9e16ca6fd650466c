"""Build the confirmation returned for an accepted booking."""

import uuid
from datetime import datetime, timezone
from typing import Optional

from .models import Contact
from .schemas import BookingConfirmation, BookingStatus, ContactSnapshot, ValidatedBooking

BOOKING_ID_PREFIX = "BK-"


def new_booking_id() -> str:
    return f"{BOOKING_ID_PREFIX}{uuid.uuid4().hex.upper()}"


def build_confirmation(
    booking: ValidatedBooking,
    distance: Optional[str] = None,
    duration: Optional[str] = None,
    contact: Optional[Contact] = None,
) -> BookingConfirmation:
    """
    Shape a validated booking into its confirmation.

    Args:
        booking: Output of validate_booking
        distance: Caller-supplied trip distance text, e.g. "12.5 mi"
        duration: Caller-supplied trip duration text, e.g. "18 mins"
        contact: Stored contact for the booking's phone, used to fill
            name and email the submission left blank

    Returns:
        BookingConfirmation with a fresh id and status "confirmed"
    """
    snapshot = ContactSnapshot(
        phone=booking.phone,
        first_name=booking.first_name or (contact.first_name if contact else ""),
        last_name=booking.last_name or (contact.last_name if contact else ""),
        email=booking.email or (contact.email if contact else ""),
    )

    return BookingConfirmation(
        id=new_booking_id(),
        status=BookingStatus.CONFIRMED,
        service_type=booking.service_type,
        pickup_date=booking.pickup_date,
        pickup_time=booking.pickup_time,
        pickup=booking.pickup_location,
        dropoff=booking.dropoff_location,
        stops=list(booking.stops),
        distance=distance or booking.distance,
        duration=duration or booking.duration,
        contact=snapshot,
        passengers=booking.passengers,
        created_at=datetime.now(timezone.utc),
    )

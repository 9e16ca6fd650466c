"""
Booking intake endpoints.

    GET  /api/phone/{number}  - returning-customer lookup (called on phone-field blur)
    POST /api/bookings        - validate a booking, save the contact, return a confirmation
"""

import logging
from datetime import date, datetime
from typing import Optional
from zoneinfo import ZoneInfo

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from .booking_validation import validate_booking
from .confirmation import build_confirmation
from .contact_store import ContactStore, ContactStoreError, SqlContactStore
from .core.config import get_settings
from .core.db import get_session
from .core.responses import ErrorCodes, error_json, internal_error_json, validation_error_json
from .models import Contact
from .phone import is_valid_phone
from .schemas import (
    BookingConfirmation,
    BookingRequest,
    ContactOut,
    PhoneLookupResponse,
    ValidatedBooking,
)

settings = get_settings()
logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api", tags=["booking-intake"])


# ============================================================================
# DEPENDENCIES
# ============================================================================

async def get_contact_store(session: AsyncSession = Depends(get_session)) -> ContactStore:
    return SqlContactStore(session)


def get_local_today() -> date:
    """Current calendar date in the configured service timezone."""
    return datetime.now(ZoneInfo(settings.app_timezone)).date()


# ============================================================================
# HELPERS
# ============================================================================

async def resolve_contact(store: ContactStore, booking: ValidatedBooking) -> Optional[Contact]:
    """
    Save or fetch the contact behind a booking.

    A full identity (first name, last name, email) with a phone is upserted.
    A bare phone resolves to the stored contact, if any.
    """
    if not booking.phone:
        if booking.has_full_identity:
            logger.info("Booking has no phone; contact not saved")
        return None

    if booking.has_full_identity:
        return await store.upsert(
            booking.phone, booking.first_name, booking.last_name, booking.email
        )
    return await store.find_by_phone(booking.phone)


# ============================================================================
# ENDPOINTS
# ============================================================================

@router.get(
    "/phone/{number}",
    response_model=PhoneLookupResponse,
    response_model_exclude_none=True,
    summary="Look up a returning customer by phone",
)
async def lookup_phone(number: str, store: ContactStore = Depends(get_contact_store)):
    phone = number.strip()
    if not is_valid_phone(phone):
        logger.warning(f"Rejected phone lookup for malformed number: {number!r}")
        return error_json(
            status.HTTP_400_BAD_REQUEST,
            ErrorCodes.INVALID_INPUT,
            "Invalid phone number",
            {"field": "phone"},
        )

    try:
        contact = await store.find_by_phone(phone)
    except ContactStoreError:
        logger.error("Phone lookup failed")
        return internal_error_json()

    if not contact:
        return PhoneLookupResponse(found=False)

    return PhoneLookupResponse(
        found=True,
        contact=ContactOut(
            first_name=contact.first_name,
            last_name=contact.last_name,
            email=contact.email,
            phone=contact.phone,
        ),
    )


@router.post(
    "/bookings",
    response_model=BookingConfirmation,
    status_code=status.HTTP_201_CREATED,
    summary="Submit a booking",
)
async def submit_booking(
    payload: BookingRequest,
    store: ContactStore = Depends(get_contact_store),
    today: date = Depends(get_local_today),
):
    validation = validate_booking(payload, today)
    if not validation.valid:
        logger.warning(f"Booking submission rejected: {sorted(validation.fields())}")
        return validation_error_json([v.to_dict() for v in validation.violations])

    booking = validation.booking
    try:
        contact = await resolve_contact(store, booking)
    except ContactStoreError:
        logger.error("Booking submission failed while saving contact")
        return internal_error_json()

    confirmation = build_confirmation(booking, contact=contact)
    logger.info(f"Confirmed booking {confirmation.id} ({booking.service_type.value})")
    return confirmation

"""
Tests for confirmation module.

Run with: pytest Backend/tests/test_confirmation.py -v
"""

from datetime import datetime, timezone

from ridebook.booking_validation import validate_booking
from ridebook.confirmation import BOOKING_ID_PREFIX, build_confirmation
from ridebook.models import Contact
from ridebook.schemas import BookingRequest, BookingStatus

from conftest import TODAY, booking_payload


def validated(**overrides):
    result = validate_booking(BookingRequest.model_validate(booking_payload(**overrides)), TODAY)
    assert result.valid, result.violations
    return result.booking


class TestBuildConfirmation:
    """Tests for build_confirmation."""

    def test_status_and_id(self):
        confirmation = build_confirmation(validated())
        assert confirmation.status is BookingStatus.CONFIRMED
        assert confirmation.id.startswith(BOOKING_ID_PREFIX)
        assert len(confirmation.id) > len(BOOKING_ID_PREFIX)

    def test_ids_unique_across_rapid_calls(self):
        booking = validated()
        ids = {build_confirmation(booking).id for _ in range(1000)}
        assert len(ids) == 1000

    def test_trip_fields_copied(self):
        booking = validated(
            serviceType="hourly",
            pickupTime="07:45",
            stops=["45 Elm St", "9 Oak Ave"],
            passengers=3,
        )
        confirmation = build_confirmation(booking, distance="12.5 mi", duration="18 mins")

        assert confirmation.service_type == booking.service_type
        assert confirmation.pickup_date == TODAY
        assert confirmation.pickup_time == "07:45"
        assert confirmation.pickup.address == "JFK"
        assert confirmation.pickup.lat == 40.6413
        assert confirmation.dropoff.address == "123 Main St"
        assert confirmation.stops == ["45 Elm St", "9 Oak Ave"]
        assert confirmation.passengers == 3
        assert confirmation.distance == "12.5 mi"
        assert confirmation.duration == "18 mins"

    def test_metrics_fall_back_to_booking(self):
        confirmation = build_confirmation(validated(distance="3 mi", duration="9 mins"))
        assert confirmation.distance == "3 mi"
        assert confirmation.duration == "9 mins"

    def test_metrics_absent(self):
        confirmation = build_confirmation(validated())
        assert confirmation.distance is None
        assert confirmation.duration is None

    def test_contact_snapshot_from_submission(self):
        snapshot = build_confirmation(validated()).contact
        assert snapshot.phone == "774-415-3244"
        assert snapshot.first_name == "Ada"
        assert snapshot.last_name == "Lovelace"
        assert snapshot.email == "ada@example.com"

    def test_contact_snapshot_defaults_to_empty_strings(self):
        """Recognized-phone bookings without a stored match still carry every contact key."""
        booking = validated(phoneRecognized=True, firstName="", lastName="", email="")
        dumped = build_confirmation(booking).model_dump(by_alias=True)
        assert dumped["contact"] == {
            "phone": "774-415-3244",
            "firstName": "",
            "lastName": "",
            "email": "",
        }

    def test_contact_snapshot_resolved_from_store(self):
        booking = validated(phoneRecognized=True, firstName="", lastName="", email="")
        stored = Contact(
            id=1,
            phone="(774) 415-3244",
            phone_key="7744153244",
            first_name="Grace",
            last_name="Hopper",
            email="grace@example.com",
        )
        snapshot = build_confirmation(booking, contact=stored).contact
        assert snapshot.phone == "774-415-3244"
        assert (snapshot.first_name, snapshot.last_name, snapshot.email) == (
            "Grace",
            "Hopper",
            "grace@example.com",
        )

    def test_created_at_is_current_utc(self):
        before = datetime.now(timezone.utc)
        confirmation = build_confirmation(validated())
        assert before <= confirmation.created_at <= datetime.now(timezone.utc)

    def test_wire_format(self):
        dumped = build_confirmation(validated()).model_dump(mode="json", by_alias=True)
        assert set(dumped) == {
            "id",
            "status",
            "serviceType",
            "pickupDate",
            "pickupTime",
            "pickup",
            "dropoff",
            "stops",
            "distance",
            "duration",
            "contact",
            "passengers",
            "createdAt",
        }
        assert dumped["status"] == "confirmed"
        assert dumped["serviceType"] == "one-way"
        assert dumped["pickupDate"] == TODAY.isoformat()

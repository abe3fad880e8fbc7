"""Test in-memory storage operations."""
import pytest
from datetime import datetime

from portal.models import (
    AppointmentCreate,
    AssistanceProgramCreate,
    DoctorCreate,
    InsuranceOptionCreate,
    UserCreate,
)
from portal.storage import MemStorage


@pytest.fixture
def empty_storage():
    """Store without sample data."""
    return MemStorage(seed_sample_data=False)


def make_user(**overrides) -> UserCreate:
    data = {
        "username": "jdoe",
        "password": "hashed",
        "email": "jdoe@example.com",
        "first_name": "Jane",
        "last_name": "Doe",
    }
    data.update(overrides)
    return UserCreate(**data)


def make_appointment(**overrides) -> AppointmentCreate:
    data = {
        "patient_id": 1,
        "doctor_id": 1,
        "date": datetime(2030, 5, 6, 9, 0),
        "type": "in-person",
    }
    data.update(overrides)
    return AppointmentCreate(**data)


class TestSampleData:
    """Seeded collections."""

    def test_seeds_reference_collections(self, storage):
        assert len(storage.get_doctors()) == 4
        assert len(storage.get_insurance_options()) == 2
        assert len(storage.get_assistance_programs()) == 3

    def test_seeded_ids_start_at_one(self, storage):
        assert [d.id for d in storage.get_doctors()] == [1, 2, 3, 4]
        assert storage.get_insurance_option(1).name == "Blue Cross Blue Shield"
        assert storage.get_assistance_program(3).name.startswith("Children's Health")

    def test_seeded_doctors_carry_names(self, storage):
        assert storage.get_doctor(1).name == "Sarah Johnson"
        assert storage.get_doctor(4).name == "Emily Rodriguez"

    def test_users_and_appointments_start_empty(self, storage):
        assert storage.list_users() == []
        assert storage.get_appointments() == []

    def test_seeding_can_be_disabled(self, empty_storage):
        assert empty_storage.get_doctors() == []
        assert empty_storage.get_insurance_options() == []


class TestUsers:

    def test_create_assigns_incrementing_ids(self, empty_storage):
        first = empty_storage.create_user(make_user())
        second = empty_storage.create_user(make_user(username="other", email="o@example.com"))

        assert first.id == 1
        assert second.id == 2
        assert first.created_at is not None

    def test_lookup_by_username_and_email(self, empty_storage):
        user = empty_storage.create_user(make_user())

        assert empty_storage.get_user_by_username("jdoe").id == user.id
        assert empty_storage.get_user_by_email("jdoe@example.com").id == user.id
        assert empty_storage.get_user_by_username("nobody") is None
        assert empty_storage.get_user_by_email("nobody@example.com") is None

    def test_get_missing_user_returns_none(self, empty_storage):
        assert empty_storage.get_user(42) is None

    def test_update_merges_fields(self, empty_storage):
        user = empty_storage.create_user(make_user())

        updated = empty_storage.update_user(user.id, {"phone": "555-0100"})

        assert updated.phone == "555-0100"
        assert updated.username == "jdoe"
        assert empty_storage.get_user(user.id).phone == "555-0100"

    def test_update_missing_user_returns_none(self, empty_storage):
        assert empty_storage.update_user(7, {"phone": "555"}) is None


class TestDoctors:

    def test_filter_by_specialty_is_exact(self, storage):
        result = storage.get_doctors_by_specialty("Cardiology")

        assert [d.id for d in result] == [1]
        assert storage.get_doctors_by_specialty("cardiology") == []
        assert storage.get_doctors_by_specialty("Cardio") == []

    def test_filter_by_location_is_substring(self, storage):
        result = storage.get_doctors_by_location("TX")

        assert [d.name for d in result] == ["Emily Rodriguez"]
        assert storage.get_doctors_by_location("tx") == []

    def test_delete_does_not_reuse_id(self, storage):
        assert storage.delete_doctor(4) is True
        assert storage.get_doctor(4) is None

        created = storage.create_doctor(
            DoctorCreate(name="Ava Patel", specialty="Neurology", location="Boston, MA")
        )

        assert created.id == 5

    def test_delete_missing_doctor_returns_false(self, storage):
        assert storage.delete_doctor(99) is False

    def test_update_doctor(self, storage):
        updated = storage.update_doctor(2, {"location": "Evanston, IL"})

        assert updated.location == "Evanston, IL"
        assert updated.specialty == "Family Medicine"


class TestAppointments:

    def test_create_defaults_to_scheduled(self, empty_storage):
        appointment = empty_storage.create_appointment(make_appointment())

        assert appointment.id == 1
        assert appointment.status == "scheduled"
        assert appointment.created_at is not None

    def test_filters_by_patient_and_doctor(self, empty_storage):
        empty_storage.create_appointment(make_appointment(patient_id=1, doctor_id=1))
        empty_storage.create_appointment(make_appointment(patient_id=2, doctor_id=1))
        empty_storage.create_appointment(make_appointment(patient_id=1, doctor_id=3))

        assert len(empty_storage.get_appointments_by_patient(1)) == 2
        assert len(empty_storage.get_appointments_by_doctor(1)) == 2
        assert empty_storage.get_appointments_by_doctor(2) == []

    def test_overlapping_appointments_are_both_stored(self, empty_storage):
        """No double-booking prevention: same doctor, same time, both kept."""
        first = empty_storage.create_appointment(make_appointment())
        second = empty_storage.create_appointment(make_appointment(patient_id=2))

        assert first.id != second.id
        assert len(empty_storage.get_appointments_by_doctor(1)) == 2

    def test_storage_does_not_enforce_references(self, empty_storage):
        appointment = empty_storage.create_appointment(make_appointment(doctor_id=999))

        assert appointment.doctor_id == 999

    def test_update_status(self, empty_storage):
        appointment = empty_storage.create_appointment(make_appointment())

        updated = empty_storage.update_appointment(appointment.id, {"status": "cancelled"})

        assert updated.status == "cancelled"
        assert updated.doctor_id == appointment.doctor_id


class TestReferenceData:

    def test_create_insurance_option(self, empty_storage):
        option = empty_storage.create_insurance_option(
            InsuranceOptionCreate(name="Cigna", type="Private", description="Plans")
        )

        assert option.id == 1
        assert empty_storage.get_insurance_option(1).name == "Cigna"

    def test_create_assistance_program(self, empty_storage):
        program = empty_storage.create_assistance_program(
            AssistanceProgramCreate(name="ACA Subsidies", description="Premium tax credits")
        )

        assert program.id == 1
        assert empty_storage.get_assistance_program(2) is None

"""In-memory storage for the portal's entity collections.

Pattern: one id-keyed dict per entity plus a per-collection counter.
Absence is reported as None (or False for deletes), never raised; the
route layer decides what a missing entity means. No validation happens
here - callers pass already-validated insert schemas.
"""
from datetime import datetime, UTC
from typing import Any, Dict, Generic, List, Optional, TypeVar

from portal import seed
from portal.logging_config import get_logger
from portal.models import (
    Appointment,
    AppointmentCreate,
    AssistanceProgram,
    AssistanceProgramCreate,
    Doctor,
    DoctorCreate,
    InsuranceOption,
    InsuranceOptionCreate,
    User,
    UserCreate,
)

logger = get_logger(__name__)

T = TypeVar("T")


class _Collection(Generic[T]):
    """Id-keyed map with a monotonically increasing id counter."""

    def __init__(self):
        self.items: Dict[int, T] = {}
        self.next_id = 1

    def allocate_id(self) -> int:
        new_id = self.next_id
        self.next_id += 1
        return new_id

    def get(self, item_id: int) -> Optional[T]:
        return self.items.get(item_id)

    def values(self) -> List[T]:
        return list(self.items.values())

    def put(self, item_id: int, item: T) -> T:
        self.items[item_id] = item
        return item

    def merge(self, item_id: int, changes: Dict[str, Any]) -> Optional[T]:
        item = self.items.get(item_id)
        if item is None:
            return None
        updated = item.model_copy(update=changes)
        self.items[item_id] = updated
        return updated

    def remove(self, item_id: int) -> bool:
        return self.items.pop(item_id, None) is not None


def utc_now() -> datetime:
    """Get current UTC timestamp."""
    return datetime.now(UTC)


class MemStorage:
    """
    Repository over the five portal collections.

    Responsibilities:
    - Assign ids from per-collection counters starting at 1
    - Stamp createdAt on users and appointments
    - Linear-scan lookups and filters

    Counters never rewind, so a deleted doctor's id is not reused.
    Nothing here is locked: the API runs handlers on a single event loop
    and every method is a synchronous dict operation.
    """

    def __init__(self, seed_sample_data: bool = True):
        """
        Initialize empty collections, optionally loading sample data.

        Args:
            seed_sample_data: Load sample doctors, insurance options and
                assistance programs.
        """
        self._users: _Collection[User] = _Collection()
        self._doctors: _Collection[Doctor] = _Collection()
        self._appointments: _Collection[Appointment] = _Collection()
        self._insurance_options: _Collection[InsuranceOption] = _Collection()
        self._assistance_programs: _Collection[AssistanceProgram] = _Collection()

        if seed_sample_data:
            self._load_sample_data()

    def _load_sample_data(self):
        for doctor in seed.DOCTORS:
            self.create_doctor(DoctorCreate.model_validate(doctor))
        for option in seed.INSURANCE_OPTIONS:
            self.create_insurance_option(InsuranceOptionCreate.model_validate(option))
        for program in seed.ASSISTANCE_PROGRAMS:
            self.create_assistance_program(AssistanceProgramCreate.model_validate(program))

        logger.info(
            "sample_data_loaded",
            doctors=len(seed.DOCTORS),
            insurance_options=len(seed.INSURANCE_OPTIONS),
            assistance_programs=len(seed.ASSISTANCE_PROGRAMS),
        )

    # Users

    def get_user(self, user_id: int) -> Optional[User]:
        return self._users.get(user_id)

    def get_user_by_username(self, username: str) -> Optional[User]:
        return next(
            (user for user in self._users.values() if user.username == username),
            None
        )

    def get_user_by_email(self, email: str) -> Optional[User]:
        return next(
            (user for user in self._users.values() if user.email == email),
            None
        )

    def list_users(self) -> List[User]:
        return self._users.values()

    def create_user(self, data: UserCreate) -> User:
        """
        Insert a new user.

        Args:
            data: Validated insert schema. The password must already be
                hashed by the caller.

        Returns:
            Stored user with id and created_at assigned
        """
        user_id = self._users.allocate_id()
        user = User(id=user_id, created_at=utc_now(), **data.model_dump())
        return self._users.put(user_id, user)

    def update_user(self, user_id: int, changes: Dict[str, Any]) -> Optional[User]:
        return self._users.merge(user_id, changes)

    # Doctors

    def get_doctor(self, doctor_id: int) -> Optional[Doctor]:
        return self._doctors.get(doctor_id)

    def get_doctors(self) -> List[Doctor]:
        return self._doctors.values()

    def get_doctors_by_specialty(self, specialty: str) -> List[Doctor]:
        """Doctors whose specialty equals `specialty` exactly."""
        return [d for d in self._doctors.values() if d.specialty == specialty]

    def get_doctors_by_location(self, location: str) -> List[Doctor]:
        """Doctors whose location contains `location` (case-sensitive)."""
        return [d for d in self._doctors.values() if location in d.location]

    def create_doctor(self, data: DoctorCreate) -> Doctor:
        doctor_id = self._doctors.allocate_id()
        doctor = Doctor(id=doctor_id, **data.model_dump())
        return self._doctors.put(doctor_id, doctor)

    def update_doctor(self, doctor_id: int, changes: Dict[str, Any]) -> Optional[Doctor]:
        return self._doctors.merge(doctor_id, changes)

    def delete_doctor(self, doctor_id: int) -> bool:
        """
        Remove a doctor.

        Appointments referencing the doctor are left untouched.

        Returns:
            True if the doctor existed, False otherwise
        """
        return self._doctors.remove(doctor_id)

    # Appointments

    def get_appointment(self, appointment_id: int) -> Optional[Appointment]:
        return self._appointments.get(appointment_id)

    def get_appointments(self) -> List[Appointment]:
        return self._appointments.values()

    def get_appointments_by_patient(self, patient_id: int) -> List[Appointment]:
        return [a for a in self._appointments.values() if a.patient_id == patient_id]

    def get_appointments_by_doctor(self, doctor_id: int) -> List[Appointment]:
        return [a for a in self._appointments.values() if a.doctor_id == doctor_id]

    def create_appointment(self, data: AppointmentCreate) -> Appointment:
        """
        Insert a new appointment.

        No overlap check: two appointments for the same doctor and time
        are both stored.
        """
        appointment_id = self._appointments.allocate_id()
        appointment = Appointment(id=appointment_id, created_at=utc_now(), **data.model_dump())
        return self._appointments.put(appointment_id, appointment)

    def update_appointment(
        self,
        appointment_id: int,
        changes: Dict[str, Any]
    ) -> Optional[Appointment]:
        return self._appointments.merge(appointment_id, changes)

    # Insurance options

    def get_insurance_option(self, option_id: int) -> Optional[InsuranceOption]:
        return self._insurance_options.get(option_id)

    def get_insurance_options(self) -> List[InsuranceOption]:
        return self._insurance_options.values()

    def create_insurance_option(self, data: InsuranceOptionCreate) -> InsuranceOption:
        option_id = self._insurance_options.allocate_id()
        option = InsuranceOption(id=option_id, **data.model_dump())
        return self._insurance_options.put(option_id, option)

    # Assistance programs

    def get_assistance_program(self, program_id: int) -> Optional[AssistanceProgram]:
        return self._assistance_programs.get(program_id)

    def get_assistance_programs(self) -> List[AssistanceProgram]:
        return self._assistance_programs.values()

    def create_assistance_program(self, data: AssistanceProgramCreate) -> AssistanceProgram:
        program_id = self._assistance_programs.allocate_id()
        program = AssistanceProgram(id=program_id, **data.model_dump())
        return self._assistance_programs.put(program_id, program)

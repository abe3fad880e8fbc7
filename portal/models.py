"""Domain models for the portal's entity collections.

Each entity has an insert schema (what a client may submit, without the
server-assigned id/createdAt) and a stored model. Field names are
snake_case in Python and camelCase on the wire.
"""
import re
from datetime import datetime
from enum import Enum
from typing import Annotated, Optional
from pydantic import AfterValidator, BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


EMAIL_PATTERN = re.compile(r'^[a-zA-Z0-9._%+-]+@[a-zA-Z0-9.-]+\.[a-zA-Z]{2,}$')


class UserRole(str, Enum):
    PATIENT = "patient"
    ADMIN = "admin"


class Specialty(str, Enum):
    """Medical specialties a doctor can be listed under."""
    CARDIOLOGY = "Cardiology"
    DERMATOLOGY = "Dermatology"
    FAMILY_MEDICINE = "Family Medicine"
    NEUROLOGY = "Neurology"
    PEDIATRICS = "Pediatrics"
    PSYCHIATRY = "Psychiatry"
    OPHTHALMOLOGY = "Ophthalmology"
    ORTHOPEDICS = "Orthopedics"
    GYNECOLOGY = "Gynecology"
    UROLOGY = "Urology"


class AppointmentStatus(str, Enum):
    SCHEDULED = "scheduled"
    COMPLETED = "completed"
    CANCELLED = "cancelled"
    NO_SHOW = "no-show"


class AppointmentType(str, Enum):
    IN_PERSON = "in-person"
    VIRTUAL = "virtual"


class CamelModel(BaseModel):
    """Base model serialized with camelCase keys."""
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        use_enum_values=True,
        validate_default=True,
    )


def _check_email(value: str) -> str:
    if not EMAIL_PATTERN.match(value):
        raise ValueError("Invalid email format")
    return value


Email = Annotated[str, AfterValidator(_check_email)]

# bcrypt only reads the first 72 bytes of a password
MAX_PASSWORD_BYTES = 72


def _check_password_length(value: str) -> str:
    if len(value.encode("utf-8")) > MAX_PASSWORD_BYTES:
        raise ValueError(f"Password must be at most {MAX_PASSWORD_BYTES} bytes")
    return value


Password = Annotated[str, AfterValidator(_check_password_length)]


# ---------------------------------------------------------------------------
# Users
# ---------------------------------------------------------------------------

class UserCreate(CamelModel):
    """Insert schema for users."""
    username: str = Field(..., min_length=1, max_length=100)
    password: Password = Field(..., min_length=1)
    email: Email = Field(..., max_length=254)
    first_name: str = Field(..., min_length=1, max_length=100)
    last_name: str = Field(..., min_length=1, max_length=100)
    phone: Optional[str] = None
    role: UserRole = UserRole.PATIENT
    insurance_info: Optional[str] = None
    medical_history: Optional[str] = None


class UserUpdate(CamelModel):
    """Profile fields a user can change after registration."""
    first_name: Optional[str] = Field(None, min_length=1, max_length=100)
    last_name: Optional[str] = Field(None, min_length=1, max_length=100)
    email: Optional[Email] = None
    phone: Optional[str] = None
    insurance_info: Optional[str] = None
    medical_history: Optional[str] = None


class User(UserCreate):
    """Stored user. `password` holds a bcrypt hash, never plaintext."""
    id: int
    created_at: datetime


# ---------------------------------------------------------------------------
# Doctors
# ---------------------------------------------------------------------------

class DoctorCreate(CamelModel):
    """Insert schema for doctors."""
    user_id: int = 0
    name: str = Field(..., min_length=1, max_length=200)
    specialty: Specialty
    location: str = Field(..., min_length=1)
    about: Optional[str] = None
    education: Optional[str] = None
    experience: str = "0"
    rating: str = "0"
    review_count: int = Field(0, ge=0)
    availability: Optional[str] = Field(
        None,
        description="JSON object of weekday -> list of HH:MM start times",
    )
    image_url: Optional[str] = None


class DoctorUpdate(CamelModel):
    user_id: Optional[int] = None
    name: Optional[str] = Field(None, min_length=1, max_length=200)
    specialty: Optional[Specialty] = None
    location: Optional[str] = Field(None, min_length=1)
    about: Optional[str] = None
    education: Optional[str] = None
    experience: Optional[str] = None
    rating: Optional[str] = None
    review_count: Optional[int] = Field(None, ge=0)
    availability: Optional[str] = None
    image_url: Optional[str] = None


class Doctor(DoctorCreate):
    id: int


# ---------------------------------------------------------------------------
# Appointments
# ---------------------------------------------------------------------------

class AppointmentCreate(CamelModel):
    """Insert schema for appointments.

    No availability or overlap checks are attached to this schema: any
    date may be booked for any doctor.
    """
    patient_id: int
    doctor_id: int
    date: datetime
    status: AppointmentStatus = AppointmentStatus.SCHEDULED
    type: AppointmentType
    reason: Optional[str] = None
    notes: Optional[str] = None


class AppointmentUpdate(CamelModel):
    """Fields a client may change on an existing appointment."""
    status: Optional[AppointmentStatus] = None
    notes: Optional[str] = None


class Appointment(AppointmentCreate):
    id: int
    created_at: datetime


# ---------------------------------------------------------------------------
# Reference data
# ---------------------------------------------------------------------------

class InsuranceOptionCreate(CamelModel):
    name: str = Field(..., min_length=1)
    type: str = Field(..., min_length=1)
    description: str = Field(..., min_length=1)
    coverage_details: Optional[str] = None
    contact_info: Optional[str] = None


class InsuranceOption(InsuranceOptionCreate):
    id: int


class AssistanceProgramCreate(CamelModel):
    name: str = Field(..., min_length=1)
    description: str = Field(..., min_length=1)
    eligibility_criteria: Optional[str] = None
    application_process: Optional[str] = None
    contact_info: Optional[str] = None


class AssistanceProgram(AssistanceProgramCreate):
    id: int

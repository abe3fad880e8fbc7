"""HTTP routes for the portal API.

Handlers validate input, resolve referenced entities, then write.
Errors are raised as PortalError subclasses and rendered by the
exception handlers registered in portal.api_server.
"""
from collections import Counter
from typing import List, Optional

from fastapi import APIRouter, Depends, Query, Response, status

from portal.api.dependencies import get_password_hasher, get_storage, parse_id
from portal.api.models import (
    DoctorAvailability,
    LoginRequest,
    PortalStats,
    UserProfile,
    UserPublic,
)
from portal.auth import PasswordHasher, authenticate
from portal.availability import TimeFilter, TimeOfDay, parse_availability
from portal.errors import BadRequestError, ConflictError, InvalidCredentialsError, NotFoundError
from portal.logging_config import get_logger
from portal.models import (
    Appointment,
    AppointmentCreate,
    AppointmentUpdate,
    AssistanceProgram,
    Doctor,
    DoctorCreate,
    DoctorUpdate,
    InsuranceOption,
    User,
    UserCreate,
    UserUpdate,
)
from portal.storage import MemStorage

logger = get_logger(__name__)

router = APIRouter(prefix="/api")

time_filter = TimeFilter()


def _changes(payload) -> dict:
    """Fields present in a partial update. Explicit nulls leave a field unchanged."""
    return payload.model_dump(exclude_unset=True, exclude_none=True)


def _public(user: User) -> UserPublic:
    return UserPublic.model_validate(user.model_dump())


def _profile(user: User) -> UserProfile:
    return UserProfile.model_validate(user.model_dump())


# ---------------------------------------------------------------------------
# Health
# ---------------------------------------------------------------------------

@router.get("/health", tags=["Health"])
async def health_check():
    """Health check endpoint for load balancers."""
    return {"status": "ok"}


# ---------------------------------------------------------------------------
# Users
# ---------------------------------------------------------------------------

@router.post(
    "/users/register",
    tags=["Users"],
    response_model=UserPublic,
    status_code=status.HTTP_201_CREATED,
)
async def register_user(
    payload: UserCreate,
    storage: MemStorage = Depends(get_storage),
    hasher: PasswordHasher = Depends(get_password_hasher),
):
    """
    Register a new user.

    Raises:
        400: Invalid input data
        409: Username or email already taken
    """
    if storage.get_user_by_username(payload.username):
        raise ConflictError("Username already exists")

    if storage.get_user_by_email(payload.email):
        raise ConflictError("Email already in use")

    hashed = payload.model_copy(update={"password": hasher.hash_password(payload.password)})
    user = storage.create_user(hashed)

    logger.info("user_registered", user_id=user.id, username=user.username, role=user.role)
    return _public(user)


@router.post("/users/login", tags=["Users"], response_model=UserPublic)
async def login_user(
    payload: LoginRequest,
    storage: MemStorage = Depends(get_storage),
    hasher: PasswordHasher = Depends(get_password_hasher),
):
    """Check credentials and return the user. No session or token is issued."""
    if not payload.username or not payload.password:
        raise BadRequestError("Username and password required")

    try:
        user = authenticate(storage, hasher, payload.username, payload.password)
    except InvalidCredentialsError:
        logger.warning("login_failed", username=payload.username)
        raise

    logger.info("user_logged_in", user_id=user.id)
    return _public(user)


@router.get("/users/{user_id}", tags=["Users"], response_model=UserProfile)
async def get_user(user_id: str, storage: MemStorage = Depends(get_storage)):
    user = storage.get_user(parse_id(user_id, "user"))
    if user is None:
        raise NotFoundError("User not found")
    return _profile(user)


@router.patch("/users/{user_id}", tags=["Users"], response_model=UserProfile)
async def update_user(
    user_id: str,
    payload: UserUpdate,
    storage: MemStorage = Depends(get_storage),
):
    """Update profile fields. The new email must not belong to another user."""
    uid = parse_id(user_id, "user")
    if storage.get_user(uid) is None:
        raise NotFoundError("User not found")

    changes = _changes(payload)
    if "email" in changes:
        holder = storage.get_user_by_email(changes["email"])
        if holder is not None and holder.id != uid:
            raise ConflictError("Email already in use")

    user = storage.update_user(uid, changes)
    logger.info("user_updated", user_id=uid, fields=sorted(changes))
    return _profile(user)


# ---------------------------------------------------------------------------
# Doctors
# ---------------------------------------------------------------------------

@router.get("/doctors", tags=["Doctors"], response_model=List[Doctor])
async def list_doctors(
    specialty: Optional[str] = None,
    location: Optional[str] = None,
    storage: MemStorage = Depends(get_storage),
):
    """
    List doctors.

    `specialty` (exact match) takes precedence over `location`
    (substring match); with neither, every doctor is returned.
    """
    if specialty:
        return storage.get_doctors_by_specialty(specialty)
    if location:
        return storage.get_doctors_by_location(location)
    return storage.get_doctors()


@router.post(
    "/doctors",
    tags=["Doctors"],
    response_model=Doctor,
    status_code=status.HTTP_201_CREATED,
)
async def create_doctor(payload: DoctorCreate, storage: MemStorage = Depends(get_storage)):
    doctor = storage.create_doctor(payload)
    logger.info("doctor_created", doctor_id=doctor.id, specialty=doctor.specialty)
    return doctor


@router.get("/doctors/{doctor_id}", tags=["Doctors"], response_model=Doctor)
async def get_doctor(doctor_id: str, storage: MemStorage = Depends(get_storage)):
    doctor = storage.get_doctor(parse_id(doctor_id, "doctor"))
    if doctor is None:
        raise NotFoundError("Doctor not found")
    return doctor


@router.patch("/doctors/{doctor_id}", tags=["Doctors"], response_model=Doctor)
async def update_doctor(
    doctor_id: str,
    payload: DoctorUpdate,
    storage: MemStorage = Depends(get_storage),
):
    did = parse_id(doctor_id, "doctor")
    doctor = storage.update_doctor(did, _changes(payload))
    if doctor is None:
        raise NotFoundError("Doctor not found")
    logger.info("doctor_updated", doctor_id=did)
    return doctor


@router.delete(
    "/doctors/{doctor_id}",
    tags=["Doctors"],
    status_code=status.HTTP_204_NO_CONTENT,
    response_class=Response,
)
async def delete_doctor(doctor_id: str, storage: MemStorage = Depends(get_storage)):
    """Delete a doctor. Existing appointments keep their doctorId."""
    did = parse_id(doctor_id, "doctor")
    if not storage.delete_doctor(did):
        raise NotFoundError("Doctor not found")
    logger.info("doctor_deleted", doctor_id=did)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.get(
    "/doctors/{doctor_id}/availability",
    tags=["Doctors"],
    response_model=DoctorAvailability,
)
async def get_doctor_availability(
    doctor_id: str,
    day: Optional[str] = None,
    time_of_day: TimeOfDay = Query(TimeOfDay.ANY, alias="timeOfDay"),
    storage: MemStorage = Depends(get_storage),
):
    """
    Weekly slots from the doctor's stored availability.

    Informational only: booked appointments are not subtracted and
    booking does not consult these slots.
    """
    did = parse_id(doctor_id, "doctor")
    doctor = storage.get_doctor(did)
    if doctor is None:
        raise NotFoundError("Doctor not found")

    slots = parse_availability(doctor.availability)
    slots = time_filter.filter_by_day(slots, day)
    slots = time_filter.filter_by_time_of_day(slots, time_of_day)
    return DoctorAvailability(doctor_id=did, slots=slots)


# ---------------------------------------------------------------------------
# Appointments
# ---------------------------------------------------------------------------

@router.post(
    "/appointments",
    tags=["Appointments"],
    response_model=Appointment,
    status_code=status.HTTP_201_CREATED,
)
async def create_appointment(
    payload: AppointmentCreate,
    storage: MemStorage = Depends(get_storage),
):
    """
    Book an appointment.

    The doctor is resolved first, then the patient, then the appointment
    is stored. There is no availability or double-booking check.
    """
    if storage.get_doctor(payload.doctor_id) is None:
        raise NotFoundError("Doctor not found")

    if storage.get_user(payload.patient_id) is None:
        raise NotFoundError("Patient not found")

    appointment = storage.create_appointment(payload)
    logger.info(
        "appointment_created",
        appointment_id=appointment.id,
        doctor_id=appointment.doctor_id,
        patient_id=appointment.patient_id,
        type=appointment.type,
    )
    return appointment


@router.get(
    "/appointments/patient/{patient_id}",
    tags=["Appointments"],
    response_model=List[Appointment],
)
async def list_patient_appointments(patient_id: str, storage: MemStorage = Depends(get_storage)):
    return storage.get_appointments_by_patient(parse_id(patient_id, "patient"))


@router.get(
    "/appointments/doctor/{doctor_id}",
    tags=["Appointments"],
    response_model=List[Appointment],
)
async def list_doctor_appointments(doctor_id: str, storage: MemStorage = Depends(get_storage)):
    return storage.get_appointments_by_doctor(parse_id(doctor_id, "doctor"))


@router.get("/appointments/{appointment_id}", tags=["Appointments"], response_model=Appointment)
async def get_appointment(appointment_id: str, storage: MemStorage = Depends(get_storage)):
    appointment = storage.get_appointment(parse_id(appointment_id, "appointment"))
    if appointment is None:
        raise NotFoundError("Appointment not found")
    return appointment


@router.patch("/appointments/{appointment_id}", tags=["Appointments"], response_model=Appointment)
async def update_appointment(
    appointment_id: str,
    payload: AppointmentUpdate,
    storage: MemStorage = Depends(get_storage),
):
    """Change an appointment's status and/or notes (e.g. cancel it)."""
    aid = parse_id(appointment_id, "appointment")
    if storage.get_appointment(aid) is None:
        raise NotFoundError("Appointment not found")

    changes = _changes(payload)
    appointment = storage.update_appointment(aid, changes)
    logger.info("appointment_updated", appointment_id=aid, **changes)
    return appointment


# ---------------------------------------------------------------------------
# Insurance and assistance programs
# ---------------------------------------------------------------------------

@router.get("/insurance", tags=["Insurance"], response_model=List[InsuranceOption])
async def list_insurance_options(storage: MemStorage = Depends(get_storage)):
    return storage.get_insurance_options()


@router.get("/insurance/{option_id}", tags=["Insurance"], response_model=InsuranceOption)
async def get_insurance_option(option_id: str, storage: MemStorage = Depends(get_storage)):
    option = storage.get_insurance_option(parse_id(option_id, "insurance"))
    if option is None:
        raise NotFoundError("Insurance option not found")
    return option


@router.get(
    "/assistance-programs",
    tags=["Insurance"],
    response_model=List[AssistanceProgram],
)
async def list_assistance_programs(storage: MemStorage = Depends(get_storage)):
    return storage.get_assistance_programs()


@router.get(
    "/assistance-programs/{program_id}",
    tags=["Insurance"],
    response_model=AssistanceProgram,
)
async def get_assistance_program(program_id: str, storage: MemStorage = Depends(get_storage)):
    program = storage.get_assistance_program(parse_id(program_id, "program"))
    if program is None:
        raise NotFoundError("Assistance program not found")
    return program


# ---------------------------------------------------------------------------
# Admin
# ---------------------------------------------------------------------------

@router.get("/admin/stats", tags=["Admin"], response_model=PortalStats)
async def admin_stats(storage: MemStorage = Depends(get_storage)):
    """Collection counts for the admin dashboard."""
    appointments = storage.get_appointments()
    by_status = Counter(a.status for a in appointments)
    return PortalStats(
        doctors=len(storage.get_doctors()),
        users=len(storage.list_users()),
        appointments=len(appointments),
        appointments_by_status=dict(by_status),
    )

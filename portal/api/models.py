"""Pydantic models for API request/response validation."""
from datetime import datetime
from typing import Dict, List, Optional
from pydantic import BaseModel, ConfigDict, Field

from portal.models import CamelModel, UserRole


class LoginRequest(BaseModel):
    """Request schema for /api/users/login.

    Fields are optional so a missing one is reported as a plain 400
    rather than a schema validation error.
    """
    username: Optional[str] = None
    password: Optional[str] = None

    model_config = ConfigDict(
        json_schema_extra={
            "example": {"username": "jdoe", "password": "s3cret!"}
        }
    )


class UserPublic(CamelModel):
    """User fields returned after register and login."""
    id: int
    username: str
    email: str
    first_name: str
    last_name: str
    role: UserRole


class UserProfile(UserPublic):
    """Full user record minus the password hash."""
    phone: Optional[str] = None
    insurance_info: Optional[str] = None
    medical_history: Optional[str] = None
    created_at: datetime


class AvailabilitySlot(BaseModel):
    day: str = Field(..., description="Lowercase weekday name")
    time: str = Field(..., description="Start time, HH:MM")


class DoctorAvailability(CamelModel):
    """Weekly slots parsed from a doctor's stored availability."""
    doctor_id: int
    slots: List[AvailabilitySlot] = Field(default_factory=list)


class PortalStats(CamelModel):
    """Counts shown on the admin dashboard."""
    doctors: int
    users: int
    appointments: int
    appointments_by_status: Dict[str, int] = Field(default_factory=dict)


class ErrorResponse(BaseModel):
    """Error response schema."""
    message: str = Field(..., description="Error message")
    errors: Optional[str] = Field(None, description="Formatted validation errors")
    code: Optional[str] = Field(None, description="Error code")

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "message": "Invalid input data",
                "errors": "email: Value error, Invalid email format",
                "code": "VALIDATION_ERROR"
            }
        }
    )

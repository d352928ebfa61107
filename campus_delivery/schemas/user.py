"""User profile schemas."""

from pydantic import BaseModel, ConfigDict, Field

FULL_NAME_PATTERN = r"^[A-Za-z ]+$"
PHONE_PATTERN = r"^\d{11}$"


class CustomerDetailsUpdate(BaseModel):
    """Delivery contact details a customer must provide before checkout."""

    full_name: str = Field(min_length=3, max_length=50, pattern=FULL_NAME_PATTERN)
    phone_number: str = Field(pattern=PHONE_PATTERN)


class ProfileResponse(BaseModel):
    username: str
    email: str
    full_name: str | None = None
    phone_number: str | None = None
    is_uni_student: bool
    university: str | None = None
    student_id: str | None = None
    is_hostelite: bool
    hostel_name: str | None = None
    room_number: str | None = None

    model_config = ConfigDict(from_attributes=True)


class ProfileUpdate(BaseModel):
    """Full profile replacement; username and email stay unique across users."""

    username: str = Field(min_length=3, max_length=128)
    email: str = Field(min_length=3, max_length=255)
    full_name: str | None = Field(default=None, min_length=3, max_length=50, pattern=FULL_NAME_PATTERN)
    phone_number: str | None = Field(default=None, pattern=PHONE_PATTERN)
    is_uni_student: bool = False
    university: str | None = Field(default=None, max_length=100)
    student_id: str | None = Field(default=None, max_length=50)
    is_hostelite: bool = False
    hostel_name: str | None = Field(default=None, max_length=100)
    room_number: str | None = Field(default=None, max_length=20)


class RiderAvailability(BaseModel):
    is_rider_available: bool

"""Restaurant API schemas."""

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, model_validator

HEX_COLOR_PATTERN = r"^#[A-Fa-f0-9]{6}$"
ORDER_CODE_PATTERN = r"^[A-Z][A-Z0-9]*$"
CITY_PATTERN = r"^[A-Za-z ]+$"


def _check_window_pair(start: int | None, end: int | None) -> None:
    if (start is None) != (end is None):
        raise ValueError("online_start and online_end must be provided together")


class RestaurantCreate(BaseModel):
    """Payload submitted by an owner to register a restaurant."""

    name: str = Field(min_length=3, max_length=25)
    logo_image_url: str = Field(min_length=1, max_length=500)
    accent_color: str = Field(pattern=HEX_COLOR_PATTERN)
    order_code: str = Field(min_length=1, max_length=4, pattern=ORDER_CODE_PATTERN)
    location_lat: float = Field(ge=-90, le=90)
    location_lng: float = Field(ge=-180, le=180)
    location_address: str = Field(min_length=10, max_length=100)
    location_city: str = Field(min_length=1, max_length=50, pattern=CITY_PATTERN)
    online_start: int | None = Field(default=None, ge=0, le=1439)
    online_end: int | None = Field(default=None, ge=0, le=1439)

    @model_validator(mode="after")
    def validate_window(self) -> "RestaurantCreate":
        _check_window_pair(self.online_start, self.online_end)
        return self


class RestaurantUpdate(BaseModel):
    """Partial update; the order code is fixed once assigned."""

    name: str | None = Field(default=None, min_length=3, max_length=25)
    logo_image_url: str | None = Field(default=None, min_length=1, max_length=500)
    accent_color: str | None = Field(default=None, pattern=HEX_COLOR_PATTERN)
    location_lat: float | None = Field(default=None, ge=-90, le=90)
    location_lng: float | None = Field(default=None, ge=-180, le=180)
    location_address: str | None = Field(default=None, min_length=10, max_length=100)
    location_city: str | None = Field(default=None, min_length=1, max_length=50, pattern=CITY_PATTERN)
    online_start: int | None = Field(default=None, ge=0, le=1439)
    online_end: int | None = Field(default=None, ge=0, le=1439)

    @model_validator(mode="after")
    def validate_window(self) -> "RestaurantUpdate":
        _check_window_pair(self.online_start, self.online_end)
        if (self.location_lat is None) != (self.location_lng is None):
            raise ValueError("location_lat and location_lng must be provided together")
        return self


class RestaurantOverrideRequest(BaseModel):
    force_online_override: Literal[-1, 0, 1]


class RestaurantVerifyRequest(BaseModel):
    is_verified: bool


class RestaurantRead(BaseModel):
    """Restaurant snapshot safe to cache; carries no derived status."""

    id: int
    name: str
    logo_image_url: str
    accent_color: str
    order_code: str
    location_lat: float
    location_lng: float
    location_address: str
    location_city: str
    online_start: int | None
    online_end: int | None
    force_online_override: int
    is_verified: bool
    rating: float
    rating_count: int
    owner_id: int

    model_config = ConfigDict(from_attributes=True)


class RestaurantResponse(RestaurantRead):
    """Restaurant with its online status evaluated at response time."""

    online: bool


class RestaurantCreateResponse(BaseModel):
    restaurant: RestaurantResponse
    email_sent: bool


class RestaurantDeleteResponse(BaseModel):
    success: bool = True
    message: str
    warning: str | None = None

"""Menu API schemas."""

from decimal import Decimal

from pydantic import BaseModel, ConfigDict, Field, model_validator

from campus_delivery.schemas.restaurant import RestaurantResponse


class OptionChoice(BaseModel):
    name: str = Field(min_length=1, max_length=50)
    additional_price: Decimal = Field(ge=0, max_digits=10, decimal_places=2)


class OptionGroup(BaseModel):
    """Named group of alternative choices, e.g. "Size": Small / Large."""

    option_header: str = Field(min_length=1, max_length=30)
    required: bool = False
    choices: list[OptionChoice] = Field(min_length=1)


class MenuItemCreate(BaseModel):
    """Payload for adding a dish to a restaurant menu."""

    name: str = Field(min_length=2, max_length=50)
    description: str = Field(min_length=10, max_length=300)
    base_price: Decimal = Field(ge=1, le=100000, max_digits=10, decimal_places=2)
    image_url: str = Field(min_length=1, max_length=500)
    category: str = Field(min_length=1, max_length=30)
    options: list[OptionGroup] = Field(default_factory=list)
    available: bool = True
    force_online_override: bool = False
    online_start: int | None = Field(default=None, ge=0, le=1439)
    online_end: int | None = Field(default=None, ge=0, le=1439)

    @model_validator(mode="after")
    def validate_window(self) -> "MenuItemCreate":
        if (self.online_start is None) != (self.online_end is None):
            raise ValueError("online_start and online_end must be provided together")
        if self.force_online_override and (self.online_start is None or self.online_start == self.online_end):
            raise ValueError("Start and end time cannot be the same")
        headers = [group.option_header for group in self.options]
        if len(headers) != len(set(headers)):
            raise ValueError("Option headers must be unique")
        return self


class MenuItemUpdate(BaseModel):
    """Partial update for a menu item; window rules are checked after merging."""

    name: str | None = Field(default=None, min_length=2, max_length=50)
    description: str | None = Field(default=None, min_length=10, max_length=300)
    base_price: Decimal | None = Field(default=None, ge=1, le=100000, max_digits=10, decimal_places=2)
    image_url: str | None = Field(default=None, min_length=1, max_length=500)
    category: str | None = Field(default=None, min_length=1, max_length=30)
    options: list[OptionGroup] | None = None
    available: bool | None = None
    force_online_override: bool | None = None
    online_start: int | None = Field(default=None, ge=0, le=1439)
    online_end: int | None = Field(default=None, ge=0, le=1439)


class MenuItemRead(BaseModel):
    """Menu item snapshot safe to cache."""

    id: int
    restaurant_id: int
    name: str
    description: str
    base_price: Decimal
    image_url: str
    category: str
    options: list[OptionGroup]
    available: bool
    force_online_override: bool
    online_start: int | None
    online_end: int | None

    model_config = ConfigDict(from_attributes=True)


class MenuItemResponse(MenuItemRead):
    online: bool


class PublicMenuResponse(BaseModel):
    """Public menu view of a verified restaurant."""

    restaurant: RestaurantResponse
    items: list[MenuItemResponse]
    message: str | None = None


class MenuItemDeleteResponse(BaseModel):
    success: bool = True
    message: str
    warning: str | None = None

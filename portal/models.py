from enum import Enum
from typing import Any, Dict, List, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator


class PropertyStatus(str, Enum):
    AVAILABLE = "disponible"
    PENDING = "pendiente"
    SOLD = "vendida"
    RENTED = "rentada"


class PropertyType(str, Enum):
    HOUSE = "casa"
    CONDO = "condominio"
    APARTMENT = "departamento"
    TOWNHOUSE = "townhouse"
    DUPLEX = "duplex"
    OTHER = "otro"


# ---------- Listing record (opaque: unknown keys are kept) ----------

# Backend rows are not validated upstream; a scalar may arrive as text or number.
Scalar = Optional[Union[str, int, float]]
Flag = Optional[Union[bool, str, int]]


class _Payload(BaseModel):
    model_config = ConfigDict(extra="allow")


class Address(_Payload):
    street: Scalar = None
    city: Scalar = None
    state: Scalar = None
    zip_code: Scalar = None
    full_address: Scalar = None


class Coordinates(_Payload):
    latitude: Scalar = None
    longitude: Scalar = None


class PropertyDetails(_Payload):
    square_feet: Scalar = None
    bedrooms: Scalar = None
    bathrooms: Scalar = None
    floors: Scalar = None
    property_type: Scalar = None
    year_built: Scalar = None
    lot_size: Scalar = None
    garage_spaces: Scalar = None


class Amenities(_Payload):
    has_basement: Flag = None
    has_pool: Flag = None
    has_garden: Flag = None
    features: Optional[List[Any]] = None


class Financial(_Payload):
    price: Scalar = None
    price_per_sqft: Scalar = None
    monthly_rent: Scalar = None
    property_taxes: Scalar = None


class Owner(_Payload):
    id: Scalar = None
    name: Scalar = None
    email: Scalar = None


class Property(_Payload):
    id: Optional[Union[int, str]] = None
    title: Scalar = None
    description: Scalar = None
    address: Address = Field(default_factory=Address)
    coordinates: Optional[Coordinates] = None
    property_details: PropertyDetails = Field(default_factory=PropertyDetails)
    amenities: Optional[Amenities] = None
    financial: Financial = Field(default_factory=Financial)
    status: Scalar = Field(None, description="disponible | pendiente | vendida | rentada")
    metadata: Any = None
    owner: Optional[Owner] = None
    created_at: Scalar = None
    updated_at: Scalar = None

    @field_validator("address", "property_details", "financial", mode="before")
    @classmethod
    def _missing_group(cls, v, info):
        """null groups read as empty; a plain string address is taken as the full address."""
        if v is None:
            return {}
        if info.field_name == "address" and isinstance(v, str):
            return {"full_address": v}
        return v


# ---------- Paged result ----------

class PaginationLink(BaseModel):
    url: Optional[str] = None
    label: str = ""
    page: Optional[int] = None
    active: bool = False


class PageTotals(BaseModel):
    """`meta.total` after normalization: rows on this page and rows overall."""
    page_count: int = 0
    total_count: int = 0

    @classmethod
    def from_raw(cls, raw: Any) -> "PageTotals":
        """
        The backend sends either a bare count or [page_count, total_count].
          [8, 42] -> (8, 42)
          [8]     -> (8, 8)
          42      -> (42, 42)
          None    -> (0, 0)
        """
        if isinstance(raw, PageTotals):
            return raw
        if isinstance(raw, dict):
            return cls(**raw)
        if isinstance(raw, (list, tuple)):
            page_count = int(raw[0] or 0) if len(raw) > 0 else 0
            second = int(raw[1] or 0) if len(raw) > 1 else 0
            return cls(page_count=page_count, total_count=second or page_count)
        count = int(raw or 0)
        return cls(page_count=count, total_count=count)


class Meta(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    total: PageTotals = Field(default_factory=PageTotals)
    filters: Optional[Dict[str, Any]] = None
    current_page: int = 1
    from_: Optional[int] = Field(None, alias="from")
    last_page: int = 1
    links: List[PaginationLink] = Field(default_factory=list)
    path: Optional[str] = None
    per_page: Optional[int] = None
    to: Optional[int] = None

    @field_validator("total", mode="before")
    @classmethod
    def _normalize_total(cls, v):
        return PageTotals.from_raw(v)


class Links(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    first: Optional[str] = None
    last: Optional[str] = None
    prev: Optional[str] = None
    next: Optional[str] = None
    self_: Optional[str] = Field(None, alias="self")


class PropertiesResponse(BaseModel):
    data: List[Property] = Field(default_factory=list)
    meta: Optional[Meta] = None
    links: Optional[Links] = None


class PropertyStats(_Payload):
    totalProperties: int = 0
    averagePrice: float = 0
    totalValue: float = 0
    byType: Optional[Dict[str, int]] = None
    byStatus: Optional[Dict[str, int]] = None


# ---------- Requests ----------

class SearchParams(BaseModel):
    q: Optional[str] = None
    city: Optional[str] = None
    property_type: Optional[str] = None
    status: Optional[str] = None
    bedrooms: Optional[int] = None
    bathrooms: Optional[int] = None
    min_price: Optional[float] = None
    max_price: Optional[float] = None
    sort_by: Optional[str] = None
    sort_direction: Optional[Literal["asc", "desc"]] = None
    per_page: Optional[int] = None
    page: Optional[int] = None
    latitude: Optional[float] = None
    longitude: Optional[float] = None
    radius: Optional[float] = None


class CreatePropertyData(BaseModel):
    title: str
    description: Optional[str] = None
    address: str
    city: str
    state: str
    zip_code: str
    square_feet: float
    bedrooms: int
    bathrooms: float
    floors: Optional[int] = None
    price: float
    property_type: PropertyType
    status: Optional[PropertyStatus] = None
    year_built: Optional[int] = None
    has_basement: Optional[bool] = None
    has_pool: Optional[bool] = None
    has_garden: Optional[bool] = None
    features: Optional[List[str]] = None
    metadata: Optional[Dict[str, Any]] = None

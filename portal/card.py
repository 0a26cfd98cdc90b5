import logging
from dataclasses import dataclass, field
from typing import Any, Callable, List, Optional

from portal.models import Property

LOG = logging.getLogger("portal")

PROPERTY_TYPE_LABELS = {
    "casa": "Casa",
    "departamento": "Departamento",
    "condominio": "Condominio",
    "townhouse": "Casa en Condominio",
    "duplex": "Dúplex",
    "otro": "Otro",
}

STATUS_LABELS = {
    "disponible": "Disponible",
    "pendiente": "Pendiente",
    "vendida": "Vendida",
    "rentada": "Rentada",
}

STATUS_TONES = {
    "disponible": "green",
    "pendiente": "yellow",
    "vendida": "red",
    "rentada": "blue",
}

MAX_FEATURES = 3


def format_price(value: Any) -> str:
    """MXN currency, grouped thousands, at most two decimals and none when integral: $1,250,000."""
    if value is None or value == "":
        return ""
    try:
        price = float(value)
    except (TypeError, ValueError):
        return str(value)
    digits = f"{abs(price):,.2f}".rstrip("0").rstrip(".")
    sign = "-" if price < 0 else ""
    return f"{sign}${digits}"


def format_number(value: Any) -> str:
    try:
        number = float(value)
    except (TypeError, ValueError):
        return str(value)
    if number.is_integer():
        return f"{int(number):,}"
    return f"{number:,}"


def _text(value: Any) -> str:
    return "" if value is None else str(value)


def _amount(value: Any):
    """Numeric detail as a float; text that is not a number is shown as sent."""
    try:
        return float(value)
    except (TypeError, ValueError):
        return value or None


def translate_property_type(value: Any) -> str:
    if value is None:
        return ""
    return PROPERTY_TYPE_LABELS.get(value, str(value))


def translate_status(value: Any) -> str:
    if value is None:
        return ""
    if value not in STATUS_LABELS:
        LOG.warning("Unknown status value received: %s", value)
    return STATUS_LABELS.get(value, str(value))


def _plural(count: Any, one: str, many: str) -> str:
    return f"{format_number(count)} {one if count == 1 else many}"


@dataclass
class CardSummary:
    title: str
    price: str
    address: str
    details: List[str] = field(default_factory=list)
    type_label: str = ""
    status_label: str = ""
    status_tone: str = "gray"
    description: Optional[str] = None
    features: List[str] = field(default_factory=list)
    more_features: Optional[str] = None
    price_per_sqft: Optional[str] = None
    has_image: bool = False


def render_card(prop: Property) -> CardSummary:
    details = prop.property_details
    features = (prop.amenities.features if prop.amenities else None) or []

    chips = []
    if bedrooms := _amount(details.bedrooms):
        chips.append(_plural(bedrooms, "recámara", "recámaras"))
    if bathrooms := _amount(details.bathrooms):
        chips.append(_plural(bathrooms, "baño", "baños"))
    if area := _amount(details.square_feet):
        chips.append(f"{format_number(area)} m²")

    per_sqft = prop.financial.price_per_sqft
    return CardSummary(
        title=_text(prop.title),
        price=format_price(prop.financial.price),
        address=_text(prop.address.full_address),
        details=chips,
        type_label=translate_property_type(details.property_type),
        status_label=translate_status(prop.status),
        status_tone=STATUS_TONES.get(prop.status, "gray"),
        description=_text(prop.description) or None,
        features=[_text(f).replace("_", " ") for f in features[:MAX_FEATURES]],
        more_features=f"+{len(features) - MAX_FEATURES} más" if len(features) > MAX_FEATURES else None,
        price_per_sqft=f"{format_price(per_sqft)} por m²" if per_sqft else None,
        has_image=bool(features),
    )


class PropertyCard:
    """One record and its click handler."""

    def __init__(self, prop: Property, on_click: Optional[Callable[[Property], Any]] = None):
        self.property = prop
        self.on_click = on_click

    @property
    def summary(self) -> CardSummary:
        return render_card(self.property)

    def click(self) -> None:
        if self.on_click:
            self.on_click(self.property)

"""Shipping details collected at the start of checkout.

``ShippingForm`` is the mutable form the buyer fills in field by field.
``ShippingInfo`` is the validated, immutable result the rest of checkout uses.
"""

from dataclasses import dataclass, fields

from protean.exceptions import ValidationError
from protean.fields import String

from ordering.domain import ordering

# Field name -> label used in messages, in form order
REQUIRED_FIELDS = {
    "full_name": "full name",
    "address": "address",
    "city": "city",
    "postal_code": "postal code",
    "country": "country",
}
OPTIONAL_FIELDS = ("email", "phone_number", "state")


@ordering.value_object
class ShippingInfo:
    full_name = String(required=True, max_length=200, sanitize=False)
    address = String(required=True, max_length=255, sanitize=False)
    city = String(required=True, max_length=100, sanitize=False)
    postal_code = String(required=True, max_length=20, sanitize=False)
    country = String(required=True, max_length=100, sanitize=False)
    email = String(max_length=254, sanitize=False)
    phone_number = String(max_length=30, sanitize=False)
    state = String(max_length=100, sanitize=False)

    @property
    def first_name(self) -> str:
        return self.full_name.split(" ", 1)[0]

    @property
    def last_name(self) -> str:
        parts = self.full_name.split(" ", 1)
        return parts[1] if len(parts) > 1 else ""


@dataclass
class ShippingForm:
    full_name: str = ""
    address: str = ""
    city: str = ""
    postal_code: str = ""
    country: str = ""
    email: str = ""
    phone_number: str = ""
    state: str = ""

    def update(self, **values) -> None:
        known = {f.name for f in fields(self)}
        unknown = sorted(set(values) - known)
        if unknown:
            raise ValidationError({name: ["Unknown shipping field"] for name in unknown})

        for name, value in values.items():
            setattr(self, name, "" if value is None else str(value))

    def missing_fields(self) -> list[str]:
        return [name for name in REQUIRED_FIELDS if not getattr(self, name).strip()]

    def validate(self) -> ShippingInfo:
        """Return the trimmed ``ShippingInfo`` or raise with one message per empty field."""
        missing = self.missing_fields()
        if missing:
            raise ValidationError({name: [f"Please fill in your {REQUIRED_FIELDS[name]}"] for name in missing})

        values = {name: getattr(self, name).strip() for name in REQUIRED_FIELDS}
        values.update({name: getattr(self, name).strip() or None for name in OPTIONAL_FIELDS})
        return ShippingInfo(**values)

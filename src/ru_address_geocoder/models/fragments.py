"""Address fragment model.

AddressFragments is the typed bag of pieces the decomposer pulls out of a
raw comma-separated address string.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

from ru_address_geocoder.models.enums import FRAGMENT_FIELDS, AddressField


class AddressFragments(BaseModel):
    """Decomposed Russian address.

    Each populated field is one of the original comma-delimited parts of the
    input, except that a settlement may have gained a type prefix such as
    ``"г. "``. Fields are independent of each other; any of them may be None.
    """

    model_config = ConfigDict(frozen=True, str_strip_whitespace=True)

    region: str | None = Field(
        default=None,
        description="Oblast, krai or republic, e.g. 'Алтайский край'",
    )
    settlement: str | None = Field(
        default=None,
        description="Populated place with its type prefix, e.g. 'г. Барнаул'",
    )
    street: str | None = Field(
        default=None,
        description="Street with its type prefix, e.g. 'ул. Ленина'",
    )
    house: str | None = Field(
        default=None,
        description="House number part, e.g. '10' or 'д. 5к2'",
    )

    def get(self, field: AddressField | str) -> str | None:
        """Return the value of a fragment by field name."""
        key = field.value if isinstance(field, AddressField) else field
        return getattr(self, key)

    @property
    def is_empty(self) -> bool:
        """True when no fragment was recognised."""
        return all(self.get(name) is None for name in FRAGMENT_FIELDS)

    def to_dict(self) -> dict[str, str | None]:
        """Convert to a plain dictionary keyed by fragment name."""
        return {name: self.get(name) for name in FRAGMENT_FIELDS}

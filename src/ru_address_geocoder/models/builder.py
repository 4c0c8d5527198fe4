"""Fluent builder for AddressFragments.

Useful when fragments come from structured sources (separate spreadsheet
columns, form fields) rather than from a single free-form string.
"""

from __future__ import annotations

from typing import Self

from ru_address_geocoder.models.enums import AddressField
from ru_address_geocoder.models.errors import RuGeocoderError
from ru_address_geocoder.models.fragments import AddressFragments


class FragmentsBuilder:
    """Builder for programmatic AddressFragments construction.

    Example:
        >>> fragments = (
        ...     FragmentsBuilder()
        ...     .with_region("Алтайский край")
        ...     .with_settlement("г. Барнаул")
        ...     .with_street("ул. Попова")
        ...     .with_house("114/1")
        ...     .build()
        ... )
    """

    def __init__(self) -> None:
        self._data: dict[str, str | None] = {}

    def with_region(self, region: str) -> Self:
        """Set the region (oblast, krai, republic)."""
        self._data[AddressField.REGION.value] = region
        return self

    def with_settlement(self, settlement: str) -> Self:
        """Set the settlement, including its type prefix."""
        self._data[AddressField.SETTLEMENT.value] = settlement
        return self

    def with_street(self, street: str) -> Self:
        """Set the street, including its type prefix."""
        self._data[AddressField.STREET.value] = street
        return self

    def with_house(self, house: str) -> Self:
        self._data[AddressField.HOUSE.value] = house
        return self

    def with_field(self, field: AddressField | str, value: str | None) -> Self:
        """Set any fragment by name.

        Raises:
            RuGeocoderError: If the field name is not a known fragment.
        """
        try:
            key = AddressField(field).value
        except ValueError as exc:
            raise RuGeocoderError.build(
                "unknown_field",
                "Unknown address fragment: {field}",
                {"field": str(field)},
            ) from exc
        self._data[key] = value
        return self

    def reset(self) -> Self:
        """Clear all fragments set so far."""
        self._data.clear()
        return self

    def build(self) -> AddressFragments:
        """Build the AddressFragments; blank values become None."""
        cleaned = {k: (v if v and v.strip() else None) for k, v in self._data.items()}
        return AddressFragments(**cleaned)

from __future__ import annotations

from typing import TYPE_CHECKING

from ru_address_geocoder.models import FRAGMENT_FIELDS

if TYPE_CHECKING:
    import pandas as pd

    from ru_address_geocoder.service import GeocodingService

GEOCODE_COLUMNS = ["success", "lat", "lng", "label", "source", "approximate", "error", "query"]


class RuAddressAccessor:
    """Pandas accessor for Russian address analysis.

    Usage:
        >>> from ru_address_geocoder.pandas_ext import register_accessor
        >>> register_accessor()
        >>> s = pd.Series(["Алтайский край, Мамонтово, ул. Советская, 10"])
        >>> s.ru_addr.decompose()
    """

    def __init__(self, pandas_obj: pd.Series) -> None:
        self._obj = pandas_obj
        self._service: GeocodingService | None = None

    def _get_service(self) -> GeocodingService:
        if self._service is None:
            from ru_address_geocoder.service import GeocodingService

            self._service = GeocodingService()
        return self._service

    def decompose(self, *, service: GeocodingService | None = None) -> pd.DataFrame:
        """Decompose every address into one column per fragment.

        Missing or empty values produce a row of None.
        """
        import pandas as pd

        svc = service or self._get_service()
        rows = [
            svc.decompose(value).to_dict()
            if pd.notna(value) and value
            else {name: None for name in FRAGMENT_FIELDS}
            for value in self._obj
        ]
        return pd.DataFrame(rows, index=self._obj.index, columns=FRAGMENT_FIELDS)

    def candidates(self, *, service: GeocodingService | None = None) -> pd.Series:
        """Candidate query lists, one per address."""
        import pandas as pd

        svc = service or self._get_service()
        return self._obj.apply(
            lambda value: svc.candidates(value) if pd.notna(value) and value else []
        )

    def quality(self, *, service: GeocodingService | None = None) -> pd.DataFrame:
        """Quality score and grade for every address."""
        import pandas as pd

        svc = service or self._get_service()
        rows = []
        for value in self._obj:
            if pd.notna(value) and value:
                assessment = svc.analyze(value).quality
                if assessment is not None:
                    rows.append({"score": assessment.score, "quality": assessment.quality.value})
                    continue
            rows.append({"score": None, "quality": None})
        return pd.DataFrame(rows, index=self._obj.index, columns=["score", "quality"])


def register_accessor(name: str = "ru_addr") -> None:
    """Register the address accessor on pandas Series.

    After calling this, you can use:
        >>> series.ru_addr.decompose()
    """
    import pandas as pd

    if not hasattr(pd.Series, name):
        pd.api.extensions.register_series_accessor(name)(RuAddressAccessor)


def decompose_dataframe(
    df: pd.DataFrame,
    address_column: str,
    prefix: str = "",
    inplace: bool = False,
    service: GeocodingService | None = None,
) -> pd.DataFrame:
    """Add one column per address fragment to a DataFrame.

    Args:
        df: Input DataFrame containing addresses.
        address_column: Name of the column containing address strings.
        prefix: Prefix to add to new column names.
        inplace: If True, modify DataFrame in place.
        service: Optional GeocodingService to use.

    Returns:
        DataFrame with region, settlement, street and house columns added.
    """
    if address_column not in df.columns:
        raise KeyError(f"Column not found: {address_column}")

    result = df if inplace else df.copy()
    fragments = RuAddressAccessor(df[address_column]).decompose(service=service)
    for name in FRAGMENT_FIELDS:
        result[f"{prefix}{name}"] = fragments[name]
    return result


def geocode_dataframe(
    df: pd.DataFrame,
    address_column: str,
    prefix: str = "",
    fallback: bool = False,
    service: GeocodingService | None = None,
) -> pd.DataFrame:
    """Geocode an address column sequentially and add result columns.

    Rows are resolved one at a time with the service's configured delay
    between requests. Added columns are listed in GEOCODE_COLUMNS.
    """
    import pandas as pd

    from ru_address_geocoder.service import get_default_service

    if address_column not in df.columns:
        raise KeyError(f"Column not found: {address_column}")

    svc = service or get_default_service()
    addresses = ["" if pd.isna(value) else str(value) for value in df[address_column]]
    outcome = svc.geocode_batch(addresses, fallback=fallback)

    result = df.copy()
    records = pd.DataFrame(outcome.to_records(), index=df.index)
    for column in GEOCODE_COLUMNS:
        result[f"{prefix}{column}"] = records[column]
    return result

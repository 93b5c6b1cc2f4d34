"""Catalog error types."""


class CatalogError(Exception):
    """Base exception for catalog errors."""
    pass


class StationNotFoundError(CatalogError):
    """Unknown or disabled station id."""

    def __init__(self, station_id: int):
        super().__init__(f"Station not found: {station_id}")
        self.station_id = station_id


class CapacityExceededError(CatalogError):
    """Station registry or catalog store is full."""
    pass

"""
Exceptions raised by the DNS records updater.

Every error a reconciliation pass can hit derives from DDNSError so the
pass boundary can catch them in one place. ConfigurationError is the only
one that stops the process.
"""

from typing import Iterable, Optional


class DDNSError(Exception):
    """Base class for all updater errors."""


class ConfigurationError(DDNSError):
    """Raised when the startup configuration is missing or invalid."""


class ResolutionError(DDNSError):
    """Raised when the public IP address cannot be determined."""


class ZoneFetchError(DDNSError):
    """Raised when the zone's record list cannot be fetched from the provider."""

    def __init__(self, zone_id: str, status_code: Optional[int] = None, reason: str = ""):
        self.zone_id = zone_id
        self.status_code = status_code
        message = f"Failed to get zone {zone_id}"
        if status_code is not None:
            message += f": responded with {status_code}"
        if reason:
            message += f" ({reason})"
        super().__init__(message)


class NoMatchingRecordsError(DDNSError):
    """Raised when none of the configured domains has a record of the requested type."""

    def __init__(self, record_type: str, domains: Iterable[str]):
        self.record_type = record_type
        self.domains = list(domains)
        super().__init__(
            f"No {record_type} record found for any of: {', '.join(self.domains)}"
        )


class UpdateError(DDNSError):
    """Raised when a single record write is rejected by the provider."""

    def __init__(self, name: str, status_code: Optional[int] = None, reason: str = ""):
        self.name = name
        self.status_code = status_code
        message = f"Cannot update {name}"
        if status_code is not None:
            message += f": responded with {status_code}"
        if reason:
            message += f" ({reason})"
        super().__init__(message)


class PartialMismatchWarning(UserWarning):
    """Some configured domains have no record in the zone; the rest are still updated."""

    def __init__(self, missing: Iterable[str], available: Iterable[str]):
        self.missing = sorted(missing)
        self.available = list(available)
        super().__init__(
            f"Not all records applied, missing: {', '.join(self.missing)}; "
            f"available: {', '.join(self.available)}"
        )

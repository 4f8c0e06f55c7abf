"""
Base DNS provider interface.

This module defines the record and address family types shared by the
providers, and the abstract base class every provider must implement.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum
from typing import Dict, List


class AddressFamily(Enum):
    """IP address family, valued by the DNS record type that carries it."""

    V4 = "A"
    V6 = "AAAA"

    @property
    def record_type(self) -> str:
        return self.value

    @property
    def label(self) -> str:
        return "ipv4" if self is AddressFamily.V4 else "ipv6"


@dataclass
class DNSRecord:
    """A DNS record as held by the provider."""

    id: str
    type: str
    name: str
    content: str
    ttl: int = 1

    @classmethod
    def from_api(cls, data: Dict) -> "DNSRecord":
        """Build a record from a provider API payload."""
        return cls(
            id=str(data["id"]),
            type=data["type"],
            name=data["name"],
            content=data.get("content", ""),
            ttl=int(data.get("ttl", 1)),
        )


class DNSProvider(ABC):
    """Abstract base class for DNS providers."""

    @abstractmethod
    def list_records(self, zone_id: str, record_type: str) -> List[DNSRecord]:
        """Get all DNS records of one type for a zone, in provider order."""
        pass

    @abstractmethod
    def update_record(self, zone_id: str, record: DNSRecord, content: str, ttl: int) -> bool:
        """Overwrite an existing DNS record with new content."""
        pass

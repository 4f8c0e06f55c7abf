"""
Mock DNS provider for testing.

This module provides a mock DNS provider that stores records in memory and
keeps a log of the calls made against it.
"""

import logging
from dataclasses import replace
from typing import Iterable, List, Optional, Tuple

from .base_provider import DNSProvider, DNSRecord
from ..exceptions import UpdateError, ZoneFetchError

logger = logging.getLogger(__name__)


class MockDNSProvider(DNSProvider):
    """Mock DNS provider for testing purposes."""

    def __init__(self, records: Optional[Iterable[DNSRecord]] = None):
        """Initialize mock provider."""
        self.records: List[DNSRecord] = list(records or [])
        self.list_calls: List[Tuple[str, str]] = []
        self.update_calls: List[Tuple[str, str, str, int]] = []
        self.fail_listing = False
        self.fail_updates = set()
        logger.info("Mock DNS provider initialized")

    @property
    def call_count(self) -> int:
        return len(self.list_calls) + len(self.update_calls)

    def add_record(self, record_id: str, record_type: str, name: str, content: str = "", ttl: int = 1):
        """Seed a record into the in-memory zone."""
        self.records.append(DNSRecord(record_id, record_type, name, content, ttl))

    def list_records(self, zone_id: str, record_type: str) -> List[DNSRecord]:
        """Get all DNS records of one type."""
        self.list_calls.append((zone_id, record_type))
        if self.fail_listing:
            raise ZoneFetchError(zone_id, 500)

        records = [replace(r) for r in self.records if r.type == record_type]
        logger.info(f"Mock: Retrieved {len(records)} {record_type} records")
        return records

    def update_record(self, zone_id: str, record: DNSRecord, content: str, ttl: int) -> bool:
        """Overwrite an existing DNS record."""
        self.update_calls.append((zone_id, record.name, content, ttl))
        if record.name in self.fail_updates:
            raise UpdateError(record.name, 500)

        for i, existing in enumerate(self.records):
            if existing.id == record.id:
                self.records[i] = replace(existing, content=content, ttl=ttl)
                logger.info(f"Mock: Updated record {record.name} -> {content}")
                return True

        raise UpdateError(record.name, 404)

    def content_of(self, name: str, record_type: str) -> Optional[str]:
        """Current content of the first record with this name and type."""
        for record in self.records:
            if record.name == name and record.type == record_type:
                return record.content
        return None

"""
Record Manager - Core logic for DNS record reconciliation

This module decides which of the zone's records belong to the configured
domains, and applies the new address to them one record at a time.
"""

import logging
from dataclasses import dataclass, field
from typing import Iterable, List, Set

from ..exceptions import NoMatchingRecordsError, PartialMismatchWarning
from ..providers.base_provider import DNSProvider, DNSRecord

logger = logging.getLogger(__name__)


@dataclass
class ReconciliationPlan:
    """Records to update, and configured names the zone has no record for."""

    to_update: List[DNSRecord]
    missing: Set[str] = field(default_factory=set)

    @property
    def names(self) -> List[str]:
        return [record.name for record in self.to_update]

    @property
    def is_partial(self) -> bool:
        return bool(self.missing)

    def mismatch_warning(self) -> PartialMismatchWarning:
        return PartialMismatchWarning(self.missing, self.names)


class RecordManager:
    """Plans and applies DNS record updates against one zone."""

    def __init__(self, dns_provider: DNSProvider, zone_id: str):
        """Initialize record manager with DNS provider."""
        self.dns_provider = dns_provider
        self.zone_id = zone_id

    def plan(
        self, records: List[DNSRecord], domains: Iterable[str], record_type: str
    ) -> ReconciliationPlan:
        """
        Match zone records against the configured domains.

        Args:
            records: Zone records, already filtered to one record type
            domains: Configured domain names
            record_type: Type of the records, used in error messages

        Returns:
            Plan with the matching records in zone order and the missing names

        Raises:
            NoMatchingRecordsError: If no record matches any configured domain
        """
        wanted = set(domains)
        to_update = [record for record in records if record.name in wanted]

        if not to_update:
            raise NoMatchingRecordsError(record_type, sorted(wanted))

        found = {record.name for record in to_update}
        plan = ReconciliationPlan(to_update=to_update, missing=wanted - found)

        logger.debug(
            f"Plan: {len(plan.to_update)} records to update, {len(plan.missing)} missing"
        )
        return plan

    def apply(self, record: DNSRecord, new_ip: str, ttl: int) -> bool:
        """Write the new address into a single record."""
        logger.debug(f"update {record.name}")
        return self.dns_provider.update_record(self.zone_id, record, new_ip, ttl)

    def apply_plan(self, plan: ReconciliationPlan, new_ip: str, ttl: int) -> List[str]:
        """
        Apply the plan sequentially, in plan order.

        The first failing record raises UpdateError and later records are
        not attempted.

        Returns:
            Names of the updated records
        """
        updated = []
        for record in plan.to_update:
            self.apply(record, new_ip, ttl)
            updated.append(record.name)
        return updated

"""
DNS Updater - reconciliation pass per address family

Resolves the public address, skips the provider entirely when it has not
changed since the last successful pass, and otherwise pushes it into every
configured record of the zone. The last known address per family lives on
the updater instance and only moves after every record was written.
"""

import logging
from dataclasses import dataclass, field
from typing import Dict, List, Optional

from ..exceptions import DDNSError, NoMatchingRecordsError, PartialMismatchWarning
from ..providers.base_provider import AddressFamily, DNSProvider
from ..providers.ip_resolver import IPResolver
from ..utils.config import Configuration
from .record_manager import RecordManager

logger = logging.getLogger(__name__)

SKIPPED = "skipped"
UPDATED = "updated"
PLANNED = "planned"
FAILED = "failed"


@dataclass
class PassResult:
    """Outcome of one reconciliation pass."""

    family: AddressFamily
    status: str
    ip: Optional[str] = None
    updated: List[str] = field(default_factory=list)
    missing: List[str] = field(default_factory=list)
    error: Optional[DDNSError] = None
    warning: Optional[PartialMismatchWarning] = None

    @property
    def failed(self) -> bool:
        return self.status == FAILED


class DNSUpdater:
    """Keeps the configured records of one zone pointed at the host's public address."""

    def __init__(
        self,
        config: Configuration,
        dns_provider: DNSProvider,
        resolver: IPResolver,
        record_manager: Optional[RecordManager] = None,
    ):
        self.config = config
        self.dns_provider = dns_provider
        self.resolver = resolver
        self.record_manager = record_manager or RecordManager(dns_provider, config.zone_id)
        self.last_known: Dict[AddressFamily, str] = {family: "" for family in AddressFamily}

    def run_pass(self, family: AddressFamily, dry_run: bool = False) -> PassResult:
        """
        Run one reconciliation pass for an address family.

        Errors never escape: they end the pass and come back as a FAILED
        result so the next tick can start fresh.
        """
        try:
            return self._reconcile(family, dry_run)
        except NoMatchingRecordsError as e:
            logger.error(f"{e}. Are the records created in the zone?")
            return PassResult(family, FAILED, error=e)
        except DDNSError as e:
            logger.error(f"{family.label} pass failed: {e}")
            return PassResult(family, FAILED, error=e)

    def _reconcile(self, family: AddressFamily, dry_run: bool) -> PassResult:
        ip = self.resolver.resolve(family)
        known = self.last_known[family]
        if ip == known:
            logger.debug(f"Skip. No {family.label} change! fetched={ip} known={known}")
            return PassResult(family, SKIPPED, ip=ip)

        records = self.dns_provider.list_records(self.config.zone_id, family.record_type)
        plan = self.record_manager.plan(records, self.config.domains, family.record_type)
        missing = sorted(plan.missing)
        warning = plan.mismatch_warning() if plan.is_partial else None

        if warning is not None:
            logger.warning("Not all records applied! Are all created in the zone?")
            logger.warning(f"missingRecords={missing} availableRecords={plan.names}")

        if dry_run:
            for name in plan.names:
                logger.info(f"Dry run: would update {name} ({family.record_type}) to '{ip}'")
            return PassResult(
                family, PLANNED, ip=ip, updated=plan.names, missing=missing, warning=warning
            )

        updated = self.record_manager.apply_plan(plan, ip, self.config.ttl)
        self.last_known[family] = ip
        logger.info(f"{','.join(updated)} updated to '{ip}'")
        return PassResult(
            family, UPDATED, ip=ip, updated=updated, missing=missing, warning=warning
        )

    def run_tick(self, dry_run: bool = False) -> List[PassResult]:
        """Run the enabled families one after the other."""
        logger.debug("start")
        results = [self.run_pass(family, dry_run=dry_run) for family in self.config.families]
        logger.debug("finished")
        return results

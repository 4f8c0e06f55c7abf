"""
Core DNS update functionality.

This package contains the reconciliation pass, the record planning logic
and the scheduler that drives them.
"""

from .dns_updater import DNSUpdater, PassResult
from .record_manager import ReconciliationPlan, RecordManager
from .scheduler import UpdateScheduler

__all__ = ["DNSUpdater", "PassResult", "ReconciliationPlan", "RecordManager", "UpdateScheduler"]

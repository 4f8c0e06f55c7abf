"""
DNS Records Updater - Dynamic DNS for Cloudflare zones

Periodically resolves the host's public IPv4/IPv6 address and writes it
into the configured A/AAAA records of a zone.
"""

__version__ = "1.0.0"
__author__ = "DNS Records Updater Team"
__description__ = "Keep DNS records pointed at the host's public IP address"

from .core.dns_updater import DNSUpdater
from .core.record_manager import RecordManager
from .providers.cloudflare_provider import CloudflareProvider

__all__ = [
    "DNSUpdater",
    "RecordManager",
    "CloudflareProvider",
]

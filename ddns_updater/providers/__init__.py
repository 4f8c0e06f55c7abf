"""
DNS provider and IP lookup implementations.

This package contains the Cloudflare provider, an in-memory mock provider
and the public IP resolver.
"""

from .base_provider import AddressFamily, DNSProvider, DNSRecord
from .cloudflare_provider import CloudflareProvider
from .ip_resolver import IPResolver
from .mock_provider import MockDNSProvider

__all__ = [
    "AddressFamily",
    "DNSProvider",
    "DNSRecord",
    "CloudflareProvider",
    "IPResolver",
    "MockDNSProvider",
]

"""
Utility functions and helpers.

This package contains validation helpers and configuration loading.
"""

from .validators import sanitize_domains, validate_fqdn, validate_ipv4, validate_ipv6

__all__ = ["sanitize_domains", "validate_fqdn", "validate_ipv4", "validate_ipv6"]

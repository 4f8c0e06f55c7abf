"""
IP Resolver - public address lookup

Queries a "what is my IP" service (ipify by default) for the host's current
public address, one endpoint per address family.
"""

import logging
from typing import Dict, Optional

import requests

from .base_provider import AddressFamily
from ..exceptions import ResolutionError
from ..utils.validators import validate_ipv4, validate_ipv6

logger = logging.getLogger(__name__)

DEFAULT_ENDPOINTS = {
    AddressFamily.V4: "https://api4.ipify.org?format=json",
    AddressFamily.V6: "https://api6.ipify.org?format=json",
}


class IPResolver:
    """Resolves the public IP address for an address family."""

    def __init__(
        self,
        endpoints: Optional[Dict[AddressFamily, str]] = None,
        timeout: float = 10,
        session: Optional[requests.Session] = None,
    ):
        self.endpoints = dict(DEFAULT_ENDPOINTS)
        if endpoints:
            self.endpoints.update(endpoints)
        self.timeout = timeout
        self.session = session or requests.Session()

    def resolve(self, family: AddressFamily) -> str:
        """
        Look up the current public address.

        Args:
            family: Address family to resolve

        Returns:
            The IP literal reported by the lookup service

        Raises:
            ResolutionError: On transport errors, non-2xx responses or a body
                without a valid address of the requested family
        """
        url = self.endpoints[family]
        try:
            response = self.session.get(url, timeout=self.timeout)
        except requests.RequestException as e:
            raise ResolutionError(f"{family.label} lookup at {url} failed: {e}") from e

        if not 200 <= response.status_code < 300:
            raise ResolutionError(
                f"{family.label} lookup at {url} responded with {response.status_code}"
            )

        try:
            ip = response.json()["ip"]
        except (ValueError, KeyError, TypeError) as e:
            raise ResolutionError(f"{family.label} lookup at {url} returned a malformed body") from e

        if not isinstance(ip, str):
            raise ResolutionError(f"{family.label} lookup at {url} returned a non-string ip")

        ip = ip.strip()
        valid = validate_ipv4(ip) if family is AddressFamily.V4 else validate_ipv6(ip)
        if not valid:
            raise ResolutionError(f"{family.label} lookup at {url} returned '{ip}'")

        logger.debug(f"Resolved {family.label} address {ip}")
        return ip

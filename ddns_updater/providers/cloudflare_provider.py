"""
Cloudflare DNS provider implementation.

This module talks to the Cloudflare v4 REST API with requests: one GET to
list a zone's records and one PUT per record update. Calls are single round
trips with no retry; the schedule interval is the retry mechanism.
"""

import logging
from typing import Dict, List, Optional

import requests

from .base_provider import DNSProvider, DNSRecord
from ..exceptions import UpdateError, ZoneFetchError

logger = logging.getLogger(__name__)

DEFAULT_API_BASE = "https://api.cloudflare.com/client/v4"


class CloudflareProvider(DNSProvider):
    """Cloudflare DNS provider using bearer token authentication."""

    def __init__(
        self,
        api_token: str,
        api_base: str = DEFAULT_API_BASE,
        timeout: float = 10,
        session: Optional[requests.Session] = None,
    ):
        """Initialize Cloudflare provider."""
        self.api_base = api_base.rstrip("/")
        self.timeout = timeout
        self.session = session or requests.Session()
        self.session.headers.update({"Authorization": f"Bearer {api_token}"})

        logger.info(f"Cloudflare provider initialized for {self.api_base}")

    def _records_url(self, zone_id: str) -> str:
        return f"{self.api_base}/zones/{zone_id}/dns_records"

    def list_records(self, zone_id: str, record_type: str) -> List[DNSRecord]:
        """Get all DNS records of one type for a zone."""
        try:
            response = self.session.get(
                self._records_url(zone_id),
                params={"match": "all"},
                timeout=self.timeout,
            )
        except requests.RequestException as e:
            raise ZoneFetchError(zone_id, reason=str(e)) from e

        if response.status_code != 200:
            raise ZoneFetchError(zone_id, response.status_code)

        try:
            payload = response.json()
            result = payload["result"]
            records = [
                DNSRecord.from_api(item)
                for item in result
                if item.get("type") == record_type
            ]
        except (ValueError, KeyError, TypeError, AttributeError) as e:
            raise ZoneFetchError(zone_id, response.status_code, f"malformed body: {e}") from e

        logger.debug(
            f"Retrieved {len(records)} {record_type} records out of {len(result)} in zone {zone_id}"
        )
        return records

    def update_record(self, zone_id: str, record: DNSRecord, content: str, ttl: int) -> bool:
        """Overwrite an existing DNS record, keeping its name and type."""
        body: Dict = {
            "type": record.type,
            "content": content,
            "name": record.name,
            "ttl": ttl,
        }
        try:
            response = self.session.put(
                f"{self._records_url(zone_id)}/{record.id}",
                json=body,
                timeout=self.timeout,
            )
        except requests.RequestException as e:
            raise UpdateError(record.name, reason=str(e)) from e

        if response.status_code != 200:
            raise UpdateError(record.name, response.status_code)

        logger.debug(f"Updated record {record.name} ({record.type}) -> {content}")
        return True

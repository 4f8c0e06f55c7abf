#!/usr/bin/env python3
"""
Tests for the Cloudflare provider, the IP resolver and the mock provider.

HTTP calls are intercepted on the requests session, no network is needed.
"""

import unittest
from unittest.mock import Mock, patch

import requests

from ddns_updater.exceptions import ResolutionError, UpdateError, ZoneFetchError
from ddns_updater.providers.base_provider import AddressFamily, DNSRecord
from ddns_updater.providers.cloudflare_provider import CloudflareProvider
from ddns_updater.providers.ip_resolver import IPResolver
from ddns_updater.providers.mock_provider import MockDNSProvider

API_BASE = "https://api.cloudflare.com/client/v4"


def make_response(status_code=200, payload=None, json_error=None):
    response = Mock(status_code=status_code)
    if json_error is not None:
        response.json.side_effect = json_error
    else:
        response.json.return_value = payload
    return response


class TestCloudflareProvider(unittest.TestCase):
    """Test the Cloudflare provider."""

    def setUp(self):
        self.session = requests.Session()
        self.provider = CloudflareProvider("secret-token", timeout=5, session=self.session)
        self.zone_payload = {
            "success": True,
            "result": [
                {"id": "r1", "type": "A", "name": "a.example.com", "content": "198.51.100.1", "ttl": 1},
                {"id": "r2", "type": "AAAA", "name": "a.example.com", "content": "2001:db8::ff", "ttl": 1},
                {"id": "r3", "type": "TXT", "name": "a.example.com", "content": "hello", "ttl": 300},
                {"id": "r4", "type": "A", "name": "b.example.com", "content": "198.51.100.1", "ttl": 120},
            ],
        }

    def test_bearer_token_header(self):
        """Test that the token is sent as a bearer credential."""
        self.assertEqual(self.session.headers["Authorization"], "Bearer secret-token")

    def test_list_records_filters_by_type(self):
        """Test listing keeps only the requested type, in provider order."""
        with patch.object(self.session, "get", return_value=make_response(payload=self.zone_payload)) as get:
            records = self.provider.list_records("zone123", "A")

        get.assert_called_once_with(
            f"{API_BASE}/zones/zone123/dns_records",
            params={"match": "all"},
            timeout=5,
        )
        self.assertEqual([r.id for r in records], ["r1", "r4"])
        self.assertEqual(records[1], DNSRecord("r4", "A", "b.example.com", "198.51.100.1", 120))

    def test_list_records_non_200(self):
        """Test that a non-200 listing fails regardless of the body."""
        response = make_response(status_code=403, payload=self.zone_payload)
        with patch.object(self.session, "get", return_value=response):
            with self.assertRaises(ZoneFetchError) as ctx:
                self.provider.list_records("zone123", "A")

        self.assertEqual(ctx.exception.status_code, 403)
        self.assertEqual(ctx.exception.zone_id, "zone123")

    def test_list_records_malformed_body(self):
        """Test that unparseable listings are fetch errors."""
        bodies = [
            make_response(json_error=ValueError("Expecting value")),
            make_response(payload={"success": False, "errors": []}),
            make_response(payload={"result": [{"type": "A", "name": "a.example.com"}]}),
        ]
        for response in bodies:
            with self.subTest(response=response):
                with patch.object(self.session, "get", return_value=response):
                    with self.assertRaises(ZoneFetchError):
                        self.provider.list_records("zone123", "A")

    def test_list_records_transport_error(self):
        """Test that connection failures are fetch errors."""
        with patch.object(self.session, "get", side_effect=requests.ConnectionError("refused")):
            with self.assertRaises(ZoneFetchError) as ctx:
                self.provider.list_records("zone123", "A")

        self.assertIsNone(ctx.exception.status_code)

    def test_update_record(self):
        """Test the update request."""
        record = DNSRecord("r2", "AAAA", "a.example.com", "2001:db8::ff", 1)
        with patch.object(self.session, "put", return_value=make_response(payload={"success": True})) as put:
            result = self.provider.update_record("zone123", record, "2001:db8::1", 300)

        self.assertTrue(result)
        put.assert_called_once_with(
            f"{API_BASE}/zones/zone123/dns_records/r2",
            json={"type": "AAAA", "content": "2001:db8::1", "name": "a.example.com", "ttl": 300},
            timeout=5,
        )

    def test_update_record_non_200(self):
        """Test that anything but 200 is an update error."""
        record = DNSRecord("r1", "A", "a.example.com", "198.51.100.1", 1)
        for status_code in (201, 400, 500):
            with self.subTest(status_code=status_code):
                with patch.object(self.session, "put", return_value=make_response(status_code=status_code)):
                    with self.assertRaises(UpdateError) as ctx:
                        self.provider.update_record("zone123", record, "203.0.113.7", 1)

                self.assertEqual(ctx.exception.name, "a.example.com")
                self.assertEqual(ctx.exception.status_code, status_code)

    def test_update_record_transport_error(self):
        """Test that a timed out update is an update error."""
        record = DNSRecord("r1", "A", "a.example.com", "198.51.100.1", 1)
        with patch.object(self.session, "put", side_effect=requests.Timeout("timed out")):
            with self.assertRaises(UpdateError) as ctx:
                self.provider.update_record("zone123", record, "203.0.113.7", 1)

        self.assertIsNone(ctx.exception.status_code)

    def test_custom_api_base(self):
        """Test that a trailing slash on the API base is ignored."""
        provider = CloudflareProvider("t", api_base="https://cf.example.net/v4/", session=requests.Session())

        self.assertEqual(provider._records_url("z"), "https://cf.example.net/v4/zones/z/dns_records")


class TestIPResolver(unittest.TestCase):
    """Test the public IP resolver."""

    def setUp(self):
        self.session = Mock()
        self.resolver = IPResolver(timeout=4, session=self.session)

    def test_resolve_ipv4(self):
        """Test IPv4 lookup against the IPv4-only endpoint."""
        self.session.get.return_value = make_response(payload={"ip": "203.0.113.7"})

        self.assertEqual(self.resolver.resolve(AddressFamily.V4), "203.0.113.7")
        self.session.get.assert_called_once_with("https://api4.ipify.org?format=json", timeout=4)

    def test_resolve_ipv6(self):
        """Test IPv6 lookup against the IPv6-only endpoint."""
        self.session.get.return_value = make_response(payload={"ip": "2001:db8::1"})

        self.assertEqual(self.resolver.resolve(AddressFamily.V6), "2001:db8::1")
        self.session.get.assert_called_once_with("https://api6.ipify.org?format=json", timeout=4)

    def test_custom_endpoint(self):
        """Test that configured endpoints replace the defaults per family."""
        resolver = IPResolver({AddressFamily.V6: "https://ip6.example.net"}, session=self.session)
        self.session.get.return_value = make_response(payload={"ip": "2001:db8::1"})

        resolver.resolve(AddressFamily.V6)

        self.session.get.assert_called_once_with("https://ip6.example.net", timeout=10)
        self.assertEqual(resolver.endpoints[AddressFamily.V4], "https://api4.ipify.org?format=json")

    def test_resolution_failures(self):
        """Test the responses that count as a failed lookup."""
        failures = {
            "server error": make_response(status_code=503, payload={"ip": "203.0.113.7"}),
            "not json": make_response(json_error=ValueError("Expecting value")),
            "missing ip": make_response(payload={"address": "203.0.113.7"}),
            "not a mapping": make_response(payload=["203.0.113.7"]),
            "non-string ip": make_response(payload={"ip": 42}),
            "wrong family": make_response(payload={"ip": "2001:db8::1"}),
            "garbage": make_response(payload={"ip": "<html>"}),
        }
        for description, response in failures.items():
            self.session.get.return_value = response
            with self.subTest(description=description):
                with self.assertRaises(ResolutionError):
                    self.resolver.resolve(AddressFamily.V4)

    def test_transport_error(self):
        """Test that connection failures are resolution errors."""
        self.session.get.side_effect = requests.ConnectionError("network unreachable")

        with self.assertRaises(ResolutionError):
            self.resolver.resolve(AddressFamily.V6)


class TestMockDNSProvider(unittest.TestCase):
    """Test the mock DNS provider."""

    def setUp(self):
        self.provider = MockDNSProvider()
        self.provider.add_record("1", "A", "a.example.com", "198.51.100.1")
        self.provider.add_record("2", "AAAA", "a.example.com", "2001:db8::ff")

    def test_list_records(self):
        """Test listing by type and call tracking."""
        records = self.provider.list_records("zone123", "AAAA")

        self.assertEqual([r.id for r in records], ["2"])
        self.assertEqual(self.provider.list_calls, [("zone123", "AAAA")])

    def test_listing_returns_copies(self):
        """Test that callers cannot mutate the stored zone."""
        self.provider.list_records("zone123", "A")[0].content = "changed"

        self.assertEqual(self.provider.content_of("a.example.com", "A"), "198.51.100.1")

    def test_update_record(self):
        """Test record update."""
        record = self.provider.list_records("zone123", "A")[0]

        self.assertTrue(self.provider.update_record("zone123", record, "203.0.113.7", 60))
        self.assertEqual(self.provider.content_of("a.example.com", "A"), "203.0.113.7")
        self.assertEqual(self.provider.records[0].ttl, 60)

    def test_update_unknown_record(self):
        """Test that updating a record that does not exist fails."""
        with self.assertRaises(UpdateError) as ctx:
            self.provider.update_record("zone123", DNSRecord("9", "A", "x.example.com", ""), "203.0.113.7", 1)

        self.assertEqual(ctx.exception.status_code, 404)


if __name__ == "__main__":
    unittest.main()

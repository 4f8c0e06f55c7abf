"""
Behave environment configuration for DNS Records Updater scenarios.

Scenarios run against the in-memory mock provider and a stubbed IP
resolver, so no network access is needed.
"""

import logging
from unittest.mock import Mock

from ddns_updater.exceptions import ResolutionError
from ddns_updater.providers.mock_provider import MockDNSProvider

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)


def before_scenario(context, scenario):
    """Set up each test scenario."""
    context.provider = MockDNSProvider()
    context.addresses = {}
    context.failing_lookups = set()
    context.resolver = Mock()
    context.resolver.resolve.side_effect = lambda family: _resolve(context, family)
    context.updater = None
    context.result = None
    context.results = {}

    logger.info(f"Starting scenario: {scenario.name}")


def after_scenario(context, scenario):
    """Clean up after each test scenario."""
    logger.info(f"Completed scenario: {scenario.name}")


def _resolve(context, family):
    """Stand-in for the public IP lookup service."""
    if family.label in context.failing_lookups:
        raise ResolutionError(f"{family.label} lookup failed")
    if family.label not in context.addresses:
        raise ResolutionError(f"No {family.label} address")
    return context.addresses[family.label]

"""
Step definitions for DNS Records Updater scenarios.
"""

from behave import given, when, then

from ddns_updater.core.dns_updater import DNSUpdater
from ddns_updater.providers.base_provider import AddressFamily
from ddns_updater.utils.config import Configuration

FAMILIES = {family.label: family for family in AddressFamily}


def _updater(context):
    """Create the updater once per scenario so its cache survives between steps."""
    if context.updater is None:
        config = Configuration(
            zone_id=context.zone_id,
            domains=context.domains,
            api_token="test-token",
            ttl=1,
        )
        context.updater = DNSUpdater(config, context.provider, context.resolver)
    return context.updater


@given('the updater manages the domains "{domains}" in zone "{zone_id}"')
def step_impl(context, domains, zone_id):
    """Configure the managed domains."""
    context.domains = domains.split(",")
    context.zone_id = zone_id


@given('the zone has a "{record_type}" record for "{name}"')
def step_impl(context, record_type, name):
    """Seed a record into the mock zone."""
    record_id = str(len(context.provider.records) + 1)
    context.provider.add_record(record_id, record_type, name, "192.0.2.1")


@given('the public "{family}" address is "{ip}"')
def step_impl(context, family, ip):
    """Set the address the lookup service reports."""
    context.addresses[family] = ip


@given('the "{family}" lookup fails')
def step_impl(context, family):
    """Make the lookup service fail for a family."""
    context.failing_lookups.add(family)


@given('updates to "{name}" are rejected')
def step_impl(context, name):
    """Make the provider reject writes to a record."""
    context.provider.fail_updates.add(name)


@given('an "{family}" pass has already run')
def step_impl(context, family):
    """Run a successful pass and remember how many calls it made."""
    result = _updater(context).run_pass(FAMILIES[family])
    assert result.status == "updated", result
    context.calls_before = context.provider.call_count


@when('an "{family}" pass runs')
def step_impl(context, family):
    """Run one reconciliation pass."""
    context.result = _updater(context).run_pass(FAMILIES[family])


@when('an "{family}" dry run pass runs')
def step_impl(context, family):
    """Run one reconciliation pass without writing."""
    context.result = _updater(context).run_pass(FAMILIES[family], dry_run=True)


@when('a tick runs with "{families}" enabled')
def step_impl(context, families):
    """Run every enabled family in one tick."""
    updater = _updater(context)
    enabled = families.split(",")
    updater.config.ipv4 = "ipv4" in enabled
    updater.config.ipv6 = "ipv6" in enabled
    context.results = {result.family.label: result for result in updater.run_tick()}


@then('the pass status is "{status}"')
def step_impl(context, status):
    assert context.result.status == status, context.result


@then('the "{family}" pass status is "{status}"')
def step_impl(context, family, status):
    result = context.results[family]
    assert result.status == status, result


@then('{count:d} update calls are made with content "{ip}"')
def step_impl(context, count, ip):
    calls = context.provider.update_calls
    assert len(calls) == count, calls
    assert all(content == ip for _, _, content, _ in calls), calls


@then("no update calls are made")
def step_impl(context):
    assert context.provider.update_calls == [], context.provider.update_calls


@then('only "{name}" is updated')
def step_impl(context, name):
    names = [call[1] for call in context.provider.update_calls]
    assert names == [name], names


@then('"{name}" is reported as missing')
def step_impl(context, name):
    assert name in context.result.missing, context.result.missing


@then('the cached "{family}" address is "{ip}"')
def step_impl(context, family, ip):
    assert context.updater.last_known[FAMILIES[family]] == ip


@then('the cached "{family}" address is empty')
def step_impl(context, family):
    assert context.updater.last_known[FAMILIES[family]] == ""


@then("the provider received no further calls")
def step_impl(context):
    assert context.provider.call_count == context.calls_before

"""
Configuration loading for the DNS records updater.

Settings come from an optional YAML file, overridden by environment
variables (a .env file in the working directory is loaded into the
environment first by the CLI). The result is validated once at startup.
"""

import logging
import os
from dataclasses import dataclass, field
from typing import Dict, List, Mapping, Optional

import yaml
from apscheduler.triggers.cron import CronTrigger

from ..exceptions import ConfigurationError
from ..providers.base_provider import AddressFamily
from ..providers.cloudflare_provider import DEFAULT_API_BASE
from ..providers.ip_resolver import DEFAULT_ENDPOINTS
from .validators import sanitize_domains, validate_fqdn

logger = logging.getLogger(__name__)

DEFAULT_CRON = "*/10 * * * *"
DEFAULT_TTL = 1
DEFAULT_TIMEOUT = 10

ENV_KEYS = {
    "ZONE_ID": "zone_id",
    "DOMAINS": "domains",
    "API_TOKEN": "api_token",
    "IPV4": "ipv4",
    "IPV6": "ipv6",
    "TTL": "ttl",
    "CRON": "cron",
}


@dataclass
class Configuration:
    """Validated settings for one zone."""

    zone_id: str
    domains: List[str]
    api_token: str
    ttl: int = DEFAULT_TTL
    cron: str = DEFAULT_CRON
    ipv4: bool = False
    ipv6: bool = False
    request_timeout: float = DEFAULT_TIMEOUT
    api_base: str = DEFAULT_API_BASE
    ip_endpoints: Dict[AddressFamily, str] = field(
        default_factory=lambda: dict(DEFAULT_ENDPOINTS)
    )
    log_level: str = "INFO"
    log_file: Optional[str] = None

    @property
    def families(self) -> List[AddressFamily]:
        """Enabled address families, in the order a tick runs them."""
        enabled = []
        if self.ipv6:
            enabled.append(AddressFamily.V6)
        if self.ipv4:
            enabled.append(AddressFamily.V4)
        return enabled

    def summary(self) -> Dict:
        """Settings safe to log; the token is masked."""
        return {
            "zone_id": self.zone_id,
            "domains": self.domains,
            "api_token": "***" if self.api_token else "",
            "ipv4": self.ipv4,
            "ipv6": self.ipv6,
            "ttl": self.ttl,
            "cron": self.cron,
            "log_level": self.log_level,
        }


def parse_bool(value) -> bool:
    """Only a case-insensitive "true" (or a real True) enables a flag."""
    if isinstance(value, bool):
        return value
    if value is None:
        return False
    return str(value).strip().lower() == "true"


def load_config_file(config_path: Optional[str]) -> Dict:
    """Load configuration from YAML file; a missing file yields an empty config."""
    if not config_path:
        return {}
    try:
        with open(config_path, "r") as f:
            config = yaml.safe_load(f) or {}
        logger.info(f"Configuration loaded from {config_path}")
    except FileNotFoundError:
        logger.debug(f"Config file {config_path} not found, using environment only")
        return {}
    except yaml.YAMLError as e:
        raise ConfigurationError(f"Error parsing config file {config_path}: {e}") from e

    if not isinstance(config, dict):
        raise ConfigurationError(f"Config file {config_path} must contain a mapping")
    return config


def _section(raw: Dict, key: str) -> Dict:
    """A nested mapping of the settings; absent or empty means no overrides."""
    section = raw.get(key) or {}
    if not isinstance(section, dict):
        raise ConfigurationError(f"'{key}' must be a mapping, got {section!r}")
    return section


def merge_environment(config: Dict, environ: Mapping[str, str]) -> Dict:
    """Overlay environment variables on top of the file settings."""
    merged = dict(config)
    for env_key, config_key in ENV_KEYS.items():
        if environ.get(env_key) not in (None, ""):
            merged[config_key] = environ[env_key]

    logging_config = dict(_section(merged, "logging"))
    if environ.get("LOG_LEVEL"):
        logging_config["level"] = environ["LOG_LEVEL"]
    if environ.get("LOG_FILE"):
        logging_config["file"] = environ["LOG_FILE"]
    merged["logging"] = logging_config
    return merged


def build_configuration(raw: Dict) -> Configuration:
    """
    Validate raw settings into a Configuration.

    Raises:
        ConfigurationError: If the zone id, domains or token are missing, or
            the TTL, timeout or cron expression is invalid
    """
    zone_id = str(raw.get("zone_id") or "").strip()
    api_token = str(raw.get("api_token") or "").strip()
    domains = sanitize_domains(raw.get("domains"))

    missing = [
        name
        for name, value in (("zone_id", zone_id), ("domains", domains), ("api_token", api_token))
        if not value
    ]
    if missing:
        raise ConfigurationError(f"Missing required settings: {', '.join(missing)}")

    for domain in domains:
        if not validate_fqdn(domain):
            logger.warning(f"Domain '{domain}' does not look like a valid name")

    raw_ttl = raw.get("ttl", DEFAULT_TTL)
    if isinstance(raw_ttl, bool) or (isinstance(raw_ttl, float) and not raw_ttl.is_integer()):
        raise ConfigurationError(f"TTL must be an integer, got {raw_ttl!r}")
    try:
        ttl = int(raw_ttl)
    except (TypeError, ValueError) as e:
        raise ConfigurationError(f"TTL must be an integer, got {raw_ttl!r}") from e
    if ttl < 1:
        raise ConfigurationError(f"TTL must be positive, got {ttl}")

    raw_timeout = raw.get("request_timeout", DEFAULT_TIMEOUT)
    if isinstance(raw_timeout, bool):
        raise ConfigurationError(f"request_timeout must be a number, got {raw_timeout!r}")
    try:
        request_timeout = float(raw_timeout)
    except (TypeError, ValueError) as e:
        raise ConfigurationError(
            f"request_timeout must be a number, got {raw_timeout!r}"
        ) from e
    if request_timeout <= 0:
        raise ConfigurationError(f"request_timeout must be positive, got {request_timeout}")

    cron = str(raw.get("cron") or DEFAULT_CRON).strip()
    try:
        CronTrigger.from_crontab(cron)
    except ValueError as e:
        raise ConfigurationError(f"Invalid cron expression '{cron}': {e}") from e

    endpoints = _section(raw, "endpoints")
    ip_endpoints = dict(DEFAULT_ENDPOINTS)
    if endpoints.get("ipv4"):
        ip_endpoints[AddressFamily.V4] = endpoints["ipv4"]
    if endpoints.get("ipv6"):
        ip_endpoints[AddressFamily.V6] = endpoints["ipv6"]

    logging_config = _section(raw, "logging")

    configuration = Configuration(
        zone_id=zone_id,
        domains=domains,
        api_token=api_token,
        ttl=ttl,
        cron=cron,
        ipv4=parse_bool(raw.get("ipv4")),
        ipv6=parse_bool(raw.get("ipv6")),
        request_timeout=request_timeout,
        api_base=endpoints.get("api_base") or DEFAULT_API_BASE,
        ip_endpoints=ip_endpoints,
        log_level=str(logging_config.get("level", "INFO")).upper(),
        log_file=logging_config.get("file"),
    )

    if not configuration.families:
        logger.warning("Neither IPV4 nor IPV6 is enabled, passes will do nothing")

    return configuration


def load_config(config_path: Optional[str] = None, environ: Optional[Mapping[str, str]] = None) -> Configuration:
    """Load, merge and validate the configuration."""
    if environ is None:
        environ = os.environ
    raw = merge_environment(load_config_file(config_path), environ)
    return build_configuration(raw)

"""
Prometheus collector projecting the domain list into gauge samples.

Each scrape asks the cache for the current listDomains response and maps
every record with status OK to the metric catalogue below. Records with any
other status (typically deleted or transferred-away domains) are skipped.

    domain_auto_renew_enable{domain}
    domain_dnssec_key_count{domain}
    domain_expiry_timestamp_seconds{domain, status}
    domain_name_server_info{domain, name_server_info}
"""

from typing import Iterator, Protocol

from prometheus_client.core import GaugeMetricFamily, Metric

from .models import DomainListResponse


class DomainListSource(Protocol):
    def get(self) -> DomainListResponse: ...


def _families() -> tuple[GaugeMetricFamily, ...]:
    return (
        GaugeMetricFamily(
            "domain_auto_renew_enable",
            "Domain auto-renewal status",
            labels=["domain"],
        ),
        GaugeMetricFamily(
            "domain_dnssec_key_count",
            "Number of DNSSEC keys per domain",
            labels=["domain"],
        ),
        GaugeMetricFamily(
            "domain_expiry_timestamp_seconds",
            "Domain expiry timestamp in seconds",
            labels=["domain", "status"],
        ),
        GaugeMetricFamily(
            "domain_name_server_info",
            "Domain name server info",
            labels=["domain", "name_server_info"],
        ),
    )


def project(response: DomainListResponse) -> list[Metric]:
    """
    Map a domain list to the exporter's metric families.

    Args:
        response: Decoded listDomains response

    Returns:
        The four gauge families, populated from records with status OK
    """
    auto_renew, dnssec_keys, expiry, name_servers = _families()

    for domain in response.ok_domains():
        name = domain.domain_name

        auto_renew.add_metric([name], float(domain.auto_renew))
        dnssec_keys.add_metric([name], float(len(domain.dnssec_keys)))
        expiry.add_metric([name, domain.domain_status], float(domain.expiry_timestamp))

        # a repeated hostname would produce a duplicate series
        for server in dict.fromkeys(domain.name_servers):
            name_servers.add_metric([name, server], 1.0)

    return [auto_renew, dnssec_keys, expiry, name_servers]


class DomainCollector:
    """Custom collector reading through the listDomains cache on every scrape."""

    def __init__(self, source: DomainListSource) -> None:
        self._source = source

    def describe(self) -> Iterator[Metric]:
        # Registering must not trigger an upstream call through collect()
        return iter(_families())

    def collect(self) -> Iterator[Metric]:
        yield from project(self._source.get())

"""
DNS names used by the Multi-Cluster Services API and parsing of resolver output.

SRV answers are printed by nslookup in the form:

    hello.mcs-conformance.svc.clusterset.local	service = 0 50 42 hello.mcs-conformance.svc.clusterset.local

Only the part after the first `=` matters, which is exactly four fields: priority, weight, port and target.
"""

import string
from dataclasses import dataclass
from typing import Iterator

CLUSTERSET_ZONE = "svc.clusterset.local"
CLUSTER_ZONE = "svc.cluster.local"

SRV_FIELDS = 4
MAX_PORT = 65535
DOMAIN_CHARACTERS = frozenset(string.ascii_letters + string.digits + ".-")


@dataclass(frozen=True)
class SRVRecord:
    """Port and target domain of a single SRV answer, priority and weight are not relevant for conformance"""

    port: int
    domain_name: str

    def __post_init__(self):
        if not 0 <= self.port <= MAX_PORT:
            raise ValueError(f"SRV port {self.port} is outside of range 0-{MAX_PORT}")
        if not self.domain_name:
            raise ValueError("SRV record must have a target domain")

    def __str__(self):
        return f"{self.port} {self.domain_name}"


def clusterset_domain(service: str, namespace: str) -> str:
    """Aggregated domain resolvable from every cluster of the clusterset"""
    return f"{service}.{namespace}.{CLUSTERSET_ZONE}"


def local_domain(service: str, namespace: str) -> str:
    """Domain of the Service local to one cluster"""
    return f"{service}.{namespace}.{CLUSTER_ZONE}"


def lookup_command(domain: str, record_type: str = None) -> list[str]:
    """Shell command which resolves the domain inside a Pod"""
    if record_type:
        return ["sh", "-c", f"nslookup -type={record_type} {domain}"]
    return ["sh", "-c", f"nslookup {domain}"]


def _parse_port(field: str) -> int:
    # Unparsable ports are reported as 0 so that the record still shows up in the diagnostics
    try:
        port = int(field)
    except ValueError:
        return 0
    if not 0 <= port <= MAX_PORT:
        return 0
    return port


def _parse_target(field: str) -> str | None:
    if field.endswith("."):
        field = field[:-1]
    if not field or not set(field) <= DOMAIN_CHARACTERS:
        return None
    return field


def _tokenize(text: str) -> Iterator[list[str]]:
    """Yields record fields of every line that contains `=`"""
    for line in text.splitlines():
        _, separator, answer = line.partition("=")
        if separator:
            yield answer.split()


def parse_srv_record(fields: list[str]) -> SRVRecord | None:
    """Returns SRVRecord for `priority weight port target` fields or None if they are not a record"""
    if len(fields) != SRV_FIELDS:
        return None
    _priority, _weight, port, target = fields
    domain_name = _parse_target(target)
    if domain_name is None:
        return None
    return SRVRecord(_parse_port(port), domain_name)


def parse_srv_records(text: str) -> list[SRVRecord]:
    """
    Extracts SRV records from the resolver output, preserving their order.
    Lines which are not SRV answers (banners, server info, errors, blank lines) are skipped,
    so the empty or unrelated output results in an empty list.
    """
    records = []
    for fields in _tokenize(text or ""):
        record = parse_srv_record(fields)
        if record is not None:
            records.append(record)
    return records

"""Driver for the Multi-Cluster Services DNS conformance checks"""

import logging
from dataclasses import dataclass, field
from typing import Callable

from openshift_client import OpenShiftPythonException

from mcs_conformance.conformance.report import CheckReport
from mcs_conformance.dns import SRVRecord, clusterset_domain, local_domain, lookup_command, parse_srv_records
from mcs_conformance.kubernetes.client import KubernetesClient
from mcs_conformance.kubernetes.pod import CommandExecutor
from mcs_conformance.polling import Eventually, ExpectationResult, Observation, PollPolicy

logger = logging.getLogger(__name__)

SPEC_REF = (
    "https://github.com/kubernetes/enhancements/tree/master/keps/sig-multicluster/1645-multi-cluster-services-api#dns"
)


@dataclass(frozen=True)
class ClusterEndpoint:
    """Member cluster of the clusterset"""

    name: str
    client: KubernetesClient
    executor: CommandExecutor


@dataclass(frozen=True)
class ConformanceConfig:
    """Everything the checks need to know about the clusterset and the exported service"""

    endpoints: tuple[ClusterEndpoint, ...]
    namespace: str
    service_name: str
    service_port: int
    local_cluster: str = None
    policy: PollPolicy = field(default_factory=PollPolicy)
    spec_ref: str = SPEC_REF

    def __post_init__(self):
        if not self.endpoints:
            raise ValueError("At least one cluster endpoint is required")
        names = [endpoint.name for endpoint in self.endpoints]
        if len(set(names)) != len(names):
            raise ValueError(f"Cluster names must be unique, got {names}")
        if self.local_cluster is not None and self.local_cluster not in names:
            raise ValueError(f"Local cluster {self.local_cluster} is not one of {names}")

    @property
    def local(self) -> ClusterEndpoint:
        """Cluster the service is exported from, first cluster unless configured otherwise"""
        if self.local_cluster is None:
            return self.endpoints[0]
        return next(endpoint for endpoint in self.endpoints if endpoint.name == self.local_cluster)


def _read(getter: Callable, name: str, extract: Callable) -> Observation:
    """Reads object from the API, missing object is not ready and failing API is a transport error"""
    try:
        obj = getter(name)
    except OpenShiftPythonException as e:
        return Observation.transport_error(e.msg)
    if obj is None:
        return Observation.not_ready(f"{name} does not exist")
    return Observation.value(extract(obj))


class DNSConformanceDriver:
    """
    Runs DNS conformance checks against every cluster of the clusterset.
    Clusters are checked one after another and all outcomes are collected,
    failure on one cluster does not stop the check on the remaining ones.
    """

    def __init__(self, config: ConformanceConfig):
        self.config = config

    @property
    def clusterset_domain(self):
        """Aggregated domain of the exported service"""
        return clusterset_domain(self.config.service_name, self.config.namespace)

    @property
    def local_domain(self):
        """Cluster-local domain of the exported service"""
        return local_domain(self.config.service_name, self.config.namespace)

    def _eventually(self, probe: Callable[[], Observation]) -> Eventually:
        return Eventually(probe, self.config.policy)

    def _command_probe(self, endpoint: ClusterEndpoint, command: list[str]) -> Callable[[], Observation]:
        logger.info("Executing command %r on cluster %s", " ".join(command), endpoint.name)
        return lambda: endpoint.executor.execute(command)

    def await_service_import(self, predicate: Callable[[list[str]], bool]) -> ExpectationResult:
        """Polls IPs of the ServiceImport on the local cluster until they satisfy the predicate"""
        local = self.config.local
        logger.info("Retrieving ServiceImport %s on cluster %s", self.config.service_name, local.name)
        return self._eventually(
            lambda: _read(local.client.get_service_import, self.config.service_name, lambda obj: obj.ips)
        ).until(predicate, f"ServiceImport {self.config.service_name} on cluster {local.name} should have an IP")

    def await_cluster_ip(self) -> ExpectationResult:
        """Polls the local Service until it is assigned a cluster IP"""
        local = self.config.local
        logger.info("Retrieving local Service %s on cluster %s", self.config.service_name, local.name)
        return self._eventually(
            lambda: _read(local.client.get_service, self.config.service_name, lambda obj: obj.cluster_ip)
        ).until(bool, f"Service {self.config.service_name} on cluster {local.name} should be assigned a cluster IP")

    def expect_lookup(self, endpoint: ClusterEndpoint, domain: str, address: str) -> ExpectationResult:
        """Polls name lookup on the cluster until its output contains the address"""
        return self._eventually(self._command_probe(endpoint, lookup_command(domain))).until(
            lambda output: address in output, f"Lookup of {domain} on cluster {endpoint.name} should return {address}"
        )

    def expect_srv_records(self, endpoint: ClusterEndpoint, domain: str) -> ExpectationResult:
        """Polls SRV lookup on the cluster until the output contains at least one SRV record"""
        probe = self._command_probe(endpoint, lookup_command(domain, record_type="SRV"))

        def _srv_records():
            output = probe()
            if not output.ready:
                return output
            return Observation.value(parse_srv_records(output.result))

        return self._eventually(_srv_records).until(
            lambda records: len(records) > 0,
            f"SRV lookup of {domain} on cluster {endpoint.name} should return records",
        )

    def clusterset_resolution(self) -> CheckReport:
        """Clusterset domain should resolve to the clusterset IP on every cluster"""
        report = CheckReport("Lookup of the clusterset domain resolves to the clusterset IP", self.config.spec_ref)

        service_import = self.await_service_import(lambda ips: len(ips) > 0)
        if not service_import.satisfied:
            report.add(self.config.local.name, False, service_import.describe())
            return report

        clusterset_ip = service_import.value[0]
        logger.info("Found ServiceImport with clusterset IP %s", clusterset_ip)

        for endpoint in self.config.endpoints:
            result = self.expect_lookup(endpoint, self.clusterset_domain, clusterset_ip)
            report.add(endpoint.name, result.satisfied, "" if result.satisfied else result.describe())
        return report

    def srv_records(self) -> CheckReport:
        """SRV query for the clusterset domain should return exactly one record with the service port"""
        report = CheckReport("SRV query of the clusterset domain returns valid SRV records", self.config.spec_ref)
        expected = [SRVRecord(self.config.service_port, self.clusterset_domain)]

        for endpoint in self.config.endpoints:
            result = self.expect_srv_records(endpoint, self.clusterset_domain)
            if not result.satisfied:
                report.add(endpoint.name, False, result.describe())
            elif result.value != expected:
                received = ", ".join(str(record) for record in result.value)
                report.add(
                    endpoint.name,
                    False,
                    f"Received SRV records [{received}] do not match the expected records [{expected[0]}]",
                )
            else:
                report.add(endpoint.name, True)
        return report

    def local_resolution(self) -> CheckReport:
        """Cluster-local domain should resolve to the local cluster IP, only the local cluster is queried"""
        report = CheckReport("Lookup of the cluster-local domain resolves only local services", self.config.spec_ref)
        local = self.config.local

        service = self.await_cluster_ip()
        if not service.satisfied:
            report.add(local.name, False, service.describe())
            return report

        logger.info("Found local Service cluster IP %s", service.value)
        result = self.expect_lookup(local, self.local_domain, service.value)
        report.add(local.name, result.satisfied, "" if result.satisfied else result.describe())
        return report

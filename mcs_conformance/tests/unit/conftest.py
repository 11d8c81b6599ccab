"""Fakes of the cluster access used by the unit tests of the conformance driver"""

from collections import deque

import pytest
from openshift_client import OpenShiftPythonException

from mcs_conformance.conformance.driver import ClusterEndpoint, ConformanceConfig, DNSConformanceDriver
from mcs_conformance.kubernetes.pod import CommandExecutor
from mcs_conformance.polling import Observation, PollPolicy


class FakeExecutor(CommandExecutor):
    """Returns prepared outputs one by one, the last one is repeated forever"""

    def __init__(self, *outputs):
        self.outputs = deque(outputs or [""])
        self.commands = []

    def execute(self, command):
        self.commands.append(command)
        output = self.outputs[0]
        if len(self.outputs) > 1:
            self.outputs.popleft()
        if isinstance(output, Observation):
            return output
        return Observation.value(output)


class FakeObject:
    """Stands in for Service and ServiceImport, only the read attributes are needed"""

    def __init__(self, cluster_ip="", ips=None):
        self.cluster_ip = cluster_ip
        self.ips = ips or []


class FakeClient:
    """API read interface returning prepared objects, None means the object does not exist yet"""

    def __init__(self, services=None, service_imports=None, error=None):
        self.services = deque(services or [None])
        self.service_imports = deque(service_imports or [None])
        self.error = error
        self.reads = 0

    @staticmethod
    def _next(values):
        value = values[0]
        if len(values) > 1:
            values.popleft()
        return value

    def get_service(self, name):  # pylint: disable=unused-argument
        """Returns next prepared Service"""
        self.reads += 1
        if self.error:
            raise OpenShiftPythonException(self.error)
        return self._next(self.services)

    def get_service_import(self, name):  # pylint: disable=unused-argument
        """Returns next prepared ServiceImport"""
        self.reads += 1
        if self.error:
            raise OpenShiftPythonException(self.error)
        return self._next(self.service_imports)


@pytest.fixture
def policy():
    """Short polling so the timeouts do not slow down the unit tests"""
    return PollPolicy(timeout=0.3, interval=0.05)


@pytest.fixture
def endpoint():
    """Factory for cluster endpoints backed by fakes"""

    def _endpoint(name, client=None, executor=None):
        return ClusterEndpoint(name, client or FakeClient(), executor or FakeExecutor())

    return _endpoint


@pytest.fixture
def driver(policy):
    """Factory for the driver, hello service in namespace ns with port 80"""

    def _driver(*endpoints, local_cluster=None):
        config = ConformanceConfig(
            endpoints=tuple(endpoints),
            namespace="ns",
            service_name="hello",
            service_port=80,
            local_cluster=local_cluster,
            policy=policy,
            spec_ref="https://example.com/spec#dns",
        )
        return DNSConformanceDriver(config)

    return _driver


@pytest.fixture
def executor():
    """Creates executor returning given outputs"""
    return FakeExecutor


@pytest.fixture
def client():
    """Creates API client returning given objects"""
    return FakeClient


@pytest.fixture
def api_object():
    """Creates Service or ServiceImport stand-in"""
    return FakeObject

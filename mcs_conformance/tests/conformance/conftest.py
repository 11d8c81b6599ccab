"""Conftest for Multi-Cluster Services conformance tests"""

import pytest
from dynaconf import ValidationError

from mcs_conformance.backend.hello import HelloService
from mcs_conformance.backend.request import RequestPod
from mcs_conformance.conformance.driver import ClusterEndpoint, ConformanceConfig, DNSConformanceDriver
from mcs_conformance.kubernetes.client import KubernetesClient


@pytest.fixture(scope="session")
def clusters(testconfig, skip_or_fail) -> dict[str, KubernetesClient]:
    """Kubernetes clients for all member clusters, keyed by cluster name"""
    try:
        testconfig.validators.validate(only=["clusters"])
    except (KeyError, ValidationError) as exc:
        skip_or_fail(f"Cluster configuration is missing: {exc}")

    clients = dict(testconfig["cluster_clients"])
    for name, client in clients.items():
        if not client.connected:
            pytest.fail(f"You are not logged into the cluster {name} or its namespace doesn't exist")
    return clients


@pytest.fixture(scope="session")
def local_cluster(testconfig, clusters) -> str:
    """Name of the cluster the service is exported from"""
    name = testconfig.get("local_cluster") or next(iter(clusters))
    if name not in clusters:
        pytest.fail(f"Local cluster {name} is not one of the configured clusters {list(clusters)}")
    return name


@pytest.fixture(scope="module")
def request_pods(request, clusters, blame, module_label, testconfig) -> dict[str, RequestPod]:
    """Deploys Pod with DNS tools to each cluster"""
    pods = {}
    name = blame("request")
    for cluster_name, client in clusters.items():
        pod = RequestPod(client, name, module_label, testconfig["request_pod"]["image"])
        request.addfinalizer(pod.delete)
        pod.commit()
        pods[cluster_name] = pod
    return pods


@pytest.fixture(scope="module")
def hello_service(request, clusters, local_cluster, blame, module_label, testconfig) -> HelloService:
    """Deploys ClusterIP Service to the local cluster"""
    service = HelloService(
        clusters[local_cluster],
        blame(testconfig["service"]["name"]),
        module_label,
        testconfig["service"]["image"],
        port=testconfig["service"]["port"],
    )
    request.addfinalizer(service.delete)
    service.commit()
    return service


@pytest.fixture(scope="module")
def service_export(hello_service):
    """Exports the hello Service to the clusterset"""
    hello_service.export()
    return hello_service.service_export


@pytest.fixture(scope="module")
def conformance_config(
    clusters, local_cluster, request_pods, hello_service, service_export, poll_policy, testconfig
):  # pylint: disable=unused-argument
    """Configuration shared by all conformance checks"""
    endpoints = tuple(ClusterEndpoint(name, client, request_pods[name].executor) for name, client in clusters.items())
    return ConformanceConfig(
        endpoints=endpoints,
        namespace=clusters[local_cluster].project,
        service_name=hello_service.name,
        service_port=hello_service.port,
        local_cluster=local_cluster,
        policy=poll_policy,
        spec_ref=testconfig["spec_ref"],
    )


@pytest.fixture(scope="module")
def driver(conformance_config):
    """Driver running the DNS conformance checks"""
    return DNSConformanceDriver(conformance_config)

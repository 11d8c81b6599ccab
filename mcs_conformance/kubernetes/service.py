"""Service related objects"""

from dataclasses import dataclass, asdict
from typing import Literal

from openshift_client import Missing

from mcs_conformance.kubernetes import KubernetesObject


@dataclass
class ServicePort:
    """Kubernetes Service Port object"""

    name: str
    port: int
    targetPort: int | str  # pylint: disable=invalid-name
    protocol: Literal["TCP", "UDP", "SCTP"] = "TCP"


class Service(KubernetesObject):
    """Kubernetes Service object"""

    @classmethod
    def create_instance(
        cls,
        cluster,
        name,
        selector: dict[str, str],
        ports: list[ServicePort],
        labels: dict[str, str] = None,
        service_type: Literal["ClusterIP", "LoadBalancer", "NodePort", "ExternalName"] = "ClusterIP",
    ):
        """Creates new Service"""
        model: dict = {
            "kind": "Service",
            "apiVersion": "v1",
            "metadata": {
                "name": name,
                "labels": labels,
            },
            "spec": {"ports": [asdict(port) for port in ports], "selector": selector, "type": service_type},
        }

        return cls(model, context=cluster.context)

    @property
    def cluster_ip(self) -> str:
        """Returns cluster-scoped virtual IP, empty string until one is assigned"""
        ip = self.model.spec.clusterIP
        if ip is Missing or ip == "None":
            return ""
        return ip

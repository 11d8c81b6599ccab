"""Multi-Cluster Services API objects"""

from openshift_client import Missing

from mcs_conformance.kubernetes import KubernetesObject

API_VERSION = "multicluster.x-k8s.io/v1alpha1"


class ServiceExport(KubernetesObject):
    """ServiceExport marks a Service in its namespace for export to the whole clusterset"""

    @classmethod
    def create_instance(cls, cluster, name, labels: dict[str, str] = None):
        """Creates new ServiceExport for the Service with the same name"""
        model: dict = {
            "kind": "ServiceExport",
            "apiVersion": API_VERSION,
            "metadata": {
                "name": name,
                "labels": labels,
            },
        }

        return cls(model, context=cluster.context)


class ServiceImport(KubernetesObject):
    """ServiceImport created by the MCS implementation for every exported Service"""

    @property
    def ips(self) -> list[str]:
        """Clusterset virtual IPs, empty list until the implementation assigns them"""
        ips = self.model.spec.ips
        if ips is Missing:
            return []
        return list(ips)

    @property
    def ports(self) -> list[int]:
        """Port numbers of the aggregated service, empty list until the implementation fills them in"""
        ports = self.model.spec.ports
        if ports is Missing:
            return []
        return [port["port"] for port in ports]

"""Exported hello service"""

from mcs_conformance.backend import Backend
from mcs_conformance.kubernetes import Selector
from mcs_conformance.kubernetes.client import KubernetesClient
from mcs_conformance.kubernetes.deployment import Deployment
from mcs_conformance.kubernetes.multicluster import ServiceExport
from mcs_conformance.kubernetes.service import Service, ServicePort


class HelloService(Backend):
    """ClusterIP Service backed by agnhost which is exported to the whole clusterset"""

    def __init__(self, cluster: KubernetesClient, name, label, image, port=42) -> None:
        super().__init__(cluster, name, label)
        self.image = image
        self.port = port
        self.service_export = None

    def commit(self):
        match_labels = {"app": self.label, "deployment": self.name}
        self.deployment = Deployment.create_instance(
            self.cluster,
            self.name,
            container_name="hello",
            image=self.image,
            ports={"http": 8080},
            selector=Selector(matchLabels=match_labels),
            labels={"app": self.label},
            command_args=["netexec", "--http-port=8080"],
        )
        self.deployment.commit()
        self.deployment.wait_for_ready()

        self.service = Service.create_instance(
            self.cluster,
            self.name,
            selector=match_labels,
            ports=[ServicePort(name="http", port=self.port, targetPort="http")],
            labels={"app": self.label},
        )
        self.service.commit()

    def export(self):
        """Exports the Service to the clusterset"""
        self.service_export = ServiceExport.create_instance(self.cluster, self.name, labels={"app": self.label})
        self.service_export.commit()

    def delete(self):
        with self.cluster.context:
            if self.service_export:
                self.service_export.delete()
                self.service_export = None
        super().delete()

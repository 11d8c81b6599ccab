"""Module containing all the workloads deployed for the conformance checks"""

from abc import abstractmethod

from mcs_conformance.lifecycle import LifecycleObject
from mcs_conformance.kubernetes.client import KubernetesClient


class Backend(LifecycleObject):
    """Backend (workload) deployed in Kubernetes"""

    def __init__(self, cluster: KubernetesClient, name: str, label: str):
        self.cluster = cluster
        self.name = name
        self.label = label

        self.deployment = None
        self.service = None

    @abstractmethod
    def commit(self):
        """Deploys the backend"""

    def delete(self):
        """Clean-up the backend"""
        with self.cluster.context:
            if self.service:
                self.service.delete()
                self.service = None
            if self.deployment:
                self.deployment.delete()
                self.deployment = None

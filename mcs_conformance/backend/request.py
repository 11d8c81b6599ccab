"""Pod used for issuing DNS lookups from inside of a cluster"""

from functools import cached_property

from mcs_conformance.lifecycle import LifecycleObject
from mcs_conformance.kubernetes.client import KubernetesClient
from mcs_conformance.kubernetes.pod import Pod, PodExecutor


class RequestPod(LifecycleObject):
    """Long-running Pod with DNS tools installed"""

    def __init__(self, cluster: KubernetesClient, name: str, label: str, image: str):
        self.cluster = cluster
        self.name = name
        self.label = label
        self.image = image

        self.pod = None

    @cached_property
    def executor(self) -> PodExecutor:
        """Executor running commands inside this Pod"""
        if self.pod is None:
            raise AttributeError(f"RequestPod {self.name} was not committed yet")
        return PodExecutor(self.pod)

    def commit(self):
        self.pod = Pod.create_instance(
            self.cluster,
            self.name,
            self.image,
            command=["sleep", "infinity"],
            labels={"app": self.label},
        )
        self.pod.commit()
        self.pod.wait_for_ready()

    def delete(self):
        with self.cluster.context:
            if self.pod:
                self.pod.delete()
                self.pod = None

"""Pod related objects and remote command execution"""

import abc
import logging

from openshift_client import OpenShiftPythonException

from mcs_conformance.kubernetes import KubernetesObject
from mcs_conformance.polling import Observation

logger = logging.getLogger(__name__)


class Pod(KubernetesObject):
    """Kubernetes Pod object"""

    @classmethod
    def create_instance(
        cls,
        cluster,
        name,
        image,
        command: list[str],
        labels: dict[str, str] = None,
        container_name: str = "request",
    ):
        """Creates new single container Pod"""
        model: dict = {
            "kind": "Pod",
            "apiVersion": "v1",
            "metadata": {
                "name": name,
                "labels": labels,
            },
            "spec": {
                "restartPolicy": "Never",
                "containers": [
                    {
                        "name": container_name,
                        "image": image,
                        "imagePullPolicy": "IfNotPresent",
                        "command": command,
                    }
                ],
            },
        }

        return cls(model, context=cluster.context)

    def wait_for_ready(self, timeout=120):
        """Waits until all containers of the Pod are ready"""
        success = self.wait_until(
            lambda obj: obj.model.status.phase == "Running"
            and all(status.ready for status in obj.model.status.containerStatuses),
            timelimit=timeout,
        )
        assert success, f"Pod {self.name()} did not get ready in time"

    def execute_command(self, command: list[str]):
        """Runs command inside the Pod, returns openshift_client Result, never raises on non-zero exit code"""
        return self.execute(cmd_to_exec=command, auto_raise=False)


class CommandExecutor(abc.ABC):
    """Runs commands somewhere inside a cluster"""

    @abc.abstractmethod
    def execute(self, command: list[str]) -> Observation:
        """Executes command and returns its standard output as an Observation"""


class PodExecutor(CommandExecutor):
    """Executes commands inside a Pod and reports the captured output as an Observation"""

    def __init__(self, pod: Pod):
        self.pod = pod

    def execute(self, command: list[str]) -> Observation:
        """
        Returns stdout of the command as a value.
        Non-zero exit code is still a value as long as the command printed something (e.g. NXDOMAIN answer),
        empty output with non-zero exit code or failing kubectl is a transport error.
        """
        try:
            result = self.pod.execute_command(command)
        except OpenShiftPythonException as e:
            logger.debug("Unable to execute %s in %s: %s", command, self.pod.name(), e)
            return Observation.transport_error(e.msg)

        stdout = result.out()
        if result.status() != 0 and not stdout.strip():
            return Observation.transport_error(result.err().strip() or f"exit code {result.status()}")
        return Observation.value(stdout)

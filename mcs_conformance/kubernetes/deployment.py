"""Deployment related objects"""

from mcs_conformance.kubernetes import KubernetesObject, Selector


class Deployment(KubernetesObject):
    """Kubernetes Deployment object"""

    @classmethod
    def create_instance(
        cls,
        cluster,
        name,
        container_name,
        image,
        ports: dict[str, int],
        selector: Selector,
        labels: dict[str, str],
        command_args: list[str] = None,
        replicas: int = 1,
    ):
        """
        Creates new instance of Deployment
        Supports only single container Deployments everything else should be edited directly
        """
        model: dict = {
            "kind": "Deployment",
            "apiVersion": "apps/v1",
            "metadata": {
                "name": name,
                "labels": labels,
            },
            "spec": {
                "replicas": replicas,
                "selector": selector.asdict(),
                "template": {
                    "metadata": {"labels": {"deployment": name, **labels, **selector.matchLabels}},
                    "spec": {
                        "containers": [
                            {
                                "image": image,
                                "name": container_name,
                                "imagePullPolicy": "IfNotPresent",
                                "ports": [{"name": name, "containerPort": port} for name, port in ports.items()],
                            }
                        ]
                    },
                },
            },
        }

        if command_args:
            model["spec"]["template"]["spec"]["containers"][0]["args"] = command_args

        return cls(model, context=cluster.context)

    def wait_for_ready(self, timeout=90):
        """Waits until Deployment is marked as ready"""
        success = self.wait_until(lambda obj: "readyReplicas" in obj.model.status, timelimit=timeout)
        assert success, f"Deployment {self.name()} did not get ready in time"

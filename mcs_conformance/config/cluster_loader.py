"""Custom dynaconf loader for loading cluster settings and converting them to KubernetesClients"""

from mcs_conformance.kubernetes.client import KubernetesClient


def create_client(cluster: dict, project: str = None) -> KubernetesClient:
    """Creates KubernetesClient from the cluster section, namespace defaults to the global one"""
    client = KubernetesClient(project, cluster.get("api_url"), cluster.get("token"), cluster.get("kubeconfig_path"))
    if cluster.get("project"):
        return client.change_project(cluster["project"])
    return client


# pylint: disable=unused-argument
def load(obj, env=None, silent=True, key=None, filename=None):
    """
    Creates KubernetesClient for every configured cluster and stores them under `cluster_clients`,
    ordered the same way as `clusters`. Cluster names default to cluster-<index>
    """
    project = obj.get("project")
    clients = {}
    for index, cluster in enumerate(obj.get("clusters") or [], start=1):
        name = cluster.get("name") or f"cluster-{index}"
        clients[name] = create_client(cluster, project)
    obj["cluster_clients"] = clients

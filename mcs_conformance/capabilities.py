"""Contains capability related functions"""

import functools

from mcs_conformance.config import settings

SERVICE_IMPORT_CRD = "serviceimports.multicluster.x-k8s.io"
SERVICE_EXPORT_CRD = "serviceexports.multicluster.x-k8s.io"


@functools.cache
def has_mcs_api():
    """Returns True, if every configured cluster is reachable and has the Multi-Cluster Services API installed"""
    clients = settings["cluster_clients"]
    if not clients:
        return False, "No clusters are configured"
    for name, client in clients.items():
        if not client.connected:
            return False, f"Cluster {name} is not connected, or namespace {settings['project']} does not exist"
        for crd in (SERVICE_IMPORT_CRD, SERVICE_EXPORT_CRD):
            if not client.has_crd(crd):
                return False, f"Cluster {name} does not have {crd} CustomResourceDefinition"
    return True, None

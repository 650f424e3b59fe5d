"""Order documents the way Helm installs them."""

from __future__ import annotations

from kube_slice.models import NamedDocument

# Helm v3 release install order (pkg/releaseutil/kind_sorter.go).
INSTALL_ORDER: tuple[str, ...] = (
    "Namespace",
    "NetworkPolicy",
    "ResourceQuota",
    "LimitRange",
    "PodSecurityPolicy",
    "PodDisruptionBudget",
    "ServiceAccount",
    "Secret",
    "SecretList",
    "ConfigMap",
    "StorageClass",
    "PersistentVolume",
    "PersistentVolumeClaim",
    "CustomResourceDefinition",
    "ClusterRole",
    "ClusterRoleList",
    "ClusterRoleBinding",
    "ClusterRoleBindingList",
    "Role",
    "RoleList",
    "RoleBinding",
    "RoleBindingList",
    "Service",
    "DaemonSet",
    "Pod",
    "ReplicationController",
    "ReplicaSet",
    "Deployment",
    "HorizontalPodAutoscaler",
    "StatefulSet",
    "Job",
    "CronJob",
    "Ingress",
    "APIService",
)

_PRIORITY: dict[str, int] = {kind: pos for pos, kind in enumerate(INSTALL_ORDER)}


def kind_sort_key(kind: str) -> tuple[int, int, str]:
    """Known kinds by install priority, then unknown kinds alphabetically."""
    priority = _PRIORITY.get(kind)
    if priority is None:
        return (1, 0, kind)
    return (0, priority, "")


def sort_by_kind(documents: list[NamedDocument]) -> list[NamedDocument]:
    """Stable sort; documents of equal priority keep their relative order."""
    return sorted(documents, key=lambda doc: kind_sort_key(doc.identity.kind))

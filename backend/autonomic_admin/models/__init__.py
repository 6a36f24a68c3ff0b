"""Database models."""
from autonomic_admin.models.cluster import Cluster
from autonomic_admin.models.cluster_administration import ClusterAdministration
from autonomic_admin.models.types import ClusterAdministrationStatus

__all__ = ["Cluster", "ClusterAdministration", "ClusterAdministrationStatus"]

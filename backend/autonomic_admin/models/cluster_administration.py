"""Per-cluster administration state."""
from sqlalchemy import Column, DateTime, Enum

from autonomic_admin.database import Base
from autonomic_admin.models.types import GUID, ClusterAdministrationStatus


class ClusterAdministration(Base):
    """Administration status and last completed pass of one cluster.

    Rows are created lazily on the first write for a cluster; a cluster
    without a row is NotProcessed and has never been administrated.
    """

    __tablename__ = "cluster_administration"

    cluster_id = Column(GUID, primary_key=True)
    status = Column(
        Enum(
            ClusterAdministrationStatus,
            native_enum=False,
            length=20,
            values_callable=lambda statuses: [s.value for s in statuses],
        ),
        nullable=False,
        default=ClusterAdministrationStatus.NOT_PROCESSED,
    )
    last_administration = Column(DateTime, nullable=True)  # naive UTC

    def __repr__(self):
        return f"<ClusterAdministration(cluster_id='{self.cluster_id}', status='{self.status.value}')>"

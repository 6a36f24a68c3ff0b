"""Custom column types and enumerations shared by the models."""
from sqlalchemy import String, TypeDecorator
from sqlalchemy.dialects.postgresql import UUID
import enum
import uuid


class GUID(TypeDecorator):
    """Cluster identifier column.

    Native UUID on Postgres, String(36) everywhere else. Values always come
    back as ``uuid.UUID``.
    """
    impl = String(36)
    cache_ok = True

    def load_dialect_impl(self, dialect):
        if dialect.name == 'postgresql':
            return dialect.type_descriptor(UUID(as_uuid=True))
        return dialect.type_descriptor(String(36))

    def process_bind_param(self, value, dialect):
        if value is None or dialect.name == 'postgresql':
            return value
        return str(value) if isinstance(value, uuid.UUID) else str(uuid.UUID(value))

    def process_result_value(self, value, dialect):
        if value is None or isinstance(value, uuid.UUID):
            return value
        return uuid.UUID(value)


class ClusterAdministrationStatus(str, enum.Enum):
    """Administration state of a cluster.

    NotProcessed and Done are both idle; only InProgress is exclusive.
    """
    NOT_PROCESSED = "NotProcessed"
    IN_PROGRESS = "InProgress"
    DONE = "Done"

    @classmethod
    def is_cluster_being_managed(cls, status: "ClusterAdministrationStatus") -> bool:
        return status == cls.IN_PROGRESS

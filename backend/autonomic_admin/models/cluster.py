"""Cluster inventory model."""
from sqlalchemy import Column, String, Boolean, DateTime
import uuid

from autonomic_admin.database import Base
from autonomic_admin.models.types import GUID
from autonomic_admin.utils.time_utils import utcnow


class Cluster(Base):
    """Compute cluster managed by the autonomic administration loop."""

    __tablename__ = "clusters"

    id = Column(GUID, primary_key=True, default=uuid.uuid4)
    name = Column(String(255), nullable=False, unique=True)
    api_server = Column(String(512), nullable=True)
    is_active = Column(Boolean, default=True)
    created_at = Column(DateTime, default=utcnow)
    updated_at = Column(DateTime, default=utcnow, onupdate=utcnow)

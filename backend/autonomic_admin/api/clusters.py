"""Cluster inventory endpoints."""
from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select
from pydantic import BaseModel
from typing import List, Optional
from datetime import datetime
import uuid
import logging

from autonomic_admin.database import get_db
from autonomic_admin.models.cluster import Cluster
from autonomic_admin.models.cluster_administration import ClusterAdministration
from autonomic_admin.models.types import ClusterAdministrationStatus

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/v1/clusters", tags=["Clusters"])


class ClusterCreate(BaseModel):
    name: str
    api_server: Optional[str] = None


class ClusterResponse(BaseModel):
    id: str
    name: str
    api_server: Optional[str]
    is_active: bool
    created_at: datetime
    administration_status: ClusterAdministrationStatus
    last_administration: Optional[datetime]


def _to_response(cluster: Cluster, record: Optional[ClusterAdministration]) -> ClusterResponse:
    return ClusterResponse(
        id=str(cluster.id),
        name=cluster.name,
        api_server=cluster.api_server,
        is_active=cluster.is_active,
        created_at=cluster.created_at,
        administration_status=record.status if record else ClusterAdministrationStatus.NOT_PROCESSED,
        last_administration=record.last_administration if record else None,
    )


async def _get_active_cluster(db: AsyncSession, cluster_id: uuid.UUID) -> Cluster:
    stmt = select(Cluster).where(Cluster.id == cluster_id, Cluster.is_active == True)
    result = await db.execute(stmt)
    cluster = result.scalar_one_or_none()

    if not cluster:
        raise HTTPException(status_code=404, detail="Cluster not found")
    return cluster


@router.get("", response_model=List[ClusterResponse])
async def list_clusters(db: AsyncSession = Depends(get_db)):
    """List active clusters with their administration state."""
    stmt = (
        select(Cluster, ClusterAdministration)
        .outerjoin(ClusterAdministration, ClusterAdministration.cluster_id == Cluster.id)
        .where(Cluster.is_active == True)
        .order_by(Cluster.name)
    )
    result = await db.execute(stmt)
    return [_to_response(cluster, record) for cluster, record in result.all()]


@router.post("", response_model=ClusterResponse, status_code=201)
async def create_cluster(data: ClusterCreate, db: AsyncSession = Depends(get_db)):
    """Register a cluster in the inventory."""
    stmt = select(Cluster).where(Cluster.name == data.name)
    result = await db.execute(stmt)
    if result.scalar_one_or_none():
        raise HTTPException(status_code=409, detail=f"Cluster '{data.name}' already exists")

    cluster = Cluster(name=data.name, api_server=data.api_server)
    db.add(cluster)
    await db.commit()
    await db.refresh(cluster)
    logger.info(f"Registered cluster {cluster.name} ({cluster.id})")

    return _to_response(cluster, None)


@router.get("/{cluster_id}", response_model=ClusterResponse)
async def get_cluster(cluster_id: uuid.UUID, db: AsyncSession = Depends(get_db)):
    """Get cluster by ID, including its administration state."""
    cluster = await _get_active_cluster(db, cluster_id)
    record = await db.get(ClusterAdministration, cluster.id)
    return _to_response(cluster, record)


@router.delete("/{cluster_id}")
async def delete_cluster(cluster_id: uuid.UUID, db: AsyncSession = Depends(get_db)):
    """Remove a cluster from the inventory (soft delete)."""
    cluster = await _get_active_cluster(db, cluster_id)
    cluster.is_active = False
    await db.commit()

    return {"message": "Cluster deleted successfully"}

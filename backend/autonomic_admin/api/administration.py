"""Administration maintenance endpoints."""
from fastapi import APIRouter, Depends
from pydantic import BaseModel
from typing import List

from autonomic_admin.services.cluster_management import (
    ClusterAdministrationService,
    get_administration_service,
)

router = APIRouter(prefix="/v1/administration", tags=["Administration"])


class SweepResponse(BaseModel):
    reclaimed: List[str]


@router.post("/sweep", response_model=SweepResponse)
async def sweep_stuck_clusters(
    service: ClusterAdministrationService = Depends(get_administration_service),
):
    """Run one stuck cluster sweep now instead of waiting for the next period."""
    reclaimed = await service.remove_clusters_stuck_processing()
    return SweepResponse(reclaimed=[str(cluster_id) for cluster_id in reclaimed])

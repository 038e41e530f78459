"""Workspace routes."""

from fastapi import APIRouter, Depends, HTTPException

from househack.api.deps import get_portfolio
from househack.api.schemas import StatsResponse, WorkspaceCreate, WorkspaceResponse
from househack.data.portfolio import InMemoryPortfolio

router = APIRouter(prefix="/api/v1/workspaces", tags=["workspaces"])


@router.get("", response_model=list[WorkspaceResponse])
async def list_workspaces(portfolio: InMemoryPortfolio = Depends(get_portfolio)):
    return [
        WorkspaceResponse(id=ws.id, name=ws.name, location_string=ws.location_string)
        for ws in portfolio.workspaces()
    ]


@router.post("", response_model=WorkspaceResponse, status_code=201)
async def create_workspace(req: WorkspaceCreate, portfolio: InMemoryPortfolio = Depends(get_portfolio)):
    try:
        ws = portfolio.add_workspace(req.name, req.location_string)
    except ValueError as e:
        raise HTTPException(status_code=422, detail=str(e))
    return WorkspaceResponse(id=ws.id, name=ws.name, location_string=ws.location_string)


@router.delete("/{workspace_id}", status_code=204)
async def delete_workspace(workspace_id: str, portfolio: InMemoryPortfolio = Depends(get_portfolio)):
    try:
        portfolio.delete_workspace(workspace_id)
    except KeyError:
        raise HTTPException(status_code=404, detail=f"Workspace {workspace_id} not found")


@router.get("/{workspace_id}/stats", response_model=StatsResponse)
async def workspace_stats(workspace_id: str, portfolio: InMemoryPortfolio = Depends(get_portfolio)):
    """Pipeline counts for a workspace, or for every property when workspace_id is 'all'."""
    ws_id = None if workspace_id == "all" else workspace_id
    if ws_id is not None:
        try:
            portfolio.get_workspace(ws_id)
        except KeyError:
            raise HTTPException(status_code=404, detail=f"Workspace {workspace_id} not found")
    stats = portfolio.stats(ws_id)
    return StatsResponse(total=stats.total, analyzing=stats.analyzing, offers=stats.offers)

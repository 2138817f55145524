from __future__ import annotations

from fastapi import APIRouter, HTTPException, Request

from ...store.models import SnapshotDocument
from ...store.persistence import load_snapshot


router = APIRouter()


@router.get("/snapshot", response_model=SnapshotDocument)
def get_snapshot(request: Request) -> SnapshotDocument:
    snapshot = load_snapshot(request.app.state.settings.snapshot_path)
    if snapshot is None:
        raise HTTPException(status_code=404, detail="No readable snapshot has been published")
    return snapshot

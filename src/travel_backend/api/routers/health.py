"""Liveness endpoint."""

from __future__ import annotations

from fastapi import APIRouter

from travel_backend.api.models import ApiResponse, success

router = APIRouter(tags=["health"])


@router.get("/health", response_model=ApiResponse[str], response_model_exclude_none=True)
def health() -> ApiResponse[str]:
    return success("ok")

"""
Fine-tune job record API endpoints.
"""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, HTTPException, Request, status
from pydantic import ValidationError

from auth import dependencies as auth_dependencies
from auth.schemas import AuthUser

from . import schemas, service

logger = logging.getLogger(__name__)

router = APIRouter()


async def _read_bulk_delete_request(request: Request) -> schemas.BulkDeleteRequest:
    try:
        payload = await request.json()
    except ValueError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Invalid JSON") from exc

    try:
        return schemas.BulkDeleteRequest.model_validate(payload)
    except ValidationError as exc:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Missing or invalid jobIds array in request body",
        ) from exc


@router.post("/api/fine-tune/bulk-delete", response_model=schemas.MessageResponse)
async def bulk_delete_jobs(
    request: Request,
    current_user: AuthUser = Depends(auth_dependencies.get_current_user),
) -> schemas.MessageResponse:
    """
    Delete the caller's job records with the given ids from both job tables.

    Partial failure (one table errors) still answers 200 with the rows that
    were removed; only a failure on both tables is reported as an error.
    """
    user_id = current_user.id
    logger.info("Bulk delete requested by user %s", user_id)

    try:
        body = await _read_bulk_delete_request(request)
        result = await service.bulk_delete(body.job_ids, user_id=user_id)
    except HTTPException:
        raise
    except Exception as exc:
        logger.exception("Bulk delete failed for user %s", user_id)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=str(exc) or "Internal Server Error",
        ) from exc

    if result.all_failed:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Database error during bulk delete.",
        )

    return schemas.MessageResponse(
        message=f"{result.total_deleted} job record(s) deleted successfully.",
    )


@router.delete("/api/fine-tune/job/{job_id}", response_model=schemas.MessageResponse)
async def delete_job(
    job_id: str,
    current_user: AuthUser = Depends(auth_dependencies.get_current_user),
) -> schemas.MessageResponse:
    await service.delete_job(job_id, user_id=current_user.id)
    return schemas.MessageResponse(message="Job record deleted successfully.")

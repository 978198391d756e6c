"""
CV Router

Handles the candidate's CV upload and retrieval. The most recent CV is the one
scored when the candidate applies.
"""

from fastapi import APIRouter, Depends

from hiring.auth import Identity, require_role
from hiring.dependencies import get_cv_service
from hiring.models import CVResponse, CVUploadRequest, UserRole
from hiring.services import CVService

router = APIRouter(prefix="/candidate/cv", tags=["CV"])


@router.post("", response_model=CVResponse, status_code=201)
async def upload_cv(
    request: CVUploadRequest,
    identity: Identity = Depends(require_role(UserRole.CANDIDATE)),
    service: CVService = Depends(get_cv_service),
):
    """
    Upload a CV (PDF, DOC or DOCX, max 10MB) as base64.

    Text is extracted from PDFs when content_text is not supplied.
    """
    return await service.upload(identity, request)


@router.get("", response_model=CVResponse)
async def get_latest_cv(
    identity: Identity = Depends(require_role(UserRole.CANDIDATE)),
    service: CVService = Depends(get_cv_service),
):
    return await service.get_latest(identity)

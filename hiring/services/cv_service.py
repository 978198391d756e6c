"""
CV service - upload and retrieval of candidate CV documents.
"""
import base64
import binascii
import logging

from hiring import config
from hiring.auth.dependencies import Identity
from hiring.exceptions import NotFoundError, ValidationError
from hiring.models import CVResponse, CVUploadRequest
from hiring.repositories import CVRepository
from hiring.services.cv_storage import LocalCVStorage, extract_pdf_text

logger = logging.getLogger(__name__)


def _cv_response(row) -> CVResponse:
    return CVResponse(
        id=str(row["id"]),
        file_name=row["file_name"],
        file_path=row["file_path"],
        content_type=row["content_type"],
        file_size=row["file_size"],
        created_at=row["created_at"],
    )


class CVService:
    """Service for CV document operations."""

    def __init__(
        self,
        cv_repo: CVRepository,
        storage: LocalCVStorage,
        max_size_bytes: int = config.MAX_CV_SIZE_BYTES,
    ):
        self.cv_repo = cv_repo
        self.storage = storage
        self.max_size_bytes = max_size_bytes

    async def upload(self, identity: Identity, request: CVUploadRequest) -> CVResponse:
        """
        Validate, store and register a CV. The newest CV is the one used for scoring.

        Raises:
            ValidationError: Unsupported type, undecodable payload, empty or oversized file
        """
        if request.content_type not in config.ALLOWED_CV_CONTENT_TYPES:
            raise ValidationError(
                "Unsupported file type. Use PDF, DOC or DOCX.",
                field="content_type",
            )

        try:
            data = base64.b64decode(request.file_base64, validate=True)
        except (binascii.Error, ValueError):
            raise ValidationError("File content is not valid base64", field="file_base64")

        if not data:
            raise ValidationError("File is empty", field="file_base64")
        if len(data) > self.max_size_bytes:
            raise ValidationError(
                f"File too large. Maximum {self.max_size_bytes // (1024 * 1024)}MB.",
                field="file_base64",
                details={"file_size": len(data), "max_size": self.max_size_bytes},
            )

        content_text = request.content_text
        if content_text is None and request.content_type == "application/pdf":
            content_text = await extract_pdf_text(data)

        file_path = await self.storage.save(identity.user_id, request.file_name, data)

        row = await self.cv_repo.create_document(
            candidate_id=identity.user_id,
            candidate_name=identity.name,
            candidate_email=identity.email,
            file_name=request.file_name,
            file_path=file_path,
            content_type=request.content_type,
            file_size=len(data),
            content_text=content_text or "",
        )
        logger.info(f"CV uploaded for candidate {identity.user_id}: {request.file_name} ({len(data)} bytes)")
        return _cv_response(row)

    async def get_latest(self, identity: Identity) -> CVResponse:
        row = await self.cv_repo.get_latest_document(identity.user_id)
        if not row:
            raise NotFoundError("CV", str(identity.user_id))
        return _cv_response(row)

"""
CSV asset import and its template. Runs under the bulk rate-limit policy.
"""
import logging

from fastapi import APIRouter, Depends, File, UploadFile
from fastapi.responses import Response
from sqlalchemy.ext.asyncio import AsyncSession

from inventory.core.dependencies import CurrentUser, get_current_user, get_db
from inventory.core.exceptions import BadRequestError
from inventory.core.rate_limit import rate_limit
from inventory.db.base import utcnow
from inventory.schemas.asset import CsvImportResult
from inventory.services import csv_import_service

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/csv-import",
    tags=["csv-import"],
    dependencies=[Depends(rate_limit("bulk"))],
)


@router.post("/import", response_model=CsvImportResult)
async def import_csv(
    file: UploadFile | None = File(None),
    db: AsyncSession = Depends(get_db),
    user: CurrentUser = Depends(get_current_user),
):
    content = await file.read() if file is not None else b""
    if not content:
        raise BadRequestError("No file uploaded. Please provide a CSV file.")
    if len(content) > csv_import_service.MAX_FILE_SIZE_BYTES:
        max_mb = csv_import_service.MAX_FILE_SIZE_BYTES // (1024 * 1024)
        raise BadRequestError(f"File size exceeds maximum allowed size of {max_mb} MB.")
    if not (file.filename or "").lower().endswith(".csv"):
        raise BadRequestError("Invalid file type. Only CSV files (.csv) are allowed.")

    logger.info("CSV import started by %s: %s (%d bytes)", user.name or user.oid, file.filename, len(content))
    return await csv_import_service.import_assets(db, content, user)


@router.get("/template")
async def download_template(_: CurrentUser = Depends(get_current_user)):
    filename = f"asset-import-template_{utcnow():%Y%m%d}.csv"
    return Response(
        content=csv_import_service.build_template(),
        media_type="text/csv",
        headers={"Content-Disposition": f"attachment; filename={filename}"},
    )

# routers/intake.py
from typing import Any, Dict, List

from fastapi import APIRouter, HTTPException, Request
from starlette.datastructures import UploadFile

from core.logging import logger
from services.intake_pipeline import IntakePipeline, UploadedBrief

router = APIRouter(tags=["intake"])

# multipart field names accepted for brief documents
FILE_FIELDS = ("file", "files")


def get_pipeline(request: Request) -> IntakePipeline:
    return request.app.state.pipeline


async def _read_uploads(request: Request) -> List[UploadedBrief]:
    """
    Collect every uploaded document from the multipart form.
    Text fields under the same names are ignored.
    """
    try:
        form = await request.form()
    except Exception as e:
        raise HTTPException(status_code=400, detail=f"Form parsing error: {e}")

    uploads: List[UploadedBrief] = []
    for field in FILE_FIELDS:
        for item in form.getlist(field):
            if not isinstance(item, UploadFile):
                continue
            data = await item.read()
            uploads.append(
                UploadedBrief(
                    filename=item.filename or "upload",
                    content_type=item.content_type or "",
                    data=data,
                )
            )
    return uploads


@router.post(
    "/api/intake",
    summary="Upload one or more briefs (PDF / TXT) and run the intake pipeline",
)
async def intake(request: Request) -> Dict[str, Any]:
    """
    - every file is processed independently (extract -> Brain -> adapt -> route -> Processor)
    - per-file failures are reported in the result list, the request still succeeds
    - only a request without any file is rejected
    """
    uploads = await _read_uploads(request)
    if not uploads:
        raise HTTPException(status_code=400, detail="No file received")

    logger.info(f"[intake] received {[u.filename for u in uploads]}")
    return await get_pipeline(request).process_batch(uploads)

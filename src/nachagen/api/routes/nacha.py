"""NACHA generation endpoint.

Shapes a GenerationResult into the HTTP response; the generator itself never
deals with status codes.
"""

from __future__ import annotations

from datetime import date
from typing import Any

from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from nachagen.models.nacha_file import GenerationResult
from nachagen.services.generator import NachaFileGenerator

router = APIRouter(tags=["nacha"])

_FAILURE_STATUS = {
    "BatchNotFoundError": 404,
    "BatchAlreadyGeneratedError": 409,
    "ConfigurationError": 422,
    "ValidationError": 422,
    "EmptyBatchError": 422,
}


class NachaGenerationRequest(BaseModel):
    batch_id: str
    company_id: str
    effective_date: date


def get_generator(request: Request) -> NachaFileGenerator:
    return request.app.state.generator


def _failure_status(result: GenerationResult) -> int:
    if result.retryable:
        return 503
    return _FAILURE_STATUS.get(result.error_kind, 500)


@router.post("/generate")
def generate_nacha_file(
    body: NachaGenerationRequest,
    generator: NachaFileGenerator = Depends(get_generator),
) -> JSONResponse:
    """Generate the NACHA file for a pending ACH batch."""
    result = generator.generate(body.batch_id, body.company_id, body.effective_date)

    if not result.success or result.nacha_file is None:
        return JSONResponse(
            status_code=_failure_status(result),
            content={
                "success": False,
                "error": result.error_kind,
                "violations": result.violations,
                "retryable": result.retryable,
            },
        )

    nacha_file = result.nacha_file
    summary = nacha_file.summary
    payload: dict[str, Any] = {
        "success": True,
        "file_name": nacha_file.file_name,
        "file_content": nacha_file.content,
        "storage_path": result.storage_path,
        "summary": {
            "total_entries": summary.total_entries,
            "total_credit_amount": str(summary.total_credit_amount),
            "total_debit_amount": str(summary.total_debit_amount),
            "entry_hash": summary.entry_hash,
            "effective_date": summary.effective_date.isoformat(),
        },
    }
    return JSONResponse(status_code=200, content=payload)

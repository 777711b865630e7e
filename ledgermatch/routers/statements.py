# ledgermatch/routers/statements.py

"""
Statement routes.

Format registry lookup, format detection and statement import. Import
problems are reported inside the ImportResult, not as HTTP errors.
"""

from fastapi import APIRouter, HTTPException
from pydantic import BaseModel
from typing import Optional

from ledgermatch.core.formats import BANK_FORMATS, detect_bank_format, get_bank_format
from ledgermatch.core.importer import generate_import_batch_id, import_bank_transactions
from ledgermatch.models import BankFormat, ImportResult

router = APIRouter()


class DetectFormatRequest(BaseModel):
    csv_data: str


class ImportRequest(BaseModel):
    csv_data: str
    bank_account_id: str
    import_batch_id: Optional[str] = None
    format_key: Optional[str] = None
    bank_format: Optional[BankFormat] = None


# ============================================
# Format registry
# ============================================

@router.get("/formats")
async def list_formats():
    """List the registered bank formats."""
    return {
        "formats": {key: fmt.model_dump() for key, fmt in BANK_FORMATS.items()},
    }


@router.post("/detect-format")
async def detect_format(request: DetectFormatRequest):
    """Guess the bank format from the statement header."""
    bank_format = detect_bank_format(request.csv_data)

    if bank_format is None:
        raise HTTPException(
            status_code=400,
            detail="Could not detect a bank format: the statement has no header row."
        )

    return {"format": bank_format.model_dump()}


# ============================================
# Import
# ============================================

@router.post("/import", response_model=ImportResult)
async def import_statement(request: ImportRequest):
    """
    Import a CSV statement.

    The layout comes from, in order: an inline format, a registry key, or
    header detection.
    """
    bank_format = request.bank_format

    if bank_format is None and request.format_key:
        try:
            bank_format = get_bank_format(request.format_key)
        except KeyError:
            raise HTTPException(
                status_code=404,
                detail=f"Unknown bank format: {request.format_key}"
            )

    if bank_format is None:
        bank_format = detect_bank_format(request.csv_data)
        if bank_format is None:
            raise HTTPException(
                status_code=400,
                detail="Could not detect a bank format: the statement has no header row."
            )

    import_batch_id = request.import_batch_id or generate_import_batch_id(request.bank_account_id)

    return import_bank_transactions(
        request.csv_data,
        bank_format,
        request.bank_account_id,
        import_batch_id,
    )

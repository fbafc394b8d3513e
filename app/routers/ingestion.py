"""
Ingestion API endpoint.
"""
from fastapi import APIRouter, Depends
from app.routers.dependencies import get_record_store, get_source
from app.schemas.common import ErrorResponse, ImportResponse
from app.services.ingestion_service import IngestionService
from app.services.record_store import RecordStore

router = APIRouter(responses={
    400: {"model": ErrorResponse},
    500: {"model": ErrorResponse},
})


@router.api_route("/import", methods=["GET", "POST"], response_model=ImportResponse)
def import_dataset(
    source=Depends(get_source),
    store: RecordStore = Depends(get_record_store)
):
    """
    Download the published CSV and upsert every valid row.
    
    Malformed rows are skipped. A source that cannot be downloaded, an
    unsupported header or a storage failure returns 500.
    """
    IngestionService(source, store).run()
    return ImportResponse(result="OK")

from fastapi import APIRouter

from cvscore.engine import get_default_analyzer

router = APIRouter()


@router.get("/health", summary="Health Check", description="Report service health and the loaded pattern catalog.")
async def health_check():
    catalog = get_default_analyzer().catalog
    return {"status": "healthy", "catalog_version": catalog.version, "locale": catalog.locale}

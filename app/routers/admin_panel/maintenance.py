import logging

from fastapi import APIRouter, Depends

from app.db import DocumentStore
from app.dependencies import get_db, require
from app.models.admin import DuplicateCleanupResult
from app.models.session import LineSession
from app.services.maintenance import delete_duplicate_plans
from app.services.policy import Action
from app.utils import responses
from app.utils.seed import seed_catalog

logger = logging.getLogger("esimshop")

router = APIRouter(tags=["Admin Maintenance"], responses={401: responses._401, 403: responses._403})


@router.post("/delete-duplicates", response_model=DuplicateCleanupResult)
def delete_duplicates(
    store: DocumentStore = Depends(get_db),
    admin: LineSession = Depends(require(Action.maintain_catalog)),
):
    """Remove plans repeating another plan of the same carrier."""
    result = delete_duplicate_plans(store)
    logger.info(f"Duplicate cleanup by {admin.user_id}: {result.stats.model_dump()}")
    return result


@router.post("/seed")
def seed(
    store: DocumentStore = Depends(get_db),
    admin: LineSession = Depends(require(Action.maintain_catalog)),
):
    counts = seed_catalog(store)
    logger.info(f"Catalog seeded by {admin.user_id}: {counts}")
    return {"success": True, "message": "資料庫填充成功！您現在可以瀏覽eSIM目錄。", **counts}

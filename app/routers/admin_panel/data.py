import json
import logging
from typing import Any, Dict, List

from fastapi import APIRouter, Depends, HTTPException, Query, Request
from fastapi.concurrency import run_in_threadpool
from pydantic import ValidationError

from app.db import DocumentStore, StoreError, crud
from app.dependencies import get_db, get_validated_plan, require
from app.models.admin import (BatchAction, BatchRequest, BatchResult, DataAdd,
                              DataModify, DataType, PlanDuplicate, PlanMigrate)
from app.models.country import CountryCreate, CountryModify
from app.models.imports import ImportReport
from app.models.plan import EDITABLE_PLAN_FIELDS, PlanCreate
from app.models.session import LineSession
from app.services.importer import ImportPayloadError, import_catalog
from app.services.maintenance import duplicate_plan, migrate_plan, run_batch
from app.services.policy import Action
from app.utils import responses

logger = logging.getLogger("esimshop")

router = APIRouter(tags=["Admin Data"], responses={401: responses._401, 403: responses._403})

WRITABLE_TYPES = (DataType.countries, DataType.plans)


def _writable(data_type: DataType) -> DataType:
    if data_type not in WRITABLE_TYPES:
        raise HTTPException(status_code=400, detail="Invalid data type")
    return data_type


def _validation_detail(e: ValidationError) -> Dict[str, str]:
    return {str(err["loc"][-1]) if err["loc"] else "data": err["msg"] for err in e.errors()}


def prepare_plan(store: DocumentStore, data: Dict[str, Any]) -> Dict[str, Any]:
    """Validate a plan for writing and denormalize its country name."""
    try:
        plan = PlanCreate.model_validate({k: v for k, v in data.items() if k in EDITABLE_PLAN_FIELDS})
    except ValidationError as e:
        raise HTTPException(status_code=400, detail=_validation_detail(e))
    dbcountry = crud.get_country(store, plan.countryId)
    if not dbcountry:
        raise HTTPException(status_code=404, detail=f'Country with ID "{plan.countryId}" not found')
    return {**plan.model_dump(mode="json"), "country": dbcountry["name"]}


def prepare_country(data: Dict[str, Any]) -> Dict[str, Any]:
    try:
        return CountryCreate.model_validate(data).model_dump()
    except ValidationError as e:
        raise HTTPException(status_code=400, detail=_validation_detail(e))


@router.get("/data")
def list_data(
    type: DataType = Query(...),
    store: DocumentStore = Depends(get_db),
    admin: LineSession = Depends(require(Action.view_admin)),
) -> List[dict]:
    return store.get_all(type.value)


@router.post("/data", responses={400: responses._400, 404: responses._404})
def add_data(
    body: DataAdd,
    store: DocumentStore = Depends(get_db),
    admin: LineSession = Depends(require(Action.manage_catalog)),
):
    data_type = _writable(body.type)
    if data_type is DataType.plans:
        new_id = crud.create_plan(store, prepare_plan(store, body.data))
    else:
        new_id = crud.create_country(store, CountryCreate(**prepare_country(body.data)))
    logger.info(f"Admin {admin.user_id} added {data_type.value}/{new_id}")
    return {"success": True, "id": new_id, "message": "Document added successfully"}


@router.put("/data", responses={400: responses._400, 404: responses._404})
def update_data(
    body: DataModify,
    store: DocumentStore = Depends(get_db),
    admin: LineSession = Depends(require(Action.manage_catalog)),
):
    data_type = _writable(body.type)
    label = "Country" if data_type is DataType.countries else "Plan"
    existing = store.get_by_id(data_type.value, body.id)
    if not existing:
        raise HTTPException(status_code=404, detail=f"{label} not found")

    if data_type is DataType.plans:
        crud.update_plan(store, body.id, prepare_plan(store, {**existing, **body.data}))
    else:
        crud.update_country(store, body.id, CountryModify(**prepare_country({**existing, **body.data})))
    logger.info(f"Admin {admin.user_id} updated {data_type.value}/{body.id}")
    return {"success": True, "message": f"{label} updated successfully", "id": body.id}


@router.delete("/data", responses={400: responses._400})
def delete_data(
    type: DataType = Query(...),
    id: str = Query(..., min_length=1),
    store: DocumentStore = Depends(get_db),
    admin: LineSession = Depends(require(Action.manage_catalog)),
):
    data_type = _writable(type)
    store.delete(data_type.value, id)
    logger.info(f"Admin {admin.user_id} deleted {data_type.value}/{id}")
    return {"success": True, "message": "Document deleted successfully"}


@router.post("/data/import", response_model=ImportReport, responses={400: responses._400, 500: responses._500})
async def import_data(
    request: Request,
    store: DocumentStore = Depends(get_db),
    admin: LineSession = Depends(require(Action.import_catalog)),
):
    """Merge a JSON batch of countries and plans into the catalog."""
    try:
        payload = await request.json()
    except (json.JSONDecodeError, UnicodeDecodeError):
        raise HTTPException(status_code=400, detail="Import payload is not valid JSON")

    try:
        report = await run_in_threadpool(import_catalog, store, payload)
    except ImportPayloadError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except StoreError as e:
        logger.error(f"Import by {admin.user_id} aborted: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail="Failed to import data")
    return report


@router.post("/data/batch", response_model=BatchResult, responses={400: responses._400})
def batch_plans(
    body: BatchRequest,
    store: DocumentStore = Depends(get_db),
    admin: LineSession = Depends(require(Action.manage_catalog)),
):
    if body.action is BatchAction.migrate and not (body.targetCountryId and body.targetCountryName):
        raise HTTPException(status_code=400,
                            detail="Missing targetCountryId or targetCountryName for migrate action")
    result = run_batch(store, body)
    logger.info(f"Admin {admin.user_id} ran batch {body.action.value}: "
                f"{result.processed} processed, {result.failed} failed")
    return result


@router.post("/data/plan/duplicate", responses={404: responses._404})
def duplicate_plan_route(
    body: PlanDuplicate,
    store: DocumentStore = Depends(get_db),
    admin: LineSession = Depends(require(Action.manage_catalog)),
):
    dbplan = get_validated_plan(body.planId, store)
    new_id = duplicate_plan(store, dbplan, changes=body.changes)
    return {"success": True, "id": new_id, "message": "Plan duplicated successfully"}


@router.put("/data/plan/migrate", responses={404: responses._404})
def migrate_plan_route(
    body: PlanMigrate,
    store: DocumentStore = Depends(get_db),
    admin: LineSession = Depends(require(Action.manage_catalog)),
):
    dbplan = get_validated_plan(body.planId, store)
    new_id = migrate_plan(store, dbplan, body.newCountryId, body.newCountryName)
    return {"success": True, "id": new_id, "message": "Plan migrated successfully"}

"""Bulk plan operations of the back office."""

import logging
from datetime import datetime
from typing import Dict, List, Optional

from app.db import crud
from app.db.store import DocumentStore, Record
from app.models.admin import (BatchAction, BatchRequest, BatchResult,
                              DuplicateCleanupResult, DuplicateStats)

logger = logging.getLogger("esimshop.maintenance")

DUPLICATE_SUFFIX = " (複製)"


def _copy_of(plan: Record) -> Record:
    return {k: v for k, v in plan.items() if k != "id"}


def duplicate_plan(store: DocumentStore, plan: Record, changes: Optional[Dict] = None,
                   suffix: str = "") -> str:
    now = datetime.utcnow()
    new_plan = {**_copy_of(plan), **(changes or {}), "createdAt": now, "updatedAt": now,
                "duplicatedFrom": plan["id"]}
    if suffix:
        new_plan["title"] = f"{new_plan.get('title', '')}{suffix}"
    return store.insert(crud.PLANS, new_plan)


def migrate_plan(store: DocumentStore, plan: Record, country_id: str, country_name: str) -> str:
    """Copy ``plan`` into another country. The original stays untouched."""
    new_plan = {**_copy_of(plan), "countryId": country_id, "country": country_name,
                "updatedAt": datetime.utcnow(), "migratedFrom": plan["id"]}
    return store.insert(crud.PLANS, new_plan)


def run_batch(store: DocumentStore, request: BatchRequest) -> BatchResult:
    result = BatchResult()

    for plan_id in request.planIds:
        try:
            if request.action is BatchAction.delete:
                crud.remove_plan(store, plan_id)
                result.processed += 1
                continue

            plan = crud.get_plan(store, plan_id)
            if not plan:
                result.failed += 1
                result.errors.append(f"Plan {plan_id} not found")
                continue

            if request.action is BatchAction.duplicate:
                new_id = duplicate_plan(store, plan, suffix=DUPLICATE_SUFFIX)
            else:
                new_id = migrate_plan(store, plan, request.targetCountryId, request.targetCountryName)
            result.processed += 1
            result.newIds.append(new_id)
        except Exception as e:
            logger.error(f"Batch {request.action.value} failed for plan {plan_id}: {e}", exc_info=True)
            result.failed += 1
            result.errors.append(f"Failed to {request.action.value} plan {plan_id}: {e}")

    result.success = result.failed == 0
    return result


def _carrier_key(plan: Record) -> tuple:
    # carrier names repeat across countries; a carrier document belongs to one
    return plan.get("countryId") or "", plan.get("carrierId") or plan.get("carrier") or ""


def _duplicate_key(plan: Record) -> tuple:
    days = plan.get("duration_days", plan.get("days"))
    return (plan.get("plan_type"), days, plan.get("data_per_day"), plan.get("total_data"),
            plan.get("dataAmount"), plan.get("price"))


def delete_duplicate_plans(store: DocumentStore) -> DuplicateCleanupResult:
    """Within each carrier of a country keep the first plan of every
    (plan type, days, data, price) and delete the rest."""
    stats = DuplicateStats()
    plans = crud.get_plans(store)
    stats.plansChecked = len(plans)

    by_carrier: Dict[tuple, List[Record]] = {}
    for plan in plans:
        by_carrier.setdefault(_carrier_key(plan), []).append(plan)

    for carrier_plans in by_carrier.values():
        seen = set()
        for plan in carrier_plans:
            key = _duplicate_key(plan)
            if key not in seen:
                seen.add(key)
                continue
            stats.duplicatesFound += 1
            try:
                crud.remove_plan(store, plan["id"])
                stats.duplicatesDeleted += 1
            except Exception as e:
                logger.error(f"Error deleting duplicate plan {plan['id']}: {e}", exc_info=True)
                stats.errors += 1

    message = (
        f"已檢查 {stats.plansChecked} 個方案，找到 {stats.duplicatesFound} 個重複項目，"
        f"成功刪除 {stats.duplicatesDeleted} 個。"
    )
    if stats.errors:
        message += f"刪除過程中發生 {stats.errors} 個錯誤。"
    return DuplicateCleanupResult(success=True, message=message, stats=stats)

"""
Functions for managing countries, carriers, plans, menus and user profiles.
"""

import logging
from datetime import datetime
from typing import Any, Dict, List, Optional

from app.db.store import DocumentNotFound, DocumentStore, Record
from app.models.carrier import CarrierCreate
from app.models.country import CountryCreate, CountryModify
from app.models.menu import MenuCreate
from app.models.user import ListKind

logger = logging.getLogger("esimshop")

COUNTRIES = "countries"
CARRIERS = "carriers"
PLANS = "plans"
MENUS = "menus"
USERS = "users"


def get_countries(store: DocumentStore) -> List[Record]:
    return store.get_all(COUNTRIES)


def get_country(store: DocumentStore, country_id: str) -> Optional[Record]:
    return store.get_by_id(COUNTRIES, country_id)


def get_country_by_code(store: DocumentStore, code: str) -> Optional[Record]:
    code = code.lower()
    for country in store.get_all(COUNTRIES):
        if str(country.get("code", "")).lower() == code:
            return country
    return None


def create_country(store: DocumentStore, country: CountryCreate) -> str:
    now = datetime.utcnow()
    return store.insert(COUNTRIES, {**country.model_dump(), "createdAt": now, "updatedAt": now})


def update_country(store: DocumentStore, country_id: str, modify: CountryModify) -> None:
    store.update(COUNTRIES, country_id, {**modify.model_dump(exclude_none=True), "updatedAt": datetime.utcnow()})


def remove_country(store: DocumentStore, country_id: str) -> None:
    store.delete(COUNTRIES, country_id)


def get_carriers(store: DocumentStore) -> List[Record]:
    return store.get_all(CARRIERS)


def get_carriers_by_country(store: DocumentStore, country_id: str) -> List[Record]:
    return store.get_by_field(CARRIERS, "countryId", country_id)


def get_carrier(store: DocumentStore, carrier_id: str) -> Optional[Record]:
    return store.get_by_id(CARRIERS, carrier_id)


def create_carrier(store: DocumentStore, carrier: CarrierCreate) -> str:
    return store.insert(CARRIERS, carrier.model_dump())


def update_carrier(store: DocumentStore, carrier_id: str, data: Dict[str, Any]) -> None:
    store.update(CARRIERS, carrier_id, data)


def remove_carrier(store: DocumentStore, carrier_id: str) -> None:
    store.delete(CARRIERS, carrier_id)


def get_plans(store: DocumentStore) -> List[Record]:
    return store.get_all(PLANS)


def get_plans_by_country(store: DocumentStore, country_id: str) -> List[Record]:
    return store.get_by_field(PLANS, "countryId", country_id)


def get_plans_by_carrier(store: DocumentStore, carrier_id: str) -> List[Record]:
    return store.get_by_field(PLANS, "carrierId", carrier_id)


def get_plan(store: DocumentStore, plan_id: str) -> Optional[Record]:
    return store.get_by_id(PLANS, plan_id)


def create_plan(store: DocumentStore, plan: Dict[str, Any]) -> str:
    now = datetime.utcnow()
    return store.insert(PLANS, {**plan, "createdAt": now, "updatedAt": now})


def update_plan(store: DocumentStore, plan_id: str, plan_data: Dict[str, Any]) -> None:
    store.update(PLANS, plan_id, {**plan_data, "updatedAt": datetime.utcnow()})


def remove_plan(store: DocumentStore, plan_id: str) -> None:
    store.delete(PLANS, plan_id)


def get_menus(store: DocumentStore) -> List[Record]:
    return store.get_all(MENUS)


def get_menu(store: DocumentStore, menu_id: str) -> Optional[Record]:
    return store.get_by_id(MENUS, menu_id)


def create_menu(store: DocumentStore, menu: MenuCreate) -> Record:
    now = datetime.utcnow()
    data = {**menu.model_dump(mode="json"), "createdAt": now, "updatedAt": now}
    menu_id = store.insert(MENUS, data)
    return {"id": menu_id, **data}


def update_menu(store: DocumentStore, dbmenu: Record, menu: MenuCreate) -> Record:
    data = {
        **menu.model_dump(mode="json"),
        "createdAt": dbmenu.get("createdAt") or datetime.utcnow(),
        "updatedAt": datetime.utcnow(),
    }
    store.update(MENUS, dbmenu["id"], data)
    return {"id": dbmenu["id"], **data}


def remove_menu(store: DocumentStore, menu_id: str) -> None:
    store.delete(MENUS, menu_id)


def get_user_profile(store: DocumentStore, user_id: str) -> Optional[Record]:
    return store.get_by_id(USERS, user_id)


def save_user_profile(store: DocumentStore, user_id: str, profile: Dict[str, Any]) -> None:
    """Merge ``profile`` into the stored document, creating it when absent."""
    if store.get_by_id(USERS, user_id):
        store.update(USERS, user_id, profile)
    else:
        store.insert_with_id(USERS, user_id, {"userId": user_id, "cart": [], "inquiryList": [], **profile})
        logger.info(f"Created profile for LINE user {user_id}")


def get_list(store: DocumentStore, user_id: str, kind: ListKind) -> List[Record]:
    profile = get_user_profile(store, user_id)
    if not profile:
        return []
    return list(profile.get(kind.field) or [])


def replace_list(store: DocumentStore, user_id: str, kind: ListKind, items: List[Record]) -> None:
    """Write the whole list field; the store never sees per-item updates."""
    save_user_profile(store, user_id, {kind.field: items})


def add_list_item(store: DocumentStore, user_id: str, kind: ListKind, item: Record) -> bool:
    """Append ``item`` unless its plan is already listed. Returns whether anything was written."""
    items = get_list(store, user_id, kind)
    if any(i.get("planId") == item["planId"] for i in items):
        return False
    items.append({**item, "addedAt": item.get("addedAt") or datetime.utcnow()})
    replace_list(store, user_id, kind, items)
    return True


def remove_list_item(store: DocumentStore, user_id: str, kind: ListKind, plan_id: str) -> None:
    if not get_user_profile(store, user_id):
        return
    items = [i for i in get_list(store, user_id, kind) if i.get("planId") != plan_id]
    store.update(USERS, user_id, {kind.field: items})


def update_list_item(store: DocumentStore, user_id: str, kind: ListKind, plan_id: str,
                     changes: Dict[str, Any]) -> None:
    if not get_user_profile(store, user_id):
        raise DocumentNotFound(USERS, user_id)
    items = [
        {**i, **changes} if i.get("planId") == plan_id else i
        for i in get_list(store, user_id, kind)
    ]
    store.update(USERS, user_id, {kind.field: items})

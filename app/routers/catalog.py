from typing import List, Optional

from fastapi import APIRouter, Depends, Query

from app.db import DocumentStore, crud
from app.dependencies import (get_db, get_validated_carrier,
                              get_validated_country, get_validated_menu,
                              get_validated_plan)
from app.models.carrier import Carrier
from app.models.country import Country
from app.models.menu import Menu
from app.utils import responses

router = APIRouter(tags=["Catalog"])


@router.get("/countries", response_model=List[Country])
def get_countries(store: DocumentStore = Depends(get_db)):
    """List every country of the catalog."""
    return crud.get_countries(store)


@router.get("/countries/{country_id}", response_model=Country, responses={404: responses._404})
def get_country(dbcountry: dict = Depends(get_validated_country)):
    return dbcountry


@router.get("/carriers", response_model=List[Carrier])
def get_carriers(countryId: Optional[str] = Query(default=None), store: DocumentStore = Depends(get_db)):
    if countryId:
        return crud.get_carriers_by_country(store, countryId)
    return crud.get_carriers(store)


@router.get("/carriers/{carrier_id}", response_model=Carrier, responses={404: responses._404})
def get_carrier(dbcarrier: dict = Depends(get_validated_carrier)):
    return dbcarrier


@router.get("/plans")
def get_plans(
    countryId: Optional[str] = Query(default=None),
    carrierId: Optional[str] = Query(default=None),
    store: DocumentStore = Depends(get_db),
) -> List[dict]:
    """Plans of one country or one carrier, or the whole catalog when no filter is given."""
    if countryId:
        return crud.get_plans_by_country(store, countryId)
    if carrierId:
        return crud.get_plans_by_carrier(store, carrierId)
    return crud.get_plans(store)


@router.get("/plans/{plan_id}", responses={404: responses._404})
def get_plan(dbplan: dict = Depends(get_validated_plan)) -> dict:
    return dbplan


@router.get("/menus", response_model=List[Menu])
def get_menus(store: DocumentStore = Depends(get_db)):
    return crud.get_menus(store)


@router.get("/menus/{menu_id}", response_model=Menu, responses={404: responses._404})
def get_menu(dbmenu: dict = Depends(get_validated_menu)):
    return dbmenu

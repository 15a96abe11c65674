import logging

from fastapi import APIRouter, Depends, status

from app.db import DocumentStore, crud
from app.dependencies import get_db, get_validated_menu, require
from app.models.menu import Menu, MenuCreate
from app.models.session import LineSession
from app.services.policy import Action
from app.utils import responses

logger = logging.getLogger("esimshop")

router = APIRouter(tags=["Admin Menus"], responses={401: responses._401, 403: responses._403})


@router.post("/menus", response_model=Menu, status_code=status.HTTP_201_CREATED)
def add_menu(
    new_menu: MenuCreate,
    store: DocumentStore = Depends(get_db),
    admin: LineSession = Depends(require(Action.manage_menus)),
):
    menu = crud.create_menu(store, new_menu)
    logger.info(f'Menu "{menu["title"]}" added by {admin.user_id}')
    return menu


@router.put("/menus/{menu_id}", response_model=Menu, responses={404: responses._404})
def modify_menu(
    modified_menu: MenuCreate,
    dbmenu: dict = Depends(get_validated_menu),
    store: DocumentStore = Depends(get_db),
    admin: LineSession = Depends(require(Action.manage_menus)),
):
    return crud.update_menu(store, dbmenu, modified_menu)


@router.delete("/menus/{menu_id}", responses={404: responses._404})
def remove_menu(
    dbmenu: dict = Depends(get_validated_menu),
    store: DocumentStore = Depends(get_db),
    admin: LineSession = Depends(require(Action.manage_menus)),
):
    crud.remove_menu(store, dbmenu["id"])
    logger.info(f'Menu "{dbmenu.get("title")}" deleted by {admin.user_id}')
    return {"message": "Menu deleted successfully"}

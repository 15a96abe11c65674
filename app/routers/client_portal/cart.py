from typing import Optional

from fastapi import APIRouter, Body, Depends, Query

from app.db import DocumentStore
from app.dependencies import get_cart_sync, get_db
from app.models.user import CartAdd, ContactDetails, ListResponse, QuantityModify
from app.services.chat import (ChatChannel, ChatDeliveryError, ChatUnavailable,
                               EmptyListError, get_chat_channel, send_cart_order)
from app.services.sync import ListSynchronizer, SyncError
from app.utils import responses

from .common import chat_failure, list_response, sync_failure

router = APIRouter(prefix="/cart", tags=["Cart"], responses={401: responses._401, 500: responses._500})


@router.get("", response_model=ListResponse)
def get_cart(sync: ListSynchronizer = Depends(get_cart_sync)):
    return list_response(sync)


@router.post("", response_model=ListResponse)
def add_to_cart(item: CartAdd, sync: ListSynchronizer = Depends(get_cart_sync)):
    """Add a plan; adding a plan already in the cart changes nothing."""
    try:
        sync.add(item.model_dump(exclude_none=True))
    except SyncError:
        return sync_failure(sync)
    return list_response(sync)


@router.delete("", response_model=ListResponse, responses={400: responses._400})
def remove_from_cart(planId: str = Query(..., min_length=1), sync: ListSynchronizer = Depends(get_cart_sync)):
    try:
        sync.remove(planId)
    except SyncError:
        return sync_failure(sync)
    return list_response(sync)


@router.put("/{plan_id}", response_model=ListResponse)
def update_cart_quantity(plan_id: str, modify: QuantityModify, sync: ListSynchronizer = Depends(get_cart_sync)):
    try:
        sync.update_quantity(plan_id, modify.quantity)
    except SyncError:
        return sync_failure(sync)
    return list_response(sync)


@router.post("/clear", response_model=ListResponse)
def clear_cart(sync: ListSynchronizer = Depends(get_cart_sync)):
    try:
        sync.clear()
    except SyncError:
        return sync_failure(sync)
    return list_response(sync)


@router.post("/send", response_model=ListResponse, responses={400: responses._400, 409: responses._409})
def send_cart(
    contact: Optional[ContactDetails] = Body(default=None),
    sync: ListSynchronizer = Depends(get_cart_sync),
    store: DocumentStore = Depends(get_db),
    channel: ChatChannel = Depends(get_chat_channel),
):
    """Push the cart to the LINE chat as an order and empty it."""
    try:
        send_cart_order(store, channel, sync, contact)
    except (EmptyListError, ChatUnavailable, ChatDeliveryError) as e:
        raise chat_failure(e)
    except SyncError:
        return sync_failure(sync)
    return list_response(sync)

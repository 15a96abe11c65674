from fastapi import APIRouter, Depends, Query

from app.db import DocumentStore
from app.dependencies import get_db, get_inquiry_sync
from app.models.user import InquiryAdd, ListResponse
from app.services.chat import (ChatChannel, ChatDeliveryError, ChatUnavailable,
                               EmptyListError, get_chat_channel, send_inquiry)
from app.services.sync import ListSynchronizer, SyncError
from app.utils import responses

from .common import chat_failure, list_response, sync_failure

router = APIRouter(prefix="/inquiry", tags=["Inquiry"], responses={401: responses._401, 500: responses._500})


@router.get("", response_model=ListResponse)
def get_inquiry_list(sync: ListSynchronizer = Depends(get_inquiry_sync)):
    return list_response(sync)


@router.post("", response_model=ListResponse)
def add_to_inquiry(item: InquiryAdd, sync: ListSynchronizer = Depends(get_inquiry_sync)):
    try:
        sync.add(item.model_dump())
    except SyncError:
        return sync_failure(sync)
    return list_response(sync)


@router.delete("", response_model=ListResponse, responses={400: responses._400})
def remove_from_inquiry(planId: str = Query(..., min_length=1), sync: ListSynchronizer = Depends(get_inquiry_sync)):
    try:
        sync.remove(planId)
    except SyncError:
        return sync_failure(sync)
    return list_response(sync)


@router.post("/clear", response_model=ListResponse)
def clear_inquiry_list(sync: ListSynchronizer = Depends(get_inquiry_sync)):
    try:
        sync.clear()
    except SyncError:
        return sync_failure(sync)
    return list_response(sync)


@router.post("/send", response_model=ListResponse, responses={400: responses._400, 409: responses._409})
def send_inquiry_list(
    sync: ListSynchronizer = Depends(get_inquiry_sync),
    store: DocumentStore = Depends(get_db),
    channel: ChatChannel = Depends(get_chat_channel),
):
    try:
        send_inquiry(store, channel, sync)
    except (EmptyListError, ChatUnavailable, ChatDeliveryError) as e:
        raise chat_failure(e)
    except SyncError:
        return sync_failure(sync)
    return list_response(sync)

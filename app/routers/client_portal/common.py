from fastapi import HTTPException, status
from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse

from app.services.chat import ChatDeliveryError, ChatUnavailable, EmptyListError
from app.services.sync import ListSynchronizer

CHAT_ERROR_STATUS = {
    EmptyListError: status.HTTP_400_BAD_REQUEST,
    ChatUnavailable: status.HTTP_409_CONFLICT,
    ChatDeliveryError: status.HTTP_502_BAD_GATEWAY,
}


def list_response(sync: ListSynchronizer) -> dict:
    return {"items": sync.items, "error": sync.error}


def sync_failure(sync: ListSynchronizer) -> JSONResponse:
    """500 carrying the rolled-back list and the message to show inline."""
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content=jsonable_encoder(list_response(sync)),
    )


def chat_failure(e: Exception) -> HTTPException:
    return HTTPException(status_code=CHAT_ERROR_STATUS[type(e)], detail=str(e))

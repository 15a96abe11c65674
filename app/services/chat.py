import logging
from typing import Any, Dict, List, Optional, Union

from linebot import LineBotApi
from linebot.exceptions import LineBotApiError
from linebot.models import FlexSendMessage, SendMessage, TextSendMessage

from app.db import crud
from app.db.store import DocumentStore
from app.models.session import LineSession
from app.models.user import ContactDetails, ListKind
from app.services.sync import ListSynchronizer
from app.utils.line_messages import (ORDER_ALT_TEXT, build_inquiry_text,
                                     build_order_card)
from config import LINE_CHANNEL_ACCESS_TOKEN

logger = logging.getLogger("esimshop.chat")


class ChatUnavailable(Exception):
    """The session cannot receive chat messages (outside the LINE app or no channel configured)."""


class ChatDeliveryError(Exception):
    pass


class EmptyListError(ValueError):
    pass


class ChatChannel:
    """One-way notification sink into the user's LINE chat."""

    def __init__(self, api: Optional[LineBotApi] = None):
        self.api = api

    @classmethod
    def from_token(cls, access_token: Optional[str]) -> "ChatChannel":
        return cls(LineBotApi(access_token) if access_token else None)

    def available(self, session: LineSession) -> bool:
        return self.api is not None and session.in_client

    def send_message(self, session: LineSession, message: Union[str, SendMessage]) -> None:
        if not self.available(session):
            raise ChatUnavailable("Please make sure you are using the LINE app.")
        if isinstance(message, str):
            message = TextSendMessage(text=message)
        try:
            self.api.push_message(session.user_id, message)
        except LineBotApiError as e:
            logger.error(f"LINE push to {session.user_id} failed: {e}", exc_info=True)
            raise ChatDeliveryError("Failed to send message to LINE chat") from e
        logger.info(f"Pushed {type(message).__name__} to {session.user_id}")


_channel: Optional[ChatChannel] = None


def get_chat_channel() -> ChatChannel:
    global _channel
    if _channel is None:
        _channel = ChatChannel.from_token(LINE_CHANNEL_ACCESS_TOKEN)
    return _channel


def send_cart_order(store: DocumentStore, channel: ChatChannel, sync: ListSynchronizer,
                    contact: Optional[ContactDetails] = None) -> None:
    """Push the cart as an order card, then clear it."""
    if sync.kind is not ListKind.cart:
        raise ValueError("send_cart_order needs a cart synchronizer")
    if not sync.items:
        raise EmptyListError("Cannot send cart. Please make sure you have items in your list.")
    if not channel.available(sync.session):
        raise ChatUnavailable("Cannot send cart. Please make sure you are using the LINE app.")

    lines: List[Dict[str, Any]] = []
    total = 0.0
    for item in sync.items:
        plan = crud.get_plan(store, item["planId"])
        if not plan:
            logger.warning(f"Cart of {sync.user_id} references missing plan {item['planId']}")
            continue
        quantity = int(item.get("quantity") or 1)
        price = item.get("overridePrice")
        if price is None:
            price = plan.get("price") or 0
        total += float(price) * quantity
        lines.append({"plan": plan, "quantity": quantity})

    # Details typed into the order form win over the stored profile
    profile = crud.get_user_profile(store, sync.user_id) or {}
    stored = {k: profile.get(k) for k in ContactDetails.model_fields if profile.get(k)}
    contact = ContactDetails(**{**stored, **(contact.model_dump(exclude_none=True) if contact else {})})

    card = build_order_card(lines, total, contact)
    channel.send_message(sync.session, FlexSendMessage(alt_text=ORDER_ALT_TEXT, contents=card))
    sync.clear()


def send_inquiry(store: DocumentStore, channel: ChatChannel, sync: ListSynchronizer) -> None:
    """Push the inquiry list as a text message, then clear it."""
    if sync.kind is not ListKind.inquiry:
        raise ValueError("send_inquiry needs an inquiry synchronizer")
    if not sync.items:
        raise EmptyListError("Cannot send inquiry. Please make sure you have items in your list.")
    if not channel.available(sync.session):
        raise ChatUnavailable("Cannot send inquiry. Please make sure you are using the LINE app.")

    entries: List[Dict[str, Any]] = []
    for item in sync.items:
        plan = crud.get_plan(store, item["planId"])
        if not plan:
            continue
        carrier = crud.get_carrier(store, item.get("carrierId", "")) if item.get("carrierId") else None
        country = crud.get_country(store, item.get("countryId", "")) if item.get("countryId") else None
        entries.append({
            "plan": plan,
            "carrier": (carrier or {}).get("name") or plan.get("carrier", ""),
            "country": (country or {}).get("name") or plan.get("country", ""),
        })

    channel.send_message(sync.session, build_inquiry_text(entries))
    sync.clear()

"""Builders for the messages pushed to the LINE chat."""

from typing import Any, Dict, List, Optional

from app.models.user import ContactDetails

ORDER_ALT_TEXT = "您的eSIM訂單明細"
INQUIRY_HEADER = "📱 eSIM 詢問清單："
INQUIRY_FOOTER = "請問以上方案有什麼問題想詢問的嗎？"

CONTACT_ROWS = (
    ("address", "地址"),
    ("phone", "電話"),
    ("email", "Email"),
    ("note", "備註"),
)


def format_price(amount) -> str:
    """Render a stored price; imported plans may carry it as text or not at all."""
    try:
        amount = float(amount or 0)
    except (TypeError, ValueError):
        return str(amount)
    return f"{amount:g}" if amount != int(amount) else str(int(amount))


def describe_data(plan: Dict[str, Any]) -> str:
    if plan.get("data_per_day"):
        return f"每日{plan['data_per_day']}"
    return plan.get("total_data") or ""


def _text(text: str, **kwargs) -> Dict[str, Any]:
    return {"type": "text", "text": text, "size": "sm", **kwargs}


def _item_row(label: str, quantity: int) -> Dict[str, Any]:
    return {
        "type": "box",
        "layout": "baseline",
        "contents": [
            _text(label, color="#333333", flex=5, wrap=True),
            _text(f"x{quantity}", color="#666666", align="end", flex=1),
        ],
    }


def _contact_row(label: str, value: str, first: bool) -> Dict[str, Any]:
    row = {
        "type": "box",
        "layout": "baseline",
        "contents": [
            _text(label, color="#aaaaaa", flex=1),
            _text(value, color="#666666", flex=5, wrap=True),
        ],
    }
    if not first:
        row["margin"] = "md"
    return row


def order_line_label(plan: Dict[str, Any]) -> str:
    return f"{plan.get('country', '')} - {plan.get('carrier', '')} {plan.get('duration_days', '')}天"


def build_order_card(lines: List[Dict[str, Any]], total: float,
                     contact: Optional[ContactDetails] = None) -> Dict[str, Any]:
    """Flex bubble for an order; ``lines`` hold ``plan`` and ``quantity``."""
    items: List[Dict[str, Any]] = []
    for index, line in enumerate(lines):
        items.append(_item_row(order_line_label(line["plan"]), line["quantity"]))
        if index < len(lines) - 1:
            items.append({"type": "separator", "margin": "sm"})
    items.append({"type": "separator", "margin": "md"})
    items.append({
        "type": "box",
        "layout": "baseline",
        "margin": "md",
        "contents": [
            _text("總計", color="#555555", weight="bold", flex=1),
            _text(f"NT${format_price(total)}", color="#111111", weight="bold", align="end", flex=2),
        ],
    })

    body: List[Dict[str, Any]] = [
        {
            "type": "box",
            "layout": "vertical",
            "contents": [
                _text("訂單明細", weight="bold", color="#1DB446"),
                {"type": "separator", "margin": "md"},
                {"type": "box", "layout": "vertical", "margin": "md", "spacing": "sm", "contents": items},
            ],
        }
    ]

    contact_rows: List[Dict[str, Any]] = []
    if contact is not None:
        for field, label in CONTACT_ROWS:
            value = getattr(contact, field)
            if value:
                contact_rows.append(_contact_row(label, value, first=not contact_rows))
    if contact_rows:
        body.append(_text("聯絡資訊", weight="bold", margin="xl"))
        body.append({"type": "box", "layout": "vertical", "margin": "md", "spacing": "sm",
                     "contents": contact_rows})

    return {
        "type": "bubble",
        "body": {"type": "box", "layout": "vertical", "contents": body},
        "footer": {
            "type": "box",
            "layout": "vertical",
            "contents": [_text("請確認以上訂單內容後，再點選下方按鈕完成訂購。", color="#666666", wrap=True)],
        },
    }


def build_inquiry_text(entries: List[Dict[str, Any]]) -> str:
    """Numbered plain-text list; ``entries`` hold ``plan``, ``carrier`` and ``country`` names."""
    message = f"{INQUIRY_HEADER}\n\n"
    for index, entry in enumerate(entries, start=1):
        plan = entry["plan"]
        message += f"{index}. {entry['country']} - {entry['carrier']}\n"
        message += (
            f"   {plan.get('duration_days', '')}天 / {describe_data(plan)} / "
            f"{format_price(plan.get('price', 0))}{plan.get('currency', '')}\n"
        )
        notes = plan.get("notes")
        if isinstance(notes, list):
            notes = "、".join(notes)
        if notes:
            message += f"   備註: {notes}\n"
        message += "\n"
    message += INQUIRY_FOOTER
    return message

from typing import Optional

from pydantic import BaseModel


class LineSession(BaseModel):
    """The LINE user behind a request, passed explicitly to whatever acts for them."""
    user_id: str
    display_name: str = ""
    picture_url: Optional[str] = None
    in_client: bool = False

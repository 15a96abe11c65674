import logging
from typing import Optional

from fastapi import Depends, Header, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from jose import JWTError, jwt
import requests

from app.db import DocumentStore, crud, get_store
from app.models.session import LineSession
from app.models.user import ListKind
from app.services.policy import Action, AuthorizationPolicy, get_policy
from app.services.sync import ListSynchronizer, SyncError
from config import LINE_CHANNEL_ID, LINE_CHANNEL_SECRET

logger = logging.getLogger("esimshop")

LINE_ISSUER = "https://access.line.me"
LINE_JWKS_URL = "https://api.line.me/oauth2/v2.1/certs"

bearer_scheme = HTTPBearer(auto_error=False)

_line_jwks: Optional[dict] = None


def get_db() -> DocumentStore:
    return get_store()


def fetch_line_jwks() -> dict:
    """LINE's public signing keys for ES256 ID tokens (the LIFF format)."""
    resp = requests.get(LINE_JWKS_URL, timeout=5)
    resp.raise_for_status()
    return resp.json()


def _line_signing_key(kid: Optional[str]) -> Optional[dict]:
    global _line_jwks
    for refresh in (False, True):
        if refresh or _line_jwks is None:
            _line_jwks = fetch_line_jwks()
        for key in _line_jwks.get("keys", []):
            if key.get("kid") == kid:
                return key
    return None


def decode_line_id_token(token: str) -> Optional[dict]:
    """Verify a LINE ID token; None when it does not check out.

    LIFF issues ES256 tokens checked against LINE's published keys, web
    LINE Login issues HS256 tokens signed with the channel secret.
    """
    if not token or not token.strip():
        return None
    try:
        header = jwt.get_unverified_header(token)
        if header.get("alg") == "ES256":
            key = _line_signing_key(header.get("kid"))
            if key is None:
                logger.warning(f"Rejected LINE ID token: unknown key id {header.get('kid')!r}")
                return None
            algorithms = ["ES256"]
        else:
            key = LINE_CHANNEL_SECRET
            algorithms = ["HS256"]

        return jwt.decode(
            token,
            key,
            algorithms=algorithms,
            audience=LINE_CHANNEL_ID or None,
            issuer=LINE_ISSUER,
            options={"verify_aud": bool(LINE_CHANNEL_ID)},
        )
    except JWTError as e:
        logger.warning(f"Rejected LINE ID token: {e}")
        return None
    except requests.RequestException as e:
        logger.error(f"Could not fetch LINE signing keys: {e}")
        return None


def get_line_session(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
    x_line_in_client: Optional[str] = Header(default=None),
) -> LineSession:
    credentials_exception = HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail="Please log in with LINE",
        headers={"WWW-Authenticate": "Bearer"},
    )
    if credentials is None:
        raise credentials_exception

    payload = decode_line_id_token(credentials.credentials)
    if not payload or not payload.get("sub"):
        raise credentials_exception

    return LineSession(
        user_id=payload["sub"],
        display_name=payload.get("name") or "",
        picture_url=payload.get("picture"),
        in_client=(x_line_in_client or "").lower() in ("1", "true", "yes"),
    )


def require(action: Action):
    """Dependency factory: the session must be authorized for ``action``."""

    def checker(
        session: LineSession = Depends(get_line_session),
        policy: AuthorizationPolicy = Depends(get_policy),
    ) -> LineSession:
        if not policy.is_authorized(session.user_id, action):
            raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="You're not allowed")
        return session

    return checker


def get_validated_country(country_id: str, store: DocumentStore = Depends(get_db)) -> dict:
    dbcountry = crud.get_country(store, country_id)
    if not dbcountry:
        raise HTTPException(status_code=404, detail="Country not found")
    return dbcountry


def get_validated_carrier(carrier_id: str, store: DocumentStore = Depends(get_db)) -> dict:
    dbcarrier = crud.get_carrier(store, carrier_id)
    if not dbcarrier:
        raise HTTPException(status_code=404, detail="Carrier not found")
    return dbcarrier


def get_validated_plan(plan_id: str, store: DocumentStore = Depends(get_db)) -> dict:
    dbplan = crud.get_plan(store, plan_id)
    if not dbplan:
        raise HTTPException(status_code=404, detail="Plan not found")
    return dbplan


def get_validated_menu(menu_id: str, store: DocumentStore = Depends(get_db)) -> dict:
    dbmenu = crud.get_menu(store, menu_id)
    if not dbmenu:
        raise HTTPException(status_code=404, detail="Menu not found")
    return dbmenu


def _loaded_synchronizer(kind: ListKind, store: DocumentStore, session: LineSession) -> ListSynchronizer:
    sync = ListSynchronizer(store, session, kind)
    try:
        sync.load()
    except SyncError as e:
        raise HTTPException(status_code=500, detail=str(e))
    return sync


def get_cart_sync(
    store: DocumentStore = Depends(get_db),
    session: LineSession = Depends(get_line_session),
) -> ListSynchronizer:
    return _loaded_synchronizer(ListKind.cart, store, session)


def get_inquiry_sync(
    store: DocumentStore = Depends(get_db),
    session: LineSession = Depends(get_line_session),
) -> ListSynchronizer:
    return _loaded_synchronizer(ListKind.inquiry, store, session)

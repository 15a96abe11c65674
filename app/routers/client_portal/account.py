from fastapi import APIRouter, Depends

from app.db import DocumentStore, crud
from app.dependencies import get_db, get_line_session
from app.models.session import LineSession
from app.services.policy import AuthorizationPolicy, get_policy
from app.utils import responses

router = APIRouter(tags=["Account"], responses={401: responses._401})


@router.get("/me")
def get_me(
    session: LineSession = Depends(get_line_session),
    store: DocumentStore = Depends(get_db),
    policy: AuthorizationPolicy = Depends(get_policy),
):
    """Profile of the calling LINE user; stores display name and picture on first visit."""
    details = {"displayName": session.display_name, "pictureUrl": session.picture_url}
    crud.save_user_profile(store, session.user_id, {k: v for k, v in details.items() if v})
    profile = crud.get_user_profile(store, session.user_id)
    return {
        "profile": profile,
        "isAdmin": policy.is_admin(session.user_id),
        "inClient": session.in_client,
    }

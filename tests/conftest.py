from unittest.mock import Mock

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from app.db import SQLDocumentStore, crud, set_store
from app.db.base import Base
from app.models.country import CountryCreate
from app.models.session import LineSession
from app.services.chat import ChatChannel, get_chat_channel
from app.services.policy import AuthorizationPolicy, get_policy

ADMIN_ID = "Uadmin0001"
USER_ID = "Uuser0001"


@pytest.fixture
def store():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    from app.db import models  # noqa: F401
    Base.metadata.create_all(bind=engine)
    store = SQLDocumentStore(sessionmaker(autocommit=False, autoflush=False, bind=engine))
    set_store(store)
    yield store
    set_store(None)
    Base.metadata.drop_all(bind=engine)
    engine.dispose()


@pytest.fixture
def user_session():
    return LineSession(user_id=USER_ID, display_name="Tester", in_client=True)


@pytest.fixture
def admin_session():
    return LineSession(user_id=ADMIN_ID, display_name="Admin", in_client=True)


@pytest.fixture
def japan(store):
    country_id = crud.create_country(store, CountryCreate(code="JP", name="Japan", flagIcon="🇯🇵"))
    return crud.get_country(store, country_id)


@pytest.fixture
def plan(store, japan):
    plan_id = crud.create_plan(store, {
        "carrier": "Docomo",
        "plan_type": "total",
        "sim_type": "esim",
        "title": "3GB/5days",
        "duration_days": 5,
        "total_data": "3GB",
        "price": 500,
        "currency": "TWD",
        "notes": [],
        "countryId": japan["id"],
        "country": japan["name"],
    })
    return crud.get_plan(store, plan_id)


@pytest.fixture
def line_api():
    return Mock()


@pytest.fixture
def make_client(store, line_api):
    """Client factory; the LINE session of every request is the one passed in."""
    from app import app
    from app.dependencies import get_db, get_line_session

    def factory(session=None):
        app.dependency_overrides[get_db] = lambda: store
        app.dependency_overrides[get_policy] = lambda: AuthorizationPolicy([ADMIN_ID])
        app.dependency_overrides[get_chat_channel] = lambda: ChatChannel(line_api)
        if session is not None:
            app.dependency_overrides[get_line_session] = lambda: session
        return TestClient(app)

    yield factory
    app.dependency_overrides.clear()

import os

# Both services read their database URL at import time.
os.environ["DATABASE_URL"] = "sqlite://"

import pytest
from fastapi.testclient import TestClient

from catalog.app import db as catalog_db
from catalog.app.main import app as catalog_app
from catalog.app.models import Base as CatalogBase
from orders.app import db as orders_db
from orders.app.main import app as orders_app
from orders.app.models import Base as OrdersBase


@pytest.fixture
def catalog_client():
    with TestClient(catalog_app) as client:
        yield client
    CatalogBase.metadata.drop_all(bind=catalog_db.engine)


@pytest.fixture
def orders_client():
    with TestClient(orders_app) as client:
        yield client
    OrdersBase.metadata.drop_all(bind=orders_db.engine)

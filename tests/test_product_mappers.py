from decimal import Decimal

import pytest
from pydantic import ValidationError

from catalog.app.mappers import apply_update_request, from_create_request, to_read_view
from catalog.app.models import Product
from catalog.app.schemas import ProductCreate, ProductOut, ProductUpdate


def make_product(**overrides) -> Product:
    fields = dict(id=3, name="Gadget", description="shiny", price=Decimal("19.50"), stock=7)
    fields.update(overrides)
    return Product(**fields)


def test_read_view_copies_public_fields():
    view = to_read_view(make_product())

    assert view == ProductOut(id=3, name="Gadget", description="shiny", price=Decimal("19.50"))


def test_read_view_never_carries_stock():
    view = to_read_view(make_product(stock=999))

    assert not hasattr(view, "stock")
    assert "stock" not in view.model_dump()
    assert "stock" not in view.model_dump_json()


def test_create_request_defaults_description():
    req = ProductCreate(name="Widget", price=Decimal("9.99"), stock=100)

    product = from_create_request(req)

    assert product.description == "--"


def test_create_request_keeps_explicit_description():
    req = ProductCreate(name="Widget", description="X", price=Decimal("9.99"), stock=100)

    assert from_create_request(req).description == "X"


def test_create_request_leaves_id_unset():
    product = from_create_request(ProductCreate(name="Widget", price="1.00", stock=1))

    assert product.id is None
    assert product.stock == 1


def test_widget_scenario_through_stand_in_storage():
    req = ProductCreate.model_validate({"name": "Widget", "price": 9.99, "stock": 100})

    product = from_create_request(req)
    product.id = 41  # what the database would assign

    assert (product.name, product.description, product.price, product.stock) == (
        "Widget", "--", Decimal("9.99"), 100,
    )
    view = to_read_view(product)
    assert view.model_dump() == {
        "id": 41, "name": "Widget", "description": "--", "price": Decimal("9.99"),
    }


def test_update_overwrites_every_field_and_keeps_id():
    product = make_product(id=12)
    req = ProductUpdate(name="Renamed", description="new", price=Decimal("2.25"), stock=0)

    result = apply_update_request(product, req)

    assert result is product
    assert product.id == 12
    assert (product.name, product.description, product.price, product.stock) == (
        "Renamed", "new", Decimal("2.25"), 0,
    )


def test_update_is_a_full_replace_not_a_merge():
    product = make_product(description="keep me?", stock=50)

    apply_update_request(product, ProductUpdate(name="Gadget", price=Decimal("19.50")))

    # omitted fields arrive with their defaults and still overwrite
    assert product.description == "--"
    assert product.stock == 0


def test_update_ignores_body_id():
    product = make_product(id=5)

    apply_update_request(product, ProductUpdate(id=99, name="Gadget"))

    assert product.id == 5


def test_update_is_idempotent():
    req = ProductUpdate(name="Twice", description="same", price=Decimal("3.30"), stock=4)
    once = apply_update_request(make_product(), req)
    twice = apply_update_request(apply_update_request(make_product(), req), req)

    assert to_read_view(once) == to_read_view(twice)
    assert once.stock == twice.stock


def test_sample_product_scenario():
    product = Product(id=6, name="Sample Product", description="", price=Decimal("1.00"), stock=100)
    req = ProductUpdate(name="Sample Product", description="--", price=Decimal("1.00"), stock=100)

    apply_update_request(product, req)

    assert (product.id, product.name, product.description, product.price, product.stock) == (
        6, "Sample Product", "--", Decimal("1.00"), 100,
    )


def test_mappers_do_not_retain_inputs():
    req = ProductCreate(name="Widget", price=Decimal("1.00"), stock=1)
    first = from_create_request(req)
    second = from_create_request(req)

    assert first is not second
    first.name = "changed"
    assert second.name == "Widget"
    assert req.name == "Widget"


def test_read_view_is_not_built_from_orm_attributes():
    # only to_read_view may turn an entity into a read view
    with pytest.raises(ValidationError):
        ProductOut.model_validate(make_product())

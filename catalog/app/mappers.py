"""
Plain field-by-field translation between the Product entity and its
transfer objects. No I/O and no session access: the request handlers own
storage, these functions only copy values.
"""
from .models import Product
from .schemas import ProductCreate, ProductOut, ProductUpdate

def to_read_view(product: Product) -> ProductOut:
    return ProductOut(
        id=product.id,
        name=product.name,
        description=product.description,
        price=product.price,
    )

def from_create_request(req: ProductCreate) -> Product:
    """Build a new, unsaved Product. ``id`` stays unset until storage assigns it."""
    return Product(
        name=req.name,
        description=req.description,
        price=req.price,
        stock=req.stock,
    )

def apply_update_request(product: Product, req: ProductUpdate) -> Product:
    """
    Overwrite every mutable field of ``product`` with the request's values.

    This is a full replace, not a merge. ``req.id`` is ignored and
    ``product.id`` is left as is.
    """
    product.name = req.name
    product.description = req.description
    product.price = req.price
    product.stock = req.stock
    return product

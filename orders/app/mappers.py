from .models import Order
from .schemas import OrderCreate, OrderOut

def to_order_out(order: Order) -> OrderOut:
    return OrderOut(id=order.id, customer_name=order.customer_name, total_amount=order.total_amount)

def from_order_create(req: OrderCreate) -> Order:
    # id is assigned by the database on insert
    return Order(customer_name=req.customer_name, total_amount=req.total_amount)

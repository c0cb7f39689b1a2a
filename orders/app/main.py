import logging
import os
import time
from typing import List
from fastapi import FastAPI, APIRouter, HTTPException, Depends, Request, Response, status
from fastapi.responses import PlainTextResponse
from prometheus_client import CollectorRegistry, Counter, Histogram, generate_latest, CONTENT_TYPE_LATEST
from sqlalchemy import select
from sqlalchemy.orm import Session

from .db import get_session, init_db
from .mappers import from_order_create, to_order_out
from .models import Order
from .schemas import OrderCreate, OrderOut

APP_NAME = "orders"
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()

API_PREFIX = os.getenv("API_PREFIX", "/api").strip()
if API_PREFIX and not API_PREFIX.startswith("/"):
    API_PREFIX = "/" + API_PREFIX
API_PREFIX = API_PREFIX.rstrip("/")

log = logging.getLogger(APP_NAME)

app = FastAPI(title=APP_NAME)
router = APIRouter(prefix=API_PREFIX)

# Create tables at startup (idempotent)
@app.on_event("startup")
def on_startup():
    logging.basicConfig(level=LOG_LEVEL, format="%(asctime)s %(levelname)s %(name)s: %(message)s")
    log.setLevel(LOG_LEVEL)
    init_db()

# Prometheus metrics
REGISTRY = CollectorRegistry()
REQS = Counter("http_requests_total", "Total HTTP requests", ["service", "path", "method", "status"], registry=REGISTRY)
LAT = Histogram("http_request_duration_seconds", "Request latency", ["service", "path", "method"], registry=REGISTRY)
ORDERS_CREATED = Counter("orders_created_total", "Orders created successfully", registry=REGISTRY)

@app.middleware("http")
async def metrics_middleware(request: Request, call_next):
    start = time.time()
    response = await call_next(request)
    REQS.labels(APP_NAME, request.url.path, request.method, response.status_code).inc()
    LAT.labels(APP_NAME, request.url.path, request.method).observe(time.time() - start)
    return response

@app.get("/health", response_class=PlainTextResponse)
def health():
    return "ok"

@app.get("/metrics")
def metrics():
    return Response(generate_latest(REGISTRY), media_type=CONTENT_TYPE_LATEST)

@router.get("/orders", response_model=List[OrderOut])
def list_orders(session: Session = Depends(get_session)):
    orders = session.execute(select(Order).order_by(Order.id)).scalars().all()
    return [to_order_out(o) for o in orders]

@router.post("/orders", response_model=OrderOut, status_code=status.HTTP_201_CREATED)
def create_order(payload: OrderCreate, response: Response, session: Session = Depends(get_session)):
    order = from_order_create(payload)
    session.add(order)
    session.flush()  # get order.id
    session.refresh(order)

    ORDERS_CREATED.inc()
    log.info("created order %s for %r", order.id, order.customer_name)
    response.headers["Location"] = f"{API_PREFIX}/orders/{order.id}"
    return to_order_out(order)

@router.get("/orders/{oid}", response_model=OrderOut)
def get_order(oid: int, session: Session = Depends(get_session)):
    order = session.get(Order, oid)
    if not order:
        log.warning("order %s not found", oid)
        raise HTTPException(status_code=404, detail="not found")
    return to_order_out(order)

app.include_router(router)

import logging
import os
import time
from typing import List
from fastapi import FastAPI, APIRouter, HTTPException, Depends, Request, Response, status
from fastapi.responses import PlainTextResponse
from prometheus_client import CollectorRegistry, Counter, Histogram, generate_latest, CONTENT_TYPE_LATEST
from sqlalchemy import select
from sqlalchemy.orm import Session
from sqlalchemy.orm.exc import StaleDataError

from .db import get_session, init_db
from .mappers import apply_update_request, from_create_request, to_read_view
from .models import Product
from .schemas import ProductCreate, ProductOut, ProductUpdate

APP_NAME = "catalog"
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()

# Route prefix. Set API_PREFIX="" if a gateway in front already strips /api/v1.
API_PREFIX = os.getenv("API_PREFIX", "/api/v1").strip()
if API_PREFIX and not API_PREFIX.startswith("/"):
    API_PREFIX = "/" + API_PREFIX
API_PREFIX = API_PREFIX.rstrip("/")

log = logging.getLogger(APP_NAME)

app = FastAPI(title=APP_NAME)
router = APIRouter(prefix=API_PREFIX)

# ---- Startup: logging, schema + tables (idempotent) ----
@app.on_event("startup")
def on_startup():
    logging.basicConfig(level=LOG_LEVEL, format="%(asctime)s %(levelname)s %(name)s: %(message)s")
    log.setLevel(LOG_LEVEL)
    init_db()
    log.info("catalog ready, routes under %r", API_PREFIX or "/")

# ---- Prometheus metrics ----
REGISTRY = CollectorRegistry()
REQS = Counter("http_requests_total", "Total HTTP requests", ["service", "path", "method", "status"], registry=REGISTRY)
LAT  = Histogram("http_request_duration_seconds", "Request latency", ["service", "path", "method"], registry=REGISTRY)

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

def load_product(session: Session, pid: int) -> Product:
    p = session.get(Product, pid)
    if not p:
        log.warning("product %s not found", pid)
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="not found")
    return p

@router.get("/products", response_model=List[ProductOut])
def list_products(session: Session = Depends(get_session)):
    rows = session.execute(select(Product).order_by(Product.id)).scalars().all()
    return [to_read_view(p) for p in rows]

@router.post("/products", response_model=ProductOut, status_code=status.HTTP_201_CREATED)
def create_product(payload: ProductCreate, response: Response, session: Session = Depends(get_session)):
    p = from_create_request(payload)
    session.add(p)
    session.flush()
    session.refresh(p)
    log.info("created product %s", p.id)
    response.headers["Location"] = f"{API_PREFIX}/products/{p.id}"
    return to_read_view(p)

@router.get("/products/{pid}", response_model=ProductOut)
def get_product(pid: int, session: Session = Depends(get_session)):
    return to_read_view(load_product(session, pid))

@router.put("/products/{pid}", response_model=ProductOut)
def update_product(pid: int, payload: ProductUpdate, session: Session = Depends(get_session)):
    if payload.id is not None and payload.id != pid:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"body id {payload.id} does not match path id {pid}",
        )
    p = load_product(session, pid)
    apply_update_request(p, payload)
    try:
        session.flush()
    except StaleDataError:
        # row deleted or changed between our read and the UPDATE
        log.warning("product %s changed concurrently, update rejected", pid)
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail="product was modified concurrently")
    session.refresh(p)
    log.info("updated product %s", pid)
    return to_read_view(p)

@router.delete("/products/{pid}", status_code=204)
def delete_product(pid: int, session: Session = Depends(get_session)):
    p = load_product(session, pid)
    session.delete(p)
    log.info("deleted product %s", pid)
    return Response(status_code=204)

app.include_router(router)

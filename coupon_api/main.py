import logging
from typing import Any, List, Optional
from fastapi import APIRouter, Depends, FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from .config import Settings, configure_logging, get_settings
from .mapping import to_entity, to_patch, to_view
from .models import APIResponse, Coupon, CouponCreateInput, CouponUpdateInput
from .storage import COUPON_STORE, CouponStore, InvariantViolation
from .validation import validate_create, validate_update

logger = logging.getLogger(__name__)

SAMPLE_COUPONS = [
    Coupon(name="10OFF", percent=10, isActive=True),
    Coupon(name="20OFF", percent=20, isActive=False),
]


# ---------------------------
# Envelope helpers
# ---------------------------

def get_store() -> CouponStore:
    return COUPON_STORE


def envelope(status_code: int, result: Any = None, errors: Optional[List[str]] = None,
             headers: Optional[dict] = None) -> JSONResponse:
    body = APIResponse(
        isSuccess=not errors and status_code < 400,
        result=result,
        statusCode=status_code,
        errorMessages=errors or [],
    )
    return JSONResponse(
        status_code=status_code,
        content=body.model_dump(mode="json"),
        headers=headers,
    )


def _view_dict(coupon: Coupon) -> dict:
    return to_view(coupon).model_dump(mode="json")


# ---------------------------
# Routes
# ---------------------------

router = APIRouter()


@router.get("/health")
def health_check():
    return {"status": "ok"}


@router.get("/api/coupons/", name="get_coupons", response_model=APIResponse)
def list_coupons(store: CouponStore = Depends(get_store)):
    logger.info("Getting all coupons")
    return envelope(200, [_view_dict(c) for c in store.list()])


@router.get("/api/coupon/{coupon_id}", name="get_coupon", response_model=APIResponse)
def get_coupon(coupon_id: int, store: CouponStore = Depends(get_store)):
    coupon = store.get_by_id(coupon_id)
    # absence is not an error here
    return envelope(200, _view_dict(coupon) if coupon is not None else None)


@router.post("/api/coupon", name="create_coupon", status_code=201, response_model=APIResponse,
             responses={400: {"model": APIResponse}})
def create_coupon(payload: CouponCreateInput, request: Request,
                  store: CouponStore = Depends(get_store)):
    validation = validate_create(payload, store)
    if not validation.is_valid:
        logger.info("Rejected coupon %r: %s", payload.name, validation.messages)
        return envelope(400, errors=validation.messages)

    try:
        coupon = store.create(to_entity(payload))
    except InvariantViolation as e:
        logger.warning("Store refused coupon %r: %s", payload.name, e)
        return envelope(400, errors=[str(e)])

    logger.info("Created coupon %s with id %d", coupon.name, coupon.id)
    location = request.app.url_path_for("get_coupon", coupon_id=str(coupon.id))
    return envelope(201, _view_dict(coupon), headers={"Location": str(location)})


@router.put("/api/coupon", name="update_coupon", response_model=APIResponse,
            responses={400: {"model": APIResponse}, 404: {"model": APIResponse}})
def update_coupon(payload: CouponUpdateInput, store: CouponStore = Depends(get_store)):
    if store.get_by_id(payload.id) is None:
        return envelope(404, errors=[f"Coupon {payload.id} not found"])

    validation = validate_update(payload, store)
    if not validation.is_valid:
        return envelope(400, errors=validation.messages)

    try:
        coupon = store.update(payload.id, to_patch(payload))
    except InvariantViolation as e:
        logger.warning("Store refused update of coupon %d: %s", payload.id, e)
        return envelope(400, errors=[str(e)])

    # deleted between the lookup and the write
    if coupon is None:
        return envelope(404, errors=[f"Coupon {payload.id} not found"])

    logger.info("Updated coupon %d", coupon.id)
    return envelope(200, _view_dict(coupon))


@router.delete("/api/coupon/{coupon_id}", name="delete_coupon", response_model=APIResponse,
               responses={404: {"model": APIResponse}})
def delete_coupon(coupon_id: int, store: CouponStore = Depends(get_store)):
    if not store.delete(coupon_id):
        return envelope(404, errors=[f"Coupon {coupon_id} not found"])
    logger.info("Deleted coupon %d", coupon_id)
    return envelope(200)


async def request_validation_handler(request: Request, exc: RequestValidationError):
    errors = []
    for err in exc.errors():
        location = ".".join(str(part) for part in err["loc"][1:]) or str(err["loc"][0])
        errors.append(f"{location}: {err['msg']}")
    return envelope(400, errors=errors)


# ---------------------------
# FastAPI App
# ---------------------------

def create_app(settings: Optional[Settings] = None) -> FastAPI:
    settings = settings or get_settings()
    configure_logging(settings.log_level)

    # API docs only outside production
    docs = settings.is_development
    app = FastAPI(
        title="Coupon API",
        docs_url="/docs" if docs else None,
        redoc_url="/redoc" if docs else None,
        openapi_url="/openapi.json" if docs else None,
    )
    app.include_router(router)
    app.add_exception_handler(RequestValidationError, request_validation_handler)

    if settings.seed_coupons and not COUPON_STORE.list():
        COUPON_STORE.seed(SAMPLE_COUPONS)
        logger.info("Seeded %d sample coupons", len(SAMPLE_COUPONS))

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn
    settings = get_settings()
    uvicorn.run(
        "coupon_api.main:app",
        host=settings.host,
        port=settings.port,
        reload=False,
    )

"""FastAPI application factory.

Every request runs inside the storefront domain context and carries a
request id in its log context.
"""

from uuid import uuid4

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from storefront.api.cart import router as cart_router
from storefront.api.errors import register_exception_handlers
from storefront.api.orders import router as order_router
from storefront.api.wishlist import router as wishlist_router
from storefront.config import Settings
from storefront.domain import storefront
from storefront.notifications.sender import NotificationSender
from storefront.utils.logging import add_context, clear_context


def create_app(settings: Settings | None = None, notifier: NotificationSender | None = None) -> FastAPI:
    settings = settings or Settings.from_env()

    app = FastAPI(
        title="Storefront API",
        description="Cart, wishlist, checkout and order management",
    )
    app.state.settings = settings
    app.state.notifier = notifier or NotificationSender(settings.mail)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.middleware("http")
    async def domain_context_middleware(request: Request, call_next):
        """Push the Protean domain context and bind request details for logging."""
        clear_context()
        request_id = request.headers.get("X-Request-ID") or uuid4().hex
        add_context(request_id=request_id, method=request.method, path=request.url.path)

        with storefront.domain_context():
            response = await call_next(request)
        response.headers["X-Request-ID"] = request_id
        return response

    register_exception_handlers(app)

    app.include_router(cart_router)
    app.include_router(wishlist_router)
    app.include_router(order_router)

    @app.get("/health")
    async def health():
        return JSONResponse(content={"status": "ok", "domain": storefront.name})

    return app

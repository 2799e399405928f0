from __future__ import annotations

import logging
import time

from fastapi import FastAPI, Request
from starlette.middleware.base import BaseHTTPMiddleware

from ethwatch.config import settings
from ethwatch.routes.watch import router as watch_router
from ethwatch.services.base import ChainProvider, SubscriberStore
from ethwatch.services.registry import SubscriptionRegistry
from ethwatch.services.rpc import EthRpcClient
from ethwatch.services.scanner import Scanner

logging.basicConfig(
    level=getattr(logging, settings.log_level.upper(), logging.INFO),
    format="%(asctime)s | %(name)-20s | %(levelname)-7s | %(message)s",
)
logger = logging.getLogger("app")


class RequestTimingMiddleware(BaseHTTPMiddleware):
    async def dispatch(self, request: Request, call_next):
        start = time.perf_counter()
        response = await call_next(request)
        duration_ms = (time.perf_counter() - start) * 1000
        logger.info(
            f"{request.method} {request.url.path} → {response.status_code} "
            f"({duration_ms:.1f}ms)"
        )
        return response


def create_app(
    chain: ChainProvider | None = None,
    registry: SubscriberStore | None = None,
) -> FastAPI:
    """Build the API with one registry and one chain client shared by all requests."""
    app = FastAPI(
        title="Ethereum Address Watcher API",
        description=(
            "Subscribe to addresses and scan the most recent blocks "
            "for transactions sent from or to them."
        ),
        version="0.1.0",
    )
    app.add_middleware(RequestTimingMiddleware)
    app.include_router(watch_router)

    chain = chain if chain is not None else EthRpcClient(settings.rpc_url)
    rpc_url = getattr(chain, "url", None)
    registry = registry if registry is not None else SubscriptionRegistry()
    app.state.chain = chain
    app.state.registry = registry
    app.state.scanner = Scanner(chain, registry)

    @app.on_event("startup")
    async def startup():
        logger.info(f"Ready, watching chain via {rpc_url}")

    @app.on_event("shutdown")
    async def shutdown():
        if isinstance(app.state.chain, EthRpcClient):
            await app.state.chain.aclose()

    @app.get("/health")
    async def health():
        return {
            "status": "ok",
            "subscriptions": len(app.state.registry.list_subscribed()),
            "rpc_url": rpc_url,
        }

    return app


app = create_app()

from fastapi import APIRouter

from transfer_service.interfaces.http.routers import transactions


def create_api_router(prefix: str = "") -> APIRouter:
    router = APIRouter(prefix=prefix)
    router.include_router(transactions.router, prefix="/v1/transactions", tags=["transactions"])
    return router


__all__ = [
    "create_api_router",
]

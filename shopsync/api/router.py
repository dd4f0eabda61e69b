"""Central router that includes all sub-routers."""

from fastapi import APIRouter

from shopsync.api.session import router as session_router
from shopsync.api.orders import router as orders_router
from shopsync.api.inventory import router as inventory_router
from shopsync.api.alerts import router as alerts_router
from shopsync.api.views import router as views_router
from shopsync.api.export import router as export_router
from shopsync.api.websocket import router as websocket_router

api_router = APIRouter()
api_router.include_router(session_router)
api_router.include_router(orders_router)
api_router.include_router(inventory_router)
api_router.include_router(alerts_router)
api_router.include_router(views_router)
api_router.include_router(export_router)
api_router.include_router(websocket_router)

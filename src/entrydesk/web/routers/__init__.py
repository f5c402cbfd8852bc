from entrydesk.web.routers.cadets import router as cadets_router
from entrydesk.web.routers.poomsae import router as poomsae_router

__all__ = [
    "cadets_router",
    "poomsae_router",
]

"""Rotas HTTP opcionais (FastAPI) para receber webhooks."""

from .webhook import create_webhook_router

__all__ = ["create_webhook_router"]

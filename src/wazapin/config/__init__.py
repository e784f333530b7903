"""Configuração do SDK: settings por ambiente e logging estruturado."""

from wazapin.config.settings import WhatsAppSettings, get_whatsapp_settings

__all__ = [
    "WhatsAppSettings",
    "get_whatsapp_settings",
]

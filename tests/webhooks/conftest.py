"""Fixtures de payloads de webhook no formato da Meta."""

import pytest

METADATA = {"display_phone_number": "15550001111", "phone_number_id": "106540352242922"}


def _envelope(field, value):
    return {
        "object": "whatsapp_business_account",
        "entry": [{"id": "102290129340398", "changes": [{"field": field, "value": value}]}],
    }


@pytest.fixture
def message_payload():
    return _envelope(
        "messages",
        {
            "messaging_product": "whatsapp",
            "metadata": METADATA,
            "contacts": [{"profile": {"name": "Maria"}, "wa_id": "5511999998888"}],
            "messages": [
                {
                    "from": "5511999998888",
                    "id": "wamid.HBgLMTY1MDM4Nzk0MzkVAgASGBQzQTRBNjU5OUFFRTAzODEwMTQ0RgA=",
                    "timestamp": "1712345678",
                    "type": "text",
                    "text": {"body": "Olá!"},
                }
            ],
        },
    )


@pytest.fixture
def status_payload():
    return _envelope(
        "messages",
        {
            "messaging_product": "whatsapp",
            "metadata": METADATA,
            "statuses": [
                {
                    "id": "wamid.status1",
                    "status": "delivered",
                    "timestamp": "1712345680",
                    "recipient_id": "5511999998888",
                    "conversation": {"id": "conv-1", "origin": {"type": "service"}},
                    "pricing": {"billable": True, "pricing_model": "CBP", "category": "service"},
                }
            ],
        },
    )


@pytest.fixture
def account_payload():
    return _envelope(
        "message_template_status_update",
        {
            "event": "APPROVED",
            "message_template_id": 594425479261596,
            "message_template_name": "boas_vindas",
            "message_template_language": "pt_BR",
            "reason": None,
        },
    )

import logging

import requests
from django.conf import settings

logger = logging.getLogger(__name__)


def send_health_check_message(text):
    """
    Send an operational alert to the health-check Telegram chat.
    Alerts are only logged when the bot credentials are not configured.
    """
    bot_token = settings.BOT_TOKEN
    chat_id = settings.HEALTH_CHECK_ID

    if not bot_token or not chat_id:
        logger.warning(f"Health check alert (Telegram not configured): {text}")
        return None

    url = f"https://api.telegram.org/bot{bot_token}/sendMessage"
    payload = {
        "chat_id": chat_id,
        "text": text,
    }

    try:
        response = requests.post(url, json=payload, timeout=5)
        response.raise_for_status()
        return response.json()

    except requests.exceptions.RequestException as e:
        logger.error(f"Error sending Telegram message: {e}")
        return None

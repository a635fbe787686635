"""
Newsletter Subscription Client

Single POST of an email address to the Beehiiv publication subscribe endpoint.
Failures are reported to the caller and never touch deal evaluation.
"""

import logging
import re
from dataclasses import dataclass
from typing import Any, Dict

import requests

from . import config

logger = logging.getLogger(__name__)

_EMAIL_RE = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")


class SubscriptionError(RuntimeError):
    """Provider rejected the request or could not be reached."""

    def __init__(self, message: str, status_code: int | None = None, detail: Any = None):
        super().__init__(message)
        self.status_code = status_code
        self.detail = detail


def is_valid_email(email: str) -> bool:
    return bool(email) and bool(_EMAIL_RE.match(email))


@dataclass(frozen=True)
class SubscriptionClient:
    api_key: str
    publication_id: str
    base_url: str = "https://api.beehiiv.com/v2"
    timeout_s: float = 10.0

    @property
    def subscribers_url(self) -> str:
        return f"{self.base_url.rstrip('/')}/publications/{self.publication_id}/subscribers"

    def subscribe(self, email: str) -> Dict[str, Any]:
        """
        Subscribe `email` and return the provider's subscriber payload.

        Raises:
            ValueError: email is blank or malformed
            SubscriptionError: HTTP error status or transport failure
        """
        email = (email or "").strip()
        if not email:
            raise ValueError("Email is required")
        if not is_valid_email(email):
            raise ValueError(f"Invalid email address: {email}")

        headers = {
            "Content-Type": "application/json",
            "X-API-KEY": self.api_key,
        }
        payload = {"email": email, "send_welcome_email": True}

        try:
            resp = requests.post(self.subscribers_url, json=payload, headers=headers, timeout=self.timeout_s)
        except requests.RequestException as e:
            logger.error(f"Subscription request failed: {str(e)}")
            raise SubscriptionError(f"Subscription request failed: {e!r}") from e

        try:
            data = resp.json()
        except ValueError:
            data = {"raw": resp.text}

        if resp.status_code >= 400:
            logger.warning(f"Subscription rejected with HTTP {resp.status_code}")
            raise SubscriptionError(
                f"Subscription rejected: HTTP {resp.status_code}", status_code=resp.status_code, detail=data
            )

        logger.info("Subscriber added")
        return data


def make_subscription_client() -> SubscriptionClient | None:
    """Client from environment settings, or None when no API key is configured."""
    if not config.BEEHIIV_API_KEY:
        return None
    return SubscriptionClient(
        api_key=config.BEEHIIV_API_KEY,
        publication_id=config.BEEHIIV_PUBLICATION_ID,
        base_url=config.BEEHIIV_BASE_URL,
    )

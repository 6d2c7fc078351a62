"""Pushover alerts when full refreshes keep failing."""

from __future__ import annotations

import logging
import os

import requests

log = logging.getLogger(__name__)

PUSHOVER_URL = "https://api.pushover.net/1/messages.json"


def send_pushover(message: str, title: str) -> bool:
    """Send a Pushover message using PUSHOVER_USER_KEY / PUSHOVER_API_TOKEN.

    Returns False when credentials are missing or the send fails.
    """
    user_key = os.environ.get("PUSHOVER_USER_KEY", "")
    api_token = os.environ.get("PUSHOVER_API_TOKEN", "")
    if not user_key or not api_token:
        return False

    try:
        resp = requests.post(
            PUSHOVER_URL,
            data={"token": api_token, "user": user_key, "title": title, "message": message},
            timeout=10,
        )
        resp.raise_for_status()
    except requests.RequestException as e:
        log.warning(f"Failed to send Pushover notification: {e}")
        return False
    return True


class RefreshAlerter:
    """Tracks consecutive refresh failures and alerts once per outage.

    An alert goes out when `threshold` refreshes in a row have failed, and a
    recovery notice follows the next success.
    """

    def __init__(self, threshold: int = 3, send=send_pushover) -> None:
        self.threshold = threshold
        self.failures = 0
        self.alerted = False
        self._send = send

    def record_failure(self, error: str) -> None:
        self.failures += 1
        if self.failures >= self.threshold and not self.alerted:
            sent = self._send(
                f"{self.failures} refreshes in a row failed.\n\nLast error: {error}",
                "Dota Tracker refresh failing",
            )
            self.alerted = bool(sent)
            if self.alerted:
                log.info("Sent refresh failure alert")

    def record_success(self) -> None:
        if self.alerted:
            self._send(
                f"Refresh recovered after {self.failures} failures.",
                "Dota Tracker refresh recovered",
            )
        self.failures = 0
        self.alerted = False

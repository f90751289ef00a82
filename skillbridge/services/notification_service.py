"""
Notification Service - transactional emails through the EmailJS REST API.

Two templates:
- welcome: sent once after signup
- status:  sent when a company selects or rejects an application

Template rendering happens on the EmailJS side; we only send parameters.
"""

import logging
from datetime import datetime, timezone
from typing import Optional

import requests

from skillbridge.core.config import get_settings

logger = logging.getLogger(__name__)

STATUS_MESSAGES = {
    "Selected": (
        "Congratulations! You have been selected for this internship. "
        "The company will reach out to you shortly with next steps."
    ),
    "Rejected": (
        "Thank you for your interest. Unfortunately, your application was not "
        "selected at this time. We encourage you to keep improving your skills "
        "and apply again."
    ),
}

STATUS_CLASSES = {
    "Selected": "status-selected",
    "Rejected": "status-rejected",
}


class NotificationError(Exception):
    """Raised when the email provider rejects or cannot be reached."""


class NotificationService:
    """
    Sends templated emails.

    When the EmailJS service id or public key is not configured the sender
    is disabled: every send is logged and skipped (returns False).
    """

    def __init__(self, settings=None, session: Optional[requests.Session] = None):
        self.settings = settings or get_settings()
        self.session = session or requests.Session()

    @property
    def enabled(self) -> bool:
        return self.settings.email_enabled

    def _dashboard_link(self, path: str) -> str:
        return f"{self.settings.app_base_url.rstrip('/')}/{path.lstrip('/')}"

    def _send(self, template_id: str, params: dict) -> bool:
        if not self.enabled:
            logger.info("Email disabled, skipping template %s to %s", template_id, params.get("to_email"))
            return False

        payload = {
            "service_id": self.settings.emailjs_service_id,
            "template_id": template_id,
            "user_id": self.settings.emailjs_public_key,
            "template_params": dict(params, year=str(datetime.now(timezone.utc).year))
        }
        if self.settings.emailjs_private_key:
            payload["accessToken"] = self.settings.emailjs_private_key

        try:
            response = self.session.post(
                self.settings.emailjs_api_url,
                json=payload,
                timeout=self.settings.email_timeout_seconds
            )
            response.raise_for_status()
        except requests.RequestException as e:
            logger.error("Failed to send template %s to %s: %s", template_id, params.get("to_email"), e)
            raise NotificationError(str(e)) from e

        logger.info("Email template %s sent to %s", template_id, params.get("to_email"))
        return True

    def send_welcome_email(self, to_email: str, user_name: str) -> bool:
        return self._send(self.settings.emailjs_welcome_template, {
            "to_email": to_email,
            "user_name": user_name,
            "user_email": to_email,
            "platform_name": self.settings.platform_name,
            "dashboard_link": self._dashboard_link("dashboard")
        })

    def send_status_email(
        self,
        to_email: str,
        user_name: str,
        company_name: str,
        internship_role: str,
        application_id: str,
        status: str
    ) -> bool:
        """Only Selected/Rejected have a template message."""
        if status not in STATUS_MESSAGES:
            raise ValueError(f"No status email for '{status}'")

        return self._send(self.settings.emailjs_status_template, {
            "to_email": to_email,
            "user_name": user_name,
            "user_email": to_email,
            "platform_name": self.settings.platform_name,
            "company_name": company_name,
            "internship_role": internship_role,
            "application_id": application_id,
            "application_status": status,
            "status_message": STATUS_MESSAGES[status],
            "status_class": STATUS_CLASSES[status],
            "dashboard_link": self._dashboard_link("applications")
        })


def get_notification_service() -> NotificationService:
    """Get notification service instance."""
    return NotificationService()

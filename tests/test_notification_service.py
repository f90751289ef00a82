import pytest
import requests

from skillbridge.core.config import Settings
from skillbridge.services.notification_service import NotificationError, NotificationService


class FakeResponse:
    def __init__(self, status_code=200):
        self.status_code = status_code

    def raise_for_status(self):
        if self.status_code >= 400:
            raise requests.HTTPError(f"{self.status_code} error")


class FakeSession:
    def __init__(self, response=None, error=None):
        self.response = response or FakeResponse()
        self.error = error
        self.posts = []

    def post(self, url, json=None, timeout=None):
        self.posts.append({"url": url, "json": json, "timeout": timeout})
        if self.error:
            raise self.error
        return self.response


def make_settings(**overrides):
    values = dict(
        emailjs_service_id="service_x",
        emailjs_public_key="public_x",
        emailjs_private_key="",
        app_base_url="https://skillbridge.example.com/",
    )
    values.update(overrides)
    return Settings(**values)


def test_disabled_without_credentials():
    session = FakeSession()
    service = NotificationService(settings=make_settings(emailjs_service_id=""), session=session)

    assert service.enabled is False
    assert service.send_welcome_email("a@example.com", "Asha") is False
    assert session.posts == []


def test_welcome_email_payload():
    session = FakeSession()
    service = NotificationService(settings=make_settings(), session=session)

    assert service.send_welcome_email("a@example.com", "Asha") is True

    post = session.posts[0]
    assert post["url"] == "https://api.emailjs.com/api/v1.0/email/send"
    payload = post["json"]
    assert payload["service_id"] == "service_x"
    assert payload["user_id"] == "public_x"
    assert payload["template_id"] == "template_welcome"
    assert "accessToken" not in payload

    params = payload["template_params"]
    assert params["to_email"] == "a@example.com"
    assert params["user_name"] == "Asha"
    assert params["platform_name"] == "SkillBridge"
    assert params["dashboard_link"] == "https://skillbridge.example.com/dashboard"
    assert params["year"].isdigit()


def test_status_email_payload():
    session = FakeSession()
    service = NotificationService(settings=make_settings(emailjs_private_key="secret"), session=session)

    service.send_status_email(
        to_email="a@example.com",
        user_name="Asha",
        company_name="Acme",
        internship_role="Frontend Intern",
        application_id="app1",
        status="Selected"
    )

    payload = session.posts[0]["json"]
    assert payload["template_id"] == "template_status"
    assert payload["accessToken"] == "secret"
    params = payload["template_params"]
    assert params["application_status"] == "Selected"
    assert params["status_class"] == "status-selected"
    assert params["status_message"].startswith("Congratulations!")
    assert params["company_name"] == "Acme"
    assert params["internship_role"] == "Frontend Intern"
    assert params["dashboard_link"] == "https://skillbridge.example.com/applications"


def test_status_email_only_for_final_statuses():
    service = NotificationService(settings=make_settings(), session=FakeSession())
    with pytest.raises(ValueError):
        service.send_status_email("a@example.com", "Asha", "Acme", "Intern", "app1", "Under Review")


def test_provider_error_raises_notification_error():
    session = FakeSession(response=FakeResponse(status_code=400))
    service = NotificationService(settings=make_settings(), session=session)
    with pytest.raises(NotificationError):
        service.send_welcome_email("a@example.com", "Asha")


def test_network_error_raises_notification_error():
    session = FakeSession(error=requests.ConnectionError("unreachable"))
    service = NotificationService(settings=make_settings(), session=session)
    with pytest.raises(NotificationError):
        service.send_welcome_email("a@example.com", "Asha")

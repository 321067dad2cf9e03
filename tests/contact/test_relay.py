"""Tests for storefront/contact/relay.py"""

import smtplib
from unittest.mock import MagicMock, patch

import pytest

from storefront.contact.relay import (
    FormSubmission,
    InvalidSubmission,
    SmtpSender,
    compose_message,
    handle_submission,
    is_valid_email,
    parse_submission,
    sanitize_email,
)

SETTINGS = {
    "recipient": "shop@example.com",
    "sender_name": "LindiLove",
    "subjects": {"order": "New order", "contact": "New enquiry"},
}


@pytest.fixture
def order_form():
    return {
        "form_type": "order",
        "name": " Мария Иванова ",
        "email": "maria@example.com",
        "phone": "+359 888 123 456",
        "product": "Свещ - Ванилия и бял чай",
        "message": "Две бройки, моля.",
    }


@pytest.fixture
def sender():
    s = MagicMock()
    s.send.return_value = True
    return s


class TestEmailHelpers:
    def test_sanitize_strips_invalid_characters(self):
        assert sanitize_email("ma ria<@>example.com") == "maria@example.com"

    @pytest.mark.parametrize("value,expected", [
        ("maria@example.com", True),
        ("first.last+tag@mail.example.bg", True),
        ("maria@", False),
        ("maria.example.com", False),
        ("maria@localhost", False),
        ("", False),
    ])
    def test_is_valid_email(self, value, expected):
        assert is_valid_email(value) is expected


class TestParseSubmission:
    def test_trims_fields(self, order_form):
        s = parse_submission(order_form)
        assert s.name == "Мария Иванова"
        assert s.form_type == "order"
        assert s.product == "Свещ - Ванилия и бял чай"

    def test_defaults_to_contact(self):
        s = parse_submission({"name": "A", "email": "a@example.com"})
        assert s.form_type == "contact"
        assert s.phone == ""
        assert s.message == ""

    def test_line_breaks_collapsed_in_name_and_product(self):
        s = parse_submission({"name": "A\r\nBcc: x@example.com", "email": "a@example.com",
                              "product": "Candle\nLarge"})
        assert s.name == "A Bcc: x@example.com"
        assert s.product == "Candle Large"

    def test_missing_name(self):
        with pytest.raises(InvalidSubmission):
            parse_submission({"name": "  ", "email": "a@example.com"})

    def test_invalid_email(self):
        with pytest.raises(InvalidSubmission):
            parse_submission({"name": "A", "email": "not-an-email"})


class TestComposeMessage:
    def test_order_message(self, order_form):
        msg = compose_message(parse_submission(order_form), SETTINGS, host="lindilove.bg")

        assert msg["Subject"] == "New order"
        assert msg["To"] == "shop@example.com"
        assert msg["Reply-To"] == "maria@example.com"
        assert "no-reply@lindilove.bg" in msg["From"]

        body = msg.get_content()
        assert "Тип: order" in body
        assert "Име: Мария Иванова" in body
        assert "Телефон: +359 888 123 456" in body
        assert "Продукт: Свещ - Ванилия и бял чай" in body
        assert body.rstrip().endswith("Две бройки, моля.")

    def test_contact_message_omits_empty_optional_lines(self):
        submission = FormSubmission(name="A", email="a@example.com")
        msg = compose_message(submission, SETTINGS)

        assert msg["Subject"] == "New enquiry"
        body = msg.get_content()
        assert "Телефон" not in body
        assert "Продукт" not in body
        assert body.rstrip().endswith("Съобщение:\n-")

    def test_host_port_dropped_from_sender(self):
        msg = compose_message(FormSubmission(name="A", email="a@example.com"), SETTINGS,
                              host="localhost:8000")
        assert "no-reply@localhost" in msg["From"]


class TestHandleSubmission:
    def test_success(self, order_form, sender):
        status, payload = handle_submission("POST", order_form, sender, SETTINGS, host="lindilove.bg")
        assert (status, payload) == (200, {"ok": True})
        sender.send.assert_called_once()

    def test_method_not_allowed(self, order_form, sender):
        status, payload = handle_submission("GET", order_form, sender, SETTINGS)
        assert status == 405
        assert payload == {"ok": False, "error": "Method not allowed"}
        sender.send.assert_not_called()

    def test_invalid_input(self, sender):
        status, payload = handle_submission("POST", {"name": "", "email": "x"}, sender, SETTINGS)
        assert status == 400
        assert payload["ok"] is False
        sender.send.assert_not_called()

    def test_send_failure(self, order_form, sender):
        sender.send.return_value = False
        status, payload = handle_submission("post", order_form, sender, SETTINGS)
        assert status == 500
        assert payload == {"ok": False, "error": "Send failed"}


class TestSmtpSender:
    def test_from_settings(self):
        s = SmtpSender.from_settings({"smtp": {"host": "mail.example.com", "port": "587", "user": "u"}})
        assert s.host == "mail.example.com"
        assert s.port == 587
        assert s.user == "u"

    def test_send_success(self):
        msg = compose_message(FormSubmission(name="A", email="a@example.com"), SETTINGS)
        with patch("storefront.contact.relay.smtplib.SMTP") as mock_smtp:
            assert SmtpSender().send(msg) is True
        smtp = mock_smtp.return_value.__enter__.return_value
        smtp.send_message.assert_called_once_with(msg)
        smtp.login.assert_not_called()

    def test_send_with_login(self):
        msg = compose_message(FormSubmission(name="A", email="a@example.com"), SETTINGS)
        with patch("storefront.contact.relay.smtplib.SMTP") as mock_smtp:
            assert SmtpSender(user="u", password="p").send(msg) is True
        smtp = mock_smtp.return_value.__enter__.return_value
        smtp.starttls.assert_called_once()
        smtp.login.assert_called_once_with("u", "p")

    def test_send_failure_returns_false(self):
        msg = compose_message(FormSubmission(name="A", email="a@example.com"), SETTINGS)
        with patch("storefront.contact.relay.smtplib.SMTP", side_effect=ConnectionRefusedError):
            assert SmtpSender().send(msg) is False

    def test_smtp_error_returns_false(self):
        msg = compose_message(FormSubmission(name="A", email="a@example.com"), SETTINGS)
        with patch("storefront.contact.relay.smtplib.SMTP") as mock_smtp:
            smtp = mock_smtp.return_value.__enter__.return_value
            smtp.send_message.side_effect = smtplib.SMTPRecipientsRefused({})
            assert SmtpSender().send(msg) is False

"""
Contact / Order Form Relay

Validates a contact or order form submission and forwards it as a plain
text email to the shop's inbox. The HTTP layer only has to call
handle_submission() and serialize the (status, payload) it returns.
"""

from __future__ import annotations

import logging
import re
import smtplib
from dataclasses import dataclass
from email.headerregistry import Address
from email.message import EmailMessage
from typing import Any, Dict, Mapping, Optional, Tuple

logger = logging.getLogger(__name__)

# Anything outside the characters allowed in an email address
_EMAIL_ALLOWED = re.compile(r"[^A-Za-z0-9!#$%&'*+\-=?^_`{|}~@.\[\]]")
_EMAIL_VALID = re.compile(r"^[A-Za-z0-9!#$%&'*+\-/=?^_`{|}~.]+@[A-Za-z0-9-]+(\.[A-Za-z0-9-]+)+$")
_LINE_BREAKS = re.compile(r"[\r\n]+")

DEFAULT_SUBJECTS = {
    "order": "Нова поръчка от сайта",
    "contact": "Ново запитване от сайта",
}

DEFAULT_LABELS = {
    "form_type": "Тип",
    "name": "Име",
    "email": "Имейл",
    "phone": "Телефон",
    "product": "Продукт",
    "message": "Съобщение",
}


class InvalidSubmission(ValueError):
    """Submission is missing a name or has an invalid email address."""


@dataclass
class FormSubmission:
    """One contact or order form submission."""
    name: str
    email: str
    form_type: str = "contact"
    phone: str = ""
    product: str = ""
    message: str = ""


def sanitize_email(value: str) -> str:
    """Drop characters that can never appear in an email address."""
    return _EMAIL_ALLOWED.sub("", value)


def is_valid_email(value: str) -> bool:
    return bool(_EMAIL_VALID.match(value))


def parse_submission(form: Mapping[str, Any]) -> FormSubmission:
    """
    Build a FormSubmission from posted form fields.

    Name and product are flattened to a single line so they cannot inject
    extra header or body lines.

    Raises:
        InvalidSubmission: If name is empty or email is invalid
    """
    def field(key: str, default: str = "") -> str:
        return str(form.get(key) or default).strip()

    name = _LINE_BREAKS.sub(" ", field("name"))
    product = _LINE_BREAKS.sub(" ", field("product"))
    email = sanitize_email(field("email"))

    if not name or not email or not is_valid_email(email):
        raise InvalidSubmission("Invalid input")

    return FormSubmission(
        name=name,
        email=email,
        form_type=field("form_type", "contact") or "contact",
        phone=field("phone"),
        product=product,
        message=field("message"),
    )


def compose_message(
    submission: FormSubmission,
    settings: Mapping[str, Any],
    host: str = "localhost",
) -> EmailMessage:
    """
    Compose the notification email.

    Args:
        submission: Validated submission
        settings: Contact settings (recipient, sender_name, subjects, labels)
        host: Site host name, used for the no-reply sender address

    Returns:
        Plain text UTF-8 message addressed to the shop inbox
    """
    subjects = {**DEFAULT_SUBJECTS, **(settings.get("subjects") or {})}
    labels = {**DEFAULT_LABELS, **(settings.get("labels") or {})}

    lines = [
        f"{labels['form_type']}: {submission.form_type}",
        f"{labels['name']}: {submission.name}",
        f"{labels['email']}: {submission.email}",
    ]
    if submission.phone:
        lines.append(f"{labels['phone']}: {submission.phone}")
    if submission.product:
        lines.append(f"{labels['product']}: {submission.product}")
    lines.append(f"{labels['message']}:")
    lines.append(submission.message or "-")

    message = EmailMessage()
    message["Subject"] = subjects["order"] if submission.form_type == "order" else subjects["contact"]
    domain = (host or "localhost").split(":")[0] or "localhost"
    message["From"] = Address(settings.get("sender_name", ""), "no-reply", domain)
    message["To"] = settings["recipient"]
    message["Reply-To"] = submission.email
    message.set_content("\n".join(lines), charset="utf-8")
    return message


class SmtpSender:
    """
    Sends messages through an SMTP server.

    Usage:
        sender = SmtpSender(host="localhost", port=25)
        sender.send(message)
    """

    def __init__(self, host: str = "localhost", port: int = 25,
                 user: str = "", password: str = "", timeout: float = 30):
        self.host = host
        self.port = port
        self.user = user
        self.password = password
        self.timeout = timeout

    @classmethod
    def from_settings(cls, settings: Mapping[str, Any]) -> "SmtpSender":
        smtp = settings.get("smtp") or {}
        return cls(
            host=smtp.get("host", "localhost"),
            port=int(smtp.get("port", 25)),
            user=smtp.get("user", ""),
            password=smtp.get("password", ""),
        )

    def send(self, message: EmailMessage) -> bool:
        """
        Send a message.

        Returns:
            True on success, False if the server refused or was unreachable
        """
        try:
            with smtplib.SMTP(self.host, self.port, timeout=self.timeout) as smtp:
                if self.user:
                    smtp.starttls()
                    smtp.login(self.user, self.password)
                smtp.send_message(message)
        except (smtplib.SMTPException, OSError) as e:
            logger.error("Mail delivery via %s:%d failed: %s", self.host, self.port, e)
            return False
        return True


def handle_submission(
    method: str,
    form: Mapping[str, Any],
    sender,
    settings: Mapping[str, Any],
    host: Optional[str] = None,
) -> Tuple[int, Dict[str, Any]]:
    """
    Handle one form POST.

    Args:
        method: HTTP method of the request
        form: Posted form fields
        sender: Object with send(EmailMessage) -> bool
        settings: Contact settings
        host: Request host name

    Returns:
        (HTTP status, JSON payload): 200 {"ok": True}, or 400/405/500
        with {"ok": False, "error": ...}
    """
    if method.upper() != "POST":
        return 405, {"ok": False, "error": "Method not allowed"}

    try:
        submission = parse_submission(form)
    except InvalidSubmission as e:
        logger.info("Rejected %s form submission: %s", form.get("form_type", "contact"), e)
        return 400, {"ok": False, "error": "Invalid input"}

    message = compose_message(submission, settings, host or "localhost")
    if not sender.send(message):
        return 500, {"ok": False, "error": "Send failed"}

    logger.info("Relayed %s form from %s", submission.form_type, submission.email)
    return 200, {"ok": True}

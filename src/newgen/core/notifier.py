"""Welcome email delivery.

Responsibilities:
- Render the welcome message for a newly registered user
- Send it over SMTP with credentials from EmailConfig
- Never let a delivery failure reach the signup response

send_welcome_email() is scheduled as a background task after the signup
response is committed; it logs and returns False on any failure.
"""

from __future__ import annotations

import html
import smtplib
from email.message import EmailMessage
from email.utils import formataddr
from typing import Protocol

import structlog

from newgen.config.app_config import EmailConfig

logger = structlog.get_logger(__name__)

WELCOME_SUBJECT = "Welcome to Newgen!"

WELCOME_TEMPLATE = """<h2>Hello {name},</h2>
<p>Thank you for registering at <strong>Newgen</strong>. We're excited to have you on board!</p>
<p>Explore your career path with confidence.</p>
<br><p>The Newgen Team</p>"""


class NotificationError(Exception):
    """Error while delivering an email."""

    pass


class Mailer(Protocol):
    """Anything that can deliver an HTML email."""

    def send(self, to: str, subject: str, body: str) -> bool: ...


class SmtpMailer:
    """Sends mail through an authenticated SMTP account."""

    def __init__(self, config: EmailConfig, timeout: float = 10.0):
        self.config = config
        self.timeout = timeout

    def _build_message(self, to: str, subject: str, body: str) -> EmailMessage:
        msg = EmailMessage()
        msg["Subject"] = subject
        msg["From"] = formataddr((self.config.sender_name, self.config.from_address))
        msg["To"] = to
        msg.set_content(body, subtype="html")
        return msg

    def send(self, to: str, subject: str, body: str) -> bool:
        """Deliver one message.

        Returns:
            True once the server accepted the message

        Raises:
            NotificationError: If the mailer is not configured or SMTP fails
        """
        if not self.config.is_configured:
            raise NotificationError("SMTP credentials or sender address not configured")

        msg = self._build_message(to, subject, body)

        try:
            with smtplib.SMTP(self.config.host, self.config.port, timeout=self.timeout) as server:
                if self.config.use_tls:
                    server.starttls()
                server.login(self.config.username, self.config.password)
                server.send_message(msg)
        except (smtplib.SMTPException, OSError) as e:
            raise NotificationError(f"SMTP delivery to {self.config.host} failed: {e}") from e

        return True


def render_welcome(user_name: str) -> str:
    """Render the HTML welcome body."""
    return WELCOME_TEMPLATE.format(name=html.escape(user_name))


def send_welcome_email(mailer: Mailer | None, to_email: str, user_name: str) -> bool:
    """Send the welcome email, swallowing every delivery failure.

    Args:
        mailer: Configured mailer, or None when email is disabled
        to_email: Recipient address
        user_name: Name used in the greeting

    Returns:
        True if sent, False if skipped or failed
    """
    if mailer is None:
        logger.info("welcome_email.skipped", reason="email disabled")
        return False

    try:
        mailer.send(to_email, WELCOME_SUBJECT, render_welcome(user_name))
    except NotificationError as e:
        logger.warning("welcome_email.failed", error=str(e))
        return False
    except Exception as e:
        logger.error("welcome_email.failed", error=str(e), error_type=type(e).__name__)
        return False

    logger.info("welcome_email.sent")
    return True

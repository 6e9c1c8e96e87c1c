import logging
import smtplib
import ssl
from email.message import EmailMessage
from functools import lru_cache
from html import escape

from core.config import settings

logger = logging.getLogger(__name__)


class Mailer:
    """SMTP transport for templated HTML mail."""

    def __init__(self, host: str, port: int, username: str, password: str, sender: str, use_tls: bool = True):
        self.host = host
        self.port = port
        self.username = username
        self.password = password
        self.sender = sender
        self.use_tls = use_tls

    def send(self, to: str, subject: str, html: str) -> None:
        msg = EmailMessage()
        msg["From"] = self.sender
        msg["To"] = to
        msg["Subject"] = subject
        msg.set_content("This message requires an HTML capable mail client.")
        msg.add_alternative(html, subtype="html")

        with smtplib.SMTP(self.host, self.port, timeout=30) as smtp:
            if self.use_tls:
                smtp.starttls(context=ssl.create_default_context())
            if self.username:
                smtp.login(self.username, self.password)
            smtp.send_message(msg)
        logger.info("Sent mail %r to %s", subject, to)


def reset_password_email(link: str) -> tuple[str, str]:
    subject = f"Forgot Password - {settings.SITE_NAME}"
    html = (
        "<h1>Forgot Password</h1>"
        "<p>Click the link below to reset your password</p>"
        f'<a href="{escape(link, quote=True)}">Reset Password</a>'
    )
    return subject, html


def contact_relay_email(name: str, email: str, body: str) -> tuple[str, str]:
    subject = f"{settings.SITE_NAME} - New message from {name} <{email}>"
    # body is the visitor's own HTML, relayed unchanged to the site owner
    return subject, body


def contact_autoreply_email(name: str) -> tuple[str, str]:
    subject = f"{settings.SITE_NAME} - Hi {name}"
    html = (
        f"<h1>Hi {escape(name)}</h1>"
        "<p>This is an automated reply. I will read your message and get back to you.</p>"
        "<p>Thanks for reaching out through the form!</p>"
        "<hr>"
        f"<p>Regards,</p><p>{escape(settings.SITE_NAME)}</p>"
    )
    return subject, html


@lru_cache
def get_mailer() -> Mailer:
    return Mailer(
        host=settings.SMTP_HOST,
        port=settings.SMTP_PORT,
        username=settings.SMTP_USERNAME,
        password=settings.SMTP_PASSWORD,
        sender=settings.mail_sender,
        use_tls=settings.SMTP_USE_TLS,
    )

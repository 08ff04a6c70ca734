"""Service email -- envoi des emails transactionnels via Resend."""

import logging

import resend
from flask import current_app
from resend.exceptions import ResendError

from app.errors import ExternalAPIError

logger = logging.getLogger(__name__)


def send_email(to: str, subject: str, text: str) -> None:
    """Envoie un email texte. Leve ExternalAPIError en cas d'echec."""
    api_key = current_app.config.get("RESEND_API_KEY")
    if not api_key:
        raise ExternalAPIError("RESEND_API_KEY non configuree")

    resend.api_key = api_key
    try:
        resend.Emails.send(
            {
                "from": current_app.config["MAIL_FROM"],
                "to": [to],
                "subject": subject,
                "text": text,
            }
        )
    except (ResendError, OSError) as exc:
        logger.error("Failed to send email to %s: %s", to, exc)
        raise ExternalAPIError(f"Envoi email echoue: {exc}") from exc

    logger.info("Email sent to %s - Subject: %s", to, subject)


def send_password_reset(to: str, reset_url: str) -> None:
    text = (
        "You are receiving this email because you (or someone else) has requested "
        f"the reset of a password. Please make a PUT request to:\n\n{reset_url}"
    )
    send_email(to, "Password reset token", text)

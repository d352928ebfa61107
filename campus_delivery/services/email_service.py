"""Outbound email notifications over SMTP."""

from __future__ import annotations

import logging
import smtplib
from email.mime.multipart import MIMEMultipart
from email.mime.text import MIMEText
from html import escape

from campus_delivery.core.config import settings

logger = logging.getLogger(__name__)


def send_email(to_email: str, subject: str, html_body: str) -> bool:
    """Send an HTML email; returns False when skipped or failed."""
    if not settings.smtp_host:
        logger.warning("SMTP not configured, skipping email to %s", to_email)
        return False

    msg = MIMEMultipart()
    msg["From"] = settings.smtp_from
    msg["To"] = to_email
    msg["Subject"] = subject
    msg.attach(MIMEText(html_body, "html"))

    try:
        with smtplib.SMTP(settings.smtp_host, settings.smtp_port, timeout=10) as server:
            server.starttls()
            if settings.smtp_username and settings.smtp_password:
                server.login(settings.smtp_username, settings.smtp_password)
            server.sendmail(settings.smtp_from, [to_email], msg.as_string())
    except (smtplib.SMTPException, OSError):
        logger.exception("Failed to send email to %s", to_email)
        return False

    logger.info("Email sent to %s", to_email)
    return True


def render_restaurant_submission(username: str, restaurant) -> str:
    return f"""
    <html>
    <body>
        <h2>Hi {escape(username)},</h2>
        <p>Thank you for submitting your restaurant. It has been added successfully.</p>
        <p>
            <strong>Name:</strong> {escape(restaurant.name)}<br>
            <strong>Order Code:</strong> {escape(restaurant.order_code)}<br>
            <strong>Address:</strong> {escape(restaurant.location_address)}, {escape(restaurant.location_city)}<br>
            <strong>Accent Color:</strong> {escape(restaurant.accent_color)}
        </p>
        <p>Our team will now verify your restaurant. This usually takes 48 to 72 hours.
        In the meantime you can add menu items from the restaurant dashboard;
        verification requires at least 3 menu items.</p>
    </body>
    </html>
    """


def send_restaurant_submission_email(to_email: str, username: str, restaurant) -> bool:
    return send_email(
        to_email,
        f'Restaurant "{restaurant.name}" submitted',
        render_restaurant_submission(username, restaurant),
    )

"""Transactional email via SendGrid dynamic templates."""

from __future__ import annotations

import requests
from flask import current_app

SENDGRID_SEND_URL = 'https://api.sendgrid.com/v3/mail/send'


def send_template_email(to_email: str, template_id: str, template_data: dict) -> bool:
    """
    Send a templated email through SendGrid.

    Args:
        to_email: Recipient email address
        template_id: SendGrid dynamic template id
        template_data: Values for the template's variables

    Returns:
        True if the provider accepted the message, False otherwise
    """
    api_key = current_app.config.get('SENDGRID_API_KEY')
    if not api_key:
        current_app.logger.warning(f"SendGrid is not configured; skipped email to {to_email}")
        return False

    payload = {
        'personalizations': [{
            'to': [{'email': to_email}],
            'dynamic_template_data': template_data,
        }],
        'from': {'email': current_app.config['MAIL_FROM_EMAIL']},
        'template_id': template_id,
    }
    headers = {
        'Authorization': f"Bearer {api_key}",
        'Content-Type': 'application/json',
    }

    try:
        response = requests.post(
            SENDGRID_SEND_URL,
            json=payload,
            headers=headers,
            timeout=current_app.config.get('EMAIL_TIMEOUT_SECONDS', 10),
        )
        if not 200 <= response.status_code < 300:
            current_app.logger.error(
                f"SendGrid rejected email to {to_email}: HTTP {response.status_code} {response.text[:200]}"
            )
            return False

        current_app.logger.info(f"Email sent successfully to {to_email}")
        return True

    except requests.RequestException as e:
        current_app.logger.error(f"Failed to send email to {to_email}: {e}")
        return False


def send_welcome_email(email: str, first_name: str | None = None) -> bool:
    """Send the welcome template to a newly registered user. Never raises."""
    try:
        return send_template_email(
            email,
            current_app.config['WELCOME_EMAIL_TEMPLATE_ID'],
            {'firstName': first_name or 'there'},
        )
    except Exception as e:
        current_app.logger.error(f"Failed to send welcome email to {email}: {e}")
        return False


__all__ = ['SENDGRID_SEND_URL', 'send_template_email', 'send_welcome_email']

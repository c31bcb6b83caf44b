import logging

import requests

import config

logger = logging.getLogger(__name__)

BREVO_URL = "https://api.brevo.com/v3/smtp/email"


def send_email(to_email: str, subject: str, html: str) -> bool:
     """
     Send a transactional email through Brevo.

     Best-effort: returns False (and logs) instead of raising, so callers
     never fail a business operation on a mail outage.
     """
     if not config.BREVO_API_KEY:
          logger.warning("BREVO_API_KEY is not set; skipping email to %s", to_email)
          return False

     try:
          response = requests.post(
               BREVO_URL,
               headers={
                    "api-key": config.BREVO_API_KEY,
                    "Content-Type": "application/json",
               },
               json={
                    "sender": {"name": config.MAIL_SENDER_NAME, "email": config.MAIL_SENDER_EMAIL},
                    "to": [{"email": to_email}],
                    "subject": subject,
                    "htmlContent": html,
               },
               timeout=10,
          )
     except requests.RequestException as e:
          logger.error("Brevo request failed for %s: %s", to_email, e)
          return False

     if response.status_code not in (200, 201, 202):
          logger.error("Brevo error for %s: %s", to_email, response.text[:200])
          return False
     return True


def send_password_reset_email(to_email: str, reset_url: str) -> bool:
     return send_email(
          to_email,
          f"Reset your {config.MAIL_SENDER_NAME} password",
          f"""
               <h2>Password reset</h2>
               <p>Use the link below to choose a new password:</p>
               <p><a href="{reset_url}">{reset_url}</a></p>
               <p>This link expires in {config.RESET_TOKEN_TTL_MINUTES} minutes.</p>
          """,
     )


def send_approval_email(to_email: str, first_name: str) -> bool:
     return send_email(
          to_email,
          "Your tenant registration is approved",
          f"""
               <h2>Welcome, {first_name}!</h2>
               <p>Your tenant registration has been approved. You can now log in to {config.MAIL_SENDER_NAME}.</p>
          """,
     )

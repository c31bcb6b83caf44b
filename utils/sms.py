"""
Outbound SMS through the Twilio REST API.

send_sms never raises: every failure comes back as SmsResult(success=False)
so that notifications cannot break the operation that triggered them.
"""
import logging
from dataclasses import dataclass
from typing import Optional

import requests

import config

logger = logging.getLogger(__name__)

TWILIO_MESSAGES_URL = "https://api.twilio.com/2010-04-01/Accounts/{sid}/Messages.json"


@dataclass(frozen=True)
class SmsResult:
     success: bool
     sid: Optional[str] = None
     error: Optional[str] = None


def is_configured() -> bool:
     return bool(config.TWILIO_ACCOUNT_SID and config.TWILIO_AUTH_TOKEN and config.TWILIO_PHONE_NUMBER)


def normalize_phone(phone: str) -> str:
     """
     E.164-ish formatting: bare 10 digit numbers get the default country code.
     """
     digits = "".join(ch for ch in phone if ch.isdigit() or ch == "+")
     if digits.startswith("+"):
          return digits
     if len(digits) == 10:
          return f"{config.SMS_DEFAULT_COUNTRY_CODE}{digits}"
     return f"+{digits}"


def send_sms(phone: Optional[str], body: str, purpose: str = "general") -> SmsResult:
     """
     Send one SMS.

     Args:
          phone: destination number
          body: message text
          purpose: short tag used in logs (e.g. 'tenant-approval')
     """
     if not phone or not phone.strip():
          return SmsResult(success=False, error="No phone number")
     if not is_configured():
          logger.warning("SMS gateway not configured; dropping %s message", purpose)
          return SmsResult(success=False, error="SMS gateway not configured")

     to = normalize_phone(phone)
     try:
          response = requests.post(
               TWILIO_MESSAGES_URL.format(sid=config.TWILIO_ACCOUNT_SID),
               data={"To": to, "From": config.TWILIO_PHONE_NUMBER, "Body": body},
               auth=(config.TWILIO_ACCOUNT_SID, config.TWILIO_AUTH_TOKEN),
               timeout=10,
          )
     except requests.RequestException as e:
          logger.error("SMS (%s) to %s failed: %s", purpose, to, e)
          return SmsResult(success=False, error=str(e))

     if response.status_code not in (200, 201):
          try:
               error = response.json().get("message") or response.text
          except ValueError:
               error = response.text
          logger.error("SMS (%s) to %s rejected by gateway: %s", purpose, to, error)
          return SmsResult(success=False, error=error)

     try:
          sid = response.json().get("sid")
     except (ValueError, AttributeError):
          logger.error("SMS (%s) to %s: unreadable gateway response (HTTP %s)", purpose, to, response.status_code)
          return SmsResult(success=False, error="Unreadable response from SMS gateway")
     logger.info("SMS (%s) sent to %s sid=%s", purpose, to, sid)
     return SmsResult(success=True, sid=sid)

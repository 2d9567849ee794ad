"""
Email adapter - transactional email through the Rusender HTTP API.

Sending email never breaks the calling flow: every method returns a bool
and logs failures instead of raising. Registration, for example, must
succeed even if the welcome email could not be delivered.

Request Format:
===============
    POST {RUSENDER_API_URL}
    X-Api-Key: <RUSENDER_API_KEY>

    {
      "idempotencyKey": "6f1c...",
      "mail": {
        "to":   {"email": "reader@example.com", "name": "reader@example.com"},
        "from": {"email": "noreply@esoteric-planner.ru", "name": "Эзотерический Планировщик"},
        "subject": "...",
        "html": "..."
      }
    }
"""

from html import escape
import logging
from typing import Optional
import uuid

import httpx

from ...config.settings import settings
from ..utils.text import days_word

logger = logging.getLogger(__name__)


class EmailAdapter:
    """
    Adapter for the Rusender transactional email API.
    """

    def __init__(
        self,
        api_key: Optional[str] = None,
        api_url: Optional[str] = None,
        from_email: Optional[str] = None,
        from_name: Optional[str] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.api_key = api_key if api_key is not None else settings.RUSENDER_API_KEY
        self.api_url = api_url or settings.RUSENDER_API_URL
        self.from_email = from_email or settings.RUSENDER_FROM_EMAIL
        self.from_name = from_name or settings.RUSENDER_FROM_NAME
        self._transport = transport

    def build_payload(
        self,
        to: str,
        subject: str,
        html: str,
        to_name: Optional[str] = None,
    ) -> dict:
        """Build the API request body with a fresh idempotency key."""
        return {
            "idempotencyKey": str(uuid.uuid4()),
            "mail": {
                "to": {"email": to, "name": to_name or to},
                "from": {"email": self.from_email, "name": self.from_name},
                "subject": subject,
                "html": html,
            },
        }

    async def send_email(
        self,
        to: str,
        subject: str,
        html: str,
        to_name: Optional[str] = None,
    ) -> bool:
        """
        Send one email.

        Returns:
            True if the API accepted the email, False otherwise
        """
        if not self.api_key:
            logger.error("RUSENDER_API_KEY not configured, email to %s not sent", to)
            return False

        payload = self.build_payload(to, subject, html, to_name)

        try:
            async with httpx.AsyncClient(
                timeout=settings.EMAIL_TIMEOUT_SECONDS,
                transport=self._transport,
            ) as client:
                response = await client.post(
                    self.api_url,
                    json=payload,
                    headers={"X-Api-Key": self.api_key},
                )
        except httpx.HTTPError as e:
            logger.error("Email request to %s failed: %s", to, e)
            return False

        if response.is_error:
            logger.error(
                "Email API error for %s (%d): %s",
                to,
                response.status_code,
                response.text[:500],
            )
            return False

        logger.info("Email sent to %s, subject %r", to, subject)
        return True

    # ═══════════════════════════════════════════════════════════════════════════
    # TEMPLATES
    # ═══════════════════════════════════════════════════════════════════════════

    async def send_welcome_email(self, email: str, password: str) -> bool:
        """Send the generated password to a newly registered user."""
        html = f"""
<div style="font-family: Arial, sans-serif; max-width: 600px; margin: 0 auto; padding: 20px;">
  <h1 style="color: #6b46c1;">Добро пожаловать в {escape(self.from_name)}!</h1>
  <p>Ваш аккаунт создан. Данные для входа:</p>
  <div style="background: #f5f3ff; padding: 16px; border-radius: 8px;">
    <p><strong>Email:</strong> {escape(email)}</p>
    <p><strong>Пароль:</strong> <code>{escape(password)}</code></p>
  </div>
  <p>У вас есть <strong>{settings.TRIAL_DAYS} {days_word(settings.TRIAL_DAYS)} бесплатного доступа</strong> ко всем функциям.</p>
  <p>Пароль можно изменить в профиле после входа.</p>
  <p><a href="{escape(settings.APP_URL)}/login">Войти в приложение</a></p>
</div>
"""
        return await self.send_email(
            to=email,
            subject=f"Добро пожаловать в {self.from_name}!",
            html=html,
        )

    async def send_password_reset_email(self, email: str, reset_link: str) -> bool:
        """Send a password reset link (valid for one hour)."""
        html = f"""
<div style="font-family: Arial, sans-serif; max-width: 600px; margin: 0 auto; padding: 20px;">
  <h1 style="color: #6b46c1;">Сброс пароля</h1>
  <p>Вы запросили сброс пароля. Нажмите на кнопку ниже, чтобы задать новый пароль:</p>
  <p>
    <a href="{escape(reset_link)}"
       style="background: #6b46c1; color: #fff; padding: 12px 24px; border-radius: 8px; text-decoration: none;">
      Сбросить пароль
    </a>
  </p>
  <p>Ссылка действительна в течение 1 часа.</p>
  <p>Если вы не запрашивали сброс пароля, просто проигнорируйте это письмо.</p>
</div>
"""
        return await self.send_email(
            to=email,
            subject="Сброс пароля",
            html=html,
        )


# Singleton instance for convenience
_email_adapter: Optional[EmailAdapter] = None


def get_email_adapter() -> EmailAdapter:
    """Get or create email adapter singleton."""
    global _email_adapter
    if _email_adapter is None:
        _email_adapter = EmailAdapter()
    return _email_adapter

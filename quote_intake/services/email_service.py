from abc import ABC, abstractmethod
from html import escape
from typing import Callable, Dict, Optional

import httpx
from fastapi import Depends
from pydantic import BaseModel

from quote_intake.core.config import Settings, get_settings
from quote_intake.core.exceptions import NotificationConfigError, NotificationTransportError
from quote_intake.core.logger import get_logger
from quote_intake.models.quote_request import QuoteRequest

logger = get_logger(__name__)

EMAIL_SUBJECT = "New Cold Transport Quote Request"
PLACEHOLDER = "—"


class EmailMessage(BaseModel):
    subject: str
    text: str
    html: str


def render_quote_email(quote: QuoteRequest, submitted_at: str) -> EmailMessage:
    """Render the notification body as plain text and HTML, field by field."""
    company = quote.company or PLACEHOLDER
    freight = ", ".join(quote.freight_type) or PLACEHOLDER

    text = "\n".join([
        EMAIL_SUBJECT,
        "=" * len(EMAIL_SUBJECT),
        "",
        f"Name:      {quote.name}",
        f"Company:   {company}",
        f"Email:     {quote.email}",
        f"Phone:     {quote.phone}",
        "",
        f"Pickup:    {quote.pickup}",
        f"Delivery:  {quote.delivery}",
        "",
        f"Freight:   {freight}",
        "",
        f"Submitted: {submitted_at}",
    ])

    rows = [
        ("Name", quote.name),
        ("Company", company),
        ("Email", quote.email),
        ("Phone", quote.phone),
        ("Pickup", quote.pickup),
        ("Delivery", quote.delivery),
        ("Freight Type", freight),
        ("Submitted", submitted_at),
    ]
    html = f"<h2>{EMAIL_SUBJECT}</h2>\n" + "\n".join(
        f"<p><strong>{label}:</strong> {escape(value)}</p>" for label, value in rows
    )

    return EmailMessage(subject=EMAIL_SUBJECT, text=text, html=html)


# -------------------------------------------------------------------
# Providers
# -------------------------------------------------------------------
class EmailProvider(ABC):
    name: str

    @abstractmethod
    async def send(self, message: EmailMessage, sender: str, recipient: str) -> None:
        ...


class ResendProvider(EmailProvider):
    name = "resend"

    def __init__(
        self,
        api_key: str,
        api_url: str = "https://api.resend.com/emails",
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.api_key = api_key
        self.api_url = api_url
        self.transport = transport

    @classmethod
    def from_settings(cls, settings: Settings, transport=None) -> "ResendProvider":
        return cls(settings.RESEND_API_KEY, settings.RESEND_API_URL, transport=transport)

    async def send(self, message: EmailMessage, sender: str, recipient: str) -> None:
        if not self.api_key:
            raise NotificationConfigError("RESEND_API_KEY must be configured in environment.")

        payload = {
            "from": sender,
            "to": [recipient],
            "subject": message.subject,
            "text": message.text,
            "html": message.html,
        }
        headers = {
            "Authorization": f"Bearer {self.api_key}",
            "Content-Type": "application/json",
        }

        logger.info(f"Sending quote notification to {recipient} via Resend")
        try:
            async with httpx.AsyncClient(transport=self.transport) as client:
                resp = await client.post(self.api_url, headers=headers, json=payload)
        except httpx.HTTPError as e:
            raise NotificationTransportError(f"Resend API request failed: {e}") from e

        if not resp.is_success:
            logger.error(f"Resend error {resp.status_code}: {resp.text}")
            raise NotificationTransportError(f"Resend API error ({resp.status_code}): {resp.text}")

        logger.info(f"Resend accepted notification: {resp.status_code}")


class UnsupportedProvider(EmailProvider):
    """Placeholder for a configured provider with no implementation."""

    def __init__(self, name: str):
        self.name = name

    async def send(self, message: EmailMessage, sender: str, recipient: str) -> None:
        raise NotificationConfigError(f"Unsupported email provider: {self.name}")


PROVIDERS: Dict[str, Callable[..., EmailProvider]] = {
    "resend": ResendProvider.from_settings,
}


def get_email_provider(settings: Settings, transport=None) -> EmailProvider:
    name = (settings.EMAIL_PROVIDER or "resend").strip().lower()
    factory = PROVIDERS.get(name)
    if factory is None:
        return UnsupportedProvider(name)
    return factory(settings, transport=transport)


# -------------------------------------------------------------------
# Mailer used by the submission handler
# -------------------------------------------------------------------
class QuoteMailer:
    def __init__(self, settings: Settings, transport: Optional[httpx.AsyncBaseTransport] = None):
        self.settings = settings
        self.transport = transport

    async def send_quote(self, quote: QuoteRequest, submitted_at: str) -> None:
        message = render_quote_email(quote, submitted_at)

        sender = self.settings.EMAIL_FROM
        recipient = self.settings.EMAIL_TO
        if not sender or not recipient:
            raise NotificationConfigError("EMAIL_FROM and EMAIL_TO must be configured in environment.")

        provider = get_email_provider(self.settings, transport=self.transport)
        await provider.send(message, sender, recipient)


def get_quote_mailer(settings: Settings = Depends(get_settings)) -> QuoteMailer:
    return QuoteMailer(settings)

"""
Email delivery for reminder messages.

`GmailSender` sends through the Gmail API as a delegated service account;
`LoggingSender` only writes the message to the log (debug runs).
"""
import base64
from email.mime.text import MIMEText
from typing import Any, List, Optional, Protocol

from googleapiclient.discovery import build
from googleapiclient.errors import HttpError

from core.exceptions import ConfigurationError, EmailDeliveryError
from core.logger import logger
from sheets.sheet_reader import load_service_account_credentials

GMAIL_SEND_SCOPE = 'https://www.googleapis.com/auth/gmail.send'


class EmailSender(Protocol):
    def send(self, recipients: List[str], subject: str, body: str) -> None:
        ...


class LoggingSender:
    """Writes the email to the log instead of sending it."""

    def __init__(self):
        self.sent: List[dict] = []

    def send(self, recipients: List[str], subject: str, body: str) -> None:
        logger.info('=== DEBUG EMAIL ===')
        logger.info(f"To: {', '.join(recipients)}")
        logger.info(f"Subject: {subject}")
        logger.info(f"Body:\n{body}")
        logger.info('=== END DEBUG EMAIL ===')
        self.sent.append({'recipients': list(recipients), 'subject': subject, 'body': body})


class GmailSender:
    """Sends plain-text email via the Gmail API."""

    def __init__(self, sender_email: str, service: Optional[Any] = None):
        if not sender_email:
            raise ConfigurationError("NAHS_SENDER_EMAIL is required to send reminder emails")
        self.sender_email = sender_email
        if service is None:
            credentials = load_service_account_credentials([GMAIL_SEND_SCOPE])
            # Domain-wide delegation: send as the configured staff mailbox
            service = build('gmail', 'v1', credentials=credentials.with_subject(sender_email))
        self.service = service

    def send(self, recipients: List[str], subject: str, body: str) -> None:
        message = MIMEText(body)
        message['to'] = ', '.join(recipients)
        message['from'] = self.sender_email
        message['subject'] = subject
        raw = base64.urlsafe_b64encode(message.as_bytes()).decode('utf-8')

        try:
            self.service.users().messages().send(userId='me', body={'raw': raw}).execute()
        except HttpError as e:
            logger.error(f"Error sending email: {str(e)}", exc_info=True)
            raise EmailDeliveryError(f"Gmail API rejected reminder email: {str(e)}")

        logger.info(f"Email '{subject}' sent to {len(recipients)} recipients")

"""ABOUTME: Email adapter implementations for delivering account confirmation links
ABOUTME: Supports SMTP with a credential pair and a console fallback when mail is not configured"""

import logging
import smtplib
from abc import ABC, abstractmethod
from email.mime.multipart import MIMEMultipart
from email.mime.text import MIMEText
from email.utils import formataddr

from gamehub.config import MailCfg

logger = logging.getLogger(__name__)


class EmailAdapter(ABC):
    """Abstract base class for email sending adapters."""

    @abstractmethod
    def send_email(
        self,
        to: list[str | tuple[str, str]],
        subject: str,
        text_body: str,
        html_body: str | None = None,
    ) -> bool:
        """Send an email to one or more recipients.

        Args:
            to: List of recipient email addresses. Can be strings ('email@example.com')
                or tuples (('Display Name', 'email@example.com'))
            subject: Email subject line
            text_body: Plain text version of the email body
            html_body: Optional HTML version of the email body

        Returns:
            True if email sent successfully, False otherwise
        """

    @staticmethod
    def _parse_address(addr: str | tuple[str, str]) -> tuple[str, str]:
        """Parse an email address into a (display_name, email) tuple."""
        if isinstance(addr, tuple):
            return addr
        return ("", addr)

    @staticmethod
    def _format_address(addr: str | tuple[str, str]) -> str:
        """Format an email address for use in email headers."""
        name, email = EmailAdapter._parse_address(addr)
        if name:
            return formataddr((name, email))
        return email


class ConsoleEmailAdapter(EmailAdapter):
    """Email adapter that logs emails instead of sending them.

    Used when no outbound-mail credentials are configured, and in development.
    """

    def send_email(
        self,
        to: list[str | tuple[str, str]],
        subject: str,
        text_body: str,
        html_body: str | None = None,
    ) -> bool:
        to_addrs = [self._format_address(addr) for addr in to]

        # Truncate text body for logging
        text_preview = text_body[:400] + ("..." if len(text_body) > 400 else "")
        has_html = "Yes" if html_body else "No"

        logger.info(
            "EMAIL (Console):\n"
            f"  To: {', '.join(to_addrs)}\n"
            f"  Subject: {subject}\n"
            f"  Has HTML: {has_html}\n"
            f"  Text Body Preview: {text_preview}"
        )

        return True


class SMTPEmailAdapter(EmailAdapter):
    """Email adapter that sends emails via SMTP."""

    def __init__(
        self,
        host: str,
        port: int,
        username: str,
        password: str,
        use_tls: bool = True,
        default_from_email: str = "",
        default_from_name: str = "",
    ):
        self.host = host
        self.port = port
        self.username = username
        self.password = password
        self.use_tls = use_tls
        self.default_from_email = default_from_email or username
        self.default_from_name = default_from_name

    def send_email(
        self,
        to: list[str | tuple[str, str]],
        subject: str,
        text_body: str,
        html_body: str | None = None,
    ) -> bool:
        try:
            msg = MIMEMultipart("alternative")
            msg["Subject"] = subject
            msg["From"] = self._format_address((self.default_from_name, self.default_from_email))
            msg["To"] = ", ".join([self._format_address(addr) for addr in to])

            msg.attach(MIMEText(text_body, "plain"))
            if html_body:
                msg.attach(MIMEText(html_body, "html"))

            # Extract email addresses for SMTP (no display names)
            to_addresses = [self._parse_address(addr)[1] for addr in to]

            with smtplib.SMTP(self.host, self.port, timeout=30) as server:
                if self.use_tls:
                    server.starttls()
                if self.username and self.password:
                    server.login(self.username, self.password)
                server.sendmail(self.default_from_email, to_addresses, msg.as_string())

            logger.info(f"Email sent successfully to {len(to_addresses)} recipient(s)")
            return True

        except smtplib.SMTPException as e:
            logger.error(f"SMTP error sending email: {e}")
            return False
        except OSError as e:
            logger.error(f"Could not reach SMTP server {self.host}:{self.port}: {e}")
            return False


def get_email_adapter(mail_cfg: MailCfg) -> EmailAdapter:
    """Pick the SMTP adapter when a credential pair is configured, the console one otherwise."""
    if not mail_cfg.has_credentials:
        logger.warning("Mail credentials not configured, confirmation emails will only be logged")
        return ConsoleEmailAdapter()
    return SMTPEmailAdapter(
        host=mail_cfg.host,
        port=mail_cfg.port,
        username=mail_cfg.username,
        password=mail_cfg.password,
        use_tls=mail_cfg.use_tls,
        default_from_email=mail_cfg.from_email,
        default_from_name=mail_cfg.from_name,
    )

"""
Email Service for Engineer Guide
================================
Sends password reset links and help-request answers over SMTP.

When SMTP credentials are missing the send is skipped and logged, so local
development works without a mail server.
"""

import aiosmtplib
from email.mime.text import MIMEText
from email.mime.multipart import MIMEMultipart
from typing import Optional

from app.core.config import settings
from app.core.logging_config import logger


class EmailService:
    """Async SMTP email service"""

    def __init__(self):
        self.smtp_host = settings.SMTP_HOST
        self.smtp_port = settings.SMTP_PORT
        self.smtp_user = settings.SMTP_USER
        self.smtp_password = settings.SMTP_PASSWORD
        self.from_email = settings.EMAIL_FROM
        self.from_name = settings.EMAIL_FROM_NAME
        self.frontend_url = settings.FRONTEND_URL.rstrip('/')

    @property
    def is_configured(self) -> bool:
        """Check if email service is properly configured"""
        return bool(self.smtp_user and self.smtp_password)

    async def send_email(
        self,
        to_email: str,
        subject: str,
        html_content: str,
        text_content: Optional[str] = None
    ) -> bool:
        """
        Send an email asynchronously.

        Returns True if successful, False otherwise.
        """
        if not self.is_configured:
            logger.warning(f"[Email] SMTP not configured, skipping email to {to_email}: {subject}")
            return False

        try:
            message = MIMEMultipart("alternative")
            message["From"] = f"{self.from_name} <{self.from_email}>"
            message["To"] = to_email
            message["Subject"] = subject

            # Plain text first so clients prefer the HTML part
            if text_content:
                message.attach(MIMEText(text_content, "plain"))
            message.attach(MIMEText(html_content, "html"))

            await aiosmtplib.send(
                message,
                hostname=self.smtp_host,
                port=self.smtp_port,
                username=self.smtp_user,
                password=self.smtp_password,
                start_tls=True
            )

            logger.info(f"[Email/SMTP] Sent email to {to_email}: {subject}")
            return True

        except (aiosmtplib.SMTPException, OSError) as e:
            logger.error(f"[Email/SMTP] Failed to send email to {to_email}: {e}")
            return False

    async def send_password_reset_email(
        self,
        to_email: str,
        user_name: Optional[str],
        reset_token: str
    ) -> bool:
        """Send password reset link"""
        reset_link = settings.get_reset_url(reset_token)
        minutes = settings.PASSWORD_RESET_EXPIRE_MINUTES

        subject = f"Reset your password - {settings.APP_NAME}"

        html_content = f"""
        <html>
        <body style="font-family: sans-serif; line-height: 1.6; color: #333;">
            <h2>Password Reset Request</h2>
            <p>Hi {user_name or 'there'},</p>
            <p>We received a request to reset your password. Use the link below to choose a new one:</p>
            <p><a href="{reset_link}">Reset Password</a></p>
            <p>This link will expire in {minutes} minutes. If you didn't request a reset, ignore this email.</p>
        </body>
        </html>
        """

        text_content = f"""
        Password Reset Request

        Hi {user_name or 'there'},

        Open the link below to choose a new password:

        {reset_link}

        This link will expire in {minutes} minutes.
        """

        return await self.send_email(to_email, subject, html_content, text_content)

    async def send_help_response_email(
        self,
        to_email: str,
        user_name: Optional[str],
        request_title: str,
        response: str
    ) -> bool:
        """Tell a user their project help request was answered"""
        subject = f"Your help request was answered - {settings.APP_NAME}"

        html_content = f"""
        <html>
        <body style="font-family: sans-serif; line-height: 1.6; color: #333;">
            <p>Hi {user_name or 'there'},</p>
            <p>An admin has responded to your request <strong>{request_title}</strong>:</p>
            <blockquote>{response}</blockquote>
            <p><a href="{self.frontend_url}/project-help">View your requests</a></p>
        </body>
        </html>
        """

        text_content = f"""
        Hi {user_name or 'there'},

        An admin has responded to your request "{request_title}":

        {response}
        """

        return await self.send_email(to_email, subject, html_content, text_content)


# Singleton instance
email_service = EmailService()

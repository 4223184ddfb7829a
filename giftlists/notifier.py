"""Invitation emails for new list members.

Sending is best effort: a failed delivery is logged and never reaches the
caller, and nothing about it is stored.
"""

import logging
import smtplib
from email.message import EmailMessage

from giftlists.config import Settings, settings as default_settings
from giftlists.schemas.gift_list import Invitation

logger = logging.getLogger("giftlists.notifier")


class InviteNotifier:
    def __init__(self, settings: Settings = default_settings):
        self.settings = settings

    def login_link(self, login_token: str) -> str:
        return f"{self.settings.site_root.rstrip('/')}/login/{login_token}"

    def build_message(self, invitation: Invitation) -> EmailMessage:
        message = EmailMessage()
        message["Subject"] = f"You've been invited to the {invitation.list_name} wishlist!"
        message["From"] = self.settings.smtp_from_email
        message["To"] = f"{invitation.name} <{invitation.email}>"
        message.set_content(
            f"Hi {invitation.name},\n\n"
            f"You've been added to the {invitation.list_name} wishlist.\n"
            f"Use this link to sign in:\n{self.login_link(invitation.login_token)}\n\n"
            f"Questions? Contact {self.settings.admin_email}.\n"
        )
        return message

    def _send(self, message: EmailMessage) -> None:
        s = self.settings
        if s.smtp_use_tls:
            with smtplib.SMTP(s.smtp_host, s.smtp_port, timeout=15) as server:
                server.starttls()
                if s.smtp_username:
                    server.login(s.smtp_username, s.smtp_password)
                server.send_message(message)
        else:
            with smtplib.SMTP_SSL(s.smtp_host, s.smtp_port, timeout=15) as server:
                if s.smtp_username:
                    server.login(s.smtp_username, s.smtp_password)
                server.send_message(message)

    def send_invite(self, invitation: Invitation) -> None:
        if not self.settings.smtp_host:
            logger.info(
                "SMTP not configured. Invite for %s to %s: %s",
                invitation.email,
                invitation.list_name,
                self.login_link(invitation.login_token),
            )
            return
        try:
            self._send(self.build_message(invitation))
            logger.info("Invite sent to %s for %s", invitation.email, invitation.list_name)
        except (smtplib.SMTPException, OSError):
            logger.exception("Failed to send invite to %s", invitation.email)

"""Notification sink capability and stolen-assignment messages.

Delivery is best-effort: ``dispatch`` is the boundary where sink failures are
logged and dropped, so a state transition that produced a message is never
undone by a delivery problem.
"""

from __future__ import annotations

import logging
from typing import Protocol

import httpx

from thesis_proposals.core.config import settings
from thesis_proposals.core.constants import (
    STOLEN_BODY_TEMPLATE,
    STOLEN_SUBJECT_TEMPLATE,
)
from thesis_proposals.models.events import NotificationMessage, StolenAssignmentEvent

logger = logging.getLogger(__name__)


class NotificationSink(Protocol):
    def send(self, recipients: set[str], subject: str, body: str) -> None: ...


class LoggingNotificationSink:
    """Writes messages to the log instead of delivering them."""

    def send(self, recipients: set[str], subject: str, body: str) -> None:
        logger.info(
            "notification_logged",
            extra={
                "recipients": sorted(recipients),
                "subject": subject,
                "body": body,
            },
        )


class WebhookNotificationSink:
    """POSTs each message as JSON to a mail relay endpoint."""

    def __init__(self, url: str, timeout: float = 10.0) -> None:
        self.url = url
        self.timeout = timeout

    def send(self, recipients: set[str], subject: str, body: str) -> None:
        with httpx.Client(timeout=self.timeout) as client:
            response = client.post(
                self.url,
                headers={"Content-Type": "application/json"},
                json={
                    "recipients": sorted(recipients),
                    "subject": subject,
                    "body": body,
                },
            )
            response.raise_for_status()


def build_notification_sink() -> NotificationSink:
    """Pick the sink configured in ``settings``."""
    if settings.NOTIFICATION_WEBHOOK_URL:
        return WebhookNotificationSink(
            settings.NOTIFICATION_WEBHOOK_URL,
            timeout=settings.NOTIFICATION_TIMEOUT_SECONDS,
        )
    return LoggingNotificationSink()


def render_stolen_message(event: StolenAssignmentEvent) -> NotificationMessage:
    """Build the message sent to the displaced proposal's participants."""
    subject = STOLEN_SUBJECT_TEMPLATE.format(
        old_identifier=event.old_proposal_identifier,
    )
    body = STOLEN_BODY_TEMPLATE.format(
        student_name=event.student_name,
        old_title=event.old_proposal_title,
        old_preference=event.old_preference_number,
        new_title=event.new_proposal_title,
        new_advisor=event.new_advisor_name or "unknown",
        new_preference=event.new_preference_number,
        link=event.link,
        actor=event.actor,
    )
    return NotificationMessage(
        recipients=set(event.recipients),
        subject=subject,
        body=body,
    )


def dispatch(sink: NotificationSink, message: NotificationMessage) -> bool:
    """Hand ``message`` to ``sink``; return False when delivery failed."""
    if not message.recipients:
        logger.warning(
            "notification_skipped_no_recipients",
            extra={"subject": message.subject},
        )
        return False

    try:
        sink.send(set(message.recipients), message.subject, message.body)
    except Exception as exc:
        logger.error(
            "notification_failed",
            extra={
                "subject": message.subject,
                "recipients": sorted(message.recipients),
                "error_type": type(exc).__name__,
                "error_message": str(exc),
            },
        )
        return False

    logger.info(
        "notification_sent",
        extra={
            "subject": message.subject,
            "recipient_count": len(message.recipients),
        },
    )
    return True

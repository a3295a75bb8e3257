"""Enums for model fields."""

from enum import Enum


class HouseholdRole(str, Enum):
    """Role of a user inside a household."""

    OWNER = "owner"
    MEMBER = "member"


class InvitationStatus(str, Enum):
    """Invitation lifecycle status."""

    PENDING = "pending"  # Awaiting a decision
    EMAIL_SENT = "email_sent"  # Legacy sub-status of pending, still awaiting a decision
    ACCEPTED = "accepted"
    DECLINED = "declined"


AWAITING_DECISION = (InvitationStatus.PENDING, InvitationStatus.EMAIL_SENT)


class ExpiryStatus(str, Enum):
    """Freshness bucket of a pantry item relative to today."""

    NO_EXPIRY = "no-expiry"
    EXPIRED = "expired"
    EXPIRING_TODAY = "expiring-today"
    EXPIRING_3_DAYS = "expiring-3-days"
    EXPIRING_WEEK = "expiring-week"
    OK = "ok"

"""Categories of outgoing email, used by the eligibility gate."""

from enum import Enum


class EmailCategory(Enum):
    """Kinds of mail a user can receive.

    Only NEWS has its own opt-out; every category honours the global
    unsubscribe flag.
    """

    NEWS = "news"
    ALERTS = "alerts"
    OTHER = "other"

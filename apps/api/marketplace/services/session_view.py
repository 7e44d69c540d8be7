"""Which top-level view a signed-in account gets, decided once from its role."""

from enum import Enum

from marketplace.core import ROLE_CONSUMER, ROLE_PROVIDER
from marketplace.db.models import UserAccount


class SessionView(str, Enum):
    CONSUMER = "consumer"  # provider search
    PROVIDER = "provider"  # provider dashboard


_VIEW_BY_ROLE = {
    ROLE_CONSUMER: SessionView.CONSUMER,
    ROLE_PROVIDER: SessionView.PROVIDER,
}


def resolve_view(account: UserAccount) -> SessionView:
    try:
        return _VIEW_BY_ROLE[account.role]
    except KeyError:
        raise ValueError(f"Unknown account role: {account.role!r}") from None

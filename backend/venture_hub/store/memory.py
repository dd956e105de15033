"""Process-local store: one Table per entity kind."""

import asyncio
from contextlib import asynccontextmanager

import structlog

from venture_hub.core.exceptions import UnsupportedCapabilityError
from venture_hub.store.models import (
    BusinessPlan,
    CoFounderCommitment,
    CoFounderGoal,
    ConversationMessage,
    Membership,
    Organization,
    User,
)
from venture_hub.store.table import Table

logger = structlog.get_logger(__name__)

SUPPORTED_DOMAINS = (
    "users",
    "organizations",
    "memberships",
    "business_plans",
    "goals",
    "commitments",
    "messages",
)

# Domains the platform advertises but does not implement yet.
PLACEHOLDER_DOMAINS = (
    "loans",
    "investments",
    "portfolios",
    "mentorships",
    "programs",
    "cohorts",
    "credit_scores",
    "advisory_services",
    "grant_applications",
    "notifications",
)


class InMemoryStore:
    """All state for the process lifetime.

    Individual table operations are plain dict mutations and need no lock.
    Anything that reads, awaits, then writes must run inside ``transaction()``.
    """

    def __init__(self):
        self.users: Table[User] = Table(
            "users", User, id_prefix="user",
            search_fields=("first_name", "last_name", "email"),
        )
        self.organizations: Table[Organization] = Table(
            "organizations", Organization, id_prefix="org", owner_field="owner_id",
            search_fields=("name", "description", "industry", "location"),
        )
        self.memberships: Table[Membership] = Table(
            "memberships", Membership, owner_field="organization_id",
        )
        self.business_plans: Table[BusinessPlan] = Table(
            "business_plans", BusinessPlan, id_prefix="plan", owner_field="user_id",
            search_fields=("name", "description", "industry"),
        )
        self.goals: Table[CoFounderGoal] = Table(
            "goals", CoFounderGoal, owner_field="user_id", search_fields=("description",),
        )
        self.commitments: Table[CoFounderCommitment] = Table(
            "commitments", CoFounderCommitment, owner_field="user_id", search_fields=("description",),
        )
        self.messages: Table[ConversationMessage] = Table(
            "messages", ConversationMessage, owner_field="user_id",
        )
        self._lock = asyncio.Lock()

    @asynccontextmanager
    async def transaction(self):
        """Serialize a multi-step mutation against other transactions."""
        async with self._lock:
            yield self

    def table(self, domain: str) -> Table:
        """Look up a table by domain name.

        Raises:
            UnsupportedCapabilityError: for advertised but unimplemented domains.
            KeyError: for names the platform has never heard of.
        """
        if domain in SUPPORTED_DOMAINS:
            return getattr(self, domain)
        if domain in PLACEHOLDER_DOMAINS:
            logger.info("unsupported_domain_requested", domain=domain)
            raise UnsupportedCapabilityError(domain)
        raise KeyError(domain)

    def capabilities(self) -> dict:
        return {
            "supported": list(SUPPORTED_DOMAINS),
            "placeholder": list(PLACEHOLDER_DOMAINS),
        }

    def counts(self) -> dict[str, int]:
        return {name: len(getattr(self, name)) for name in SUPPORTED_DOMAINS}

    def clear(self) -> None:
        for name in SUPPORTED_DOMAINS:
            getattr(self, name).clear()

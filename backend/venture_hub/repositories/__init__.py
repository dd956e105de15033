from venture_hub.repositories.business_plans import BusinessPlanRepository
from venture_hub.repositories.cofounder import CoFounderRepository
from venture_hub.repositories.conversations import ConversationRepository
from venture_hub.repositories.organizations import OrganizationRepository
from venture_hub.repositories.users import UserRepository

__all__ = [
    "BusinessPlanRepository",
    "CoFounderRepository",
    "ConversationRepository",
    "OrganizationRepository",
    "UserRepository",
]

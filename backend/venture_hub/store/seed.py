"""Idempotent seed data: super users, sample users, organizations and business plans."""

import structlog

from venture_hub.store.memory import InMemoryStore
from venture_hub.store.models import UserType

logger = structlog.get_logger(__name__)


def super_user_id(user_type: UserType) -> str:
    return f"{user_type}-super-user"


SUPER_USERS = [
    {
        "email": "entrepreneur@superuser.com",
        "first_name": "Alex",
        "last_name": "Entrepreneur",
        "user_type": UserType.ENTREPRENEUR,
        "user_subtype": "serial-entrepreneur",
        "preferences": {
            "industries": ["FinTech", "AI/ML", "SaaS"],
            "funding_stages": ["Seed", "Series A"],
            "location": "San Francisco, CA",
        },
        "metrics": {"business_growth": 85, "funding_stage": "Series A", "team_size": 12, "market_validation": 78},
    },
    {
        "email": "investor@superuser.com",
        "first_name": "Sarah",
        "last_name": "Investor",
        "user_type": UserType.INVESTOR,
        "user_subtype": "vc-fund",
        "preferences": {
            "industries": ["FinTech", "HealthTech", "CleanTech"],
            "stages": ["Seed", "Series A", "Series B"],
            "check_size": {"min": 1_000_000, "max": 50_000_000},
            "risk_tolerance": "medium",
        },
        "metrics": {"deal_attractiveness": 92, "potential_roi": 8.5, "risk_level": "medium", "industry_fit": 88},
    },
    {
        "email": "lender@superuser.com",
        "first_name": "Michael",
        "last_name": "Lender",
        "user_type": UserType.LENDER,
        "user_subtype": "commercial-bank",
        "preferences": {
            "loan_types": ["Term Loans", "Lines of Credit", "SBA Loans"],
            "loan_range": {"min": 100_000, "max": 10_000_000},
            "credit_requirements": "680+",
        },
        "metrics": {"creditworthiness": 750, "dscr": 1.8, "collateral_value": 2_500_000, "risk_assessment": "low"},
    },
    {
        "email": "grantor@superuser.com",
        "first_name": "Jennifer",
        "last_name": "Grantor",
        "user_type": UserType.GRANTOR,
        "user_subtype": "foundation",
        "preferences": {
            "grant_types": ["Innovation Grants", "Social Impact Grants"],
            "focus_areas": ["Environmental Impact", "Social Justice", "Technology Access"],
        },
        "metrics": {"social_impact": 94, "sustainability": 89, "community_benefit": 91, "compliance_score": 98},
    },
    {
        "email": "partner@superuser.com",
        "first_name": "David",
        "last_name": "Partner",
        "user_type": UserType.PARTNER,
        "user_subtype": "accelerator",
        "preferences": {
            "partnership_types": ["Mentorship", "Resource Sharing", "Joint Ventures"],
            "expertise_areas": ["Product Development", "Go-to-Market", "Fundraising"],
        },
        "metrics": {"strategic_fit": 88, "success_rate": 76, "network_value": 92},
    },
    {
        "email": "team@superuser.com",
        "first_name": "Lisa",
        "last_name": "TeamMember",
        "user_type": UserType.TEAM_MEMBER,
        "user_subtype": "admin",
        "preferences": {"working_style": "Collaborative", "expertise_areas": ["Operations", "Strategy", "Analytics"]},
    },
    {
        "email": "admin@superuser.com",
        "first_name": "Platform",
        "last_name": "Admin",
        "user_type": UserType.ADMIN,
        "role": "admin",
    },
]

SAMPLE_USERS = [
    ("jane.startup@example.com", "Jane", "Startup", UserType.ENTREPRENEUR, "first-time-founder", True),
    ("bob.innovator@example.com", "Bob", "Innovator", UserType.ENTREPRENEUR, "corporate-innovator", False),
    ("angel.investor@example.com", "Angel", "Smith", UserType.INVESTOR, "angel-investor", True),
    ("family.office@example.com", "Family", "Office", UserType.INVESTOR, "family-office", True),
    ("credit.union@example.com", "Credit", "Union", UserType.LENDER, "credit-union", True),
    ("online.lender@example.com", "Online", "Lender", UserType.LENDER, "online-lender", True),
    ("gov.agency@example.com", "Government", "Agency", UserType.GRANTOR, "government-agency", True),
    ("corporate.foundation@example.com", "Corporate", "Foundation", UserType.GRANTOR, "corporate-foundation", True),
    ("incubator.partner@example.com", "Incubator", "Partner", UserType.PARTNER, "incubator", True),
    ("mentor.advisor@example.com", "Mentor", "Advisor", UserType.PARTNER, "mentor", True),
    ("team.member@example.com", "Team", "Member", UserType.TEAM_MEMBER, "member", True),
    ("contributor@example.com", "Content", "Contributor", UserType.TEAM_MEMBER, "contributor", True),
]

SAMPLE_ORGANIZATIONS = [
    {
        "name": "TechFlow Ventures",
        "description": "Early-stage VC fund focusing on AI and automation startups",
        "organization_type": UserType.INVESTOR,
        "industry": "Venture Capital",
        "size": "51-200",
        "location": "Palo Alto, CA",
        "website": "https://techflowventures.com",
    },
    {
        "name": "Green Impact Foundation",
        "description": "Non-profit foundation supporting environmental sustainability initiatives",
        "organization_type": UserType.GRANTOR,
        "industry": "Non-profit",
        "size": "11-50",
        "location": "Seattle, WA",
        "website": "https://greenimpactfoundation.org",
    },
    {
        "name": "StartupBoost Accelerator",
        "description": "3-month intensive accelerator program for early-stage startups",
        "organization_type": UserType.PARTNER,
        "industry": "Business Services",
        "size": "11-50",
        "location": "Austin, TX",
        "website": "https://startupboost.com",
    },
    {
        "name": "Capital Bridge Bank",
        "description": "Commercial bank specializing in startup and small business lending",
        "organization_type": UserType.LENDER,
        "industry": "Financial Services",
        "size": "501-1000",
        "location": "New York, NY",
        "website": "https://capitalbridge.com",
    },
]

SAMPLE_BUSINESS_PLANS = [
    {
        "name": "AI-Powered Customer Service Platform",
        "description": "AI platform that automates customer service interactions with 95% accuracy",
        "industry": "AI/ML",
        "stage": "Seed",
        "funding_goal": 2_000_000,
        "team_size": 8,
        "target_market": "Mid-market companies with high support volume",
        "competitive_advantage": "Proprietary NLP technology with multilingual support",
        "revenue_model": "SaaS subscription tiered by interaction volume",
        "visibility": "shared",
        "content": (
            "## Executive Summary\n"
            "Our AI-powered customer service platform automates customer interactions "
            "with 95% accuracy across 15 languages.\n\n"
            "## Market Opportunity\n"
            "The global customer service software market is valued at $25B and growing 15% annually.\n\n"
            "## Financial Projections\n"
            "Year 1: $500K revenue. Year 2: $2M revenue, break-even. Year 3: $5M revenue, 40% margin.\n"
        ),
    },
    {
        "name": "Sustainable Food Delivery Network",
        "description": "Carbon-neutral food delivery platform connecting local farms directly to consumers",
        "industry": "FoodTech",
        "stage": "Pre-Seed",
        "funding_goal": 750_000,
        "team_size": 5,
        "target_market": "Urban households buying local organic produce",
        "competitive_advantage": "Direct farm partnerships and electric vehicle fleet",
        "revenue_model": "Farmer commission, delivery fees and premium subscriptions",
        "visibility": "shared",
        "content": (
            "## Executive Summary\n"
            "A direct connection between local farms and consumers through carbon-neutral delivery.\n\n"
            "## Market\n"
            "$8B local food market growing 20% annually.\n"
        ),
    },
    {
        "name": "FinTech Credit Analytics Platform",
        "description": "Credit scoring platform using alternative data sources for underbanked populations",
        "industry": "FinTech",
        "stage": "Series A",
        "funding_goal": 8_000_000,
        "team_size": 15,
        "target_market": "Microfinance institutions serving underbanked borrowers",
        "competitive_advantage": "Proprietary alternative data algorithms with 40% better accuracy",
        "revenue_model": "Per-assessment API pricing",
        "visibility": "public",
        "content": (
            "## Executive Summary\n"
            "Credit scoring that uses alternative data to reach 2B underbanked individuals.\n\n"
            "## Traction\n"
            "50,000 credit assessments completed. Partnerships with 12 microfinance institutions.\n"
        ),
    },
]


def seed_store(store: InMemoryStore) -> None:
    """Populate an empty store. Does nothing when users already exist."""
    if len(store.users):
        logger.info("seed_skipped", reason="store_not_empty")
        return

    for data in SUPER_USERS:
        store.users.create(
            {**data, "verified": True, "onboarding_completed": True},
            record_id=super_user_id(data["user_type"]),
        )

    for email, first, last, user_type, subtype, verified in SAMPLE_USERS:
        store.users.create({
            "email": email,
            "first_name": first,
            "last_name": last,
            "user_type": user_type,
            "user_subtype": subtype,
            "verified": verified,
            "onboarding_completed": verified,
        })

    for data in SAMPLE_ORGANIZATIONS:
        owner_id = super_user_id(data["organization_type"])
        org = store.organizations.create({**data, "owner_id": owner_id, "verified": True})
        store.memberships.create({"organization_id": org.id, "user_id": owner_id, "role": "owner"})

    for data in SAMPLE_BUSINESS_PLANS:
        store.business_plans.create({**data, "user_id": super_user_id(UserType.ENTREPRENEUR)})

    logger.info("store_seeded", **store.counts())

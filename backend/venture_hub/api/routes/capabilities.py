from fastapi import APIRouter, Depends

from venture_hub.api.deps import get_store
from venture_hub.core.exceptions import NotFoundError
from venture_hub.store.memory import SUPPORTED_DOMAINS, InMemoryStore

router = APIRouter()


@router.get("/capabilities")
async def list_capabilities(store: InMemoryStore = Depends(get_store)):
    return store.capabilities()


@router.get("/domains/{domain}")
async def domain_summary(domain: str, store: InMemoryStore = Depends(get_store)):
    """Record count for a supported domain; 501 for placeholder domains."""
    try:
        table = store.table(domain)
    except KeyError:
        raise NotFoundError(f"Domain '{domain}'")
    return {"domain": domain, "supported": domain in SUPPORTED_DOMAINS, "count": len(table)}

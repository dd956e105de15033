from venture_hub.store.memory import PLACEHOLDER_DOMAINS, SUPPORTED_DOMAINS, InMemoryStore
from venture_hub.store.table import Table

__all__ = [
    "InMemoryStore",
    "Table",
    "SUPPORTED_DOMAINS",
    "PLACEHOLDER_DOMAINS",
]

"""Services package — expose all concrete services from one import."""
from .entity_service import EntityService
from .listing_service import ListingEntry, ListingService
from .locks import SlugLocks
from .score_service import ScoreService

__all__ = [
    'EntityService',
    'ListingEntry',
    'ListingService',
    'SlugLocks',
    'ScoreService',
]

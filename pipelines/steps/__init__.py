# Namespace for pipeline steps
from .crawl_listings import CrawlListings  # noqa: F401
from .enrich_animals import EnrichAnimals  # noqa: F401
from .persist_animals import PersistAnimals  # noqa: F401

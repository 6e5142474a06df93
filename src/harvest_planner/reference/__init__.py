"""Read-only reference data: products, cultivars, regions, offerings.

Nothing here changes with API calls. All model parameters are data, so
adding a region or cultivar needs no code changes.

Adding a new cultivar:
1. Add a ``Cultivar`` to ``products.CULTIVARS`` (gdd, calendar or parent)
2. Add one ``RegionalOffering`` per region it is grown in, with any overrides
"""

from harvest_planner.reference.catalog import Catalog as Catalog
from harvest_planner.reference.catalog import Cultivar as Cultivar
from harvest_planner.reference.catalog import ModelType as ModelType
from harvest_planner.reference.catalog import Product as Product
from harvest_planner.reference.catalog import Region as Region
from harvest_planner.reference.catalog import RegionalOffering as RegionalOffering
from harvest_planner.reference.catalog import Thresholds as Thresholds
from harvest_planner.reference.catalog import default_catalog as default_catalog
from harvest_planner.reference.geography import haversine_miles as haversine_miles

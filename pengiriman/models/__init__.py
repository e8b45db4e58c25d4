from .catalog import CatalogItem  # noqa: F401
from .shipment import LineItem, Shipment  # noqa: F401
from .users import User  # noqa: F401

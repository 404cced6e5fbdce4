"""Identity v3 (``identity.v3``) service."""

from .api import Api
from .models import Catalog, CatalogService, Endpoint, Token
from .service import Service

__all__ = ["Api", "Catalog", "CatalogService", "Endpoint", "Service", "Token"]

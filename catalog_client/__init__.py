from .api import ApiError, CatalogApi, TransportError
from .state import CatalogState, Closed, Creating, Editing, MovieForm
from .view_model import CatalogViewModel

__all__ = [
    "ApiError",
    "CatalogApi",
    "TransportError",
    "CatalogState",
    "Closed",
    "Creating",
    "Editing",
    "MovieForm",
    "CatalogViewModel",
]

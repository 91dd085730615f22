from .errors import SyncError, FetchFailure, TransportFailure
from .sync_client import SyncClient
from .synchronizer import GridSynchronizer

__all__ = [
    "SyncError",
    "FetchFailure",
    "TransportFailure",
    "SyncClient",
    "GridSynchronizer"
]

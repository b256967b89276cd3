"""logwatch: file-watcher snapshot aggregation with Prometheus and log export."""
from .version import __version__

__all__ = ["__version__"]

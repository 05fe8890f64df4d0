"""TourSearch — Federated search over the tourism site's content stores."""

__version__ = "0.1.0"

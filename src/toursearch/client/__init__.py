"""TourSearch Python SDK — Client library for the TourSearch API.

Provides both async and sync clients for interacting with a TourSearch server.

Quick start::

    from toursearch.client import TourSearchClient

    client = TourSearchClient("http://localhost:8080")
    response = client.search("shahdag")
    for item in response["data"]:
        print(item["sourceKind"], item["title"])
"""

from toursearch.client.client import AsyncTourSearchClient, QueryRejectedError, TourSearchClient

__all__ = ["AsyncTourSearchClient", "QueryRejectedError", "TourSearchClient"]

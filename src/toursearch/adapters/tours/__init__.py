from toursearch.adapters.tours.adapter import TourAdapter

__all__ = ["TourAdapter"]

from toursearch.adapters.projects.adapter import ProjectAdapter

__all__ = ["ProjectAdapter"]

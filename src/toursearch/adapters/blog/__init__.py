from toursearch.adapters.blog.adapter import BlogPostAdapter

__all__ = ["BlogPostAdapter"]

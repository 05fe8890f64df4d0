"""Source adapter layer — one adapter per searchable content type.

Built-in adapters:
  - tour: tour catalogue (matches title and description, carries category)
  - blog: published blog posts (matches title, excerpt and body)
  - project: company projects (matches title and description)

Adding a content type means adding a ``SourceKind`` value and one
``SourceAdapter`` subclass.
"""

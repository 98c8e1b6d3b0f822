"""markview — project a markdown content repository into view models.

Layout:
    markview/
    ├── repository/    # Item tree, tag index, markdown loader
    ├── mapper/        # Item tree → view-model tree projection
    ├── view/          # View-model types consumed by templates
    ├── routes.py      # Default route computation
    └── content.py     # Default content rendering
"""

__version__ = "0.1.0"

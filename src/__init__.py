"""View Presenters - presenter layer for server-rendered views.

Presenters sit between models and templates:
- Resolve a presenter for a model by naming convention (Book -> Presenters.Book)
- Expose model attributes through filter chains
- Forward to the current request's controller
- Render partials and collections through Jinja2
"""

__version__ = "0.1.0"

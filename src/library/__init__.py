"""Library — a small book catalog rendered through presenters.

Books are loaded from a YAML catalog and shown by BookPresenter, whose
partials live under templates/book/.
"""

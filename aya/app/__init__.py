"""Desktop application layer for AYA.

Modules here compose adapters, use cases and view-models, and bind Tk views
to view-model callbacks. Business rules stay in ``aya.usecases`` and
``aya.viewmodels``.
"""

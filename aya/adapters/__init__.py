"""Adapter package for external I/O implementations.

Purpose:
    Collect concrete implementations for domain ports (palette HTTP API,
    file-based image picking, local settings storage, and test doubles) used
    by use cases and view-models.

Dependencies:
    Individual submodules depend on ``requests``, filesystem APIs, and domain
    protocol definitions.

Call context:
    Imported by the app composition root (for runtime wiring) and by tests
    (for mocks and transport-level behavior verification).
"""

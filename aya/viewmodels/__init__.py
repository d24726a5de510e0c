"""ViewModel package for UI state and command surfaces.

Call context:
    ``aya/app/main.py`` imports concrete viewmodels from this package to bind
    view callbacks to state transitions.

Dependencies:
    Modules in this package depend on domain types, ports and use-case
    helpers only. I/O adapters stay outside and arrive through ports.
"""

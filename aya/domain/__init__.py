"""Domain package exports for value objects, ports and the shared store."""

from .app_store import AppStore
from .models import (
    EMPTY_PALETTE,
    HOME_ROUTE,
    RESULT_ROUTE,
    Palette,
    PickedImage,
    RecolorResult,
    ToastMessage,
    WorkflowState,
    derive_workflow_state,
)
from .ports import UseCaseError

__all__ = [
    "AppStore",
    "EMPTY_PALETTE",
    "HOME_ROUTE",
    "Palette",
    "PickedImage",
    "RESULT_ROUTE",
    "RecolorResult",
    "ToastMessage",
    "UseCaseError",
    "WorkflowState",
    "derive_workflow_state",
]

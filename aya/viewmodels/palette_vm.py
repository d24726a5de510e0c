"""View-model for the palette screen.

``PaletteVM`` coordinates the image picker, the palette use cases and the
shared ``AppStore``. It owns one piece of transient state, the busy marker
behind ``loading``; everything else (palette image, palette, base image,
recolor result) lives in the store and is shared with sibling screens.

All public operations are coroutines driven by the UI event loop. Blocking
use-case calls are handed to ``run_blocking`` (``asyncio.to_thread`` by
default) so the loop stays responsive while a request is in flight.

Ordering rules:
    - While ``loading`` is true the pick, extract and recolor commands are
      rejected, so at most one request is in flight per screen. Picking holds
      the busy marker too, since the picker may read the file in a worker.
    - ``dispose`` invalidates every in-flight request. A response that
      arrives afterwards is dropped without touching the store or navigating.
    - ``loading`` is cleared on every exit path via ``_busy``.

Failure policy:
    - Extraction failures are logged and leave the palette untouched. A toast
      is shown only when ``notify_extraction_errors`` is enabled.
    - Recolor failures and missing recolor inputs raise a blocking alert.
"""

from __future__ import annotations

import asyncio
import logging
from contextlib import contextmanager
from dataclasses import dataclass
from typing import Any, Awaitable, Callable, Iterator, List, Optional, Sequence, Tuple

from ..domain.app_store import FIELD_BASE_IMAGE, FIELD_PALETTE, FIELD_PALETTE_IMAGE, AppStore
from ..domain.models import (
    HOME_ROUTE,
    RESULT_ROUTE,
    BusyKind,
    Palette,
    RecolorResult,
    ToastMessage,
    WorkflowState,
    derive_workflow_state,
)
from ..domain.ports import AlertPort, ImagePickerPort, NavigatorPort, ToastPort, UseCaseError
from ..usecases.recolor_image import MISSING_INPUT_MESSAGE, has_recolor_inputs

RECOLOR_FAILED_MESSAGE = "Failed to recolor image"
EXTRACT_FAILED_TITLE = "Palette extraction failed"

ExtractFn = Callable[[str], Palette]
RecolorFn = Callable[[str, Sequence[str]], RecolorResult]
CopyFn = Callable[[Sequence[str]], str]
RunBlocking = Callable[..., Awaitable[Any]]
Swatch = Tuple[int, str]


@dataclass(frozen=True)
class PaletteViewState:
    """Snapshot pushed to the view after every change."""

    state: WorkflowState
    loading: bool
    palette_image_uri: Optional[str]
    palette: Palette
    can_pick: bool
    can_clear: bool
    can_copy: bool
    can_recolor: bool


class PaletteVM:
    """Workflow controller for palette extraction and recoloring."""

    def __init__(
        self,
        *,
        store: AppStore,
        picker: ImagePickerPort,
        extract_palette: ExtractFn,
        recolor_image: RecolorFn,
        navigator: NavigatorPort,
        alert: AlertPort,
        copy_palette: Optional[CopyFn] = None,
        toast: Optional[ToastPort] = None,
        notify_extraction_errors: bool = False,
        on_state_changed: Optional[Callable[[PaletteViewState], None]] = None,
        run_blocking: RunBlocking = asyncio.to_thread,
    ) -> None:
        """Wire collaborators.

        Args:
            store: Shared application store (palette image, palette, base
                image, recolor result).
            picker: Image picker used by ``select_palette_image``.
            extract_palette: Callable returning the palette for a base64
                image, usually an ``ExtractPalette`` use case.
            recolor_image: Callable returning the recolor payload, usually a
                ``RecolorImage`` use case.
            navigator: Route navigation for the result and home screens.
            alert: Blocking alert presenter.
            copy_palette: Optional ``CopyPalette`` use case for the copy button.
            toast: Optional toast presenter for non-blocking errors.
            notify_extraction_errors: Show a toast when extraction fails
                instead of only logging it.
            on_state_changed: View callback receiving ``PaletteViewState``.
            run_blocking: Coroutine factory used to run blocking use cases.
        """
        self._log = logging.getLogger(__name__)
        self.store = store
        self.picker = picker
        self._extract = extract_palette
        self._recolor = recolor_image
        self.navigator = navigator
        self.alert = alert
        self._copy = copy_palette
        self.toast = toast
        self.notify_extraction_errors = notify_extraction_errors
        self.on_state_changed = on_state_changed
        self._run_blocking = run_blocking

        self._busy_kind: Optional[BusyKind] = None
        self._navigated = False
        self._generation = 0
        self._alive = True
        self.last_error: Optional[str] = None
        self._unsubscribe = store.subscribe(self._on_store_changed)

    # ------------------------------------------------------------------
    # Derived state
    # ------------------------------------------------------------------
    @property
    def loading(self) -> bool:
        return self._busy_kind is not None

    @property
    def busy_kind(self) -> Optional[BusyKind]:
        return self._busy_kind

    @property
    def state(self) -> WorkflowState:
        return derive_workflow_state(
            self.store.palette_image,
            self.store.palette,
            self._busy_kind,
            self._navigated,
        )

    @property
    def can_pick(self) -> bool:
        return self._alive and not self.loading and self.store.palette_image is None

    @property
    def can_clear(self) -> bool:
        return self._alive and self.store.palette_image is not None

    @property
    def can_copy(self) -> bool:
        return self._alive and bool(self.store.palette)

    @property
    def can_recolor(self) -> bool:
        return self._alive and not self.loading and bool(self.store.palette)

    @property
    def swatches(self) -> List[Swatch]:
        """Palette colors with their display index, in server order."""
        return list(enumerate(self.store.palette))

    def view_state(self) -> PaletteViewState:
        image = self.store.palette_image
        return PaletteViewState(
            state=self.state,
            loading=self.loading,
            palette_image_uri=image.uri if image is not None else None,
            palette=self.store.palette,
            can_pick=self.can_pick,
            can_clear=self.can_clear,
            can_copy=self.can_copy,
            can_recolor=self.can_recolor,
        )

    # ------------------------------------------------------------------
    # Commands
    # ------------------------------------------------------------------
    async def select_palette_image(self) -> bool:
        """Pick a palette image, store it and extract its palette.

        Returns:
            ``True`` when an image was stored, ``False`` on cancel, rejection
            or picker failure. Extraction outcome does not change the result.
        """
        if not self._accepting("pick"):
            return False
        token = self._generation
        with self._busy("pick"):
            try:
                picked = await self.picker.pick_image()
            except Exception as exc:
                self._log.exception("Image picker failed")
                self._show_error_toast("Could not open image", str(exc))
                return False
        if picked is None:
            self._log.debug("Palette image pick canceled")
            return False
        if not self._is_current(token):
            return False

        self.store.set_palette_image(picked)
        if picked.has_payload:
            await self.extract_palette(picked.base64)
        else:
            self._log.warning("No base64 found on selected image %s", picked.uri)
        return True

    def clear_palette_image(self) -> None:
        """Forget the palette image. The extracted palette stays visible."""
        self.store.set_palette_image(None)

    async def extract_palette(self, image_base64: str) -> bool:
        """Replace the shared palette with the server palette for ``image_base64``.

        Failures are logged and leave the current palette in place.
        """
        if not self._accepting("extract"):
            return False
        token = self._generation
        with self._busy("extract"):
            try:
                palette = await self._run_blocking(self._extract, image_base64)
            except UseCaseError as err:
                self._extraction_failed(err.message or str(err))
                return False
            except Exception as exc:
                self._log.exception("Unexpected palette extraction error")
                self._extraction_failed(str(exc) or type(exc).__name__)
                return False
            if not self._is_current(token):
                self._log.info("Dropping palette from a request made before dispose")
                return False
            self.last_error = None
            self.store.set_palette(palette)
            return True

    async def trigger_recolor(self) -> bool:
        """Recolor the shared base image with the shared palette.

        On success stores the result and pushes ``RESULT_ROUTE`` once.
        """
        if not self._accepting("recolor"):
            return False
        base_image = self.store.base_image
        base_b64 = base_image.base64 if base_image is not None else None
        palette = self.store.palette
        if not has_recolor_inputs(base_b64, palette):
            self._log.info("Recolor blocked: base image or palette missing")
            self.alert.alert(MISSING_INPUT_MESSAGE)
            return False

        token = self._generation
        with self._busy("recolor"):
            try:
                result = await self._run_blocking(self._recolor, base_b64, palette)
            except UseCaseError as err:
                self._log.error("Recolor error: %s (%s)", err.message, err.code)
                self.last_error = err.message
                if self._alive:
                    self.alert.alert(f"{RECOLOR_FAILED_MESSAGE}: {err.message}")
                return False
            except Exception as exc:
                self._log.exception("Unexpected recolor error")
                self.last_error = str(exc) or type(exc).__name__
                if self._alive:
                    self.alert.alert(RECOLOR_FAILED_MESSAGE)
                return False
            if not self._is_current(token):
                self._log.info("Dropping recolor result from a request made before dispose")
                return False
            self.last_error = None
            self.store.set_recolor_result(result)
            self._navigated = True
            self.navigator.push(RESULT_ROUTE)
            return True

    def copy_palette(self) -> bool:
        """Copy the palette as ``"#AAAAAA, #BBBBBB"`` and confirm with a toast."""
        if self._copy is None:
            self._log.debug("Copy requested but no clipboard is wired")
            return False
        palette = self.store.palette
        if not palette:
            return False
        try:
            self._copy(palette)
        except UseCaseError as err:
            self._log.warning("Copy palette failed: %s", err.message)
            self._show_error_toast("Copy failed", err.message)
            return False
        return True

    def go_back(self) -> None:
        self.navigator.replace(HOME_ROUTE)

    def dispose(self) -> None:
        """Detach from the store and invalidate in-flight requests."""
        if not self._alive:
            return
        self._alive = False
        self._generation += 1
        self._unsubscribe()

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------
    @contextmanager
    def _busy(self, kind: BusyKind) -> Iterator[None]:
        self._busy_kind = kind
        try:
            self._emit()
            yield
        finally:
            self._busy_kind = None
            self._emit()

    def _accepting(self, command: str) -> bool:
        if not self._alive:
            self._log.debug("Ignoring %s on a disposed palette screen", command)
            return False
        if self.loading:
            self._log.info("Ignoring %s while %s is running", command, self._busy_kind)
            return False
        return True

    def _is_current(self, token: int) -> bool:
        return self._alive and token == self._generation

    def _extraction_failed(self, reason: str) -> None:
        self._log.error("Palette extraction error: %s", reason)
        self.last_error = reason
        if self.notify_extraction_errors and self._alive:
            self._show_error_toast(EXTRACT_FAILED_TITLE, reason)

    def _show_error_toast(self, title: str, message: str) -> None:
        if self.toast is None:
            return
        self.toast.show(ToastMessage(type="error", title=title, message=message))

    def _on_store_changed(self, field_name: str, _value: Any) -> None:
        if field_name in (FIELD_PALETTE_IMAGE, FIELD_PALETTE, FIELD_BASE_IMAGE):
            self._navigated = False
        self._emit()

    def _emit(self) -> None:
        if not (self._alive and self.on_state_changed):
            return
        try:
            self.on_state_changed(self.view_state())
        except Exception:
            self._log.exception("Palette view update failed")


__all__ = [
    "EXTRACT_FAILED_TITLE",
    "PaletteVM",
    "PaletteViewState",
    "RECOLOR_FAILED_MESSAGE",
]

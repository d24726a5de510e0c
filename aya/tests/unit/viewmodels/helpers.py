from __future__ import annotations

import asyncio
from typing import Any, Callable, List, Optional, Sequence, Tuple

from aya.domain.app_store import AppStore
from aya.domain.models import Palette, PickedImage, ToastMessage
from aya.domain.ports import UseCaseError
from aya.viewmodels.palette_vm import PaletteVM, PaletteViewState


class FakePicker:
    def __init__(self, result: Optional[PickedImage] = None) -> None:
        self.result = result
        self.calls = 0

    async def pick_image(self) -> Optional[PickedImage]:
        self.calls += 1
        return self.result


class FakeExtract:
    def __init__(self, palette: Sequence[str] = (), error: Optional[Exception] = None) -> None:
        self.palette = tuple(palette)
        self.error = error
        self.calls: List[str] = []

    def __call__(self, image_base64: str) -> Palette:
        self.calls.append(image_base64)
        if self.error is not None:
            raise self.error
        return self.palette


class FakeRecolor:
    def __init__(self, result: str = "ENCODED", error: Optional[Exception] = None) -> None:
        self.result = result
        self.error = error
        self.calls: List[Tuple[str, Tuple[str, ...]]] = []

    def __call__(self, base_image_base64: str, palette: Sequence[str]) -> str:
        self.calls.append((base_image_base64, tuple(palette)))
        if self.error is not None:
            raise self.error
        return self.result


class RecordingNavigator:
    def __init__(self) -> None:
        self.pushed: List[str] = []
        self.replaced: List[str] = []

    def push(self, route: str) -> None:
        self.pushed.append(route)

    def replace(self, route: str) -> None:
        self.replaced.append(route)


class RecordingAlert:
    def __init__(self) -> None:
        self.messages: List[str] = []

    def alert(self, message: str) -> None:
        self.messages.append(message)


class RecordingToast:
    def __init__(self) -> None:
        self.messages: List[ToastMessage] = []

    def show(self, message: ToastMessage) -> None:
        self.messages.append(message)


async def run_inline(fn: Callable[..., Any], *args: Any) -> Any:
    """Stand-in for ``asyncio.to_thread`` that keeps tests single-threaded."""
    await asyncio.sleep(0)
    return fn(*args)


def make_palette_vm(
    *,
    store: Optional[AppStore] = None,
    picker: Optional[FakePicker] = None,
    extract: Optional[FakeExtract] = None,
    recolor: Optional[FakeRecolor] = None,
    **kwargs: Any,
) -> PaletteVM:
    states: List[PaletteViewState] = []
    vm = PaletteVM(
        store=store or AppStore(),
        picker=picker or FakePicker(),
        extract_palette=extract or FakeExtract(),
        recolor_image=recolor or FakeRecolor(),
        navigator=kwargs.pop("navigator", RecordingNavigator()),
        alert=kwargs.pop("alert", RecordingAlert()),
        on_state_changed=states.append,
        run_blocking=kwargs.pop("run_blocking", run_inline),
        **kwargs,
    )
    vm.emitted_states = states  # type: ignore[attr-defined]
    return vm


def use_case_error(code: str = "REQUEST_TIMEOUT", message: str = "Request timed out.") -> UseCaseError:
    return UseCaseError(code, message)


__all__ = [
    "FakeExtract",
    "FakePicker",
    "FakeRecolor",
    "RecordingAlert",
    "RecordingNavigator",
    "RecordingToast",
    "make_palette_vm",
    "run_inline",
    "use_case_error",
]

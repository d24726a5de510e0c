"""Busy rejection, dispose handling and emitted view states."""

from __future__ import annotations

import asyncio
from typing import List

from aya.domain.app_store import AppStore
from aya.domain.models import PickedImage, WorkflowState
from aya.domain.ports import UseCaseError
from aya.tests.unit.viewmodels.helpers import (
    FakeExtract,
    FakeRecolor,
    RecordingNavigator,
    RecordingToast,
    make_palette_vm,
)


class _Gate:
    """run_blocking replacement that parks calls until released."""

    def __init__(self) -> None:
        self.event = asyncio.Event()
        self.started = 0

    async def __call__(self, fn, *args):
        self.started += 1
        await self.event.wait()
        return fn(*args)


def test_second_extract_is_rejected_while_loading() -> None:
    store = AppStore()
    extract = FakeExtract(["#111111"])

    async def scenario() -> List[bool]:
        gate = _Gate()
        vm = make_palette_vm(store=store, extract=extract, run_blocking=gate)
        first = asyncio.create_task(vm.extract_palette("ONE"))
        await asyncio.sleep(0)
        assert vm.loading is True
        assert vm.state is WorkflowState.EXTRACTING
        assert vm.can_recolor is False
        second = await vm.extract_palette("TWO")
        gate.event.set()
        return [await first, second]

    assert asyncio.run(scenario()) == [True, False]
    assert extract.calls == ["ONE"]
    assert store.palette == ("#111111",)


def test_recolor_is_rejected_while_extracting() -> None:
    store = AppStore()
    store.set_base_image(PickedImage(uri="b", base64="B64"))
    store.set_palette(["#000000"])
    recolor = FakeRecolor()

    async def scenario() -> bool:
        gate = _Gate()
        vm = make_palette_vm(store=store, extract=FakeExtract(["#FFFFFF"]), recolor=recolor, run_blocking=gate)
        pending = asyncio.create_task(vm.extract_palette("ONE"))
        await asyncio.sleep(0)
        rejected = await vm.trigger_recolor()
        gate.event.set()
        await pending
        return rejected

    assert asyncio.run(scenario()) is False
    assert recolor.calls == []
    assert store.palette == ("#FFFFFF",)


def test_response_after_dispose_does_not_touch_store_or_navigate() -> None:
    store = AppStore()
    store.set_base_image(PickedImage(uri="b", base64="B64"))
    store.set_palette(["#000000"])
    navigator = RecordingNavigator()

    async def scenario():
        gate = _Gate()
        vm = make_palette_vm(store=store, recolor=FakeRecolor("LATE"), navigator=navigator, run_blocking=gate)
        pending = asyncio.create_task(vm.trigger_recolor())
        await asyncio.sleep(0)
        vm.dispose()
        gate.event.set()
        return vm, await pending

    vm, completed = asyncio.run(scenario())

    assert completed is False
    assert store.recolor_result is None
    assert navigator.pushed == []
    assert vm.loading is False


def test_extraction_after_dispose_is_dropped() -> None:
    store = AppStore()

    async def scenario() -> bool:
        gate = _Gate()
        vm = make_palette_vm(store=store, extract=FakeExtract(["#ABCDEF"]), run_blocking=gate)
        pending = asyncio.create_task(vm.extract_palette("ONE"))
        await asyncio.sleep(0)
        vm.dispose()
        gate.event.set()
        return await pending

    assert asyncio.run(scenario()) is False
    assert store.palette == ()


def test_disposed_vm_rejects_commands() -> None:
    extract = FakeExtract(["#111111"])
    vm = make_palette_vm(extract=extract)
    vm.dispose()

    assert asyncio.run(vm.extract_palette("X")) is False
    assert extract.calls == []
    assert vm.can_pick is False


def test_emitted_states_cover_extract_cycle() -> None:
    vm = make_palette_vm(extract=FakeExtract(["#111111"]))

    asyncio.run(vm.extract_palette("X"))

    states = [vs.state for vs in vm.emitted_states]
    loading = [vs.loading for vs in vm.emitted_states]
    assert states[0] is WorkflowState.EXTRACTING
    assert states[-1] is WorkflowState.PALETTE_AVAILABLE
    assert loading[0] is True
    assert loading[-1] is False


def test_loading_resets_after_failed_extract_with_toast_enabled() -> None:
    toast = RecordingToast()
    vm = make_palette_vm(
        extract=FakeExtract(error=UseCaseError("BAD_RESPONSE", "Unexpected response from palette server.")),
        toast=toast,
        notify_extraction_errors=True,
    )

    asyncio.run(vm.extract_palette("X"))

    assert vm.loading is False
    assert vm.emitted_states[-1].loading is False


def test_done_state_resets_when_palette_changes() -> None:
    store = AppStore()
    store.set_base_image(PickedImage(uri="b", base64="B64"))
    store.set_palette(["#000000"])
    vm = make_palette_vm(store=store, recolor=FakeRecolor("R"))

    asyncio.run(vm.trigger_recolor())
    assert vm.state is WorkflowState.DONE

    store.set_palette(["#111111"])
    assert vm.state is WorkflowState.PALETTE_AVAILABLE


def test_swatches_follow_palette_order() -> None:
    store = AppStore()
    store.set_palette(["#CCCCCC", "#AAAAAA", "#BBBBBB"])
    vm = make_palette_vm(store=store)

    assert vm.swatches == [(0, "#CCCCCC"), (1, "#AAAAAA"), (2, "#BBBBBB")]


def test_copy_palette_uses_copy_use_case() -> None:
    store = AppStore()
    store.set_palette(["#111111", "#222222"])
    copied = []
    vm = make_palette_vm(store=store, copy_palette=copied.append)

    assert vm.copy_palette() is True
    assert copied == [("#111111", "#222222")]


def test_copy_palette_empty_is_noop() -> None:
    copied = []
    vm = make_palette_vm(copy_palette=copied.append)

    assert vm.copy_palette() is False
    assert copied == []


def test_copy_palette_failure_shows_error_toast() -> None:
    store = AppStore()
    store.set_palette(["#111111"])
    toast = RecordingToast()

    def failing_copy(_palette):
        raise UseCaseError("CLIPBOARD_FAILED", "Could not copy palette: denied")

    vm = make_palette_vm(store=store, copy_palette=failing_copy, toast=toast)

    assert vm.copy_palette() is False
    assert toast.messages[0].type == "error"
    assert toast.messages[0].message == "Could not copy palette: denied"


class _SlowPicker:
    """Picker whose result arrives only after ``release`` is set."""

    def __init__(self, result: PickedImage) -> None:
        self.result = result
        self.release = asyncio.Event()
        self.calls = 0

    async def pick_image(self) -> PickedImage:
        self.calls += 1
        await self.release.wait()
        return self.result


def test_pick_holds_loading_until_picker_returns() -> None:
    store = AppStore()
    store.set_base_image(PickedImage(uri="b", base64="B64"))
    store.set_palette(["#000000"])
    recolor = FakeRecolor()
    extract = FakeExtract(["#123456"])

    async def scenario():
        picker = _SlowPicker(PickedImage(uri="a", base64="A64"))
        vm = make_palette_vm(store=store, picker=picker, extract=extract, recolor=recolor)
        pending = asyncio.create_task(vm.select_palette_image())
        await asyncio.sleep(0)
        during = (vm.loading, vm.busy_kind, vm.can_pick, vm.can_recolor)
        second_pick = await vm.select_palette_image()
        recolor_started = await vm.trigger_recolor()
        picker.release.set()
        return during, second_pick, recolor_started, await pending, picker.calls, vm.loading

    during, second_pick, recolor_started, picked, calls, loading_after = asyncio.run(scenario())

    assert during == (True, "pick", False, False)
    assert second_pick is False
    assert recolor_started is False
    assert picked is True
    assert calls == 1
    assert recolor.calls == []
    assert extract.calls == ["A64"]
    assert store.palette == ("#123456",)
    assert loading_after is False


def test_failing_view_callback_does_not_wedge_loading() -> None:
    store = AppStore()
    extract = FakeExtract(["#ABCDEF"])
    vm = make_palette_vm(store=store, extract=extract)

    def broken_render(_state) -> None:
        raise RuntimeError("render failed")

    vm.on_state_changed = broken_render

    assert asyncio.run(vm.extract_palette("AAA")) is True
    assert vm.loading is False
    assert vm.busy_kind is None
    assert store.palette == ("#ABCDEF",)

    assert asyncio.run(vm.extract_palette("BBB")) is True
    assert extract.calls == ["AAA", "BBB"]

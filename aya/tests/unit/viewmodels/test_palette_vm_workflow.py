from __future__ import annotations

import asyncio

import pytest

from aya.domain.app_store import AppStore
from aya.domain.models import HOME_ROUTE, RESULT_ROUTE, PickedImage, WorkflowState
from aya.usecases.recolor_image import MISSING_INPUT_MESSAGE
from aya.viewmodels.palette_vm import RECOLOR_FAILED_MESSAGE
from aya.tests.unit.viewmodels.helpers import (
    FakeExtract,
    FakePicker,
    FakeRecolor,
    RecordingAlert,
    RecordingNavigator,
    RecordingToast,
    make_palette_vm,
    use_case_error,
)


def test_loading_is_false_before_any_action() -> None:
    vm = make_palette_vm()

    assert vm.loading is False
    assert vm.state is WorkflowState.IDLE


def test_select_palette_image_stores_image_and_extracts_once() -> None:
    store = AppStore()
    extract = FakeExtract(["#111111", "#222222"])
    picker = FakePicker(PickedImage(uri="file:///a.png", base64="QUJD"))
    vm = make_palette_vm(store=store, picker=picker, extract=extract)

    assert asyncio.run(vm.select_palette_image()) is True

    assert store.palette_image == PickedImage(uri="file:///a.png", base64="QUJD")
    assert extract.calls == ["QUJD"]
    assert store.palette == ("#111111", "#222222")
    assert vm.loading is False
    assert vm.state is WorkflowState.PALETTE_AVAILABLE


def test_select_palette_image_cancel_leaves_state_unchanged() -> None:
    store = AppStore()
    store.set_palette(["#ABCDEF"])
    extract = FakeExtract(["#000000"])
    vm = make_palette_vm(store=store, picker=FakePicker(None), extract=extract)

    assert asyncio.run(vm.select_palette_image()) is False

    assert store.palette_image is None
    assert store.palette == ("#ABCDEF",)
    assert extract.calls == []


def test_select_palette_image_without_base64_skips_extraction(caplog) -> None:
    store = AppStore()
    extract = FakeExtract(["#000000"])
    vm = make_palette_vm(
        store=store, picker=FakePicker(PickedImage(uri="a", base64=None)), extract=extract
    )

    with caplog.at_level("WARNING"):
        assert asyncio.run(vm.select_palette_image()) is True

    assert store.palette_image == PickedImage(uri="a")
    assert extract.calls == []
    assert store.palette == ()
    assert vm.state is WorkflowState.READY
    assert "No base64 found" in caplog.text


def test_clear_palette_image_keeps_palette() -> None:
    store = AppStore()
    store.set_palette_image(PickedImage(uri="a", base64="A"))
    store.set_palette(["#FF0000"])
    vm = make_palette_vm(store=store)

    vm.clear_palette_image()

    assert store.palette_image is None
    assert store.palette == ("#FF0000",)
    assert vm.state is WorkflowState.PALETTE_AVAILABLE


@pytest.mark.parametrize(
    "server_palette",
    [("#111111", "#222222"), ()],
)
def test_extract_palette_replaces_palette_in_server_order(server_palette) -> None:
    store = AppStore()
    store.set_palette(["#999999"])
    vm = make_palette_vm(store=store, extract=FakeExtract(server_palette))

    assert asyncio.run(vm.extract_palette("BASE64")) is True

    assert store.palette == tuple(server_palette)
    assert vm.loading is False


def test_extract_palette_failure_is_silent_and_keeps_palette() -> None:
    store = AppStore()
    store.set_palette(["#123456"])
    alert = RecordingAlert()
    toast = RecordingToast()
    vm = make_palette_vm(
        store=store,
        extract=FakeExtract(error=use_case_error()),
        alert=alert,
        toast=toast,
    )

    assert asyncio.run(vm.extract_palette("BASE64")) is False

    assert store.palette == ("#123456",)
    assert alert.messages == []
    assert toast.messages == []
    assert vm.loading is False
    assert vm.last_error == "Request timed out."


def test_extract_palette_unexpected_exception_does_not_escape() -> None:
    store = AppStore()
    vm = make_palette_vm(store=store, extract=FakeExtract(error=RuntimeError("boom")))

    assert asyncio.run(vm.extract_palette("BASE64")) is False

    assert store.palette == ()
    assert vm.loading is False


def test_extract_palette_failure_toasts_when_enabled() -> None:
    toast = RecordingToast()
    vm = make_palette_vm(
        extract=FakeExtract(error=use_case_error("SERVER_ERROR", "Palette server error, try again.")),
        toast=toast,
        notify_extraction_errors=True,
    )

    asyncio.run(vm.extract_palette("BASE64"))

    assert len(toast.messages) == 1
    assert toast.messages[0].type == "error"
    assert toast.messages[0].message == "Palette server error, try again."


@pytest.mark.parametrize(
    "base_image, palette",
    [
        (None, ()),
        (PickedImage(uri="b", base64="B64"), ()),
        (PickedImage(uri="b", base64=None), ("#FF0000",)),
        (None, ("#FF0000",)),
    ],
)
def test_trigger_recolor_short_circuits_without_inputs(base_image, palette) -> None:
    store = AppStore()
    store.set_base_image(base_image)
    store.set_palette(palette)
    recolor = FakeRecolor()
    alert = RecordingAlert()
    navigator = RecordingNavigator()
    vm = make_palette_vm(store=store, recolor=recolor, alert=alert, navigator=navigator)

    assert asyncio.run(vm.trigger_recolor()) is False

    assert recolor.calls == []
    assert alert.messages == [MISSING_INPUT_MESSAGE]
    assert navigator.pushed == []
    assert vm.loading is False


def test_trigger_recolor_success_stores_result_and_navigates_once() -> None:
    store = AppStore()
    store.set_base_image(PickedImage(uri="b", base64="B64"))
    store.set_palette(["#010101", "#020202"])
    recolor = FakeRecolor("ENCODED")
    navigator = RecordingNavigator()
    vm = make_palette_vm(store=store, recolor=recolor, navigator=navigator)

    assert asyncio.run(vm.trigger_recolor()) is True

    assert recolor.calls == [("B64", ("#010101", "#020202"))]
    assert store.recolor_result == "ENCODED"
    assert navigator.pushed == [RESULT_ROUTE]
    assert vm.loading is False
    assert vm.state is WorkflowState.DONE


def test_trigger_recolor_failure_alerts_and_stays() -> None:
    store = AppStore()
    store.set_base_image(PickedImage(uri="b", base64="B64"))
    store.set_palette(["#010101"])
    store.set_recolor_result("PREVIOUS")
    alert = RecordingAlert()
    navigator = RecordingNavigator()
    vm = make_palette_vm(
        store=store,
        recolor=FakeRecolor(error=use_case_error("SERVER_ERROR", "Palette server error, try again.")),
        alert=alert,
        navigator=navigator,
    )

    assert asyncio.run(vm.trigger_recolor()) is False

    assert len(alert.messages) == 1
    assert alert.messages[0].startswith(RECOLOR_FAILED_MESSAGE)
    assert navigator.pushed == []
    assert store.recolor_result == "PREVIOUS"
    assert vm.loading is False


def test_trigger_recolor_unexpected_exception_alerts() -> None:
    store = AppStore()
    store.set_base_image(PickedImage(uri="b", base64="B64"))
    store.set_palette(["#010101"])
    alert = RecordingAlert()
    vm = make_palette_vm(store=store, recolor=FakeRecolor(error=KeyError("recolor")), alert=alert)

    assert asyncio.run(vm.trigger_recolor()) is False

    assert alert.messages == [RECOLOR_FAILED_MESSAGE]
    assert vm.loading is False


def test_full_palette_then_recolor_scenario() -> None:
    store = AppStore()
    extract = FakeExtract(["#FF0000"])
    recolor = FakeRecolor("ENCODEDX")
    navigator = RecordingNavigator()
    vm = make_palette_vm(
        store=store,
        picker=FakePicker(PickedImage(uri="a", base64="BASE64A")),
        extract=extract,
        recolor=recolor,
        navigator=navigator,
    )

    asyncio.run(vm.select_palette_image())
    assert store.palette == ("#FF0000",)

    store.set_base_image(PickedImage(uri="", base64="BASE64B"))
    asyncio.run(vm.trigger_recolor())

    assert extract.calls == ["BASE64A"]
    assert recolor.calls == [("BASE64B", ("#FF0000",))]
    assert store.recolor_result == "ENCODEDX"
    assert navigator.pushed == [RESULT_ROUTE]
    assert vm.loading is False


def test_go_back_replaces_with_home_route() -> None:
    navigator = RecordingNavigator()
    vm = make_palette_vm(navigator=navigator)

    vm.go_back()

    assert navigator.replaced == [HOME_ROUTE]
    assert navigator.pushed == []

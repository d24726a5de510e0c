"""Desktop entry point: wires settings, adapters, view-models and Tk views.

Tk and asyncio share one thread. ``App.run`` drives the asyncio loop and pumps
Tk events between awaits, so button callbacks can schedule view-model
coroutines with ``_spawn`` while network calls run in worker threads.
"""

from __future__ import annotations

import asyncio
import logging
import os
from tkinter import filedialog
from typing import Coroutine, Optional, Set

from aya.adapters.picker_file import IMAGE_FILETYPES, FileImagePicker
from aya.adapters.storage_local import StorageLocal
from aya.app.controller import AppController
from aya.app.error_format import format_error_message
from aya.app.navigation import RouteNavigator
from aya.app.tk_ports import MessageBoxAlert, StatusToast, TkClipboard
from aya.app.views.home_view import HomeView
from aya.app.views.main_window import MainWindow
from aya.app.views.palette_view import PaletteView
from aya.app.views.result_view import ResultView
from aya.domain.app_store import FIELD_BASE_IMAGE, FIELD_RECOLOR_RESULT, AppStore
from aya.domain.models import HOME_ROUTE, RESULT_ROUTE
from aya.usecases.copy_palette import CopyPalette
from aya.utils.logging import apply_gui_preferences, configure_root
from aya.viewmodels.palette_vm import PaletteVM
from aya.viewmodels.result_vm import ResultVM
from aya.viewmodels.settings_vm import SettingsVM, default_settings_payload

PALETTE_ROUTE = "/palette"
FRAME_INTERVAL_S = 0.02
SETTINGS_DIR_ENV_VAR = "AYA_SETTINGS_DIR"
OFFLINE_ENV_VAR = "AYA_OFFLINE"


class App:
    def __init__(self, *, settings_dir: Optional[str] = None, offline: Optional[bool] = None) -> None:
        configure_root()
        self._log = logging.getLogger(__name__)
        self._tasks: Set[asyncio.Task] = set()
        self._running = False

        self.settings_vm = SettingsVM()
        self.storage = StorageLocal(
            settings_dir or os.getenv(SETTINGS_DIR_ENV_VAR) or os.path.expanduser("~/.aya"),
            defaults=default_settings_payload,
        )
        self.settings_vm.on_save = self.storage.save_user_settings
        self._load_user_settings()
        if offline is None:
            offline = (os.getenv(OFFLINE_ENV_VAR) or "").strip().lower() in {"1", "true", "yes", "on"}

        self.controller = AppController(self.settings_vm, offline=offline)
        if not self.controller.ensure_ready():
            raise SystemExit("Palette API is not configured; check api_base_url in settings.")

        self.store = AppStore()
        self.win = MainWindow()
        self.win.protocol("WM_DELETE_WINDOW", self.close)
        self.navigator = RouteNavigator()
        self.toast = StatusToast(self.win)
        alert = MessageBoxAlert(self.win)

        def choose_image() -> Optional[str]:
            return filedialog.askopenfilename(
                parent=self.win,
                title="Select Image",
                filetypes=IMAGE_FILETYPES,
            ) or None

        picker = FileImagePicker(choose_image)
        self.base_picker = picker

        self.palette_vm = PaletteVM(
            store=self.store,
            picker=picker,
            extract_palette=self.controller.uc_extract,
            recolor_image=self.controller.uc_recolor,
            navigator=self.navigator,
            alert=alert,
            copy_palette=CopyPalette(TkClipboard(self.win), self.toast),
            toast=self.toast,
            notify_extraction_errors=self.settings_vm.notify_extraction_errors,
        )
        self.result_vm = ResultVM(
            store=self.store,
            save_result=self.controller.uc_save_result,
            toast=self.toast,
            results_dir=lambda: self.settings_vm.results_dir,
        )

        self.home_view = HomeView(
            self.win.container,
            on_pick_base=lambda: self._spawn(self._pick_base_image()),
            on_continue=lambda: self.navigator.push(PALETTE_ROUTE),
        )
        self.palette_view = PaletteView(
            self.win.container,
            on_pick=lambda: self._spawn(self.palette_vm.select_palette_image()),
            on_clear=self.palette_vm.clear_palette_image,
            on_copy=self.palette_vm.copy_palette,
            on_back=self.palette_vm.go_back,
            on_recolor=lambda: self._spawn(self.palette_vm.trigger_recolor()),
        )
        self.result_view = ResultView(
            self.win.container,
            on_save=self.result_vm.save,
            on_back=self.navigator.back,
        )
        for route, frame in (
            (HOME_ROUTE, self.home_view),
            (PALETTE_ROUTE, self.palette_view),
            (RESULT_ROUTE, self.result_view),
        ):
            self.win.add_frame(route, frame)
            self.navigator.register(route, lambda name=route: self.win.show_frame(name))

        self.palette_vm.on_state_changed = self.palette_view.render
        self.store.subscribe(self._on_store_changed)
        self.palette_view.render(self.palette_vm.view_state())
        self._render_result()
        self.navigator.replace(HOME_ROUTE)

    # ------------------------------------------------------------------
    # Settings & logging
    # ------------------------------------------------------------------
    def _load_user_settings(self) -> None:
        try:
            self.settings_vm.apply_dict(self.storage.load_user_settings())
        except (OSError, ValueError) as exc:
            self._log.warning("Ignoring unreadable settings in %s: %s", self.storage.root, exc)
        try:
            self.settings_vm.apply_env()
        except ValueError as exc:
            self._log.warning("Ignoring AYA_API_BASE_URL: %s", exc)
        self._apply_logging_preferences()

    def _apply_logging_preferences(self) -> None:
        level = apply_gui_preferences(self.settings_vm.debug_logging)
        self._log.info("Log level: %s", logging.getLevelName(level))

    # ------------------------------------------------------------------
    # Screens
    # ------------------------------------------------------------------
    async def _pick_base_image(self) -> None:
        try:
            picked = await self.base_picker.pick_image()
        except Exception as exc:
            self.win.show_toast(format_error_message(exc, context="Base image"))
            return
        if picked is not None:
            self.store.set_base_image(picked)

    def _on_store_changed(self, field_name: str, value) -> None:
        if field_name == FIELD_BASE_IMAGE:
            self.home_view.set_base_image(value.uri if value is not None else None)
        elif field_name == FIELD_RECOLOR_RESULT:
            self._render_result()

    def _render_result(self) -> None:
        self.result_view.render(self.result_vm.summary, self.result_vm.has_result)

    # ------------------------------------------------------------------
    # Event loop
    # ------------------------------------------------------------------
    def _spawn(self, coro: Coroutine) -> None:
        task = asyncio.get_running_loop().create_task(coro)
        self._tasks.add(task)
        task.add_done_callback(self._task_done)

    def _task_done(self, task: asyncio.Task) -> None:
        self._tasks.discard(task)
        if task.cancelled():
            return
        exc = task.exception()
        if exc is not None:
            self.win.show_toast(format_error_message(exc))

    async def run(self) -> None:
        self._running = True
        while self._running:
            self.win.update()
            await asyncio.sleep(FRAME_INTERVAL_S)
        for task in list(self._tasks):
            task.cancel()
        self.win.destroy()

    def close(self) -> None:
        self.palette_vm.dispose()
        try:
            self.settings_vm.cmd_save()
        except OSError as exc:
            self._log.error("Could not save settings to %s: %s", self.storage.root, exc)
        self.controller.close()
        self._running = False


def main() -> None:
    app = App()
    asyncio.run(app.run())


if __name__ == "__main__":
    main()

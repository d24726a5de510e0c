from __future__ import annotations

import os
import tkinter as tk
from tkinter import ttk
from typing import Callable, List

from aya.viewmodels.palette_vm import PaletteViewState

_SWATCH_SIZE = 48


class PaletteView(ttk.Frame):
    """Palette image picker, extracted swatches, copy/back/recolor controls.

    The view holds no workflow state; ``render`` is called with every
    ``PaletteViewState`` the view-model emits.
    """

    def __init__(
        self,
        parent: tk.Misc,
        *,
        on_pick: Callable[[], None],
        on_clear: Callable[[], None],
        on_copy: Callable[[], None],
        on_back: Callable[[], None],
        on_recolor: Callable[[], None],
    ) -> None:
        super().__init__(parent, padding=16)
        self._on_pick = on_pick
        self._on_clear = on_clear

        ttk.Label(self, text="AYA", font=("TkDefaultFont", 20, "bold")).pack(pady=(0, 12))
        self.pick_btn = ttk.Button(self, text="+", width=4, command=self._toggle_pick)
        self.pick_btn.pack()
        ttk.Label(self, text="Pick a palette image").pack(pady=(4, 8))

        self.image_var = tk.StringVar(value="")
        ttk.Label(self, textvariable=self.image_var, wraplength=480).pack()

        self.progress = ttk.Progressbar(self, mode="indeterminate", length=200)

        self.palette_box = ttk.Frame(self)
        header = ttk.Frame(self.palette_box)
        header.pack(fill="x")
        ttk.Label(header, text="Extracted Palette").pack(side="left")
        self.copy_btn = ttk.Button(header, text="Copy", command=on_copy)
        self.copy_btn.pack(side="right")
        self.swatch_row = ttk.Frame(self.palette_box)
        self.swatch_row.pack(pady=8)
        self._swatch_widgets: List[tk.Widget] = []

        self.button_row = ttk.Frame(self)
        ttk.Button(self.button_row, text="Back", command=on_back).pack(side="left", padx=4)
        self.recolor_btn = ttk.Button(self.button_row, text="Recolor", command=on_recolor)
        self.recolor_btn.pack(side="left", padx=4)

        self._clear_mode = False

    def _toggle_pick(self) -> None:
        if self._clear_mode:
            self._on_clear()
        else:
            self._on_pick()

    def render(self, vs: PaletteViewState) -> None:
        self._clear_mode = vs.palette_image_uri is not None
        self.pick_btn.configure(text="Undo" if self._clear_mode else "+")
        enabled = vs.can_clear if self._clear_mode else vs.can_pick
        self.pick_btn.state(["!disabled"] if enabled else ["disabled"])
        self.image_var.set(os.path.basename(vs.palette_image_uri or ""))

        if vs.loading:
            if not self.progress.winfo_ismapped():
                self.progress.pack(pady=12)
                self.progress.start(12)
        elif self.progress.winfo_ismapped():
            self.progress.stop()
            self.progress.pack_forget()

        self._render_swatches(vs.palette)
        if vs.palette:
            self.palette_box.pack(pady=8, fill="x")
            self.button_row.pack(pady=12)
        else:
            self.palette_box.pack_forget()
            self.button_row.pack_forget()
        self.copy_btn.state(["!disabled"] if vs.can_copy else ["disabled"])
        self.recolor_btn.state(["!disabled"] if vs.can_recolor else ["disabled"])

    def _render_swatches(self, palette) -> None:
        for widget in self._swatch_widgets:
            widget.destroy()
        self._swatch_widgets = []
        for hex_color in palette:
            block = ttk.Frame(self.swatch_row)
            block.pack(side="left", padx=4)
            swatch = tk.Canvas(block, width=_SWATCH_SIZE, height=_SWATCH_SIZE, highlightthickness=0)
            try:
                swatch.configure(background=hex_color)
            except tk.TclError:
                # server sent something Tk cannot paint, show the text only
                pass
            swatch.pack()
            ttk.Label(block, text=hex_color).pack()
            self._swatch_widgets.append(block)

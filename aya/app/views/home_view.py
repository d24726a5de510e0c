from __future__ import annotations

import tkinter as tk
from tkinter import ttk
from typing import Callable, Optional


class HomeView(ttk.Frame):
    """Base image selection. Feeds ``base_image`` in the shared store."""

    def __init__(
        self,
        parent: tk.Misc,
        *,
        on_pick_base: Callable[[], None],
        on_continue: Callable[[], None],
    ) -> None:
        super().__init__(parent, padding=16)
        ttk.Label(self, text="AYA", font=("TkDefaultFont", 20, "bold")).pack(pady=(0, 12))
        ttk.Button(self, text="Pick a base image", command=on_pick_base).pack()
        self.base_var = tk.StringVar(value="No base image selected")
        ttk.Label(self, textvariable=self.base_var, wraplength=480).pack(pady=8)
        ttk.Button(self, text="Next", command=on_continue).pack(pady=(12, 0))

    def set_base_image(self, uri: Optional[str]) -> None:
        self.base_var.set(uri or "No base image selected")

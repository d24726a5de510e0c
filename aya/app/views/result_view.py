from __future__ import annotations

import tkinter as tk
from tkinter import ttk
from typing import Callable


class ResultView(ttk.Frame):
    def __init__(
        self,
        parent: tk.Misc,
        *,
        on_save: Callable[[], None],
        on_back: Callable[[], None],
    ) -> None:
        super().__init__(parent, padding=16)
        self.summary_var = tk.StringVar(value="")
        ttk.Label(self, textvariable=self.summary_var, wraplength=480).pack(pady=8)
        row = ttk.Frame(self)
        row.pack(pady=12)
        ttk.Button(row, text="Back", command=on_back).pack(side="left", padx=4)
        self.save_btn = ttk.Button(row, text="Save", command=on_save)
        self.save_btn.pack(side="left", padx=4)

    def render(self, summary: str, can_save: bool) -> None:
        self.summary_var.set(summary)
        self.save_btn.state(["!disabled"] if can_save else ["disabled"])

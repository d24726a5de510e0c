from __future__ import annotations

import tkinter as tk
from tkinter import ttk
from typing import Dict


class MainWindow(tk.Tk):
    """Top-level window: a stack of screen frames plus a status bar."""

    def __init__(self, title: str = "AYA") -> None:
        super().__init__()
        self.title(title)
        self.geometry("560x640")
        self.minsize(420, 480)

        self.container = ttk.Frame(self)
        self.container.pack(fill="both", expand=True)
        self.container.grid_rowconfigure(0, weight=1)
        self.container.grid_columnconfigure(0, weight=1)
        self._frames: Dict[str, tk.Widget] = {}

        self.status_message_var = tk.StringVar(value="")
        statusbar = ttk.Label(self, textvariable=self.status_message_var, anchor="w")
        statusbar.pack(fill="x", side="bottom", padx=6, pady=(0, 4))

    def add_frame(self, name: str, frame: tk.Widget) -> None:
        self._frames[name] = frame
        frame.grid(row=0, column=0, sticky="nsew")

    def show_frame(self, name: str) -> None:
        self._frames[name].tkraise()

    def show_toast(self, message: str, level: str = "info") -> None:
        """
        Lightweight user feedback in the statusbar.
        level is currently informational; styling could be extended later.
        """
        self.status_message_var.set(message)

"""Tk-backed implementations of the clipboard, toast and alert ports."""

from __future__ import annotations

import tkinter as tk
from tkinter import messagebox
from typing import Optional

from aya.domain.models import ToastMessage
from aya.domain.ports import AlertPort, ClipboardPort, ToastPort


class TkClipboard(ClipboardPort):
    def __init__(self, root: tk.Misc) -> None:
        self.root = root

    def set_text(self, text: str) -> None:
        self.root.clipboard_clear()
        self.root.clipboard_append(text)
        # keep the clipboard content after the window closes
        self.root.update_idletasks()


class StatusToast(ToastPort):
    """Show toasts in the main window status bar."""

    def __init__(self, win) -> None:
        self.win = win

    def show(self, message: ToastMessage) -> None:
        text = message.title if not message.message else f"{message.title} {message.message}"
        self.win.show_toast(text, level=message.type)


class MessageBoxAlert(AlertPort):
    def __init__(self, parent: Optional[tk.Misc] = None, *, title: str = "AYA") -> None:
        self.parent = parent
        self.title = title

    def alert(self, message: str) -> None:
        messagebox.showwarning(self.title, message, parent=self.parent)


__all__ = ["MessageBoxAlert", "StatusToast", "TkClipboard"]

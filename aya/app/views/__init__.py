"""Tk views. Views render view-model state and forward user intents."""

"""Application-side consumers of the configuration."""

from .dispatch import KeyDispatcher, KeyEvent
from .messages import AppMessage, AppTab, Modal, OpenModal, Quit, SwitchTab, to_app_message

__all__ = [
    "AppMessage",
    "AppTab",
    "KeyDispatcher",
    "KeyEvent",
    "Modal",
    "OpenModal",
    "Quit",
    "SwitchTab",
    "to_app_message",
]

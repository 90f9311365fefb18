from .showcase_panel import ToastShowcasePanel, get_toast_showcase_panel
from .toast_stack import ToastCard, ToastStack, get_toast_stack

__all__ = [
    "ToastCard",
    "ToastStack",
    "get_toast_stack",
    "ToastShowcasePanel",
    "get_toast_showcase_panel",
]

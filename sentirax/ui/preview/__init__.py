from sentirax.ui.preview.media_widgets import MediaPreviewWidget, create_media_widget
from sentirax.ui.preview.preview_overlay import DismissReason, PreviewOverlay, open_preview

__all__ = [
    "DismissReason",
    "MediaPreviewWidget",
    "PreviewOverlay",
    "create_media_widget",
    "open_preview",
]

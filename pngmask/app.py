import customtkinter as ctk

from pngmask.controllers.app_controller import WINDOW_TITLE, AppController
from pngmask.services.mask_service import MaskService
from pngmask.settings import settings
from pngmask.ui.image_viewer import ImageViewer
from pngmask.ui.sidebar import Sidebar
from pngmask.ui.bottom_bar import BottomBar


class MaskStudioApp(ctk.CTk):
    def __init__(self, masks: MaskService | None = None) -> None:
        super().__init__()
        ctk.set_appearance_mode(settings.APPEARANCE)
        ctk.set_default_color_theme("blue")

        self.title(WINDOW_TITLE)
        self.minsize(900, 600)

        # root layout: left viewer, right sidebar
        self.grid_columnconfigure(0, weight=1)
        self.grid_rowconfigure(0, weight=1)
        self.grid_rowconfigure(1, weight=0)

        masks = masks or MaskService()

        self._viewer = ImageViewer(self, processor=masks.processor)
        self._viewer.grid(row=0, column=0, sticky="nsew", padx=(12, 6), pady=(12, 6))

        self._sidebar = Sidebar(self)
        self._sidebar.grid(row=0, column=1, sticky="ns", padx=(6, 12), pady=(12, 6))

        self._bottom = BottomBar(self)
        self._bottom.grid(row=1, column=0, columnspan=2, sticky="ew", padx=12, pady=(0, 12))

        self._controller = AppController(
            viewer=self._viewer, sidebar=self._sidebar, bottom=self._bottom, window=self, masks=masks
        )
        self._controller.bind_events()

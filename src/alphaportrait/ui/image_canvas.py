from __future__ import annotations

import logging
import tkinter as tk
from tkinter import ttk
from typing import Optional, Tuple

from PIL import Image, ImageTk

from alphaportrait.app.export import decode_image
from alphaportrait.core.errors import EncodingError

logger = logging.getLogger(__name__)


class ImageCanvas(ttk.Frame):
    """A resizable canvas that shows an image, given as a data URI, scaled to fit."""

    def __init__(self, master, *, placeholder: str = "No image", bg: str = "#111111"):
        super().__init__(master)
        self._canvas = tk.Canvas(self, highlightthickness=0, bg=bg)
        self._canvas.pack(fill="both", expand=True)

        self._photo: Optional[ImageTk.PhotoImage] = None
        self._pil: Optional[Image.Image] = None
        self._uri: Optional[str] = None

        self._canvas.bind("<Configure>", lambda _evt: self._redraw())

        self._placeholder_id = self._canvas.create_text(
            12, 12, anchor="nw",
            text=placeholder,
            fill="#888",
            font=("TkDefaultFont", 11),
        )

    def set_data_uri(self, uri: Optional[str]) -> None:
        if uri == self._uri:
            return
        self._uri = uri
        self._pil = None
        if uri is not None:
            try:
                self._pil = decode_image(uri)
            except EncodingError as e:
                logger.warning("Cannot display image: %s", e)
        self._redraw()

    def clear(self) -> None:
        self.set_data_uri(None)

    @staticmethod
    def fit_size(img_w: int, img_h: int, box_w: int, box_h: int) -> Tuple[int, int]:
        if img_w <= 0 or img_h <= 0 or box_w <= 2 or box_h <= 2:
            return (1, 1)
        scale = min(box_w / img_w, box_h / img_h)
        return max(1, int(img_w * scale)), max(1, int(img_h * scale))

    def _redraw(self) -> None:
        self._canvas.delete("img")
        if self._pil is None:
            self._canvas.itemconfigure(self._placeholder_id, state="normal")
            return

        self._canvas.itemconfigure(self._placeholder_id, state="hidden")

        w = max(1, self._canvas.winfo_width())
        h = max(1, self._canvas.winfo_height())
        new_w, new_h = self.fit_size(self._pil.width, self._pil.height, w, h)
        resized = self._pil.resize((new_w, new_h), Image.LANCZOS)

        self._photo = ImageTk.PhotoImage(resized)
        self._canvas.create_image((w - new_w) // 2, (h - new_h) // 2, anchor="nw", image=self._photo, tags=("img",))

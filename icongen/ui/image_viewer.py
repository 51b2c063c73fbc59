"""Виджет предпросмотра ассета: масштабирование, панорамирование, шахматный фон.

Принципы:
- SRP: виджет только рисует и переводит события мыши в операции `Viewport`.
- Геометрия (масштаб, смещение, попадание курсора) живёт в `viewport.py`.
"""
from __future__ import annotations

from typing import Callable, Optional, Tuple

import customtkinter as ctk
import numpy as np
import tkinter as tk
from PIL import Image, ImageTk

from icongen.ui.viewport import Viewport, clamp_scale

CHECKER_CELL = 8
WHEEL_STEP = 1.1


def _checkerboard(size: Tuple[int, int], cell: int = CHECKER_CELL) -> Image.Image:
    """Шахматная подложка, на которой видна прозрачность."""
    w, h = size
    yy, xx = np.indices((h, w))
    dark = ((yy // cell + xx // cell) % 2).astype(bool)
    board = np.where(dark[..., None], np.uint8(153), np.uint8(204)).repeat(4, axis=2)
    board[..., 3] = 255
    return Image.fromarray(board.astype(np.uint8))


class ImageViewer(ctk.CTkFrame):
    """Канва с предпросмотром одного изображения поверх шахматной подложки."""
    def __init__(self, master: ctk.CTk | tk.Misc, **kwargs) -> None:
        super().__init__(master, **kwargs)
        self.grid_rowconfigure(0, weight=1)
        self.grid_columnconfigure(0, weight=1)

        self._canvas = tk.Canvas(self, highlightthickness=0, bg=self._get_canvas_bg())
        self._canvas.grid(row=0, column=0, sticky="nsew")

        self._image: Optional[Image.Image] = None
        self._tk_image: Optional[ImageTk.PhotoImage] = None
        self._view: Optional[Viewport] = None
        # точка нажатия и смещение на момент нажатия
        self._drag_origin: Optional[Tuple[int, int, float, float]] = None

        self.on_cursor_move: Optional[Callable[[Optional[int], Optional[int], Optional[Tuple[int, int, int, int]]], None]] = None
        self.on_zoom_change: Optional[Callable[[int], None]] = None

        self._canvas.bind("<Configure>", lambda _e: self._render_image())
        self._canvas.bind("<Motion>", self._on_mouse_move)
        self._canvas.bind("<Leave>", lambda _e: self._emit_cursor(None))
        for sequence in ("<MouseWheel>", "<Button-4>", "<Button-5>"):
            self._canvas.bind(sequence, self._on_wheel)
        self._canvas.bind("<ButtonPress-1>", self._on_drag_start)
        self._canvas.bind("<B1-Motion>", self._on_drag)
        self._canvas.bind("<ButtonRelease-1>", self._on_drag_end)

    # ---- Public API ----
    def set_image(self, image: Optional[Image.Image]) -> None:
        """Показывает изображение (RGBA) целиком; None очищает канву."""
        if image is not None and image.mode != "RGBA":
            image = image.convert("RGBA")
        self._image = image
        self._view = Viewport(image.size, self._canvas_size()) if image is not None else None
        self.set_zoom_to_fit()

    def set_zoom_to_fit(self) -> None:
        if self._view is not None:
            self._view.canvas_size = self._canvas_size()
            self._view.fit()
        self._render_image()

    def set_zoom_percent(self, zoom_percent: int) -> None:
        """Устанавливает масштаб в процентах (10–1600%)."""
        if self._view is not None:
            self._view.scale = clamp_scale(zoom_percent / 100.0)
        self._render_image()

    def get_zoom_percent(self) -> int:
        return int(round(self._view.scale * 100)) if self._view is not None else 100

    # ---- Internals ----
    def _canvas_size(self) -> Tuple[int, int]:
        return max(1, int(self._canvas.winfo_width())), max(1, int(self._canvas.winfo_height()))

    def _render_image(self) -> None:
        self._canvas.delete("all")
        if self._image is None or self._view is None:
            return

        self._view.canvas_size = self._canvas_size()
        x, y = self._view.place()
        scaled = self._view.scaled_size

        # мелкие иконки увеличиваем без сглаживания, чтобы были видны пиксели
        method = Image.Resampling.NEAREST if self._view.scale >= 1.0 else Image.Resampling.LANCZOS
        composed = Image.alpha_composite(_checkerboard(scaled), self._image.resize(scaled, method))

        self._tk_image = ImageTk.PhotoImage(composed)
        self._canvas.create_image(x, y, image=self._tk_image, anchor="nw")

    def _emit_cursor(self, point: Optional[Tuple[int, int]]) -> None:
        if self.on_cursor_move is None:
            return
        if point is None or self._image is None:
            self.on_cursor_move(None, None, None)
        else:
            self.on_cursor_move(point[0], point[1], self._image.getpixel(point))

    def _on_mouse_move(self, event: tk.Event) -> None:
        if self._view is not None:
            self._emit_cursor(self._view.to_image(event.x, event.y))

    def _get_canvas_bg(self) -> str:
        return "#1f1f1f" if ctk.get_appearance_mode().lower() == "dark" else "#f2f2f2"

    def _on_wheel(self, event: tk.Event) -> None:
        if self._view is None:
            return
        # X11 присылает Button-4/5, Windows и macOS - MouseWheel с delta
        num = getattr(event, "num", None)
        if num in (4, 5):
            zoom_in = num == 4
        elif event.delta:
            zoom_in = event.delta > 0
        else:
            return
        if not self._view.zoom_at(event.x, event.y, WHEEL_STEP if zoom_in else 1.0 / WHEEL_STEP):
            return
        self._render_image()
        if self.on_zoom_change:
            self.on_zoom_change(self.get_zoom_percent())

    def _on_drag_start(self, event: tk.Event) -> None:
        if self._view is None or self._view.offset is None:
            return
        self._canvas.focus_set()
        self._drag_origin = (event.x, event.y, *self._view.offset)

    def _on_drag(self, event: tk.Event) -> None:
        if self._view is None or self._drag_origin is None:
            return
        sx, sy, ox, oy = self._drag_origin
        self._view.offset = (ox + event.x - sx, oy + event.y - sy)
        self._render_image()

    def _on_drag_end(self, _event: tk.Event) -> None:
        self._drag_origin = None

"""Боковая панель: загрузка файла, сведения об источнике, галерея ассетов, экспорт.

Принципы:
- SRP: управляет только виджетами, не содержит обработки изображений.
- ISP: наружу выдаёт события через `on_*` и компактные методы `set_*`.
"""
from __future__ import annotations

from typing import Callable, List, Optional, Sequence, Tuple

import customtkinter as ctk

from icongen.models.asset_model import GeneratedAsset
from icongen.models.image_model import SourceImage


def _rgba_to_hex(rgba: Tuple[int, int, int, int]) -> str:
    """Преобразует RGBA в HEX (без альфа)."""
    r, g, b, _a = rgba
    return f"#{r:02X}{g:02X}{b:02X}"


class Sidebar(ctk.CTkFrame):
    """Панель инструментов с блоками: файл, информация, ассеты, курсор."""
    def __init__(self, master: ctk.CTk, **kwargs) -> None:
        super().__init__(master, width=300, **kwargs)

        self.grid_columnconfigure(0, weight=1)

        # Callbacks
        self.on_open_file: Optional[Callable[[], None]] = None
        self.on_select_asset: Optional[Callable[[int], None]] = None
        self.on_save_asset: Optional[Callable[[int], None]] = None
        self.on_save_archive: Optional[Callable[[], None]] = None
        self.on_reset: Optional[Callable[[], None]] = None

        self._asset_rows: List[ctk.CTkFrame] = []

        # Controls
        self._title = ctk.CTkLabel(self, text="Инструменты", font=ctk.CTkFont(size=16, weight="bold"))
        self._title.grid(row=0, column=0, padx=8, pady=(8, 4), sticky="w")

        self._open_btn = ctk.CTkButton(self, text="Открыть изображение…", command=self._emit_open_file)
        self._open_btn.grid(row=1, column=0, padx=8, pady=(0, 4), sticky="ew")
        self._hint = ctk.CTkLabel(self, text="PNG, JPG, TGA · рекомендуется 256×256 или 512×512", anchor="w")
        self._hint.grid(row=2, column=0, padx=8, pady=(0, 12), sticky="ew")

        # Info section
        self._info_title = ctk.CTkLabel(self, text="Источник", font=ctk.CTkFont(size=16, weight="bold"))
        self._info_title.grid(row=3, column=0, padx=8, pady=(8, 4), sticky="w")

        self._path_val = ctk.StringVar(value="—")
        self._size_val = ctk.StringVar(value="—")
        self._dims_val = ctk.StringVar(value="—")
        self._format_val = ctk.StringVar(value="—")

        self._info_path = ctk.CTkLabel(self, textvariable=self._path_val, wraplength=270, anchor="w", justify="left")
        self._info_size = ctk.CTkLabel(self, textvariable=self._size_val, anchor="w", justify="left")
        self._info_dims = ctk.CTkLabel(self, textvariable=self._dims_val, anchor="w", justify="left")
        self._info_format = ctk.CTkLabel(self, textvariable=self._format_val, anchor="w", justify="left")

        self._info_path.grid(row=4, column=0, padx=8, pady=(0, 2), sticky="ew")
        self._info_size.grid(row=5, column=0, padx=8, pady=(0, 2), sticky="ew")
        self._info_dims.grid(row=6, column=0, padx=8, pady=(0, 2), sticky="ew")
        self._info_format.grid(row=7, column=0, padx=8, pady=(0, 10), sticky="ew")

        # Assets gallery
        self._assets_title = ctk.CTkLabel(self, text="Ассеты", font=ctk.CTkFont(size=16, weight="bold"))
        self._assets_title.grid(row=8, column=0, padx=8, pady=(8, 4), sticky="w")

        self._assets_frame = ctk.CTkScrollableFrame(self, height=240)
        self._assets_frame.grid(row=9, column=0, padx=8, pady=(0, 8), sticky="nsew")
        self._assets_frame.grid_columnconfigure(0, weight=1)
        self.grid_rowconfigure(9, weight=1)

        self._empty_label = ctk.CTkLabel(self._assets_frame, text="Пока ничего не сгенерировано")
        self._empty_label.grid(row=0, column=0, padx=6, pady=6, sticky="w")

        self._zip_btn = ctk.CTkButton(self, text="Сохранить ZIP…", command=self._emit_save_archive, state="disabled")
        self._zip_btn.grid(row=10, column=0, padx=8, pady=(0, 4), sticky="ew")
        self._reset_btn = ctk.CTkButton(
            self, text="Новая загрузка", command=self._emit_reset, state="disabled", fg_color="transparent", border_width=1
        )
        self._reset_btn.grid(row=11, column=0, padx=8, pady=(0, 10), sticky="ew")

        # Cursor section
        self._cursor_title = ctk.CTkLabel(self, text="Курсор", font=ctk.CTkFont(size=16, weight="bold"))
        self._cursor_title.grid(row=12, column=0, padx=8, pady=(8, 4), sticky="w")

        self._cursor_xy_val = ctk.StringVar(value="—")
        self._cursor_rgba_val = ctk.StringVar(value="—")
        self._cursor_hex_val = ctk.StringVar(value="—")

        self._cursor_xy = ctk.CTkLabel(self, textvariable=self._cursor_xy_val, anchor="w", justify="left")
        self._cursor_rgba = ctk.CTkLabel(self, textvariable=self._cursor_rgba_val, anchor="w", justify="left")
        self._cursor_hex = ctk.CTkLabel(self, textvariable=self._cursor_hex_val, anchor="w", justify="left")

        self._cursor_xy.grid(row=13, column=0, padx=8, pady=(0, 2), sticky="ew")
        self._cursor_rgba.grid(row=14, column=0, padx=8, pady=(0, 2), sticky="ew")
        self._cursor_hex.grid(row=15, column=0, padx=8, pady=(0, 8), sticky="ew")

    # ---- Public API ----
    def set_source_info(self, source: Optional[SourceImage]) -> None:
        """Отображает метаданные загруженного файла (None сбрасывает блок)."""
        if source is None:
            for var in (self._path_val, self._size_val, self._dims_val, self._format_val):
                var.set("—")
            return
        self._path_val.set(str(source.path))
        self._size_val.set(self._format_size(source.size_bytes))
        self._dims_val.set(f"{source.width} × {source.height} px")
        self._format_val.set(source.format)

    def set_assets(self, assets: Sequence[GeneratedAsset]) -> None:
        """Перестраивает галерею: одна строка на ассет в порядке генерации."""
        for row in self._asset_rows:
            row.destroy()
        self._asset_rows = []

        if not assets:
            self._empty_label.grid(row=0, column=0, padx=6, pady=6, sticky="w")
        else:
            self._empty_label.grid_remove()

        for index, asset in enumerate(assets):
            row = ctk.CTkFrame(self._assets_frame)
            row.grid(row=index + 1, column=0, padx=2, pady=2, sticky="ew")
            row.grid_columnconfigure(0, weight=1)

            title = f"{asset.name}  ·  {asset.dimensions_label}  ·  {asset.mime_type.label}"
            select_btn = ctk.CTkButton(
                row, text=title, anchor="w", fg_color="transparent", text_color=("gray10", "gray90"),
                command=lambda i=index: self._emit_select_asset(i),
            )
            select_btn.grid(row=0, column=0, padx=(2, 4), pady=2, sticky="ew")
            save_btn = ctk.CTkButton(row, text="⬇", width=32, command=lambda i=index: self._emit_save_asset(i))
            save_btn.grid(row=0, column=1, padx=(0, 2), pady=2)
            self._asset_rows.append(row)

        state = "normal" if assets else "disabled"
        self._zip_btn.configure(state=state)
        self._reset_btn.configure(state=state)

    def set_busy(self, busy: bool) -> None:
        """Блокирует открытие нового файла, пока идёт обработка."""
        self._open_btn.configure(state="disabled" if busy else "normal", text="Обработка…" if busy else "Открыть изображение…")

    def update_cursor_info(self, x: Optional[int], y: Optional[int], rgba: Optional[Tuple[int, int, int, int]]) -> None:
        """Обновляет информацию по курсору (координаты, RGBA, HEX)."""
        if x is None or y is None or rgba is None:
            self._cursor_xy_val.set("—")
            self._cursor_rgba_val.set("—")
            self._cursor_hex_val.set("—")
            return
        self._cursor_xy_val.set(f"({x}, {y})")
        r, g, b, a = rgba
        self._cursor_rgba_val.set(f"RGBA: {r}, {g}, {b}, {a}")
        self._cursor_hex_val.set(f"HEX: {_rgba_to_hex(rgba)}")

    # ---- Events ----
    def _emit_open_file(self) -> None:
        if self.on_open_file:
            self.on_open_file()

    def _emit_select_asset(self, index: int) -> None:
        if self.on_select_asset:
            self.on_select_asset(index)

    def _emit_save_asset(self, index: int) -> None:
        if self.on_save_asset:
            self.on_save_asset(index)

    def _emit_save_archive(self) -> None:
        if self.on_save_archive:
            self.on_save_archive()

    def _emit_reset(self) -> None:
        if self.on_reset:
            self.on_reset()

    # ---- Helpers ----
    def _format_size(self, size_bytes: Optional[int]) -> str:
        if size_bytes is None:
            return "—"
        thresholds = [("Б", 1024), ("КБ", 1024**2), ("МБ", 1024**3), ("ГБ", 1024**4)]
        for label, limit in thresholds:
            if size_bytes < limit:
                if label == "Б":
                    return f"{size_bytes} {label}"
                value = size_bytes / (limit // 1024)
                return f"{value:.1f} {label}"
        value = size_bytes / (1024**4)
        return f"{value:.1f} ГБ"

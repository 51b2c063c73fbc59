"""Контроллер приложения: оркестрация UI и сервисов.

SOLID:
- SRP: класс управляет связями между UI и сервисами (без логики обработки изображений).
- DIP: зависит от сервисов как от ролей; конкретные реализации инкапсулированы.
Clean Code:
- Обработчики компактны; тяжёлая логика вынесена в сервисы.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from tkinter import filedialog, messagebox, TclError
from typing import List, Optional, Tuple

import customtkinter as ctk

from icongen.config import Config
from icongen.errors import IconGenError
from icongen.models.asset_model import GeneratedAsset
from icongen.models.image_model import SourceImage
from icongen.services import archive_service
from icongen.services.asset_pipeline import AssetPipeline
from icongen.services.image_service import ImageService
from icongen.ui.bottom_bar import BottomBar
from icongen.ui.image_viewer import ImageViewer
from icongen.ui.sidebar import Sidebar

logger = logging.getLogger(__name__)


@dataclass
class AppController:
    """Связывает элементы UI с прикладной логикой.

    Ответственности:
    - Бинд событий (UI -> контроллер).
    - Загрузка файла через `ImageService` и генерация через `AssetPipeline`.
    - Экспорт отдельных ассетов и zip-архива.
    - Запрет новой загрузки, пока обрабатывается текущая.
    """
    viewer: ImageViewer
    sidebar: Sidebar
    bottom: BottomBar
    window: ctk.CTk

    _image_service: ImageService = field(default_factory=ImageService)
    _pipeline: Optional[AssetPipeline] = None
    _source: Optional[SourceImage] = None
    _assets: List[GeneratedAsset] = field(default_factory=list)
    _is_processing: bool = False

    def __post_init__(self) -> None:
        if self._pipeline is None:
            self._pipeline = AssetPipeline(image_service=self._image_service, workers=Config.WORKERS)

    def bind_events(self) -> None:
        """Регистрирует обработчики событий между UI-компонентами."""
        self.sidebar.on_open_file = self._handle_open_file
        self.sidebar.on_select_asset = self._handle_select_asset
        self.sidebar.on_save_asset = self._handle_save_asset
        self.sidebar.on_save_archive = self._handle_save_archive
        self.sidebar.on_reset = self._handle_reset

        self.viewer.on_cursor_move = self._handle_cursor_move
        self.viewer.on_zoom_change = self._handle_viewer_zoom_changed

        self.bottom.on_zoom_change = self._handle_zoom_change
        self.bottom.on_zoom_preset = self._handle_zoom_change
        self.bottom.on_zoom_fit = self._handle_zoom_fit

    # ---- Handlers ----
    def _handle_open_file(self) -> None:
        if self._is_processing:
            return
        try:
            file_path = filedialog.askopenfilename(
                title="Выберите изображение",
                filetypes=(
                    ("Images", "*.png *.jpg *.jpeg *.tga *.PNG *.JPG *.JPEG *.TGA"),
                    ("All files", "*.*"),
                ),
            )
        except TclError:
            # Silent fail if dialog cannot open
            return

        if not file_path:
            return
        self._process_file(file_path)

    def _process_file(self, file_path: str) -> None:
        self._set_busy(True)
        try:
            source = self._image_service.load_image(file_path)
            assets = self._pipeline.generate(source.raster)
        except (IconGenError, OSError) as exc:
            logger.error(f"Failed to process {file_path}: {exc}")
            self.bottom.set_status(f"Ошибка: {exc}")
            messagebox.showerror("Ошибка обработки", str(exc) or "Не удалось обработать изображение.")
            return
        finally:
            self._set_busy(False)

        self._source = source
        self._assets = assets
        self.sidebar.set_source_info(source)
        self.sidebar.set_assets(assets)
        self.bottom.set_status(f"Готово: {len(assets)} ассетов из {Path(file_path).name}")
        if assets:
            self._handle_select_asset(0)

    def _handle_select_asset(self, index: int) -> None:
        if not 0 <= index < len(self._assets):
            return
        self.viewer.set_image(self._image_service.open_asset(self._assets[index]))
        self._handle_zoom_fit()

    def _handle_save_asset(self, index: int) -> None:
        if not 0 <= index < len(self._assets):
            return
        asset = self._assets[index]
        target = self._ask_save_path(asset.name, asset.mime_type.label, asset.mime_type.extension)
        if not target:
            return
        self._write(lambda: archive_service.write_asset(asset, target))

    def _handle_save_archive(self) -> None:
        if not self._assets:
            return
        target = self._ask_save_path(Config.ARCHIVE_NAME, "ZIP", ".zip")
        if not target:
            return
        self._write(lambda: archive_service.write_archive(self._assets, target))

    def _handle_reset(self) -> None:
        self._source = None
        self._assets = []
        self.viewer.set_image(None)
        self.sidebar.set_source_info(None)
        self.sidebar.set_assets([])
        self.sidebar.update_cursor_info(None, None, None)
        self.bottom.set_status("Загрузите изображение (PNG, JPG, TGA)")

    def _handle_cursor_move(self, x: Optional[int], y: Optional[int], rgba: Optional[Tuple[int, int, int, int]]) -> None:
        self.sidebar.update_cursor_info(x, y, rgba)

    def _handle_viewer_zoom_changed(self, zoom_percent: int) -> None:
        self.bottom.set_zoom_percent(zoom_percent)

    def _handle_zoom_change(self, zoom_percent: int) -> None:
        self.viewer.set_zoom_percent(zoom_percent)

    def _handle_zoom_fit(self) -> None:
        self.viewer.set_zoom_to_fit()
        self.bottom.set_zoom_percent(self.viewer.get_zoom_percent())

    # ---- Helpers ----
    def _set_busy(self, busy: bool) -> None:
        self._is_processing = busy
        self.sidebar.set_busy(busy)
        if busy:
            self.bottom.set_status("Обработка изображения…")
        # перерисовать до долгой операции
        self.window.update_idletasks()

    def _ask_save_path(self, initial_name: str, label: str, extension: str) -> str:
        try:
            return filedialog.asksaveasfilename(
                title="Сохранить как",
                initialfile=initial_name,
                defaultextension=extension,
                filetypes=((label, f"*{extension}"), ("All files", "*.*")),
            )
        except TclError:
            return ""

    def _write(self, action) -> None:
        try:
            path = action()
        except OSError as exc:
            logger.error(f"Save failed: {exc}")
            messagebox.showerror("Ошибка сохранения", str(exc))
            return
        self.bottom.set_status(f"Сохранено: {path}")

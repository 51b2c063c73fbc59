"""Упаковка ассетов в zip-архив и запись на диск."""
from __future__ import annotations

import io
import logging
import zipfile
from pathlib import Path
from typing import Iterable

from icongen.models.asset_model import GeneratedAsset

logger = logging.getLogger(__name__)


def build_archive(assets: Iterable[GeneratedAsset]) -> bytes:
    """Каждый ассет кладётся в архив без изменений под своим именем, в исходном порядке."""
    buffer = io.BytesIO()
    with zipfile.ZipFile(buffer, "w", zipfile.ZIP_DEFLATED) as zf:
        for asset in assets:
            zf.writestr(asset.name, asset.data)
    return buffer.getvalue()


def write_archive(assets: Iterable[GeneratedAsset], path: str | Path) -> Path:
    target = Path(path)
    items = list(assets)
    target.write_bytes(build_archive(items))
    logger.info(f"Archive with {len(items)} assets written to {target}")
    return target


def write_asset(asset: GeneratedAsset, path: str | Path) -> Path:
    target = Path(path)
    target.write_bytes(asset.data)
    logger.info(f"Asset {asset.name} ({len(asset.data)} bytes) written to {target}")
    return target

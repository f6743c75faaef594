"""Loading of mod image assets, with optional TOML metadata and variants."""

from __future__ import annotations

import logging
import tomllib
from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from PIL import Image, UnidentifiedImageError

log = logging.getLogger(__name__)

_BPP = 4


class AssetError(Exception):
    """Raised when an asset cannot be found, read or parsed."""


@dataclass
class ImageAsset:
    """RGBA pixels of one or more frames stacked vertically."""

    width: int
    frame_height: int
    frame_count: int
    repeat_from: int
    data: bytearray

    def _row_width(self) -> int:
        return self.width * _BPP

    def pixel(self, x: int, y: int) -> bytes:
        start = y * self._row_width() + x * _BPP
        return bytes(self.data[start:start + _BPP])


def apply_hflip(asset: ImageAsset) -> None:
    """Mirror every row left to right."""
    row_width = asset._row_width()
    for y in range(asset.frame_height * asset.frame_count):
        start = y * row_width
        row = asset.data[start:start + row_width]
        pixels = [row[i:i + _BPP] for i in range(0, row_width, _BPP)]
        asset.data[start:start + row_width] = b"".join(reversed(pixels))


def apply_vflip(asset: ImageAsset) -> None:
    """Mirror each frame top to bottom."""
    row_width = asset._row_width()
    frame_size = row_width * asset.frame_height
    for frame in range(asset.frame_count):
        base = frame * frame_size
        rows = [
            asset.data[base + y * row_width:base + (y + 1) * row_width]
            for y in range(asset.frame_height)
        ]
        asset.data[base:base + frame_size] = b"".join(reversed(rows))


def apply_transpose(asset: ImageAsset) -> None:
    """Swap rows and columns of each frame; frames must be square."""
    if asset.width != asset.frame_height:
        log.warning("Can't transpose non-square frames")
        return

    n = asset.width
    row_width = asset._row_width()
    frame_size = row_width * n
    for frame in range(asset.frame_count):
        base = frame * frame_size
        old = bytes(asset.data[base:base + frame_size])
        asset.data[base:base + frame_size] = b"".join(
            old[x * row_width + y * _BPP:x * row_width + (y + 1) * _BPP]
            for y in range(n)
            for x in range(n)
        )


_OPERATIONS = {
    "hflip": (apply_hflip,),
    "vflip": (apply_vflip,),
    "transpose": (apply_transpose,),
    "rotate90": (apply_transpose, apply_vflip),
    "rotate180": (apply_hflip, apply_vflip),
    "rotate270": (apply_transpose, apply_hflip),
}


def make_variant(
    asset: ImageAsset, config: Mapping[str, Any] | None, name: str
) -> None:
    """Apply the operations listed for variant `name` in the asset's config."""
    if config is None:
        log.warning("Variant '%s' requested but there's no TOML file", name)
        return

    variants = config.get("variants")
    if not isinstance(variants, Mapping):
        log.warning("Variant '%s' but there's no variants in the TOML", name)
        return

    ops = variants.get(name)
    if not isinstance(ops, list):
        log.warning("Variant '%s' requested but there's no such variant in the TOML", name)
        return

    for op in ops:
        if not isinstance(op, str):
            log.warning("Operation for variant '%s' is not a string", name)
            continue
        funcs = _OPERATIONS.get(op)
        if funcs is None:
            log.warning("Unknown operation '%s' for variant '%s'", op, name)
            continue
        for func in funcs:
            func(asset)


def _load_rgba(path: Path, shown: Path) -> tuple[int, int, bytearray]:
    try:
        with Image.open(path) as img:
            rgba = img.convert("RGBA")
            return rgba.width, rgba.height, bytearray(rgba.tobytes())
    except (OSError, UnidentifiedImageError) as exc:
        raise AssetError(f"Loading image {shown} failed") from exc


def load_image_asset(
    mod_paths: Mapping[str, str], path: str, base_path: str | Path = "."
) -> ImageAsset:
    """Load an image named "mod::path" or "mod::path::variant"."""
    mod_part, sep, path_part = path.partition("::")
    if not sep:
        raise AssetError("No '::' mod separator")

    path_part, sep, variant = path_part.partition("::")
    variant_part = variant if sep else None

    mod_path = mod_paths.get(mod_part)
    if mod_path is None:
        raise AssetError(f"No mod named '{mod_part}'")

    asset_path = Path(base_path) / mod_path / "assets" / path_part
    png_path = asset_path.with_name(asset_path.name + ".png")
    toml_path = asset_path.with_name(asset_path.name + ".toml")

    shown = png_path
    if variant_part is not None:
        variant_png = asset_path / f"{variant_part}.png"
        if variant_png.exists():
            shown = variant_png
    width, height, data = _load_rgba(png_path, shown)

    config: dict[str, Any] | None = None
    try:
        with open(toml_path, "rb") as f:
            config = tomllib.load(f)
    except FileNotFoundError:
        config = None
    except tomllib.TOMLDecodeError as exc:
        raise AssetError(f"Failed to parse toml file {toml_path}: {exc}") from exc
    except OSError as exc:
        raise AssetError(f"Couldn't open {toml_path}: {exc.strerror}") from exc

    frame_height = height
    repeat_from = 0
    if config is not None:
        if isinstance(config.get("height"), int):
            frame_height = config["height"]
        if isinstance(config.get("repeatFrom"), int):
            repeat_from = config["repeatFrom"]
    if frame_height <= 0:
        raise AssetError(f"Invalid frame height {frame_height} in {toml_path}")

    asset = ImageAsset(
        width=width,
        frame_height=frame_height,
        frame_count=height // frame_height,
        repeat_from=repeat_from,
        data=data,
    )

    if variant_part is not None:
        make_variant(asset, config, variant_part)

    return asset
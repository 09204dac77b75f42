"""
Example: single-image adjustment usage.

Demonstrates how to use imgmod for:
- A one-shot resize + color adjustment with adjust_image
- The fluent Pipeline builder
- Presets and JSON parameter files
- An EditSession with progress reporting and JPEG export

Writes its outputs into ./imgmod_example_output.
"""

import logging
from pathlib import Path

import numpy as np

from imgmod import (
    AdjustmentValues,
    Bitmap,
    EditSession,
    Pipeline,
    TargetSize,
    adjust_image,
    get_preset,
    load_values_json,
    save_bitmap,
    save_values_json,
)

# Configure logging to see render statistics
logging.basicConfig(level=logging.INFO, format="%(levelname)s: %(message)s")

OUTPUT_DIR = Path("imgmod_example_output")


def generate_sample_bitmap(width: int = 640, height: int = 400) -> Bitmap:
    """Generate a colorful gradient with a translucent corner."""
    ys, xs = np.mgrid[0:height, 0:width]
    rgb = np.stack(
        [
            255 * xs / (width - 1),
            255 * ys / (height - 1),
            127 + 128 * np.sin(xs / 40.0) * np.cos(ys / 30.0),
        ],
        axis=-1,
    )
    bitmap = Bitmap.from_array(np.clip(rgb, 0, 255).astype(np.uint8))
    bitmap.pixels[: height // 4, : width // 4, 3] = 96
    return bitmap


def example_1_pure_function(source: Bitmap):
    """Example 1: adjust_image with explicit size and values."""
    print("\n" + "=" * 70)
    print("EXAMPLE 1: adjust_image")
    print("=" * 70)

    values = AdjustmentValues(brightness=115, contrast=120, saturation=80)
    result = adjust_image(source, TargetSize(320, 200), values)

    print(f"Source: {source}")
    print(f"Result: {result}")
    save_bitmap(result, OUTPUT_DIR / "example1.jpg", values.quality)


def example_2_pipeline(source: Bitmap):
    """Example 2: the same edit through the fluent builder."""
    print("\n" + "=" * 70)
    print("EXAMPLE 2: Pipeline")
    print("=" * 70)

    pipe = Pipeline().brightness(115).contrast(120).saturation(80).resize(320, 200)
    result = pipe(source)

    print(f"Values: {pipe.current_values}")
    print(f"Same as example 1: {result == adjust_image(source, TargetSize(320, 200), pipe.current_values)}")


def example_3_presets(source: Bitmap):
    """Example 3: presets, composition and JSON files."""
    print("\n" + "=" * 70)
    print("EXAMPLE 3: Presets")
    print("=" * 70)

    look = get_preset("vivid") + get_preset("web")
    print(f"vivid + web = {look}")

    path = OUTPUT_DIR / "look.json"
    save_values_json(look, path)
    loaded = load_values_json(path)
    print(f"Reloaded from {path}: {loaded == look}")

    for name in ("grayscale", "faded", "punchy"):
        values = get_preset(name)
        save_bitmap(adjust_image(source, values=values), OUTPUT_DIR / f"{name}.jpg", values.quality)
        print(f"  wrote {name}.jpg")


def example_4_session(source: Bitmap):
    """Example 4: interactive session with explicit apply and export."""
    print("\n" + "=" * 70)
    print("EXAMPLE 4: EditSession")
    print("=" * 70)

    session = EditSession(source)
    session.set_values(brightness=90, saturation=150, quality=75)
    session.set_size(480, 300)
    print(f"Stale before apply: {session.is_stale()}")

    def on_progress(value: float) -> None:
        print(f"  progress {value:5.1%}")

    session.apply(on_progress)
    print(f"Stale after apply: {session.is_stale()}")

    export = session.export()
    path = export.save(OUTPUT_DIR)
    print(f"Exported {export.width}x{export.height} at quality {export.quality}: {path}")


if __name__ == "__main__":
    OUTPUT_DIR.mkdir(exist_ok=True)
    sample = generate_sample_bitmap()

    example_1_pure_function(sample)
    example_2_pipeline(sample)
    example_3_presets(sample)
    example_4_session(sample)

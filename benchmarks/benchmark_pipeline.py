"""Benchmark the adjustment pipeline.

Measures, for several image sizes:
- Neutral values (copy only)
- Color adjustment at native size (Numba kernel)
- Bilinear and nearest resampling
- Full resize + adjust
- PyTorch backend, when torch is installed
"""

import time

import numpy as np

from imgmod import AdjustmentValues, Bitmap, TargetSize, adjust_image
from imgmod.color import apply_adjustments, apply_adjustments_reference
from imgmod.resample import resample


def create_test_bitmap(width: int, height: int) -> Bitmap:
    """Create a random RGBA bitmap for benchmarking."""
    rng = np.random.default_rng(42)
    return Bitmap(
        width=width,
        height=height,
        pixels=rng.integers(0, 256, size=(height, width, 4), dtype=np.uint8),
    )


def time_call(fn, n_iterations: int) -> float:
    """Mean milliseconds per call after a warmup."""
    for _ in range(3):
        fn()
    start = time.perf_counter()
    for _ in range(n_iterations):
        fn()
    return (time.perf_counter() - start) / n_iterations * 1000


def report(label: str, ms: float, n_pixels: int) -> None:
    throughput = n_pixels / (ms / 1000) / 1e6
    print(f"  {label:<28} {ms:8.3f} ms  {throughput:8.1f} MPix/s")


def benchmark_cpu(width: int, height: int, n_iterations: int = 20):
    """Benchmark the Numba pipeline."""
    print(f"\n{'='*60}")
    print(f"CPU Pipeline Benchmark ({width}x{height})")
    print(f"{'='*60}")

    bitmap = create_test_bitmap(width, height)
    n_pixels = width * height
    values = AdjustmentValues(brightness=110, contrast=120, saturation=80)
    half = TargetSize(width // 2, height // 2)
    double = TargetSize(width * 2, height * 2)

    report("neutral", time_call(lambda: apply_adjustments(bitmap, AdjustmentValues()), n_iterations), n_pixels)
    report("color (numba)", time_call(lambda: apply_adjustments(bitmap, values), n_iterations), n_pixels)
    report(
        "color (numpy reference)",
        time_call(lambda: apply_adjustments_reference(bitmap, values), max(1, n_iterations // 4)),
        n_pixels,
    )
    report("bilinear 0.5x", time_call(lambda: resample(bitmap, half), n_iterations), half.width * half.height)
    report(
        "bilinear 2x",
        time_call(lambda: resample(bitmap, double), n_iterations),
        double.width * double.height,
    )
    report(
        "nearest 2x",
        time_call(lambda: resample(bitmap, double, "nearest"), n_iterations),
        double.width * double.height,
    )
    report(
        "resize 0.5x + adjust",
        time_call(lambda: adjust_image(bitmap, half, values), n_iterations),
        half.width * half.height,
    )


def benchmark_torch(width: int, height: int, n_iterations: int = 20):
    """Benchmark the PyTorch backend."""
    import torch

    from imgmod.torch import adjust_image_torch, default_device

    device = default_device()
    print(f"\n{'='*60}")
    print(f"Torch Pipeline Benchmark ({width}x{height}, {device})")
    print(f"{'='*60}")

    bitmap = create_test_bitmap(width, height)
    values = AdjustmentValues(brightness=110, contrast=120, saturation=80)
    half = TargetSize(width // 2, height // 2)

    def run():
        adjust_image_torch(bitmap, half, values, device=device)
        if device.type == "cuda":
            torch.cuda.synchronize()

    report("resize 0.5x + adjust", time_call(run, n_iterations), half.width * half.height)


if __name__ == "__main__":
    sizes = [(640, 480), (1920, 1080), (4000, 3000)]
    for w, h in sizes:
        benchmark_cpu(w, h)

    try:
        import torch  # noqa: F401
    except ImportError:
        print("\nPyTorch not installed, skipping torch benchmarks")
    else:
        for w, h in sizes:
            benchmark_torch(w, h)

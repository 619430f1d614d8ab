"""
pqcompress Benchmark Script

This script measures the performance of every compression method, both
called directly and offloaded from asyncio to the default executor.

It measures:
- Throughput (MB/sec) for deflating column chunks.
- Throughput (MB/sec) for inflating column chunks.
- Final compressed size and compression ratio.

Usage:
    poetry run python scripts/bench.py [-n NUM_CHUNKS] [-s CHUNK_SIZE]

Example:
    poetry run python scripts/bench.py --num-chunks 200 --chunk-size 262144
"""

import argparse
import asyncio
import random
import string
import time
from typing import Any, Dict, List

# --- pqcompress Imports ---
from pqcompress import Method, deflate, inflate

# --- Helper Functions ---


def generate_sample_chunks(num_chunks: int, chunk_size: int) -> List[bytes]:
    """
    Generates a list of semi-realistic, compressible column chunks.
    Instead of purely random data, it repeats a smaller chunk of random
    values to simulate the runs found in real column data.
    """
    print(
        f"Generating {num_chunks:,} sample chunks (each {chunk_size:,} bytes)..."
    )
    samples = []

    # Create a repeatable run to make data compressible
    run_size = 256 if chunk_size > 1024 else max(chunk_size // 4, 1)
    for _ in range(num_chunks):
        base_run = "".join(
            random.choices(string.ascii_letters + string.digits, k=run_size)
        ).encode()
        repeats = (chunk_size // run_size) + 1
        samples.append((base_run * repeats)[:chunk_size])

    print("Sample chunks generated.\n")
    return samples


def format_size(size_bytes: int) -> str:
    """Formats bytes into a human-readable string (KB, MB)."""
    if size_bytes > 1024 * 1024:
        return f"{size_bytes / (1024*1024):.2f} MB"
    return f"{size_bytes / 1024:.2f} KB"


def _summarize(
    data: List[bytes],
    compressed: List[bytes],
    deflate_duration: float,
    inflate_duration: float,
) -> Dict[str, Any]:
    raw_size = sum(len(c) for c in data)
    compressed_size = sum(len(c) for c in compressed)
    megabytes = raw_size / (1024 * 1024)
    return {
        "deflate_throughput": megabytes / deflate_duration,
        "inflate_throughput": megabytes / inflate_duration,
        "compressed_size_bytes": compressed_size,
        "compression_ratio_pct": (
            (1 - (compressed_size / raw_size)) * 100 if raw_size > 0 else None
        ),
    }


# --- Benchmark Runners ---


def run_sync_benchmark(method: Method, data: List[bytes]) -> Dict[str, Any]:
    """Runs a benchmark calling deflate/inflate on the current thread."""
    deflate_start_time = time.perf_counter()
    compressed = [deflate(method, chunk) for chunk in data]
    deflate_end_time = time.perf_counter()

    inflate_start_time = time.perf_counter()
    for chunk in compressed:
        inflate(method, chunk)
    inflate_end_time = time.perf_counter()

    return _summarize(
        data,
        compressed,
        deflate_end_time - deflate_start_time,
        inflate_end_time - inflate_start_time,
    )


async def run_async_benchmark(
    method: Method, data: List[bytes]
) -> Dict[str, Any]:
    """Runs a benchmark offloading every call to the default executor."""
    loop = asyncio.get_running_loop()

    deflate_start_time = time.perf_counter()
    compressed = await asyncio.gather(
        *(loop.run_in_executor(None, deflate, method, chunk) for chunk in data)
    )
    deflate_end_time = time.perf_counter()

    inflate_start_time = time.perf_counter()
    await asyncio.gather(
        *(loop.run_in_executor(None, inflate, method, chunk) for chunk in compressed)
    )
    inflate_end_time = time.perf_counter()

    return _summarize(
        data,
        list(compressed),
        deflate_end_time - deflate_start_time,
        inflate_end_time - inflate_start_time,
    )


# --- Main Execution ---


def main(num_chunks: int, chunk_size: int):
    """Main function to run all benchmarks and print results."""
    print("--- pqcompress Benchmark Suite ---")
    print(f"Chunks per test: {num_chunks:,}")
    print(f"Chunk size: {chunk_size:,} bytes")

    sample_data = generate_sample_chunks(num_chunks, chunk_size)
    results = []

    # --- Run All Benchmarks ---
    for method in Method:
        results.append(("sync", str(method), run_sync_benchmark(method, sample_data)))
        results.append(
            (
                "executor",
                str(method),
                asyncio.run(run_async_benchmark(method, sample_data)),
            )
        )

    # --- Print Results Table ---
    print("\n--- Benchmark Results ---\n")
    header = (
        f"{'Mode':<10} | {'Method':<14} | {'Deflate':>14} | "
        f"{'Inflate':>14} | {'Compressed Size':>18} | {'Ratio':>8}"
    )
    print(header)
    print("-" * len(header))

    for mode, method_name, result in results:
        deflate_t = f"{result['deflate_throughput']:,.1f} MB/s"
        inflate_t = f"{result['inflate_throughput']:,.1f} MB/s"
        size = format_size(result["compressed_size_bytes"])
        ratio = (
            f"{result['compression_ratio_pct']:.2f}%"
            if result["compression_ratio_pct"] is not None
            else "N/A"
        )

        print(
            f"{mode:<10} | {method_name:<14} | {deflate_t:>14} | "
            f"{inflate_t:>14} | {size:>18} | {ratio:>8}"
        )


if __name__ == "__main__":
    parser = argparse.ArgumentParser(
        description="Run benchmark suite for the pqcompress codecs.",
        formatter_class=argparse.ArgumentDefaultsHelpFormatter,
    )
    parser.add_argument(
        "-n",
        "--num-chunks",
        type=int,
        default=100,
        help="Number of column chunks to process in each benchmark run.",
    )
    parser.add_argument(
        "-s",
        "--chunk-size",
        type=int,
        default=256 * 1024,
        help="Size of each column chunk, in bytes.",
    )
    args = parser.parse_args()

    try:
        import uvloop
    except ImportError:
        pass
    else:
        uvloop.install()  # Use uvloop for better performance with asyncio

    main(num_chunks=args.num_chunks, chunk_size=args.chunk_size)

#!/usr/bin/env python3
"""Benchmark concurrent full replaces against one resume.

Fires PUT /v1/resumes/{id} from several threads at once, then checks that
the version history is gapless (1..current_version, no duplicates).

Usage:
    export API_URL=http://localhost:8000
    uv run python scripts/bench_replace.py [--writers 8] [--rounds 25]
"""
from __future__ import annotations

import argparse
import os
import statistics
import sys
import time
from concurrent.futures import ThreadPoolExecutor

import httpx


def replace_once(client: httpx.Client, api_url: str, resume_id: str, writer: int, i: int):
    payload = {
        "data": {
            "meta": {"code": "BENCH"},
            "basics": {"name": {"full": "Bench Writer"}},
            "skills": [f"writer-{writer}", f"round-{i}"],
        }
    }
    t0 = time.perf_counter()
    r = client.put(f"{api_url}/v1/resumes/{resume_id}", json=payload)
    return r.status_code, time.perf_counter() - t0


def main() -> int:
    parser = argparse.ArgumentParser(description="Benchmark concurrent resume replaces")
    parser.add_argument("--writers", type=int, default=8, help="Concurrent writers")
    parser.add_argument("--rounds", type=int, default=25, help="Replaces per writer")
    parser.add_argument("--output", type=str, default="/results/bench_replace.txt", help="Output file path")
    args = parser.parse_args()

    api_url = os.environ.get("API_URL", "http://localhost:8000").rstrip("/")

    with httpx.Client(timeout=60.0) as client:
        r = client.post(
            f"{api_url}/v1/resumes",
            json={"data": {"meta": {"code": "BENCH"}, "basics": {"name": {"full": "Bench Writer"}}}},
        )
        r.raise_for_status()
        resume_id = r.json()["id"]

    latencies: list[float] = []
    conflicts = 0
    errors = 0

    print(f"Replacing with {args.writers} writers x {args.rounds} rounds...")
    start_total = time.perf_counter()
    with httpx.Client(timeout=120.0) as client, ThreadPoolExecutor(args.writers) as pool:
        futures = [
            pool.submit(replace_once, client, api_url, resume_id, w, i)
            for i in range(args.rounds)
            for w in range(args.writers)
        ]
        for f in futures:
            status, elapsed = f.result()
            if status == 200:
                latencies.append(elapsed)
            elif status == 409:
                conflicts += 1
            else:
                errors += 1
    total_elapsed = time.perf_counter() - start_total

    with httpx.Client(timeout=60.0) as client:
        current = client.get(f"{api_url}/v1/resumes/{resume_id}").json()["current_version"]
        items = client.get(f"{api_url}/v1/resumes/{resume_id}/versions").json()["items"]
    numbers = sorted(v["version_number"] for v in items)
    gapless = numbers == list(range(1, current + 1))

    n = len(latencies)
    if n == 0:
        print("No successful replaces.")
        return 1

    p50 = statistics.median(latencies) * 1000
    p95 = sorted(latencies)[int(n * 0.95) - 1] * 1000 if n >= 20 else p50

    summary = (
        f"Replace benchmark (n={n}, conflicts={conflicts}, errors={errors})\n"
        f"  Throughput: {n / total_elapsed:.2f} replaces/s\n"
        f"  Latency: p50={p50:.1f} ms, p95={p95:.1f} ms\n"
        f"  Versions: current=v{current}, gapless={gapless}\n"
        f"  Total time: {total_elapsed:.2f} s\n"
    )
    print(summary)

    try:
        os.makedirs(os.path.dirname(args.output) or ".", exist_ok=True)
        with open(args.output, "w", encoding="utf-8") as f:
            f.write(summary)
        print(f"Wrote {args.output}")
    except OSError:
        pass

    return 0 if gapless else 2


if __name__ == "__main__":
    sys.exit(main())

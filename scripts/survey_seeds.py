import argparse
import csv
import multiprocessing as mp
import os
import sys
import time
from concurrent.futures import ProcessPoolExecutor, as_completed
from pathlib import Path

import numpy as np
import yaml

ROOT = Path(__file__).resolve().parents[1]
SRC = ROOT / "src"
if str(SRC) not in sys.path:
    sys.path.insert(0, str(SRC))

from neurogrid.algebra import ToggleMatrix  # noqa: E402
from neurogrid.config import PuzzleConfig  # noqa: E402
from neurogrid.generator import generate  # noqa: E402
from neurogrid.planner import plan  # noqa: E402
from neurogrid.simulator import Simulator  # noqa: E402
from neurogrid.strategies import PlanFollowing  # noqa: E402

FIELDS = [
    "rows",
    "cols",
    "seed",
    "initial_on",
    "solvable",
    "plan_length",
    "presses_used",
    "solved",
    "time_ms",
]


def make_batches(seeds, batch_size, rows, cols, cutoff):
    """Create job batches for parallel processing."""
    for lo in range(0, len(seeds), batch_size):
        yield {
            "rows": rows,
            "cols": cols,
            "cutoff": cutoff,
            "seeds": seeds[lo : lo + batch_size],
        }


def _run_batch(job):
    """Generate and autoplay one batch of seeds."""
    topology = ToggleMatrix(job["rows"], job["cols"])
    simulator = Simulator(topology)
    rows = []
    for seed in job["seeds"]:
        board = generate(seed, topology.rows, topology.cols, cutoff=job["cutoff"])

        start_time = time.perf_counter()
        solution = topology.solve(board)
        steps = [] if solution is None else plan(np.flatnonzero(solution), topology.rows, topology.cols)
        policy = PlanFollowing()
        policy.reset(topology)
        final, actions, _ = simulator.run(board, policy, T=topology.N)
        time_ms = (time.perf_counter() - start_time) * 1000

        rows.append(
            {
                "rows": topology.rows,
                "cols": topology.cols,
                "seed": seed,
                "initial_on": board.count_on(),
                "solvable": int(solution is not None),
                "plan_length": len(steps),
                "presses_used": len(actions),
                "solved": int(final.count_on() == 0),
                "time_ms": time_ms,
            }
        )
    return rows


def run_pool(jobs, writer, workers, total_jobs):
    """Run jobs in parallel and write results as they complete."""
    ctx = mp.get_context("spawn")
    done = 0
    total_rows = 0
    failures = 0
    start_time = time.time()

    with ProcessPoolExecutor(max_workers=workers, mp_context=ctx) as ex:
        futures = [ex.submit(_run_batch, j) for j in jobs]
        for fut in as_completed(futures):
            rows = fut.result()
            writer.writerows(rows)
            done += 1
            total_rows += len(rows)
            failures += sum(1 for r in rows if not r["solved"])

            elapsed = time.time() - start_time
            pct = done / max(total_jobs, 1)
            print(
                f"\r[progress] {done}/{total_jobs} batches ({pct:>6.1%}) | "
                f"{total_rows:>7,} seeds | unsolved: {failures} | "
                f"elapsed: {int(elapsed // 60)}m {int(elapsed % 60)}s",
                end="",
                flush=True,
            )
    print()
    return failures


def main():
    n_cpus = os.cpu_count() or 1
    default_workers = max(n_cpus - 1, 1)

    ap = argparse.ArgumentParser()
    ap.add_argument("--config", default=str(ROOT / "configs" / "default.yaml"))
    ap.add_argument("--out", default=None, help="Output CSV path")
    ap.add_argument("--workers", type=int, default=default_workers, help="Number of workers")
    ap.add_argument("--batch-size", type=int, default=500, help="Seeds per batch")
    args = ap.parse_args()

    with open(args.config, "r", encoding="utf-8") as f:
        raw = yaml.safe_load(f)

    cfg = PuzzleConfig.from_dict(raw.get("puzzle"))
    survey = raw.get("survey") or {}
    seed_start = float(survey.get("seed_start", 0))
    n_seeds = int(survey.get("n_seeds", 1000))
    seed_step = float(survey.get("seed_step", 1.0))
    out_dir = Path(survey.get("output_dir", "results/surveys"))
    out_dir.mkdir(parents=True, exist_ok=True)
    out_csv = args.out or str(out_dir / f"survey_{cfg.rows}x{cfg.cols}.csv")

    seeds = [seed_start + k * seed_step for k in range(n_seeds)]
    total_jobs = (n_seeds + args.batch_size - 1) // args.batch_size
    jobs = make_batches(seeds, args.batch_size, cfg.rows, cfg.cols, cfg.cutoff)

    print(
        f"[info] {cfg.rows}x{cfg.cols} grid, {n_seeds} seeds, "
        f"{total_jobs} batches, {args.workers} workers -> {out_csv}"
    )
    with open(out_csv, "w", newline="", encoding="utf-8") as f:
        writer = csv.DictWriter(f, fieldnames=FIELDS)
        writer.writeheader()
        failures = run_pool(jobs, writer, args.workers, total_jobs)

    if failures:
        print(f"[warn] {failures} generated boards were not cleared by autoplay")
        sys.exit(1)


if __name__ == "__main__":
    mp.freeze_support()
    main()

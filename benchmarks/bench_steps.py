"""
Microbenchmark: time per step vs number of live probes and field sources.
Run:
  python benchmarks/bench_steps.py
"""
import time
import numpy as np
from graviton.session import Session
from graviton.fields import GravityWell, GaussStabilizer, UniformPatch, Vortex
from graviton.probe import ProbeConfig
from graviton.profiler import Profiler
from graviton.types import ProbeType

def run(n: int, steps: int = 300, n_fields: int = 8):
    prof = Profiler()
    # long timeout so probes stay alive for the whole run
    session = Session(
        spawn=(0.0, -8.0),
        probe_config=ProbeConfig(stationary_timeout=1e9),
        profiler=prof,
    )

    rng = np.random.default_rng(12345)  # determinism (no randomness elsewhere)
    kinds = [
        lambda p: GravityWell(position=p, S=float(rng.uniform(-8, 12))),
        lambda p: GaussStabilizer(position=p),
        lambda p: UniformPatch(position=p, E=(0.0, 1.0), R=3.0),
        lambda p: Vortex(position=p, omega=2.0, R=2.0),
    ]
    for i in range(n_fields):
        p = tuple(rng.uniform(-6, 6, size=2))
        session.add_field(kinds[i % len(kinds)](p))

    types = list(ProbeType)
    for i in range(n):
        origin = tuple(rng.uniform(-5, 5, size=2))
        v0 = tuple(rng.uniform(-3, 3, size=2))
        session.spawn_probe(origin, v0, types[i % len(types)])

    session.craft.set_thrust(True)

    # warmup
    for _ in range(30):
        session.step()

    t0 = time.perf_counter()
    for _ in range(steps):
        session.step()
    t1 = time.perf_counter()

    total = t1 - t0
    per_step = total / steps
    return per_step, prof.stats.summary()

if __name__ == "__main__":
    for n in [1, 10, 50, 100, 250]:
        per_step, summary = run(n)
        print(f"N={n:4d}  step={1e3*per_step:8.3f} ms  steps/s={1/per_step:8.1f}")
        for k in ["probes", "craft", "goal"]:
            if k in summary:
                print(" ", k, summary[k])
        print()

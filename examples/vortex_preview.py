# examples/vortex_preview.py
import numpy as np

from graviton import FieldRegistry, Vortex, GaussStabilizer, TrajectoryPredictor, PredictorConfig
from graviton.core import sample_field_grid, peak_acceleration

registry = FieldRegistry()
registry.register(Vortex(position=(0.0, 0.0), omega=2.5, R=3.0))
registry.register(GaussStabilizer(position=(3.0, 1.0)))

predictor = TrajectoryPredictor(registry, PredictorConfig(max_points=200, fade_after=3.0))
for speed in (2.0, 4.0, 8.0):
    path = predictor.draw((-4.0, 0.0), (speed, 0.0))
    print(f"v0={speed:4.1f}  points={len(path):3d}  end=({path[-1][0]:6.2f}, {path[-1][1]:6.2f})")

xs = np.linspace(-5, 5, 21)
grid = sample_field_grid(registry, xs, xs, velocity=(4.0, 0.0))
print("peak |a| on grid (v=(4,0)):", peak_acceleration(grid))

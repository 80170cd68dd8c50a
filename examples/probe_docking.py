# examples/probe_docking.py
"""
Aim a probe with a slingshot drag, check the preview, fire it into a dock
and watch the spawned repulsor push the craft off course.
"""
from graviton import Session, Dock, ProbeType
from graviton.aiming import drag_to_velocity
from graviton.events import ProbeDocked, GoalReached
from graviton.bounds import Bounds, GoalRegion
from graviton.renderer import DebugRenderer

session = Session(
    spawn=(0.0, -4.0),
    bounds=Bounds.from_camera((0.0, 0.0), half_height=6.0, aspect=16 / 9),
    goal=GoalRegion((2.0, 4.0), 0.75),
    par=2,
)
session.add_dock(Dock(position=(-1.0, 0.0), accepted={ProbeType.REPULSOR}))

cannon = (-4.0, -4.0)
v0 = drag_to_velocity(origin=(100, 100), current=(-30, 230))
path = session.preview(cannon, v0)
print(f"preview: {len(path)} points, ends at {path[-1]}")

session.spawn_probe(cannon, v0, ProbeType.REPULSOR)
while session.probes:
    session.step()
for ev in session.drain_events():
    print(ev)

session.predictor.clear()
session.craft.fire_burst()
renderer = DebugRenderer(verbose=False)
done = False
for i in range(150):
    session.step()
    if i % 25 == 0:
        renderer.render_session(session)
    for ev in session.drain_events():
        print(f"t={session.time:.2f}", ev)
        done = done or isinstance(ev, GoalReached)
    if done:
        break

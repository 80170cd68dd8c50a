# examples/minimal_flight.py
from graviton import Session, GravityWell, UniformPatch
from graviton.events import FirstLaunch, CraftLost

session = Session(spawn=(0.0, -4.0))
session.add_field(GravityWell(position=(2.5, 0.0), S=12.0))
session.add_field(UniformPatch(position=(0.0, 0.0), E=(0.0, 1.5), R=4.0))

craft = session.craft
craft.set_steering_input(-10.0)   # tilt right (steering is inverted)
craft.set_thrust(True)

t_end = 2.0
while session.time < t_end:
    session.step()
    for ev in session.drain_events():
        if isinstance(ev, (FirstLaunch, CraftLost)):
            print(f"t={session.time:.2f}", ev)
    if craft.fuel < 0.5:
        craft.set_thrust(False)

print("t:", session.time)
print("pos:", craft.position)
print("vel:", craft.velocity)
print("heading:", craft.heading, "fuel:", craft.fuel)

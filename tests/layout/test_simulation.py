"""Tests for the force simulation."""

import math

import pytest

from cmfgraph.layout import (
    Body,
    CenterForce,
    CollideForce,
    ForceSimulation,
    LinkForce,
    ManyBodyForce,
)


def _distance(a: Body, b: Body) -> float:
    return math.hypot(a.x - b.x, a.y - b.y)


class TestInitialState:
    def test_bodies_start_spread_out(self):
        sim = ForceSimulation(5)
        points = {(round(b.x, 6), round(b.y, 6)) for b in sim.bodies}
        assert len(points) == 5

    def test_deterministic(self):
        a = ForceSimulation(4)
        b = ForceSimulation(4)
        assert [(p.x, p.y) for p in a.bodies] == [(p.x, p.y) for p in b.bodies]

    def test_default_decay_cools_in_300_ticks(self):
        sim = ForceSimulation(1)
        assert sim.alpha_decay == pytest.approx(1 - 0.001 ** (1 / 300))
        assert sim.velocity_decay == 0.4


class TestCooling:
    def test_alpha_decays(self):
        sim = ForceSimulation(2)
        sim.tick()
        assert sim.alpha < 1.0

    def test_stops_below_alpha_min(self):
        sim = ForceSimulation(2)
        ticks = 0
        while sim.step():
            ticks += 1
            assert ticks < 1000
        assert not sim.running
        assert 290 <= ticks <= 310

    def test_step_after_stop_is_noop(self):
        sim = ForceSimulation(2)
        sim.stop()
        assert not sim.step()

    def test_restart(self):
        sim = ForceSimulation(2)
        sim.stop()
        sim.restart()
        assert sim.step()

    def test_alpha_target_keeps_it_warm(self):
        sim = ForceSimulation(2)
        sim.alpha_target = 0.3
        for _ in range(1000):
            assert sim.step()
        assert sim.alpha == pytest.approx(0.3, abs=1e-3)

    def test_tick_listeners_on_step_only(self):
        sim = ForceSimulation(2)
        calls = []
        sim.on_tick(lambda: calls.append(1))
        sim.tick(3)
        assert calls == []
        sim.step()
        assert calls == [1]


class TestForces:
    def test_register_and_get(self):
        sim = ForceSimulation(2)
        charge = ManyBodyForce()
        assert sim.force("charge", charge) is charge
        assert sim.force("charge") is charge
        assert sim.force("missing") is None

    def test_link_pulls_towards_rest_length(self):
        sim = ForceSimulation(2)
        sim.bodies[0].x, sim.bodies[0].y = 0.0, 0.0
        sim.bodies[1].x, sim.bodies[1].y = 400.0, 0.0
        sim.force("link", LinkForce([(0, 1)], distance=100))
        for _ in range(300):
            sim.step()
        assert _distance(*sim.bodies) == pytest.approx(100, rel=0.05)

    def test_charge_repels(self):
        sim = ForceSimulation(2)
        before = _distance(*sim.bodies)
        sim.force("charge", ManyBodyForce(strength=-300))
        sim.tick(10)
        assert _distance(*sim.bodies) > before

    def test_center_moves_centroid(self):
        sim = ForceSimulation(3)
        sim.force("center", CenterForce(480, 300))
        sim.tick()
        cx = sum(b.x for b in sim.bodies) / 3
        cy = sum(b.y for b in sim.bodies) / 3
        assert cx == pytest.approx(480)
        assert cy == pytest.approx(300)

    def test_collide_separates_overlap(self):
        sim = ForceSimulation(2)
        sim.bodies[0].x, sim.bodies[0].y = 0.0, 0.0
        sim.bodies[1].x, sim.bodies[1].y = 5.0, 0.0
        sim.force("collision", CollideForce(30))
        sim.tick(50)
        assert _distance(*sim.bodies) > 30

    def test_coincident_bodies_get_jiggled(self):
        sim = ForceSimulation(2)
        for body in sim.bodies:
            body.x, body.y = 0.0, 0.0
        sim.force("charge", ManyBodyForce(strength=-30))
        sim.tick(5)
        assert _distance(*sim.bodies) > 0

    def test_empty_simulation(self):
        sim = ForceSimulation(0)
        sim.force("center", CenterForce(1, 1))
        sim.force("link", LinkForce([]))
        assert sim.step()


class TestPinning:
    def test_pinned_body_holds_position(self):
        sim = ForceSimulation(3)
        sim.force("charge", ManyBodyForce(strength=-300))
        body = sim.bodies[0]
        body.fx, body.fy = 42.0, -7.0
        sim.tick(20)
        assert (body.x, body.y) == (42.0, -7.0)
        assert (body.vx, body.vy) == (0.0, 0.0)
        assert body.pinned

    def test_unpinned_body_moves(self):
        sim = ForceSimulation(3)
        sim.force("charge", ManyBodyForce(strength=-300))
        body = sim.bodies[1]
        start = (body.x, body.y)
        sim.tick(5)
        assert (body.x, body.y) != start
        assert not body.pinned

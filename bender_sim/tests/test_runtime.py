import unittest

from bender_sim import (
    BenderGameLibrary,
    CellType,
    Direction,
    Position,
    SimulationConfig,
    SimulationRuntime,
    solve,
)

SIMPLE = [
    "#####",
    "#@  #",
    "#   #",
    "#  $#",
    "#####",
]

OBSTACLES = [
    "########",
    "# @    #",
    "#     X#",
    "# XXX  #",
    "#   XX #",
    "#   XX #",
    "#     $#",
    "########",
]

PATH_MODIFIERS = [
    "##########",
    "#        #",
    "#  S   W #",
    "#        #",
    "#  $     #",
    "#        #",
    "#@       #",
    "#        #",
    "#E     N #",
    "##########",
]

BREAKER_MODE = [
    "##########",
    "#        #",
    "#  @     #",
    "#  B     #",
    "#  S   W #",
    "# XXX    #",
    "#  B   N #",
    "# XXXXXXX#",
    "#       $#",
    "##########",
]

INVERTER_TELEPORT_LOOP = [
    "###############",
    "#      IXXXXX #",
    "#  @          #",
    "#E S          #",
    "#             #",
    "#  I          #",
    "#  B          #",
    "#  B   S     W#",
    "#  B   T      #",
    "#             #",
    "#         T   #",
    "#         B   #",
    "#N          W$#",
    "#        XXXX #",
    "###############",
]

TELEPORT_LOOP = [
    "######",
    "#@T  #",
    "######",
    "#  T #",
    "######",
]

CORRIDOR_LOOP = [
    "#####",
    "#@  #",
    "#####",
]


def lines(text):
    return "".join(f"{label}\n" for label in text.split())


class ReferenceMazeTests(unittest.TestCase):
    def setUp(self):
        self.lib = BenderGameLibrary()

    def test_simple_moves(self):
        world = self.lib.create_world(SIMPLE, height=5, width=5)
        self.assertEqual(solve(world), lines("SOUTH SOUTH EAST EAST"))

    def test_obstacles(self):
        world = self.lib.create_world(OBSTACLES, height=8, width=8)
        self.assertEqual(
            solve(world),
            lines("SOUTH EAST EAST EAST SOUTH EAST SOUTH SOUTH SOUTH"),
        )

    def test_path_modifiers(self):
        world = self.lib.create_world(PATH_MODIFIERS)
        expected = (
            "SOUTH SOUTH EAST EAST EAST EAST EAST EAST "
            "NORTH NORTH NORTH NORTH NORTH NORTH "
            "WEST WEST WEST WEST SOUTH SOUTH"
        )
        self.assertEqual(solve(world), lines(expected))

    def test_breaker_mode(self):
        world = self.lib.create_world(BREAKER_MODE)
        expected = (
            "SOUTH SOUTH SOUTH SOUTH EAST EAST EAST EAST NORTH NORTH "
            "WEST WEST WEST WEST SOUTH SOUTH SOUTH SOUTH "
            "EAST EAST EAST EAST EAST"
        )
        runtime, summary = self.lib.run_simulation(world)
        self.assertEqual(runtime.output(), lines(expected))
        self.assertTrue(summary.terminated)
        self.assertEqual(summary.obstacles_destroyed, 2)

    def test_inverter_teleport_loop(self):
        world = self.lib.create_world(INVERTER_TELEPORT_LOOP, height=15, width=15)
        self.assertEqual(solve(world), "LOOP\n")


class RuntimeTests(unittest.TestCase):
    def setUp(self):
        self.lib = BenderGameLibrary()

    def test_simulation_generates_events(self):
        world = self.lib.create_world(SIMPLE)
        runtime, summary = self.lib.run_simulation(world)

        self.assertEqual(summary.steps_executed, 4)
        self.assertEqual(len(runtime.events), 4)
        self.assertEqual(runtime.events[0].direction, Direction.SOUTH)
        self.assertEqual(runtime.events[-1].position, (3, 3))
        self.assertEqual(runtime.events[-1].note, "suicide")
        self.assertFalse(summary.looped)

    def test_events_can_be_disabled(self):
        world = self.lib.create_world(SIMPLE)
        runtime, summary = self.lib.run_simulation(world, SimulationConfig(record_events=False))
        self.assertEqual(runtime.events, [])
        self.assertEqual(summary.steps_executed, 4)

    def test_loop_after_exactly_max_steps(self):
        world = self.lib.create_world(CORRIDOR_LOOP)
        runtime, summary = self.lib.run_simulation(world)

        self.assertTrue(summary.looped)
        self.assertFalse(summary.terminated)
        self.assertEqual(summary.steps_executed, 10000)
        self.assertEqual(len(runtime.directions), 10000)
        self.assertEqual(runtime.output(), "LOOP\n")

    def test_custom_step_bound(self):
        world = self.lib.create_world(CORRIDOR_LOOP)
        _, summary = self.lib.run_simulation(world, SimulationConfig(max_steps=7))
        self.assertTrue(summary.looped)
        self.assertEqual(summary.steps_executed, 7)

    def test_exit_reached_on_last_allowed_step(self):
        world = self.lib.create_world(SIMPLE)
        _, summary = self.lib.run_simulation(world, SimulationConfig(max_steps=4))
        self.assertFalse(summary.looped)
        self.assertEqual(summary.directions, [Direction.SOUTH, Direction.SOUTH, Direction.EAST, Direction.EAST])

    def test_exit_beyond_bound_is_a_loop(self):
        world = self.lib.create_world(SIMPLE)
        self.assertEqual(solve(world, SimulationConfig(max_steps=3)), "LOOP\n")

    def test_step_after_termination_is_rejected(self):
        runtime = SimulationRuntime(world=self.lib.create_world(SIMPLE))
        runtime.run()
        self.assertTrue(runtime.terminated)
        with self.assertRaises(RuntimeError):
            runtime.step()
        self.assertEqual(runtime.steps, 4)
        self.assertEqual(len(runtime.directions), 4)
        self.assertEqual(len(runtime.events), 4)

    def test_rejects_non_positive_bound(self):
        world = self.lib.create_world(SIMPLE)
        with self.assertRaises(ValueError):
            SimulationRuntime(world=world, config=SimulationConfig(max_steps=0))

    def test_runs_are_deterministic(self):
        for rows in (OBSTACLES, BREAKER_MODE, INVERTER_TELEPORT_LOOP):
            world = self.lib.create_world(rows)
            _, first = self.lib.run_simulation(world)
            _, second = self.lib.run_simulation(world)
            self.assertEqual(first.directions, second.directions)
            self.assertEqual(first.trace_hash, second.trace_hash)
            self.assertEqual(solve(world), solve(world))

    def test_caller_grid_is_not_mutated(self):
        world = self.lib.create_world(BREAKER_MODE)
        before = world.render()
        runtime, summary = self.lib.run_simulation(world)

        self.assertEqual(world.render(), before)
        self.assertGreater(summary.obstacles_destroyed, 0)
        self.assertNotEqual(runtime.world.render(), before)

    def test_destroyed_obstacle_stays_empty_for_a_sober_agent(self):
        rows = [
            "#####",
            "#@  #",
            "#B  #",
            "#X  #",
            "#$  #",
            "#####",
        ]
        world = self.lib.create_world(rows)
        runtime, _ = self.lib.run_simulation(world)
        self.assertEqual(runtime.world.cell(Position(3, 1)), CellType.EMPTY)

        # same maze after the run, with the beer gone
        replay = runtime.world.copy()
        replay.set_cell(Position(2, 1), CellType.EMPTY)
        self.assertEqual(solve(replay), lines("SOUTH SOUTH SOUTH"))
        self.assertEqual(solve(world), lines("SOUTH SOUTH SOUTH"))

    def test_teleports_are_counted(self):
        world = self.lib.create_world(TELEPORT_LOOP)
        runtime, summary = self.lib.run_simulation(world, SimulationConfig(max_steps=5))
        self.assertEqual(summary.teleports, 3)
        self.assertEqual([e.note for e in runtime.events], ["teleport", "", "teleport", "", "teleport"])


if __name__ == "__main__":
    unittest.main()

from __future__ import annotations

import random

import numpy as np
import pytest

from blocks_world import TABLE, BlocksWorld, WorldConfig, create


def _snapshot(world: BlocksWorld) -> list:
    ids = range(-1, world.num_blocks + 2)
    return [
        (m, world.is_on_table(m), world.is_open(m), world.is_on(m), [world.is_above(m, n) for n in ids])
        for m in ids
    ]


def test_create_all_on_table_and_open() -> None:
    world = create(5)
    assert len(world) == 5
    for m in range(1, 6):
        assert world.is_on_table(m)
        assert world.is_open(m)
        assert world.is_on(m) == TABLE
    assert world.towers() == [[1], [2], [3], [4], [5]]


def test_world_config_and_int_construction_agree() -> None:
    assert BlocksWorld(WorldConfig(num_blocks=4)) == BlocksWorld(4)
    assert BlocksWorld().num_blocks == 12


@pytest.mark.parametrize("m", [-1, 0, 4, 100])
def test_out_of_range_queries(m: int) -> None:
    world = create(3)
    assert not world.is_on_table(m)
    assert world.is_open(m) == (m == 0)
    assert world.is_on(m) == m
    assert not world.is_above(m, 0)


def test_table_is_always_open() -> None:
    world = BlocksWorld.from_towers([[1, 2, 3]])
    assert world.is_open(0)


def test_non_positive_size_has_no_blocks() -> None:
    world = create(0)
    assert list(world.blocks) == []
    assert not world.is_on_table(1)
    assert world.is_open(0)
    assert not world.move(1, 0)
    assert world.towers() == []


def test_tower_scenario() -> None:
    world = create(3)
    assert world.move(2, 1)
    assert world.move(3, 2)
    assert world.is_above(3, 1)
    assert world.is_above(3, 2)
    assert not world.is_above(1, 3)
    assert world.is_on_table(1)
    assert not world.is_on_table(2)
    assert world.towers() == [[1, 2, 3]]
    assert world.height_of(3) == 2


def test_covered_block_cannot_move() -> None:
    world = create(3)
    world.move(2, 1)
    assert world.is_on(2) == 1
    assert world.is_above(2, 1)
    assert not world.is_above(1, 2)
    assert not world.move(1, 2)
    assert world.is_on(1) == 0


def test_cannot_stack_on_covered_block() -> None:
    world = create(3)
    world.move(2, 1)
    before = _snapshot(world)
    assert not world.move(3, 1)
    assert _snapshot(world) == before


def test_is_above_table_follows_traversal() -> None:
    world = BlocksWorld.from_towers([[1, 2]])
    # The walk stops at the table without ever comparing against it
    assert not world.is_above(2, TABLE)
    assert not world.is_above(1, TABLE)


def test_successful_move_updates_both_sides() -> None:
    world = BlocksWorld.from_towers([[1, 2]], num_blocks=3)
    assert world.move(2, 3)
    assert world.is_on(2) == 3
    assert not world.is_open(3)
    assert world.is_open(1)
    assert world.above[1] == 0
    assert world.above[3] == 2
    assert world.move(2, TABLE)
    assert world.is_on_table(2)
    assert world.is_open(3)


def test_self_move_is_rejected() -> None:
    world = create(2)
    before = _snapshot(world)
    assert not world.move(1, 1)
    assert _snapshot(world) == before
    assert world.is_consistent()


@pytest.mark.parametrize("m,n", [(0, 1), (4, 1), (1, 4), (1, -1)])
def test_out_of_range_move_is_rejected(m: int, n: int) -> None:
    world = create(3)
    before = _snapshot(world)
    assert not world.move(m, n)
    assert _snapshot(world) == before


def test_random_moves_keep_invariants() -> None:
    rng = random.Random(7)
    world = create(8)
    for _ in range(2000):
        m = rng.randint(-1, 9)
        n = rng.randint(-1, 9)
        before = _snapshot(world)
        applied = world.move(m, n)
        assert world.is_consistent()
        if applied:
            assert world.is_on(m) == n
            if n != TABLE:
                assert not world.is_open(n)
        else:
            assert _snapshot(world) == before
        for a in world.blocks:
            k = int(world.above[a])
            if k:
                assert world.below[k] == a
        # every block reaches the table within N steps
        for a in world.blocks:
            assert world.height_of(a) < world.num_blocks


def test_is_above_matches_below_chain() -> None:
    world = BlocksWorld.from_towers([[3, 1, 5], [2, 4]], num_blocks=6)
    for m in world.blocks:
        chain = []
        cur = world.is_on(m)
        while cur != TABLE:
            chain.append(cur)
            cur = world.is_on(cur)
        for n in range(0, 7):
            assert world.is_above(m, n) == (n in chain)


def test_valid_moves_are_accepted() -> None:
    world = BlocksWorld.from_towers([[1, 2], [3]], num_blocks=4)
    moves = world.valid_moves()
    assert (1, 0) not in moves
    assert (3, 3) not in moves
    assert (2, 3) in moves
    assert (3, 2) in moves
    for m, n in moves:
        assert world.copy().move(m, n)


def test_copy_is_independent() -> None:
    world = BlocksWorld.from_towers([[1, 2]])
    clone = world.copy()
    clone.move(2, 0)
    assert world.is_on(2) == 1
    assert clone != world


def test_reset_and_below_state() -> None:
    world = BlocksWorld.from_towers([[1, 2, 3]])
    np.testing.assert_array_equal(world.below_state(), [0, 1, 2])
    world.reset()
    np.testing.assert_array_equal(world.below_state(), [0, 0, 0])
    assert world.is_consistent()


def test_from_towers_rejects_duplicate_blocks() -> None:
    with pytest.raises(ValueError):
        BlocksWorld.from_towers([[1, 2], [3, 2]])


def test_is_consistent_detects_corruption() -> None:
    world = BlocksWorld.from_towers([[1, 2]])
    world.above[1] = 0
    assert not world.is_consistent()
    loop = create(2)
    loop.below[1] = 2
    loop.below[2] = 1
    loop.above[1] = 2
    loop.above[2] = 1
    assert not loop.is_consistent()


def test_rejected_move_is_logged(caplog: pytest.LogCaptureFixture) -> None:
    world = create(2)
    with caplog.at_level("DEBUG", logger="blocks_world.world.core"):
        world.move(1, 1)
    assert "Rejected move of 1 onto 1" in caplog.text

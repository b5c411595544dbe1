"""Generator tests: shuffle mechanics, the parity rule, and the guarantees
every generated board must satisfy.
"""

from __future__ import annotations

import random
from collections import deque

import pytest

from backend.engine.gamegenerator import GameGenerator
from backend.models.board import Board, InvalidBoardSizeError
from conftest import ScriptedRandom

SEEDS = range(200)


# -- helpers ------------------------------------------------------------------


def _goal(size: int) -> list[int]:
    return list(range(1, size * size)) + [0]


def _reachable_from_goal(size: int) -> set[tuple[int, ...]]:
    """Every arrangement reachable from the goal by legal moves (BFS)."""
    start = tuple(_goal(size))
    seen = {start}
    queue = deque([start])
    while queue:
        state = queue.popleft()
        z = state.index(0)
        r, c = divmod(z, size)
        for dr, dc in ((-1, 0), (1, 0), (0, -1), (0, 1)):
            nr, nc = r + dr, c + dc
            if 0 <= nr < size and 0 <= nc < size:
                nxt = list(state)
                j = nr * size + nc
                nxt[z], nxt[j] = nxt[j], nxt[z]
                t = tuple(nxt)
                if t not in seen:
                    seen.add(t)
                    queue.append(t)
    return seen


def _random_walk(size: int, steps: int, rng: random.Random) -> list[int]:
    board = GameGenerator.solved(size)
    for _ in range(steps):
        br, bc = board.blank_pos
        options = [
            (br + dr, bc + dc)
            for dr, dc in ((-1, 0), (1, 0), (0, -1), (0, 1))
            if board.contains((br + dr, bc + dc))
        ]
        board.swap_with_blank(rng.choice(options))
    return board.flat()


# -- solved / validation ------------------------------------------------------


@pytest.mark.parametrize("size", [2, 3, 4])
def test_solved_board(size: int) -> None:
    board = GameGenerator.solved(size)
    assert board.flat() == _goal(size)
    assert board.blank_pos == (size - 1, size - 1)
    assert board.is_solved()


@pytest.mark.parametrize("size", [1, 0, -1])
def test_generate_rejects_small_sizes(size: int) -> None:
    with pytest.raises(InvalidBoardSizeError):
        GameGenerator.generate(size, random.Random(0))


def test_generate_rejects_size_before_drawing_randomness() -> None:
    rng = ScriptedRandom([])
    with pytest.raises(InvalidBoardSizeError):
        GameGenerator.generate(1, rng)
    assert rng.calls == []


# -- shuffle ------------------------------------------------------------------


def test_shuffle_walks_from_last_index_down() -> None:
    rng = ScriptedRandom([0, 0, 0])
    result = GameGenerator.shuffle([1, 2, 3, 0], rng)

    assert rng.calls == [(0, 3), (0, 2), (0, 1)]
    assert result == [2, 3, 0, 1]


def test_shuffle_identity_when_each_element_stays() -> None:
    rng = ScriptedRandom([3, 2, 1])
    assert GameGenerator.shuffle([1, 2, 3, 0], rng) == [1, 2, 3, 0]


def test_shuffle_does_not_mutate_input() -> None:
    flat = _goal(3)
    GameGenerator.shuffle(flat, random.Random(5))
    assert flat == _goal(3)


def test_shuffle_reaches_every_permutation_of_small_input() -> None:
    rng = random.Random(42)
    seen = {tuple(GameGenerator.shuffle([1, 2, 3, 0], rng)) for _ in range(2000)}
    assert len(seen) == 24


# -- inversions and parity ----------------------------------------------------


@pytest.mark.parametrize(
    ("flat", "expected"),
    [
        ([1, 2, 3, 4, 5, 6, 7, 8, 0], 0),
        ([2, 1, 3, 4, 5, 6, 7, 8, 0], 1),
        ([0, 8, 7, 6, 5, 4, 3, 2, 1], 28),
        ([1, 0, 3, 2], 1),
    ],
)
def test_count_inversions_ignores_blank(flat: list[int], expected: int) -> None:
    assert GameGenerator.count_inversions(flat) == expected


@pytest.mark.parametrize("size", [2, 3, 4, 5])
def test_goal_is_solvable(size: int) -> None:
    assert GameGenerator.is_solvable(_goal(size), size)


@pytest.mark.parametrize("size", [2, 3, 4, 5])
def test_swapping_two_tiles_of_goal_is_unsolvable(size: int) -> None:
    flat = _goal(size)
    flat[0], flat[1] = flat[1], flat[0]
    assert not GameGenerator.is_solvable(flat, size)


def test_even_size_counts_blank_row_from_bottom() -> None:
    # No inversions; blank on the top row of a 4×4 is row 4 from the bottom.
    flat = [0] + list(range(1, 16))
    assert GameGenerator.count_inversions(flat) == 0
    assert not GameGenerator.is_solvable(flat, 4)

    # Moving the blank down one row flips the verdict.
    flat = [1, 2, 3, 4, 0] + list(range(5, 16))
    assert GameGenerator.is_solvable(flat, 4)


def test_parity_rule_matches_reachability_on_2x2() -> None:
    reachable = _reachable_from_goal(2)
    assert len(reachable) == 12

    from itertools import permutations

    for perm in permutations(range(4)):
        assert GameGenerator.is_solvable(list(perm), 2) == (perm in reachable), perm


@pytest.mark.parametrize("size", [3, 4])
def test_random_walks_from_goal_stay_solvable(size: int) -> None:
    rng = random.Random(size)
    for _ in range(50):
        flat = _random_walk(size, rng.randint(1, 200), rng)
        assert GameGenerator.is_solvable(flat, size)


# -- parity correction --------------------------------------------------------


@pytest.mark.parametrize(
    ("size", "flat", "expected"),
    [
        (3, [2, 1, 3, 4, 5, 6, 7, 8, 0], [1, 2, 3, 4, 5, 6, 7, 8, 0]),
        (3, [0, 2, 1, 3, 4, 5, 6, 7, 8], [0, 1, 2, 3, 4, 5, 6, 7, 8]),
        (2, [2, 1, 3, 0], [1, 2, 3, 0]),
        (2, [3, 0, 1, 2], [1, 0, 3, 2]),
    ],
    ids=["3x3-leading-pair", "3x3-blank-first", "2x2", "2x2-skips-blank"],
)
def test_make_solvable_swaps_first_two_tiles(
    size: int, flat: list[int], expected: list[int]
) -> None:
    assert not GameGenerator.is_solvable(flat, size)
    fixed = GameGenerator.make_solvable(flat, size)

    assert fixed == expected
    assert GameGenerator.is_solvable(fixed, size)


def test_make_solvable_leaves_solvable_boards_alone() -> None:
    flat = [1, 2, 3, 4, 5, 6, 7, 0, 8]
    assert GameGenerator.make_solvable(flat, 3) == flat


def test_make_solvable_does_not_mutate_input() -> None:
    flat = [2, 1, 3, 4, 5, 6, 7, 8, 0]
    GameGenerator.make_solvable(flat, 3)
    assert flat == [2, 1, 3, 4, 5, 6, 7, 8, 0]


# -- generated boards ---------------------------------------------------------


@pytest.mark.parametrize("size", [2, 3, 4, 5, 6])
def test_generated_boards_are_permutations(size: int) -> None:
    for seed in SEEDS:
        board = GameGenerator.generate(size, random.Random(seed))
        assert sorted(board.flat()) == list(range(size * size))


@pytest.mark.parametrize("size", [2, 3, 4, 5, 6])
def test_generated_boards_are_solvable(size: int) -> None:
    for seed in SEEDS:
        board = GameGenerator.generate(size, random.Random(seed))
        assert GameGenerator.is_solvable(board.flat(), size), seed


@pytest.mark.parametrize("size", [2, 3, 4])
def test_generated_blank_position_matches_tiles(size: int) -> None:
    for seed in range(50):
        board = GameGenerator.generate(size, random.Random(seed))
        r, c = board.blank_pos
        assert board.tiles[r][c] == 0


def test_2x2_boards_are_reachable_and_cover_every_solvable_state() -> None:
    reachable = _reachable_from_goal(2)
    rng = random.Random(99)
    generated = {tuple(GameGenerator.generate(2, rng).flat()) for _ in range(500)}

    assert generated <= reachable
    assert generated == reachable


def test_same_seed_same_board() -> None:
    a = GameGenerator.generate(4, random.Random(2024))
    b = GameGenerator.generate(4, random.Random(2024))
    assert a == b


def test_generate_is_shuffle_then_correction() -> None:
    seed = 31
    expected = GameGenerator.make_solvable(
        GameGenerator.shuffle(_goal(3), random.Random(seed)), 3
    )
    board = GameGenerator.generate(3, random.Random(seed))
    assert board == Board.from_flat(3, expected)


def test_generate_without_rng_uses_fresh_source() -> None:
    board = GameGenerator.generate(3)
    assert sorted(board.flat()) == list(range(9))

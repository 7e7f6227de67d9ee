import random
from concurrent.futures import ThreadPoolExecutor

import pytest

from grid_maze_generator.config import Algorithm, GenerationConfig, make_rng
from grid_maze_generator.evaluator import is_perfect, reachable_from
from grid_maze_generator.generator import (
    CARVERS,
    DisjointSet,
    carve_custom,
    carve_kruskal,
    carve_prim,
    enumerate_edges,
    fisher_yates_shuffle,
    generate,
)
from grid_maze_generator.grid import InvalidDimension, WallGrid

TREE_ALGORITHMS = [Algorithm.PRIM, Algorithm.KRUSKAL]
SIZES = [(1, 1), (1, 7), (7, 1), (2, 2), (5, 5), (8, 3), (16, 16), (13, 9)]


@pytest.mark.parametrize("algorithm", TREE_ALGORITHMS)
@pytest.mark.parametrize("w,h", SIZES)
@pytest.mark.parametrize("seed", [1, 42, 2024])
def test_generates_spanning_tree(algorithm, w, h, seed):
    config = GenerationConfig(width=w, height=h, seed=seed, algorithm=algorithm)
    result = generate(config, make_rng(seed))
    assert result.grid.open_wall_count() == w * h - 1
    assert len(reachable_from(result.grid, (w - 1, h - 1))) == w * h
    assert is_perfect(result.grid)


@pytest.mark.parametrize("algorithm", TREE_ALGORITHMS)
def test_same_seed_same_maze(algorithm):
    config = GenerationConfig(width=12, height=9, seed=1234, algorithm=algorithm)
    a = generate(config, make_rng(config.seed))
    b = generate(config, make_rng(config.seed))
    assert a.grid == b.grid
    assert (a.start, a.goal) == (b.start, b.goal)


def test_different_seeds_differ():
    a = generate(GenerationConfig(width=16, height=16, seed=1), make_rng(1))
    b = generate(GenerationConfig(width=16, height=16, seed=2), make_rng(2))
    assert a.grid != b.grid


@pytest.mark.parametrize("algorithm", TREE_ALGORITHMS)
def test_seed_zero_still_perfect(algorithm):
    config = GenerationConfig(width=10, height=10, seed=0, algorithm=algorithm)
    for _ in range(3):
        assert is_perfect(generate(config, make_rng(0)).grid)


def test_algorithms_give_different_mazes_for_same_seed():
    base = GenerationConfig(width=16, height=16, seed=99)
    prim = generate(base, make_rng(99))
    kruskal = generate(base.with_changes(algorithm=Algorithm.KRUSKAL), make_rng(99))
    assert prim.grid != kruskal.grid


def test_single_cell_maze():
    for algorithm in Algorithm:
        result = generate(GenerationConfig(width=1, height=1, seed=5, algorithm=algorithm), make_rng(5))
        assert result.grid.open_wall_count() == 0
        assert result.start == (0, 0)
        assert result.goal == (0, 0)


@pytest.mark.parametrize("w,h", [(0, 4), (4, 0), (-3, 2)])
def test_invalid_dimension(w, h):
    with pytest.raises(InvalidDimension):
        generate(GenerationConfig(width=w, height=h, seed=1), make_rng(1))


def test_custom_opens_every_wall():
    result = generate(GenerationConfig(width=4, height=3, seed=3, algorithm=Algorithm.CUSTOM), make_rng(3))
    g = result.grid
    assert g.open_wall_count() == g.defined_wall_count() == 2 * 4 * 3 - 4 - 3
    assert not is_perfect(g)
    assert not Algorithm.CUSTOM.is_perfect


def test_custom_does_not_consume_rng():
    rng = random.Random(8)
    carve_custom(WallGrid.new(5, 5), rng)
    assert rng.random() == random.Random(8).random()


def test_dispatch_table_covers_all_algorithms():
    assert CARVERS == {
        Algorithm.PRIM: carve_prim,
        Algorithm.KRUSKAL: carve_kruskal,
        Algorithm.CUSTOM: carve_custom,
    }


def test_result_carries_config_and_placement():
    config = GenerationConfig(width=6, height=4, seed=7, goal_in_center=True)
    result = generate(config, make_rng(7))
    assert result.config is config
    assert result.start == (0, 0)
    assert result.goal == (2, 1)


@pytest.mark.parametrize("w,h", [(1, 1), (1, 5), (3, 3), (8, 5), (16, 16)])
def test_edge_list_size_and_uniqueness(w, h):
    edges = enumerate_edges(w, h)
    assert len(edges) == 2 * w * h - w - h
    keys = {frozenset(e) for e in edges}
    assert len(keys) == len(edges)
    for (x1, y1), (x2, y2) in edges:
        assert abs(x1 - x2) + abs(y1 - y2) == 1


def test_edge_list_order():
    assert enumerate_edges(2, 2) == [
        ((0, 0), (1, 0)),
        ((0, 0), (0, 1)),
        ((1, 0), (1, 1)),
        ((0, 1), (1, 1)),
    ]


def test_fisher_yates_index_scheme():
    items = list(range(20))
    fisher_yates_shuffle(items, random.Random(11))

    rng = random.Random(11)
    expected = list(range(20))
    for i in range(19, 0, -1):
        j = rng.randint(0, i)
        expected[i], expected[j] = expected[j], expected[i]
    assert items == expected
    assert sorted(items) == list(range(20))


def test_fisher_yates_short_sequences():
    for items in ([], [1]):
        copy = list(items)
        fisher_yates_shuffle(copy, random.Random(1))
        assert copy == items


def test_disjoint_set():
    ds = DisjointSet(6)
    assert ds.set_count == 6
    assert ds.union(0, 1)
    assert ds.union(2, 3)
    assert not ds.union(1, 0)
    assert ds.union(1, 3)
    assert ds.find(0) == ds.find(2)
    assert ds.find(4) != ds.find(0)
    assert ds.set_count == 3


def test_disjoint_set_path_compression():
    ds = DisjointSet(4)
    # build a chain by hand: 3 -> 2 -> 1 -> 0
    ds.parent = [0, 0, 1, 2]
    assert ds.find(3) == 0
    assert ds.parent == [0, 0, 0, 0]


def test_prim_start_cell_draws_x_then_y():
    class Recorder(random.Random):
        def __init__(self):
            super().__init__(0)
            self.calls = []

        def randrange(self, *args, **kwargs):
            self.calls.append(args)
            return super().randrange(*args, **kwargs)

    rng = Recorder()
    carve_prim(WallGrid.new(5, 3), rng)
    assert rng.calls[0] == (5,)
    assert rng.calls[1] == (3,)
    # one frontier pop per cell
    assert len(rng.calls) == 2 + 5 * 3


def test_concurrent_generation_is_independent():
    config = GenerationConfig(width=20, height=20, seed=77, algorithm=Algorithm.KRUSKAL)
    with ThreadPoolExecutor(max_workers=4) as pool:
        results = list(pool.map(lambda _: generate(config, make_rng(config.seed)), range(8)))
    for r in results[1:]:
        assert r.grid == results[0].grid

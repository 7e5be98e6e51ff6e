from skycore.noise import hash2d, hash_grid, pick, to_int32


def test_hash_is_pure() -> None:
    for x, y in [(0, 0), (3, 7), (119, 34), (-5, 12), (1000, 500)]:
        assert hash2d(x, y) == hash2d(x, y)


def test_hash_stays_in_unit_interval() -> None:
    for x in range(-20, 60):
        for y in range(0, 40):
            v = hash2d(x, y)
            assert 0.0 <= v <= 1.0


def test_neighbouring_coordinates_are_uncorrelated() -> None:
    values = [hash2d(i, 0) for i in range(200)]
    assert len(set(values)) > 150
    mean = sum(values) / len(values)
    assert 0.35 < mean < 0.65


def test_hash_grid_matches_scalar_hash() -> None:
    grid = hash_grid(12, 5, 3, 500)
    assert grid.shape == (5, 12)
    for r in range(5):
        for c in range(12):
            assert grid[r, c] == hash2d(c + 3, r + 500)


def test_int32_wrap() -> None:
    assert to_int32(2.0 ** 31) == -(2 ** 31)
    assert to_int32(2.0 ** 32 + 5) == 5
    assert to_int32(-1.5) == -1
    assert to_int32(123.9) == 123


def test_pick_clamps_top_of_range() -> None:
    table = ["a", "b", "c"]
    assert pick(table, 0.0) == "a"
    assert pick(table, 0.5) == "b"
    assert pick(table, 1.0) == "c"

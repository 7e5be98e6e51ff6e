import pytest

from skycore.colors import rgb_with_alpha
from skyscene.clouds import Cloud, generate_initial_clouds
from skyscene.compositor import (
    CLOUD_CHARS_BY_DENSITY,
    DEFAULT_PATH_COLOR,
    DEFAULT_PATH_BORDER,
    HILL_CHARS,
    PATH_BORDER_CHARS,
    PATH_CHARS,
    SKY_CHARS,
    SceneConfig,
    compute_scene,
)
from skyscene.scene_params import NIGHT_SKY_TOP, SEASON_PALETTES, Season
from skyscene.terrain import ground_row
from skyscene.world import GroundElement, PathConfig


def test_grid_has_requested_shape() -> None:
    grid = compute_scene(SceneConfig(cols=40, rows=12, clouds=generate_initial_clouds(40, 12, 3)))
    assert len(grid) == 12
    for row in grid:
        assert len(row) == 40
        for cell in row:
            assert len(cell.char) == 1
            assert cell.color


def test_scene_is_deterministic() -> None:
    clouds = generate_initial_clouds(60, 20, 5)
    a = compute_scene(SceneConfig(cols=60, rows=20, clouds=clouds, time=4.2))
    b = compute_scene(SceneConfig(cols=60, rows=20, clouds=clouds, time=4.2))
    assert a == b


@pytest.mark.parametrize("cols,rows", [(0, 10), (10, 0), (-3, 5), (3.5, 5)])
def test_bad_dimensions_are_rejected(cols, rows) -> None:
    with pytest.raises(ValueError):
        SceneConfig(cols=cols, rows=rows)


def test_single_row_scene() -> None:
    grid = compute_scene(SceneConfig(cols=5, rows=1, show_hills=False))
    assert len(grid) == 1
    top = SceneConfig(cols=1, rows=1).sky_color_top
    assert all(cell.color in (top, "#FFFFFF") for cell in grid[0])


def test_sky_only_scene_uses_gradient() -> None:
    config = SceneConfig(cols=30, rows=20, show_hills=False)
    grid = compute_scene(config)
    assert all(cell.color == config.sky_color_top for cell in grid[0] if cell.color != "#FFFFFF")
    assert all(cell.color == config.sky_color_bottom for cell in grid[-1])
    for row in grid[3:]:
        for cell in row:
            assert cell.char in SKY_CHARS


def test_stars_only_in_top_band() -> None:
    rows = 40
    for time in [0.0, 5.0, 13.0, 40.0]:
        grid = compute_scene(SceneConfig(cols=120, rows=rows, show_hills=False, time=time))
        for r, row in enumerate(grid):
            for cell in row:
                if cell.char == "✦" or cell.color == "#FFFFFF":
                    assert r < rows * 0.15


def test_cloud_covers_the_sky() -> None:
    cloud = Cloud(x=20, y=6, rx=10, ry=3, speed=2, density=0.9)
    grid = compute_scene(SceneConfig(cols=40, rows=20, clouds=[cloud], show_hills=False))
    center = grid[6][20]
    assert center.char == "█"
    assert center.color == rgb_with_alpha("#ffffff", 0.4 + 0.9 * 0.6)
    assert center.color == "rgba(255,255,255,0.94)"
    # thinner toward the rim
    edge = grid[6][28]
    assert edge.char in CLOUD_CHARS_BY_DENSITY[:3]
    assert edge.color.startswith("rgba(")


def test_hills_cover_low_clouds() -> None:
    cols, rows = 40, 20
    low = Cloud(x=20, y=rows - 1, rx=30, ry=8, speed=2, density=0.9)
    grid = compute_scene(SceneConfig(cols=cols, rows=rows, clouds=[low]))
    columns_with_hills = 0
    for c in range(cols):
        g = ground_row(c, cols, rows)
        if g >= rows:
            continue
        columns_with_hills += 1
        assert grid[g][c].char == "^"
        assert grid[g][c].color == "#4a9e3f"
        for r in range(g, rows):
            assert grid[r][c].char in HILL_CHARS
            assert not grid[r][c].color.startswith("rgba(")
    assert columns_with_hills > 0


def test_hidden_hills_leave_the_sky_alone() -> None:
    grid = compute_scene(SceneConfig(cols=40, rows=20, show_hills=False))
    for c in range(40):
        assert grid[19][c].char in SKY_CHARS


def test_path_is_drawn_over_hills() -> None:
    cols, rows = 40, 20
    grid = compute_scene(SceneConfig(cols=cols, rows=rows, path=PathConfig(amplitude=0)))
    center = 16  # round(20 * 0.78)
    for c in range(cols):
        assert grid[center][c].char in PATH_CHARS
        assert grid[center][c].color == DEFAULT_PATH_COLOR
        assert grid[center - 3][c].char in PATH_BORDER_CHARS
        assert grid[center + 3][c].color == DEFAULT_PATH_BORDER


def test_disabled_path_is_not_drawn() -> None:
    with_off = compute_scene(SceneConfig(cols=30, rows=15, path=PathConfig(enabled=False)))
    without = compute_scene(SceneConfig(cols=30, rows=15))
    assert with_off == without


def test_ground_elements_are_stamped_with_ids() -> None:
    rows = 20
    elements = [
        GroundElement(col=10, type="flower", growth=1.0, id="f1"),
        GroundElement(col=20, type="tree", growth=0.8, id="t1"),
        GroundElement(col=30, type="rock", growth=0.05, id="hidden"),
        GroundElement(col=35, type="unicorn", growth=1.0, id="unknown"),
    ]
    grid = compute_scene(SceneConfig(cols=40, rows=rows, show_hills=False, ground_elements=elements))

    flower = grid[rows - 3][10]
    assert (flower.char, flower.element_id) == ("✿", "f1")
    assert flower.color == SEASON_PALETTES[Season.SUMMER]["ground_accent"]

    # the tree is three rows tall and centered on its column
    assert [grid[r][20].char for r in range(rows - 5, rows - 2)] == ["♣", "♣", "|"]
    assert grid[rows - 5][19].element_id is None

    ids = {cell.element_id for row in grid for cell in row}
    assert ids == {None, "f1", "t1"}


def test_time_of_day_darkens_the_sky() -> None:
    grid = compute_scene(SceneConfig(cols=20, rows=10, show_hills=False, time_of_day=0.0))
    assert any(cell.color == NIGHT_SKY_TOP for cell in grid[0])
    day = compute_scene(SceneConfig(cols=20, rows=10, show_hills=False, time_of_day=0.5))
    assert any(cell.color == SceneConfig(cols=1, rows=1).sky_color_top for cell in day[0])


def test_season_is_coerced_from_string() -> None:
    assert SceneConfig(cols=10, rows=5, season="winter").season is Season.WINTER
    with pytest.raises(ValueError):
        SceneConfig(cols=10, rows=5, season="monsoon")


@pytest.mark.parametrize("season", list(Season))
def test_seasonal_scenes_render(season) -> None:
    palette = SEASON_PALETTES[season]
    grid = compute_scene(SceneConfig(
        cols=60,
        rows=20,
        clouds=generate_initial_clouds(60, 20, 4),
        hill_color=palette["hill_color"],
        hill_color_far=palette["hill_color_far"],
        season=season,
        time=3.0,
    ))
    assert len(grid) == 20
    assert all(len(row) == 60 for row in grid)

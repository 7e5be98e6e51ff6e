import json
import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

import yaml

from skycore.colors import parse_color
from skyscene.clouds import Cloud, generate_initial_clouds
from skyscene.compositor import SceneConfig
from skyscene.scene_params import Season, get_scene_params
from skyscene.world import (
    ELEMENT_SHAPES,
    GroundElement,
    PathConfig,
    generate_season_elements,
)

logger = logging.getLogger(__name__)

COLOR_KEYS = ("sky_color_top", "sky_color_bottom", "cloud_color", "hill_color", "hill_color_far")


@dataclass
class SceneSettings:
    """Scene settings that stay fixed while the sky animates"""
    cols: int
    rows: int
    cloud_count: int
    show_hills: bool
    sky_color_top: str
    sky_color_bottom: str
    cloud_color: str
    hill_color: str
    hill_color_far: str
    season: Optional[Season] = None
    path: Optional[PathConfig] = None
    ground_elements: List[GroundElement] = field(default_factory=list)
    time_of_day: Optional[float] = None

    def initial_clouds(self) -> List[Cloud]:
        return generate_initial_clouds(self.cols, self.rows, self.cloud_count)

    def scene_config(self, clouds: List[Cloud], time: float) -> SceneConfig:
        """The SceneConfig for one frame"""
        return SceneConfig(
            cols=self.cols,
            rows=self.rows,
            clouds=clouds,
            show_hills=self.show_hills,
            sky_color_top=self.sky_color_top,
            sky_color_bottom=self.sky_color_bottom,
            cloud_color=self.cloud_color,
            hill_color=self.hill_color,
            hill_color_far=self.hill_color_far,
            time=time,
            season=self.season,
            path=self.path,
            ground_elements=self.ground_elements or None,
            time_of_day=self.time_of_day,
        )


class SceneLoader:
    """Utilities for loading scene settings from files"""

    @staticmethod
    def from_json(file_path: str) -> SceneSettings:
        """Load scene settings from a JSON file"""
        with open(file_path, 'r') as f:
            data = json.load(f)
        logger.info("Loaded scene settings from %s", file_path)
        return SceneLoader.from_dict(data)

    @staticmethod
    def from_yaml(file_path: str) -> SceneSettings:
        """Load scene settings from a YAML file"""
        with open(file_path, 'r') as f:
            data = yaml.safe_load(f)
        logger.info("Loaded scene settings from %s", file_path)
        return SceneLoader.from_dict(data)

    @staticmethod
    def from_dict(data: Optional[Dict[str, Any]]) -> SceneSettings:
        """
        Build SceneSettings from a parsed document.

        Settings live under a top-level "scene" key. Missing values come from
        the defaults, or from the season's palette when a season is given.
        Colors are checked strictly so a typo fails here and not as a black sky.
        """
        scene = (data or {}).get('scene', {})

        season = scene.get('season')
        if season is not None:
            try:
                season = Season(season)
            except ValueError:
                raise ValueError(f"Unsupported season: {season}") from None

        params = get_scene_params(season)
        for key in ('cols', 'rows', 'cloud_count', 'show_hills') + COLOR_KEYS:
            if key in scene:
                params[key] = scene[key]
        for key in COLOR_KEYS:
            parse_color(params[key], strict=True)

        cols = int(params['cols'])
        rows = int(params['rows'])
        if cols <= 0 or rows <= 0:
            raise ValueError(f"Grid dimensions must be positive, got {cols}x{rows}")

        path = None
        if 'path' in scene:
            path = SceneLoader._create_path_from_dict(scene['path'])

        elements = [SceneLoader._create_element_from_dict(e) for e in scene.get('elements', [])]
        if 'element_density' in scene:
            if season is None:
                raise ValueError("element_density needs a season")
            elements.extend(generate_season_elements(season, cols, rows, scene['element_density']))

        return SceneSettings(
            cols=cols,
            rows=rows,
            cloud_count=int(params['cloud_count']),
            show_hills=bool(params['show_hills']),
            sky_color_top=params['sky_color_top'],
            sky_color_bottom=params['sky_color_bottom'],
            cloud_color=params['cloud_color'],
            hill_color=params['hill_color'],
            hill_color_far=params['hill_color_far'],
            season=season,
            path=path,
            ground_elements=elements,
            time_of_day=scene.get('time_of_day'),
        )

    @staticmethod
    def _create_path_from_dict(data: Dict[str, Any]) -> PathConfig:
        """Create a PathConfig from a dictionary"""
        return PathConfig(
            enabled=data.get('enabled', True),
            y_offset=data.get('y_offset', 0),
            amplitude=data.get('amplitude', 0.5),
            color=data.get('color'),
            border_color=data.get('border_color'),
        )

    @staticmethod
    def _create_element_from_dict(data: Dict[str, Any]) -> GroundElement:
        """Create a GroundElement from a dictionary"""
        el_type = data['type']
        if el_type not in ELEMENT_SHAPES:
            raise ValueError(f"Unsupported element type: {el_type}")
        return GroundElement(
            col=data['col'],
            type=el_type,
            growth=data.get('growth', 1.0),
            id=data.get('id'),
        )

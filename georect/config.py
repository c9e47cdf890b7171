import dataclasses
import logging
from dataclasses import dataclass, field
from pathlib import Path
from types import MappingProxyType
from typing import Any, Callable, Dict, Mapping, Optional, Tuple
import yaml
from platformdirs import user_config_dir

logger = logging.getLogger(__name__)


CONFIG_DIR = Path(user_config_dir("georect"))
OPTIONS_FILE = CONFIG_DIR / "transform.yaml"


@dataclass(frozen=True)
class HandleStyle:
    """Visual options for one category of handle."""

    radius: float = 5.0
    fill_color: str = "#ffffff"
    color: str = "#202020"
    fill_opacity: float = 1.0
    weight: float = 2.0
    opacity: float = 0.7
    set_cursor: bool = True

    def to_dict(self) -> Dict[str, Any]:
        return dataclasses.asdict(self)


@dataclass(frozen=True)
class LineStyle:
    """Visual options for the rotate guide line."""

    stroke: bool = True
    color: str = "#000000"
    weight: float = 1.0
    opacity: float = 1.0
    dash_array: Tuple[float, ...] = (3.0, 3.0)
    fill: bool = False

    def to_dict(self) -> Dict[str, Any]:
        d = dataclasses.asdict(self)
        d["dash_array"] = list(self.dash_array)
        return d


DEFAULT_CURSORS: Dict[str, str] = {
    "ne": "nesw-resize",
    "nw": "nwse-resize",
    "sw": "nesw-resize",
    "se": "nwse-resize",
    "e": "e-resize",
    "s": "s-resize",
    "n": "n-resize",
    "w": "w-resize",
}


def _default_handle_factory() -> Callable[..., Any]:
    # Deferred: the overlay module imports this one.
    from .workbench.canvas.overlays import CircleHandle

    return CircleHandle


@dataclass(frozen=True)
class TransformOptions:
    """
    Everything the transform handler can be configured with. Assembled
    once; use `replace()` to derive a variant.
    """

    # Initial rotation in radians, counter-clockwise on the map.
    angle: float = 0.0
    scale_handle: HandleStyle = field(default_factory=HandleStyle)
    scale_origin_handle: HandleStyle = field(
        default_factory=lambda: HandleStyle(radius=10.0)
    )
    rotate_handle: HandleStyle = field(
        default_factory=lambda: HandleStyle(
            radius=7.0, fill_color="#dddddd", set_cursor=False
        )
    )
    rotate_line: LineStyle = field(default_factory=LineStyle)
    handle_factory: Callable[..., Any] = field(
        default_factory=_default_handle_factory, compare=False
    )
    cursors_by_type: Mapping[str, str] = field(
        default_factory=lambda: dict(DEFAULT_CURSORS), hash=False
    )
    cursor_class_suffix: str = "-webtrike"

    # Grid footprint
    ni: int = 0
    nj: int = 0
    dphi: float = 0.0
    dlambda: float = 0.0
    show_grid_feature: bool = False

    def __post_init__(self):
        # Read-only view over a private copy
        cursors = MappingProxyType(dict(self.cursors_by_type))
        object.__setattr__(self, "cursors_by_type", cursors)

    def replace(self, **overrides: Any) -> "TransformOptions":
        return dataclasses.replace(self, **overrides)

    def to_dict(self) -> Dict[str, Any]:
        """Serializes all fields except the handle factory."""
        return {
            "angle": self.angle,
            "scale_handle": self.scale_handle.to_dict(),
            "scale_origin_handle": self.scale_origin_handle.to_dict(),
            "rotate_handle": self.rotate_handle.to_dict(),
            "rotate_line": self.rotate_line.to_dict(),
            "cursors_by_type": dict(self.cursors_by_type),
            "cursor_class_suffix": self.cursor_class_suffix,
            "ni": self.ni,
            "nj": self.nj,
            "dphi": self.dphi,
            "dlambda": self.dlambda,
            "show_grid_feature": self.show_grid_feature,
        }

    @classmethod
    def from_dict(
        cls,
        data: Mapping[str, Any],
        base: Optional["TransformOptions"] = None,
    ) -> "TransformOptions":
        """
        Builds options from a (partial) dict. Nested styles are merged
        key by key into those of `base`, or of the defaults.

        Raises:
            ValueError: On unknown keys.
        """
        base = base or cls()
        known = {f.name for f in dataclasses.fields(cls)} - {
            "handle_factory"
        }
        unknown = set(data) - known
        if unknown:
            raise ValueError(f"Unknown transform options: {sorted(unknown)}")

        overrides: Dict[str, Any] = {}
        for key, value in data.items():
            current = getattr(base, key)
            if isinstance(current, HandleStyle):
                overrides[key] = _merge_style(current, value)
            elif isinstance(current, LineStyle):
                if "dash_array" in value:
                    value = dict(value, dash_array=tuple(value["dash_array"]))
                overrides[key] = _merge_style(current, value)
            elif key == "cursors_by_type":
                overrides[key] = dict(current, **value)
            else:
                overrides[key] = value
        return base.replace(**overrides)


def _merge_style(style, values: Mapping[str, Any]):
    names = {f.name for f in dataclasses.fields(style)}
    unknown = set(values) - names
    if unknown:
        raise ValueError(
            f"Unknown {type(style).__name__} options: {sorted(unknown)}"
        )
    return dataclasses.replace(style, **values)


def load_options(path: Optional[Path] = None) -> TransformOptions:
    """
    Loads options from a YAML file. A missing or empty file yields the
    defaults.
    """
    path = Path(path) if path is not None else OPTIONS_FILE
    if not path.exists():
        logger.debug(f"No options file at {path}, using defaults")
        return TransformOptions()

    with open(path, "r") as f:
        data = yaml.safe_load(f)
    if not data:
        logger.warning(f"Options file {path} is empty, using defaults")
        return TransformOptions()
    return TransformOptions.from_dict(data)


def save_options(options: TransformOptions, path: Optional[Path] = None):
    path = Path(path) if path is not None else OPTIONS_FILE
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, "w") as f:
        yaml.safe_dump(options.to_dict(), f)
    logger.debug(f"Saved transform options to {path}")

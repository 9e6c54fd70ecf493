import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, Mapping, Optional

from .constants import DEFAULT_MAX_VISIBLE, MODE_BROWSE, MODES

try:
    import tomllib
except ImportError:
    import tomli as tomllib

CONFIG_FILENAME = ".appctl.toml"
CONFIG_SECTION_NAME = "appctl"
OVERRIDE_FIELDS = {
    "mode",
    "max_visible",
    "show_icons",
}
CONFIG_FIELDS = OVERRIDE_FIELDS | {"icons"}

logger = logging.getLogger(__name__)


@dataclass
class Config:
    path: Path
    mode: str = MODE_BROWSE
    max_visible: int = DEFAULT_MAX_VISIBLE
    show_icons: bool = True
    icons: Dict[str, str] = field(default_factory=dict)

    @classmethod
    def create(
        cls, path: Path, overrides: Optional[Mapping] = None
    ) -> "Config":
        instance = cls(path=path)

        config_path = find_config(path)
        if config_path:
            logger.debug("Loading configuration from %s", config_path)
            parsed = parse_config(config_path)
            instance._update_from_mapping(parsed)
        else:
            logger.debug("No configuration file found")

        instance._update_from_overrides(overrides or {})
        instance.validate()
        logger.debug("Final configuration: %s", instance)
        return instance

    def _update_from_mapping(self, data: Mapping):
        for key, val in data.items():
            setattr(self, key, val)

    def _update_from_overrides(self, overrides: Mapping):
        for f in OVERRIDE_FIELDS:
            val = overrides.get(f)
            if val is not None:
                setattr(self, f, val)

    def validate(self) -> None:
        if self.mode not in MODES:
            raise SystemExit(
                f"Invalid mode {self.mode!r}; expected one of: {', '.join(MODES)}"
            )
        max_visible = self.max_visible
        if isinstance(max_visible, bool) or not isinstance(max_visible, int):
            raise SystemExit(f"Invalid max_visible {max_visible!r}; not an integer")
        if max_visible < 1:
            raise SystemExit(f"Invalid max_visible {max_visible}; must be at least 1")
        if not isinstance(self.icons, dict):
            raise SystemExit("Invalid icons; expected a table of name = glyph")


def find_config(cwd: Path, home: Optional[Path] = None) -> Optional[Path]:
    if home is None:
        home = Path.home()

    for path in (cwd, *cwd.parents, home):
        config_path = path.joinpath(CONFIG_FILENAME)

        if config_path.exists():
            logger.debug("Found configuration file at %s", config_path)
            return config_path

    return None


def parse_config(path: Path) -> Mapping:
    with open(path, "rb") as f:
        try:
            data = tomllib.load(f)
        except Exception as exc:
            raise SystemExit(f"Error parsing {path.name}\n{exc}")

    try:
        data = data[CONFIG_SECTION_NAME]
    except KeyError:
        logger.debug("No [%s] section found in %s", CONFIG_SECTION_NAME, path)
        return {}

    for key in data.keys():
        if key not in CONFIG_FIELDS:
            raise SystemExit(
                f"Error parsing {path.name}.\nUnrecognized option: {key}"
            )
    return data

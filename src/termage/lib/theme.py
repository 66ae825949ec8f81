"""
Theme loader and manager for termage.

Themes supply the default value of every style field of every element kind,
plus a named color palette so output can be re-skinned without touching
calling code. Each theme is a directory containing:
  - theme.yaml: Configuration (colors, spacing multipliers, element defaults)

A theme is built once per rendering session and only read afterwards. A
process-wide default (theme_get/theme_set) exists for top-level helpers;
engine objects always accept an explicit theme instead.
"""

import copy
import yaml
from pathlib import Path
from typing import Dict, Any, Optional

from ..config import appsettings

PACKAGE_THEMES_DIR = Path(__file__).resolve().parent.parent / "themes"


class ThemeError(Exception):
    """Raised when theme loading or validation fails"""
    pass


def variables_merge(base: Dict[str, Any], overrides: Dict[str, Any]) -> Dict[str, Any]:
    """Recursively merge overrides into a copy of base"""
    merged = copy.deepcopy(base)
    for key, value in overrides.items():
        if isinstance(value, dict) and isinstance(merged.get(key), dict):
            merged[key] = variables_merge(merged[key], value)
        else:
            merged[key] = copy.deepcopy(value)
    return merged


class Theme:
    """
    Represents a termage theme.

    Either loaded by name from ``<themes_dir>/<name>/theme.yaml`` or built
    directly from a variables mapping (no files involved).
    """

    def __init__(
        self,
        theme_name: str = "default",
        themes_dir: Optional[str] = None,
        variables: Optional[Dict[str, Any]] = None,
    ):
        """
        Load a theme by name, or wrap a variables mapping.

        Args:
            theme_name: Name of the theme directory (e.g., "default")
            themes_dir: Path to themes directory (default: package themes)
            variables: Use this mapping instead of reading theme.yaml

        Raises:
            ThemeError: If theme directory or theme.yaml don't exist or
                        theme.yaml can't be parsed
        """
        self.name = theme_name
        self.themes_dir = Path(themes_dir) if themes_dir else PACKAGE_THEMES_DIR
        self.theme_dir = self.themes_dir / theme_name
        self.config_path = self.theme_dir / "theme.yaml"

        if variables is not None:
            self.config: Dict[str, Any] = copy.deepcopy(variables)
            return

        if not self.theme_dir.exists():
            raise ThemeError(
                f"Theme '{theme_name}' not found. "
                f"Expected directory: {self.theme_dir}"
            )

        if not self.config_path.exists():
            raise ThemeError(
                f"Theme '{theme_name}' missing theme.yaml"
            )

        self.config = self._config_load()

    def _config_load(self) -> Dict[str, Any]:
        """Load and parse theme.yaml"""
        try:
            with open(self.config_path, 'r', encoding='utf-8') as f:
                config: Any = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise ThemeError(f"Failed to parse theme.yaml: {e}")
        except OSError as e:
            raise ThemeError(f"Failed to load theme.yaml: {e}")

        if config is None:
            config = {}
        if not isinstance(config, dict):
            raise ThemeError("theme.yaml must contain a mapping at the top level")
        return config

    def config_get(self, key: str, default: Any = None) -> Any:
        """
        Get a configuration value.

        Supports nested keys with dot notation:
          theme.config_get('alert.type.info.bg', 'blue')

        Args:
            key: Configuration key (supports dot notation)
            default: Default value if key doesn't exist

        Returns:
            Configuration value or default
        """
        keys: list[str] = key.split('.')
        value: Any = self.config

        for k in keys:
            if isinstance(value, dict) and k in value:
                value = value[k]
            else:
                return default

        return value

    def color_resolve(self, name: Optional[str]) -> Optional[str]:
        """
        Resolve a semantic color name through the palette.

        Falls back to the name itself, so raw colors ("red", "#ff0000",
        "208") pass straight through.
        """
        if name is None:
            return None
        return self.config_get(f'colors.{name}', name)

    def number_get(self, key: str, default: float = 1) -> float:
        """Numeric configuration value; non-numeric values give default"""
        value = self.config_get(key, default)
        try:
            return float(value)
        except (TypeError, ValueError):
            return default

    def with_variables(self, variables: Dict[str, Any]) -> "Theme":
        """New theme with variables deep-merged over this one"""
        return Theme(
            theme_name=self.name,
            themes_dir=str(self.themes_dir),
            variables=variables_merge(self.config, variables),
        )

    def __repr__(self) -> str:
        return f"Theme(name='{self.name}', path='{self.theme_dir}')"


def themes_listAvailable(themes_dir: Optional[str] = None) -> list[str]:
    """
    List all available theme names.

    Args:
        themes_dir: Path to themes directory (default: package themes)

    Returns:
        List of theme names (directory names with valid theme.yaml)
    """
    themes_path: Path = Path(themes_dir) if themes_dir else PACKAGE_THEMES_DIR

    if not themes_path.exists():
        return []

    themes: list[str] = []
    for item in themes_path.iterdir():
        if item.is_dir():
            if (item / "theme.yaml").exists():
                themes.append(item.name)

    return sorted(themes)


def theme_validate(theme_name: str, themes_dir: Optional[str] = None) -> tuple[bool, str]:
    """
    Validate a theme's structure and configuration.

    Args:
        theme_name: Name of theme to validate
        themes_dir: Path to themes directory

    Returns:
        Tuple of (is_valid, message)
    """
    try:
        theme: Theme = Theme(theme_name, themes_dir)

        if not theme.config:
            return False, f"Theme '{theme_name}' has empty configuration"

        if not isinstance(theme.config_get('colors'), dict):
            return False, f"Theme '{theme_name}' has no colors palette"

        return True, f"Theme '{theme_name}' is valid"

    except ThemeError as e:
        return False, str(e)


_default_theme: Optional[Theme] = None


def theme_get() -> Theme:
    """Process-wide default theme, loaded from settings on first use"""
    global _default_theme
    if _default_theme is None:
        _default_theme = Theme(appsettings.theme_name, appsettings.themes_dir)
    return _default_theme


def theme_set(theme: Optional[Theme]) -> None:
    """Replace the process-wide default theme (None reloads from settings)"""
    global _default_theme
    _default_theme = theme

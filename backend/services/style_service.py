"""
Style palette table.
Maps style keywords to the ordered color lists used by the image composer.
"""

from types import MappingProxyType
from typing import Dict, List, Mapping, Optional, Sequence


DEFAULT_STYLE = "abstract"

STYLE_PALETTES: Mapping[str, tuple] = MappingProxyType({
    "abstract": ("#FF6B6B", "#4ECDC4", "#45B7D1", "#96CEB4", "#FFEAA7"),
    "nature": ("#2E8B57", "#3CB371", "#98FB98", "#8FBC8F", "#00FA9A"),
    "tech": ("#4169E1", "#1E90FF", "#00BFFF", "#87CEEB", "#4682B4"),
    "sunset": ("#FF6B6B", "#FFA726", "#FFEAA7", "#FD79A8", "#E17055"),
    "ocean": ("#0077B6", "#00B4D8", "#90E0EF", "#CAF0F8", "#03045E"),
})


class StyleCatalog:
    """
    Read-only lookup over a palette table.
    Unknown style names resolve to the default style's palette.
    """

    def __init__(
        self,
        palettes: Optional[Mapping[str, Sequence[str]]] = None,
        default_style: str = DEFAULT_STYLE,
    ):
        """
        Initialize the catalog.

        Args:
            palettes: Mapping of style name to hex colors (defaults to the built-in table)
            default_style: Style used when a lookup misses
        """
        if palettes is None:
            palettes = STYLE_PALETTES

        if default_style not in palettes:
            raise ValueError(f"Default style '{default_style}' is not in the palette table")

        for name, colors in palettes.items():
            if len(colors) < 2:
                raise ValueError(f"Style '{name}' needs at least 2 colors for a gradient")

        self._palettes = MappingProxyType({name: tuple(colors) for name, colors in palettes.items()})
        self.default_style = default_style

    @property
    def names(self) -> List[str]:
        return list(self._palettes)

    def is_known(self, style: Optional[str]) -> bool:
        return style in self._palettes

    def resolve(self, style: Optional[str]) -> str:
        """Return the style name that will actually be rendered."""
        return style if self.is_known(style) else self.default_style

    def get_colors(self, style: Optional[str]) -> tuple:
        """
        Look up the palette for a style.

        Args:
            style: Style keyword, possibly unknown or None

        Returns:
            Tuple of hex colors; the default palette for unknown styles
        """
        return self._palettes[self.resolve(style)]

    def describe(self) -> List[Dict]:
        """
        Describe every style for API listing.

        Returns:
            List of {name, colors, displayName} dictionaries in table order
        """
        return [
            {
                "name": name,
                "colors": list(colors),
                "displayName": name[:1].upper() + name[1:],
            }
            for name, colors in self._palettes.items()
        ]


# Singleton instance
_style_catalog: Optional[StyleCatalog] = None


def get_style_catalog() -> StyleCatalog:
    """
    Get or create the style catalog singleton.

    Returns:
        StyleCatalog instance over the built-in palettes
    """
    global _style_catalog
    if _style_catalog is None:
        _style_catalog = StyleCatalog()
    return _style_catalog

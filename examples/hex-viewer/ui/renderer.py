"""Hex map rendering - tile surfaces, depth-ordered blits, hover tint."""
from __future__ import annotations

import pygame

from hexmap import Cell, Pixel, Scene, map_origin
from ui.constants import (
    COLOR_HOVER,
    COLOR_OUTLINE,
    COLOR_TEXT,
    COLOR_TITLE_BG,
    FEATURE_STYLES,
    TERRAIN_COLORS,
)


def hex_points(width: float, height: float) -> list[tuple[float, float]]:
    """Pointy-top hexagon corners inside a width x height box."""
    return [
        (width / 2, 0),
        (width, height / 4),
        (width, height * 3 / 4),
        (width / 2, height),
        (0, height * 3 / 4),
        (0, height / 4),
    ]


def _tile_size(scene: Scene) -> tuple[int, int]:
    # Rows overlap by a quarter of the hex height, so rows are 3/4 of a hex apart.
    t = scene.transform
    return max(2, round(t.horiz_spacing)), max(2, round(t.vert_spacing * 4 / 3))


def _terrain_surface(color: tuple[int, int, int], size: tuple[int, int]) -> pygame.Surface:
    surf = pygame.Surface(size, pygame.SRCALPHA)
    points = hex_points(size[0] - 1, size[1] - 1)
    pygame.draw.polygon(surf, color, points)
    pygame.draw.polygon(surf, COLOR_OUTLINE, points, 1)
    return surf


def _feature_surface(
    color: tuple[int, int, int],
    label: str,
    size: tuple[int, int],
    font: pygame.font.Font,
) -> pygame.Surface:
    surf = pygame.Surface(size, pygame.SRCALPHA)
    radius = max(3, min(size) // 4)
    center = (size[0] // 2, size[1] // 2)
    pygame.draw.circle(surf, color, center, radius)
    pygame.draw.circle(surf, COLOR_OUTLINE, center, radius, 1)
    text = font.render(label, True, COLOR_OUTLINE)
    surf.blit(text, text.get_rect(center=center))
    return surf


class HexRenderer:
    """Draws one Scene onto a pygame surface.

    Sprites are pre-rendered per kind and blitted centred on the positions
    from the scene layout, in depth order.
    """

    def __init__(self, scene: Scene, screen_size: tuple[int, int]) -> None:
        self._font = pygame.font.SysFont("monospace", 14, bold=True)
        self._title_font = pygame.font.SysFont("sans", 24)
        self._scene = scene
        self._origin: Pixel = map_origin(*screen_size)
        self._sprites: dict[str, pygame.Surface] = {}
        self._hover: pygame.Surface | None = None
        self._build_sprites()

    @property
    def scene(self) -> Scene:
        return self._scene

    @property
    def origin(self) -> Pixel:
        return self._origin

    def set_scene(self, scene: Scene) -> None:
        self._scene = scene
        self._build_sprites()

    def resize(self, screen_size: tuple[int, int]) -> None:
        self._origin = map_origin(*screen_size)

    def cell_under(self, pos: tuple[int, int]) -> Cell | None:
        return self._scene.cell_at(pos[0], pos[1], self._origin)

    def _build_sprites(self) -> None:
        size = _tile_size(self._scene)
        self._sprites = {
            key: _terrain_surface(color, size) for key, color in TERRAIN_COLORS.items()
        }
        for key, (color, label) in FEATURE_STYLES.items():
            self._sprites[key] = _feature_surface(color, label, size, self._font)
        self._hover = pygame.Surface(size, pygame.SRCALPHA)
        pygame.draw.polygon(self._hover, COLOR_HOVER, hex_points(size[0] - 1, size[1] - 1))

    def draw(self, surface: pygame.Surface, mouse_pos: tuple[int, int] | None = None) -> None:
        hovered = self.cell_under(mouse_pos) if mouse_pos is not None else None
        for sprite in self._scene.sprites(self._origin):
            image = self._sprites.get(sprite.key)
            if image is None:
                continue
            rect = image.get_rect(center=(round(sprite.x), round(sprite.y)))
            surface.blit(image, rect)
            if (
                self._hover is not None
                and sprite.layer == "terrain"
                and hovered == (sprite.column, sprite.row)
            ):
                surface.blit(self._hover, rect)
        self._draw_title(surface, hovered)

    def _draw_title(self, surface: pygame.Surface, hovered: Cell | None) -> None:
        title = "Isometric Hex Tile Map"
        if hovered is not None:
            column, row = hovered
            tile_map = self._scene.tile_map
            title += f"  ({column}, {row}) {tile_map.terrain_at(column, row).value}"
            feature = tile_map.feature_at(column, row)
            if feature is not None:
                title += f" + {feature.kind.value}"
        text = self._title_font.render(title, True, COLOR_TEXT)
        box = pygame.Surface((text.get_width() + 20, text.get_height() + 10), pygame.SRCALPHA)
        box.fill(COLOR_TITLE_BG)
        box.blit(text, (10, 5))
        surface.blit(box, (16, 16))


def create_renderer(scene: Scene, screen: pygame.Surface) -> HexRenderer:
    """Build a renderer for a scene sized to the given display surface."""
    return HexRenderer(scene, screen.get_size())

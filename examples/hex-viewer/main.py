"""Hex Viewer - procedurally generated isometric hex map with pygame.

Controls:
    R       Generate a new map
    Esc     Quit
    Mouse   Hover a tile to inspect it
"""
from __future__ import annotations

import argparse
import logging
import sys

import pygame

from hexmap import ViewerConfig, build_scene
from ui.constants import COLOR_BG, FPS, SCREEN_H, SCREEN_W
from ui.renderer import create_renderer

logger = logging.getLogger("hex-viewer")


def parse_args() -> argparse.Namespace:
    p = argparse.ArgumentParser(description="Hex Viewer - hexmap visual demo")
    p.add_argument("--width", type=int, default=10, help="Map columns (default: 10)")
    p.add_argument("--height", type=int, default=10, help="Map rows (default: 10)")
    p.add_argument("--seed", type=int, default=None, help="Random seed (default: random)")
    p.add_argument("--hex-width", type=float, default=128, help="Hex width in px (default: 128)")
    p.add_argument("--hex-height", type=float, default=112, help="Hex height in px (default: 112)")
    p.add_argument("--row-spacing", type=float, default=1.0,
                   help="Row spacing as a fraction of hex height (default: 1.0)")
    p.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    args = p.parse_args()
    args.width = max(1, min(60, args.width))
    args.height = max(1, min(60, args.height))
    return args


def main() -> None:
    args = parse_args()
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    config = ViewerConfig(
        map_width=args.width,
        map_height=args.height,
        hex_width=args.hex_width,
        hex_height=args.hex_height,
        row_spacing=args.row_spacing,
        seed=args.seed,
    )
    scene = build_scene(config)
    logger.info("Map seed: %s", scene.generator.seed)

    pygame.init()
    screen = pygame.display.set_mode((SCREEN_W, SCREEN_H), pygame.RESIZABLE)
    pygame.display.set_caption("Hex Viewer - hexmap demo")
    clock = pygame.time.Clock()
    renderer = create_renderer(scene, screen)

    running = True
    while running:
        clock.tick(FPS)

        # --- Events ---
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                running = False

            elif event.type == pygame.VIDEORESIZE:
                renderer.resize(event.size)

            elif event.type == pygame.KEYDOWN:
                if event.key == pygame.K_ESCAPE:
                    running = False
                elif event.key == pygame.K_r:
                    renderer.set_scene(renderer.scene.regenerate())
                    logger.info("Regenerated map")

            elif event.type == pygame.MOUSEBUTTONDOWN and event.button == 1:
                cell = renderer.cell_under(event.pos)
                if cell is not None:
                    column, row = cell
                    kind = renderer.scene.tile_map.terrain_at(column, row)
                    logger.info("Tile clicked at (%d, %d), type: %s", column, row, kind.value)

        # --- Render ---
        screen.fill(COLOR_BG)
        renderer.draw(screen, pygame.mouse.get_pos())
        pygame.display.flip()

    pygame.quit()
    sys.exit()


if __name__ == "__main__":
    main()

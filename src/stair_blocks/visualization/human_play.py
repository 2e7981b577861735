from __future__ import annotations

import argparse
import logging
from typing import Optional, Set, Tuple

import pygame

from stair_blocks.events.bus import EVENT_COLUMN_COMPLETE, EVENT_GAME_RESET, EVENT_VICTORY
from stair_blocks.game import MAX_COLUMNS, MIN_COLUMNS, GameConfig, GameSession, PlacementPolicy
from .audio import AudioCues
from .renderer import BACKGROUND, BoardLayout, Renderer


class PlayView:
    """Screen-side state that follows the session's notifications."""

    def __init__(self, session: GameSession) -> None:
        self.session = session
        self.marked: Set[int] = set()
        self.victory = False
        session.bus.subscribe(EVENT_COLUMN_COMPLETE, self.on_column_complete)
        session.bus.subscribe(EVENT_VICTORY, self.on_victory)
        session.bus.subscribe(EVENT_GAME_RESET, self.on_reset)

    def on_column_complete(self, sender, **kwargs):
        self.marked.add(kwargs["column"])

    def on_victory(self, sender, **kwargs):
        self.victory = True

    def on_reset(self, sender, **kwargs):
        self.marked.clear()
        self.victory = False


def _open_window(session: GameSession) -> Tuple[pygame.Surface, BoardLayout, Renderer]:
    cell = 30 if session.board.n > 8 else 40
    layout = BoardLayout(session.board.n, cell_size=cell)
    screen = pygame.display.set_mode(layout.window_size())
    return screen, layout, Renderer(layout)


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(description="Drag blocks from the tray into the staircase.")
    p.add_argument("--columns", type=int, default=5, choices=range(MIN_COLUMNS, MAX_COLUMNS + 1))
    p.add_argument("--policy", choices=[policy.value for policy in PlacementPolicy], default="single")
    p.add_argument("--random-tray", action="store_true", help="Shuffle the tray in connected mode")
    p.add_argument("--mute", action="store_true")
    p.add_argument("--log-level", default="WARNING")
    return p


def run(config: Optional[GameConfig] = None, mute: bool = False) -> None:
    pygame.init()
    try:
        session = GameSession(config)
        view = PlayView(session)
        AudioCues(session.bus, enabled=not mute)
        pygame.display.set_caption("Stair Blocks")
        screen, layout, renderer = _open_window(session)
        clock = pygame.time.Clock()

        dragging: Optional[int] = None

        running = True
        while running:
            dt = clock.tick(60) / 1000.0
            mouse = pygame.mouse.get_pos()
            for event in pygame.event.get():
                if event.type == pygame.QUIT:
                    running = False
                elif event.type == pygame.KEYDOWN:
                    if event.key == pygame.K_ESCAPE:
                        running = False
                    elif event.key == pygame.K_n:
                        session.reset()
                    elif event.key == pygame.K_p:
                        other = (PlacementPolicy.CONNECTED if session.policy == PlacementPolicy.SINGLE
                                 else PlacementPolicy.SINGLE)
                        session.reset(policy=other)
                    elif event.key == pygame.K_t:
                        session.set_tray_order(not session.config.tray_random)
                    elif event.key in (pygame.K_UP, pygame.K_DOWN):
                        delta = 1 if event.key == pygame.K_UP else -1
                        n = min(MAX_COLUMNS, max(MIN_COLUMNS, session.board.n + delta))
                        if n != session.board.n:
                            session.reset(columns=n)
                            screen, layout, renderer = _open_window(session)
                elif event.type == pygame.MOUSEBUTTONDOWN and event.button == 1:
                    if not session.complete:
                        dragging = layout.hit_tray(event.pos, session.tray.available())
                elif event.type == pygame.MOUSEBUTTONUP and event.button == 1:
                    if dragging is not None:
                        hit = layout.hit_slot(event.pos)
                        if hit is not None:
                            column, row = hit
                            session.placement_request(column, dragging, row)
                        dragging = None

            session.tick(dt)

            hovered = []
            if dragging is not None:
                hit = layout.hit_slot(mouse)
                if hit is not None:
                    column, row = hit
                    hovered = [(column, r) for r in session.preview(column, dragging, row)]

            screen.fill(BACKGROUND)
            renderer.draw_board(screen, session.board.cells, hovered, view.marked)
            if not view.victory:
                renderer.draw_tray(screen, session.tray.available(), dragging)
            renderer.draw_text(screen, [
                f"Mode: {session.policy.value}  Columns: {session.board.n}",
                "N: new game  P: mode  Up/Down: columns  T: tray order",
                "Drag a block from the tray onto a column",
            ])
            if dragging is not None:
                renderer.draw_drag(screen, dragging, mouse)
            if view.victory:
                renderer.draw_victory(screen)
            pygame.display.flip()
    finally:
        pygame.quit()


def main() -> None:
    args = build_parser().parse_args()
    logging.basicConfig(level=args.log_level.upper(), format="%(levelname)s %(name)s: %(message)s")
    config = GameConfig(
        columns=args.columns,
        policy=PlacementPolicy(args.policy),
        tray_random=args.random_tray,
    )
    run(config, mute=args.mute)


if __name__ == "__main__":  # pragma: no cover
    main()

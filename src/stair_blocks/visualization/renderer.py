from __future__ import annotations

from typing import Iterable, List, Optional, Sequence, Set, Tuple

import numpy as np
import pygame


BACKGROUND = (245, 245, 240)
SLOT = (222, 222, 214)
SLOT_HOVER = (170, 210, 250)
BLOCK = (59, 130, 246)
NUMBER_TILE = (250, 250, 250)
TEXT = (40, 40, 48)
MARU = (220, 30, 30)


class BoardLayout:
    """Pixel geometry of the staircase board and the tray beside it."""

    def __init__(self, columns: int, cell_size: int = 40, gap: int = 8, margin: int = 20) -> None:
        self.columns = columns
        self.cell_size = cell_size
        self.gap = gap
        self.margin = margin
        self.tile_height = cell_size

    @property
    def board_width(self) -> int:
        return self.columns * (self.cell_size + self.gap) - self.gap

    @property
    def board_height(self) -> int:
        return self.columns * (self.cell_size + self.gap) - self.gap

    @property
    def baseline(self) -> int:
        # y of the bottom edge of row 0
        return self.margin + self.board_height

    @property
    def tray_x(self) -> int:
        return self.margin * 3 + self.board_width

    def window_size(self) -> Tuple[int, int]:
        tray_w = self.columns * (self.cell_size + self.gap) + self.margin
        return self.tray_x + tray_w, self.text_y + 3 * 20 + self.margin

    @property
    def text_y(self) -> int:
        return self.baseline + self.gap + self.tile_height + self.gap

    def column_x(self, column: int) -> int:
        return self.margin + (column - 1) * (self.cell_size + self.gap)

    def slot_rect(self, column: int, row: int) -> pygame.Rect:
        top = self.baseline - (row + 1) * self.cell_size - row * self.gap
        return pygame.Rect(self.column_x(column), top, self.cell_size, self.cell_size)

    def span_rect(self, column: int, origin: int, size: int) -> pygame.Rect:
        top = self.slot_rect(column, origin + size - 1).top
        bottom = self.slot_rect(column, origin).bottom
        return pygame.Rect(self.column_x(column), top, self.cell_size, bottom - top)

    def tile_rect(self, column: int) -> pygame.Rect:
        return pygame.Rect(self.column_x(column), self.baseline + self.gap, self.cell_size, self.tile_height)

    def hit_slot(self, pos: Tuple[int, int]) -> Optional[Tuple[int, int]]:
        """(column, row) under ``pos``; gaps between rows snap to the row below."""
        x, y = pos
        for column in range(1, self.columns + 1):
            left = self.column_x(column)
            if not left <= x < left + self.cell_size:
                continue
            for row in range(column):
                rect = self.slot_rect(column, row)
                if rect.top - self.gap < y <= rect.bottom:
                    return column, row
            return None
        return None

    def tray_rects(self, sizes: Sequence[int]) -> List[Tuple[int, pygame.Rect]]:
        out: List[Tuple[int, pygame.Rect]] = []
        for idx, size in enumerate(sizes):
            height = size * self.cell_size + (size - 1) * self.gap
            x = self.tray_x + idx * (self.cell_size + self.gap)
            out.append((size, pygame.Rect(x, self.baseline - height, self.cell_size, height)))
        return out

    def hit_tray(self, pos: Tuple[int, int], sizes: Sequence[int]) -> Optional[int]:
        for size, rect in self.tray_rects(sizes):
            if rect.collidepoint(pos):
                return size
        return None


class Renderer:
    def __init__(self, layout: BoardLayout) -> None:
        self.layout = layout
        self._font: Optional[pygame.font.Font] = None
        self._big_font: Optional[pygame.font.Font] = None

    def _fonts(self) -> Tuple[pygame.font.Font, pygame.font.Font]:
        if self._font is None:
            self._font = pygame.font.SysFont(None, 28)
            self._big_font = pygame.font.SysFont(None, 64)
        return self._font, self._big_font

    def draw_board(self, screen: pygame.Surface, cells: np.ndarray, hovered: Iterable[Tuple[int, int]],
                   marked: Set[int]) -> None:
        font, _ = self._fonts()
        hovered = set(hovered)
        layout = self.layout
        for column in range(1, layout.columns + 1):
            for row in range(column):
                color = SLOT_HOVER if (column, row) in hovered else SLOT
                pygame.draw.rect(screen, color, layout.slot_rect(column, row), border_radius=4)
            self._draw_blocks(screen, column, cells[column - 1, :column])
            tile = layout.tile_rect(column)
            pygame.draw.rect(screen, NUMBER_TILE, tile, border_radius=4)
            pygame.draw.rect(screen, TEXT, tile, 1, border_radius=4)
            label = font.render(str(column), True, TEXT)
            screen.blit(label, label.get_rect(center=tile.center))
            if column in marked:
                pygame.draw.circle(screen, MARU, tile.center, int(layout.cell_size * 0.45), 3)

    def _draw_blocks(self, screen: pygame.Surface, column: int, cells: np.ndarray) -> None:
        # consecutive rows sharing a block id are drawn as one tall block
        row = 0
        while row < cells.size:
            block_id = int(cells[row])
            if block_id == 0:
                row += 1
                continue
            size = 1
            while row + size < cells.size and int(cells[row + size]) == block_id:
                size += 1
            pygame.draw.rect(screen, BLOCK, self.layout.span_rect(column, row, size), border_radius=4)
            row += size

    def draw_tray(self, screen: pygame.Surface, sizes: Sequence[int], dragging: Optional[int]) -> None:
        font, _ = self._fonts()
        for size, rect in self.layout.tray_rects(sizes):
            if size == dragging:
                pygame.draw.rect(screen, BLOCK, rect, 2, border_radius=4)
            else:
                pygame.draw.rect(screen, BLOCK, rect, border_radius=4)
            label = font.render(str(size), True, TEXT)
            screen.blit(label, label.get_rect(midtop=(rect.centerx, rect.bottom + 4)))

    def draw_drag(self, screen: pygame.Surface, size: int, pos: Tuple[int, int]) -> None:
        layout = self.layout
        height = size * layout.cell_size + (size - 1) * layout.gap
        rect = pygame.Rect(0, 0, layout.cell_size, height)
        rect.center = pos
        pygame.draw.rect(screen, BLOCK, rect, border_radius=4)

    def draw_text(self, screen: pygame.Surface, lines: Sequence[str]) -> None:
        font, _ = self._fonts()
        for i, txt in enumerate(lines):
            img = font.render(txt, True, TEXT)
            screen.blit(img, (self.layout.margin, self.layout.text_y + i * 20))

    def draw_victory(self, screen: pygame.Surface) -> None:
        _, big = self._fonts()
        overlay = pygame.Surface(screen.get_size(), pygame.SRCALPHA)
        overlay.fill((255, 255, 255, 180))
        screen.blit(overlay, (0, 0))
        text = big.render("Complete!", True, MARU)
        screen.blit(text, text.get_rect(center=(screen.get_width() // 2, screen.get_height() // 2)))

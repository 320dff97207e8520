"""
Board rendering for the timed snake game.

Draws a GameSnapshot into a Pillow image:
- Grid lines over a white board
- Food cell
- Snake body and a darker head with eyes
- Status bar with score, time left and best score
- A GAME OVER banner once the session has ended
"""

import logging
import os
from pathlib import Path
from typing import Optional, Tuple, Union

from PIL import Image, ImageDraw, ImageFont

from domain.snapshot import GameSnapshot

logger = logging.getLogger(__name__)

CELL_SIZE = 24  # Size of each grid cell in pixels
STATUS_BAR_HEIGHT = 36
BOARD_MARGIN = 8


class ColorScheme:
    """Colors used for the board and its status bar"""

    SNAKE = "#4F7022"
    FOOD = "#EA2014"

    BACKGROUND = "#FFFFFF"
    GRID_LINE = "#E5E7EB"
    BORDER = "#646464"

    STATUS_BG = "#1a1f2e"
    STATUS_TEXT = "#FFFFFF"
    GAME_OVER_TEXT = "#EA2014"


def hex_to_rgb(hex_color: str) -> Tuple[int, int, int]:
    """Convert hex color to RGB tuple"""
    hex_color = hex_color.lstrip('#')
    return tuple(int(hex_color[i:i+2], 16) for i in (0, 2, 4))


def darken_color(hex_color: str, amount: float = 0.3) -> Tuple[int, int, int]:
    """Darken a hex color by a given amount"""
    r, g, b = hex_to_rgb(hex_color)
    r = max(0, int(r * (1 - amount)))
    g = max(0, int(g * (1 - amount)))
    b = max(0, int(b * (1 - amount)))
    return (r, g, b)


class BoardRenderer:
    """Render snapshots of the board as images"""

    def __init__(self, cell_size: int = CELL_SIZE):
        if cell_size < 4:
            raise ValueError(f"cell_size must be at least 4 pixels, got {cell_size}.")
        self.cell_size = cell_size
        self.font = ImageFont.load_default()

    def image_size(self, grid_size: int) -> Tuple[int, int]:
        board_pixels = grid_size * self.cell_size
        return (
            board_pixels + 2 * BOARD_MARGIN,
            board_pixels + 2 * BOARD_MARGIN + STATUS_BAR_HEIGHT,
        )

    def render(self, snapshot: GameSnapshot, high_score: Optional[int] = None) -> Image.Image:
        """Render a single frame of the game"""
        img = Image.new('RGB', self.image_size(snapshot.grid_size), hex_to_rgb(ColorScheme.BACKGROUND))
        draw = ImageDraw.Draw(img)

        self._draw_status_bar(draw, img.width, snapshot, high_score)
        self._draw_board(draw, snapshot)

        if snapshot.is_over:
            self._draw_game_over(draw, img.width, img.height, snapshot)

        return img

    def save_frame(
        self,
        snapshot: GameSnapshot,
        path: Union[str, Path],
        high_score: Optional[int] = None
    ) -> str:
        """Render a frame and write it as a PNG. Returns the written path."""
        path = str(path)
        directory = os.path.dirname(path)
        if directory:
            os.makedirs(directory, exist_ok=True)
        self.render(snapshot, high_score).save(path, format="PNG")
        logger.debug("Saved frame to %s", path)
        return path

    def _cell_origin(self, snapshot: GameSnapshot, x: int, y: int) -> Tuple[int, int]:
        # Board rows are stored bottom-up, images are drawn top-down
        flipped_y = snapshot.grid_size - 1 - y
        return (
            BOARD_MARGIN + x * self.cell_size,
            STATUS_BAR_HEIGHT + BOARD_MARGIN + flipped_y * self.cell_size,
        )

    def _draw_status_bar(
        self,
        draw: ImageDraw.ImageDraw,
        width: int,
        snapshot: GameSnapshot,
        high_score: Optional[int]
    ):
        draw.rectangle([0, 0, width, STATUS_BAR_HEIGHT], fill=hex_to_rgb(ColorScheme.STATUS_BG))

        status = f"Score {snapshot.score}   Time {snapshot.time_left}"
        if high_score is not None:
            status += f"   Best {max(high_score, snapshot.score)}"

        draw.text((BOARD_MARGIN, STATUS_BAR_HEIGHT // 3), status,
                  fill=hex_to_rgb(ColorScheme.STATUS_TEXT), font=self.font)

    def _draw_board(self, draw: ImageDraw.ImageDraw, snapshot: GameSnapshot):
        """Draw grid, food and snake"""
        size = snapshot.grid_size
        board_pixels = size * self.cell_size
        top = STATUS_BAR_HEIGHT + BOARD_MARGIN

        draw.rectangle(
            [BOARD_MARGIN - 1, top - 1, BOARD_MARGIN + board_pixels, top + board_pixels],
            outline=hex_to_rgb(ColorScheme.BORDER),
            width=1
        )

        for i in range(size + 1):
            offset = i * self.cell_size
            draw.line([BOARD_MARGIN + offset, top, BOARD_MARGIN + offset, top + board_pixels],
                      fill=hex_to_rgb(ColorScheme.GRID_LINE), width=1)
            draw.line([BOARD_MARGIN, top + offset, BOARD_MARGIN + board_pixels, top + offset],
                      fill=hex_to_rgb(ColorScheme.GRID_LINE), width=1)

        food_x, food_y = self._cell_origin(snapshot, *snapshot.food)
        self._draw_cell(draw, food_x, food_y, hex_to_rgb(ColorScheme.FOOD), padding=2)

        body_color = hex_to_rgb(ColorScheme.SNAKE)
        for pos_x, pos_y in snapshot.snake[1:]:
            cell_x, cell_y = self._cell_origin(snapshot, pos_x, pos_y)
            self._draw_cell(draw, cell_x, cell_y, body_color, padding=1)

        head_x, head_y = self._cell_origin(snapshot, *snapshot.head)
        self._draw_cell(draw, head_x, head_y, darken_color(ColorScheme.SNAKE, 0.3), padding=0)

        # Eyes
        eye_size = max(2, self.cell_size // 5)
        eye_y = head_y + self.cell_size // 3
        left_eye_x = head_x + self.cell_size // 4
        right_eye_x = head_x + 3 * self.cell_size // 4 - eye_size
        for eye_x in (left_eye_x, right_eye_x):
            draw.ellipse([eye_x, eye_y, eye_x + eye_size, eye_y + eye_size], fill=(255, 255, 255))

    def _draw_game_over(self, draw: ImageDraw.ImageDraw, width: int, height: int, snapshot: GameSnapshot):
        text = "GAME OVER"
        if snapshot.death_reason:
            text += f" ({snapshot.death_reason})"
        bbox = draw.textbbox((0, 0), text, font=self.font)
        text_width = bbox[2] - bbox[0]
        text_height = bbox[3] - bbox[1]
        center_y = STATUS_BAR_HEIGHT + (height - STATUS_BAR_HEIGHT) // 2
        draw.rectangle(
            [0, center_y - text_height, width, center_y + text_height],
            fill=hex_to_rgb(ColorScheme.STATUS_BG)
        )
        draw.text((width // 2 - text_width // 2, center_y - text_height // 2), text,
                  fill=hex_to_rgb(ColorScheme.GAME_OVER_TEXT), font=self.font)

    def _draw_cell(
        self,
        draw: ImageDraw.ImageDraw,
        x: int,
        y: int,
        color: Tuple[int, int, int],
        padding: int = 1
    ):
        """Draw a single cell (for snake body or food)"""
        draw.rectangle(
            [x + padding, y + padding, x + self.cell_size - padding, y + self.cell_size - padding],
            fill=color
        )

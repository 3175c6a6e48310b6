from __future__ import annotations

"""
Pygame front end for Wuweiqi.

Interaction model:
- Click an empty cell to stage a stone there (a pending placement). Clicking
  another cell moves the pending stone and keeps its rotation.
- R or right-click rotates clockwise, Shift+R counter-clockwise.
- Enter confirms the pending placement, Escape cancels it (or quits when
  nothing is pending).
- H asks for a hint (three per game, each more specific), N starts a new
  game, V reveals the hidden rules once the game is over.
- F12 saves a screenshot to $WUWEIQI_GUI_SCREENSHOT_PATH when it is set.

Everything above the "Drawing" section is pure and does not need pygame.
"""

from dataclasses import dataclass
import logging
import math
import os
import pathlib
import random
from typing import List, Optional, Tuple

from .board import BOARD_SIZE, Orientation
from .config import GameConfig
from .engine import check_placement, confirm_placement
from .hints import HintLadder
from .move import Placement, PlacementResult
from .notation import cell_label, final_stats, format_move, orientation_name, recent_moves, result_headline
from .state import GameState, new_game, reset_game, reveal_rules

try:
    import pygame  # type: ignore
except Exception:  # pragma: no cover
    pygame = None  # type: ignore

logger = logging.getLogger(__name__)

SCREENSHOT_ENV = "WUWEIQI_GUI_SCREENSHOT_PATH"


# --- Pure helpers ----------------------------------------------------------------


@dataclass
class PendingPlacement:
    row: int
    col: int
    rotation_count: int

    @property
    def orientation(self) -> Orientation:
        return Orientation.from_rotation_count(self.rotation_count)

    def as_placement(self) -> Placement:
        return Placement(self.row, self.col, self.orientation)


@dataclass
class PlacementDraft:
    """Stages a placement before it is confirmed.

    The rotation count is cumulative so that a renderer can animate a stone
    spinning past North without jumping back; the orientation is the count
    modulo four.
    """

    state: GameState
    rotation_count: int = 0
    pending: Optional[PendingPlacement] = None
    last_result: Optional[PlacementResult] = None

    @property
    def orientation(self) -> Orientation:
        if self.pending is not None:
            return self.pending.orientation
        return Orientation.from_rotation_count(self.rotation_count)

    def select_cell(self, row: int, col: int) -> Tuple[bool, str]:
        error = check_placement(self.state, row, col)
        if error is not None:
            return False, error.value
        if self.pending is not None:
            self.pending = PendingPlacement(row, col, self.pending.rotation_count)
        else:
            self.pending = PendingPlacement(row, col, self.rotation_count)
        return True, ""

    def rotate(self, direction: int = 1) -> Orientation:
        if self.pending is not None:
            self.pending = PendingPlacement(self.pending.row, self.pending.col, self.pending.rotation_count + direction)
        else:
            self.rotation_count += direction
        return self.orientation

    def cancel(self) -> None:
        self.pending = None

    def confirm(self) -> Optional[PlacementResult]:
        if self.pending is None:
            return None
        placement = self.pending.as_placement()
        result = confirm_placement(self.state, placement.row, placement.col, placement.orientation)
        self.state = result.state
        self.last_result = result
        self.pending = None
        return result


def cell_at(pos: Tuple[int, int], origin: Tuple[int, int], cell_px: int, size: int = BOARD_SIZE) -> Optional[Tuple[int, int]]:
    """Board cell under a pixel position, or None outside the grid."""
    x, y = pos[0] - origin[0], pos[1] - origin[1]
    if x < 0 or y < 0:
        return None
    col, row = x // cell_px, y // cell_px
    if row >= size or col >= size:
        return None
    return int(row), int(col)


def eye_offset(orientation: Orientation, radius: float) -> Tuple[int, int]:
    """Pixel offset of the white eye from the stone center (screen y grows downwards)."""
    angle = math.radians(90 * int(orientation))
    return round(radius * math.sin(angle)), round(-radius * math.cos(angle))


def resolve_screenshot_path() -> Optional[pathlib.Path]:
    raw = os.environ.get(SCREENSHOT_ENV)
    if not raw:
        return None
    return pathlib.Path(raw).expanduser()


def describe_players(state: GameState) -> List[str]:
    lines = []
    for player in state.players:
        label = "You" if len(state.players) == 1 else f"Player {player.player_id}"
        marker = "▶ " if player.player_id == state.current_player and not state.is_over else "  "
        lines.append(f"{marker}{label}: {player.stones_remaining} stones, {player.moves_taken} moves")
    return lines


# --- Drawing ---------------------------------------------------------------------

BG = (22, 27, 34)
PANEL = (30, 36, 46)
GRID = (120, 100, 70)
WOOD = (214, 180, 122)
TEXT = (220, 226, 235)
SUB = (164, 174, 187)
ACCENT = (255, 230, 0)
OK = (66, 171, 119)
ERR = (235, 87, 87)

CELL_PX = 56
BOARD_ORIGIN = (24, 24)


def draw_stone(surface, center: Tuple[int, int], orientation: Orientation, radius: int, ghost: bool = False) -> None:
    body = (40, 40, 40) if not ghost else (90, 90, 90)
    pygame.draw.circle(surface, body, center, radius)
    pygame.draw.circle(surface, (245, 245, 245), center, radius, 2)
    dx, dy = eye_offset(orientation, radius * 0.55)
    pygame.draw.circle(surface, (245, 245, 245), (center[0] + dx, center[1] + dy), max(3, radius // 4))


def draw_board(surface, draft: PlacementDraft, font) -> None:
    size_px = CELL_PX * BOARD_SIZE
    ox, oy = BOARD_ORIGIN
    pygame.draw.rect(surface, WOOD, pygame.Rect(ox, oy, size_px, size_px))
    half = CELL_PX // 2
    for i in range(BOARD_SIZE):
        pygame.draw.line(surface, GRID, (ox + half, oy + half + i * CELL_PX), (ox + size_px - half, oy + half + i * CELL_PX))
        pygame.draw.line(surface, GRID, (ox + half + i * CELL_PX, oy + half), (ox + half + i * CELL_PX, oy + size_px - half))
    for row, col, stone in draft.state.board.occupied_cells():
        center = (ox + col * CELL_PX + half, oy + row * CELL_PX + half)
        draw_stone(surface, center, stone.orientation, half - 6)

    if draft.pending is not None:
        center = (ox + draft.pending.col * CELL_PX + half, oy + draft.pending.row * CELL_PX + half)
        draw_stone(surface, center, draft.pending.orientation, half - 6, ghost=True)
        pygame.draw.circle(surface, ACCENT, center, half - 2, 2)

    result = draft.last_result
    if result is not None and result.move is not None:
        move = result.move
        center = (ox + move.col * CELL_PX + half, oy + move.row * CELL_PX + half)
        pygame.draw.circle(surface, OK if move.legal else ERR, center, half - 2, 3)

    for col in range(BOARD_SIZE):
        label = font.render(cell_label(BOARD_SIZE - 1, col)[0], True, SUB)
        surface.blit(label, (ox + col * CELL_PX + half - 4, oy + size_px + 4))


def draw_sidebar(surface, rect, draft: PlacementDraft, ladder: HintLadder, hint: Optional[str], revealed: List[dict], font, small_font) -> None:
    pygame.draw.rect(surface, PANEL, rect, border_radius=8)
    x, y = rect.x + 14, rect.y + 12

    def line(text: str, color=TEXT, use_font=None) -> None:
        nonlocal y
        f = use_font or font
        surface.blit(f.render(text, True, color), (x, y))
        y += f.get_height() + 4

    state = draft.state
    for text in describe_players(state):
        line(text)
    y += 6
    pointing = f"Pointing: {orientation_name(draft.orientation)}"
    if draft.pending is not None:
        pointing += f"  (pending at {cell_label(draft.pending.row, draft.pending.col)})"
    line(pointing, ACCENT)
    line(f"Hints left: {ladder.remaining}", SUB, small_font)
    if hint:
        line(hint, TEXT, small_font)
    y += 6
    line("Recent moves", SUB)
    for move in recent_moves(state):
        line(format_move(move, state.mode), OK if move.legal else ERR, small_font)

    if state.is_over:
        y += 10
        line(result_headline(state), ACCENT)
        for stats in final_stats(state):
            line(f"P{stats.player_id}: {stats.stones_placed} stones in {stats.moves_taken} moves", TEXT, small_font)
        if revealed:
            line("The rules were:", SUB)
            for rule in revealed:
                line(f"{rule['name']}: {rule['description']}", TEXT, small_font)
        else:
            line("Press V to reveal the hidden rules", SUB, small_font)

    hint_text = "Click: stage  R: rotate  Enter: confirm  Esc: cancel  H: hint  N: new"
    surface.blit(small_font.render(hint_text, True, SUB), (rect.x + 14, rect.bottom - 24))


# --- GUI entry -------------------------------------------------------------------


def launch_gui(mode: str = "solo", seed: Optional[int] = None, config: Optional[GameConfig] = None) -> None:  # pragma: no cover
    if pygame is None:
        raise ImportError("pygame is required for the GUI. Install it with `pip install wuweiqi[gui]`.")

    pygame.init()
    pygame.display.set_caption("无为棋 Wuweiqi")
    screen = pygame.display.set_mode((1100, 560))
    clock = pygame.time.Clock()
    font = pygame.font.SysFont("arial", 18)
    small_font = pygame.font.SysFont("arial", 14)

    draft = PlacementDraft(new_game(mode=mode, config=config, rng_seed=seed))
    ladder = HintLadder(draft.state.rule_set, random.Random(seed))
    hint: Optional[str] = None
    revealed: List[dict] = []
    sidebar = pygame.Rect(BOARD_ORIGIN[0] * 2 + CELL_PX * BOARD_SIZE, BOARD_ORIGIN[1], 560, 512)

    running = True
    while running:
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                running = False
            elif event.type == pygame.KEYDOWN:
                if event.key == pygame.K_ESCAPE:
                    if draft.pending is not None:
                        draft.cancel()
                    else:
                        running = False
                elif event.key == pygame.K_r:
                    draft.rotate(-1 if event.mod & pygame.KMOD_SHIFT else 1)
                elif event.key == pygame.K_RETURN:
                    result = draft.confirm()
                    if result is not None and result.move is not None:
                        logger.debug("confirmed %s", format_move(result.move, draft.state.mode))
                elif event.key == pygame.K_h and ladder.remaining > 0:
                    hint = ladder.request()
                elif event.key == pygame.K_n:
                    draft = PlacementDraft(reset_game(draft.state))
                    ladder = HintLadder(draft.state.rule_set)
                    hint, revealed = None, []
                elif event.key == pygame.K_v and draft.state.is_over:
                    revealed = reveal_rules(draft.state)
                elif event.key == pygame.K_F12:
                    path = resolve_screenshot_path()
                    if path is not None:
                        pygame.image.save(screen, str(path))
                        logger.info("screenshot saved to %s", path)
            elif event.type == pygame.MOUSEBUTTONDOWN:
                if event.button == 3:
                    draft.rotate(1)
                elif event.button == 1:
                    cell = cell_at(event.pos, BOARD_ORIGIN, CELL_PX)
                    if cell is not None:
                        ok, reason = draft.select_cell(*cell)
                        if not ok:
                            logger.debug("cannot stage at %s: %s", cell_label(*cell), reason)

        screen.fill(BG)
        draw_board(screen, draft, small_font)
        draw_sidebar(screen, sidebar, draft, ladder, hint, revealed, font, small_font)
        pygame.display.flip()
        clock.tick(60)

    pygame.quit()


if __name__ == "__main__":  # allows `python -m wuweiqi.gui`
    launch_gui()

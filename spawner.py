import random
from typing import Optional, Tuple

from engine2048 import COLS, ROWS, Grid, empties, empty_grid

SMALL_TILE = 2
LARGE_TILE = 4
LARGE_CHANCE = 0.1  # 新数字为 4 的概率


class TileSpawner:
    """在空格随机生成新数字。随机源可注入，便于测试复现。"""

    def __init__(self, rng: Optional[random.Random] = None, large_chance: float = LARGE_CHANCE):
        self.rng = rng or random.Random()
        self.large_chance = large_chance

    def spawn(self, grid: Grid) -> Optional[Tuple[int, int]]:
        """
        在空格随机生成一个 2 或 4（直接写入传入的棋盘）
        返回生成的位置 (r, c)，如果棋盘已满返回 None
        """
        empty_cells = empties(grid)
        if not empty_cells:
            return None

        r, c = self.rng.choice(empty_cells)
        grid[r][c] = LARGE_TILE if self.rng.random() < self.large_chance else SMALL_TILE
        return r, c

    def start_grid(self, rows: int = ROWS, cols: int = COLS) -> Grid:
        """新游戏初始棋盘：随机出现两个数字。"""
        grid = empty_grid(rows, cols)
        self.spawn(grid)
        self.spawn(grid)
        return grid

from typing import Dict, List, NamedTuple, Optional, Tuple

ROWS = 4  # 默认行数
COLS = 4  # 默认列数
TARGET_TILE = 128  # 默认合并上限 / 胜利目标

Tile = Optional[int]  # None 表示空格
Row = List[Tile]
Grid = List[Row]

DIRECTIONS = ("up", "down", "left", "right")

# 把每个方向旋转成"向左"所需的角度
ROTATE_DEG: Dict[str, int] = {
    "up": 90,
    "right": 180,
    "down": 270,
    "left": 0,
}

# 向左移动完成后，转回原方向所需的角度
REVERT_DEG: Dict[str, int] = {
    "up": 270,
    "right": 180,
    "down": 90,
    "left": 0,
}


class MoveOutcome(NamedTuple):
    """一次移动的结果：新棋盘、是否有格子变化、本次得分。"""

    grid: Grid
    moved: bool
    gained: int


def empty_grid(rows: int = ROWS, cols: int = COLS) -> Grid:
    """创建一个空棋盘。"""
    return [[None] * cols for _ in range(rows)]


def copy_grid(grid: Grid) -> Grid:
    """深拷贝二维网格。"""
    return [row[:] for row in grid]


def empties(grid: Grid) -> List[Tuple[int, int]]:
    """按行优先顺序返回所有空格的位置。"""
    return [
        (r, c)
        for r, row in enumerate(grid)
        for c, value in enumerate(row)
        if value is None
    ]


def max_tile(grid: Grid) -> Optional[int]:
    """取得当前最大的数字，空棋盘返回 None。"""
    values = [value for row in grid for value in row if value is not None]
    return max(values) if values else None


def reached(grid: Grid, target: int) -> bool:
    """棋盘上是否存在不小于 target 的数字。"""
    return any(value is not None and value >= target for row in grid for value in row)


def rotate(grid: Grid, deg: int) -> Grid:
    """
    按角度旋转棋盘，返回新棋盘，不修改输入。
    90 / 270 度时行列数互换。棋盘至少要有一行一列。
    """
    if not grid or not grid[0]:
        raise ValueError("Grid must have at least one row and one column")

    n_rows = len(grid)
    n_cols = len(grid[0])

    if deg == 0:
        return copy_grid(grid)

    if deg == 90:
        return [[grid[r][n_cols - c - 1] for r in range(n_rows)] for c in range(n_cols)]

    if deg == 180:
        return [
            [grid[n_rows - r - 1][n_cols - c - 1] for c in range(n_cols)]
            for r in range(n_rows)
        ]

    if deg == 270:
        return [[grid[n_rows - r - 1][c] for r in range(n_rows)] for c in range(n_cols)]

    raise ValueError(f"Unsupported rotation: {deg}. Must be 0, 90, 180 or 270")


def move_row_left(row: Row, ceiling: int = TARGET_TILE) -> Tuple[Row, bool, int]:
    """
    向左挤压并合并一行，返回 (新行, 是否变化, 本行得分)。
    合并结果超过 ceiling 时不合并，两个格子保持原样。
    例如: [2, None, 2, 2] -> [4, 2, None, None], gained = 4
    """
    merged: Row = []
    last: Tile = None
    gained = 0

    for cell in row:
        if cell is None:
            continue

        if last is None:
            last = cell
        elif last == cell and cell * 2 <= ceiling:
            merged.append(cell * 2)
            gained += cell * 2
            last = None
        else:
            merged.append(last)
            last = cell

    if last is not None:
        merged.append(last)

    new_row: Row = merged + [None] * (len(row) - len(merged))
    moved = any(value != new_row[i] for i, value in enumerate(row))
    return new_row, moved, gained


def move_left(grid: Grid, ceiling: int = TARGET_TILE) -> MoveOutcome:
    """整盘向左移动。"""
    new_grid: Grid = []
    moved = False
    total_gain = 0
    for row in grid:
        new_row, row_moved, gain = move_row_left(row, ceiling)
        new_grid.append(new_row)
        moved = moved or row_moved
        total_gain += gain
    return MoveOutcome(new_grid, moved, total_gain)


def move(grid: Grid, direction: str, ceiling: int = TARGET_TILE) -> MoveOutcome:
    """
    按 2048 规则整盘移动：
    先旋转成向左，逐行合并，再转回原方向。
    """
    if direction not in ROTATE_DEG:
        raise ValueError(
            f"Invalid direction: {direction}. Must be 'left', 'right', 'up', or 'down'"
        )

    rotated = rotate(grid, ROTATE_DEG[direction])
    result, moved, gained = move_left(rotated, ceiling)
    return MoveOutcome(rotate(result, REVERT_DEG[direction]), moved, gained)

from typing import Annotated, List, Optional

from pydantic import BaseModel, Field, field_validator, model_validator

TileValue = Annotated[int, Field(strict=True, gt=0)]
Score = Annotated[int, Field(strict=True, ge=0)]


class GameState(BaseModel):
    """一局游戏的存档：棋盘、累计分数、是否已结束。"""

    map: List[List[Optional[TileValue]]]
    score: Score
    finished: Annotated[bool, Field(strict=True)]

    @field_validator("map")
    @classmethod
    def tiles_are_powers_of_two(cls, grid: List[List[Optional[int]]]) -> List[List[Optional[int]]]:
        for row in grid:
            for value in row:
                if value is not None and value & (value - 1):
                    raise ValueError(f"tile {value} is not a power of two")
        return grid

    @model_validator(mode="after")
    def grid_is_rectangular(self) -> "GameState":
        if not self.map or not self.map[0]:
            raise ValueError("grid must have at least one row and one column")
        width = len(self.map[0])
        if any(len(row) != width for row in self.map):
            raise ValueError("grid rows must all have the same length")
        return self

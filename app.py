import logging
import os
import random
from typing import Optional, Tuple

from flask import Flask, current_app, jsonify, redirect, request, session, url_for

from engine2048 import (
    COLS,
    DIRECTIONS,
    ROWS,
    TARGET_TILE,
    MoveOutcome,
    copy_grid,
    max_tile,
    move,
    reached,
)
from models import GameState
from spawner import LARGE_CHANCE, TileSpawner
from storage import SnapshotStore

logger = logging.getLogger(__name__)

app = Flask(__name__)
app.config["SECRET_KEY"] = os.environ.get("GAME2048_SECRET_KEY", "change_this_to_a_random_secret_key")

# 游戏配置
app.config["GRID_ROWS"] = ROWS
app.config["GRID_COLS"] = COLS
app.config["TILE_CEILING"] = TARGET_TILE   # 合并结果不能超过的数字
app.config["WIN_TARGET"] = TARGET_TILE     # 达到该数字即结束
app.config["SPAWN_LARGE_CHANCE"] = LARGE_CHANCE
app.config["SPAWN_SEED"] = None            # 测试时可固定随机种子


def get_spawner() -> TileSpawner:
    """按当前配置构造随机数字生成器。"""
    seed = current_app.config["SPAWN_SEED"]
    rng = random.Random(seed) if seed is not None else None
    return TileSpawner(rng=rng, large_chance=current_app.config["SPAWN_LARGE_CHANCE"])


def get_store() -> SnapshotStore:
    """当前用户的存档（保存在 session 中）。"""
    return SnapshotStore(session)


def new_game(spawner: TileSpawner, rows: int = ROWS, cols: int = COLS) -> GameState:
    """初始化一局新游戏。"""
    return GameState(map=spawner.start_grid(rows, cols), score=0, finished=False)


def play_turn(
    state: GameState,
    direction: str,
    spawner: TileSpawner,
    ceiling: int = TARGET_TILE,
    target: int = TARGET_TILE,
) -> Tuple[GameState, Optional[MoveOutcome]]:
    """
    执行一回合：移动、生成新数字、累计分数、判断是否结束。
    游戏已结束或移动无效时原样返回状态。
    """
    if state.finished:
        return state, None

    outcome = move(state.map, direction, ceiling)
    if not outcome.moved:
        return state, outcome

    # 结果棋盘复制后再生成新数字
    new_map = copy_grid(outcome.grid)
    spawner.spawn(new_map)

    next_state = GameState(
        map=new_map,
        score=state.score + outcome.gained,
        finished=reached(new_map, target),
    )
    return next_state, outcome


def current_game(store: SnapshotStore, spawner: TileSpawner) -> GameState:
    """读取存档，没有可用存档时开始新游戏。"""
    state = store.load()
    if state is None:
        state = start_new_game(store, spawner)
    return state


def start_new_game(store: SnapshotStore, spawner: TileSpawner) -> GameState:
    """开始新游戏并保存。"""
    state = new_game(spawner, current_app.config["GRID_ROWS"], current_app.config["GRID_COLS"])
    store.save(state)
    logger.info("Started new %sx%s game", len(state.map), len(state.map[0]))
    return state


def requested_direction() -> Optional[str]:
    """从表单或 JSON 请求体中取出方向。"""
    direction = request.form.get("direction")
    if direction is None:
        body = request.get_json(silent=True)
        if isinstance(body, dict):
            direction = body.get("direction")
    return direction


@app.route("/")
def index():
    """返回当前游戏状态。"""
    state = current_game(get_store(), get_spawner())
    return jsonify(
        board=state.map,
        score=state.score,
        finished=state.finished,
        max_tile=max_tile(state.map),
        win_target=current_app.config["WIN_TARGET"],
    )


@app.route("/move", methods=["POST"])
def move_route():
    """处理移动操作。"""
    store = get_store()
    spawner = get_spawner()
    state = current_game(store, spawner)

    direction = requested_direction()
    if direction not in DIRECTIONS:
        return redirect(url_for("index"))

    next_state, _ = play_turn(
        state,
        direction,
        spawner,
        ceiling=current_app.config["TILE_CEILING"],
        target=current_app.config["WIN_TARGET"],
    )

    if next_state is not state:
        store.save(next_state)
        if next_state.finished:
            logger.info("Game finished with score %s", next_state.score)

    return redirect(url_for("index"))


@app.route("/reset", methods=["POST"])
def reset():
    """重新开始一局游戏。"""
    store = get_store()
    store.clear()
    start_new_game(store, get_spawner())
    return redirect(url_for("index"))


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO)
    app.run(debug=True)

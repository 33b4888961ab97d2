"""Data models used by the UI."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict

from oiltype.core.modes import FIXED_COUNT_TARGET, GameMode


@dataclass(frozen=True)
class ModeInfo:
    """Label and one-line rule shown for a mode."""

    name: str
    rule: str


MODE_INFO: Dict[GameMode, ModeInfo] = {
    GameMode.FREE: ModeInfo("FREE (無限)", "時間制限なし。自分のペースで打ち続ける。"),
    GameMode.TIME_ATTACK: ModeInfo("TIME ATTACK (タイムアタック)", "60秒間の限界に挑戦。単語リストはループ。"),
    GameMode.SURVIVAL: ModeInfo("SURVIVAL (サバイバル)", "初期時間7秒。正解ごとに [文字数 × 0.1秒] 回復。"),
    GameMode.SUDDEN_DEATH: ModeInfo("SUDDEN DEATH (突然死)", "1文字でもミスしたら即終了。"),
    GameMode.FIXED_COUNT: ModeInfo("FIXED COUNT (30連打)", "リストをループして合計30ワードを打ち抜く。"),
    GameMode.COMPETITIVE: ModeInfo("COMPETITIVE (競技)", "60秒間。リトライごとに新しい単語に挑む。"),
}


def mode_info(mode: GameMode) -> ModeInfo:
    return MODE_INFO[mode]


@dataclass
class ProgressLabel:
    """Progress counter shown in the HUD, e.g. ``3/30``."""

    current: int
    total: int

    def __str__(self) -> str:
        return f"{self.current}/{self.total}"


def progress_label(mode: GameMode, word_index: int, total_completed: int, queue_length: int) -> ProgressLabel:
    """Fixed-count mode counts toward its target; other modes show the queue position."""
    if mode is GameMode.FIXED_COUNT:
        return ProgressLabel(min(total_completed + 1, FIXED_COUNT_TARGET), FIXED_COUNT_TARGET)
    if queue_length == 0:
        return ProgressLabel(0, 0)
    return ProgressLabel(word_index + 1, queue_length)

from __future__ import annotations

import html
import logging
from typing import Dict, List, Optional

from PySide6.QtCore import Qt, QTimer
from PySide6.QtGui import QCloseEvent, QFont, QKeySequence, QShortcut
from PySide6.QtWidgets import (
    QComboBox,
    QHBoxLayout,
    QLabel,
    QLineEdit,
    QListWidget,
    QMainWindow,
    QPushButton,
    QStackedWidget,
    QVBoxLayout,
    QWidget,
)

from oiltype.core.modes import GameMode
from oiltype.core.progress import ProgressStore
from oiltype.core.session import SessionEvent, SessionState, TypingSession
from oiltype.core.stats import StatsSummary, words_per_minute
from oiltype.core.words import DEFAULT_WORDS, WordListRepository, WordRecord
from oiltype.ui.colors import GameColors, clock_color
from oiltype.ui.models import mode_info, progress_label
from oiltype.ui.qt_scheduler import QtScheduler
from oiltype.ui.word_list_dialog import WordListDialog

logger = logging.getLogger(__name__)

CUSTOM_LIST_KEY = "__custom__"


class MainWindow(QMainWindow):
    def __init__(self, word_lists: WordListRepository, progress_store: ProgressStore) -> None:
        super().__init__()
        self._word_lists = word_lists
        self._progress_store = progress_store
        self._mode_buttons: Dict[GameMode, QPushButton] = {}

        self.setWindowTitle("oiltype")
        self.setMinimumSize(900, 620)

        self._session = TypingSession(
            self._words_for_key(self._default_list_key()),
            GameMode.FIXED_COUNT,
            scheduler=QtScheduler(self),
            word_source=self._selected_words,
        )
        self._session.subscribe(self._on_session_event)

        self._build_ui()
        self._refresh()

    # ------------------------------------------------------------------
    # Word lists
    # ------------------------------------------------------------------

    def _default_list_key(self) -> str:
        lists = self._word_lists.all()
        return lists[0].key if lists else ""

    def _selected_words(self) -> List[WordRecord]:
        return self._words_for_key(self._list_combo.currentData())

    def _words_for_key(self, key: str) -> List[WordRecord]:
        if key == CUSTOM_LIST_KEY:
            return self._progress_store.load_custom_words()
        try:
            return list(self._word_lists.get(key).words)
        except KeyError:
            logger.warning("Word list %r not found, using built-in words", key)
            return list(DEFAULT_WORDS)

    # ------------------------------------------------------------------
    # Layout
    # ------------------------------------------------------------------

    def _build_ui(self) -> None:
        self.setStyleSheet(f"QMainWindow {{ background: {GameColors.BG_MAIN}; }}")
        root = QWidget()
        layout = QVBoxLayout(root)
        layout.setContentsMargins(32, 24, 32, 24)
        layout.setSpacing(16)

        header = QHBoxLayout()
        for mode in GameMode:
            button = QPushButton(mode.value.upper())
            button.setCheckable(True)
            button.setCursor(Qt.PointingHandCursor)
            button.clicked.connect(lambda _checked=False, m=mode: self._change_mode(m))
            header.addWidget(button)
            self._mode_buttons[mode] = button
        header.addStretch(1)

        self._list_combo = QComboBox()
        for word_list in self._word_lists.all():
            self._list_combo.addItem(word_list.title, word_list.key)
        if self._progress_store.load_custom_words():
            self._list_combo.addItem("カスタム", CUSTOM_LIST_KEY)
        self._list_combo.currentIndexChanged.connect(self._change_word_list)
        header.addWidget(self._list_combo)

        edit_button = QPushButton("EDIT WORDS")
        edit_button.setCursor(Qt.PointingHandCursor)
        edit_button.clicked.connect(self._edit_custom_words)
        header.addWidget(edit_button)
        layout.addLayout(header)

        self._mode_label = QLabel()
        self._mode_label.setStyleSheet(f"color: {GameColors.TEXT_SECONDARY}; font-size: 12px;")
        layout.addWidget(self._mode_label)

        hud = QHBoxLayout()
        self._clock_label = QLabel()
        self._clock_label.setFont(QFont("monospace", 28, QFont.Bold))
        self._progress_label = QLabel()
        self._progress_label.setFont(QFont("monospace", 28, QFont.Bold))
        self._progress_label.setStyleSheet(f"color: {GameColors.TEXT_PRIMARY};")
        hud.addWidget(self._clock_label)
        hud.addStretch(1)
        hud.addWidget(self._progress_label)
        layout.addLayout(hud)

        self._stack = QStackedWidget()
        self._stack.addWidget(self._build_play_screen())
        self._stack.addWidget(self._build_result_screen())
        layout.addWidget(self._stack, 1)

        # Hidden input: every edit is one fragment handed to the session.
        self.input_box = QLineEdit()
        self.input_box.setFixedHeight(0)
        self.input_box.setStyleSheet("background: transparent; border: none; color: transparent;")
        self.input_box.textEdited.connect(self._on_text_edited)
        layout.addWidget(self.input_box)

        self.setCentralWidget(root)

        self._exit_shortcut = QShortcut(QKeySequence(Qt.Key_Escape), self)
        self._exit_shortcut.activated.connect(self._session.exit)
        self._retry_shortcut = QShortcut(QKeySequence(Qt.CTRL | Qt.Key_R), self)
        self._retry_shortcut.activated.connect(self._retry)

        self.input_box.setFocus()

    def _build_play_screen(self) -> QWidget:
        screen = QWidget()
        layout = QVBoxLayout(screen)
        layout.setSpacing(24)

        self._ime_label = QLabel("日本語入力：ON : 半角英数に切り替えてください")
        self._ime_label.setAlignment(Qt.AlignCenter)
        self._ime_label.setStyleSheet(
            f"color: white; background: {GameColors.DANGER}; border-radius: 16px; padding: 12px; font-weight: 900;"
        )
        self._ime_label.setVisible(False)
        layout.addWidget(self._ime_label)

        layout.addStretch(1)
        self._display_label = QLabel()
        self._display_label.setAlignment(Qt.AlignCenter)
        self._display_label.setFont(QFont("", 64, QFont.Black))
        self._display_label.setStyleSheet(f"color: {GameColors.TEXT_PRIMARY};")
        layout.addWidget(self._display_label)

        self._romaji_label = QLabel()
        self._romaji_label.setAlignment(Qt.AlignCenter)
        self._romaji_label.setTextFormat(Qt.RichText)
        self._romaji_label.setFont(QFont("monospace", 36, QFont.Bold))
        layout.addWidget(self._romaji_label)

        self._hint_label = QLabel("ANY KEY TO START")
        self._hint_label.setAlignment(Qt.AlignCenter)
        self._hint_label.setStyleSheet(f"color: {GameColors.ACCENT}; font-weight: 900; letter-spacing: 4px;")
        layout.addWidget(self._hint_label)
        layout.addStretch(1)

        self._live_stats_label = QLabel()
        self._live_stats_label.setAlignment(Qt.AlignCenter)
        self._live_stats_label.setStyleSheet(f"color: {GameColors.TEXT_SECONDARY}; font-family: monospace;")
        layout.addWidget(self._live_stats_label)
        return screen

    def _build_result_screen(self) -> QWidget:
        screen = QWidget()
        screen.setStyleSheet(
            f"background: {GameColors.CARD_BG}; border: 1px solid {GameColors.CARD_BORDER}; border-radius: 24px;"
        )
        layout = QVBoxLayout(screen)
        layout.setContentsMargins(32, 32, 32, 32)

        title = QLabel("RESULT")
        title.setAlignment(Qt.AlignCenter)
        title.setStyleSheet(f"color: {GameColors.TEXT_PRIMARY}; font-size: 36px; font-weight: 900; border: none;")
        layout.addWidget(title)

        self._result_label = QLabel()
        self._result_label.setAlignment(Qt.AlignCenter)
        self._result_label.setStyleSheet(f"color: {GameColors.ACCENT}; font-size: 20px; border: none;")
        layout.addWidget(self._result_label)

        self._best_label = QLabel()
        self._best_label.setAlignment(Qt.AlignCenter)
        self._best_label.setStyleSheet(f"color: {GameColors.TEXT_MUTED}; border: none;")
        layout.addWidget(self._best_label)

        self._samples_list = QListWidget()
        self._samples_list.setStyleSheet(f"color: {GameColors.TEXT_SECONDARY}; font-family: monospace;")
        layout.addWidget(self._samples_list, 1)

        buttons = QHBoxLayout()
        retry_button = QPushButton("RETRY")
        retry_button.clicked.connect(self._retry)
        buttons.addStretch(1)
        buttons.addWidget(retry_button)
        buttons.addStretch(1)
        layout.addLayout(buttons)
        return screen

    # ------------------------------------------------------------------
    # Input and session events
    # ------------------------------------------------------------------

    def _on_text_edited(self, text: str) -> None:
        self.input_box.blockSignals(True)
        self.input_box.clear()
        self.input_box.blockSignals(False)
        result = self._session.submit(text)
        self._ime_label.setVisible(result.composition_active)
        self._refresh()

    def _on_session_event(self, event: SessionEvent, session: TypingSession) -> None:
        if event is SessionEvent.MISMATCH:
            self._flash_mismatch()
        elif event is SessionEvent.TICK:
            self._refresh_clock()
            return
        elif event is SessionEvent.FINISHED:
            self._show_result()
        self._refresh()

    def _flash_mismatch(self, duration_ms: int = 150) -> None:
        self._romaji_label.setStyleSheet(f"background: {GameColors.DANGER}; border-radius: 24px;")
        QTimer.singleShot(duration_ms, lambda: self._romaji_label.setStyleSheet(""))

    def _change_mode(self, mode: GameMode) -> None:
        self._session.set_mode(mode)
        self._stack.setCurrentIndex(0)
        self._refresh()
        self.input_box.setFocus()

    def _change_word_list(self, _index: int) -> None:
        key = self._list_combo.currentData()
        self._session.reset(self._words_for_key(key))
        self._stack.setCurrentIndex(0)
        self._refresh()
        self.input_box.setFocus()

    def _edit_custom_words(self) -> None:
        dialog = WordListDialog(self._progress_store.load_custom_words(), self)
        if not dialog.exec():
            self.input_box.setFocus()
            return
        self._progress_store.save_custom_words(dialog.words)
        logger.info("Saved %d custom words", len(dialog.words))
        index = self._list_combo.findData(CUSTOM_LIST_KEY)
        if index < 0:
            self._list_combo.addItem("カスタム", CUSTOM_LIST_KEY)
            index = self._list_combo.count() - 1
        if index == self._list_combo.currentIndex():
            self._change_word_list(index)
        else:
            self._list_combo.setCurrentIndex(index)

    def _retry(self) -> None:
        self._session.retry()
        self._stack.setCurrentIndex(0)
        self._refresh()
        self.input_box.setFocus()

    def _show_result(self) -> None:
        summary: Optional[StatsSummary] = self._session.summary()
        if summary is None:
            return
        if summary.correct_keystrokes + summary.incorrect_keystrokes > 0:
            best = self._progress_store.record_result(self._session.mode.value, summary)
        else:
            best = self._progress_store.get_mode_progress(self._session.mode.value)
        self._result_label.setText(
            f"打鍵数 {summary.correct_keystrokes}   WPM {summary.wpm:.0f}   "
            f"正確性 {summary.accuracy:.0f}%   経過時間 {summary.elapsed_seconds:.1f}s"
        )
        self._best_label.setText(f"BEST  WPM {best.best_wpm:.0f}  /  {best.best_accuracy:.0f}%")
        self._samples_list.clear()
        for i, sample in enumerate(summary.samples, start=1):
            self._samples_list.addItem(f"#{i:>3}  {sample.wpm:6.1f} WPM")
        self._stack.setCurrentIndex(1)

    # ------------------------------------------------------------------
    # Rendering
    # ------------------------------------------------------------------

    def _refresh(self) -> None:
        session = self._session
        for mode, button in self._mode_buttons.items():
            button.setChecked(mode is session.mode)

        info = mode_info(session.mode)
        self._mode_label.setText(f"{info.name}  :  {info.rule}")
        self._progress_label.setText(
            str(
                progress_label(
                    session.mode,
                    session.current_word_index,
                    session.total_words_completed,
                    len(session.words),
                )
            )
        )
        self._refresh_clock()

        word = session.current_word
        self._display_label.setText(word.display if word else "")
        typed = html.escape(session.typed_prefix)
        remaining = html.escape(session.remaining_romaji)
        self._romaji_label.setText(
            f'<span style="color:{GameColors.TYPED}">{typed}</span>'
            f'<span style="color:{GameColors.ACCENT}">|</span>'
            f'<span style="color:{GameColors.REMAINING}">{remaining}</span>'
        )
        self._hint_label.setVisible(session.state is SessionState.IDLE and word is not None)

        if session.state is SessionState.PLAYING:
            wpm = words_per_minute(session.correct_keystrokes, self._session.elapsed_seconds)
            self._live_stats_label.setText(
                f"{wpm:.0f} WPM    KEYSTROKES {session.correct_keystrokes}    "
                f"MISSES {session.incorrect_keystrokes}"
            )
        else:
            self._live_stats_label.setText("")

    def _refresh_clock(self) -> None:
        time_left = self._session.time_left
        if time_left is None:
            self._clock_label.setText("")
            return
        self._clock_label.setText(f"{time_left:.1f}s")
        self._clock_label.setStyleSheet(f"color: {clock_color(time_left)};")

    def closeEvent(self, event: QCloseEvent) -> None:
        """Stop the running session before the window goes away, without recording it."""
        self._session.unsubscribe(self._on_session_event)
        self._session.exit()
        super().closeEvent(event)

from __future__ import annotations

from typing import List, Optional, Sequence, Tuple

from PySide6.QtWidgets import (
    QAbstractItemView,
    QDialog,
    QHBoxLayout,
    QHeaderView,
    QLabel,
    QMessageBox,
    QPushButton,
    QTableWidget,
    QTableWidgetItem,
    QVBoxLayout,
    QWidget,
)

from oiltype.core.words import WordRecord, build_custom_words
from oiltype.ui.colors import GameColors


class WordListDialog(QDialog):
    """Editor for the custom word list: one row per word, display and romaji."""

    def __init__(self, words: Sequence[WordRecord], parent: Optional[QWidget] = None) -> None:
        super().__init__(parent)
        self._words: List[WordRecord] = []
        self.setWindowTitle("単語リスト設定")
        self.setMinimumSize(520, 420)
        self.setStyleSheet(f"QDialog {{ background: {GameColors.BG_MAIN}; color: {GameColors.TEXT_PRIMARY}; }}")

        layout = QVBoxLayout(self)
        self._count_label = QLabel()
        self._count_label.setStyleSheet(f"color: {GameColors.TEXT_SECONDARY}; font-size: 12px;")
        layout.addWidget(self._count_label)

        self._table = QTableWidget(0, 2)
        self._table.setHorizontalHeaderLabels(["日本語", "romaji"])
        self._table.horizontalHeader().setSectionResizeMode(QHeaderView.Stretch)
        self._table.setSelectionBehavior(QAbstractItemView.SelectRows)
        layout.addWidget(self._table, 1)

        for word in words or [WordRecord(id="", display="", romaji="")]:
            self._append_row(word.display, word.romaji)

        buttons = QHBoxLayout()
        add_button = QPushButton("単語を追加")
        add_button.clicked.connect(lambda: self._append_row("", ""))
        remove_button = QPushButton("削除")
        remove_button.clicked.connect(self._remove_selected)
        save_button = QPushButton("保存して練習開始")
        save_button.setDefault(True)
        save_button.clicked.connect(self._save)
        cancel_button = QPushButton("キャンセル")
        cancel_button.clicked.connect(self.reject)
        buttons.addWidget(add_button)
        buttons.addWidget(remove_button)
        buttons.addStretch(1)
        buttons.addWidget(cancel_button)
        buttons.addWidget(save_button)
        layout.addLayout(buttons)

    @property
    def words(self) -> List[WordRecord]:
        """Words accepted by the last successful save."""
        return list(self._words)

    def _append_row(self, display: str, romaji: str) -> None:
        row = self._table.rowCount()
        self._table.insertRow(row)
        self._table.setItem(row, 0, QTableWidgetItem(display))
        self._table.setItem(row, 1, QTableWidgetItem(romaji))
        self._update_count()

    def _remove_selected(self) -> None:
        rows = sorted({index.row() for index in self._table.selectedIndexes()}, reverse=True)
        for row in rows:
            self._table.removeRow(row)
        if self._table.rowCount() == 0:
            self._append_row("", "")
        self._update_count()

    def _update_count(self) -> None:
        self._count_label.setText(f"現在の単語数: {self._table.rowCount()}")

    def _rows(self) -> List[Tuple[str, str]]:
        rows = []
        for row in range(self._table.rowCount()):
            display = self._table.item(row, 0)
            romaji = self._table.item(row, 1)
            rows.append((display.text() if display else "", romaji.text() if romaji else ""))
        return rows

    def _save(self) -> None:
        try:
            self._words = build_custom_words(self._rows())
        except ValueError as e:
            QMessageBox.warning(self, "単語リスト設定", str(e))
            return
        self.accept()

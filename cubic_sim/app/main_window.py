# cubic_sim/app/main_window.py
from __future__ import annotations

import logging
from typing import Callable, Dict, List, Optional

from PySide6.QtCore import QTimer
from PySide6.QtGui import QCloseEvent
from PySide6.QtWidgets import (
    QGridLayout,
    QHBoxLayout,
    QLabel,
    QLineEdit,
    QListWidget,
    QMainWindow,
    QMessageBox,
    QPushButton,
    QSpinBox,
    QVBoxLayout,
    QWidget,
)

from cubic_sim.config import EngineConfig, RenderConfig
from cubic_sim.core.engine import CubeEngine, EngineEvent, MoveEvent, MoveResult
from cubic_sim.logic.moves import ALL_MOVES, Move, parse_sequence
from cubic_sim.render.cube_gl_widget import CubeGLWidget

logger = logging.getLogger(__name__)


def qt_scheduler(delay: float, callback: Callable[[], None]) -> None:
    """Programa `callback` en el loop de Qt tras `delay` segundos."""
    QTimer.singleShot(int(delay * 1000), callback)


class MainWindow(QMainWindow):
    """Ventana principal de la aplicación (UI) para el simulador 3D del cubo.

    Esta clase coordina:
    - El motor del cubo (`CubeEngine`), creado en modo animado.
    - La visualización y animación 3D (`CubeGLWidget`).
    - Los botones de giro, Scramble, Solve, Stop, Undo y Reset.
    """

    def __init__(
        self,
        engine_config: Optional[EngineConfig] = None,
        render_config: Optional[RenderConfig] = None,
    ) -> None:
        """Inicializa la ventana principal, crea la UI y conecta señales."""
        super().__init__()
        self.setWindowTitle("Cubic 3D - PySide6")

        # --- Motor + render ---
        self.engine: CubeEngine = CubeEngine(
            config=engine_config, scheduler=qt_scheduler, animated=True
        )
        self.gl_widget: CubeGLWidget = CubeGLWidget(self.engine, render_config, self)

        # --- UI ---
        root = QWidget()
        root_layout = QHBoxLayout(root)
        root_layout.addWidget(self.gl_widget, 1)

        panel = QWidget()
        panel_layout = QVBoxLayout(panel)
        panel.setFixedWidth(320)

        self.lbl_state = QLabel("")
        panel_layout.addWidget(self.lbl_state)
        self.lbl_active = QLabel("")
        panel_layout.addWidget(self.lbl_active)

        # Giros: una fila por eje (U U' D D' / L L' R R' / F F' B B')
        panel_layout.addWidget(QLabel("Giros"))
        grid = QGridLayout()
        self.move_buttons: Dict[Move, QPushButton] = {}
        for i, move in enumerate(ALL_MOVES):
            btn = QPushButton(move.label.replace("'", "′"))
            btn.clicked.connect(lambda _checked=False, m=move: self.on_move(m))
            grid.addWidget(btn, i // 4, i % 4)
            self.move_buttons[move] = btn
        panel_layout.addLayout(grid)

        # Scramble
        panel_layout.addWidget(QLabel("Scramble (mezclar)"))
        row_scr = QHBoxLayout()
        self.spin_scramble = QSpinBox()
        self.spin_scramble.setRange(1, 200)
        self.spin_scramble.setValue(self.engine.config.scramble_length)
        self.btn_scramble = QPushButton("Scramble")
        row_scr.addWidget(self.spin_scramble, 1)
        row_scr.addWidget(self.btn_scramble, 1)
        panel_layout.addLayout(row_scr)

        # Aplicar secuencia
        panel_layout.addWidget(QLabel("Aplicar secuencia (ej: R U R' U')"))
        self.txt_seq = QLineEdit()
        self.txt_seq.setPlaceholderText("Ej: R U R' U'")
        panel_layout.addWidget(self.txt_seq)
        self.btn_apply = QPushButton("Aplicar")
        panel_layout.addWidget(self.btn_apply)

        # Solve (reproducción inversa del historial)
        row_main = QHBoxLayout()
        self.btn_solve = QPushButton("Solve")
        self.btn_stop = QPushButton("Stop")
        self.btn_undo = QPushButton("Undo")
        self.btn_reset = QPushButton("Reset")
        row_main.addWidget(self.btn_solve)
        row_main.addWidget(self.btn_stop)
        row_main.addWidget(self.btn_undo)
        row_main.addWidget(self.btn_reset)
        panel_layout.addLayout(row_main)

        # Historial (movimientos)
        panel_layout.addWidget(QLabel("Historial de movimientos"))
        self.list_history = QListWidget()
        panel_layout.addWidget(self.list_history, 1)

        root_layout.addWidget(panel)
        self.setCentralWidget(root)

        # --- Conexiones ---
        self.btn_scramble.clicked.connect(self.on_scramble)
        self.btn_apply.clicked.connect(self.on_apply_sequence)
        self.btn_solve.clicked.connect(self.on_solve)
        self.btn_stop.clicked.connect(self.on_stop)
        self.btn_undo.clicked.connect(self.on_undo)
        self.btn_reset.clicked.connect(self.on_reset)

        # Eventos del motor
        self.engine.subscribe(EngineEvent.MOVE_STARTED, self.on_move_started)
        self.engine.subscribe(EngineEvent.MOVE_FINISHED, self.on_move_finished)
        self.engine.subscribe(EngineEvent.SOLVED, self.on_solved)

        # Atajos
        self.btn_undo.setShortcut("Ctrl+Z")
        self.btn_reset.setShortcut("Ctrl+R")

        self._refresh()

    # -------------------
    # Helpers UI
    # -------------------
    def _refresh(self) -> None:
        """Actualiza labels, historial y disponibilidad de botones según el motor."""
        self.lbl_state.setText(
            "Estado: resuelto ✅" if self.engine.is_solved() else "Estado: mezclado 🔄"
        )
        active = self.engine.active_move
        self.lbl_active.setText(f"Giro actual: {active.label}" if active else "")

        history: List[str] = [m.label for m in self.engine.history]
        shown = [self.list_history.item(i).text() for i in range(self.list_history.count())]
        if shown != history:
            self.list_history.clear()
            self.list_history.addItems(history)
            self.list_history.scrollToBottom()

        self._set_controls_enabled(not self.engine.busy)
        self.btn_stop.setEnabled(self.engine.driver_kind is not None)

    def _set_controls_enabled(self, enabled: bool) -> None:
        """Habilita o deshabilita los controles que piden giros al motor.

        Args:
            enabled: True para habilitar; False mientras el motor está ocupado.
        """
        for btn in self.move_buttons.values():
            btn.setEnabled(enabled)
        self.btn_scramble.setEnabled(enabled)
        self.spin_scramble.setEnabled(enabled)
        self.btn_apply.setEnabled(enabled)
        self.txt_seq.setEnabled(enabled)
        self.btn_solve.setEnabled(enabled and bool(self.engine.history))
        self.btn_undo.setEnabled(enabled and bool(self.engine.history))

    def _report(self, result: MoveResult, what: str) -> None:
        if result is MoveResult.REJECTED_BUSY:
            self.statusBar().showMessage(f"{what}: el cubo está ocupado.", 1500)
        elif result is MoveResult.HISTORY_EMPTY:
            self.statusBar().showMessage(f"{what}: no hay movimientos que deshacer.", 1500)
        self._refresh()

    # -------------------
    # Eventos del motor
    # -------------------
    def on_move_started(self, event: Optional[MoveEvent]) -> None:
        self._refresh()

    def on_move_finished(self, event: Optional[MoveEvent]) -> None:
        self._refresh()

    def on_solved(self, event: Optional[MoveEvent]) -> None:
        self.statusBar().showMessage("¡Cubo resuelto!", 3000)
        self._refresh()

    # -------------------
    # Botones
    # -------------------
    def on_move(self, move: Move) -> None:
        self._report(self.engine.apply_move(move, record=True), move.label)

    def on_scramble(self) -> None:
        """Mezcla el cubo aplicando N giros aleatorios (quedan en el historial)."""
        n = int(self.spin_scramble.value())
        self._report(self.engine.scramble(n), "Scramble")

    def on_apply_sequence(self) -> None:
        """Aplica una secuencia ingresada por el usuario (ej: 'R U R' U'')."""
        text = self.txt_seq.text().strip()
        if not text:
            return

        try:
            moves = parse_sequence(text)
        except ValueError as exc:
            QMessageBox.warning(self, "Secuencia inválida", str(exc))
            return

        self._report(self.engine.play_sequence(moves), "Secuencia")

    def on_solve(self) -> None:
        self._report(self.engine.solve(), "Solve")

    def on_stop(self) -> None:
        if self.engine.cancel():
            self.statusBar().showMessage("Detenido.", 1500)
        self._refresh()

    def on_undo(self) -> None:
        """Revierte el último movimiento (si existe historial y no hay animación)."""
        self._report(self.engine.undo(), "Undo")

    def on_reset(self) -> None:
        """Resetea el cubo, el historial y cualquier animación en curso."""
        self.gl_widget.cancel_animation()
        self.engine.reset()
        logger.info("Cubo reiniciado")
        self.gl_widget.update()
        self._refresh()

    def closeEvent(self, event: QCloseEvent) -> None:
        """Evento de cierre: corta cualquier scramble/solve pendiente."""
        self.engine.cancel()
        self.gl_widget.cancel_animation()
        event.accept()

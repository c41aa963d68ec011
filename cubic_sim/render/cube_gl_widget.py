# cubic_sim/render/cube_gl_widget.py
from __future__ import annotations

from typing import Dict, List, Optional, Set, Tuple

from PySide6.QtCore import QPoint, QTimer, Qt
from PySide6.QtGui import QMouseEvent, QWheelEvent
from PySide6.QtOpenGLWidgets import QOpenGLWidget

from OpenGL.GL import (
    glBegin,
    glClear,
    glClearColor,
    glColor3f,
    glEnable,
    glEnd,
    glLoadIdentity,
    glMatrixMode,
    glPopMatrix,
    glPushMatrix,
    glRotatef,
    glTranslatef,
    glVertex3f,
    glViewport,
    GL_COLOR_BUFFER_BIT,
    GL_DEPTH_BUFFER_BIT,
    GL_DEPTH_TEST,
    GL_MODELVIEW,
    GL_PROJECTION,
    GL_QUADS,
)
from OpenGL.GLU import gluPerspective

from cubic_sim.config import RenderConfig
from cubic_sim.core.cube_model import Cubie
from cubic_sim.core.engine import CubeEngine, EngineEvent, MoveEvent
from cubic_sim.logic.moves import AXIS_VECTOR, Axis, Vec3i
from cubic_sim.logic.quaternion import to_axis_angle

Vec3f = Tuple[float, float, float]

# Normal de cada cara de un cubie -> color del sticker en el estado resuelto.
FACE_COLORS: Dict[Vec3i, Vec3f] = {
    (0, 0, 1): (0.85, 0.05, 0.05),   # frente: rojo
    (1, 0, 0): (0.0, 0.35, 1.0),     # derecha: azul
    (0, 0, -1): (1.0, 0.5, 0.0),     # atrás: naranja
    (-1, 0, 0): (0.0, 0.75, 0.0),    # izquierda: verde
    (0, 1, 0): (1.0, 1.0, 1.0),      # arriba: blanco
    (0, -1, 0): (1.0, 0.9, 0.0),     # abajo: amarillo
}
PLASTIC: Vec3f = (0.05, 0.05, 0.06)


class CubeGLWidget(QOpenGLWidget):
    """Widget OpenGL que dibuja los 27 cubies del motor y anima cada giro.

    Características:
    - Render OpenGL clásico (sin shaders).
    - Cada cubie se dibuja en su posición lógica con su rotación neta.
    - Escucha MOVE_STARTED del motor, anima la capa con QTimer y al terminar
      llama a `engine.finish_move()` para confirmar el estado.
    - Orbit con botón derecho y zoom con la rueda.
    """

    def __init__(self, engine: CubeEngine, config: Optional[RenderConfig] = None, parent=None) -> None:
        """Crea el widget y se suscribe a los eventos del motor.

        Args:
            engine: Motor del cubo (debe crearse con `animated=True`).
            config: Parámetros de cámara y animación.
            parent: Widget padre (Qt), opcional.
        """
        super().__init__(parent)
        self.engine: CubeEngine = engine
        self.config: RenderConfig = config if config is not None else RenderConfig()

        # Cámara / orbit
        self.yaw, self.pitch, self.distance = self.config.camera

        self._last_mouse_pos: QPoint = QPoint()
        self._orbiting: bool = False

        # Animación
        self.animating: bool = False
        self.anim_axis: Optional[Axis] = None
        self.anim_ids: Set[int] = set()
        self.anim_sign: int = 1
        self.anim_angle: float = 0.0
        self.anim_target: float = 90.0
        self.anim_step: float = self.config.anim_step

        self._anim_timer: QTimer = QTimer(self)
        self._anim_timer.setInterval(self.config.frame_interval_ms)
        self._anim_timer.timeout.connect(self._on_anim_tick)

        self.engine.subscribe(EngineEvent.MOVE_STARTED, self._on_move_started)

        self.setFocusPolicy(Qt.ClickFocus)

    # --------------------------
    # OpenGL lifecycle
    # --------------------------
    def initializeGL(self) -> None:
        """Inicializa parámetros OpenGL (clear color y depth test)."""
        glClearColor(0.10, 0.10, 0.12, 1.0)
        glEnable(GL_DEPTH_TEST)

    def resizeGL(self, w: int, h: int) -> None:
        """Ajusta viewport y proyección cuando cambia el tamaño del widget."""
        if h == 0:
            h = 1

        dpr = self.devicePixelRatioF()
        fb_w = int(w * dpr)
        fb_h = int(h * dpr)

        glViewport(0, 0, fb_w, fb_h)

        glMatrixMode(GL_PROJECTION)
        glLoadIdentity()
        gluPerspective(45.0, fb_w / float(fb_h), 0.1, 100.0)

        glMatrixMode(GL_MODELVIEW)
        glLoadIdentity()

    def paintGL(self) -> None:
        """Dibuja el frame actual: todos los cubies, la capa animada rotada."""
        glClear(GL_COLOR_BUFFER_BIT | GL_DEPTH_BUFFER_BIT)
        self._apply_camera()

        for cubie in self.engine.cubies:
            self._draw_cubie(cubie)

    def _apply_camera(self) -> None:
        glMatrixMode(GL_MODELVIEW)
        glLoadIdentity()
        glTranslatef(0.0, 0.0, -self.distance)
        glRotatef(self.pitch, 1.0, 0.0, 0.0)
        glRotatef(self.yaw, 0.0, 1.0, 0.0)

    # --------------------------
    # Interacción
    # --------------------------
    def mousePressEvent(self, event: QMouseEvent) -> None:
        if event.button() in (Qt.RightButton, Qt.LeftButton):
            self._orbiting = True
            self._last_mouse_pos = event.pos()
            event.accept()
            return
        super().mousePressEvent(event)

    def mouseMoveEvent(self, event: QMouseEvent) -> None:
        if self._orbiting:
            dx = event.position().x() - self._last_mouse_pos.x()
            dy = event.position().y() - self._last_mouse_pos.y()
            self._last_mouse_pos = event.pos()

            sens = 0.4
            self.yaw += dx * sens
            self.pitch += dy * sens
            self.pitch = max(-89.0, min(89.0, self.pitch))

            self.update()
            event.accept()
            return
        super().mouseMoveEvent(event)

    def mouseReleaseEvent(self, event: QMouseEvent) -> None:
        if self._orbiting and event.button() in (Qt.RightButton, Qt.LeftButton):
            self._orbiting = False
            event.accept()
            return
        super().mouseReleaseEvent(event)

    def wheelEvent(self, event: QWheelEvent) -> None:
        """Zoom in/out con la rueda del mouse."""
        delta = event.angleDelta().y() / 120.0
        self.distance -= delta * 0.3
        self.distance = max(4.0, min(25.0, self.distance))
        self.update()
        event.accept()

    # --------------------------
    # Animación
    # --------------------------
    def _on_move_started(self, event: Optional[MoveEvent]) -> None:
        """Arranca la animación del giro que el motor acaba de iniciar."""
        if event is None:
            return
        if not self.engine.animated:
            # El motor ya confirma el giro por su cuenta; solo repintamos.
            self.update()
            return

        self.anim_axis = event.axis
        self.anim_ids = set(event.cubie_ids)
        self.anim_sign = event.move.turns
        self.anim_angle = 0.0
        self.animating = True
        self._anim_timer.start()

    def _on_anim_tick(self) -> None:
        """Tick del timer: avanza la animación hasta completar el ángulo objetivo."""
        if not self.animating:
            self._anim_timer.stop()
            return

        self.anim_angle += self.anim_step
        if self.anim_angle >= self.anim_target:
            self._finish_move_animation()
            return

        self.update()

    def _finish_move_animation(self) -> None:
        """Termina la animación y confirma el giro en el motor.

        El estado de animación se limpia antes de `finish_move()`, porque el motor
        puede arrancar ahí mismo el siguiente paso de un scramble/solve.
        """
        self._clear_animation()
        self.engine.finish_move()
        self.update()

    def _clear_animation(self) -> None:
        self.animating = False
        self._anim_timer.stop()
        self.anim_axis = None
        self.anim_ids = set()
        self.anim_sign = 1
        self.anim_angle = 0.0

    def cancel_animation(self) -> None:
        """Cancela la animación actual sin confirmar el giro (usado al resetear)."""
        self._clear_animation()
        self.update()

    # --------------------------
    # Render helpers
    # --------------------------
    def _draw_cubie(self, cubie: Cubie) -> None:
        """Dibuja un cubie: posición lógica, rotación neta y, si toca, giro animado."""
        s = self.config.cubie_spacing

        glPushMatrix()

        if self.animating and self.anim_axis is not None and cubie.cubie_id in self.anim_ids:
            ax = AXIS_VECTOR[self.anim_axis]
            glRotatef(self.anim_sign * self.anim_angle, *ax)

        x, y, z = cubie.logical_position
        glTranslatef(x * s, y * s, z * s)

        axis, deg = to_axis_angle(cubie.net_rotation)
        if deg:
            glRotatef(deg, *axis)

        glBegin(GL_QUADS)
        for normal, rgb in FACE_COLORS.items():
            color = rgb if self._is_outer_face(cubie.solved_position, normal) else PLASTIC
            glColor3f(*color)
            for v in self._face_quad(normal, 0.48):
                glVertex3f(*v)
        glEnd()

        glPopMatrix()

    @staticmethod
    def _is_outer_face(solved: Vec3i, normal: Vec3i) -> bool:
        """Una cara lleva sticker si mira hacia fuera del cubo en el estado resuelto."""
        return any(n != 0 and p == n for p, n in zip(solved, normal))

    @staticmethod
    def _face_quad(normal: Vec3i, h: float) -> List[Vec3f]:
        """Los 4 vértices de la cara `normal` de un cubo de semilado `h` centrado en 0."""
        i = [abs(c) for c in normal].index(1)
        j, k = [a for a in range(3) if a != i]
        corners = [(-h, -h), (h, -h), (h, h), (-h, h)]

        quad: List[Vec3f] = []
        for a, b in corners:
            v = [0.0, 0.0, 0.0]
            v[i] = normal[i] * h
            v[j] = a
            v[k] = b
            quad.append((v[0], v[1], v[2]))
        return quad

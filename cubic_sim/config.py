# cubic_sim/config.py
from __future__ import annotations

from typing import Tuple


class EngineConfig:
    """Parámetros del motor de estado del cubo.

    Attributes:
        scramble_length: Movimientos por scramble cuando no se indica otro valor.
        scramble_delay: Pausa (s) entre un giro del scramble y el siguiente.
        solve_interval: Pausa (s) entre pasos de la reproducción inversa (solve).
        rotation_tolerance: Error absoluto admitido por componente del cuaternión
            al comprobar si el cubo está resuelto.
    """

    def __init__(
        self,
        scramble_length: int = 20,
        scramble_delay: float = 0.1,
        solve_interval: float = 0.5,
        rotation_tolerance: float = 1e-3,
    ) -> None:
        if scramble_length <= 0:
            raise ValueError("scramble_length debe ser mayor que 0.")
        if scramble_delay < 0 or solve_interval < 0:
            raise ValueError("Las pausas no pueden ser negativas.")
        if rotation_tolerance <= 0:
            raise ValueError("rotation_tolerance debe ser positiva.")

        self.scramble_length: int = scramble_length
        self.scramble_delay: float = scramble_delay
        self.solve_interval: float = solve_interval
        self.rotation_tolerance: float = rotation_tolerance

    def __repr__(self) -> str:
        return (
            f"EngineConfig(scramble_length={self.scramble_length}, "
            f"scramble_delay={self.scramble_delay}, "
            f"solve_interval={self.solve_interval}, "
            f"rotation_tolerance={self.rotation_tolerance})"
        )


class RenderConfig:
    """Parámetros de la vista OpenGL (cámara, espaciado y animación)."""

    def __init__(
        self,
        cubie_spacing: float = 1.1,
        animation_duration: float = 0.3,
        frame_interval_ms: int = 16,  # ~60fps
        camera: Tuple[float, float, float] = (-35.0, 25.0, 9.0),  # yaw, pitch, distance
    ) -> None:
        if animation_duration <= 0 or frame_interval_ms <= 0:
            raise ValueError("La animación necesita duración e intervalo positivos.")

        self.cubie_spacing: float = cubie_spacing
        self.animation_duration: float = animation_duration
        self.frame_interval_ms: int = frame_interval_ms
        self.camera: Tuple[float, float, float] = camera

    @property
    def anim_step(self) -> float:
        """Grados que avanza la capa animada en cada frame."""
        frames = max(1.0, self.animation_duration * 1000.0 / self.frame_interval_ms)
        return 90.0 / frames

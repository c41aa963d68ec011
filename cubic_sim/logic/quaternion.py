# cubic_sim/logic/quaternion.py
from __future__ import annotations

import math
from typing import Tuple

Vec3f = Tuple[float, float, float]
Quat = Tuple[float, float, float, float]  # (x, y, z, w)

IDENTITY: Quat = (0.0, 0.0, 0.0, 1.0)

# Las rotaciones del cubo solo producen componentes 0, ±1/2, ±1/√2 o ±1,
# así que cualquier valor por debajo de esto es ruido de punto flotante.
_EPS: float = 1e-9


def from_axis_angle(axis: Vec3f, angle: float) -> Quat:
    """Construye el cuaternión unitario de una rotación eje-ángulo.

    q = (axis * sin(angle/2), cos(angle/2))

    Args:
        axis: Vector unitario del eje de rotación.
        angle: Ángulo en radianes (regla de la mano derecha).

    Returns:
        Cuaternión (x, y, z, w).
    """
    half = angle / 2.0
    s = math.sin(half)
    return (axis[0] * s, axis[1] * s, axis[2] * s, math.cos(half))


def multiply(q1: Quat, q2: Quat) -> Quat:
    """Producto de Hamilton q1 * q2 (primero se aplica q2, después q1)."""
    x1, y1, z1, w1 = q1
    x2, y2, z2, w2 = q2
    return (
        w1 * x2 + x1 * w2 + y1 * z2 - z1 * y2,
        w1 * y2 - x1 * z2 + y1 * w2 + z1 * x2,
        w1 * z2 + x1 * y2 - y1 * x2 + z1 * w2,
        w1 * w2 - x1 * x2 - y1 * y2 - z1 * z2,
    )


def conjugate(q: Quat) -> Quat:
    x, y, z, w = q
    return (-x, -y, -z, w)


def normalize(q: Quat) -> Quat:
    """Escala el cuaternión a norma 1.

    Raises:
        ValueError: Si el cuaternión es (casi) nulo.
    """
    n = math.sqrt(sum(c * c for c in q))
    if n < _EPS:
        raise ValueError("No se puede normalizar un cuaternión nulo.")
    x, y, z, w = q
    return (x / n, y / n, z / n, w / n)


def canonical(q: Quat) -> Quat:
    """Devuelve el representante canónico de la rotación (q y -q son la misma).

    Se elige el hemisferio con w > 0. Si w es ~0, decide el signo de la primera
    componente vectorial no nula. Así una vuelta completa (q^4 de un giro de 90°)
    vuelve a la identidad (0, 0, 0, 1) y no a (0, 0, 0, -1).
    """
    x, y, z, w = q
    for c in (w, x, y, z):
        if abs(c) > _EPS:
            if c < 0:
                return (-x, -y, -z, -w)
            return q
    return q


def rotate_vector(q: Quat, v: Vec3f) -> Vec3f:
    """Rota un vector con un cuaternión unitario (q v q*)."""
    x, y, z, w = q
    vx, vy, vz = v

    # t = 2 * (u x v)
    tx = 2.0 * (y * vz - z * vy)
    ty = 2.0 * (z * vx - x * vz)
    tz = 2.0 * (x * vy - y * vx)

    # v' = v + w*t + u x t
    return (
        vx + w * tx + (y * tz - z * ty),
        vy + w * ty + (z * tx - x * tz),
        vz + w * tz + (x * ty - y * tx),
    )


def to_axis_angle(q: Quat) -> Tuple[Vec3f, float]:
    """Convierte un cuaternión unitario a (eje, ángulo en grados).

    Útil para `glRotatef`. Para la identidad devuelve eje X y ángulo 0.
    """
    x, y, z, w = q
    w = max(-1.0, min(1.0, w))
    angle = 2.0 * math.acos(w)
    s = math.sqrt(max(0.0, 1.0 - w * w))
    if s < 1e-6:
        return (1.0, 0.0, 0.0), 0.0
    return (x / s, y / s, z / s), math.degrees(angle)


def is_identity(q: Quat, tolerance: float = 1e-3) -> bool:
    """Indica si `q` es la identidad, componente a componente dentro de `tolerance`."""
    x, y, z, w = q
    return (
        abs(x) <= tolerance
        and abs(y) <= tolerance
        and abs(z) <= tolerance
        and abs(w - 1.0) <= tolerance
    )


def almost_equal(q1: Quat, q2: Quat, tolerance: float = 1e-3) -> bool:
    return all(abs(a - b) <= tolerance for a, b in zip(q1, q2))

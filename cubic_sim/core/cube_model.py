# cubic_sim/core/cube_model.py
from __future__ import annotations

from typing import Dict, Iterable, List, Sequence, Tuple, Union

from cubic_sim.logic.moves import AXIS_INDEX, Axis, Move, Vec3i, parse_move, parse_sequence
from cubic_sim.logic.quaternion import (
    IDENTITY,
    Quat,
    canonical,
    is_identity,
    multiply,
    normalize,
)

CubeHash = Tuple[Tuple[int, Vec3i, Tuple[float, ...]], ...]

LATTICE: Tuple[int, int, int] = (-1, 0, 1)


class Cubie:
    """Uno de los 27 cubos pequeños.

    Attributes:
        cubie_id: Índice estable 0..26 (la vista lo usa para mapear sus objetos).
        solved_position: Posición de referencia; no cambia nunca.
        logical_position: Posición actual en la rejilla {-1, 0, 1}^3.
        net_rotation: Orientación acumulada respecto al estado resuelto.
    """

    def __init__(self, cubie_id: int, position: Vec3i) -> None:
        self.cubie_id: int = cubie_id
        self.solved_position: Vec3i = position
        self.logical_position: Vec3i = position
        self.net_rotation: Quat = IDENTITY

    def is_home(self, tolerance: float = 1e-3) -> bool:
        """True si está en su posición de origen y sin rotación neta."""
        return self.logical_position == self.solved_position and is_identity(
            self.net_rotation, tolerance
        )

    def rotate(self, move: Move) -> None:
        """Aplica el giro a este cubie (posición exacta + rotación acumulada)."""
        self.logical_position = move.transform(self.logical_position)
        self.net_rotation = canonical(normalize(multiply(move.quaternion, self.net_rotation)))

    def __repr__(self) -> str:
        return (
            f"Cubie(id={self.cubie_id}, pos={self.logical_position}, "
            f"solved={self.solved_position}, rot={self.net_rotation})"
        )


class CubeModel:
    """Modelo lógico del cubo 3x3x3 como 27 cubies.

    Representación:
        - Un `Cubie` por cada punto de {-1, 0, 1}^3, creados una sola vez en orden
          x, y, z (el id es el índice en `cubies`).
        - La posición se actualiza con la transformación entera de cada giro
          (exacta); la orientación se acumula con producto de cuaterniones.

    Notación de movimientos:
        - Caras: U D L R F B, con sufijo "'" para el giro inverso.
    """

    def __init__(self) -> None:
        """Inicializa el cubo en estado resuelto."""
        self.cubies: List[Cubie] = []
        for x in LATTICE:
            for y in LATTICE:
                for z in LATTICE:
                    self.cubies.append(Cubie(len(self.cubies), (x, y, z)))

    # --------------------------
    # Public API
    # --------------------------
    def is_solved(self, tolerance: float = 1e-3) -> bool:
        """Indica si el cubo está resuelto.

        Cada cubie debe estar exactamente en su posición resuelta (comparación
        entera) y su rotación neta debe ser la identidad dentro de `tolerance`.

        Returns:
            True si el cubo está resuelto; False en caso contrario.
        """
        return all(c.is_home(tolerance) for c in self.cubies)

    def to_hashable(self, ndigits: int = 6) -> CubeHash:
        """Convierte el estado a una estructura inmutable y comparable.

        Args:
            ndigits: Decimales con que se redondean las rotaciones.

        Returns:
            Tupla de (id, posición, rotación redondeada) por cubie, en orden de id.
        """
        return tuple(
            (
                c.cubie_id,
                c.logical_position,
                tuple(round(v, ndigits) + 0.0 for v in c.net_rotation),
            )
            for c in self.cubies
        )

    def cubies_in_layer(self, axis: Axis, value: int) -> List[Cubie]:
        """Cubies cuya coordenada lógica en `axis` es igual a `value`."""
        i = AXIS_INDEX[axis]
        return [c for c in self.cubies if c.logical_position[i] == value]

    def layer_for(self, move: Move) -> List[Cubie]:
        axis, value = move.affected_layer
        return self.cubies_in_layer(axis, value)

    def cubie_at(self, position: Vec3i) -> Cubie:
        """Cubie que ocupa actualmente `position`.

        Raises:
            KeyError: Si la posición no pertenece a la rejilla.
        """
        for c in self.cubies:
            if c.logical_position == position:
                return c
        raise KeyError(position)

    def positions(self) -> Dict[int, Vec3i]:
        return {c.cubie_id: c.logical_position for c in self.cubies}

    def apply_move(self, move: Union[str, Move]) -> List[Cubie]:
        """Aplica un movimiento individual al cubo.

        Args:
            move: `Move` o token en notación (por ejemplo: "R", "U'").

        Returns:
            Los 9 cubies de la capa girada.

        Raises:
            ValueError: Si el token no es un movimiento soportado.
        """
        move = parse_move(move)
        layer = self.layer_for(move)
        for c in layer:
            c.rotate(move)
        return layer

    def apply_sequence(self, seq: Union[str, Sequence[Move]]) -> None:
        """Aplica una secuencia de movimientos (texto separado por espacios o lista).

        Args:
            seq: Por ejemplo "R U R' U'" o [Move.R, Move.U].
        """
        moves: Iterable[Move] = parse_sequence(seq) if isinstance(seq, str) else seq
        for m in moves:
            self.apply_move(m)

    def reset(self) -> None:
        """Reinicia el cubo a estado resuelto (los cubies y sus ids se conservan)."""
        for c in self.cubies:
            c.logical_position = c.solved_position
            c.net_rotation = IDENTITY

# cubic_sim/logic/moves.py
from __future__ import annotations

import math
from enum import Enum
from typing import Dict, Iterable, List, Literal, Sequence, Set, Tuple, Union

from cubic_sim.logic.quaternion import Quat, Vec3f, from_axis_angle

Axis = Literal["x", "y", "z"]
Vec3i = Tuple[int, int, int]

VALID_FACES: Set[str] = {"U", "D", "L", "R", "F", "B"}
VALID_SUFFIX: Set[str] = {"", "'"}

AXIS_INDEX: Dict[Axis, int] = {"x": 0, "y": 1, "z": 2}
AXIS_VECTOR: Dict[Axis, Vec3f] = {
    "x": (1.0, 0.0, 0.0),
    "y": (0.0, 1.0, 0.0),
    "z": (0.0, 0.0, 1.0),
}

# Cara -> (eje, capa, signo base). El signo es el del giro sin prima:
# +1 = +90° alrededor del eje positivo (regla de la mano derecha).
# Ojo: D, R y B giran en -90° y sus primas en +90°.
FACE_PARAMS: Dict[str, Tuple[Axis, int, int]] = {
    "U": ("y",  1, +1),
    "D": ("y", -1, -1),
    "L": ("x", -1, +1),
    "R": ("x",  1, -1),
    "F": ("z",  1, +1),
    "B": ("z", -1, -1),
}


def rotate_quarter(v: Vec3i, axis: Axis, turns: int) -> Vec3i:
    """Rota un vector entero 90°*turns alrededor de un eje (regla de la mano derecha).

    Args:
        v: Coordenada (x, y, z).
        axis: Eje de rotación ('x', 'y' o 'z').
        turns: Cuartos de vuelta; se normaliza a 0..3 (ej: -1 == 3).

    Returns:
        La coordenada rotada, sin errores de redondeo.
    """
    x, y, z = v
    turns %= 4
    if turns == 0:
        return (x, y, z)

    if axis == "x":
        if turns == 1:
            return (x, -z, y)
        if turns == 2:
            return (x, -y, -z)
        return (x, z, -y)

    if axis == "y":
        if turns == 1:
            return (z, y, -x)
        if turns == 2:
            return (-x, y, -z)
        return (-z, y, x)

    if turns == 1:
        return (-y, x, z)
    if turns == 2:
        return (-x, -y, z)
    return (y, -x, z)


class Move(Enum):
    """Los 12 giros de cara del cubo 3x3x3.

    El valor de cada miembro es su etiqueta en notación estándar ("U", "U'", ...).
    Todo lo demás (eje, ángulo, capa, transformación, cuaternión, inverso) se
    deriva de `FACE_PARAMS`, por lo que la posición discreta y la orientación
    continua siempre describen el mismo giro.
    """

    U = "U"
    U_PRIME = "U'"
    D = "D"
    D_PRIME = "D'"
    L = "L"
    L_PRIME = "L'"
    R = "R"
    R_PRIME = "R'"
    F = "F"
    F_PRIME = "F'"
    B = "B"
    B_PRIME = "B'"

    def __str__(self) -> str:
        return self.value

    @property
    def label(self) -> str:
        return self.value

    @property
    def face(self) -> str:
        return self.value[0]

    @property
    def is_prime(self) -> bool:
        return self.value.endswith("'")

    @property
    def axis(self) -> Axis:
        return FACE_PARAMS[self.face][0]

    @property
    def axis_vector(self) -> Vec3f:
        return AXIS_VECTOR[self.axis]

    @property
    def turns(self) -> int:
        """+1 para +90°, -1 para -90°."""
        sign = FACE_PARAMS[self.face][2]
        return -sign if self.is_prime else sign

    @property
    def angle(self) -> float:
        """Ángulo de giro en radianes (±π/2)."""
        return self.turns * math.pi / 2.0

    @property
    def angle_degrees(self) -> float:
        return self.turns * 90.0

    @property
    def affected_layer(self) -> Tuple[Axis, int]:
        """(eje, valor): selecciona los cubies cuya coordenada en `eje` vale `valor`."""
        axis, layer, _ = FACE_PARAMS[self.face]
        return axis, layer

    @property
    def quaternion(self) -> Quat:
        return from_axis_angle(self.axis_vector, self.angle)

    @property
    def inverse(self) -> "Move":
        """Mismo eje y capa, ángulo opuesto (U <-> U')."""
        if self.is_prime:
            return Move(self.face)
        return Move(self.face + "'")

    def transform(self, coord: Vec3i) -> Vec3i:
        """Nueva coordenada lógica de un cubie de la capa tras aplicar el giro.

        Ejemplo: U lleva (x, y, z) a (z, y, -x).
        """
        return rotate_quarter(coord, self.axis, self.turns)

    def affects(self, coord: Vec3i) -> bool:
        axis, layer = self.affected_layer
        return coord[AXIS_INDEX[axis]] == layer


ALL_MOVES: List[Move] = list(Move)


def normalize_token(tok: str) -> str:
    """Normaliza un token de movimiento a un formato estándar.

    Reglas principales:
    - Elimina espacios y convierte comilla tipográfica (’ o ‘) a comilla simple (').
    - Acepta una cara con sufijo opcional "'" (ej: "R", "R'").
    - Los giros dobles ("R2") no forman parte del conjunto de 12 movimientos.

    Args:
        tok: Token de movimiento (por ejemplo: "R", "U'", "F’").

    Returns:
        Token normalizado. Un token vacío devuelve "".

    Raises:
        ValueError: Si la cara no es válida o si el sufijo no es válido.
    """
    tok = tok.strip().replace("’", "'").replace("‘", "'").replace("′", "'")
    if not tok:
        return ""

    base = tok[0].upper()
    suf = tok[1:]

    if base not in VALID_FACES:
        raise ValueError(f"Movimiento inválido: {tok}")

    if suf not in VALID_SUFFIX:
        raise ValueError(f"Sufijo inválido en: {tok}")

    return base + suf


def parse_move(tok: Union[str, Move]) -> Move:
    """Convierte un token (o un `Move`) en un `Move`.

    Raises:
        ValueError: Si el token está vacío o no es válido.
    """
    if isinstance(tok, Move):
        return tok
    norm = normalize_token(tok)
    if not norm:
        raise ValueError("Movimiento vacío.")
    return Move(norm)


def parse_sequence(text: str) -> List[Move]:
    """Convierte una secuencia escrita como texto en una lista de movimientos.

    La entrada debe separar movimientos por espacios. Por ejemplo:
        "R U R' U'" -> [Move.R, Move.U, Move.R_PRIME, Move.U_PRIME]

    Raises:
        ValueError: Si algún token es inválido.
    """
    return [parse_move(t) for t in text.strip().split() if t.strip()]


def format_sequence(moves: Iterable[Move]) -> str:
    return " ".join(m.label for m in moves)


def inverse_sequence(moves: Sequence[Move]) -> List[Move]:
    """Secuencia que deshace `moves`: orden inverso y cada giro invertido.

    Ejemplo: R U R' U' -> U R U' R'
    """
    return [m.inverse for m in reversed(moves)]

# cubic_sim/logic/scramble.py
from __future__ import annotations

import random
from typing import List, Optional

from cubic_sim.logic.moves import ALL_MOVES, Move


def generate_scramble(
    n: int,
    seed: Optional[int] = None,
    rng: Optional[random.Random] = None,
) -> List[Move]:
    """Genera una mezcla (scramble) aleatoria para el cubo.

    Cada movimiento se elige de forma uniforme e independiente entre los 12 giros,
    con reemplazo: se permiten repeticiones consecutivas y pares que se cancelan
    (por ejemplo "U U'"). El historial los registra igual que giros manuales.

    Args:
        n: Cantidad de movimientos a generar.
        seed: Semilla opcional para obtener resultados reproducibles. Se ignora
            si se pasa `rng`.
        rng: Generador a usar en lugar de crear uno nuevo.

    Returns:
        Lista de `Move` en el orden en que deben aplicarse.

    Raises:
        ValueError: Si `n` es menor o igual a 0.
    """
    if n <= 0:
        raise ValueError("n debe ser mayor que 0.")

    if rng is None:
        rng = random.Random(seed)

    return [rng.choice(ALL_MOVES) for _ in range(n)]

# cubic_sim/core/engine.py
from __future__ import annotations

import logging
import random
from enum import Enum
from typing import Callable, Dict, List, Literal, Optional, Sequence, Tuple, Union

from cubic_sim.config import EngineConfig
from cubic_sim.core.cube_model import Cubie, CubeModel
from cubic_sim.logic.moves import Axis, Move, parse_move
from cubic_sim.logic.scramble import generate_scramble

logger = logging.getLogger(__name__)

DriverKind = Literal["scramble", "sequence", "solve"]
Scheduler = Callable[[float, Callable[[], None]], None]
Listener = Callable[[Optional["MoveEvent"]], None]


class EngineEvent(Enum):
    """Notificaciones que el motor emite hacia la vista."""

    MOVE_STARTED = "move_started"
    MOVE_FINISHED = "move_finished"
    SOLVED = "solved"


class MoveResult(Enum):
    """Resultado de una petición al motor.

    - APPLIED: el trabajo pedido ya terminó.
    - STARTED: quedó en curso (animación pendiente o pasos programados).
    - REJECTED_BUSY: se ignoró porque había un giro o una secuencia en curso.
    - HISTORY_EMPTY: no había nada que deshacer.
    """

    APPLIED = "applied"
    STARTED = "started"
    REJECTED_BUSY = "rejected_busy"
    HISTORY_EMPTY = "history_empty"


class MoveEvent:
    """Datos de un giro en curso: lo que la vista necesita para animarlo."""

    def __init__(self, move: Move, cubie_ids: Sequence[int], record: bool) -> None:
        self.move: Move = move
        self.cubie_ids: Tuple[int, ...] = tuple(cubie_ids)
        self.record: bool = record

    @property
    def axis(self) -> Axis:
        return self.move.axis

    @property
    def angle(self) -> float:
        return self.move.angle

    @property
    def angle_degrees(self) -> float:
        return self.move.angle_degrees

    def __repr__(self) -> str:
        return f"MoveEvent({self.move.label}, cubies={len(self.cubie_ids)}, record={self.record})"


class _Driver:
    """Continuación pendiente de un scramble, una secuencia o un solve."""

    def __init__(self, kind: DriverKind, delay: float, moves: Optional[List[Move]] = None) -> None:
        self.kind: DriverKind = kind
        self.delay: float = delay
        self.moves: List[Move] = list(moves or [])
        self.steps: int = 0


class CubeEngine:
    """Motor de estado del cubo: giros, historial, scramble y solve por reproducción inversa.

    Concurrencia:
        Como máximo un giro en vuelo. Cualquier petición mientras el motor está
        ocupado (giro animándose o scramble/solve en marcha) se descarta y devuelve
        `MoveResult.REJECTED_BUSY`; no se encola.

    Animación:
        Con `animated=True` el estado solo se actualiza cuando la vista llama a
        `finish_move()` al terminar su animación. Sin animación el giro se
        confirma dentro de la misma llamada.

    Secuencias:
        Scramble y solve avanzan paso a paso: cada paso espera a que el anterior
        se confirme. Entre pasos se usa `scheduler(delay, callback)` (por ejemplo
        `QTimer.singleShot`); sin scheduler los pasos se ejecutan en un bucle,
        sin pausa.
    """

    def __init__(
        self,
        model: Optional[CubeModel] = None,
        config: Optional[EngineConfig] = None,
        scheduler: Optional[Scheduler] = None,
        animated: bool = False,
        rng: Optional[random.Random] = None,
    ) -> None:
        self.model: CubeModel = model if model is not None else CubeModel()
        self.config: EngineConfig = config if config is not None else EngineConfig()
        self.animated: bool = animated

        self._scheduler: Optional[Scheduler] = scheduler
        self._rng: Optional[random.Random] = rng

        self._history: List[Move] = []
        self._pending: Optional[MoveEvent] = None
        self._driver: Optional[_Driver] = None
        self._step_ready: bool = False

        self._listeners: Dict[EngineEvent, List[Listener]] = {e: [] for e in EngineEvent}

    # --------------------------
    # Estado (solo lectura)
    # --------------------------
    @property
    def cubies(self) -> List[Cubie]:
        return self.model.cubies

    @property
    def history(self) -> Tuple[Move, ...]:
        return tuple(self._history)

    @property
    def busy(self) -> bool:
        """True si hay un giro en vuelo o un scramble/solve activo."""
        return self._pending is not None or self._driver is not None

    @property
    def animating(self) -> bool:
        return self._pending is not None

    @property
    def active_move(self) -> Optional[Move]:
        """Giro que se está ejecutando ahora (para resaltarlo en la UI)."""
        return self._pending.move if self._pending is not None else None

    @property
    def pending_event(self) -> Optional[MoveEvent]:
        return self._pending

    @property
    def driver_kind(self) -> Optional[DriverKind]:
        return self._driver.kind if self._driver is not None else None

    def is_solved(self) -> bool:
        return self.model.is_solved(self.config.rotation_tolerance)

    # --------------------------
    # Eventos
    # --------------------------
    def subscribe(self, event: EngineEvent, callback: Listener) -> Listener:
        """Registra `callback` para `event`. Devuelve el mismo callback."""
        self._listeners[event].append(callback)
        return callback

    def unsubscribe(self, event: EngineEvent, callback: Listener) -> None:
        try:
            self._listeners[event].remove(callback)
        except ValueError:
            pass

    def _emit(self, event: EngineEvent, payload: Optional[MoveEvent]) -> None:
        for cb in list(self._listeners[event]):
            cb(payload)

    # --------------------------
    # Giros
    # --------------------------
    def apply_move(self, move: Union[str, Move], record: bool = True) -> MoveResult:
        """Aplica un giro si el motor está libre.

        Args:
            move: `Move` o token ("R", "U'").
            record: Si es False el giro no se agrega al historial (pasos de undo).

        Returns:
            APPLIED, STARTED (animación pendiente) o REJECTED_BUSY.

        Raises:
            ValueError: Si el token no es un movimiento válido.
        """
        move = parse_move(move)
        if self.busy:
            logger.debug("Giro %s ignorado: motor ocupado", move.label)
            return MoveResult.REJECTED_BUSY
        return self._start_move(move, record)

    def finish_move(self) -> bool:
        """Confirma el giro animado en curso. Lo llama la vista al terminar la animación.

        Returns:
            False si no había ningún giro pendiente.
        """
        if self._pending is None:
            return False
        self._commit()
        self._run_ready_steps()
        return True

    def _start_move(self, move: Move, record: bool, undone: Optional[Move] = None) -> MoveResult:
        layer = self.model.layer_for(move)
        self._pending = MoveEvent(move, [c.cubie_id for c in layer], record)
        try:
            self._emit(EngineEvent.MOVE_STARTED, self._pending)
        except Exception:
            self._pending = None
            # El paso no llegó a aplicarse: la entrada vuelve al historial.
            if undone is not None:
                self._history.append(undone)
            raise

        if self.animated:
            return MoveResult.STARTED
        self._commit()
        return MoveResult.APPLIED

    def _commit(self) -> None:
        event = self._pending
        if event is None:
            return

        self.model.apply_move(event.move)
        if event.record:
            self._history.append(event.move)
        self._pending = None
        logger.debug("Giro %s aplicado (historial: %d)", event.move.label, len(self._history))

        # Si era el último paso, la secuencia se cierra antes de avisar a la vista,
        # así MOVE_FINISHED ya ve el motor libre.
        finished = self._driver
        if finished is not None and self._exhausted(finished):
            self._stop_driver(finished)
        else:
            finished = None

        self._emit(EngineEvent.MOVE_FINISHED, event)

        if finished is not None:
            self._after_driver(finished)
        else:
            self._step_done()

    # --------------------------
    # Scramble / secuencias / solve
    # --------------------------
    def scramble(self, move_count: Optional[int] = None, seed: Optional[int] = None) -> MoveResult:
        """Mezcla el cubo con `move_count` giros aleatorios, registrados en el historial.

        Args:
            move_count: Cantidad de giros (por defecto `config.scramble_length`).
            seed: Semilla opcional para un scramble reproducible.

        Returns:
            APPLIED si terminó en esta llamada, STARTED si quedó en curso,
            REJECTED_BUSY si el motor estaba ocupado.

        Raises:
            ValueError: Si `move_count` es menor o igual a 0.
        """
        if self.busy:
            logger.debug("Scramble ignorado: motor ocupado")
            return MoveResult.REJECTED_BUSY

        n = self.config.scramble_length if move_count is None else move_count
        rng = self._rng if seed is None else None
        moves = generate_scramble(n, seed=seed, rng=rng)
        logger.info("Scramble de %d giros", n)
        return self._launch(_Driver("scramble", self.config.scramble_delay, moves))

    def play_sequence(self, moves: Sequence[Union[str, Move]]) -> MoveResult:
        """Aplica una secuencia de giros uno a uno, registrándolos en el historial.

        Raises:
            ValueError: Si algún token no es válido (no se aplica ninguno).
        """
        parsed = [parse_move(m) for m in moves]
        if self.busy:
            logger.debug("Secuencia ignorada: motor ocupado")
            return MoveResult.REJECTED_BUSY
        if not parsed:
            return MoveResult.APPLIED
        return self._launch(_Driver("sequence", self.config.scramble_delay, parsed))

    def solve(self) -> MoveResult:
        """Deshace todo el historial en orden inverso (LIFO), sin volver a registrarlo.

        Con el historial vacío no hace nada salvo volver a comprobar si el cubo
        está resuelto (y emitir SOLVED en ese caso).
        """
        if self.busy:
            logger.debug("Solve ignorado: motor ocupado")
            return MoveResult.REJECTED_BUSY

        if not self._history:
            if self.is_solved():
                self._emit(EngineEvent.SOLVED, None)
            return MoveResult.HISTORY_EMPTY

        logger.info("Solve: deshaciendo %d giros", len(self._history))
        return self._launch(_Driver("solve", self.config.solve_interval))

    def undo(self) -> MoveResult:
        """Deshace solo el último giro registrado."""
        if self.busy:
            return MoveResult.REJECTED_BUSY
        if not self._history:
            return MoveResult.HISTORY_EMPTY
        last = self._history.pop()
        return self._start_move(last.inverse, record=False, undone=last)

    def cancel(self) -> bool:
        """Detiene el scramble/solve en curso antes del siguiente paso.

        El giro que ya está en vuelo termina normalmente y los pasos aplicados no
        se revierten.

        Returns:
            True si había una secuencia activa.
        """
        driver = self._driver
        if driver is None:
            return False
        self._driver = None
        self._step_ready = False
        logger.info("%s cancelado tras %d pasos", driver.kind, driver.steps)
        return True

    def reset(self) -> None:
        """Vuelve al estado resuelto, vacía el historial y descarta lo pendiente."""
        self.cancel()
        self._pending = None
        self._history.clear()
        self.model.reset()

    def _launch(self, driver: _Driver) -> MoveResult:
        self._driver = driver
        try:
            self._step(driver)
            self._run_ready_steps()
        except Exception:
            self.cancel()
            raise
        return MoveResult.STARTED if self.busy else MoveResult.APPLIED

    def _exhausted(self, driver: _Driver) -> bool:
        if driver.kind == "solve":
            return not self._history
        return not driver.moves

    def _step(self, driver: _Driver) -> None:
        # Un callback programado para una secuencia cancelada o reemplazada no hace nada.
        if driver is not self._driver or self._pending is not None:
            return
        if self._exhausted(driver):
            self._stop_driver(driver)
            self._after_driver(driver)
            return

        driver.steps += 1
        if driver.kind == "solve":
            last = self._history.pop()
            self._start_move(last.inverse, record=False, undone=last)
        else:
            self._start_move(driver.moves.pop(0), record=True)

    def _step_done(self) -> None:
        driver = self._driver
        if driver is None:
            return

        if self._scheduler is None:
            self._step_ready = True
        else:
            self._scheduler(driver.delay, lambda: self._step(driver))

    def _run_ready_steps(self) -> None:
        while self._step_ready and self._pending is None:
            self._step_ready = False
            if self._driver is not None:
                self._step(self._driver)

    def _stop_driver(self, driver: _Driver) -> None:
        self._driver = None
        self._step_ready = False
        logger.info("%s terminado en %d pasos", driver.kind, driver.steps)

    def _after_driver(self, driver: _Driver) -> None:
        if driver.kind == "solve" and self.is_solved():
            logger.info("Cubo resuelto")
            self._emit(EngineEvent.SOLVED, None)

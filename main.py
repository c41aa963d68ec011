# main.py
from __future__ import annotations

import logging
import os
import sys
from typing import NoReturn

from PySide6.QtWidgets import QApplication

from cubic_sim.app.main_window import MainWindow


def main() -> NoReturn:
    """Punto de entrada de la aplicación.

    Configura logging (nivel en la variable de entorno `CUBIC_LOG_LEVEL`, por
    defecto INFO), crea la `QApplication`, construye la ventana principal
    (`MainWindow`) y ejecuta el loop de eventos de Qt.

    Returns:
        No retorna (finaliza el proceso con `sys.exit`).
    """
    logging.basicConfig(
        level=os.environ.get("CUBIC_LOG_LEVEL", "INFO").upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    app = QApplication(sys.argv)
    w = MainWindow()
    w.show()
    sys.exit(app.exec())


if __name__ == "__main__":
    main()

"""Точка входа в приложение."""
import logging

from pngmask.app import MaskStudioApp
from pngmask.settings import settings


def main() -> None:
    """Настраивает логирование, создаёт и запускает главное окно."""
    logging.basicConfig(
        level=settings.LOG_LEVEL,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    app = MaskStudioApp()
    app.mainloop()


if __name__ == "__main__":
    main()

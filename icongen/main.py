"""Точка входа в приложение."""
from icongen.app import IconGenApp
from icongen.config import Config
from icongen.utils.logger import configure_logging


def main() -> None:
    """Настраивает логирование, создаёт и запускает главное окно приложения."""
    configure_logging(Config.LOG_LEVEL)
    app = IconGenApp()
    app.mainloop()


if __name__ == "__main__":
    main()

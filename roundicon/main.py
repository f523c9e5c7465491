"""Точка входа в приложение предпросмотра."""
from roundicon.app import IconStudioApp
from roundicon.logging import configure_logging


def main() -> None:
    """Создаёт и запускает главное окно приложения."""
    configure_logging()
    app = IconStudioApp()
    app.mainloop()


if __name__ == "__main__":
    main()
